import json

import pytest

from planvision.client.colors import Color, ColorService


@pytest.mark.parametrize(
    "text, expected",
    [
        ("FFFFFF", Color(255, 255, 255, 255)),
        ("#F00", Color(255, 0, 0, 255)),
        ("bcb88a", Color(188, 184, 138, 255)),
        ("  #80FF0000 ", Color(255, 0, 0, 128)),
        ("sage", Color(188, 184, 138, 255)),
        ("Off-White", Color(248, 248, 248, 255)),
        ("TERRACOTTA", Color(226, 114, 91, 255)),
    ],
)
def test_from_hex(text, expected):
    assert Color.from_hex(text) == expected


@pytest.mark.parametrize("text", ["", "#12345", "not-a-colour", "#GGGGGG"])
def test_unparseable_falls_back_to_gray(text):
    assert Color.from_hex(text) == Color(200, 200, 200, 255)


def test_hex_property():
    assert Color.from_hex("navy").hex == "#000080"


def test_bundled_palettes_load():
    collections = ColorService().load_collections()

    assert collections
    palette = collections[0].palettes[0]
    assert palette.primary.color == Color.from_hex(palette.primary.hex)
    assert collections[0].id == collections[0].family_name


def test_missing_file_returns_empty(tmp_path):
    assert ColorService().load_collections(str(tmp_path / "missing.json")) == []


def test_invalid_file_returns_empty(tmp_path):
    path = tmp_path / "palettes.json"
    path.write_text(json.dumps({"collections": "nope"}))

    assert ColorService(str(path)).load_collections() == []
