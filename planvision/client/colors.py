"""
Hex colour parsing and the bundled palette collections.
"""
import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

DEFAULT_PALETTES_PATH = os.path.join(os.path.dirname(__file__), "data", "palettes.json")

# Design names used by style prompts and palettes in place of hex codes
COLOR_NAMES = {
    "WHITE": "FFFFFF",
    "OFF-WHITE": "F8F8F8",
    "CREAM": "FFFDD0",
    "BEIGE": "F5F5DC",
    "SAND": "C2B280",
    "TAUPE": "483C32",
    "BROWN": "A52A2A",
    "EARTH": "A0522D",
    "BLUE": "0000FF",
    "NAVY": "000080",
    "SKY": "87CEEB",
    "TEAL": "008080",
    "GREEN": "008000",
    "SAGE": "BCB88A",
    "FOREST": "228B22",
    "OLIVE": "808000",
    "YELLOW": "FFFF00",
    "GOLD": "FFD700",
    "ORANGE": "FFA500",
    "TERRACOTTA": "E2725B",
    "RED": "FF0000",
    "BURGUNDY": "800020",
    "PINK": "FFC0CB",
    "BLUSH": "DE5D83",
    "PURPLE": "800080",
    "LAVENDER": "E6E6FA",
    "GRAY": "808080",
    "GREY": "808080",
    "CHARCOAL": "36454F",
    "BLACK": "000000",
    "DARK": "1A1A1A",
    "LIGHT": "F0F0F0",
    "NEUTRAL": "E5E4E2",
}

_HEX_DIGITS = re.compile(r"^[0-9A-F]+$")


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int
    alpha: int = 255

    @classmethod
    def fallback(cls) -> "Color":
        """Visible placeholder gray for unparseable input."""
        return cls(200, 200, 200, 255)

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """
        Parse ``#RGB``, ``#RRGGBB``, ``#AARRGGBB`` or a design colour name.

        Matching is case-insensitive and ignores surrounding whitespace and
        ``#``. Anything else yields ``Color.fallback()``.
        """
        cleaned = text.strip().replace("#", "").upper()
        named = COLOR_NAMES.get(cleaned)
        if named:
            cleaned = named

        if not _HEX_DIGITS.match(cleaned):
            return cls.fallback()

        value = int(cleaned, 16)
        if len(cleaned) == 3:
            return cls(
                (value >> 8) * 17,
                (value >> 4 & 0xF) * 17,
                (value & 0xF) * 17,
            )
        if len(cleaned) == 6:
            return cls(value >> 16, value >> 8 & 0xFF, value & 0xFF)
        if len(cleaned) == 8:
            return cls(value >> 16 & 0xFF, value >> 8 & 0xFF, value & 0xFF, value >> 24)
        return cls.fallback()

    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


# --- Palette export ---

class PaletteModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ColorDefinition(PaletteModel):
    hex: str
    name: str

    @property
    def color(self) -> Color:
        return Color.from_hex(self.hex)


class Palette(PaletteModel):
    id: str
    name: str
    category: str
    mood: str
    type: str  # "Interior" or "Exterior"
    description: str
    primary: ColorDefinition
    secondary: ColorDefinition
    neutral: ColorDefinition


class ColorCollection(PaletteModel):
    family_name: str
    family_value: str
    family_hex: str
    category: str
    palettes: List[Palette]

    @property
    def id(self) -> str:
        return self.family_name


class ColorExportRoot(PaletteModel):
    generated_at: str
    collections: List[ColorCollection]


class ColorService:
    """Loads palette collections from the exported JSON file."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or DEFAULT_PALETTES_PATH

    def load_collections(self, path: Optional[str] = None) -> List[ColorCollection]:
        path = path or self.path
        try:
            with open(path, "rb") as f:
                root = ColorExportRoot.model_validate_json(f.read())
        except FileNotFoundError:
            logger.warning(f"Palette file not found: {path}")
            return []
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to parse palette file {path}: {e}")
            return []
        return root.collections
