import uuid


def _image_type(client, value):
    return client.post("/image-types", json={"label": value.title(), "value": value}).json()


def _style(client, name, image_type_ids=None, thumbnail="https://cdn.example.com/default.png"):
    body = {"name": name, "thumbnailUrl": thumbnail, "promptFragment": f"{name} interior"}
    if image_type_ids is not None:
        body["imageTypeIds"] = image_type_ids
    return client.post("/styles", json=body)


def test_create_embeds_linked_image_types(client):
    plan = _image_type(client, "floor_plan")

    response = _style(client, "Modern", [plan["id"]])

    assert response.status_code == 201
    body = response.json()
    assert body["imageTypeIds"] == [plan["id"]]
    assert [t["id"] for t in body["imageTypes"]] == [plan["id"]]
    assert body["promptFragment"] == "Modern interior"


def test_create_without_links_has_empty_lists(client):
    body = _style(client, "Rustic").json()
    assert body["imageTypeIds"] == []
    assert body["imageTypes"] == []


def test_create_with_unknown_image_type_returns_404(client):
    missing = str(uuid.uuid4())

    response = _style(client, "Modern", [missing])

    assert response.status_code == 404
    assert response.json()["detail"] == f"ImageType {missing} not found"


def test_list_is_alphabetical(client):
    for name in ("Scandinavian", "Industrial", "Minimal"):
        _style(client, name)

    names = [s["name"] for s in client.get("/styles").json()]
    assert names == ["Industrial", "Minimal", "Scandinavian"]


def test_filter_by_image_type_uses_contextual_thumbnail(client, repositories):
    plan = _image_type(client, "floor_plan")
    photo = _image_type(client, "room_photo")
    modern = _style(client, "Modern", [plan["id"], photo["id"]]).json()
    _style(client, "Boho", [photo["id"]])
    _style(client, "Universal")
    repositories.get("style_thumbnails").create({
        "style_id": modern["id"],
        "image_type_id": plan["id"],
        "thumbnail_url": "https://cdn.example.com/modern-plan.png",
    })

    response = client.get("/styles", params={"imageTypeId": plan["id"]})

    assert response.status_code == 200
    styles = response.json()
    assert [s["name"] for s in styles] == ["Modern"]
    assert styles[0]["thumbnailUrl"] == "https://cdn.example.com/modern-plan.png"

    photo_styles = client.get("/styles", params={"imageTypeId": photo["id"]}).json()
    assert [s["name"] for s in photo_styles] == ["Boho", "Modern"]
    assert photo_styles[1]["thumbnailUrl"] == "https://cdn.example.com/default.png"


def test_patch_replaces_links(client):
    plan = _image_type(client, "floor_plan")
    photo = _image_type(client, "room_photo")
    style = _style(client, "Modern", [plan["id"]]).json()

    response = client.patch(f"/styles/{style['id']}", json={"imageTypeIds": [photo["id"]]})

    assert response.status_code == 200
    assert response.json()["imageTypeIds"] == [photo["id"]]


def test_patch_with_null_links_clears_them(client):
    plan = _image_type(client, "floor_plan")
    style = _style(client, "Modern", [plan["id"]]).json()

    response = client.patch(f"/styles/{style['id']}", json={"imageTypeIds": None})

    assert response.status_code == 200
    assert response.json()["imageTypeIds"] == []


def test_get_and_delete_missing_style(client):
    missing = uuid.uuid4()
    assert client.get(f"/styles/{missing}").status_code == 404
    assert client.delete(f"/styles/{missing}").status_code == 404


def test_create_rejects_malformed_thumbnail(client):
    assert _style(client, "Modern", thumbnail="modern.png").status_code == 422


def test_patch_cannot_null_required_columns(client):
    style = _style(client, "Modern").json()

    for field in ("name", "thumbnailUrl", "promptFragment"):
        assert client.patch(f"/styles/{style['id']}", json={field: None}).status_code == 422
    assert client.get(f"/styles/{style['id']}").json()["name"] == "Modern"
