import uuid


def _template(image_type_id, **extra):
    return {
        "title": "Modern Kitchen",
        "thumbnailUrl": "https://cdn.example.com/kitchen.png",
        "sampleImageUrls": ["https://cdn.example.com/k1.jpg"],
        "defaultImageTypeId": image_type_id,
        **extra,
    }


def test_create_and_list(client):
    type_id = str(uuid.uuid4())

    response = client.post("/project-templates", json=_template(type_id, originalThumbnailUrl=""))

    assert response.status_code == 201
    body = response.json()
    assert body["originalThumbnailUrl"] is None
    assert body["sampleImageUrls"] == ["https://cdn.example.com/k1.jpg"]
    assert [t["id"] for t in client.get("/project-templates").json()] == [body["id"]]


def test_create_rejects_malformed_urls(client):
    response = client.post("/project-templates", json=_template(str(uuid.uuid4()), thumbnailUrl="kitchen.png"))
    assert response.status_code == 422


def test_delete(client):
    template = client.post("/project-templates", json=_template(str(uuid.uuid4()))).json()

    assert client.delete(f"/project-templates/{template['id']}").status_code == 204
    assert client.delete(f"/project-templates/{template['id']}").status_code == 404


def test_upload_asset(client, storage_client):
    response = client.post(
        "/project-templates/upload",
        files={"file": ("before.png", b"png-bytes", "image/png")},
    )

    assert response.status_code == 201
    url = response.json()["url"]
    assert url.startswith("https://storage.googleapis.com/test-bucket/templates/")
    assert url.endswith("-before.png")


def test_upload_rejects_non_images(client):
    response = client.post("/project-templates/upload", files={"file": ("notes.txt", b"hi", "text/plain")})
    assert response.status_code == 400


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "version": "1.0.0"}
