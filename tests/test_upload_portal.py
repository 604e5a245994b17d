import json

import pytest
from fastapi.testclient import TestClient

from upload_portal import MetadataLog, PortalSettings, create_portal_app

ADMIN = ("admin", "s3cret")


@pytest.fixture
def portal(tmp_path):
    config = PortalSettings(
        PORTAL_UPLOAD_DIR=str(tmp_path / "images"),
        PORTAL_DATA_FILE=str(tmp_path / "data" / "uploads.jsonl"),
        PORTAL_MAX_IMAGE_BYTES=1024,
        ADMIN_USER=ADMIN[0],
        ADMIN_PASS=ADMIN[1],
    )
    return TestClient(create_portal_app(config)), config


def upload(client, name="Asha", image=("cat.png", b"\x89PNG data", "image/png"), **fields):
    data = {"name": name, "email": "asha@example.com", "description": "a cat"}
    data.update(fields)
    return client.post("/upload", data=data, files={"image": image} if image else None)


def test_form_page(portal):
    client, _ = portal
    response = client.get("/")
    assert response.status_code == 200
    assert 'action="/upload"' in response.text
    assert 'name="image"' in response.text


def test_upload_stores_file_and_metadata(portal, tmp_path):
    client, config = portal
    response = upload(client)
    assert response.status_code == 200
    assert "Upload successful" in response.text

    lines = (tmp_path / "data" / "uploads.jsonl").read_text().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["name"] == "Asha"
    assert record["originalName"] == "cat.png"
    assert record["mimetype"] == "image/png"
    assert record["size"] == len(b"\x89PNG data")
    assert record["filename"].endswith("-cat.png")

    stored = tmp_path / "images" / record["filename"]
    assert stored.read_bytes() == b"\x89PNG data"

    served = client.get(f"/uploads/{record['filename']}")
    assert served.status_code == 200


def test_upload_without_file(portal):
    client, _ = portal
    response = upload(client, image=None)
    assert response.status_code == 400
    assert response.text == "No file uploaded."


def test_upload_too_large(portal, tmp_path):
    client, _ = portal
    response = upload(client, image=("big.png", b"x" * 2048, "image/png"))
    assert response.status_code == 413
    assert not (tmp_path / "data" / "uploads.jsonl").exists()


def test_admin_requires_credentials(portal):
    client, _ = portal
    response = client.get("/admin")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == 'Basic realm="Admin Area"'

    response = client.get("/admin", auth=("admin", "wrong"))
    assert response.status_code == 401


def test_admin_lists_uploads_newest_first_and_escaped(portal):
    client, _ = portal
    upload(client, name="First")
    upload(client, name="<script>alert(1)</script>")

    response = client.get("/admin", auth=ADMIN)
    assert response.status_code == 200
    body = response.text
    assert "&lt;script&gt;" in body
    assert "<script>alert" not in body
    assert body.index("&lt;script&gt;") < body.index("First")


def test_admin_empty(portal):
    client, _ = portal
    response = client.get("/admin", auth=ADMIN)
    assert "No uploads yet." in response.text


@pytest.mark.asyncio
async def test_metadata_log_skips_malformed_lines(tmp_path):
    path = tmp_path / "log.jsonl"
    log = MetadataLog(path)
    await log.append({"id": 1})
    with open(path, "a", encoding="utf-8") as f:
        f.write("{not json\n")
    await log.append({"id": 2})

    assert [r["id"] for r in await log.read_all()] == [2, 1]
