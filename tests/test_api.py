import pytest
from fastapi.testclient import TestClient

from conftest import bounded_config, make_image, open_image
from imageproc.api import routes
from imageproc.conversion.models import Conversion, default_config
from imageproc.main import app


@pytest.fixture
def client(installed_processor):
    installed_processor(default_config())
    return TestClient(app)


def _upload(data: bytes, name: str = "photo.jpg"):
    return {"file": (name, data, "application/octet-stream")}


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_formats(client):
    body = client.get("/api/formats").json()
    assert sorted(body["output"]) == ["gif", "jpeg", "jpg", "png", "webp"]


def test_config_reflects_processor(client, installed_processor):
    installed_processor(bounded_config(640, 480))
    body = client.get("/api/config").json()
    assert body["resize"] == {"enabled": True, "max_width": 640, "max_height": 480}
    assert body["conversion"]["format"] == "webp"


def test_optimize_returns_configured_format(client):
    resp = client.post("/api/optimize", files=_upload(make_image(fmt="JPEG")))
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/webp"


def test_optimize_to_png(client, installed_processor):
    installed_processor(bounded_config(conversion=Conversion(enabled=True, format="png")))
    resp = client.post("/api/optimize", files=_upload(make_image(size=(2000, 1000), fmt="JPEG")))
    assert resp.status_code == 200
    assert resp.content.startswith(b"\x89PNG")
    assert open_image(resp.content).size == (1000, 500)


def test_resize_keeps_input_format(client, installed_processor):
    installed_processor(bounded_config(100, 100, enabled=False))
    resp = client.post("/api/resize", files=_upload(make_image(size=(400, 200), fmt="GIF"), "a.gif"))
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/gif"
    assert open_image(resp.content).size == (100, 50)


def test_convert(client):
    resp = client.post("/api/convert", params={"format": "JPG"}, files=_upload(make_image()))
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/jpeg"


def test_convert_unsupported_format(client):
    resp = client.post("/api/convert", params={"format": "bogus"}, files=_upload(make_image()))
    assert resp.status_code == 400
    assert "bogus" in resp.json()["detail"]


def test_convert_requires_format(client):
    resp = client.post("/api/convert", files=_upload(make_image()))
    assert resp.status_code == 422


def test_undecodable_upload(client):
    resp = client.post("/api/optimize", files=_upload(b"definitely not an image"))
    assert resp.status_code == 400
    assert "decode" in resp.json()["detail"]


def test_encode_failure_is_server_error(client):
    wide = make_image(size=(20000, 1))
    resp = client.post("/api/convert", params={"format": "webp"}, files=_upload(wide))
    assert resp.status_code == 500


def test_empty_upload(client):
    resp = client.post("/api/optimize", files=_upload(b""))
    assert resp.status_code == 400


def test_upload_too_large(client, monkeypatch):
    monkeypatch.setattr(routes, "MAX_IMAGE_SIZE_BYTES", 16)
    resp = client.post("/api/optimize", files=_upload(make_image()))
    assert resp.status_code == 413
