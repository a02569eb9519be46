"""
Test health and banner endpoints for the palette service.
"""
from colorio import __version__


def test_health_check(test_client):
    """Health check reports ok with the service version."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data == {"ok": True, "version": __version__, "service": "colorio-palette"}


def test_root_lists_color_endpoints(test_client):
    response = test_client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "/colors/extract" in data["endpoints"]
    assert "/colors/similar-palettes" in data["endpoints"]
    assert data["endpoints"] == sorted(data["endpoints"])


def test_unknown_route_uses_error_shape(test_client):
    response = test_client.get("/nope")

    assert response.status_code == 404
    assert response.json()["code"] == "http_error"
    assert response.headers["X-Request-ID"]
