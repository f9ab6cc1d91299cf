import logging

from fastapi.testclient import TestClient


def test_error_responses_include_request_id_in_body_and_header(client):
    r = client.get("/this-route-does-not-exist")
    assert r.status_code == 404

    payload = r.json()
    assert "request_id" in payload
    assert payload["request_id"], payload

    assert r.headers.get("x-request-id") == payload["request_id"]


def test_caller_request_id_is_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"

    r = client.get("/users/nope", headers={"X-Request-ID": "abc-456"})
    assert r.status_code == 404
    assert r.json()["request_id"] == "abc-456"


def test_unexpected_errors_return_generic_500(app, monkeypatch):
    with TestClient(app, raise_server_exceptions=False) as client:
        async def _boom(**kwargs):
            raise OSError("disk on fire at /secret/path")

        monkeypatch.setattr(app.state.context.users, "list", _boom)

        r = client.get("/users")
        assert r.status_code == 500
        assert r.json()["detail"] == "Internal Server Error"
        assert "secret" not in r.text


def test_corrupt_collection_file_is_a_500(app, settings):
    settings.users_path.parent.mkdir(parents=True)
    settings.users_path.write_text("{not json")

    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.get("/users")
        assert r.status_code == 500
        assert r.json()["detail"] == "Internal Server Error"


def test_unexpected_errors_still_get_an_access_line(app, monkeypatch, caplog):
    with TestClient(app, raise_server_exceptions=False) as client:
        async def _boom(**kwargs):
            raise OSError("disk on fire")

        monkeypatch.setattr(app.state.context.users, "list", _boom)

        with caplog.at_level(logging.INFO, logger="users_api.api"):
            r = client.get("/users", headers={"X-Request-ID": "req-500"})

    assert r.status_code == 500
    access = [rec.getMessage() for rec in caplog.records if rec.getMessage().startswith("access ")]
    assert any("request_id=req-500" in line and "status=500" in line for line in access), access
