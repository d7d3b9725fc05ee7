from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import split_slug
from doc_browser.control import ControlConfig


def _client(docs_root):
    return TestClient(create_app(ControlConfig(docs_root=docs_root, log_level="WARNING")))


def test_list_and_get_items(docs_dir):
    with _client(docs_dir) as client:
        response = client.get("/items")
        assert response.status_code == 200
        assert [item["slug"] for item in response.json()] == [["a"], ["b"], ["guide", "intro"], ["plain"]]

        response = client.get("/items/a")
        assert response.status_code == 200
        body = response.json()
        assert body["slug"] == ["a"]
        assert "buffer" not in body["content"]
        assert body["content"]["content_type"] == "text/markdown"
        assert body["content"]["content"]["table_content"][0] == {"id": "18-31-hola-12-a-b", "title": "Hola 12 a b"}
        assert body["content"]["content"]["body"]["type"] == "Document"

        response = client.get("/items/guide/intro")
        assert response.status_code == 200
        assert response.json()["ref"]["slug"] == ["guide", "intro"]

        health = client.get("/healthz")
        assert health.json() == {"status": "ok", "control": "ready"}


def test_item_errors_map_to_status_codes(docs_dir):
    with _client(docs_dir) as client:
        assert client.get("/items/missing").status_code == 404
        assert client.get("/items/plain").status_code == 415
        assert client.get("/items/b").status_code == 422


def test_initialization_failure_is_unavailable(tmp_path):
    with _client(tmp_path / "missing") as client:
        response = client.get("/items")
        assert response.status_code == 503
        assert "initialization failed" in response.json()["detail"]
        assert client.get("/items/a").status_code == 503
        assert client.get("/healthz").json()["control"] == "error"


def test_split_slug_ignores_empty_segments():
    assert split_slug("guide//intro/") == ["guide", "intro"]
    assert split_slug("") == []
