from fastapi.testclient import TestClient

from app.main import create_app
from app.services import codes
from app.services.store import TextStore


def test_hello(client):
    r = client.get("/api/hello")
    assert r.status_code == 200
    assert r.json() == {"message": "hello from textcopy api"}


def test_create_get_update_flow(client):
    r = client.post("/api/texts")
    assert r.status_code == 201, r.text
    code = r.json()["code"]
    assert len(code) == 6

    r = client.get(f"/api/texts/{code}")
    assert r.status_code == 200, r.text
    assert r.json() == {"code": code, "text": ""}

    r = client.put(f"/api/texts/{code}", json={"text": "aGVsbG8="})
    assert r.status_code == 200, r.text
    assert r.json() == {"code": code}

    r = client.get(f"/api/texts/{code}")
    assert r.json() == {"code": code, "text": "aGVsbG8="}


def test_get_unknown_code_404(client):
    r = client.get("/api/texts/zzzzzz")
    assert r.status_code == 404
    assert r.json() == {"error": "not found"}


def test_invalid_code_400(client):
    for code in ["ab!cd", "A" * 21]:
        r = client.get(f"/api/texts/{code}")
        assert r.status_code == 400, code
        assert r.json() == {"error": "invalid code"}

        r = client.put(f"/api/texts/{code}", json={"text": "aGVsbG8="})
        assert r.status_code == 400, code
        assert r.json() == {"error": "invalid code"}


def test_update_unknown_code_404(client):
    r = client.put("/api/texts/zzzzzz", json={"text": "aGVsbG8="})
    assert r.status_code == 404
    assert r.json() == {"error": "not found"}


def test_update_rejects_bad_text(client):
    code = client.post("/api/texts").json()["code"]
    client.put(f"/api/texts/{code}", json={"text": "aGVsbG8="})

    cases = [
        ({}, "text is required"),
        ({"text": ""}, "text is required"),
        ({"text": "hello world!"}, "text must be valid base64"),
        ({"text": "aGVsbG8"}, "text must be valid base64"),
    ]
    for body, message in cases:
        r = client.put(f"/api/texts/{code}", json=body)
        assert r.status_code == 400, body
        assert r.json() == {"error": message}

    assert client.get(f"/api/texts/{code}").json()["text"] == "aGVsbG8="


def test_update_malformed_json_400(client):
    code = client.post("/api/texts").json()["code"]
    r = client.put(
        f"/api/texts/{code}",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "invalid json"}


def test_expired_code_404(client, store, clock):
    code = client.post("/api/texts").json()["code"]
    clock.advance(store.ttl_seconds + 1)

    r = client.put(f"/api/texts/{code}", json={"text": "aGVsbG8="})
    assert r.status_code == 404
    assert code not in store
    assert client.get(f"/api/texts/{code}").status_code == 404


def test_update_null_text_is_required(client):
    code = client.post("/api/texts").json()["code"]
    r = client.put(f"/api/texts/{code}", json={"text": None})
    assert r.status_code == 400
    assert r.json() == {"error": "text is required"}


def test_update_non_object_body_400(client):
    code = client.post("/api/texts").json()["code"]
    for body in [["aGVsbG8="], {"text": 5}]:
        r = client.put(f"/api/texts/{code}", json=body)
        assert r.status_code == 400, body
        assert r.json() == {"error": "invalid json"}


def test_update_checks_code_before_body(client):
    bad_body = {"content": b"{bad", "headers": {"Content-Type": "application/json"}}

    r = client.put("/api/texts/zzzzzz", **bad_body)
    assert r.status_code == 404
    assert r.json() == {"error": "not found"}

    r = client.put("/api/texts/ab!cd", **bad_body)
    assert r.status_code == 400
    assert r.json() == {"error": "invalid code"}


def test_app_uses_given_store(client, store):
    assert client.app.state.store is store
    assert client.app.state.sweeper.store is store

    code = client.post("/api/texts").json()["code"]
    assert code in store


def test_expired_code_404_on_get(client, store, clock):
    code = client.post("/api/texts").json()["code"]
    clock.advance(store.ttl_seconds + 1)

    r = client.get(f"/api/texts/{code}")
    assert r.status_code == 404
    assert r.json() == {"error": "not found"}
    assert code not in store


def test_generator_failure_500(monkeypatch):
    def broken(seq):
        raise OSError("no entropy")

    monkeypatch.setattr(codes.secrets, "choice", broken)

    store = TextStore()
    with TestClient(create_app(store=store)) as c:
        assert c.app.state.store is store
        r = c.post("/api/texts")
    assert r.status_code == 500
    assert r.json() == {"error": "code generation failed"}
    assert len(store) == 0


def test_sweeper_runs_with_app(client, store):
    sweeper = client.app.state.sweeper
    assert sweeper.running
    assert sweeper.store is store
