from __future__ import annotations

import json

import httpx

from careerhub.core import config
from careerhub.core.utils import benchmark, log_event, preview


def test_health(client) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "OK"}


def test_root_serves_entry_page(client) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "CareerHub" in r.text
    assert r.headers["cache-control"] == "no-store"


def test_named_page_and_unknown_page(client) -> None:
    assert client.get("/index").status_code == 200
    r = client.get("/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


def test_cors_allows_any_origin(client) -> None:
    r = client.options(
        "/interview/start",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_unhandled_gateway_failure_is_500(client, fake_model) -> None:
    fake_model.queue(httpx.ConnectError("down"))
    r = client.post("/interview/start", json={"jobRole": "Engineer", "resumeText": "cv"})
    assert r.status_code == 500
    assert r.json() == {"error": "internal_error"}
    assert len(client.app.state.sessions) == 0


def test_log_event_appends_jsonl(tmp_path, monkeypatch) -> None:
    log_path = tmp_path / "events.jsonl"
    monkeypatch.setattr(config, "LOG_PATH", log_path)

    log_event("unit_test", {"n": 1, "obj": object()})
    log_event("unit_test_2")

    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [r["event"] for r in records] == ["unit_test", "unit_test_2"]
    assert records[0]["meta"]["n"] == 1
    assert isinstance(records[0]["meta"]["obj"], str)
    assert records[1]["meta"] == {}
    assert records[0]["timestamp"].endswith("Z")
    assert records[0]["app"] == "CareerHub"


def test_preview_truncates() -> None:
    assert preview("abc", 5) == "abc"
    assert preview("abcdef", 3) == "abc…"
    assert preview(None) == ""


def test_benchmark_logs_duration(tmp_path, monkeypatch) -> None:
    log_path = tmp_path / "events.jsonl"
    monkeypatch.setattr(config, "LOG_PATH", log_path)

    with benchmark("unit_block"):
        pass

    record = json.loads(log_path.read_text(encoding="utf-8").strip())
    assert record["event"] == "benchmark"
    assert record["meta"]["name"] == "unit_block"
    assert record["meta"]["duration_ms"] >= 0


def test_wrongly_typed_body_maps_to_route_error(client, fake_model) -> None:
    cases = [
        ("/interview/start", {"jobRole": 5, "resumeText": "cv"}, 400, "Missing jobRole or resumeText"),
        ("/interview/answer", {"sessionId": 42, "answer": "x"}, 400, "Invalid session or answer"),
        ("/interview/clarify", {"sessionId": ["x"]}, 400, "Invalid session"),
        ("/interview/finish", {"sessionId": {"id": 1}}, 400, "Invalid session"),
        ("/suggest", {"role": ["Chef"]}, 400, "Role required"),
        ("/career-ai", {"type": "skills-to-career", "skills": "SQL"}, 500, "Invalid AI JSON"),
    ]
    for path, body, status, message in cases:
        r = client.post(path, json=body)
        assert r.status_code == status, path
        assert r.json() == {"error": message}, path
    assert fake_model.calls == []


def test_non_json_body_is_a_route_error(client, fake_model) -> None:
    r = client.post("/interview/start", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing jobRole or resumeText"}
