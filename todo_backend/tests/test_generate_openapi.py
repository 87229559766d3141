import json

from todo_api.generate_openapi import generate_openapi


def test_generate_openapi_writes_schema(tmp_path):
    out = tmp_path / "interfaces" / "openapi.json"
    written = generate_openapi(str(out))
    assert written == str(out)

    schema = json.loads(out.read_text(encoding="utf-8"))
    assert schema["info"]["title"] == "Todo API"
    paths = schema["paths"]
    for path in [
        "/api/todo/",
        "/api/todo/{todo_id}",
        "/api/todo/mark_done/{todo_id}",
        "/api/todo/{todo_id}/percentage={percentage}",
        "/api/todo/incoming/{days}",
    ]:
        assert path in paths
    assert {"health", "todos"} <= {t["name"] for t in schema["tags"]}
