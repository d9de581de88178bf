import logging
import os
import sys
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

# Ensure the rydercup package is importable
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

os.environ.setdefault("ALLOW_CREDENTIALS", "false")
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
from rydercup.exceptions import InvalidHoleResult, http_problem
from rydercup.main import (
    domain_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)


def test_unhandled_exception_logs_traceback(caplog):
    app = FastAPI()
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/boom")
    def boom():
        raise ValueError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR):
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json()["code"] == "internal_server_error"
    record = next((r for r in caplog.records if r.message == "Unhandled exception"), None)
    assert record is not None
    assert record.exc_info[0] is ValueError
    assert "ValueError: boom" in caplog.text


def test_domain_exception_renders_problem_detail():
    app = FastAPI()
    app.add_exception_handler(InvalidHoleResult, domain_exception_handler)

    @app.get("/hole")
    def hole():
        raise InvalidHoleResult("hole 19 is outside a 18-hole round")

    response = TestClient(app).get("/hole")
    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json() == {
        "type": "about:blank",
        "title": "Invalid hole result",
        "detail": "hole 19 is outside a 18-hole round",
        "status": 400,
        "instance": None,
        "code": "invalid_hole_result",
    }


def test_http_problem_code_reaches_problem_detail():
    app = FastAPI()
    app.add_exception_handler(HTTPException, http_exception_handler)

    @app.get("/dup")
    def dup():
        raise http_problem(
            status_code=409, detail="hole 3 already scored", code="hole_already_scored"
        )

    @app.get("/plain")
    def plain():
        raise HTTPException(status_code=404, detail="no such match")

    client = TestClient(app)
    response = client.get("/dup")
    assert response.status_code == 409
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "hole_already_scored"
    assert response.json()["detail"] == "hole 3 already scored"

    assert client.get("/plain").json()["code"] == "http_404"
