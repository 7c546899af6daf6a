from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from app.middleware import CORSMiddleware, RequestContextMiddleware


def _create_client() -> TestClient:
    app = FastAPI()
    app.add_middleware(CORSMiddleware, allowed_origins=["http://localhost:3000"])
    app.add_middleware(RequestContextMiddleware)

    @app.get("/echo")
    async def echo(request: Request):
        return {"request_id": request.state.request_id, "ip": request.state.ip_address}

    return TestClient(app)


def test_request_id_is_generated_and_returned():
    response = _create_client().get("/echo")

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == response.json()["request_id"]


def test_incoming_request_id_is_kept():
    response = _create_client().get("/echo", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"
    assert response.json()["request_id"] == "req-42"


def test_allowed_origin_gets_cors_headers():
    response = _create_client().get("/echo", headers={"Origin": "http://localhost:3000"})

    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    assert response.headers["Access-Control-Allow-Credentials"] == "true"


def test_disallowed_origin_gets_no_cors_headers():
    response = _create_client().get("/echo", headers={"Origin": "https://evil.example"})

    assert response.status_code == 200
    assert "Access-Control-Allow-Origin" not in response.headers


def test_preflight():
    client = _create_client()
    headers = {"Access-Control-Request-Method": "GET"}

    allowed = client.options("/echo", headers={**headers, "Origin": "http://localhost:3000"})
    rejected = client.options("/echo", headers={**headers, "Origin": "https://evil.example"})

    assert allowed.status_code == 204
    assert "GET" in allowed.headers["Access-Control-Allow-Methods"]
    assert rejected.status_code == 403
