"""Tests for the health endpoint and CORS configuration."""


async def test_health(async_client):
    resp = await async_client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert "timestamp" in data


async def test_cors_allows_streamlit_origin(async_client):
    resp = await async_client.options(
        "/api/v1/completions",
        headers={
            "Origin": "http://localhost:8501",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:8501"
