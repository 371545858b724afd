import pytest
from httpx import AsyncClient

@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
async def test_home_rejects_non_get(client: AsyncClient, backend, method):
    response = await client.request(method, "/")

    assert response.status_code == 405
    assert response.headers["allow"] == "GET"
    assert f"only GET requests are supported (got {method})" in response.text
    assert backend.requests == []

@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
async def test_post_rejects_non_post(client: AsyncClient, backend, method):
    response = await client.request(method, "/post")

    assert response.status_code == 405
    assert response.headers["allow"] == "POST"
    assert "only POST requests are supported" in response.text
    assert backend.requests == []

@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/nope", "/messages", "/post/extra", "/static/app.css"])
async def test_unknown_path_not_found(client: AsyncClient, backend, path):
    response = await client.get(path)

    assert response.status_code == 404
    assert "page not found" in response.text
    assert backend.requests == []

@pytest.mark.asyncio
async def test_unknown_path_wrong_method(client: AsyncClient):
    """
    메서드 검사가 경로 검사보다 먼저 수행되는지 테스트
    """
    response = await client.post("/nope")

    assert response.status_code == 405

@pytest.mark.asyncio
async def test_healthz(client: AsyncClient, backend):
    response = await client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert backend.requests == []

@pytest.mark.asyncio
async def test_prometheus_metrics_endpoint(client: AsyncClient):
    """
    /metrics 엔드포인트가 200 OK를 반환하는지 테스트
    """
    await client.get("/healthz")
    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "python_info" in response.text

@pytest.mark.asyncio
@pytest.mark.parametrize("path, allowed, expected", [
    ("/", "GET", "only GET requests are supported (got TRACE)"),
    ("/post", "POST", "only POST requests are supported"),
    ("/nope", "GET", "only GET requests are supported (got TRACE)"),
])
async def test_unlisted_method_rejected_as_plain_text(client: AsyncClient, backend, path, allowed, expected):
    """
    라우트에 등록되지 않은 메서드(TRACE 등)도 같은 405 텍스트 응답을 받는지 테스트
    """
    response = await client.request("TRACE", path)

    assert response.status_code == 405
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["allow"] == allowed
    assert expected in response.text
    assert backend.requests == []
