"""
MenuRelay Backend — Body Size Limit Middleware Tests
======================================================

What:  BodySizeLimitMiddleware rejects oversized bodies before any handler runs.
How:   A throwaway FastAPI app with a 32-byte ceiling; bodies are sent both
       with a Content-Length and as chunked streams.
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from menurelay.middleware.body_limit import BodySizeLimitMiddleware


def make_app():
    app = FastAPI()
    app.state.handled = 0
    app.add_middleware(BodySizeLimitMiddleware, max_size=32)

    @app.post("/echo")
    async def echo(payload: dict):
        app.state.handled += 1
        return payload

    return app


@pytest.mark.asyncio
async def test_body_under_limit_passes_through():
    app = make_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/echo", json={"a": 1})

    assert response.status_code == 200
    assert response.json() == {"a": 1}
    assert app.state.handled == 1


@pytest.mark.asyncio
async def test_body_over_limit_is_rejected_with_413():
    app = make_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/echo", json={"pdfBase64": "A" * 100})

    assert response.status_code == 413
    body = response.json()
    assert body["error"] == "payload_too_large"
    assert body["details"]["max_size"] == 32
    assert app.state.handled == 0


@pytest.mark.asyncio
async def test_malformed_content_length_is_rejected_with_400():
    app = make_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/echo",
            content=b"{}",
            headers={"Content-Type": "application/json", "Content-Length": "two"},
        )

    assert response.status_code == 400
    assert app.state.handled == 0


async def stream(*chunks):
    for chunk in chunks:
        yield chunk


@pytest.mark.asyncio
async def test_small_chunked_body_passes_through():
    app = make_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/echo",
            content=stream(b'{"a":', b" 1}"),
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 200
    assert response.json() == {"a": 1}
    assert app.state.handled == 1


@pytest.mark.asyncio
async def test_chunked_body_over_limit_is_rejected_with_413():
    app = make_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/echo",
            content=stream(b'{"pdfBase64": "', b"A" * 20, b"A" * 20, b'"}'),
            headers={"Content-Type": "application/json"},
        )

    assert response.status_code == 413
    body = response.json()
    assert body["error"] == "payload_too_large"
    assert body["details"]["received_size"] > 32
    assert app.state.handled == 0
