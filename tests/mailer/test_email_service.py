"""Tests for the Mailgun email client using an in-process HTTP transport."""

import httpx
import pytest

from eats.email import EmailService


def _service(handler, api_key="key-123"):
    return EmailService(
        api_key=api_key,
        domain="mg.example.com",
        from_name="Eats",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_verification_email_request_shape():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"id": "<1@mg.example.com>", "message": "Queued"})

    sent = await _service(handler).send_verification_email("nico@example.com", "abc123")

    assert sent is True
    (request,) = captured
    assert request.method == "POST"
    assert str(request.url) == "https://api.mailgun.net/v3/mg.example.com/messages"
    assert request.headers["authorization"].startswith("Basic ")
    form = dict(httpx.QueryParams(request.content.decode()))
    assert form == {
        "from": "Eats <mailgun@mg.example.com>",
        "to": "nico@example.com",
        "subject": "Verify Your Email",
        "template": "confirm_email",
        "v:code": "abc123",
        "v:username": "nico@example.com",
    }


@pytest.mark.asyncio
async def test_rejected_send_returns_false():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Forbidden")

    assert await _service(handler).send_email("a@example.com", "s", "t", {}) is False


@pytest.mark.asyncio
async def test_transport_error_returns_false():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert await _service(handler).send_email("a@example.com", "s", "t", {}) is False


@pytest.mark.asyncio
async def test_unconfigured_service_sends_nothing():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    sent = await _service(handler, api_key=None).send_verification_email("a@example.com", "c")

    assert sent is False
    assert calls == []
