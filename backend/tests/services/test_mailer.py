"""Resend Mailer — request payloads, recipients and failure handling.

Tests use httpx.MockTransport: no network.
"""

import json
from types import SimpleNamespace
from uuid import uuid4

import httpx
import pytest

from introhub.infrastructure.email_templates import render_request_approved_email
from introhub.infrastructure.mailer import ResendMailer


def _people():
    requester = SimpleNamespace(
        email="ben@acme.com", first_name="Ben", last_name="Requester",
        company="Acme", position="PM",
    )
    approver = SimpleNamespace(
        email="anna@acme.com", first_name="Anna", last_name="Approver",
        company="Acme", position="CEO",
    )
    contact = SimpleNamespace(
        email="cleo@corp.com", first_name="Cleo", last_name="Target",
        company="Corp", position="CTO",
    )
    request = SimpleNamespace(
        id=uuid4(), message="Would love to talk <shop>", response_message="",
    )
    return request, requester, approver, contact


def _mailer(handler, api_key="re_test"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ResendMailer(
        api_key=api_key, sender="IntroHub <noreply@introhub.com>",
        api_url="https://resend.example/", client=client,
    )


@pytest.fixture
def captured():
    return []


@pytest.fixture
def ok_handler(captured):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"id": "email_123"})
    return handler


async def test_new_request_goes_to_approver(ok_handler, captured):
    mailer = _mailer(ok_handler)
    assert await mailer.send_new_request(*_people()) is True

    sent = captured[0]
    assert str(sent.url) == "https://resend.example/emails"
    assert sent.headers["Authorization"] == "Bearer re_test"
    payload = json.loads(sent.content)
    assert payload["to"] == ["anna@acme.com"]
    assert payload["from"] == "IntroHub <noreply@introhub.com>"
    assert payload["subject"] == "Ben Requester would like an introduction to Cleo Target"
    assert "&lt;shop&gt;" in payload["html"]
    assert "Would love to talk <shop>" in payload["text"]


async def test_approved_goes_to_requester_and_contact_cc_approver(ok_handler, captured):
    mailer = _mailer(ok_handler)
    assert await mailer.send_request_approved(*_people()) is True
    payload = json.loads(captured[0].content)
    assert payload["to"] == ["ben@acme.com", "cleo@corp.com"]
    assert payload["cc"] == ["anna@acme.com"]
    assert payload["subject"] == "Introduction: Ben Requester <> Cleo Target"


async def test_declined_goes_to_requester(ok_handler, captured):
    mailer = _mailer(ok_handler)
    assert await mailer.send_request_declined(*_people()) is True
    payload = json.loads(captured[0].content)
    assert payload["to"] == ["ben@acme.com"]
    assert "cc" not in payload
    assert payload["subject"] == "Introduction request to Cleo Target was declined"


async def test_missing_api_key_skips_send(ok_handler, captured):
    mailer = _mailer(ok_handler, api_key="")
    assert await mailer.send_new_request(*_people()) is False
    assert captured == []


async def test_http_error_status_returns_false():
    mailer = _mailer(lambda request: httpx.Response(422, json={"message": "bad"}))
    assert await mailer.send_request_declined(*_people()) is False


async def test_transport_error_propagates():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    mailer = _mailer(handler)
    with pytest.raises(httpx.ConnectError):
        await mailer.send_new_request(*_people())


async def test_duplicate_recipients_collapsed(ok_handler, captured):
    request, requester, approver, contact = _people()
    contact.email = "BEN@acme.com"
    mailer = _mailer(ok_handler)
    await mailer.send_request_approved(request, requester, approver, contact)
    payload = json.loads(captured[0].content)
    assert payload["to"] == ["ben@acme.com"]


def test_approved_template_includes_response_message():
    request, requester, approver, contact = _people()
    request.response_message = "You two should talk"
    email = render_request_approved_email(request, requester, approver, contact)
    assert "You two should talk" in email.text
    assert "Cleo" in email.html
