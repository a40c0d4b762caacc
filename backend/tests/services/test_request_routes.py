"""Introduction Request Routes — the pending → approved | declined lifecycle.

Invariants:
    - create: contact must exist (404) and belong to the approver (400);
      one request per (requester, contact) in any status (409)
      even when two writers race past the existence check
    - non-participants get 404, never 403
    - only the approver sets status; re-deciding a resolved request is allowed
    - only the requester deletes, and only while pending (403 otherwise)
    - new / approved / declined hand a notification to the notifier;
      setting pending again sends nothing
    - a failing notifier never fails the request operation
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest
from sqlalchemy import update

from introhub.infrastructure.repositories import SqlIntroductionRequestRepository
from introhub.models.introduction_request import IntroductionRequest
from tests.services.api_helpers import contact_payload


@pytest.fixture
async def owner_a(register):
    return await register("a@acme.com", first_name="Anna", last_name="Approver")


@pytest.fixture
async def user_b(register):
    return await register("b@acme.com", first_name="Ben", last_name="Requester")


@pytest.fixture
async def contact_c(client, owner_a):
    res = await client.post(
        "/api/v1/contacts", headers=owner_a["headers"],
        json=contact_payload("x@y.com", first_name="Cleo", last_name="Target"),
    )
    assert res.status_code == 201, res.text
    return res.json()


async def _request(client, requester, approver, contact, message="Please introduce me"):
    return await client.post("/api/v1/requests", headers=requester["headers"], json={
        "approver_id": approver["user"]["id"],
        "target_contact_id": contact["id"],
        "message": message,
    })


# ─── end-to-end ──────────────────────────────────────────────────

async def test_approved_request_cannot_be_withdrawn(client, owner_a, user_b, contact_c, notifier):
    created = await _request(client, user_b, owner_a, contact_c)
    assert created.status_code == 201
    request = created.json()
    assert request["status"] == "pending"
    assert request["response_message"] == ""
    assert request["requester"]["id"] == user_b["user"]["id"]
    assert request["approver"]["id"] == owner_a["user"]["id"]
    assert request["target_contact"]["id"] == contact_c["id"]
    assert request["target_contact"]["user"]["id"] == owner_a["user"]["id"]

    approved = await client.put(
        f"/api/v1/requests/{request['id']}", headers=owner_a["headers"],
        json={"status": "approved", "response_message": "Happy to"},
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert approved.json()["response_message"] == "Happy to"

    withdrawn = await client.delete(
        f"/api/v1/requests/{request['id']}", headers=user_b["headers"],
    )
    assert withdrawn.status_code == 403
    assert withdrawn.json() == {
        "error": "only pending requests can be deleted", "code": "FORBIDDEN",
    }
    assert notifier.kinds() == ["new_request", "request_approved"]


# ─── create ──────────────────────────────────────────────────────

async def test_create_notifies_with_resolved_entities(client, owner_a, user_b, contact_c, notifier):
    await _request(client, user_b, owner_a, contact_c)
    assert len(notifier.calls) == 1
    kind, request, requester, approver, contact = notifier.calls[0]
    assert kind == "new_request"
    assert request.status == "pending"
    assert requester.email == "b@acme.com"
    assert approver.email == "a@acme.com"
    assert contact.email == "x@y.com"


async def test_create_unknown_contact_not_found(client, owner_a, user_b):
    res = await _request(client, user_b, owner_a, {"id": str(uuid4())})
    assert res.status_code == 404
    assert res.json()["error"] == "contact not found"


async def test_create_wrong_approver_invalid_argument(client, owner_a, user_b, contact_c, notifier):
    res = await _request(client, user_b, user_b, contact_c)
    assert res.status_code == 400
    assert res.json() == {
        "error": "target contact does not belong to specified approver",
        "code": "INVALID_ARGUMENT",
    }
    assert notifier.calls == []


async def test_create_duplicate_conflicts(client, owner_a, user_b, contact_c):
    assert (await _request(client, user_b, owner_a, contact_c)).status_code == 201
    again = await _request(client, user_b, owner_a, contact_c, message="Second try")
    assert again.status_code == 409
    assert again.json()["error"] == "a request for this contact already exists"


async def test_declined_request_still_blocks_new_one(client, owner_a, user_b, contact_c):
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    await client.put(
        f"/api/v1/requests/{request['id']}", headers=owner_a["headers"],
        json={"status": "declined"},
    )
    again = await _request(client, user_b, owner_a, contact_c)
    assert again.status_code == 409


async def test_create_blank_message_rejected(client, owner_a, user_b, contact_c):
    res = await _request(client, user_b, owner_a, contact_c, message="   ")
    assert res.status_code == 400


async def test_concurrent_duplicate_caught_by_unique_constraint(
    client, owner_a, user_b, contact_c, monkeypatch,
):
    first = await _request(client, user_b, owner_a, contact_c)
    assert first.status_code == 201

    async def never_exists(self, requester_id, contact_id):
        return False

    monkeypatch.setattr(SqlIntroductionRequestRepository, "exists", never_exists)
    second = await _request(client, user_b, owner_a, contact_c)
    assert second.status_code == 409
    assert second.json() == {
        "error": "a request for this contact already exists", "code": "CONFLICT",
    }


async def test_notifier_failure_does_not_fail_create(
    client, owner_a, user_b, contact_c, notifier, monkeypatch,
):
    async def broken(*args):
        raise RuntimeError("mail relay down")

    monkeypatch.setattr(notifier, "notify_new_request", broken)
    created = await _request(client, user_b, owner_a, contact_c)
    assert created.status_code == 201
    assert created.json()["status"] == "pending"

    listed = await client.get(
        "/api/v1/requests", params={"type": "sent"}, headers=user_b["headers"],
    )
    assert [r["id"] for r in listed.json()] == [created.json()["id"]]


# ─── read ────────────────────────────────────────────────────────

async def test_participants_can_read(client, owner_a, user_b, contact_c):
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    for user in (owner_a, user_b):
        res = await client.get(f"/api/v1/requests/{request['id']}", headers=user["headers"])
        assert res.status_code == 200
        assert res.json()["id"] == request["id"]


async def test_outsider_gets_not_found(client, register, owner_a, user_b, contact_c):
    outsider = await register("o@acme.com")
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    res = await client.get(f"/api/v1/requests/{request['id']}", headers=outsider["headers"])
    assert res.status_code == 404
    assert res.json() == {"error": "request not found", "code": "RESOURCE_NOT_FOUND"}


async def test_missing_request_not_found(client, owner_a):
    res = await client.get(f"/api/v1/requests/{uuid4()}", headers=owner_a["headers"])
    assert res.status_code == 404


# ─── list ────────────────────────────────────────────────────────

async def test_list_sent_and_received(client, owner_a, user_b, contact_c):
    request = (await _request(client, user_b, owner_a, contact_c)).json()

    sent = await client.get("/api/v1/requests", params={"type": "sent"}, headers=user_b["headers"])
    received = await client.get("/api/v1/requests", headers=owner_a["headers"])
    b_received = await client.get(
        "/api/v1/requests", params={"type": "received"}, headers=user_b["headers"],
    )
    a_sent = await client.get("/api/v1/requests", params={"type": "sent"}, headers=owner_a["headers"])

    assert [r["id"] for r in sent.json()] == [request["id"]]
    assert [r["id"] for r in received.json()] == [request["id"]]
    assert b_received.json() == []
    assert a_sent.json() == []


async def test_unknown_list_type_means_received(client, owner_a, user_b, contact_c):
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    res = await client.get("/api/v1/requests", params={"type": "bogus"}, headers=owner_a["headers"])
    assert [r["id"] for r in res.json()] == [request["id"]]


async def test_list_newest_first(client, test_db, owner_a, user_b, contact_c):
    second = await client.post(
        "/api/v1/contacts", headers=owner_a["headers"],
        json=contact_payload("second@y.com", first_name="Second"),
    )
    older = (await _request(client, user_b, owner_a, contact_c)).json()
    newer = (await _request(client, user_b, owner_a, second.json())).json()

    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for request_id, created in ((older["id"], base), (newer["id"], base + timedelta(hours=1))):
        await test_db.execute(
            update(IntroductionRequest)
            .where(IntroductionRequest.id == UUID(request_id))
            .values(created_at=created),
        )
    await test_db.commit()

    res = await client.get("/api/v1/requests", params={"type": "sent"}, headers=user_b["headers"])
    assert [r["id"] for r in res.json()] == [newer["id"], older["id"]]


# ─── update ──────────────────────────────────────────────────────

async def test_requester_cannot_decide(client, owner_a, user_b, contact_c, notifier):
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    res = await client.put(
        f"/api/v1/requests/{request['id']}", headers=user_b["headers"],
        json={"status": "approved"},
    )
    assert res.status_code == 403
    assert res.json()["error"] == "only the approver can update this request"
    assert notifier.kinds() == ["new_request"]


async def test_invalid_status_rejected(client, owner_a, user_b, contact_c):
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    res = await client.put(
        f"/api/v1/requests/{request['id']}", headers=owner_a["headers"],
        json={"status": "maybe"},
    )
    assert res.status_code == 400


async def test_decline_then_redecide(client, owner_a, user_b, contact_c, notifier):
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    url = f"/api/v1/requests/{request['id']}"

    declined = await client.put(url, headers=owner_a["headers"], json={"status": "declined"})
    assert declined.json()["status"] == "declined"

    reopened = await client.put(url, headers=owner_a["headers"], json={"status": "pending"})
    assert reopened.status_code == 200
    assert reopened.json()["status"] == "pending"

    approved = await client.put(url, headers=owner_a["headers"], json={"status": "approved"})
    assert approved.json()["status"] == "approved"

    assert notifier.kinds() == ["new_request", "request_declined", "request_approved"]


async def test_update_missing_request_not_found(client, owner_a):
    res = await client.put(
        f"/api/v1/requests/{uuid4()}", headers=owner_a["headers"],
        json={"status": "approved"},
    )
    assert res.status_code == 404


# ─── delete ──────────────────────────────────────────────────────

async def test_requester_withdraws_pending_request(client, owner_a, user_b, contact_c):
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    res = await client.delete(f"/api/v1/requests/{request['id']}", headers=user_b["headers"])
    assert res.status_code == 204
    gone = await client.get(f"/api/v1/requests/{request['id']}", headers=user_b["headers"])
    assert gone.status_code == 404


async def test_approver_cannot_delete(client, owner_a, user_b, contact_c):
    request = (await _request(client, user_b, owner_a, contact_c)).json()
    res = await client.delete(f"/api/v1/requests/{request['id']}", headers=owner_a["headers"])
    assert res.status_code == 403
    assert res.json()["error"] == "only the requester can delete this request"


async def test_delete_missing_request_not_found(client, user_b):
    res = await client.delete(f"/api/v1/requests/{uuid4()}", headers=user_b["headers"])
    assert res.status_code == 404


async def test_list_skips_requests_that_no_longer_resolve(client, owner_a, user_b, contact_c):
    """SQLite does not enforce the contact FK here, so the request row survives."""
    await _request(client, user_b, owner_a, contact_c)
    await client.delete(f"/api/v1/contacts/{contact_c['id']}", headers=owner_a["headers"])
    res = await client.get("/api/v1/requests", params={"type": "sent"}, headers=user_b["headers"])
    assert res.status_code == 200
    assert res.json() == []
