"""Notification Queue — bounded queue, single worker, best-effort delivery.

Invariants:
    - jobs delivered in FIFO order by one worker
    - a mailer exception is logged and counted, the worker keeps running
    - a full queue drops the job without raising
    - stop() drains queued jobs before returning
"""

import asyncio
from types import SimpleNamespace
from uuid import uuid4

import pytest

from introhub.core.domain_types import NotificationKind
from introhub.infrastructure.notifications import NotificationJob, NotificationQueue


class FakeMailer:
    def __init__(self, result=True, fail_on=()):
        self.sent: list[tuple[str, object]] = []
        self.result = result
        self.fail_on = set(fail_on)

    async def _send(self, kind, request):
        if kind in self.fail_on:
            raise RuntimeError(f"{kind} exploded")
        self.sent.append((kind, request))
        return self.result

    async def send_new_request(self, request, requester, approver, contact):
        return await self._send("new_request", request)

    async def send_request_approved(self, request, requester, approver, contact):
        return await self._send("request_approved", request)

    async def send_request_declined(self, request, requester, approver, contact):
        return await self._send("request_declined", request)


def _entities():
    request = SimpleNamespace(id=uuid4())
    person = SimpleNamespace(email="p@acme.com", first_name="P", last_name="Q")
    return request, person, person, person


@pytest.fixture
async def queue():
    mailer = FakeMailer()
    q = NotificationQueue(mailer, maxsize=10)
    await q.start()
    yield q
    await q.stop()


async def test_jobs_delivered_in_order(queue):
    first, *rest = _entities()
    second, *_ = _entities()
    await queue.notify_new_request(first, *rest)
    await queue.notify_request_approved(second, *rest)
    await queue.drain()
    assert queue.mailer.sent == [("new_request", first), ("request_approved", second)]
    assert queue.delivered == 2
    assert queue.pending == 0


async def test_declined_dispatches_to_declined_sender(queue):
    request, *rest = _entities()
    await queue.notify_request_declined(request, *rest)
    await queue.drain()
    assert queue.mailer.sent == [("request_declined", request)]


async def test_mailer_failure_does_not_stop_worker():
    mailer = FakeMailer(fail_on={"new_request"})
    q = NotificationQueue(mailer)
    await q.start()
    request, *rest = _entities()
    await q.notify_new_request(request, *rest)
    await q.notify_request_declined(request, *rest)
    await q.drain()
    assert q.failed == 1
    assert q.delivered == 1
    assert q.running
    await q.stop()


async def test_unsent_email_counted_as_skipped():
    q = NotificationQueue(FakeMailer(result=False))
    await q.start()
    request, *rest = _entities()
    await q.notify_new_request(request, *rest)
    await q.drain()
    assert q.skipped == 1
    assert q.delivered == 0
    await q.stop()


async def test_full_queue_drops_without_raising():
    q = NotificationQueue(FakeMailer(), maxsize=1)
    request, *rest = _entities()
    job = NotificationJob(NotificationKind.NEW_REQUEST, request, *rest)
    assert q.enqueue(job) is True
    assert q.enqueue(job) is False
    await q.notify_request_approved(request, *rest)
    assert q.dropped == 2
    assert q.pending == 1


async def test_stop_drains_pending_jobs():
    mailer = FakeMailer()
    q = NotificationQueue(mailer)
    request, *rest = _entities()
    await q.notify_new_request(request, *rest)
    await q.notify_new_request(request, *rest)
    await q.start()
    await q.stop()
    assert len(mailer.sent) == 2
    assert not q.running


async def test_start_is_idempotent(queue):
    worker = queue._worker
    await queue.start()
    assert queue._worker is worker
    await asyncio.sleep(0)
    assert queue.running
