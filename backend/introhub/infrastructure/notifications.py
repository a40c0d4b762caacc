"""Notification Queue — bounded, in-process queue that decouples emails from request handling.

Invariants:
    - notify_* never blocks and never raises: a full queue drops the job (logged)
    - A single worker task drains jobs in FIFO order; every job's outcome is logged
      (delivered / skipped / failed), and counted
    - Mailer failures are contained in the worker: no retry, no dead-letter
    - stop() waits for queued jobs before cancelling the worker

Design Decisions:
    - Explicit start()/stop() owned by the FastAPI lifespan instead of detached
      per-request tasks: completion is observable and shutdown is orderly
    - Jobs carry the already-resolved entities so the worker needs no DB session
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from introhub.core.domain_types import NotificationKind
from introhub.core.repository_protocols import (
    ContactLike,
    IntroductionRequestLike,
    UserLike,
)

logger = logging.getLogger(__name__)


class IntroductionMailer(Protocol):
    async def send_new_request(self, request, requester, approver, contact) -> bool: ...
    async def send_request_approved(self, request, requester, approver, contact) -> bool: ...
    async def send_request_declined(self, request, requester, approver, contact) -> bool: ...


@dataclass(frozen=True)
class NotificationJob:
    kind: NotificationKind
    request: IntroductionRequestLike
    requester: UserLike
    approver: UserLike
    contact: ContactLike


class NotificationQueue:
    """Notifier implementation backed by an asyncio.Queue and one worker."""

    def __init__(self, mailer: IntroductionMailer, maxsize: int = 100):
        self.mailer = mailer
        self._queue: asyncio.Queue[NotificationJob] = asyncio.Queue(maxsize=maxsize)
        self._worker: asyncio.Task | None = None
        self.delivered = 0
        self.skipped = 0
        self.failed = 0
        self.dropped = 0

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def start(self) -> None:
        if self.running:
            return
        self._worker = asyncio.create_task(self._run())
        logger.info("Notification worker started")

    async def stop(self) -> None:
        if not self._worker:
            return
        if self.running:
            await self._queue.join()
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        logger.info(
            f"Notification worker stopped (delivered={self.delivered}, "
            f"skipped={self.skipped}, failed={self.failed}, dropped={self.dropped})",
        )

    async def drain(self) -> None:
        """Wait until every queued job has been processed."""
        await self._queue.join()

    def enqueue(self, job: NotificationJob) -> bool:
        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "Notification queue full, dropping job",
                extra={"notification": job.kind.value, "request_id": job.request.id},
            )
            return False
        return True

    async def notify_new_request(self, request, requester, approver, contact) -> None:
        self.enqueue(NotificationJob(
            NotificationKind.NEW_REQUEST, request, requester, approver, contact,
        ))

    async def notify_request_approved(self, request, requester, approver, contact) -> None:
        self.enqueue(NotificationJob(
            NotificationKind.REQUEST_APPROVED, request, requester, approver, contact,
        ))

    async def notify_request_declined(self, request, requester, approver, contact) -> None:
        self.enqueue(NotificationJob(
            NotificationKind.REQUEST_DECLINED, request, requester, approver, contact,
        ))

    async def _run(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self._deliver(job)
            except Exception as e:
                self.failed += 1
                logger.error(
                    f"Notification failed: {e}",
                    exc_info=True,
                    extra=_job_extra(job),
                )
            finally:
                self._queue.task_done()

    async def _deliver(self, job: NotificationJob) -> None:
        senders = {
            NotificationKind.NEW_REQUEST: self.mailer.send_new_request,
            NotificationKind.REQUEST_APPROVED: self.mailer.send_request_approved,
            NotificationKind.REQUEST_DECLINED: self.mailer.send_request_declined,
        }
        sent = await senders[job.kind](
            job.request, job.requester, job.approver, job.contact,
        )
        if sent:
            self.delivered += 1
            logger.info("Notification delivered", extra=_job_extra(job))
        else:
            self.skipped += 1
            logger.warning("Notification not delivered", extra=_job_extra(job))


def _job_extra(job: NotificationJob) -> dict[str, Any]:
    return {"notification": job.kind.value, "request_id": job.request.id}


# Singleton (initialized on startup)
notification_queue: NotificationQueue | None = None


def init_notifications(
    mailer: IntroductionMailer, maxsize: int = 100,
) -> NotificationQueue:
    global notification_queue
    notification_queue = NotificationQueue(mailer, maxsize=maxsize)
    return notification_queue


def get_notifier() -> NotificationQueue:
    """FastAPI dependency for the notifier."""
    if not notification_queue:
        raise RuntimeError("Notifications not initialized")
    return notification_queue
