"""Introduction Request Service — the pending → approved | declined state machine.

Invariants:
    - Target contact must be owned by the named approver at creation time
    - At most one request per (requester, target contact), whatever its status
    - Only participants see a request; everyone else gets NotFound
    - Only the approver sets status; only the requester deletes, and only while pending
    - Notifications are handed to the Notifier AFTER the write is committed and
      never fail the calling operation

Design Decisions:
    - Rule checks live in core.enforce_requests (pure); this module only does IO
      and raises what they return
    - Every operation returns an IntroductionView (request + resolved entities)
      so routes and the notifier share one resolution path
"""

import logging
from typing import NamedTuple

from introhub.core.domain_types import (
    ContactId,
    NotificationKind,
    RequestId,
    RequestListType,
    UserId,
)
from introhub.core.enforce_requests import (
    REQUEST_RESOURCE,
    check_can_decide,
    check_can_view,
    check_can_withdraw,
    check_contact_belongs_to_approver,
    check_not_duplicate,
    notification_for_status,
)
from introhub.core.errors import ResourceNotFoundError
from introhub.core.repository_protocols import (
    ContactLike,
    ContactRepository,
    IntroductionRequestLike,
    IntroductionRequestRepository,
    Notifier,
    UserLike,
    UserRepository,
)
from introhub.schemas.request import RequestCreate, RequestUpdate

logger = logging.getLogger(__name__)


class IntroductionView(NamedTuple):
    request: IntroductionRequestLike
    requester: UserLike
    approver: UserLike
    contact: ContactLike


class RequestService:
    """Introduction request rules over the request, contact and user stores."""

    def __init__(
        self,
        requests: IntroductionRequestRepository,
        contacts: ContactRepository,
        users: UserRepository,
        notifier: Notifier,
    ):
        self.requests = requests
        self.contacts = contacts
        self.users = users
        self.notifier = notifier

    async def create(self, requester_id: UserId, body: RequestCreate) -> IntroductionView:
        contact = await self.contacts.get_by_id(ContactId(body.target_contact_id))
        if not contact:
            raise ResourceNotFoundError("contact")

        error = check_contact_belongs_to_approver(contact, body.approver_id)
        if error:
            raise error

        error = check_not_duplicate(
            await self.requests.exists(requester_id, ContactId(contact.id)),
        )
        if error:
            raise error

        request = await self.requests.create(
            requester_id, UserId(body.approver_id), ContactId(contact.id), body.message,
        )
        logger.info(
            "Introduction request created",
            extra={"user_id": requester_id, "request_id": request.id},
        )

        view = await self._resolve(request)
        await self._notify(NotificationKind.NEW_REQUEST, view)
        return view

    async def get(self, request_id: RequestId, caller_id: UserId) -> IntroductionView:
        request = await self._fetch(request_id)
        error = check_can_view(request, caller_id)
        if error:
            raise error
        return await self._resolve(request)

    async def list_by_type(
        self, user_id: UserId, list_type: RequestListType,
    ) -> list[IntroductionView]:
        """Newest first; rows whose participants no longer resolve are skipped."""
        if list_type == RequestListType.SENT:
            requests = await self.requests.list_by_requester(user_id)
        else:
            requests = await self.requests.list_by_approver(user_id)

        views = []
        for request in requests:
            try:
                views.append(await self._resolve(request))
            except ResourceNotFoundError:
                logger.warning(
                    "Skipping request with unresolvable participants",
                    extra={"user_id": user_id, "request_id": request.id},
                )
        return views

    async def update(
        self, request_id: RequestId, caller_id: UserId, body: RequestUpdate,
    ) -> IntroductionView:
        request = await self._fetch(request_id)
        error = check_can_decide(request, caller_id)
        if error:
            raise error

        request = await self.requests.update_status(
            request, body.status, body.response_message,
        )
        logger.info(
            f"Introduction request set to {body.status.value}",
            extra={"user_id": caller_id, "request_id": request.id},
        )

        view = await self._resolve(request)
        kind = notification_for_status(body.status)
        if kind:
            await self._notify(kind, view)
        return view

    async def delete(self, request_id: RequestId, caller_id: UserId) -> None:
        request = await self._fetch(request_id)
        error = check_can_withdraw(request, caller_id)
        if error:
            raise error
        await self.requests.delete(request)
        logger.info(
            "Introduction request deleted",
            extra={"user_id": caller_id, "request_id": request_id},
        )

    # --- internals ------------------------------------------------------------

    async def _fetch(self, request_id: RequestId) -> IntroductionRequestLike:
        request = await self.requests.get_by_id(request_id)
        if not request:
            raise ResourceNotFoundError(REQUEST_RESOURCE)
        return request

    async def _resolve(self, request: IntroductionRequestLike) -> IntroductionView:
        requester = await self.users.get_by_id(UserId(request.requester_id))
        approver = await self.users.get_by_id(UserId(request.approver_id))
        if not requester or not approver:
            raise ResourceNotFoundError("user")
        contact = await self.contacts.get_by_id(ContactId(request.target_contact_id))
        if not contact:
            raise ResourceNotFoundError("contact")
        return IntroductionView(request, requester, approver, contact)

    async def _notify(self, kind: NotificationKind, view: IntroductionView) -> None:
        senders = {
            NotificationKind.NEW_REQUEST: self.notifier.notify_new_request,
            NotificationKind.REQUEST_APPROVED: self.notifier.notify_request_approved,
            NotificationKind.REQUEST_DECLINED: self.notifier.notify_request_declined,
        }
        try:
            await senders[kind](*view)
        except Exception as e:
            logger.error(
                f"Failed to hand off notification: {e}",
                exc_info=True,
                extra={"notification": kind.value, "request_id": view.request.id},
            )
