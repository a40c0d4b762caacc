"""Resend Mailer — sends introduction emails through the Resend HTTP API.

Invariants:
    - One POST per email; recipients deduplicated and lower-cased
    - Missing API key → send skipped (logged), returns False
    - HTTP status >= 400 → logged, returns False
    - Transport errors (httpx.HTTPError) propagate; the notification worker logs them

Design Decisions:
    - httpx.AsyncClient injected: tests pass a MockTransport-backed client
    - No retry: notifications are best-effort by contract
"""

import logging
from typing import Iterable

import httpx

from introhub.core.repository_protocols import (
    ContactLike,
    IntroductionRequestLike,
    UserLike,
)
from introhub.infrastructure.email_templates import (
    RenderedEmail,
    render_new_request_email,
    render_request_approved_email,
    render_request_declined_email,
)

logger = logging.getLogger(__name__)


def _dedupe_emails(emails: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    deduped: list[str] = []
    for email in emails:
        normalized = (email or "").strip().lower()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        deduped.append(normalized)
    return deduped


class ResendMailer:
    """Delivers rendered introduction emails."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        api_url: str = "https://api.resend.com",
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.api_url = api_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def send_new_request(
        self, request: IntroductionRequestLike, requester: UserLike,
        approver: UserLike, contact: ContactLike,
    ) -> bool:
        email = render_new_request_email(request, requester, approver, contact)
        return await self.send(email, to=[approver.email])

    async def send_request_approved(
        self, request: IntroductionRequestLike, requester: UserLike,
        approver: UserLike, contact: ContactLike,
    ) -> bool:
        email = render_request_approved_email(request, requester, approver, contact)
        return await self.send(
            email, to=[requester.email, contact.email], cc=[approver.email],
        )

    async def send_request_declined(
        self, request: IntroductionRequestLike, requester: UserLike,
        approver: UserLike, contact: ContactLike,
    ) -> bool:
        email = render_request_declined_email(request, requester, approver, contact)
        return await self.send(email, to=[requester.email])

    async def send(
        self, email: RenderedEmail, to: Iterable[str],
        cc: Iterable[str] = (),
    ) -> bool:
        if not self.api_key:
            logger.info(f"Email skipped (no API key configured): {email.subject}")
            return False

        recipients = _dedupe_emails(to)
        if not recipients:
            logger.info(f"Email skipped (no recipients): {email.subject}")
            return False

        payload: dict[str, object] = {
            "from": self.sender,
            "to": recipients,
            "subject": email.subject,
            "html": email.html,
            "text": email.text,
        }
        copies = [c for c in _dedupe_emails(cc) if c not in recipients]
        if copies:
            payload["cc"] = copies

        headers = {"Authorization": f"Bearer {self.api_key}"}
        url = f"{self.api_url}/emails"
        if self._client is not None:
            response = await self._client.post(url, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(url, json=payload, headers=headers)

        if response.status_code >= 400:
            logger.warning(
                f"Email send failed: {email.subject}",
                extra={"status_code": response.status_code},
            )
            return False

        logger.info(f"Email sent to {len(recipients)} recipient(s): {email.subject}")
        return True
