"""Shared test doubles and payload builders for API-level tests."""


class RecordingNotifier:
    """Notifier double: records (kind, request, requester, approver, contact)."""

    def __init__(self):
        self.calls: list[tuple] = []

    def kinds(self) -> list[str]:
        return [call[0] for call in self.calls]

    async def notify_new_request(self, request, requester, approver, contact):
        self.calls.append(("new_request", request, requester, approver, contact))

    async def notify_request_approved(self, request, requester, approver, contact):
        self.calls.append(("request_approved", request, requester, approver, contact))

    async def notify_request_declined(self, request, requester, approver, contact):
        self.calls.append(("request_declined", request, requester, approver, contact))


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def contact_payload(email: str, **overrides) -> dict:
    payload = {
        "email": email,
        "first_name": "Carol",
        "last_name": "Contact",
        "company": "Acme",
        "position": "CTO",
    }
    payload.update(overrides)
    return payload
