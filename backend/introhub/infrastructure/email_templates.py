"""Introduction email templates (Resend-backed)."""

from dataclasses import dataclass
from html import escape

from introhub.core.repository_protocols import (
    ContactLike,
    IntroductionRequestLike,
    UserLike,
)


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str
    text: str


def _full_name(person: UserLike | ContactLike) -> str:
    return f"{person.first_name} {person.last_name}".strip()


def _wrap(heading: str, paragraphs: list[str], quote: str | None = None) -> str:
    body = "".join(
        f'<p style="margin:0 0 12px 0;">{escape(p)}</p>' for p in paragraphs
    )
    quoted = ""
    if quote:
        quoted = (
            '<div style="border:1px solid #e5e7eb; border-radius:12px; '
            'padding:12px; background:#fafafa; white-space:pre-wrap;">'
            f"{escape(quote)}</div>"
        )
    return (
        '<div style="font-family: ui-sans-serif, system-ui; line-height: 1.5;">'
        f'<h2 style="margin:0 0 12px 0;">{escape(heading)}</h2>'
        f"{body}{quoted}"
        '<p style="margin:16px 0 0 0; color:#6b7280; font-size:12px;">IntroHub</p>'
        "</div>"
    )


def render_new_request_email(
    request: IntroductionRequestLike, requester: UserLike,
    approver: UserLike, contact: ContactLike,
) -> RenderedEmail:
    requester_name = _full_name(requester)
    contact_name = _full_name(contact)
    subject = f"{requester_name} would like an introduction to {contact_name}"
    lines = [
        f"Hi {approver.first_name},",
        f"{requester_name} ({requester.position} at {requester.company}) "
        f"would like you to introduce them to {contact_name}.",
        "Their message:",
    ]
    text = "\n\n".join(lines + [request.message, "Sign in to IntroHub to approve or decline."])
    html = _wrap(
        "New introduction request", lines, quote=request.message,
    )
    return RenderedEmail(subject=subject, html=html, text=text)


def render_request_approved_email(
    request: IntroductionRequestLike, requester: UserLike,
    approver: UserLike, contact: ContactLike,
) -> RenderedEmail:
    requester_name = _full_name(requester)
    contact_name = _full_name(contact)
    subject = f"Introduction: {requester_name} <> {contact_name}"
    lines = [
        f"{contact.first_name}, meet {requester_name} "
        f"({requester.position} at {requester.company}, {requester.email}).",
        f"{requester.first_name}, meet {contact_name} "
        f"({contact.position} at {contact.company}, {contact.email}).",
        f"{_full_name(approver)} thought you two should connect.",
    ]
    text_parts = list(lines)
    if request.response_message:
        text_parts.append(request.response_message)
    html = _wrap(
        "Introduction", lines, quote=request.response_message or None,
    )
    return RenderedEmail(subject=subject, html=html, text="\n\n".join(text_parts))


def render_request_declined_email(
    request: IntroductionRequestLike, requester: UserLike,
    approver: UserLike, contact: ContactLike,
) -> RenderedEmail:
    contact_name = _full_name(contact)
    subject = f"Introduction request to {contact_name} was declined"
    lines = [
        f"Hi {requester.first_name},",
        f"{_full_name(approver)} declined your request for an introduction "
        f"to {contact_name}.",
    ]
    text_parts = list(lines)
    if request.response_message:
        text_parts.append(request.response_message)
    html = _wrap(
        "Introduction request declined", lines,
        quote=request.response_message or None,
    )
    return RenderedEmail(subject=subject, html=html, text="\n\n".join(text_parts))
