"""E-mail delivery of newly found articles."""
from __future__ import annotations

import html
import logging
import smtplib
from email.message import EmailMessage
from typing import Sequence

from wirescout.domain import ArticleRecord, Destination, NotificationError, NotificationSink

log = logging.getLogger("wirescout.notifications")


def _render_article_html(record: ArticleRecord) -> str:
    title = f'<h3 style="margin-bottom: 16px;">{html.escape(record.title)}</h3>'
    if record.link:
        title = (
            f'<a href="{html.escape(record.link, quote=True)}" '
            f'style="text-decoration: none; color: #2c3e50;">{title}</a>'
        )
    parts = [
        '<div style="margin-bottom: 30px; border-bottom: 1px solid #eee; padding-bottom: 24px;">',
        f'<small style="font-size: 12px; color: #999;">{html.escape(record.source)}</small>',
        title,
    ]
    if record.raw_date:
        parts.append(
            f'<small style="font-size: 12px; color: #999;">{html.escape(record.raw_date)}</small>'
        )
    if record.summary:
        parts.append(f'<p style="color: #555;">{html.escape(record.summary)}</p>')
    parts.append("</div>")
    return "\n".join(parts)


def render_email_html(records: Sequence[ArticleRecord]) -> str:
    """Build the HTML body listing ``records``; every text value is escaped."""

    items = "\n".join(_render_article_html(record) for record in records)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        '<head><meta charset="utf-8"></head>\n'
        '<body style="font-family: Arial, sans-serif; max-width: 600px; '
        'margin: 0 auto; padding: 24px;">\n'
        f'<h2 style="color: #2c3e50;">New Articles Found ({len(records)})</h2>\n'
        f"{items}\n"
        '<p style="text-align: center; color: #999; font-size: 12px; margin-top: 48px;">'
        "Powered by Wirescout</p>\n"
        "</body>\n"
        "</html>\n"
    )


def render_email_text(records: Sequence[ArticleRecord]) -> str:
    """Plain-text alternative of :func:`render_email_html`."""

    lines = [f"New Articles Found ({len(records)})", ""]
    for record in records:
        lines.append(f"[{record.source}] {record.title}")
        if record.raw_date:
            lines.append(record.raw_date)
        if record.link:
            lines.append(record.link)
        if record.summary:
            lines.append(record.summary)
        lines.append("")
    return "\n".join(lines)


class SmtpEmailSink(NotificationSink):
    """Sends the new articles as a single HTML e-mail over SMTP."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        *,
        use_tls: bool = True,
        timeout: float = 30,
        smtp_factory=smtplib.SMTP,
    ) -> None:
        """Configure the SMTP connection used for every delivery.

        Args:
            host: SMTP server hostname.
            port: SMTP server port, usually 587 for STARTTLS.
            user: Login used to authenticate.
            password: Password or app token for ``user``.
            use_tls: Whether to upgrade the connection with STARTTLS.
            timeout: Socket timeout, in seconds.
            smtp_factory: Callable building the SMTP client; replaced in tests.
        """

        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout
        self._smtp_factory = smtp_factory

    def build_message(
        self, records: Sequence[ArticleRecord], destination: Destination
    ) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = destination.subject
        message["From"] = destination.sender
        message["To"] = ", ".join(destination.recipients)
        message.set_content(render_email_text(records))
        message.add_alternative(render_email_html(records), subtype="html")
        return message

    def send(self, records: Sequence[ArticleRecord], destination: Destination) -> None:
        if not destination.recipients:
            raise NotificationError("no recipients configured")
        message = self.build_message(records, destination)
        try:
            with self._smtp_factory(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls()
                server.login(self._user, self._password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(
                f"could not send e-mail through {self._host}:{self._port}: {exc}"
            ) from exc
        log.info(
            "E-mail with %d articles sent to %s", len(records), ", ".join(destination.recipients)
        )


__all__ = ["SmtpEmailSink", "render_email_html", "render_email_text"]
