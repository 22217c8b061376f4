"""Resolve recipients and hand the rendered report to the mail transport."""

import functools
import logging
from collections.abc import Callable, Iterable, Mapping

from harvest_blame import __version__
from harvest_blame.config import EmailSettings
from harvest_blame.models import User
from harvest_blame.reporting.sender import send_email

logger = logging.getLogger(__name__)

# (to, subject, html_body, headers) -> sent?
Transport = Callable[[str, str, str, Mapping[str, str]], bool]


def resolve_cc(
    manual_cc: Iterable[str],
    users: Mapping[str, User],
    cc_users: bool,
) -> list[str]:
    """Return the CC list: manual addresses, then user emails if enabled.

    Addresses are de-duplicated case-insensitively; the first spelling
    wins and order is preserved.  Blank addresses are dropped.
    """
    candidates = list(manual_cc)
    if cc_users:
        candidates.extend(user.email for user in users.values())

    seen: set[str] = set()
    cc: list[str] = []
    for address in candidates:
        address = (address or "").strip()
        key = address.lower()
        if not address or key in seen:
            continue
        seen.add(key)
        cc.append(address)
    return cc


def build_headers(from_address: str, cc: Iterable[str]) -> dict[str, str]:
    """Compose the message headers for the report email."""
    headers = {
        "From": from_address,
        "X-Mailer": f"harvest-blame/{__version__}",
    }
    cc_line = ",".join(cc)
    if cc_line:
        headers["Cc"] = cc_line
    headers["Content-Type"] = 'text/html; charset="utf-8"'
    return headers


def dispatch_report(
    report: dict,
    email: EmailSettings,
    users: Mapping[str, User],
    transport: Transport | None = None,
) -> bool:
    """Send the composed report.

    Args:
        report: The dict returned by ``compose_report``.
        email: Sender, recipient and CC settings.
        users: Resolved users; their addresses are CC'd when
            ``email.cc_users`` is set.
        transport: Callable that delivers the message.  Defaults to
            :func:`send_email` bound to ``email.smtp``.

    Returns:
        Whether the transport reported success.  A failed send is
        logged, not raised.
    """
    if transport is None:
        transport = functools.partial(send_email, smtp=email.smtp)

    logger.info("Sending Blame Email...")

    cc = resolve_cc(email.cc, users, email.cc_users)
    headers = build_headers(email.from_address, cc)

    sent = transport(
        email.to_address,
        report["subject"],
        report["html_body"],
        headers,
    )

    if sent:
        logger.info("Mail sent successfully.")
    else:
        logger.error("Mail not successful. Check your settings.")
    return bool(sent)
