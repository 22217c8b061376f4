"""Send HTML email reports via SMTP.

Uses stdlib ``smtplib`` and ``email.mime`` to send HTML emails.  The
connection settings come from :class:`~harvest_blame.config.SmtpSettings`:
``SMTP_SSL`` is used when ``use_ssl`` is set, plain ``SMTP`` otherwise,
and the sender only logs in when a user is configured (a local relay
usually needs none).

All errors are logged and reported through the boolean return value.
"""

import logging
import smtplib
from collections.abc import Mapping
from email.mime.text import MIMEText

from harvest_blame.config import SmtpSettings

logger = logging.getLogger(__name__)


def send_email(
    recipient: str,
    subject: str,
    html_body: str,
    headers: Mapping[str, str] | None = None,
    smtp: SmtpSettings | None = None,
) -> bool:
    """Send an HTML email.

    Args:
        recipient: The primary destination email address.
        subject: The email subject line.
        html_body: The full HTML content of the email body.
        headers: Extra headers such as ``From`` and ``Cc``.  Headers the
            message already carries (``Content-Type``) are left alone.
        smtp: Mail server settings.  Defaults to ``localhost:25``.

    Returns:
        ``True`` if the email was sent successfully, ``False`` otherwise.
        This function never raises; all errors are logged and swallowed.
    """
    smtp = smtp or SmtpSettings()

    if not recipient:
        logger.warning("No recipient email address provided; skipping send.")
        return False

    # --- build MIME message ------------------------------------------
    msg = MIMEText(html_body, "html", "utf-8")
    msg["Subject"] = subject
    msg["To"] = recipient
    for name, value in (headers or {}).items():
        if value and name not in msg:
            msg[name] = value

    if "From" not in msg:
        logger.warning("No From address provided; skipping send.")
        return False

    # --- send --------------------------------------------------------
    smtp_class = smtplib.SMTP_SSL if smtp.use_ssl else smtplib.SMTP
    try:
        with smtp_class(smtp.host, smtp.port) as server:
            if smtp.user:
                server.login(smtp.user, smtp.password)
            server.send_message(msg)

        logger.debug("Email sent to %s via %s:%d", recipient, smtp.host, smtp.port)
        return True

    except smtplib.SMTPAuthenticationError:
        logger.error(
            "SMTP authentication failed. Check SMTP_USER and "
            "SMTP_PASSWORD environment variables."
        )
        return False

    except smtplib.SMTPException as exc:
        logger.error("SMTP error while sending email: %s", exc)
        return False

    except OSError as exc:
        logger.error(
            "Network error while connecting to %s:%d: %s",
            smtp.host, smtp.port, exc,
        )
        return False
