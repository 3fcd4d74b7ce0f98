from typing import Dict, Optional
import requests

from lvlup.config import settings
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)


class EmailDeliveryError(RuntimeError):
    """The email provider refused the message."""


def send_email(
    to_email: str,
    subject: str,
    html_content: str,
    reply_to: Optional[str] = None,
    bcc: Optional[str] = None,
) -> None:
    """
    Deliver an HTML email with the configured provider.

    With EMAIL_PROVIDER=mailgun and Mailgun credentials set, the message is
    posted to the Mailgun messages API. Otherwise it is written to the log.

    Raises:
        EmailDeliveryError: If Mailgun answers with a non-2xx status
        requests.RequestException: If Mailgun cannot be reached
    """
    provider = (settings.EMAIL_PROVIDER or "logging").lower()
    if provider != "mailgun" or not (settings.MAILGUN_API_KEY and settings.MAILGUN_DOMAIN):
        if provider != "logging":
            logger.warning(f"Email provider {provider!r} is not usable, logging the message instead")
        logger.info(f"Email (logging provider) to={to_email} subject={subject}")
        logger.debug(f"Email content: {html_content}")
        return

    data: Dict[str, str] = {
        "from": f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_FROM}>",
        "to": to_email,
        "subject": subject,
        "html": html_content,
    }
    if reply_to:
        data["h:Reply-To"] = reply_to
    if bcc:
        data["bcc"] = bcc

    url = f"{settings.MAILGUN_BASE_URL.rstrip('/')}/v3/{settings.MAILGUN_DOMAIN}/messages"
    resp = requests.post(url, auth=("api", settings.MAILGUN_API_KEY), data=data, timeout=10)
    if not 200 <= resp.status_code < 300:
        logger.error(f"Mailgun rejected email to {to_email}: {resp.status_code} {resp.text}")
        raise EmailDeliveryError(f"Mailgun returned {resp.status_code}")
    logger.info(f"Email to {to_email} accepted by Mailgun")
