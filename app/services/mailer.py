# app/services/mailer.py
import requests

from app.core.config import MAIL_API_URL, MAIL_FROM, MAIL_TIMEOUT
from app.core.logging import get_logger

log = get_logger("mailer")


class MailDeliveryError(Exception):
    pass


class Mailer:
    """
    Sends mail through an HTTP relay.
    Completes silently on success, raises MailDeliveryError on any failure.
    """

    def __init__(self, api_url: str = MAIL_API_URL, sender: str = MAIL_FROM, timeout: float = MAIL_TIMEOUT):
        self.api_url = api_url
        self.sender = sender
        self.timeout = timeout

    def send_email(self, to_email: str, subject: str, text: str):
        payload = {
            "from": self.sender,
            "to_email": to_email,
            "subject": subject,
            "text": text,
        }
        try:
            response = requests.post(self.api_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            result = response.json() if response.content else {}
        except requests.RequestException as e:
            log.error("Failed to send email to %s: %s", to_email, e)
            raise MailDeliveryError(str(e)) from e

        if isinstance(result, dict) and result.get("success") is False:
            message = result.get("message", "Mail relay rejected the message")
            log.error("Failed to send email to %s: %s", to_email, message)
            raise MailDeliveryError(message)


def get_mailer() -> Mailer:
    return Mailer()
