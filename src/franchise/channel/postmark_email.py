"""Postmark email adapter: sends through Postmark's HTTP API."""

import requests
import structlog

from franchise.channel.email_port import EmailPort

logger = structlog.get_logger(__name__)

POSTMARK_API_URL = "https://api.postmarkapp.com/email"


class PostmarkEmailAdapter(EmailPort):
    def __init__(self, server_token: str, from_address: str, timeout: float = 10.0):
        self.server_token = server_token
        self.from_address = from_address
        self.timeout = timeout

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        message = {
            "From": self.from_address,
            "To": to,
            "Subject": subject,
            "TextBody": body,
            "MessageStream": "outbound",
        }
        if html_body:
            message["HtmlBody"] = html_body

        try:
            response = requests.post(
                POSTMARK_API_URL,
                json=message,
                headers={
                    "Accept": "application/json",
                    "X-Postmark-Server-Token": self.server_token,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("postmark_send_failed", to=to, subject=subject, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": response.json().get("MessageID"), "status": "sent"}
