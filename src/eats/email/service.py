"""Transactional email through the Mailgun HTTP API."""

from __future__ import annotations

import httpx

from ..logging import get_logger

logger = get_logger(__name__)

MAILGUN_API_BASE = "https://api.mailgun.net/v3"


class EmailService:
    """
    Mailgun client for templated messages.

    Sending never raises: the result is a boolean so callers can log a failed
    delivery without failing the operation that triggered it.
    """

    def __init__(
        self,
        api_key: str | None,
        domain: str,
        from_name: str = "Eats",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.domain = domain
        self.from_name = from_name
        self.timeout = timeout
        self._transport = transport

    @property
    def messages_url(self) -> str:
        return f"{MAILGUN_API_BASE}/{self.domain}/messages"

    @property
    def sender(self) -> str:
        return f"{self.from_name} <mailgun@{self.domain}>"

    async def send_email(
        self, to: str, subject: str, template: str, variables: dict[str, str]
    ) -> bool:
        if not self.api_key:
            logger.warning("Mailgun API key not configured, email not sent", template=template)
            return False

        data = {
            "from": self.sender,
            "to": to,
            "subject": subject,
            "template": template,
        }
        for key, value in variables.items():
            data[f"v:{key}"] = value

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.timeout
            ) as client:
                response = await client.post(
                    self.messages_url,
                    auth=("api", self.api_key),
                    data=data,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Mailgun rejected email",
                template=template,
                status_code=e.response.status_code,
            )
            return False
        except httpx.HTTPError as e:
            logger.error("Failed to reach Mailgun", template=template, error=str(e))
            return False

        logger.info("Email sent", template=template)
        return True

    async def send_verification_email(self, email: str, code: str) -> bool:
        return await self.send_email(
            to=email,
            subject="Verify Your Email",
            template="confirm_email",
            variables={"code": code, "username": email},
        )
