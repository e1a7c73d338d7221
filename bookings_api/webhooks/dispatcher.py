"""Webhook event dispatcher."""

import asyncio
import hashlib
import hmac
import json
import re
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Optional, Sequence, Union

import httpx

from bookings_api.core.config import get_settings
from bookings_api.core.exceptions import WebhookDeliveryError
from bookings_api.core.logging import get_logger
from bookings_api.webhooks.models import Subscriber
from bookings_api.webhooks.payload import to_iso
from bookings_api.webhooks.triggers import WebhookTriggerEvents

logger = get_logger(__name__)

TEMPLATE_PLACEHOLDER = re.compile(r"\{\{\s*([\w.]+)\s*\}\}")


def _stringify(value: Any, escape: bool = False) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        # Inside a quoted JSON string only the escaped content is wanted
        return json.dumps(value)[1:-1] if escape else value
    return json.dumps(value)


def render_template(template: str, variables: dict[str, Any], escape: bool = False) -> str:
    """Replace ``{{key}}`` placeholders with payload values.

    Unknown keys render as an empty string. With ``escape`` string values
    are JSON-escaped, for templates that describe a JSON document.
    """
    return TEMPLATE_PLACEHOLDER.sub(
        lambda match: _stringify(variables.get(match.group(1)), escape),
        template,
    )


def build_body(
    trigger_event: str,
    created_at: str,
    subscriber: Subscriber,
    data: dict[str, Any],
) -> tuple[str, str]:
    """Build the request body and its content type for a subscriber.

    A template that renders to valid JSON once string values are escaped is
    sent as JSON; anything else is rendered verbatim and sent as plain text.

    Returns:
        Tuple of (body, content type)
    """
    if not subscriber.payload_template:
        body = json.dumps({"triggerEvent": trigger_event, "createdAt": created_at, "payload": data})
        return body, "application/json"

    variables = {"triggerEvent": trigger_event, "createdAt": created_at, **data}
    body = render_template(subscriber.payload_template, variables, escape=True)
    try:
        json.loads(body)
    except ValueError:
        return render_template(subscriber.payload_template, variables), "text/plain"
    return body, "application/json"


def generate_signature(body: str, secret: str) -> str:
    """Generate HMAC signature for a webhook body.

    Args:
        body: Exact request body
        secret: Webhook secret

    Returns:
        HMAC signature
    """
    signature = hmac.new(
        secret.encode("utf-8"),
        body.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"sha256={signature}"


async def send_payload(
    client: httpx.AsyncClient,
    trigger_event: Union[WebhookTriggerEvents, str],
    created_at: str,
    subscriber: Subscriber,
    data: dict[str, Any],
) -> httpx.Response:
    """Deliver one notification to one subscriber.

    Args:
        client: HTTP client used for the request
        trigger_event: Trigger kind
        created_at: ISO-8601 timestamp of the trigger
        subscriber: Destination
        data: Notification payload

    Returns:
        The 2xx response

    Raises:
        WebhookDeliveryError: On network error or non-2xx response
    """
    trigger = getattr(trigger_event, "value", trigger_event)
    body, content_type = build_body(trigger, created_at, subscriber, data)

    headers = {
        "Content-Type": content_type,
        "User-Agent": get_settings().webhook_user_agent,
    }
    if subscriber.secret:
        headers["X-Webhook-Signature"] = generate_signature(body, subscriber.secret)

    try:
        response = await client.post(
            subscriber.subscriber_url,
            content=body.encode("utf-8"),
            headers=headers,
        )
    except httpx.RequestError as e:
        raise WebhookDeliveryError(
            f"Request error: {e}",
            url=subscriber.subscriber_url,
        ) from e

    if not 200 <= response.status_code < 300:
        raise WebhookDeliveryError(
            f"HTTP {response.status_code}: {response.text[:500]}",
            url=subscriber.subscriber_url,
            status_code=response.status_code,
        )

    return response


class WebhookDispatcher:
    """Fans a notification out to webhook subscribers."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize webhook dispatcher.

        Args:
            client: Shared HTTP client; a short-lived one is created per dispatch if omitted
            logger: Structured logger receiving delivery outcomes
            timeout: Per-request timeout in seconds, defaults to the configured webhook timeout
        """
        settings = get_settings()
        self.client = client
        self.logger = logger or get_logger(__name__)
        self.timeout = timeout if timeout is not None else settings.webhook_timeout

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    async def dispatch(
        self,
        trigger_event: Union[WebhookTriggerEvents, str],
        subscribers: Sequence[Subscriber],
        payload: dict[str, Any],
    ) -> None:
        """Send the payload to every subscriber concurrently.

        Each attempt is independent: failures are logged and never raised,
        and one failing subscriber does not affect the others.

        Args:
            trigger_event: Trigger kind
            subscribers: Resolved subscribers, possibly empty
            payload: Notification payload
        """
        trigger = getattr(trigger_event, "value", trigger_event)

        self.logger.info(
            "dispatching_webhook_event",
            trigger_event=trigger,
            subscribers_count=len(subscribers),
        )
        if not subscribers:
            return

        created_at = to_iso(datetime.now(timezone.utc))
        async with self._get_client() as client:
            await asyncio.gather(
                *(self._deliver(client, trigger, created_at, sub, payload) for sub in subscribers)
            )

    async def _deliver(
        self,
        client: httpx.AsyncClient,
        trigger_event: str,
        created_at: str,
        subscriber: Subscriber,
        payload: dict[str, Any],
    ) -> bool:
        try:
            response = await send_payload(client, trigger_event, created_at, subscriber, payload)
        except Exception as e:
            self.logger.error(
                "webhook_delivery_failed",
                trigger_event=trigger_event,
                url=subscriber.subscriber_url,
                webhook_id=subscriber.id,
                error=str(e),
            )
            return False

        self.logger.info(
            "webhook_delivered",
            trigger_event=trigger_event,
            url=subscriber.subscriber_url,
            webhook_id=subscriber.id,
            status_code=response.status_code,
        )
        return True
