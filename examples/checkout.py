"""Checkout service example for daprlink.

Charges an order through the billing app with service invocation, then
announces it on the orders topic under a daprlink.publish span. Run it
next to a Dapr sidecar (``dapr run --app-id checkout -- python examples/checkout.py``).
"""

import asyncio
from typing import Any

import httpx
from pydantic import BaseModel

from daprlink import DaprHttpInvoker, HeaderSet, TracedPublisher
from daprlink.config import SidecarSettings
from daprlink.models import RequestOutcome
from daprlink.observability import bind_context, clear_context, configure_tracing, get_logger

BILLING_APP_ID = "billing"
CHARGE_METHOD = "charge"
PUBSUB_NAME = "pubsub"
ORDERS_TOPIC = "orders"

logger = get_logger(__name__)


class OrderPlaced(BaseModel):
    order_id: int
    customer: str
    total: float


async def checkout(
    order: OrderPlaced,
    settings: SidecarSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[RequestOutcome, RequestOutcome]:
    """Charge ``order`` and publish it.

    Args:
        order: The order being placed.
        settings: Sidecar address (default: from DAPR_HOST / DAPR_HTTP_PORT).
        transport: Optional httpx transport, for tests.

    Returns:
        The invocation and publish outcomes.
    """
    settings = settings or SidecarSettings.from_env()
    query_id = f"order-{order.order_id}"
    bind_context(query_id=query_id)
    try:
        async with DaprHttpInvoker.from_env(
            BILLING_APP_ID, CHARGE_METHOD, settings=settings, transport=transport
        ) as invoker:
            charged = await invoker.invoke(
                {"order_id": order.order_id, "amount": order.total},
                HeaderSet({"X-Customer": order.customer}),
            )
        logger.info(
            "checkout.charge_sent",
            order_id=order.order_id,
            status_code=charged.status_code,
        )

        async with TracedPublisher.from_env(
            PUBSUB_NAME, ORDERS_TOPIC, settings=settings, transport=transport
        ) as publisher:
            published = await publisher.publish_current(order, query_id=query_id)
    finally:
        clear_context()
    return charged, published


def main() -> dict[str, Any]:
    configure_tracing(service_name="checkout")
    order = OrderPlaced(order_id=7, customer="ada", total=42.0)
    charged, published = asyncio.run(checkout(order))
    return {"charge": charged.status_code, "publish": published.status_code}


if __name__ == "__main__":
    print(main())
