"""Example: drive the message dispatcher through a scripted order.

Runs entirely offline against the bundled JSON catalog, printing every
outbound message with the console transport:
1. Browse to a product and add it to the cart
2. Check out with delivery details
3. Ask a free-text question (answered by a static responder)
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from orderrouter.core.config import Config
from orderrouter.core.types import InboundMessage
from orderrouter.cortex.services.dispatcher import MessageDispatcher
from orderrouter.modules.catalog import JsonCatalogStore
from orderrouter.modules.responders import StaticResponder
from orderrouter.modules.transports import ConsoleTransport

CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog.json"

SCRIPT = [
    "menu",
    "1",  # Browse catalog
    "1",  # Fried Snacks
    "1",  # Chicken Croquette
    "1",  # Add to cart
    "2",  # 12 units
    "3",  # Checkout
    "Ana Souza",
    "+1 555 0100",
    "12 Main St, apt 4",
    "1",  # first payment method (discounted)
    "yes",
    "Do you deliver on Sundays?",
]


def build_dispatcher(user_id: str) -> MessageDispatcher:
    config = Config()
    config.catalog.path = str(CATALOG_PATH)
    config.store.attendant_id = "attendant"
    catalog = JsonCatalogStore(config.catalog, config.store)
    return MessageDispatcher(
        transport=ConsoleTransport(user_id=user_id),
        catalog=catalog,
        responder=StaticResponder("We deliver every day until 8pm! 🛵"),
        config=config,
    )


async def example_scripted_order() -> None:
    """Example: one customer places an order."""
    print("=== Example: Scripted Order ===\n")

    dispatcher = build_dispatcher("customer")
    for counter, line in enumerate(SCRIPT, start=1):
        print(f">>> {line}")
        outcome = await dispatcher.handle(
            InboundMessage(sender="customer", body=line, message_id=f"example-{counter}")
        )
        print(f"    ({outcome.status} by {outcome.handled_by})\n")


async def main() -> None:
    await example_scripted_order()


if __name__ == "__main__":
    asyncio.run(main())
