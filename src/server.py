"""Protean Engine runner for the franchise domain.

Processes events asynchronously when PROTEAN_ENV=production: the outbox
processor publishes to Redis Streams and stream subscriptions invoke the
moderation queue projector and the notification handlers.

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine

from franchise.domain import franchise
from franchise.utils.logging import configure_logging


async def run():
    configure_logging()
    franchise.init()
    await Engine(franchise).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
