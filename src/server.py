"""Protean Engine runner for the billing domain.

Processes billing events asynchronously when the domain runs with
``event_processing = "async"`` (PROTEAN_ENV=production). The Engine delivers
PaymentApproved to the invoicing handler outside the HTTP request.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


def _get_domain():
    from billing.domain import billing

    billing.init()
    return billing


async def run():
    engine = Engine(_get_domain())
    await engine.run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
