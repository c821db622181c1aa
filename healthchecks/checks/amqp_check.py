from __future__ import annotations

import asyncio
import time
from urllib.parse import urlparse

import aio_pika

from healthchecks.checks.results import CheckResult

LABEL = "AMQP"


async def _open_channel(url: str) -> None:
    connection = await aio_pika.connect(url)
    try:
        await connection.channel()
    finally:
        await connection.close()


def run_amqp(url: str) -> CheckResult:
    start = time.perf_counter()
    # Only plain connections; amqps:// would make aio_pika negotiate TLS.
    scheme = urlparse(url).scheme.lower()
    if scheme != "amqp":
        return CheckResult.failed(
            LABEL, f"unsupported URL scheme {scheme!r}, expected 'amqp'", start
        )

    try:
        asyncio.run(_open_channel(url))
    except Exception as e:
        return CheckResult.failed(LABEL, f"{e.__class__.__name__}: {e}", start)
    return CheckResult.passed(start)
