from __future__ import annotations

import time

import redis

from healthchecks.checks.results import CheckResult

LABEL = "Redis"


def run_redis(url: str) -> CheckResult:
    start = time.perf_counter()
    try:
        client = redis.Redis.from_url(url)
    except ValueError as e:
        return CheckResult.failed(LABEL, f"invalid URL: {e}", start)

    try:
        client.info("server")
    except Exception as e:
        return CheckResult.failed(LABEL, str(e), start)
    finally:
        client.close()
    return CheckResult.passed(start)
