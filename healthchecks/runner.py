from __future__ import annotations

import logging

from healthchecks.checks.amqp_check import run_amqp
from healthchecks.checks.http_check import run_http
from healthchecks.checks.postgres_check import run_postgres
from healthchecks.checks.redis_check import run_redis
from healthchecks.checks.results import CheckResult
from healthchecks.checks.timestamp_check import run_timestamp
from healthchecks.models import InvocationConfig, TimestampOptions, UrlOptions
from healthchecks.registry import CHECKS

logger = logging.getLogger(__name__)


def _evaluate(name: str, options: TimestampOptions | UrlOptions) -> CheckResult:
    if name == "timestamp":
        return run_timestamp(options.file, timeout_s=options.timeout_s)
    if name == "amqp":
        return run_amqp(options.url)
    if name == "postgres":
        return run_postgres(options.url)
    if name == "redis":
        return run_redis(options.url)
    if name == "http":
        return run_http(options.url)
    raise ValueError(f"Unknown check: {name}")


def run_checks(config: InvocationConfig) -> CheckResult | None:
    """Run enabled checks in registry order and return the first failure, if any."""
    for spec in CHECKS:
        options = getattr(config, spec.name)
        if options is None:
            logger.debug("Skipping %s check (not enabled)", spec.name)
            continue

        res = _evaluate(spec.name, options)
        if not res.ok:
            logger.info("%s check failed after %d ms: %s", spec.name, res.latency_ms, res.error)
            return res
        logger.debug("%s check passed in %d ms", spec.name, res.latency_ms)

    return None
