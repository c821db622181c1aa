from __future__ import annotations

import time
import requests

from healthchecks.checks.results import CheckResult

LABEL = "Http"


def run_http(url: str) -> CheckResult:
    start = time.perf_counter()
    try:
        r = requests.get(url)
    except Exception as e:
        return CheckResult.failed(LABEL, str(e), start)

    if 200 <= r.status_code < 300:
        return CheckResult.passed(start, status_code=r.status_code)
    return CheckResult.failed(
        LABEL, f"{url}: status code {r.status_code}", start, status_code=r.status_code
    )
