from __future__ import annotations

import re
import time

from healthchecks.checks.results import INT64_MAX, CheckResult

_NON_DIGITS = re.compile(r"[^0-9]")

LABEL = "Timestamp"


def parse_timestamp(text: str) -> int:
    """
    Keep only the ASCII digits of ``text`` and read them as epoch seconds.

    Every non-digit character is dropped, so separated digit runs are joined:
    "ts: 17 00" parses as 1700. Raises ValueError when no digits remain or
    when the joined digits do not fit a signed 64-bit integer (e.g. two
    heartbeats written back to back).
    """
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        raise ValueError("no digits found")
    if len(digits.lstrip("0")) > 19 or int(digits) > INT64_MAX:
        raise ValueError(f"number too large: {len(digits)} digits")
    return int(digits)


def run_timestamp(path: str, timeout_s: int, now: int | None = None) -> CheckResult:
    start = time.perf_counter()
    try:
        with open(path, encoding="utf-8") as f:
            timestamp = parse_timestamp(f.read())
    except (OSError, UnicodeDecodeError) as e:
        return CheckResult.failed(LABEL, f"cannot read {path}: {e}", start)
    except ValueError as e:
        return CheckResult.failed(LABEL, f"cannot parse {path}: {e}", start)

    current = int(time.time()) if now is None else now
    diff = current - timestamp
    if diff > timeout_s:
        return CheckResult.failed(LABEL, f"Diff larger than timeout by {diff - timeout_s}", start)
    return CheckResult.passed(start)
