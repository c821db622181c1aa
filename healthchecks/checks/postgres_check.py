from __future__ import annotations

import time

import psycopg2

from healthchecks.checks.results import CheckResult

LABEL = "Postgres"


def run_postgres(url: str) -> CheckResult:
    start = time.perf_counter()
    try:
        conn = psycopg2.connect(url, sslmode="disable")
        try:
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchall()
        finally:
            conn.close()
    except Exception as e:
        return CheckResult.failed(LABEL, str(e).strip(), start)
    return CheckResult.passed(start)
