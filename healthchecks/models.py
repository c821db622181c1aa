from __future__ import annotations

import logging
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from healthchecks.checks.results import INT64_MAX
from healthchecks.config import DEFAULT_TIMESTAMP_FILE, DEFAULT_TIMESTAMP_TIMEOUT_S

logger = logging.getLogger(__name__)

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")


class TimestampOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str = Field(default=DEFAULT_TIMESTAMP_FILE, min_length=1)
    timeout_s: int = DEFAULT_TIMESTAMP_TIMEOUT_S

    @field_validator("timeout_s", mode="before")
    @classmethod
    def _lenient_timeout(cls, value: Any) -> int:
        if value is None:
            return DEFAULT_TIMESTAMP_TIMEOUT_S
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        # Plain optional sign and ASCII digits only, within signed 64-bit range.
        text = str(value)
        if _SIGNED_INT.fullmatch(text) and len(text.lstrip("+-").lstrip("0")) <= 19:
            timeout = int(text)
            if -INT64_MAX - 1 <= timeout <= INT64_MAX:
                return timeout
        logger.warning(
            "Invalid timestamp timeout %r, using %ss", value, DEFAULT_TIMESTAMP_TIMEOUT_S
        )
        return DEFAULT_TIMESTAMP_TIMEOUT_S


class UrlOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1)


class InvocationConfig(BaseModel):
    """Effective per-check parameters for one run. A disabled check is None."""

    model_config = ConfigDict(frozen=True)

    timestamp: Optional[TimestampOptions] = None
    amqp: Optional[UrlOptions] = None
    postgres: Optional[UrlOptions] = None
    redis: Optional[UrlOptions] = None
    http: Optional[UrlOptions] = None
