from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Sequence

from healthchecks.config import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_AMQP_URL,
    DEFAULT_HTTP_URL,
    DEFAULT_POSTGRES_URL,
    DEFAULT_REDIS_URL,
    DEFAULT_TIMESTAMP_FILE,
    DEFAULT_TIMESTAMP_TIMEOUT_S,
    Settings,
    settings,
)
from healthchecks.models import InvocationConfig, TimestampOptions, UrlOptions


@dataclass(frozen=True)
class OptionSpec:
    name: str
    default: str
    help: str
    env_var: str | None = None


@dataclass(frozen=True)
class CheckSpec:
    name: str
    help: str
    options: tuple[OptionSpec, ...]

    @property
    def flag(self) -> str:
        return f"--{self.name}"

    def option_flag(self, option: OptionSpec) -> str:
        return f"--{self.name}-{option.name}"

    def option_dest(self, option: OptionSpec) -> str:
        return f"{self.name}_{option.name}"


# Execution order of the runner.
CHECKS: tuple[CheckSpec, ...] = (
    CheckSpec(
        name="timestamp",
        help=(
            "Check that the file given with --timestamp-file holds a timestamp no older "
            "than --timestamp-timeout seconds. Non-digit characters in the file are ignored"
        ),
        options=(
            OptionSpec(
                name="timeout",
                default=str(DEFAULT_TIMESTAMP_TIMEOUT_S),
                help=f"Sets timeout for timestamp. Default: `{DEFAULT_TIMESTAMP_TIMEOUT_S}`",
            ),
            OptionSpec(
                name="file",
                default=DEFAULT_TIMESTAMP_FILE,
                help=f"Sets file with timestamp. Default: `{DEFAULT_TIMESTAMP_FILE}`",
            ),
        ),
    ),
    CheckSpec(
        name="amqp",
        help="Connect to server and open a channel. URL can be set with --amqp-url or AMQP_URL env variable",
        options=(
            OptionSpec(
                name="url",
                default=DEFAULT_AMQP_URL,
                help=f"Sets url for connection. Default: `{DEFAULT_AMQP_URL}`",
                env_var="AMQP_URL",
            ),
        ),
    ),
    CheckSpec(
        name="postgres",
        help="Connect to server and run SELECT 1. URL can be set with --postgres-url or POSTGRES_URL env variable",
        options=(
            OptionSpec(
                name="url",
                default=DEFAULT_POSTGRES_URL,
                help=f"Sets url for connection. Default: `{DEFAULT_POSTGRES_URL}`",
                env_var="POSTGRES_URL",
            ),
        ),
    ),
    CheckSpec(
        name="redis",
        help="Connect to server and run INFO server. URL can be set with --redis-url or REDIS_URL env variable",
        options=(
            OptionSpec(
                name="url",
                default=DEFAULT_REDIS_URL,
                help=f"Sets url of server. Default: `{DEFAULT_REDIS_URL}`",
                env_var="REDIS_URL",
            ),
        ),
    ),
    CheckSpec(
        name="http",
        help="Request the URL given with --http-url and expect a 2xx response",
        options=(
            OptionSpec(
                name="url",
                default=DEFAULT_HTTP_URL,
                help=f"Sets url of server. Default: `{DEFAULT_HTTP_URL}`",
            ),
        ),
    ),
)


def build_parser(checks: Sequence[CheckSpec] = CHECKS) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Helps check health of apps and services",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log check progress to stderr"
    )

    for spec in checks:
        group = parser.add_argument_group(spec.name)
        group.add_argument(spec.flag, action="store_true", help=spec.help)
        for option in spec.options:
            # Left as None so an explicit value can be told apart from the default.
            group.add_argument(
                spec.option_flag(option),
                dest=spec.option_dest(option),
                metavar=option.name.upper(),
                default=None,
                help=f"{option.help}. Requires {spec.flag}",
            )
    return parser


def validate_dependent_flags(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    checks: Sequence[CheckSpec] = CHECKS,
) -> None:
    """Reject a dependent flag given without its enabling flag (exits with status 2)."""
    for spec in checks:
        if getattr(args, spec.name):
            continue
        for option in spec.options:
            if getattr(args, spec.option_dest(option)) is not None:
                parser.error(f"{spec.option_flag(option)} requires {spec.flag}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_dependent_flags(parser, args)
    return args


def _option_value(
    spec: CheckSpec, option: OptionSpec, args: argparse.Namespace, cfg: Settings
) -> str:
    value = getattr(args, spec.option_dest(option))
    if value is not None:
        return value
    if option.env_var:
        env_value = getattr(cfg, option.env_var, None)
        if env_value:
            return env_value
    return option.default


def resolve_config(
    args: argparse.Namespace,
    cfg: Settings = settings,
    checks: Sequence[CheckSpec] = CHECKS,
) -> InvocationConfig:
    """
    Build the effective configuration for enabled checks.

    Values come from the command line first, then from the environment
    variable named by the option, then from the literal default.
    """
    resolved: dict[str, TimestampOptions | UrlOptions] = {}

    for spec in checks:
        if not getattr(args, spec.name):
            continue
        values = {option.name: _option_value(spec, option, args, cfg) for option in spec.options}
        if spec.name == "timestamp":
            resolved[spec.name] = TimestampOptions(
                file=values["file"], timeout_s=values["timeout"]
            )
        else:
            resolved[spec.name] = UrlOptions(url=values["url"])

    return InvocationConfig(**resolved)
