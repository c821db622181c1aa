import json
import logging
import sys
from typing import Sequence

from healthchecks.registry import parse_args, resolve_config
from healthchecks.runner import run_checks

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = resolve_config(args)
    enabled = [name for name, options in config if options is not None]
    logger.debug("Enabled checks: %s", ", ".join(enabled) or "none")

    failure = run_checks(config)
    if failure is None:
        return 0

    print(f"Error: {json.dumps(failure.error, ensure_ascii=False)}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
