"""Command line entry point: mask a JSON document."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Optional

from .config import load_config
from .exceptions import ConfigError, PayloadDecodeError, RuleError
from .jsonpath_utils import JSONPathMatcher
from .mask import Mask
from .masker import Masker
from .models import LogLevel, MaskConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payloadmask",
        description="Filter a JSON document through a payload tagging mask",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  payloadmask -r 'foo.bar,foo.quux' payload.json
  payloadmask -r '*,-user.password' --paths < payload.json
  payloadmask -c mask.yaml --redact '$.token' payload.json
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("-r", "--rules", help="Mask rule string")
    source.add_argument("-c", "--config", help="Path to YAML/JSON config file")

    parser.add_argument(
        "input",
        nargs="?",
        help="Path to the JSON document (defaults to stdin)"
    )
    parser.add_argument(
        "--redact",
        action="append",
        default=[],
        metavar="JSONPATH",
        help="Replace values matching this JSONPath before masking (repeatable)"
    )
    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print the kept leaf paths instead of the masked document"
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Logging level"
    )
    return parser


def read_document(path: Optional[str]) -> Any:
    """Decode the input document from a file or stdin."""
    if path:
        with open(path, 'r') as f:
            content = f.read()
    else:
        content = sys.stdin.read()

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise PayloadDecodeError(f"Invalid JSON payload: {e.msg}", e.lineno, e.colno)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else MaskConfig()
    except (FileNotFoundError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.rules is not None:
        config.rules = args.rules
    config.redact = config.redact + args.redact
    if args.log_level:
        config.log_level = LogLevel(args.log_level)

    logging.basicConfig(level=config.log_level.level, stream=sys.stderr)

    try:
        document = read_document(args.input)
        if config.redact:
            document = JSONPathMatcher.redact(document, config.redact, config.redaction_value)
    except FileNotFoundError as e:
        print(f"Error: Input file not found: {e.filename}", file=sys.stderr)
        return 1
    except (PayloadDecodeError, RuleError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    mask = Mask(config.rules)
    masker = Masker(mask)

    if args.paths:
        for path in masker.tagged_paths(document):
            print(path)
    else:
        masked, dropped = masker.mask_document(document)
        logger.info("Dropped %d key(s) with %r", dropped, mask)
        print(json.dumps(masked, indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
