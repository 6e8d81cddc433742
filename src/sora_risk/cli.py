"""Command line entry point: evaluate an assessment JSON file."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from .api import run_assessment
from .config import SoraSettings
from .logging_utils import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Classify a UAS operation with JARUS SORA 2.5")
    parser.add_argument("--input", required=True, help="Path to assessment JSON ('-' for stdin)")
    parser.add_argument("--config", help="Path to TOML configuration file")
    parser.add_argument("--no-oso", action="store_true", help="Omit the OSO compliance report")
    args = parser.parse_args(argv)

    try:
        settings = SoraSettings.from_toml(args.config) if args.config else SoraSettings()
        raw = sys.stdin.read() if args.input == "-" else Path(args.input).read_text()
        payload = json.loads(raw)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    if args.no_oso:
        settings.output.include_oso = False

    configure_logging(settings.logging)
    try:
        result = run_assessment(payload, settings)
    except ValidationError as exc:
        print(f"error: invalid assessment input\n{exc}", file=sys.stderr)
        return 2

    print(json.dumps(result, indent=settings.output.indent))
    if not result["withinScope"] or result["mitigationConflicts"]:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
