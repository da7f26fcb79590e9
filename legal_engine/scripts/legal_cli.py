#!/usr/bin/env python3
"""
Command-line access to the legal engine.

Usage:
    python -m legal_engine.scripts.legal_cli --analyze contract.txt --language en
    python -m legal_engine.scripts.legal_cli --analyze nda.txt --document-type nda
    python -m legal_engine.scripts.legal_cli --risk contract.txt
    python -m legal_engine.scripts.legal_cli --compile nda --var party_a="Acme Corp" --var party_b="Beta Inc"
    python -m legal_engine.scripts.legal_cli --list --language de

Results are printed as JSON on stdout. Engine errors are printed as an
error response and exit with status 2. Settings are read from the
environment and from a .env file (see EngineSettings.from_env).
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from legal_engine.config import EngineSettings
from legal_engine.engine import create_engine
from legal_engine.services.errors import LegalEngineError
from legal_engine.utils.logging import setup_logging
from legal_engine.utils.request_context import request_scope

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_ENGINE_ERROR = 2


def parse_variables(pairs: List[str]) -> Dict[str, str]:
    """Turn repeated key=value arguments into a variable map."""
    variables = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected key=value, got {pair!r}")
        variables[key] = value
    return variables


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze legal documents and compile legal templates"
    )
    command = parser.add_mutually_exclusive_group(required=True)
    command.add_argument("--analyze", "-a", metavar="FILE", help="Analyze a document")
    command.add_argument("--risk", "-r", metavar="FILE", help="Risk-factor breakdown of a document")
    command.add_argument("--compile", "-c", metavar="ID", help="Compile a template")
    command.add_argument("--list", "-l", action="store_true", help="List templates")

    parser.add_argument("--language", help="Language code (en, ja, de, fr); detected when omitted")
    parser.add_argument("--document-type", help="Document type for --analyze")
    parser.add_argument(
        "--var", action="append", default=[], metavar="KEY=VALUE",
        help="Template variable for --compile (repeatable)"
    )
    parser.add_argument("--env-file", type=Path, default=None, help="Path to a .env file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv(args.env_file)
    try:
        settings = EngineSettings.from_env()
    except ValidationError as e:
        parser.error(f"Invalid LEGAL_ENGINE_* setting: {e}")
    setup_logging(log_level=settings.log_level, json_format=settings.log_json)

    try:
        variables = parse_variables(args.var)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    engine = create_engine(settings)

    with request_scope():
        try:
            if args.analyze:
                document = Path(args.analyze).read_bytes()
                result = engine.analyze(document, args.language, args.document_type)
            elif args.risk:
                document = Path(args.risk).read_bytes()
                result = engine.risk_score(document, args.language)
            elif args.compile:
                result = engine.compile(args.compile, variables)
            else:
                result = engine.list_templates(args.language)
        except OSError as e:
            print(f"ERROR: Cannot read document: {e}", file=sys.stderr)
            return EXIT_IO_ERROR
        except LegalEngineError as e:
            print(e.to_response().model_dump_json(indent=2))
            return EXIT_ENGINE_ERROR

    print(result.model_dump_json(indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
