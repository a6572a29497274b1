#!/usr/bin/env python3
"""
Command line entry point for CodeSense.

    python server.py serve [--host HOST] [--port PORT] [--reload]
    python server.py analyze FILE [--indent N]
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn

from app.config import settings, logger
from codesense import AnalysisError, CodeQualityAnalyzer


def serve(args: argparse.Namespace) -> int:
    """Run the API under uvicorn."""
    host = args.host or settings.HOST
    port = args.port or settings.PORT
    logger.info("Starting CodeSense on %s:%d (archive %s)", host, port,
                "enabled" if settings.archive_enabled else "disabled")

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=args.reload or settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


def analyze(args: argparse.Namespace) -> int:
    """Analyze one local file and print the report as JSON."""
    path = Path(args.file)
    try:
        code = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        return 1

    if not code:
        print("No code provided for analysis.", file=sys.stderr)
        return 1

    analyzer = CodeQualityAnalyzer(max_input_length=settings.MAX_CODE_LENGTH)
    try:
        report = analyzer.analyze(code)
    except AnalysisError as exc:
        print(f"Analysis failed: {exc.message}", file=sys.stderr)
        return 1

    print(report.model_dump_json(indent=args.indent))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CodeSense heuristic code quality analyzer")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, help=f"Bind address (default: {settings.HOST})")
    serve_parser.add_argument("--port", type=int, help=f"Port (default: {settings.PORT})")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.set_defaults(handler=serve)

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a source file")
    analyze_parser.add_argument("file", help="Path of the file to analyze")
    analyze_parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    analyze_parser.set_defaults(handler=analyze)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        # bare invocation keeps starting the server
        args = parser.parse_args(["serve"])
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
