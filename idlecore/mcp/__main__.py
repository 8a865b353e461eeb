"""Serve a catalog to MCP clients over stdio."""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys

from idlecore.cli import load_catalog
from idlecore.errors import ConfigurationError
from idlecore.mcp.server import create_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m idlecore.mcp",
        description="Expose an idle economy catalog as MCP tools.",
    )
    parser.add_argument("catalog", help="skin directory or module defining define_catalog()")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # stdout carries the protocol stream; catalog modules may print while loading
    try:
        with contextlib.redirect_stdout(sys.stderr):
            catalog = load_catalog(args.catalog)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)

    create_server(catalog).run(transport="stdio")


if __name__ == "__main__":
    main()
