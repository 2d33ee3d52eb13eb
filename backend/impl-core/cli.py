#!/usr/bin/env python3
"""
Generate a concrete implementation of a Java class or interface.

Usage
-----
python cli.py com.example.Shape out/                  # source only
python cli.py -jar com.example.Shape out/shape.jar    # compile + package
python cli.py -sp src/main/java -sp lib-src com.example.Shape out/
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from config import LOG_LEVEL
from implementor import Implementor
from registry import TypeNotFound, TypeRegistry
from synth.errors import ImplerError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="impl-core",
        description="Generate <Name>Impl for a Java class or interface.",
    )
    parser.add_argument("-jar", dest="jar", action="store_true",
                        help="compile the implementation and package it into the given .jar")
    parser.add_argument("-sp", "--source-path", dest="source_path", action="append",
                        help="source root to load types from (repeatable, default: .)")
    parser.add_argument("type_name", help="canonical or binary name of the type to implement")
    parser.add_argument("output", help="output directory, or .jar path with -jar")
    return parser


def _check_output(raw: str) -> Path:
    if not raw.strip() or "\x00" in raw:
        raise ValueError(f"invalid path {raw!r}")
    return Path(raw)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    if not args.type_name.strip():
        print("Expected a non-empty type name", file=sys.stderr)
        return 1
    try:
        output = _check_output(args.output)
    except ValueError as e:
        print(f"Failed to create path for output file: {e}", file=sys.stderr)
        return 1

    try:
        registry = TypeRegistry.from_source_roots(args.source_path or ["."])
    except ValueError as e:
        print(f"Failed to load sources: {e}", file=sys.stderr)
        return 1
    for err in registry.parse_errors:
        print(f"Skipped {err['file']}: {err['error']}", file=sys.stderr)

    try:
        token = registry.resolve(args.type_name)
    except TypeNotFound as e:
        print(f"Failed to implement class given: {e}", file=sys.stderr)
        return 1

    implementor = Implementor()
    try:
        if args.jar:
            result = implementor.implement_jar(token, output)
        else:
            result = implementor.implement(token, output)
    except ImplerError as e:
        print(f"Failed to generate implementation code for class given: {e}", file=sys.stderr)
        return 2

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
