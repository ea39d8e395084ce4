#!/usr/bin/env python3
"""
main.py — End-to-end graph JSON to PsyLang code generation

This is the command-line entry point of the PsyLang compiler.
It takes the node/edge JSON exported by the visual builder and:
1. Loads it into an immutable snapshot (graph_builder.loader)
2. Optionally lints port compatibility of every wire (--lint)
3. Generates PsyLang code (codegen.backends.CodeGenerator)
4. Optionally writes the dependency graph as GraphML (--graphml)

Usage:
    psylang-compile <graph_json> [-o OUT] [--graphml PATH] [--lint] [--json] [-v]

Examples:
    psylang-compile scale.json                     # writes scale.psy
    psylang-compile scale.json -o - --json         # prints result JSON only
    psylang-compile scale.json --graphml scale.graphml --lint

Exit status is 1 when the graph cannot be read, contains a cycle, or an
output file cannot be written.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import CompilerConfig
from .codegen.backends.CodeGenerator import generate_code
from .diagnostics.diagnostics import Diagnostics, DiagnosticsConfig, null_sink
from .diagnostics.validator import lint_connections
from .graph_builder.GraphDriver import build_dependency_graph
from .graph_builder.loader import load_snapshot
from .model.core import GraphFormatError

logger = logging.getLogger("psylang_compiler")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="psylang-compile",
        description="Compile a PsyLang visual graph (JSON) into PsyLang pseudocode",
    )
    ap.add_argument("graph", type=Path, help="Path to the exported node/edge JSON file")
    ap.add_argument("-o", "--output",
                    help="Where to write the code (default: <graph>.psy, '-' for stdout)")
    ap.add_argument("--graphml", type=Path, help="Also write the dependency graph as GraphML")
    ap.add_argument("--lint", action="store_true",
                    help="Report wires between incompatible port kinds")
    ap.add_argument("--json", action="store_true",
                    help="Print the {code, errors, warnings} result as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap.parse_args(argv)


def _say(args: argparse.Namespace, text: str = ""):
    # --json keeps stdout machine-readable
    if not args.json:
        print(text)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for graph to PsyLang code generation.

    Returns:
        int: process exit status
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    graph_path: Path = args.graph
    if not graph_path.is_file():
        sys.stderr.write(f"Error: File not found: {graph_path}\n")
        return 1

    _say(args, "=" * 70)
    _say(args, "PsyLang Code Generation")
    _say(args, "=" * 70)
    _say(args)

    # Step 1: Load snapshot
    _say(args, "[1/3] Loading graph...")
    _say(args, f"      Input: {graph_path}")
    try:
        snapshot = load_snapshot(graph_path)
    except (OSError, GraphFormatError) as e:
        sys.stderr.write(f"Error: Failed to load graph: {type(e).__name__}: {e}\n")
        return 1
    _say(args, f"      Graph: {len(snapshot.nodes)} nodes, {len(snapshot.edges)} edges")
    _say(args)

    # Step 2: Optional connection lint
    lint_warnings: List[str] = []
    if args.lint:
        _say(args, "[2/3] Checking port compatibility...")
        lint_diag = Diagnostics(DiagnosticsConfig(sink=null_sink))
        bad = lint_connections(snapshot, lint_diag)
        lint_warnings = lint_diag.warnings
        _say(args, f"      Incompatible edges: {bad}")
        _say(args)

    # Step 3: Generate code
    _say(args, "[3/3] Generating PsyLang code...")
    result = generate_code(snapshot, CompilerConfig(diagnostics=DiagnosticsConfig(sink=null_sink)))
    result.warnings = lint_warnings + result.warnings

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        for error in result.errors:
            print(f"      ERROR: {error}")
        for warning in result.warnings:
            print(f"      Warning: {warning}")

    # Written for cyclic graphs too
    if args.graphml:
        try:
            build_dependency_graph(snapshot).to_graphml(args.graphml)
        except OSError as e:
            sys.stderr.write(f"Error: Failed to write GraphML: {e}\n")
            return 1
        _say(args, f"      GraphML: {args.graphml}")

    if not result:
        return 1

    output = args.output or str(graph_path.with_suffix(".psy"))
    if output == "-":
        if not args.json:
            print(result.code)
    else:
        try:
            Path(output).write_text(result.code, encoding="utf-8")
        except OSError as e:
            sys.stderr.write(f"Error: Failed to write output: {e}\n")
            return 1
        _say(args, f"      Output: {output}")
        _say(args, f"      Generated: {len(result.code.splitlines())} lines of PsyLang code")

    _say(args)
    _say(args, "=" * 70)
    _say(args, "[SUCCESS] Code generation completed successfully!")
    _say(args, "=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
