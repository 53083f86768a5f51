# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the phasec command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from yachalk import chalk

from phasec.compiler.artifact import serialize
from phasec.compiler.build import CompilerError, build_files, read_source
from phasec.compiler.diagnostics import DiagnosticCollector
from phasec.compiler.emitter import render_assembly
from phasec.compiler.pipeline import CompilationFailure, CompilationResult, compile_source
from phasec.model.tree import SyntaxNode
from phasec.workspace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_TEXT,
    CompilerConfig,
    CompilerConfigError,
    load_compiler_config,
)

# ###############
# Public Interface
# ###############

PHASES = ("tokens", "tree", "symbols", "ir", "optimized", "asm")


def main() -> None:
    """Run the phasec CLI."""
    parser = argparse.ArgumentParser(
        prog="phasec",
        description="phasec: six-phase compiler for a small C-like language",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log phase progress to stderr")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default compiler configuration",
        description=f"Create a {CONFIG_FILE_NAME} file with default options.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )

    # compile subcommand
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a source file and print phase output",
        description="Run every compiler phase on a source file and print the selected output.",
    )
    compile_parser.add_argument("source", help="Path to the source file")
    compile_parser.add_argument(
        "--phase",
        choices=(*PHASES, "all"),
        default="asm",
        help="Phase output to print (default: asm)",
    )
    compile_parser.add_argument("--json", action="store_true", help="Emit the full result as a JSON artifact")
    compile_parser.add_argument("-o", "--output", help="Write output to this file instead of stdout")
    compile_parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Report tokens skipped by the parser and statements without instructions",
    )
    _add_config_argument(compile_parser)

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Report semantic errors",
        description="Run the pipeline and report semantic errors such as redeclared variables.",
    )
    check_parser.add_argument("source", help="Path to the source file")
    _add_config_argument(check_parser)

    # build subcommand
    build_parser = subparsers.add_parser(
        "build",
        help="Compile source files into the output directory",
        description="Write artifact and assembly files, reusing outputs newer than their sources.",
    )
    build_parser.add_argument("sources", nargs="+", help="Paths to the source files")
    _add_config_argument(build_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_config_argument(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--config",
        help=f"Path to a compiler configuration (default: {CONFIG_FILE_NAME} next to the source, if present)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "compile":
        return _cmd_compile(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "build":
        return _cmd_build(args)
    return 0


def _error(message: str) -> None:
    print(chalk.red(f"Error: {message}"), file=sys.stderr)


def _load_config(args: argparse.Namespace, source: Path) -> CompilerConfig:
    """Load the explicit --config file, or the one beside *source* if it exists."""
    if args.config:
        return load_compiler_config(Path(args.config))
    candidate = source.parent / CONFIG_FILE_NAME
    if candidate.exists():
        return load_compiler_config(candidate)
    return CompilerConfig()


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        _error(f"directory '{directory}' does not exist.")
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        _error(f"configuration already exists at '{config_file}'.")
        return 1

    config_file.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
    print(f"Wrote default configuration to '{config_file}'.")
    return 0


def _compile(args: argparse.Namespace, diagnostics: DiagnosticCollector | None = None) -> CompilationResult | None:
    """Read, configure and compile the source named in *args*; None after reporting an error."""
    source = Path(args.source)
    try:
        config = _load_config(args, source)
        text = read_source(source)
    except (CompilerError, CompilerConfigError) as exc:
        _error(str(exc))
        return None

    outcome = compile_source(text, config=config, diagnostics=diagnostics)
    if isinstance(outcome, CompilationFailure):
        _error(outcome.error)
        return None
    return outcome


def _cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile subcommand."""
    diagnostics = DiagnosticCollector() if args.diagnostics else None
    result = _compile(args, diagnostics)
    if result is None:
        return 1

    for message in result.semantic_errors:
        print(chalk.yellow(f"Warning: {message}"), file=sys.stderr)
    if diagnostics is not None:
        for diagnostic in diagnostics.diagnostics:
            location = f"{diagnostic.line}:{diagnostic.column}" if diagnostic.line is not None else "-"
            print(f"Note [{diagnostic.phase}] {location}: {diagnostic.message}", file=sys.stderr)

    if args.json:
        output = serialize(result) + "\n"
    elif args.phase == "all":
        colour = not args.output
        output = "\n".join(_format_phase(result, phase, heading=True, colour=colour) for phase in PHASES)
    else:
        output = _format_phase(result, args.phase)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(output)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    result = _compile(args)
    if result is None:
        return 1

    for message in result.semantic_errors:
        print(chalk.red(message), file=sys.stderr)
    if result.semantic_errors:
        return 1

    print(f"No issues found ({len(result.symbol_table)} symbol(s)).")
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    """Handle the build subcommand."""
    sources = [Path(s).resolve() for s in args.sources]
    try:
        config = _load_config(args, sources[0])
    except CompilerConfigError as exc:
        _error(str(exc))
        return 1

    config_root = Path(args.config).resolve().parent if args.config else sources[0].parent
    output_dir = config_root / config.output_directory

    try:
        outcomes = build_files(sources, output_dir, config)
    except CompilerError as exc:
        _error(str(exc))
        return 1

    for source, outcome in outcomes.items():
        status = "up to date" if outcome.cached else "compiled"
        print(f"  {source.name}: {status} -> {outcome.assembly}")
        for message in outcome.result.semantic_errors:
            print(chalk.yellow(f"Warning: {message}"), file=sys.stderr)
    return 0


# ------------------------------------------------------------------
# Phase formatting
# ------------------------------------------------------------------


def _format_phase(result: CompilationResult, phase: str, heading: bool = False, colour: bool = True) -> str:
    """Render one phase as text; *colour* styles the heading for a terminal."""
    if phase == "tokens":
        lines = [f"{t.line}:{t.column}\t{t.type.value}\t{t.value}" for t in result.tokens]
    elif phase == "tree":
        lines = _format_tree(result.tree)
    elif phase == "symbols":
        lines = [f"{key}\t{entry.kind}\tline {entry.line}" for key, entry in result.symbol_table.items()]
    elif phase == "ir":
        lines = [str(i) for i in result.instructions]
    elif phase == "optimized":
        lines = [str(i) for i in result.optimized_instructions]
    else:
        lines = render_assembly(result.target_sections).splitlines()

    if heading:
        title = f"== {phase} =="
        lines = [chalk.blue(title) if colour else title, *lines]
    return "\n".join(lines) + "\n"


def _format_tree(node: SyntaxNode, depth: int = 0) -> list[str]:
    label = node.kind.value if node.value is None else f"{node.kind.value}: {node.value}"
    lines = ["  " * depth + label]
    for child in node.children:
        lines.extend(_format_tree(child, depth + 1))
    return lines
