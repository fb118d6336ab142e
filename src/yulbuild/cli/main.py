# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the yulbuild command-line interface."""

import argparse
import sys
from pathlib import Path

from yachalk import chalk

from yulbuild.compiler.backend import BuildProvider, find_solc, fixed_path_provider
from yulbuild.compiler.build import compile_project
from yulbuild.workspace.config import CONFIG_FILENAME, ConfigError, default_config_text, load_config
from yulbuild.workspace.store import DirectoryArtifactSink

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the yulbuild CLI."""
    parser = argparse.ArgumentParser(
        prog="yulbuild",
        description="yulbuild: compile Yul and Yul+ contracts into artifacts",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Create a project configuration",
        description=f"Write a default {CONFIG_FILENAME} into a project directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Project directory (default: current directory)",
    )
    init_parser.add_argument(
        "--solc-version",
        default=_DEFAULT_SOLC_VERSION,
        help=f"solc version to configure (default: {_DEFAULT_SOLC_VERSION})",
    )

    # compile subcommand
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile all .yul and .yulp sources",
        description="Compile every Yul and Yul+ source of the project into artifacts.",
    )
    compile_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Project directory (default: current directory)",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_DEFAULT_SOLC_VERSION = "0.8.17"


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "compile":
        return _cmd_compile(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILENAME
    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(default_config_text(args.solc_version), encoding="utf-8")
    (directory / "contracts").mkdir(exist_ok=True)
    print(f"Initialized yulbuild project at '{config_file}'.")
    return 0


def _cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILENAME
    if not config_file.exists():
        print(
            f"Error: no {CONFIG_FILENAME} found at '{directory}'. Run 'yulbuild init' to create one.",
            file=sys.stderr,
        )
        return 1

    try:
        config = load_config(config_file)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    provider: BuildProvider = find_solc
    if config.solc_path is not None:
        provider = fixed_path_provider((directory / config.solc_path).resolve())

    sink = DirectoryArtifactSink(directory / config.artifacts)
    report = compile_project(
        root=directory,
        sources_dir=directory / config.sources,
        settings=config.build_settings(),
        sink=sink,
        provider=provider,
    )

    if not report.artifacts and not report.failures:
        print("No .yul or .yulp files found.")
        return 0

    print(chalk.green(f"Compiled {len(report.artifacts)} Yul contract(s)."))
    if report.failures:
        print(chalk.red(f"Failed to compile {len(report.failures)} file(s):"), file=sys.stderr)
        for failure in report.failures:
            print(chalk.red(f"  {failure.source.source_name}"), file=sys.stderr)
        return 1
    return 0
