"""Command line interface for scaffer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

from . import __version__
from .config import LOCAL_CONFIG_FILENAME, ConfigStore, ScafferConfig, write_config_file
from .errors import ScafferError
from .generator import GenerationPipeline, parse_variable_pairs
from .prompts import ConsolePrompter, Prompter
from .sources import TemplateSourceResolver

DEFAULT_TEMPLATE_DIRECTORY = "templates"


def _parse_key_value_pairs(pairs: Iterable[str]) -> dict[str, str]:
    try:
        return parse_variable_pairs(pairs)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _configure_logging(args: argparse.Namespace) -> None:
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scaffer", description="A scaffolding tool for generating code from templates"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Report every created file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "g", aliases=["generate"], help="generate code from a named or downloaded template"
    )
    generate_parser.add_argument(
        "template",
        nargs="?",
        help="Template name, path, or URL to a template zip package",
    )
    generate_parser.add_argument(
        "-v",
        "--var",
        metavar="NAME=VALUE",
        action="append",
        default=[],
        dest="variables",
        help="Give a value to a template variable",
    )
    generate_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing files without asking",
    )
    generate_parser.add_argument(
        "--dry",
        action="store_true",
        help="Dry run, do not create files",
    )
    generate_parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        default=None,
        help="Directory to generate into (defaults to the current directory)",
    )

    subparsers.add_parser("add", help="add the current directory as a template root in ~/.scaffer.json")
    subparsers.add_parser("list", help="list the available templates")
    subparsers.add_parser("setup", help=f"create a {LOCAL_CONFIG_FILENAME} in the current directory")

    return parser


def _handle_generate(args: argparse.Namespace, prompter: Prompter) -> int:
    values = _parse_key_value_pairs(args.variables)
    resolver = TemplateSourceResolver(ConfigStore.load())
    pipeline = GenerationPipeline(resolver, prompter)
    if args.dry:
        print("DRY RUN - No files will be created")
    report = pipeline.run(
        args.template,
        values,
        destination=args.directory,
        force=args.force,
        dry_run=args.dry,
    )
    print()
    for line in report.summary():
        print(line)
    return 0


def _handle_add(args: argparse.Namespace) -> int:
    config = ConfigStore.load()
    config.add_template_directory(Path.cwd())
    path = config.save_global()
    print(f"Added current directory as template root in {path}")
    return 0


def _handle_list(args: argparse.Namespace) -> int:
    names = ConfigStore.load().list_template_names()
    if not names:
        print("No templates found.", file=sys.stderr)
        return 0
    for name in names:
        print(name)
    return 0


def _handle_setup(args: argparse.Namespace, prompter: Prompter) -> int:
    print("Setting up scaffer configuration...")
    answer = prompter.ask(f"Enter template directories (comma-separated) [{DEFAULT_TEMPLATE_DIRECTORY}]")
    config = ScafferConfig()
    for directory in (answer or DEFAULT_TEMPLATE_DIRECTORY).split(","):
        if directory.strip():
            config.add_directory(directory.strip())

    if prompter.confirm("Do you want to configure template URLs?", default=False):
        while True:
            name = prompter.ask("Template name (empty to finish)").strip()
            if not name:
                break
            config.add_url(name, prompter.ask("Template URL").strip())

    path = write_config_file(Path.cwd() / LOCAL_CONFIG_FILENAME, config)
    print(f"Created {path.name} configuration file")
    return 0


def main(argv: Sequence[str] | None = None, *, prompter: Prompter | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)
    prompter = prompter or ConsolePrompter()

    try:
        if args.command in {"g", "generate"}:
            return _handle_generate(args, prompter)
        if args.command == "add":
            return _handle_add(args)
        if args.command == "list":
            return _handle_list(args)
        if args.command == "setup":
            return _handle_setup(args, prompter)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except ScafferError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
