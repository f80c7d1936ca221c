"""CLI entrypoint for cmdletdoc."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import ConfigError, as_mapping, load_config
from .engine import Engine, Options
from .errors import ExitCode
from .logging import configure_logging, get_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdletdoc",
        description="Generate MAML help for cmdlet classes from their XML doc comments.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat warnings as errors.",
    )
    parser.add_argument(
        "--exclude-parameter-sets",
        default=None,
        metavar="NAMES",
        help="Comma-separated parameter set names to leave out of the syntax section.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Help file to write (defaults to <module>.py-Help.xml).",
    )
    parser.add_argument(
        "--doc-comments",
        type=Path,
        default=None,
        help="XML doc comments file (defaults to <module>.xml).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .cmdletdoc.yml file (defaults to the one beside the module).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    parser.add_argument("module_path", type=Path, help="Path to the command module (.py).")
    return parser


def _split_names(value: str | None) -> List[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cmdletdoc."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        config = load_config(args.config or args.module_path)
    except ConfigError as exc:
        parser.exit(int(ExitCode.UNHANDLED_EXCEPTION), f"{exc}\n")
    logger.debug("Loaded configuration: %s", as_mapping(config))

    excluded = _split_names(args.exclude_parameter_sets) or config.exclude_parameter_sets
    options = Options(
        module_path=args.module_path,
        output_path=args.output or config.output,
        doc_comments_path=args.doc_comments or config.doc_comments,
        strict=config.strict if args.strict is None else bool(args.strict),
        excluded_parameter_sets=frozenset(excluded),
    )

    exit_code = Engine().generate_help(options)
    if exit_code != ExitCode.SUCCESS:
        parser.exit(
            int(exit_code),
            f"cmdletdoc failed ({exit_code.name}).\nRun with --verbose for more details.\n",
        )
    print(f"Help written to {_relativize(options.output_path)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
