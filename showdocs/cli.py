"""CLI entrypoint for showdocs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config, merge_cli_args
from .correlation import IndexBuildError
from .logging import configure_logging, flush_logging
from .models import RenderMode
from .orchestrator import Orchestrator


def _add_verbose_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Write per-file and per-directory diagnostics to stderr.",
    )


def _add_mode_options(parser: argparse.ArgumentParser) -> None:
    # The last mode flag on the command line wins.
    parser.add_argument(
        "-h",
        "--html",
        dest="mode",
        action="store_const",
        const=RenderMode.HTML.value,
        help="Show descriptions as rendered HTML.",
    )
    parser.add_argument(
        "-t",
        "--text",
        dest="mode",
        action="store_const",
        const=RenderMode.TEXT.value,
        help="Show descriptions as plain preformatted text.",
    )
    parser.add_argument(
        "--mixed",
        dest="mode",
        action="store_const",
        const=RenderMode.MIXED.value,
        help="Show rendered HTML with the source text in a collapsible block (default).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="showdocs",
        description="Show the descriptions in javadoc-generated API documentation.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit.")
    parser.add_argument(
        "input",
        help="Root directory of the generated documentation, or a single page.",
    )
    parser.add_argument(
        "-d",
        "--output-dir",
        help="Directory for the generated pages (required unless set in .showdocs.yml).",
    )
    _add_mode_options(parser)
    _add_verbose_option(parser)
    parser.add_argument(
        "--stylesheet",
        help="File name of the stylesheet linked from every page and copied to the output root.",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .showdocs.yml or the directory containing it (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        help="Also write log output to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for showdocs."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = merge_cli_args(
            load_config(Path(args.config)),
            output_dir=args.output_dir,
            mode=args.mode,
            verbose=bool(args.verbose),
            stylesheet=args.stylesheet,
            log_file=args.log_file,
        )
    except ConfigError as exc:
        parser.error(str(exc))
    if config.output_dir is None:
        parser.error("no output directory specified")

    try:
        configure_logging(verbose=config.verbose, log_file=config.log_file)
    except OSError as exc:
        parser.error(f"cannot open log file: {exc}")

    orchestrator = Orchestrator(config)
    try:
        result = orchestrator.run(args.input)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except IndexBuildError as exc:
        parser.exit(1, f"showdocs failed: {exc}\nRun with --verbose for more details.\n")
    finally:
        flush_logging()

    message = f"Wrote {len(result.written)} pages to {_relativize(result.output_dir)}"
    if result.failures:
        message += f" ({len(result.failures)} failed)"
    print(message)
    flush_logging()


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
