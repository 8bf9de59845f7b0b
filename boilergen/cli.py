"""CLI entrypoints for boilergen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import load_config, load_overrides
from .context import ContextOverrides
from .logging import configure_logging
from .models import CapabilityInfo, Repo
from .orchestrator import Orchestrator
from .registry import default_registry


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else 0
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=default,
        help="Increase log verbosity; repeat for more detail.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=default,
        help="Only report warnings and errors.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boilergen",
        description="Detect repository facts and keep boilerplate files up to date.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_detectors_parser = subparsers.add_parser(
        "list-detectors",
        help="List the available detectors.",
    )
    _add_verbosity_options(list_detectors_parser, suppress_default=True)

    list_actions_parser = subparsers.add_parser(
        "list-actions",
        help="List the available actions.",
    )
    _add_verbosity_options(list_actions_parser, suppress_default=True)

    detect_parser = subparsers.add_parser(
        "detect",
        help="Print the detected context of a repository as YAML.",
    )
    _add_verbosity_options(detect_parser, suppress_default=True)
    _add_path_argument(detect_parser)

    update_parser = subparsers.add_parser(
        "update",
        help="Detect the repository context and regenerate boilerplate files.",
    )
    _add_verbosity_options(update_parser, suppress_default=True)
    _add_path_argument(update_parser)
    update_parser.add_argument(
        "--overrides",
        type=Path,
        default=None,
        help="Override document keyed by owner/name (defaults to the bundled one).",
    )

    return parser


def _format_infos(infos: List[CapabilityInfo]) -> str:
    width = max((len(info.name) for info in infos), default=0)
    lines = []
    for info in infos:
        state = "enabled" if info.default_enabled else "disabled"
        lines.append(f"{info.name:<{width}}  [{state}]  {info.description}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for boilergen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    verbosity = int(getattr(args, "verbose", 0) or 0) - int(getattr(args, "quiet", 0) or 0)
    configure_logging(verbosity=verbosity)

    if args.command == "list-detectors":
        print(_format_infos(default_registry().detector_infos()))
    elif args.command == "list-actions":
        print(_format_infos(default_registry().action_infos()))
    elif args.command == "detect":
        try:
            repo = Repo.at(args.path)
            orchestrator = Orchestrator(overrides=ContextOverrides())
            context = orchestrator.detect(repo, load_config(repo.path))
        except RuntimeError as exc:
            parser.exit(1, f"boilergen detect failed: {exc}\nRun with --verbose for more details.\n")
        sys.stdout.write(context.as_yaml())
    elif args.command == "update":
        try:
            orchestrator = Orchestrator(overrides=load_overrides(args.overrides))
            outcome = orchestrator.run_update(args.path)
        except RuntimeError as exc:
            parser.exit(1, f"boilergen update failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Boilerplate updated for {outcome.identity} at {_relativize(outcome.repo.path)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
