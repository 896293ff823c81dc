"""Editor configuration from ``REDITOR_*`` environment variables and the CLI."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from typing import Optional, Sequence

ENV_PREFIX = "REDITOR_"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EditorConfig:
    """Settings the host reads once at startup.

    ``strict`` turns contract checks (unreachable actions, cursor invariant)
    into exceptions instead of logged no-ops.
    """

    strict: bool = False
    seed: bool = True
    buffer_name: Optional[str] = None
    log_level: Optional[str] = None
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "EditorConfig":
        return cls(
            strict=_env_flag("STRICT", False),
            seed=_env_flag("SEED", True),
            buffer_name=_env("BUFFER_NAME") or None,
            log_level=_env("LOG_LEVEL") or None,
            log_file=_env("LOG_FILE") or None,
        )

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "EditorConfig":
        base = cls.from_env()
        args = build_parser(base).parse_args(argv)
        return replace(
            base,
            strict=args.strict,
            seed=not args.empty,
            buffer_name=args.name if args.name is not None else base.buffer_name,
            log_level=args.log_level,
            log_file=args.log_file,
        )


def build_parser(defaults: Optional[EditorConfig] = None) -> argparse.ArgumentParser:
    defaults = defaults or EditorConfig()
    parser = argparse.ArgumentParser(
        prog="reditor", description="Run the modal terminal editor."
    )
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Name carried by the initial buffer (the file is not opened)",
    )
    parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=defaults.strict,
        help="Fail fast on dispatch contract violations (default: REDITOR_STRICT)",
    )
    parser.add_argument(
        "--empty",
        action="store_true",
        default=not defaults.seed,
        help="Start with an empty buffer instead of the two-line seed",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        help="Logging level (default: REDITOR_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--log-file",
        default=defaults.log_file,
        help="Write logs to this file (default: REDITOR_LOG_FILE)",
    )
    return parser


__all__ = ["EditorConfig", "build_parser"]
