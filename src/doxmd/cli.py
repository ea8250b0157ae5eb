from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .commands import FALLBACK_MODES, run_transform
from .converter import REFERENCE_STYLES
from .version import __version__


def _handle_common_errors(fn):
    try:
        return fn()
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except Exception as exc:  # pragma: no cover - explicit user-facing fallback path.
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _env_choice(name: str, choices, default: str) -> str:
    value = (os.environ.get(name) or "").strip().lower()
    if value in choices:
        return value
    return default


def build_parser(prog_name=None):
    parser = argparse.ArgumentParser(
        prog=prog_name or os.environ.get("DOXMD_PROG") or (Path(sys.argv[0]).name or "doxmd"),
        description=(
            "Convert doxygen-style documentation comments (@param, \\see, ...) to Markdown. "
            "Each input file is one comment block; stdin is read when no file is given."
        ),
    )
    parser.add_argument("inputs", nargs="*", type=Path, help="Comment files to convert")
    parser.add_argument("-o", "--output", type=Path, help="Output markdown file (default: stdout)")
    parser.add_argument(
        "--fallback",
        choices=FALLBACK_MODES,
        default=_env_choice("DOXMD_FALLBACK", FALLBACK_MODES, "drop"),
        help="What to emit for a comment that fails to convert (default: drop, env DOXMD_FALLBACK)",
    )
    parser.add_argument(
        "--intra-doc-links",
        dest="reference_style",
        action="store_const",
        const="intra-doc",
        default=_env_choice("DOXMD_REFERENCE_STYLE", REFERENCE_STYLES, "code"),
        help="Render @ref/@see targets as [`name`] intra-doc links instead of inline code",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any comment fails to convert",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None, prog_name=None):
    args_list = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser(prog_name=prog_name)
    args = parser.parse_args(args_list)
    return _handle_common_errors(
        lambda: run_transform(
            args.inputs,
            args.output,
            fallback=args.fallback,
            reference_style=args.reference_style,
            strict=args.strict,
        )
    )
