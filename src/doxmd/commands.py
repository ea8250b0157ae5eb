from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from . import converter
from .errors import DoxmdError

FALLBACK_MODES = ("drop", "keep")


def _convert_or_fallback(comment: str, fallback: str, reference_style: str) -> Tuple[Optional[str], bool]:
    if fallback not in FALLBACK_MODES:
        raise ValueError(f"Unknown fallback mode: {fallback}")
    try:
        return converter.transform(comment, reference_style=reference_style), True
    except DoxmdError as exc:
        print(f"warning: Problem processing doxygen comment: {comment}\n{exc}", file=sys.stderr)
        if fallback == "keep":
            return comment, False
        return None, False


def process_comment(comment: str, fallback: str = "drop", reference_style: str = "code") -> Optional[str]:
    """Transform one comment for a binding generator.

    A comment that cannot be translated is reported on stderr and replaced by
    ``None`` (fallback "drop") or by its original text (fallback "keep").
    """
    result, _ = _convert_or_fallback(comment, fallback, reference_style)
    return result


@dataclass
class ProcessReport:
    results: List[Optional[str]] = field(default_factory=list)
    failures: int = 0

    @property
    def total(self) -> int:
        return len(self.results)


def process_comments(comments: Iterable[str], fallback: str = "drop", reference_style: str = "code") -> ProcessReport:
    report = ProcessReport()
    for comment in comments:
        result, ok = _convert_or_fallback(comment, fallback, reference_style)
        if not ok:
            report.failures += 1
        report.results.append(result)
    return report


def _read_inputs(input_paths: List[Path]) -> List[str]:
    if not input_paths:
        return [sys.stdin.read()]
    return [path.read_text(encoding="utf-8") for path in input_paths]


def run_transform(
    input_paths,
    output_path: Path | None = None,
    fallback: str = "drop",
    reference_style: str = "code",
    strict: bool = False,
):
    report = process_comments(
        _read_inputs(list(input_paths or [])),
        fallback=fallback,
        reference_style=reference_style,
    )
    rendered = "\n".join(result for result in report.results if result is not None)
    if rendered and not rendered.endswith("\n"):
        rendered += "\n"
    if output_path is None:
        sys.stdout.write(rendered)
    else:
        output_path.write_text(rendered, encoding="utf-8")

    if report.failures:
        print(f"{report.failures}/{report.total} comments could not be converted", file=sys.stderr)
        if strict:
            return 1
    return 0
