"""Console report: per-test banners, failing records and the aggregate score."""

from __future__ import annotations

from typing import IO

import typer

from mtest.assertions.base import AssertionRecord
from mtest.metrics import TestOutcome, summarize


def _red(text: str) -> str:
    return typer.style(text, fg=typer.colors.RED)


def _green(text: str) -> str:
    return typer.style(text, fg=typer.colors.GREEN)


def format_record(record: AssertionRecord) -> list[str]:
    """Lines for one record. Passing and non-printable records render nothing."""
    if not record.visible_failure:
        return []
    reason = record.reason or "not provided"
    lines = [_red("  [TEST CASE FAILED]")]
    reason_lines = reason.splitlines() or [reason]
    lines.append(_red(f"    Reason: {reason_lines[0]}"))
    lines.extend(_red(f"    {line}") for line in reason_lines[1:])
    return lines


def format_outcome(outcome: TestOutcome, verbose: bool = False) -> list[str]:
    lines = [_green(f"[RUNNING {outcome.test.name}]")]
    for record in outcome.records:
        lines.extend(format_record(record))

    if verbose:
        if outcome.records:
            lines.append(
                f"  ({outcome.passed_count}/{len(outcome.records)} assertions passed)"
            )
        else:
            lines.append("  (no assertions)")
        if outcome.suppressed_count:
            lines.append(
                f"  ({outcome.suppressed_count} expected failure(s) not shown)"
            )

    if outcome.passed:
        lines.append(_green("  [PASSED]"))
    elif outcome.test.feedback:
        lines.append(_red(f"  Feedback: {outcome.test.feedback}"))
    else:
        lines.append(_red("  [FAILED]"))
    return lines


def render_report(outcomes: list[TestOutcome], verbose: bool = False) -> str:
    """Render the full report for a run, ANSI colors included."""
    lines: list[str] = []
    for outcome in outcomes:
        lines.extend(format_outcome(outcome, verbose=verbose))

    summary = summarize(outcomes)
    lines.append("")
    score = f"{summary.percentage}% of tests passed."
    all_passed = summary.total_count > 0 and summary.passed_count == summary.total_count
    lines.append(_green(score) if all_passed else _red(score))
    return "\n".join(lines)


def print_report(
    outcomes: list[TestOutcome],
    verbose: bool = False,
    file: IO[str] | None = None,
    color: bool | None = None,
) -> None:
    """Write the report to file (stdout by default).

    With ``color=None`` ANSI codes are kept only when the stream is a
    terminal; ``True`` and ``False`` force them on or off.
    """
    typer.echo(render_report(outcomes, verbose=verbose), file=file, color=color)
