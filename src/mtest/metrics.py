from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any

from mtest.assertions.base import AssertionRecord
from mtest.cases import Test


@dataclass
class TestOutcome:
    """A registered test together with the records it produced."""

    __test__ = False

    test: Test
    records: list[AssertionRecord] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        # A test without assertions counts as passing
        return all(r.passed for r in self.records)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.records if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.records if not r.passed)

    @property
    def suppressed_count(self) -> int:
        return sum(1 for r in self.records if not r.passed and not r.printable)


@dataclass
class ReportSummary:
    """Aggregate score across all tests of a run."""

    passed_count: int
    total_count: int
    percentage: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def compute_percentage(passed: int, total: int) -> int:
    """Ceiling of 100 * passed / total. Zero tests score 0."""
    if total <= 0:
        return 0
    # Integer ceiling, avoids float rounding (e.g. 100 * 7 / 7)
    return -(-100 * passed // total)


def summarize(outcomes: list[TestOutcome]) -> ReportSummary:
    passed = sum(1 for o in outcomes if o.passed)
    total = len(outcomes)
    return ReportSummary(
        passed_count=passed,
        total_count=total,
        percentage=compute_percentage(passed, total),
    )
