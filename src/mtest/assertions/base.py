"""Base data structures for the assertion system."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AssertionRecord:
    """Outcome of a single assertion issued inside a test body.

    Attributes:
        name: Helper that produced the record (e.g. "expect_equal").
        passed: Whether the checked condition held.
        reason: Diagnostic text. Only set when the assertion failed.
        printable: Whether a failure is echoed in the report. Failures
            marked non-printable still count against their test.
    """

    name: str
    passed: bool
    reason: str | None = None
    printable: bool = True

    @property
    def visible_failure(self) -> bool:
        return not self.passed and self.printable
