from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import IO, Any, Callable

from mtest.assertions.base import AssertionRecord
from mtest.cases import Test, TestCase, coerce_case, is_descriptor
from mtest.metrics import ReportSummary, TestOutcome, summarize
from mtest.reporting.console import print_report

ExceptionKind = type[BaseException] | tuple[type[BaseException], ...]


def _kind_name(kind: ExceptionKind) -> str:
    if isinstance(kind, tuple):
        return " or ".join(k.__name__ for k in kind)
    return kind.__name__


def _describe(exc: BaseException) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


def _compare(l: Any, r: Any) -> tuple[bool, str | None]:
    """Evaluate ``l == r``. A comparison that raises is reported, not propagated."""
    try:
        return bool(l == r), None
    except Exception as e:
        reason = f"Cannot compare {type(l).__name__} with {type(r).__name__}"
        return False, f"{reason}\nGot: {_describe(e)}"


def _truth(value: Any) -> tuple[bool, str | None]:
    try:
        return bool(value), None
    except Exception as e:
        reason = f"Cannot convert {type(value).__name__} to bool"
        return False, f"{reason}\nGot: {_describe(e)}"


class TestEnvironment:
    """Registers tests, runs them in order and reports their assertions.

    Each test function receives the environment and issues ``expect_*``
    calls on it. Every call appends one AssertionRecord under the test
    that is currently running. Failures are recorded, never raised.
    """

    __test__ = False

    def __init__(
        self,
        logger: logging.Logger | None = None,
        stream: IO[str] | None = None,
        color: bool | None = None,
    ):
        self.logger = logger or logging.getLogger("mtest")
        self.stream = stream
        self.color = color
        self._tests: list[Test] = []
        self._records: dict[int, list[AssertionRecord]] = {}
        self._next_id = 0
        self._current: Test | None = None

    def __copy__(self):
        raise TypeError("TestEnvironment cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("TestEnvironment cannot be copied")

    def __reduce_ex__(self, protocol):
        raise TypeError("TestEnvironment cannot be pickled")

    @property
    def tests(self) -> tuple[Test, ...]:
        return tuple(self._tests)

    @property
    def current_test(self) -> Test | None:
        return self._current

    def register(self, tests: Any) -> Test | list[Test]:
        """Register one test or a batch of tests.

        A single test is a TestCase or a ``(name, feedback, function)`` /
        ``(name, function)`` tuple. Anything else is iterated as a batch.
        Returns the registered Test, or a list for a batch. A batch with an
        invalid item registers nothing.
        """
        if is_descriptor(tests):
            return self._register_one(coerce_case(tests))
        if isinstance(tests, (str, bytes)) or not isinstance(tests, Iterable):
            raise TypeError(f"Cannot register {type(tests).__name__} as a test")
        cases = [coerce_case(t) for t in tests]
        return [self._register_one(case) for case in cases]

    def _register_one(self, case: TestCase) -> Test:
        test = Test(
            id=self._next_id,
            name=case.name,
            function=case.function,
            feedback=case.feedback,
        )
        self._next_id += 1
        self._tests.append(test)
        self.logger.debug(f"Registered test {test.id} '{test.name}'")
        return test

    def run_all(self, report: bool = True, verbose: bool = False) -> None:
        """Run every registered test once, in registration order.

        Records from a previous run are discarded first. An exception that
        escapes a test body is not handled here: it is logged and re-raised,
        and no report is printed.
        """
        self._records = {}
        tests = list(self._tests)
        self.logger.debug(f"Running {len(tests)} test(s)")

        try:
            for test in tests:
                self._current = test
                self.logger.debug(f"Running test {test.id} '{test.name}'")
                try:
                    test.function(self)
                except Exception as e:
                    self.logger.error(
                        f"Test '{test.name}' raised an unexpected {_describe(e)}"
                    )
                    raise
                records = self._records.get(test.id, [])
                failed = sum(1 for r in records if not r.passed)
                self.logger.debug(
                    f"Test '{test.name}' finished: "
                    f"{len(records) - failed}/{len(records)} assertions passed"
                )
        finally:
            self._current = None

        summary = self.summary()
        self.logger.debug(
            f"Run complete: {summary.passed_count}/{summary.total_count} tests passed "
            f"({summary.percentage}%)"
        )

        if report:
            self.report(verbose)

    def records_for(self, test_id: int) -> tuple[AssertionRecord, ...]:
        return tuple(self._records.get(test_id, ()))

    def outcomes(self) -> list[TestOutcome]:
        return [
            TestOutcome(test=test, records=list(self._records.get(test.id, ())))
            for test in self._tests
        ]

    def summary(self) -> ReportSummary:
        return summarize(self.outcomes())

    def report(self, verbose: bool = False) -> None:
        """Print the report for the last run. Does not modify any state."""
        print_report(
            self.outcomes(), verbose=verbose, file=self.stream, color=self.color
        )

    def _insert_record(self, record: AssertionRecord) -> None:
        if self._current is None:
            raise RuntimeError(
                f"{record.name} called outside of a running test; "
                "assertions must be issued from a test function during run_all()"
            )
        self._records.setdefault(self._current.id, []).append(record)

    def _expect(
        self, name: str, passed: bool, reason: Callable[[], str], printable: bool
    ) -> bool:
        record = AssertionRecord(
            name=name,
            passed=passed,
            reason=None if passed else reason(),
            printable=printable,
        )
        self._insert_record(record)
        return passed

    # --- value assertions ---

    def expect_equal(
        self, l: Any, r: Any, printable: bool = True, message: str | None = None
    ) -> bool:
        """Record whether ``l == r``. ``r`` is the expected value."""
        equal, error = _compare(l, r)

        def reason() -> str:
            text = error or f"Expected: {r!r}\nGot: {l!r}"
            if message:
                text += f"\nMessage: {message}"
            return text

        passed = error is None and equal
        return self._expect("expect_equal", passed, reason, printable)

    def expect_not_equal(
        self, l: Any, r: Any, printable: bool = True, message: str | None = None
    ) -> bool:
        equal, error = _compare(l, r)

        def reason() -> str:
            text = error or f"Expected a value other than: {r!r}\nGot: {l!r}"
            if message:
                text += f"\nMessage: {message}"
            return text

        passed = error is None and not equal
        return self._expect("expect_not_equal", passed, reason, printable)

    def expect_true(self, value: Any, printable: bool = True) -> bool:
        truth, error = _truth(value)
        return self._expect(
            "expect_true",
            error is None and truth,
            lambda: error or f"Expected: True\nGot: {value!r}",
            printable,
        )

    def expect_false(self, value: Any, printable: bool = True) -> bool:
        truth, error = _truth(value)
        return self._expect(
            "expect_false",
            error is None and not truth,
            lambda: error or f"Expected: False\nGot: {value!r}",
            printable,
        )

    # --- exception assertions ---
    #
    # Each helper runs the thunk and classifies its outcome. Only Exception
    # subclasses are caught. With expect_failure=True the verdict is
    # inverted, so a misused assertion can itself be asserted.

    def expect_throws(
        self,
        kind: ExceptionKind,
        thunk: Callable[[], Any],
        expect_failure: bool = False,
        printable: bool = True,
    ) -> bool:
        """Record whether thunk raises an exception of the given kind."""
        expected = _kind_name(kind)
        try:
            thunk()
        except Exception as e:
            matched = isinstance(e, kind)
            got = _describe(e)
        else:
            matched = False
            got = "no exception"

        if expect_failure:
            reason = f"Expected {expected} not to be raised\nGot: {got}"
        else:
            reason = f"Expected: {expected}\nGot: {got}"
        return self._expect(
            "expect_throws", matched != expect_failure, lambda: reason, printable
        )

    def expect_no_throw(
        self,
        thunk: Callable[[], Any],
        expect_failure: bool = False,
        printable: bool = True,
    ) -> bool:
        """Record whether thunk completes without raising."""
        try:
            thunk()
        except Exception as e:
            raised = True
            got = _describe(e)
        else:
            raised = False
            got = "no exception"

        if expect_failure:
            reason = f"Expected an exception\nGot: {got}"
        else:
            reason = f"Expected: no exception\nGot: {got}"
        return self._expect(
            "expect_no_throw", raised == expect_failure, lambda: reason, printable
        )

    def expect_any_throw(
        self,
        thunk: Callable[[], Any],
        expect_failure: bool = False,
        printable: bool = True,
    ) -> bool:
        """Record whether thunk raises any exception at all."""
        try:
            thunk()
        except Exception as e:
            raised = True
            got = _describe(e)
        else:
            raised = False
            got = "no exception"

        if expect_failure:
            reason = f"Expected: no exception\nGot: {got}"
        else:
            reason = f"Expected an exception\nGot: {got}"
        return self._expect(
            "expect_any_throw", raised != expect_failure, lambda: reason, printable
        )
