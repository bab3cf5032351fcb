import pytest

from mtest.assertions.base import AssertionRecord
from mtest.cases import Test
from mtest.metrics import TestOutcome, compute_percentage, summarize


def _test(i: int) -> Test:
    return Test(id=i, name=f"t{i}", function=lambda env: None)


def _passing() -> AssertionRecord:
    return AssertionRecord(name="expect_true", passed=True)


def _failing(printable: bool = True) -> AssertionRecord:
    return AssertionRecord(
        name="expect_true", passed=False, reason="boom", printable=printable
    )


@pytest.mark.parametrize(
    "passed, total, expected",
    [(2, 3, 67), (1, 3, 34), (0, 5, 0), (5, 5, 100), (7, 7, 100), (1, 200, 1), (0, 0, 0)],
)
def test_compute_percentage(passed, total, expected):
    assert compute_percentage(passed, total) == expected


def test_outcome_counts():
    outcome = TestOutcome(
        test=_test(0), records=[_passing(), _failing(), _failing(printable=False)]
    )
    assert outcome.passed is False
    assert outcome.passed_count == 1
    assert outcome.failed_count == 2
    assert outcome.suppressed_count == 1


def test_outcome_without_records_passes():
    assert TestOutcome(test=_test(0)).passed is True


def test_summarize():
    outcomes = [
        TestOutcome(test=_test(0), records=[_passing()]),
        TestOutcome(test=_test(1), records=[_passing(), _failing()]),
        TestOutcome(test=_test(2)),
    ]
    summary = summarize(outcomes)
    assert summary.to_dict() == {"passed_count": 2, "total_count": 3, "percentage": 67}


def test_summarize_empty():
    assert summarize([]).to_dict() == {"passed_count": 0, "total_count": 0, "percentage": 0}
