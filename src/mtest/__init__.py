"""Minimal test environment for grading programming assignments."""

from mtest.assertions.base import AssertionRecord
from mtest.cases import Test, TestCase, test_case
from mtest.environment import TestEnvironment
from mtest.metrics import ReportSummary, TestOutcome

__all__ = [
    "AssertionRecord",
    "ReportSummary",
    "Test",
    "TestCase",
    "TestEnvironment",
    "TestOutcome",
    "test_case",
]
