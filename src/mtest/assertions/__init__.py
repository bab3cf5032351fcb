"""Assertion records produced by the environment's expect helpers."""

from mtest.assertions.base import AssertionRecord

__all__ = ["AssertionRecord"]
