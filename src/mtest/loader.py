"""Load test suites from Python files."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

from mtest.cases import Test, TestCase, coerce_case, is_descriptor

if TYPE_CHECKING:
    from mtest.environment import TestEnvironment


def import_suite(path: Path) -> ModuleType:
    """Import a suite file by path.

    The suite's directory is on sys.path while the module executes, so a
    suite can import the code under test that sits next to it.
    """
    if not path.is_file():
        raise FileNotFoundError(f"suite not found: {path}")

    module_name = f"mtest_suite_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ValueError(f"cannot import suite: {path}")
    module = importlib.util.module_from_spec(spec)

    suite_dir = str(path.resolve().parent)
    sys.path.insert(0, suite_dir)
    try:
        spec.loader.exec_module(module)
    finally:
        sys.path.remove(suite_dir)
    return module


def _declared_cases(module: ModuleType, path: Path) -> list[TestCase]:
    tests = getattr(module, "TESTS", None)
    if tests is None:
        raise ValueError(f"{path} does not define TESTS")
    if is_descriptor(tests):
        tests = [tests]
    return [coerce_case(t) for t in tests]


def load_suite(path: Path) -> list[TestCase]:
    """Return the test cases declared by a suite's ``TESTS`` attribute."""
    return _declared_cases(import_suite(path), path)


def register_suite(env: TestEnvironment, path: Path) -> list[Test]:
    """Register every test of a suite file into env.

    The suite either defines ``register(env)``, which registers tests
    itself, or a ``TESTS`` iterable of descriptors.
    """
    module = import_suite(path)
    register = getattr(module, "register", None)
    if callable(register):
        before = len(env.tests)
        register(env)
        registered = list(env.tests[before:])
    elif getattr(module, "TESTS", None) is not None:
        registered = env.register(_declared_cases(module, path))
    else:
        raise ValueError(f"{path} defines neither register(env) nor TESTS")

    env.logger.debug(f"Loaded {len(registered)} test(s) from {path}")
    return registered
