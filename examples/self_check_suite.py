"""Checks that the assertion helpers fail when misused."""

from mtest import test_case


@test_case("Inverted assertions", feedback="An assertion passed when it should not.")
def inverted(env):
    env.expect_throws(KeyError, lambda: {}["missing"])
    env.expect_throws(KeyError, lambda: None, expect_failure=True)
    env.expect_no_throw(lambda: 1 // 0, expect_failure=True)
    env.expect_any_throw(lambda: None, expect_failure=True)


@test_case("Hidden failure", feedback="This test fails without printing its assertion.")
def hidden_failure(env):
    env.expect_equal(1, 2, printable=False)


TESTS = [inverted, hidden_failure]
