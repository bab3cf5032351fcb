from mtest import test_case


def example_test(env):
    env.expect_equal("Test1", "Test1")


def loops(env):
    # Fails on the diagonal, on purpose
    for i in range(5):
        for j in range(5):
            env.expect_not_equal(i, j)


@test_case("Division", feedback="Dividing by zero must raise ZeroDivisionError.")
def division(env):
    env.expect_equal(2 // 1, 2)
    env.expect_throws(ZeroDivisionError, lambda: 1 // 0)


def register(env):
    env.register(("Example", "Error message", example_test))
    env.register(
        [
            ("Addition", "1 + 1 should be 2", lambda env: env.expect_equal(1 + 1, 2)),
            ("Comparison", lambda env: env.expect_false(9 == 2)),
            division,
        ]
    )
    env.register(
        ("Testing using loops", "We know there are some numbers that are equal :)", loops)
    )
