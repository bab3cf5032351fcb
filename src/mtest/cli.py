from __future__ import annotations

from pathlib import Path

import typer

from mtest.config import ColorMode

app = typer.Typer(name="mtest", help="Grade programming assignments with mtest suites")

_CONFIG_SUFFIXES = {".yaml", ".yml"}


@app.command()
def run(
    target: str = typer.Argument(help="Path to a suite (.py) or grading config (.yaml)"),
    threshold: int | None = typer.Option(
        None,
        "--threshold",
        "-t",
        min=0,
        max=100,
        help="Minimum percentage of passing tests for a zero exit code",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show assertion tallies and debug output"
    ),
    color: ColorMode | None = typer.Option(
        None, "--color", help="Colored output: auto (terminal only), always or never"
    ),
    debug_log: str | None = typer.Option(None, help="Also write debug output to this file"),
):
    """Run test suites and print the graded report."""
    from mtest.config import GradingConfig, SuiteConfig, load_config
    from mtest.environment import TestEnvironment
    from mtest.loader import register_suite
    from mtest.verbose import setup_logger
    import yaml

    target_path = Path(target)
    if not target_path.exists():
        typer.echo(f"Error: file not found: {target}", err=True)
        raise typer.Exit(1)

    try:
        if target_path.suffix in _CONFIG_SUFFIXES:
            grading = load_config(target_path)
        else:
            grading = GradingConfig(suites=[SuiteConfig(path=str(target_path))])
    except (ValueError, yaml.YAMLError) as e:
        typer.echo(f"Error: invalid config {target}: {e}", err=True)
        raise typer.Exit(1)

    if threshold is not None:
        grading.pass_threshold = threshold
    if verbose:
        grading.verbose = True
    if color is not None:
        grading.color = color
    if debug_log is not None:
        grading.debug_log = debug_log

    echo_color = grading.color.as_echo_color()
    logger = setup_logger(
        Path(grading.debug_log) if grading.debug_log else None,
        verbose=grading.verbose,
        logger_name="mtest",
    )

    env = TestEnvironment(logger=logger, color=echo_color)
    for suite in grading.suites:
        try:
            registered = register_suite(env, Path(suite.path))
        except Exception as e:
            typer.echo(
                f"Error: cannot load suite '{suite.label}': {type(e).__name__}: {e}",
                err=True,
            )
            raise typer.Exit(1)
        logger.debug(f"Suite '{suite.label}': {len(registered)} test(s)")

    env.run_all(report=True, verbose=grading.verbose)

    summary = env.summary()
    if summary.percentage < grading.pass_threshold:
        logger.debug(
            f"Score {summary.percentage}% is below threshold {grading.pass_threshold}%"
        )
        raise typer.Exit(1)


_EXAMPLE_CONFIG = """\
suites:
  - path: example_suite.py
    name: example

# Exit with a non-zero status below this percentage
pass_threshold: 100
color: auto
verbose: false
debug_log: ${MTEST_DEBUG_LOG:-}
"""

_EXAMPLE_SUITE = '''\
from mtest import test_case


@test_case("Addition", feedback="Check how your function adds numbers.")
def addition(env):
    env.expect_equal(1 + 1, 2)
    env.expect_true(2 > 1)


@test_case("Division", feedback="Dividing by zero must raise ZeroDivisionError.")
def division(env):
    env.expect_equal(4 / 2, 2)
    env.expect_throws(ZeroDivisionError, lambda: 1 / 0)


TESTS = [addition, division]
'''


@app.command()
def init(
    dir: str = typer.Option("grading", "--dir", help="Directory to initialize"),
):
    """Write an example grading config and suite."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    config_file = project_dir / "grading.yaml"
    if config_file.exists():
        typer.echo(f"grading.yaml already exists in {dir}, skipping.")
        return

    config_file.write_text(_EXAMPLE_CONFIG)
    suite_file = project_dir / "example_suite.py"
    if not suite_file.exists():
        suite_file.write_text(_EXAMPLE_SUITE)

    typer.echo(f"Initialized grading project in {dir}:")
    typer.echo("  grading.yaml      - grading config")
    typer.echo("  example_suite.py  - example test suite")
