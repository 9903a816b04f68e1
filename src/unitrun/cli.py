"""Command-line interface: ``unitrun run`` and ``unitrun init``."""

from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="unitrun", help="Run registered unit tests and death tests")

_EXAMPLE_SCRIPT = """\
from unitrun import *


def arithmetic():
    ASSERT(EQ(2, 1 + 1))
    ASSERT(LT(1, 2), "1 should be less than 2")
    END_TEST()


TEST("arithmetic", arithmetic)


@DEATH_TEST("falsy_is_not_true")
def falsy_is_not_true():
    ASSERT(TRUE(0))
    END_TEST()
"""


@app.command()
def run(
    scripts: list[str] | None = typer.Argument(
        None, help="Test scripts that register tests with TEST/DEATH_TEST"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to a unitrun YAML config"
    ),
    junit: str | None = typer.Option(
        None, "--junit", help="Write a JUnit XML report to this path"
    ),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Append debug output to this file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 if any test case failed"
    ),
):
    """Load test scripts, then run every registered test case once."""
    import runpy

    from unitrun.config import RunConfig, load_config
    from unitrun.errors import HarnessError
    from unitrun.host import QuitCode, session
    from unitrun.runner import Runner
    from unitrun.verbose import setup_logger

    run_config = RunConfig()
    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(QuitCode.ERROR)
        try:
            run_config = load_config(config_path)
        except ValueError as e:
            typer.echo(f"Error: invalid config {config}: {e}", err=True)
            raise typer.Exit(QuitCode.ERROR)

    script_paths = [Path(s) for s in [*run_config.scripts, *(scripts or [])]]
    if not script_paths:
        typer.echo("Error: no test scripts given", err=True)
        raise typer.Exit(QuitCode.ERROR)
    for path in script_paths:
        if not path.is_file():
            typer.echo(f"Error: test script not found: {path}", err=True)
            raise typer.Exit(QuitCode.ERROR)

    junit_path = junit or run_config.junit
    debug_path = debug_log or run_config.debug_log
    logger = setup_logger(
        debug_file=Path(debug_path) if debug_path else None,
        verbose=verbose or run_config.verbose,
    )

    with session() as current:
        try:
            for path in script_paths:
                logger.debug(f"Loading test script {path}")
                try:
                    runpy.run_path(str(path), run_name="__main__")
                except HarnessError:
                    raise
                except Exception as e:
                    typer.echo(
                        f"Error: {path} raised while loading: "
                        f"{type(e).__name__}: {e}",
                        err=True,
                    )
                    logger.debug(f"Failed to load {path}", exc_info=True)
                    raise typer.Exit(QuitCode.SCRIPT_ERROR)

            logger.debug(f"Registered {len(current.registry)} test case(s)")
            # A script may have called RUN_ALL_TESTS() itself; run again only
            # if later scripts registered tests that summary does not cover.
            summary = current.summary
            if summary is None or summary.total < len(current.registry):
                summary = Runner(current.registry, logger).run()
        except HarnessError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(QuitCode.ASSERT)

    if junit_path:
        from unitrun.reporting.junit import write_junit

        report_path = write_junit(summary, Path(junit_path))
        typer.echo(f"JUnit report: {report_path}")
    if debug_path and not verbose:
        typer.echo(f"Debug log: {debug_path}")

    if (strict or run_config.strict) and summary.failed:
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(
        ".", "--dir", help="Directory to initialize the test project in"
    ),
):
    """Write an example config and test script."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    config_file = project_dir / "unitrun.yaml"
    if config_file.exists():
        typer.echo(f"unitrun.yaml already exists in {dir}, skipping.")
        return

    config_file.write_text("""\
scripts:
  - tests/example_test.py
junit: out/junit.xml
debug_log: out/debug.log
""")

    tests_dir = project_dir / "tests"
    tests_dir.mkdir(parents=True, exist_ok=True)
    example = tests_dir / "example_test.py"
    if not example.exists():
        example.write_text(_EXAMPLE_SCRIPT)

    typer.echo(f"Initialized test project in {dir}:")
    typer.echo("  unitrun.yaml            - run config")
    typer.echo("  tests/example_test.py   - example test script")
