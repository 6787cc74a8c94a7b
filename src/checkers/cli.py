from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from typing import Any

import typer

app = typer.Typer(name="checkers", help="Run reflective test suites")


def _load_suite(target: str) -> Any:
    """Import ``module:Class`` (or ``path/to/file.py:Class``) and instantiate it."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"suite target must look like 'module:Class', got {target!r}")

    if module_name.endswith(".py"):
        path = Path(module_name).resolve()
        if not path.exists():
            raise ValueError(f"suite file not found: {module_name}")
        # Private name so a suite file like json.py cannot shadow a real module.
        import_name = f"_checkers_suite_{path.stem}"
        spec = importlib.util.spec_from_file_location(import_name, path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[import_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(import_name, None)
            raise ValueError(f"unable to import {module_name}: {e!r}") from e
    else:
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            raise
        except Exception as e:
            raise ValueError(f"unable to import {module_name}: {e!r}") from e

    try:
        suite_cls = getattr(module, attr)
    except AttributeError:
        raise ValueError(f"{module_name} has no attribute {attr!r}") from None
    try:
        return suite_cls()
    except Exception as e:
        raise ValueError(f"unable to create suite {attr}: {e!r}") from e


@app.command()
def run(
    target: str = typer.Argument(help="Suite to run, as module:Class or file.py:Class"),
    config: str | None = typer.Option(None, help="Path to suite YAML config"),
    junit: str | None = typer.Option(None, help="Write a JUnit XML report here"),
    debug_log: str | None = typer.Option(None, help="Append debug logging to this file"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
):
    """Run every Test* method of a suite and report the results."""
    from checkers.config import SuiteConfig, load_config
    from checkers.host import FailNow, T
    from checkers.reporting.junit import write_junit
    from checkers.suite import run_suite
    from checkers.verbose import setup_logger

    try:
        suite_config = load_config(Path(config)) if config else SuiteConfig()
        suite = _load_suite(target)
    except (ValueError, ImportError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger = setup_logger(
        Path(debug_log) if debug_log else None,
        verbose=verbose,
        level=suite_config.log_level,
    )
    logger.debug(f"Running suite {target}")

    t = T(type(suite).__name__)
    try:
        run_suite(t, suite, suite_config)
    except FailNow:
        pass

    for child in t.children:
        status = "FAIL" if child.failed else "PASS"
        typer.echo(f"  {status}  {child.name} ({child.duration:.3f}s)")
    if t.failed:
        typer.echo(t.report())

    junit_path = junit or suite_config.junit_path
    if junit_path:
        path = write_junit(Path(junit_path), t)
        typer.echo(f"JUnit report: {path}")

    passed = sum(1 for child in t.children if not child.failed)
    typer.echo(f"{'FAIL' if t.failed else 'ok'}  {t.name}: {passed}/{len(t.children)} passed")
    if t.failed:
        raise typer.Exit(1)


@app.command("list")
def list_tests(
    target: str = typer.Argument(help="Suite to inspect, as module:Class or file.py:Class"),
    config: str | None = typer.Option(None, help="Path to suite YAML config"),
):
    """List the subtests a suite would run."""
    from checkers.config import SuiteConfig, load_config
    from checkers.suite import find_test_methods

    try:
        suite_config = load_config(Path(config)) if config else SuiteConfig()
        suite = _load_suite(target)
    except (ValueError, ImportError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for method in find_test_methods(suite, suite_config.test_method_pattern):
        typer.echo(method.short_name)


@app.command()
def report(
    junit: str = typer.Argument(help="Path to a JUnit XML report from a previous run"),
):
    """Summarize a JUnit XML report written by `checkers run`."""
    from checkers.reporting.junit import summarize

    path = Path(junit)
    if not path.exists():
        typer.echo(f"Error: report not found: {junit}", err=True)
        raise typer.Exit(1)

    summary = summarize(path)
    typer.echo(f"{summary['tests']} tests, {summary['failures']} failures")
    for name in summary["failed"]:
        typer.echo(f"  FAIL  {name}")
    if summary["failures"]:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
