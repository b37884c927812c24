import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer

from .config import CONFIG_FILENAME, AppConfig
from .errors import DuscanError
from .models import Mode, TaggedDuResult
from .report import print_results
from .usage import DEFAULT_MAX_INFLIGHT, calculate, default_max_workers


def installed_version() -> str:
    try:
        return version(distribution_name="duscan")
    except PackageNotFoundError:
        return "unknown (package not installed)"


USAGE_MESSAGE: str = """Usage: duscan scan [-s] [-d] [-b] <path>
Summarize disk usage of the set of FILES, recursively for directories.
You MUST specify one of the parameters, -s, -d, or -b
-s      Run in single threaded mode
-d      Run in parallel mode (uses all available processors)
-b      Run in both parallel and single threaded mode.
Runs parallel followed by sequential mode"""

app: typer.Typer = typer.Typer(
    help=f"duscan: summarize disk usage and image files\n\nVersion: {installed_version()}",
)


def print_version(is_version: bool) -> None:
    """
    Callback for the global --version / -V option.

    Prints the installed version of the 'duscan' package and stops
    before any subcommand runs.
    """
    if not is_version:
        return

    typer.echo(installed_version())
    raise typer.Exit()


def select_mode(single: bool, parallel: bool, both: bool) -> Mode:
    if both or (single and parallel):
        return Mode.BOTH
    if single:
        return Mode.SINGLE_THREADED
    if parallel:
        return Mode.MULTI_THREADED

    raise typer.BadParameter("No mode selected. Use one of -s, -d or -b.")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def scan(
    path: str,
    single: Annotated[bool, typer.Option("--single", "-s", help="Run in single threaded mode.")] = False,
    parallel: Annotated[bool, typer.Option("--parallel", "-d", help="Run in parallel mode.")] = False,
    both: Annotated[
        bool, typer.Option("--both", "-b", help="Run parallel followed by single threaded mode.")
    ] = False,
    max_workers: Annotated[int | None, typer.Option()] = None,
    max_inflight: Annotated[int | None, typer.Option()] = None,
    config: Annotated[Path, typer.Option(help="Configuration file.")] = CONFIG_FILENAME,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Summarize disk usage of PATH, recursively for directories."""
    configure_logging(verbose)
    mode: Mode = select_mode(single, parallel, both)

    cfg: AppConfig = AppConfig.load_or_default(config)
    if max_workers is not None:
        cfg.max_workers = max_workers
    if max_inflight is not None:
        cfg.max_inflight = max_inflight

    if cfg.max_workers <= 0 or cfg.max_inflight <= 0:
        raise typer.BadParameter("max_workers and max_inflight must be > 0")

    try:
        results: list[TaggedDuResult] = calculate(
            mode, path, max_workers=cfg.max_workers, max_inflight=cfg.max_inflight
        )
    except DuscanError as e:
        typer.echo(e)
        typer.echo(USAGE_MESSAGE)
        raise typer.Exit(code=1)

    print_results(path, results)


@app.command()
def init(
    max_workers: Annotated[int, typer.Option()] = 0,
    max_inflight: Annotated[int, typer.Option()] = DEFAULT_MAX_INFLIGHT,
    config: Annotated[Path, typer.Option(help="Configuration file.")] = CONFIG_FILENAME,
    force: Annotated[bool, typer.Option()] = False,
) -> None:
    """Write a configuration file with the parallel scan settings."""
    if config.exists() and not force:
        typer.echo("Config file already exists. Use --force to overwrite.")
        raise typer.Exit(code=1)

    cfg: AppConfig = AppConfig(
        max_workers=max_workers if max_workers != 0 else default_max_workers(),
        max_inflight=max_inflight,
    )

    cfg.save(config)
    typer.echo(f"Config written to {config}")


@app.command(name="version")
def version_cmd() -> None:
    """Print the installed version of duscan."""
    print_version(True)


@app.callback()
def main(
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=print_version,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """
    Global options for duscan. All subcommands run after this callback unless
    --version is used.
    """
    return


if __name__ == "__main__":
    app()
