"""CLI for Theme Switcher."""

import logging

import typer

from . import __version__
from .adapters.config_env import load_app_config
from .exceptions import ConfigurationError
from .main import ThemeSwitcher, install_signal_handlers
from .platform_utils import current_desktop

app = typer.Typer(
    help="Switch between a light and a dark desktop theme by time of day.",
    no_args_is_help=False,
)


def version_check(version: bool) -> None:
    """Print the current version of Theme Switcher and exit."""
    if version:
        typer.echo(f"theme-switcher version: {__version__}")
        raise typer.Exit()


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _build_switcher(ctx: typer.Context) -> ThemeSwitcher:
    try:
        app_config = load_app_config()
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)
    _setup_logging(app_config.debug or ctx.obj["verbose"])
    return ThemeSwitcher(app_config)


@app.callback(invoke_without_command=True)
def root(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Log at DEBUG level (same as DEBUG=true)."
    ),
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        help="Print the current version and exit.",
        is_eager=True,
        callback=version_check,
    ),
) -> None:
    """Run the switcher in the foreground when no command is given."""
    ctx.obj = {"verbose": verbose}
    if ctx.invoked_subcommand is None:
        run(ctx)


@app.command()
def run(ctx: typer.Context) -> None:
    """Apply the current theme, then keep checking until interrupted."""
    switcher = _build_switcher(ctx)
    install_signal_handlers(switcher)
    switcher.run()


@app.command()
def switch(ctx: typer.Context) -> None:
    """Check the time once and apply the matching theme."""
    switcher = _build_switcher(ctx)
    outcome = switcher.scheduler.switch_now()
    if outcome is None or not outcome.ok:
        raise typer.Exit(code=1)


@app.command()
def configure(ctx: typer.Context) -> None:
    """Prompt for the light/dark themes and hours, then apply."""
    switcher = _build_switcher(ctx)
    outcome = switcher.scheduler.configure()
    if outcome is None or not outcome.ok:
        raise typer.Exit(code=1)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show the stored schedule and the theme the current hour selects."""
    switcher = _build_switcher(ctx)
    scheduler = switcher.scheduler

    typer.echo(f"Backend:  {switcher.backend.name} (desktop: {current_desktop() or 'unknown'})")
    typer.echo(f"Settings: {switcher.app_config.settings_path}")
    schedule = scheduler.read_schedule()
    if schedule is None:
        typer.echo(f"Not configured (missing: {', '.join(scheduler.missing_fields())})")
        raise typer.Exit(code=1)

    typer.echo(f"Light:    {schedule.light_profile} ({schedule.start_hour}:00-{schedule.end_hour}:00)")
    typer.echo(f"Dark:     {schedule.dark_profile}")
    typer.echo(f"Now:      {scheduler.decide()}")
    current = switcher.backend.current_profile()
    if current is not None:
        typer.echo(f"Active:   {current}")


@app.command()
def profiles(ctx: typer.Context) -> None:
    """List the themes the desktop backend knows about."""
    switcher = _build_switcher(ctx)
    for profile in switcher.backend.list_profiles():
        typer.echo(profile)
