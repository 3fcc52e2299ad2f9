import json
import logging
from pathlib import Path

import click
from rich.logging import RichHandler

from cf_practice import __version__
from cf_practice.config import ConfigStore
from cf_practice.context import CheckContext
from cf_practice.errors import ConfigError, WorkspaceError
from cf_practice.health import Checker, build_checker
from cf_practice.remote import APIClient, StructureVerifier, WebSession
from cf_practice.workspace import Workspace

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _load_config(home: Path | None) -> ConfigStore:
    store = ConfigStore(home)
    try:
        store.init()
    except ConfigError as e:
        # Reported by the Configuration check
        logger.warning("Config init failed: %s", e)
    return store


def _build(store: ConfigStore) -> Checker:
    workspace = Workspace(store.get_workspace_path())

    session = None
    try:
        creds = store.load_credentials()
    except ConfigError as e:
        logger.debug("No web session: %s", e)
    else:
        if creds.has_session_cookies():
            session = WebSession.from_credentials(creds)

    return build_checker(
        store,
        workspace,
        client=APIClient(),
        session=session,
        verifier=StructureVerifier(),
    )


@click.group()
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="CF_HOME",
    default=None,
    help="Directory holding .cf/ and .cf.env (default: home directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx: click.Context, home: Path | None, verbose: bool):
    """Codeforces practice workspace manager."""
    _setup_logging(verbose)
    ctx.obj = {"home": home, "verbose": verbose}


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds before remaining checks are cancelled",
)
@click.pass_obj
def health(obj: dict, as_json: bool, timeout: float):
    """Check system health."""
    from cf_practice.ui import render_report

    store = _load_config(obj["home"])
    report = _build(store).run(CheckContext.with_timeout(timeout))

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        render_report(report, verbose=obj["verbose"])

    raise SystemExit(0 if report.can_proceed else 1)


@main.command()
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds before remaining checks are cancelled",
)
@click.pass_obj
def ready(obj: dict, timeout: float):
    """Exit 0 if nothing blocks the tool, 1 otherwise."""
    store = _load_config(obj["home"])
    ok = _build(store).quick_check(CheckContext.with_timeout(timeout))
    click.echo("ready" if ok else "not ready")
    raise SystemExit(0 if ok else 1)


@main.command()
@click.argument("path", default=".", type=click.Path(file_okay=False, path_type=Path))
@click.option("--name", default="DSA Practice", show_default=True, help="Workspace name")
@click.pass_obj
def init(obj: dict, path: Path, name: str):
    """Initialize a new cf workspace."""
    store = _load_config(obj["home"])
    workspace = Workspace(path)
    if workspace.exists():
        raise click.ClickException(f"workspace already exists at {path}")

    try:
        workspace.init(name, store.get_handle())
    except WorkspaceError as e:
        raise click.ClickException(f"failed to initialize workspace: {e}")

    click.echo(f"Initialized workspace at {path}")


@main.group()
def config():
    """Manage configuration."""
    pass


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(obj: dict, key: str, value: str):
    """Set a configuration value (e.g. cf_handle, difficulty.min)."""
    store = _load_config(obj["home"])
    try:
        store.set(key, value)
    except ConfigError as e:
        raise click.ClickException(str(e))
    click.echo(f"{key} = {value}")


@main.command()
def version():
    """Show version information."""
    click.echo(f"cf {__version__}")


if __name__ == "__main__":
    main()
