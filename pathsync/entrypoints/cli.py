"""pathsync CLI entrypoint.

Command-line interface for managing sync profiles and mirroring files.
"""

from __future__ import annotations

import functools
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from pathsync.domain.config import PathsyncConfig
    from pathsync.domain.entities import Registry, SyncProfile
    from pathsync.ports.registry import RegistryStore

from pathsync.core.errors import PathsyncCliError
from pathsync.core.presentation import PathsyncColors
from pathsync.core.presentation.colors import resolve_color
from pathsync.domain.exceptions import PathsyncDomainError
from pathsync.version import __version__

# Exit status after Ctrl-C, as a shell would report it
EXIT_INTERRUPTED = 130

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    Domain errors become PathsyncCliError with their hint. Click's own
    exceptions and exit requests pass through untouched. Anything else is
    reported as unexpected, with a traceback in verbose mode.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (click.ClickException, click.exceptions.Exit, click.Abort):
                raise
            except PathsyncDomainError as e:
                raise PathsyncCliError(e.message, hint=e.hint) from e
            except Exception as e:
                ctx = click.get_current_context()
                if (ctx.obj or {}).get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise PathsyncCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def _get_config(ctx: click.Context) -> PathsyncConfig:
    """Load configuration once per invocation."""
    from pathsync.adapters.factory import ConfigFactory

    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = ConfigFactory().create_config_provider().load()
    return obj["config"]


def _get_store(ctx: click.Context) -> RegistryStore:
    """Create the registry store honoring --registry, env and config."""
    from pathsync.adapters.factory import RegistryFactory

    config = _get_config(ctx)
    return RegistryFactory(config).create_registry_store(ctx.obj.get("registry"))


def _echo(ctx: click.Context, message: str = "", err: bool = False) -> None:
    """Echo honoring the configured color scheme."""
    color = resolve_color(_get_config(ctx).display.color_scheme)
    click.echo(message, err=err, color=color)


def _info(ctx: click.Context, message: str) -> None:
    """Print a status message to stderr unless --quiet."""
    if not ctx.obj.get("quiet", False):
        _echo(ctx, message, err=True)


def _current_dir() -> str:
    return os.getcwd()


def _absolute_destination(remote: str, cwd: str) -> str:
    """Anchor a plain-path destination at cwd; host:path stays as typed."""
    from pathsync.adapters.transfer.routing import is_remote_descriptor
    from pathsync.core.path_matcher import make_absolute

    if is_remote_descriptor(remote):
        return remote
    return make_absolute(os.path.expanduser(remote), cwd)


def _complete_profile_names(
    ctx: click.Context, param: click.Parameter, incomplete: str
) -> list[str]:
    """Shell completion for existing profile names."""
    from pathsync.adapters.factory import RegistryFactory

    root = ctx.find_root()
    try:
        store = RegistryFactory(_get_config(root)).create_registry_store(
            root.params.get("registry")
        )
        return [name for name in store.load().names if name.startswith(incomplete)]
    except (PathsyncDomainError, OSError):
        return []


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pathsync")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.option(
    "--registry",
    "registry",
    type=click.Path(dir_okay=False),
    default=None,
    help="Registry file to use (default: $PATHSYNC_REGISTRY or the platform data dir).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, registry: str | None) -> None:
    """pathsync - keep ad-hoc file mirrors in sync.

    Without a command, syncs every profile that has a file under the
    current directory.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["registry"] = registry
    _configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        ctx.invoke(sync)


@cli.command()
@click.argument("name", type=str)
@click.pass_context
@handle_cli_errors("new")
def new(ctx: click.Context, name: str) -> None:
    """Create a new, empty sync named NAME."""
    store = _get_store(ctx)
    registry = store.load().create_profile(name)
    store.save(registry)
    _echo(ctx, f"Created sync {PathsyncColors.click_name(name)}")


@cli.command(name="del")
@click.argument("name", type=str, shell_complete=_complete_profile_names)
@click.pass_context
@handle_cli_errors("del")
def delete(ctx: click.Context, name: str) -> None:
    """Delete the sync NAME. Files are kept."""
    store = _get_store(ctx)
    registry = store.load()
    profile = registry.select(name)
    store.save(registry.delete_profile(profile.name))
    _echo(ctx, f"Deleted sync {PathsyncColors.click_name(profile.name)}")


@cli.command()
@click.argument("name", type=str, shell_complete=_complete_profile_names)
@click.pass_context
@handle_cli_errors("show")
def show(ctx: click.Context, name: str) -> None:
    """Display the files of the sync NAME."""
    profile = _get_store(ctx).load().select(name)
    _echo(ctx, f"name: {PathsyncColors.click_name(profile.name)}")
    _echo(ctx, f"entries ({len(profile.entries)}):")
    for entry in profile.entries:
        _echo(
            ctx,
            f"\t{PathsyncColors.click_local(entry.local)} -> "
            f"{PathsyncColors.click_remote(entry.remote)}",
        )


@cli.command()
@click.argument("name", type=str, shell_complete=_complete_profile_names)
@click.argument("local", type=click.Path())
@click.argument("remote", type=str)
@click.pass_context
@handle_cli_errors("add")
def add(ctx: click.Context, name: str, local: str, remote: str) -> None:
    """Add LOCAL -> REMOTE to the sync NAME.

    LOCAL is stored as an absolute path. REMOTE is either host:path (copied
    with scp) or a plain path on this machine, which is stored absolute too.
    """
    from pathsync.core.path_matcher import make_absolute

    store = _get_store(ctx)
    registry = store.load()
    profile = registry.select(name)
    cwd = _current_dir()
    local_path = make_absolute(local, cwd)
    remote = _absolute_destination(remote, cwd)

    store.save(registry.add_entry(profile.name, local_path, remote))

    if not Path(local_path).exists():
        _info(ctx, PathsyncColors.click_warning(f"Warning: {local_path} does not exist yet"))
    _echo(ctx, f"Added to {PathsyncColors.click_name(profile.name)}:")
    _echo(
        ctx,
        f"\t{PathsyncColors.click_local(local_path)} -> {PathsyncColors.click_remote(remote)}",
    )


@cli.command()
@click.argument("name", type=str, shell_complete=_complete_profile_names)
@click.argument("local", type=click.Path())
@click.argument("remote", type=str, required=False, default=None)
@click.pass_context
@handle_cli_errors("rm")
def rm(ctx: click.Context, name: str, local: str, remote: str | None) -> None:
    """Remove entries for LOCAL (and REMOTE, if given) from the sync NAME."""
    from pathsync.core.path_matcher import make_absolute

    store = _get_store(ctx)
    registry = store.load()
    profile = registry.select(name)
    cwd = _current_dir()
    local_path = make_absolute(local, cwd)
    if remote is not None:
        remote = _absolute_destination(remote, cwd)

    updated, removed = registry.remove_entries(profile.name, local_path, remote)
    if not removed:
        raise PathsyncCliError(
            f"No entry for {local_path} in sync '{profile.name}'",
            hint=f"Run 'pathsync show {profile.name}' to list its entries",
        )

    store.save(updated)
    _echo(ctx, f"Removed from {PathsyncColors.click_name(profile.name)}:")
    for entry in removed:
        _echo(
            ctx,
            f"\t{PathsyncColors.click_local(entry.local)} -> "
            f"{PathsyncColors.click_remote(entry.remote)}",
        )


@cli.command()
@click.argument("folder", type=click.Path(file_okay=False), required=False, default=None)
@click.option("--files", "-f", is_flag=True, help="Also list the matching entries.")
@click.pass_context
@handle_cli_errors("ls")
def ls(ctx: click.Context, folder: str | None, files: bool) -> None:
    """List the syncs with files under FOLDER (default: current directory)."""
    from pathsync.core.path_matcher import make_absolute
    from pathsync.core.scope import matching_entries, resolve_scope

    cwd = _current_dir()
    base = make_absolute(folder, cwd) if folder else cwd
    registry = _get_store(ctx).load()
    names = resolve_scope(registry, base)

    if not names:
        _info(ctx, f"Found no sync in {base}")
        return

    for name in names:
        _echo(ctx, PathsyncColors.click_name(name) if files else name)
        if files:
            profile = registry.get(name)
            assert profile is not None
            for entry in matching_entries(profile, base):
                _echo(
                    ctx,
                    f"\t{PathsyncColors.click_local(entry.local)} -> "
                    f"{PathsyncColors.click_remote(entry.remote)}",
                )


def _select_profiles(registry: Registry, names: tuple[str, ...], cwd: str) -> list[SyncProfile]:
    """Pick profiles by name, or by scope when no names are given.

    Raises:
        UnknownProfileError: If a name matches nothing.
        AmbiguousProfileError: If a name prefix matches several profiles.
    """
    from pathsync.core.scope import resolve_scope

    if not names:
        return [registry.get(name) for name in resolve_scope(registry, cwd)]

    selected: list[SyncProfile] = []
    for name in names:
        profile = registry.select(name)
        if profile not in selected:
            selected.append(profile)
    return selected


@cli.command()
@click.argument("names", nargs=-1, type=str, shell_complete=_complete_profile_names)
@click.option(
    "--jobs",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Number of entries transferred in parallel (default: from config).",
)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON.")
@click.pass_context
@handle_cli_errors("sync")
def sync(
    ctx: click.Context, names: tuple[str, ...], jobs: int | None, json_output: bool
) -> None:
    """Sync the given syncs, or every sync in scope of the current directory.

    Exits with status 1 if any entry failed to transfer.
    """
    from pathsync.adapters.factory import TransferFactory
    from pathsync.core.presentation import ReportPresenter
    from pathsync.core.progress import progress_context
    from pathsync.core.sync import SyncOrchestrator

    config = _get_config(ctx)
    cwd = _current_dir()
    registry = _get_store(ctx).load()
    profiles = _select_profiles(registry, names, cwd)

    if not profiles:
        _info(ctx, f"Nothing to sync in {cwd}")
        return

    orchestrator = SyncOrchestrator(
        TransferFactory(config).create_transfer(),
        max_workers=jobs or config.transfer.jobs,
    )
    quiet_mode = ctx.obj.get("quiet", False) or json_output or not config.display.progress
    with progress_context(quiet_mode=quiet_mode) as progress:
        report = orchestrator.run(profiles, progress=progress)

    presenter = ReportPresenter()
    if json_output:
        click.echo(presenter.format_json(report))
    else:
        for line in presenter.render(report):
            _echo(ctx, line)

    if report.cancelled:
        ctx.exit(EXIT_INTERRUPTED)
    if report.failed:
        ctx.exit(1)


@cli.command()
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
def completions(shell: str) -> None:
    """Print the completion script for SHELL.

    Example: pathsync completions bash > ~/.local/share/bash-completion/completions/pathsync
    """
    from click.shell_completion import get_completion_class

    completion_class = get_completion_class(shell)
    assert completion_class is not None
    script = completion_class(cli, {}, "pathsync", "_PATHSYNC_COMPLETE").source()
    click.echo(script)


@cli.group()
def config() -> None:
    """Manage the pathsync configuration file.

    Settings live in ~/.config/pathsync/config.toml. Missing values use
    built-in defaults.
    """
    pass


@config.command(name="path")
def config_path() -> None:
    """Print the config file path, for use in scripts."""
    from pathsync.shared.config_io import get_global_config_path

    click.echo(get_global_config_path())


@config.command(name="show")
@click.pass_context
@handle_cli_errors("config show")
def config_show(ctx: click.Context) -> None:
    """Show the config file location and effective settings."""
    from pathsync.adapters.factory import RegistryFactory
    from pathsync.shared.config_io import get_global_config_path

    path = get_global_config_path()
    status = "exists" if path.exists() else "not created"
    color = "green" if path.exists() else "yellow"
    settings = _get_config(ctx)

    _echo(ctx, f"Config:   {path} ({click.style(status, fg=color)})")
    _echo(ctx, f"Registry: {RegistryFactory(settings).registry_path(ctx.obj.get('registry'))}")
    _echo(ctx, "  [transfer]")
    _echo(ctx, f"    command = {settings.transfer.command}")
    _echo(ctx, f"    options = {' '.join(settings.transfer.options)}")
    _echo(ctx, f"    timeout = {settings.transfer.timeout}")
    _echo(ctx, f"    jobs = {settings.transfer.jobs}")
    _echo(ctx, "  [display]")
    _echo(ctx, f"    color_scheme = {settings.display.color_scheme}")
    _echo(ctx, f"    progress = {settings.display.progress}")


@config.command(name="init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file.")
@handle_cli_errors("config init")
def config_init(force: bool) -> None:
    """Create a commented config file with default settings."""
    from pathsync.shared.config_io import create_default_config_file, get_global_config_path

    path = get_global_config_path()
    if path.exists() and not force:
        raise PathsyncCliError(
            f"Config file already exists: {path}",
            hint="Use 'pathsync config init --force' to overwrite it",
        )
    create_default_config_file(path)
    click.echo(f"Created config at {path}")


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
