"""
hostcap — CLI entrypoint.

Usage:
    hostcap --help
    hostcap detect --json
    hostcap service restart sshd
    hostcap package install curl jq
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from hostcap import __version__
from hostcap.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="hostcap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to hostcap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """hostcap — detect and drive a host's init system and package manager."""
    from hostcap.core.config.loader import ConfigError, load_settings

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    ctx.obj["settings"] = settings

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug, verbose, quiet, settings.log_level),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )


def _target(ctx: click.Context):
    """Build the registries and the local connection for a command."""
    from hostcap.adapters.shell.command import LocalConnection
    from hostcap.core.composition import Registries

    if "registries" not in ctx.obj:
        registries = Registries(ctx.obj["settings"])
        ctx.obj["registries"] = registries
        ctx.obj["connection"] = LocalConnection(timeout=registries.probe_timeout)
    return ctx.obj["connection"], ctx.obj["registries"]


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Detect the init system and package manager of this host."""
    from hostcap.core.use_cases.detect import run_detect

    conn, registries = _target(ctx)
    result = run_detect(conn, registries)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    click.secho(f"\n🖥  {result.target}", fg="cyan", bold=True)
    for kind in (result.init_system, result.package_manager):
        if kind is None:
            continue
        if kind.error:
            click.echo(f"   {kind.kind}: ", nl=False)
            click.secho(kind.error, fg="yellow" if kind.unsupported else "red")
            continue
        ext = f"  (+ {', '.join(kind.extensions)})" if kind.extensions else ""
        click.echo(f"   {kind.kind}: ", nl=False)
        click.secho(kind.facility or "?", fg="green", nl=False)
        click.echo(ext)
    click.echo()

    if not result.ok:
        sys.exit(1)


def _parse_env(pairs: tuple[str, ...]) -> dict[str, str]:
    env: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--env")
        env[key] = value
    return env


@cli.command()
@click.argument("action", type=click.Choice(
    ["start", "stop", "restart", "enable", "disable", "status", "path", "reload", "logs", "env"]
))
@click.argument("name", required=False, default="")
@click.option(
    "--lines",
    "-n",
    type=click.IntRange(min=1),
    default=50,
    show_default=True,
    help="Log lines for 'logs'.",
)
@click.option("--env", "env_pairs", multiple=True, help="KEY=VALUE for 'env' (repeatable).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def service(
    ctx: click.Context,
    action: str,
    name: str,
    lines: int,
    env_pairs: tuple[str, ...],
    as_json: bool,
) -> None:
    """Run a service ACTION on NAME via the detected init system."""
    from hostcap.core.use_cases.service import run_service_action

    env = _parse_env(env_pairs)
    conn, registries = _target(ctx)
    result = run_service_action(conn, registries, action, name, lines=lines, env=env)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    if result.running is not None:
        state = "running" if result.running else "not running"
        click.secho(f"{name}: {state}", fg="green" if result.running else "yellow")
    elif result.lines:
        for line in result.lines:
            click.echo(line)
    elif result.output:
        click.echo(result.output)
    elif not quiet:
        note = " (stop + start)" if result.degraded else ""
        click.secho(f"✅ {action} {name}{note} via {result.init_system}", fg="green")


@cli.command()
@click.argument("action", type=click.Choice(["install", "uninstall", "update", "version"]))
@click.argument("packages", nargs=-1)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def package(ctx: click.Context, action: str, packages: tuple[str, ...], as_json: bool) -> None:
    """Run a package ACTION via the detected package manager."""
    from hostcap.core.use_cases.package import run_package_action

    conn, registries = _target(ctx)
    result = run_package_action(conn, registries, action, packages)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if action == "version":
        for pkg, version in result.versions.items():
            click.echo(f"{pkg} {version or '(not installed)'}")
    elif not ctx.obj.get("quiet", False):
        click.secho(f"✅ {action} via {result.package_manager}", fg="green")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
