"""commitguard CLI — Typer application with check, install, uninstall, and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from commitguard import __version__

app = typer.Typer(
    name="commitguard",
    help="Enforce commit policy on pushed branches and tags.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=debug, show_path=False)],
        force=True,
    )


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from commitguard.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _resolve_git_dir(repo_root: Path) -> Path:
    from commitguard.git.adapter import GitError, get_git_dir

    try:
        return get_git_dir(repo_root)
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .commitguard.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    from_ref: Optional[str] = typer.Option(None, "--from", help="Old commit (range mode)"),
    to_ref: Optional[str] = typer.Option(None, "--to", help="New commit (range mode)"),
    ref: Optional[str] = typer.Option(None, "--ref", help="Full ref name, e.g. refs/heads/main (range mode)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Check pushed ref changes (pre-receive stdin, or --from/--to/--ref) against the commit policy."""
    from commitguard.auth import resolve_user
    from commitguard.checker.engine import CheckError, RefChangeChecker
    from commitguard.config.loader import load_config
    from commitguard.config.schema import ConfigError
    from commitguard.git.adapter import GitCommitSource, GitError, parse_pre_receive
    from commitguard.git.models import ZERO_HASH, RefChange, RefChangeType
    from commitguard.jira.client import build_tracker
    from commitguard.output import json_report, terminal

    _configure_logging(verbose, debug)
    repo_root = _resolve_repo_root()
    git_dir = _resolve_git_dir(repo_root)

    # --- Load config and user ---
    try:
        cfg = load_config(repo_root, config, git_dir)
        user = resolve_user(cfg.user)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    # --- Ref changes ---
    if to_ref:
        if not ref:
            console.print("[bold red]Error:[/bold red] --ref is required with --to")
            raise typer.Exit(code=2)
        ref_changes = [
            RefChange(
                ref_id=ref,
                from_hash=from_ref or ZERO_HASH,
                to_hash=to_ref,
                type=RefChangeType.UPDATE if from_ref else RefChangeType.ADD,
            )
        ]
    else:
        try:
            ref_changes = parse_pre_receive(sys.stdin.read())
        except GitError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc

    logging.getLogger(__name__).info(
        "Checking %d ref change(s) in %s as %s", len(ref_changes), repo_root, user.name
    )

    # --- Run checks ---
    checker = RefChangeChecker(
        GitCommitSource(exclude_existing_refs=to_ref is None),
        build_tracker(cfg.jira),
        user,
    )
    try:
        result = checker.check_ref_changes(repo_root, cfg.checks, ref_changes)
    except CheckError as exc:
        console.print(f"[bold red]Check failed:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Output ---
    if cfg.output.format == "json":
        print(json_report.render(result))
    else:
        terminal.render(result, cfg.output, console=console)

    raise typer.Exit(code=1 if result.blocked else 0)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing pre-receive hook"),
    chain: bool = typer.Option(
        False, "--chain", help="Keep an existing pre-receive hook and run it first"
    ),
) -> None:
    """Install commitguard as a git pre-receive hook."""
    from commitguard.hooks.installer import install_hook

    git_dir = _resolve_git_dir(_resolve_repo_root())
    success, msg = install_hook(git_dir, force=force, chain=chain)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove the commitguard pre-receive hook."""
    from commitguard.hooks.installer import uninstall_hook

    git_dir = _resolve_git_dir(_resolve_repo_root())
    success, msg = uninstall_hook(git_dir)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .commitguard.toml in the repo root."""
    from commitguard.config.defaults import DEFAULT_TOML
    from commitguard.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"commitguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """commitguard — enforce commit policy on pushed refs."""
