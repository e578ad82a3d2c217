"""CLI command implementations."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from ccienv.cli import CliState, app
from ccienv.cli.errors import handle_error

if TYPE_CHECKING:
    from ccienv.engine import ApplyResult, VariablesEngine

Repo = Annotated[
    str,
    typer.Option("--repo", "-r", help="Repository name of the CircleCI project."),
]

Org = Annotated[
    str | None,
    typer.Option("--org", help="Organization name (defaults to the configured one)."),
]

Vcs = Annotated[
    str | None,
    typer.Option("--vcs", help="VCS type of the project slug, e.g. gh or bb (default: gh)."),
]


def _color(ctx: typer.Context) -> bool:
    """Whether the global options allow colored output."""
    return ctx.ensure_object(CliState).color


def _engine(repo: str, org: str | None, vcs: str | None, *, color: bool) -> VariablesEngine:
    """Load config and build an engine bound to the project slug."""
    from ccienv import config as cfg_api
    from ccienv.cli.prompt import TerminalPrompt

    cfg = cfg_api.load()
    return cfg_api.engine(cfg, repo, prompt=TerminalPrompt(color=color), org=org, vcs=vcs)


def _report(result: ApplyResult, *, color: bool) -> None:
    """Print the apply summary for bulk operations."""
    from ccienv.cli.formatting import format_apply_summary

    if result.canceled or not (result.applied or result.failed):
        return
    typer.echo()
    typer.echo(format_apply_summary(result, color=color))


@app.command(name="config")
def config_cmd(ctx: typer.Context) -> None:
    """Configure the API token and organization name."""
    from pydantic import SecretStr

    from ccienv import config as cfg_api
    from ccienv.cli.prompt import TerminalPrompt

    color = _color(ctx)
    prompt = TerminalPrompt(color=color)
    try:
        cfg = cfg_api.load()
        organization = prompt.read_line("Organization name", default=cfg.organization_name)
        token = prompt.read_secret("CircleCI API token")
        updated = cfg.model_copy(
            update={"organization_name": organization, "api_token": SecretStr(token)}
        )
        path = cfg_api.save(updated)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(f"Configuration saved to {path}")


@app.command(name="ls")
def ls_cmd(ctx: typer.Context, repo: Repo, org: Org = None, vcs: Vcs = None) -> None:
    """List environment variables of a project."""
    from ccienv.cli.formatting import format_variables

    color = _color(ctx)
    try:
        variables = _engine(repo, org, vcs, color=color).list_variables()
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(format_variables(variables))


@app.command()
def add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Variable name.")],
    repo: Repo,
    value: Annotated[
        str | None,
        typer.Argument(help="Variable value. Prompted for (hidden) when omitted."),
    ] = None,
    org: Org = None,
    vcs: Vcs = None,
) -> None:
    """Create or update a single environment variable."""
    color = _color(ctx)
    try:
        engine = _engine(repo, org, vcs, color=color)
        if value is None:
            from ccienv.cli.prompt import TerminalPrompt

            value = TerminalPrompt(color=color).read_secret(f"Value for {name}")
        engine.upsert_variable(name, value)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc


@app.command(name="import")
def import_cmd(
    ctx: typer.Context,
    repo: Repo,
    path: Annotated[
        Path | None,
        typer.Argument(help="File to read variables from. Reads stdin when omitted."),
    ] = None,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="Input format: dotenv (default) or json."),
    ] = "dotenv",
    org: Org = None,
    vcs: Vcs = None,
) -> None:
    """Create or update variables in bulk from a JSON or dotenv file."""
    color = _color(ctx)
    try:
        result = _engine(repo, org, vcs, color=color).upsert_variables_from_file(path, fmt)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    _report(result, color=color)


@app.command(name="rm")
def rm_cmd(
    ctx: typer.Context,
    repo: Repo,
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Names of the variables to delete."),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Choose variables to delete from a list."),
    ] = False,
    org: Org = None,
    vcs: Vcs = None,
) -> None:
    """Delete environment variables by name or interactively."""
    from ccienv.engine.errors import ValidationError

    color = _color(ctx)
    if interactive and names:
        exc = ValidationError("variable names and --interactive cannot be used together")
        raise typer.Exit(handle_error(exc, color=color))

    try:
        engine = _engine(repo, org, vcs, color=color)
        if interactive:
            result = engine.delete_variables_interactive()
        else:
            result = engine.delete_variables(names or [])
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    _report(result, color=color)


@app.command()
def project(ctx: typer.Context, repo: Repo, org: Org = None, vcs: Vcs = None) -> None:
    """Show the raw project record as JSON."""
    from ccienv import config as cfg_api

    color = _color(ctx)
    try:
        cfg = cfg_api.load()
        slug = cfg.project_slug(repo, org=org, vcs=vcs)
        data = cfg_api.provider(cfg).projects.get(slug)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(json.dumps(data, indent=2))
