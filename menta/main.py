"""menta CLI: answer a GitHub issue with the repository as context."""

import logging
from functools import partial
from pathlib import Path
from typing import Annotated

import typer
from pydantic import SecretStr
from rich import print as rprint
from rich.table import Table

from menta.commands import available_commands
from menta.errors import ConfigurationError, MentaError, UsageError
from menta.log import configure_logging
from menta.models import InvocationParams
from menta.pipeline import Pipeline
from menta.providers.github import GitHubIssue
from menta.providers.openai import build_completion_service
from menta.repository import read_repository
from menta.settings import DEFAULT_CONFIG_PATH, Credentials, MentaConfig, load_config

app = typer.Typer(help="menta: triage a GitHub issue with an LLM and reply as a comment", add_completion=False)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _secret_or(value: str, fallback: SecretStr | None) -> str:
    if value:
        return value
    return fallback.get_secret_value() if fallback else ""


def _validate_params(
    owner: str, repo: str, issue: int, command: str, github_token: str, api_key: str
) -> InvocationParams:
    """Check the required arguments before any I/O happens."""
    missing = [
        flag
        for flag, value in (
            ("--repo", repo),
            ("--owner", owner),
            ("--issue", issue),
            ("--command", command),
            ("--github-token", github_token),
            ("--api-key", api_key),
        )
        if not value
    ]
    if missing or issue < 0:
        raise UsageError(f"Missing or invalid: {', '.join(missing) or '--issue'}")
    return InvocationParams(
        owner=owner,
        repo=repo,
        issue=issue,
        command=command,
        github_token=github_token,
        api_key=api_key,
    )


def _print_commands(config: MentaConfig) -> None:
    table = Table(title="Commands")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for name in available_commands(config):
        table.add_row(name, config.ai.commands[name].description or "—")

    rprint(table)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


@app.command()
def main(
    ctx: typer.Context,
    repo: Annotated[str, typer.Option("--repo", help="Repository name")] = "",
    owner: Annotated[str, typer.Option("--owner", help="Repository owner")] = "",
    issue: Annotated[int, typer.Option("--issue", help="Issue number")] = 0,
    command: Annotated[str, typer.Option("--command", help="Command to be executed by AI")] = "",
    config: Annotated[Path, typer.Option("--config", help="Configuration file")] = DEFAULT_CONFIG_PATH,
    github_token: Annotated[
        str, typer.Option("--github-token", help="GitHub token (falls back to MENTA_GITHUB_TOKEN)")
    ] = "",
    api_key: Annotated[str, typer.Option("--api-key", help="OpenAI API key (falls back to MENTA_API_KEY)")] = "",
    root: Annotated[Path, typer.Option("--root", help="Repository checkout to include in the prompt")] = Path("."),
    list_commands: Annotated[
        bool, typer.Option("--list-commands", help="Show the commands defined in the config file and exit")
    ] = False,
) -> None:
    """Post an AI-generated reply to one issue."""
    logger = configure_logging()

    if list_commands:
        try:
            _print_commands(load_config(config))
        except ConfigurationError as exc:
            logger.critical("%s", exc)
            raise typer.Exit(1)
        return

    creds = Credentials()
    try:
        params = _validate_params(
            owner,
            repo,
            issue,
            command,
            _secret_or(github_token, creds.github_token),
            _secret_or(api_key, creds.api_key),
        )
    except UsageError as exc:
        typer.echo(str(exc), err=True)
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(1)

    try:
        cfg = load_config(config)
        logger.setLevel(logging.DEBUG if cfg.debug else logging.INFO)

        pipeline = Pipeline(
            config=cfg,
            issues=GitHubIssue(params.owner, params.repo, params.issue, params.github_token),
            completion=build_completion_service(cfg, params.api_key),
            files=partial(read_repository, root),
            logger=logger,
        )
        pipeline.run(params.command)
    except MentaError as exc:
        logger.critical("%s: %s", type(exc).__name__, exc)
        raise typer.Exit(1)
