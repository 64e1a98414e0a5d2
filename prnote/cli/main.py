"""Main CLI command for generating PR descriptions."""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from prnote import __version__
from prnote.config import ConfigurationError, LLMProvider, build_settings, load_config_file
from prnote.github import GitHubClient, GitHubError, PublishError
from prnote.llm import EmptyGenerationError, LLMError, get_provider
from prnote.logging import configure_logging
from prnote.pipeline import run_pipeline


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"prnote {__version__}")
        raise typer.Exit(0)


def _parse_provider(provider: Optional[str]) -> Optional[LLMProvider]:
    if provider is None:
        return None
    try:
        return LLMProvider(provider.lower())
    except ValueError:
        valid = ", ".join(p.value for p in LLMProvider)
        raise ConfigurationError(f"Invalid provider: {provider} (valid: {valid})")


def main_command(
    owner: Optional[str] = typer.Option(
        None,
        "--owner",
        envvar="INPUT_REPOSITORY_OWNER",
        help="Repository owner",
    ),
    repo: Optional[str] = typer.Option(
        None,
        "--repo",
        envvar="INPUT_REPOSITORY_NAME",
        help="Repository name",
    ),
    pr_number: Optional[str] = typer.Option(
        None,
        "--pr-number",
        envvar="INPUT_PULL_REQUEST_NUMBER",
        help="Pull request number",
    ),
    branch: Optional[str] = typer.Option(
        None,
        "--branch",
        envvar="INPUT_BRANCH_NAME",
        help="Head branch of the pull request (used for ticket detection)",
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        help="LLM provider (openai, anthropic)",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        help="Model name for the provider",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to a config file (default: .prnote/config.yaml if present)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the description instead of updating the pull request",
    ),
    show_prompt: bool = typer.Option(
        False,
        "--show-prompt",
        help="Show the prompt sent to the LLM",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate or update a pull request description with an LLM."""
    load_dotenv()
    configure_logging(verbose=verbose)

    # Configuration is resolved here, once; nothing below reads the environment
    try:
        file_config = load_config_file(config)
        settings = build_settings(
            owner,
            repo,
            pr_number,
            branch,
            environ=os.environ,
            file_config=file_config,
            provider=_parse_provider(provider),
            model=model,
        )
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"Generating PR description for {settings.owner}/{settings.repo}"
        f"#{settings.pr_number} ({settings.branch_name})",
        err=True,
    )

    def _echo_prompt(request) -> None:
        typer.echo("\n[SYSTEM PROMPT]", err=True)
        typer.echo(request.system_prompt, err=True)
        typer.echo("\n[USER PROMPT]", err=True)
        typer.echo(request.prompt, err=True)
        typer.echo("", err=True)

    try:
        llm = get_provider(settings)
        with GitHubClient(settings.github_token, settings.github_api_url, settings.timeout) as client:
            result = run_pipeline(
                settings,
                client,
                llm,
                dry_run=dry_run,
                on_request=_echo_prompt if show_prompt else None,
            )

    except PublishError as e:
        typer.echo(f"Failed to update PR description: {e}", err=True)
        raise typer.Exit(1)
    except GitHubError as e:
        typer.echo(f"GitHub error: {e}", err=True)
        raise typer.Exit(1)
    except EmptyGenerationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)

    if dry_run:
        typer.echo(result.reconciliation.body)
        typer.echo(f"Dry run: description not published ({result.reconciliation.decision.value}).", err=True)
        return

    typer.echo(
        f"PR description updated successfully! ({result.reconciliation.decision.value}, "
        f"{result.llm_result.input_tokens} input / {result.llm_result.output_tokens} output tokens)",
        err=True,
    )
