"""mergegate CLI - merge permission checks for release workflows."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from mergegate import __version__
from mergegate.config import resolve_policy_config
from mergegate.git.repository import GitRepository
from mergegate.output import format_error, format_response, publish_response
from mergegate.policy.engine import evaluate
from mergegate.types import ConfigurationError, Decision, EvaluationError, MergeRequest

EXIT_ALLOWED = 0
EXIT_DENIED = 1
EXIT_ERROR = 2

console = Console()

cli = typer.Typer(
    name="mergegate",
    help="Validate whether a branch may be merged into another under a release workflow.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    rendered = format_error(message)
    console.print(Text(rendered, style="bold red"), soft_wrap=True)
    publish_response(rendered)
    raise typer.Exit(EXIT_ERROR)


def _report(decision: Decision, as_json: bool) -> None:
    rendered = format_response(decision)
    if as_json:
        typer.echo(json.dumps(decision.to_dict(), indent=2, sort_keys=True))
    else:
        style = "bold green" if decision.allowed else "bold red"
        console.print(Text(rendered, style=style), soft_wrap=True)
    publish_response(rendered)


@cli.command("check")
def check(
    source: str | None = typer.Option(
        None,
        "--source",
        envvar="GITHUB_HEAD_REF",
        help="Branch being merged (defaults to $GITHUB_HEAD_REF).",
    ),
    target: str | None = typer.Option(
        None,
        "--target",
        envvar="GITHUB_BASE_REF",
        help="Branch being merged into (defaults to $GITHUB_BASE_REF).",
    ),
    workflow: str | None = typer.Option(
        None,
        "--workflow",
        envvar="INPUT_WORKFLOW",
        help='Workflow stages in merge order, space separated (e.g. "testing production").',
    ),
    hotfix_pattern: str | None = typer.Option(
        None,
        "--hotfix-pattern",
        envvar="INPUT_HOTFIX_PATTERN",
        help="Glob for hotfix branches, which may merge anywhere (default: hotfix/*).",
    ),
    feature_pattern: str | None = typer.Option(
        None,
        "--feature-pattern",
        envvar="INPUT_FEATURE_PATTERN",
        help="Glob for feature branches, which may merge into the first stage (default: feature/*).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="YAML policy file providing workflow and patterns.",
    ),
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        envvar="GITHUB_WORKSPACE",
        help="Repository path (defaults to current working directory).",
    ),
    remote: str | None = typer.Option(
        None,
        "--remote",
        help="Remote whose tracking branches are inspected (default: origin).",
    ),
    local: bool = typer.Option(
        False,
        "--local",
        help="Inspect local branches instead of remote-tracking branches.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the decision as JSON.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each check as it runs.",
    ),
) -> None:
    """Decide whether SOURCE may be merged into TARGET.

    Exit status is 0 when allowed, 1 when denied, 2 when the decision could
    not be made.
    """
    _configure_logging(verbose)

    if not source or not target:
        _fail("Either GITHUB_HEAD_REF or GITHUB_BASE_REF are not defined. Cannot continue")

    try:
        policy = resolve_policy_config(
            config_path=config,
            workflow=workflow,
            hotfix_pattern=hotfix_pattern,
            feature_pattern=feature_pattern,
            remote=remote,
            local=local,
        )
    except ConfigurationError as exc:
        _fail(f"Invalid configuration: {exc}")

    repository = GitRepository(repo, remote=policy.remote)
    try:
        decision = evaluate(MergeRequest(source=source, target=target), policy, repository)
    except EvaluationError as exc:
        _fail(f"Unable to evaluate merge of {source} into {target}: {exc}")

    _report(decision, as_json)
    if not decision.allowed:
        raise typer.Exit(EXIT_DENIED)


@cli.command("version")
def version() -> None:
    """Show mergegate version."""
    typer.echo(__version__)


if __name__ == "__main__":

    cli()
