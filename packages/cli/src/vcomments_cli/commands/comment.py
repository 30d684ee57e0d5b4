"""comment command — post violations on a pull request and clean up fixed ones."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from vcomments_core.backends.shadow import ShadowBackend
from vcomments_core.creator import create_comments
from vcomments_core.gh.pull_request import GithubPullRequestBackend, get_pull, get_repo
from vcomments_core.models import Violation

console = Console()


def load_violations(path: str) -> list[Violation]:
    """Read a JSON list of already-parsed violations."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise click.UsageError(f"Could not read violations from {path}: {e}")
    if not isinstance(data, list):
        raise click.UsageError(f"{path} must contain a JSON list of violations.")
    try:
        return [Violation.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise click.UsageError(f"Invalid violation in {path}: {e}")


@click.command("comment")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--violations",
    "violations_path",
    required=True,
    help="JSON file with the violations to comment.",
)
@click.option(
    "--template",
    "template_path",
    default=None,
    help="Path to a Mustache comment template. Overrides config file.",
)
@click.option(
    "--max-comment-size",
    type=int,
    default=None,
    help="Maximum length of an accumulated comment. Overrides config file.",
)
@click.option(
    "--keep-old-comments",
    is_flag=True,
    help="Never remove comments whose violations are no longer reported.",
)
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print what would be created and removed without touching GitHub.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log reconciliation details.")
@click.pass_context
def comment_cmd(
    ctx: click.Context,
    repo: str,
    pr_number: int,
    violations_path: str,
    template_path: str | None,
    max_comment_size: int | None,
    keep_old_comments: bool,
    shadow: bool,
    verbose: bool,
):
    """Reconcile violations against the comments on a pull request.

    Creates comments for new violations, and removes comments this tool posted
    earlier for violations that are no longer reported.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub personal access token (or use gh CLI)
    """
    from vcomments_cli.auth import resolve_github_token
    from vcomments_core.config import load_comment_template, load_config

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    logging.getLogger("vcomments_core").setLevel(logging.INFO if verbose else logging.WARNING)

    config_path = ctx.obj.get("config_path", ".vcomments.yml") if ctx.obj else ".vcomments.yml"
    config = load_config(
        config_path,
        cli_overrides={
            "comment_template": template_path,
            "max_comment_size": max_comment_size,
            "keep_old_comments": keep_old_comments or None,
        },
    )

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    violations = load_violations(violations_path)
    try:
        template = load_comment_template(config)
    except FileNotFoundError as e:
        raise click.UsageError(str(e))

    this_repo = get_repo(repo, token=token)
    this_pr = get_pull(this_repo, pr_number)
    backend = GithubPullRequestBackend(this_repo, this_pr, config, template)
    if shadow:
        backend = ShadowBackend(backend)

    summary = create_comments(backend, violations, config.get("max_comment_size"))

    scope = summary.scope
    console.print(
        f"{len(scope.included)} violation(s) in scope, "
        f"{len(scope.excluded_untouched)} on untouched lines, "
        f"{len(scope.excluded_unmatched)} in unchanged files."
    )
    created = summary.created_single_file + summary.created_accumulated
    if shadow:
        console.print(f"[bold]Shadow run complete. Would create {created} comment(s), remove {summary.removed}.[/bold]")
    else:
        console.print(f"[green]Created {created} comment(s), removed {summary.removed}.[/green]")
