"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import sys

import typer
from dotenv import load_dotenv
from githubkit.versions.latest.models import Issue
from typer import Argument, Option
from typing_extensions import Annotated

from issue_sync.api import IssueSync
from issue_sync.config import get_settings
from issue_sync.exceptions import IssueSyncError
from issue_sync.synchronize.exceptions import SyncError
from issue_sync.synchronize.models import IssueState, LabelMatchMode, SyncFilter
from issue_sync.synchronize.utils import extract_label_names
from issue_sync.utils.github import split_repository_in_configuration
from issue_sync.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Synchronize GitHub issues between repositories.")


def format_issue_line(issue: Issue) -> str:
    """Format an issue as '#number - title [label] [label]'."""
    labels = " ".join(f"[{name}]" for name in extract_label_names(issue.labels))
    return f"#{issue.number} - {issue.title} {labels}".rstrip()


def format_issue_details(issue: Issue) -> list[str]:
    """Format the extra lines shown for an issue in verbose mode."""
    created_at = issue.created_at.date().isoformat() if issue.created_at else "unknown"
    return [
        f"  State: {issue.state}",
        f"  Created: {created_at}",
        f"  Comments: {issue.comments}",
        f"  URL: {issue.html_url}",
        "",
    ]


@typer_app.command(name="list")
def list_issues_cli(
    repo: Annotated[str, Argument(help="Repository name (owner/repo).")],
    state: Annotated[IssueState, Option("--state", "-s", envvar="STATE", help="Issue state (open, closed, all).")] = IssueState.OPEN,
    labels: Annotated[str, Option("--labels", "-l", envvar="LABELS", help="Filter by labels (comma-separated).")] = "",
    label_match: Annotated[
        LabelMatchMode, Option("--label-match", envvar="LABEL_MATCH", help="Match issues carrying any or all of the labels.")
    ] = LabelMatchMode.ANY,
    verbose: Annotated[bool, Option("--verbose", "-v", help="Show more details.")] = False,
    github_token: Annotated[str | None, Option(envvar="GITHUB_TOKEN", help="GitHub token.", show_default=False)] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """List issues from a GitHub repository."""
    configure_logging(debug)
    try:
        owner, repo_name = split_repository_in_configuration(repo)
        sync_filter = SyncFilter(state=state, labels=labels, label_match=label_match)
        issue_sync = IssueSync.create(github_token=github_token, settings=get_settings())
        issues = asyncio.run(issue_sync.list_issues(owner, repo_name, sync_filter))
    except IssueSyncError as exc:
        typer.echo(str(exc), err=True)
        sys.exit(1)

    if not issues:
        typer.echo("No issues found.")
        return
    typer.echo(f"Found {len(issues)} issues for {owner}/{repo_name}:")
    for issue in issues:
        typer.echo(format_issue_line(issue))
        if verbose:
            for line in format_issue_details(issue):
                typer.echo(line)


@typer_app.command(name="sync")
def sync_issues_cli(
    source: Annotated[str, Argument(envvar="SOURCE_REPO", help="Source repository (owner/repo).")],
    target: Annotated[str, Argument(envvar="TARGET_REPO", help="Target repository (owner/repo).")],
    state: Annotated[IssueState, Option("--state", "-s", envvar="STATE", help="Issue state to sync (open, closed, all).")] = IssueState.OPEN,
    labels: Annotated[str, Option("--labels", "-l", envvar="LABELS", help="Filter issues by labels (comma-separated).")] = "",
    label_match: Annotated[
        LabelMatchMode, Option("--label-match", envvar="LABEL_MATCH", help="Match issues carrying any or all of the labels.")
    ] = LabelMatchMode.ANY,
    sync_comments: Annotated[bool, Option("--sync-comments/--no-sync-comments", envvar="SYNC_COMMENTS", help="Sync issue comments.")] = True,
    skip_failed_comments: Annotated[
        bool, Option(envvar="SKIP_FAILED_COMMENTS", help="Log and skip comments that cannot be copied instead of aborting.")
    ] = False,
    dry_run: Annotated[bool, Option(envvar="DRY_RUN", help="Report what would be created without writing to the target.")] = False,
    github_token: Annotated[str | None, Option(envvar="GITHUB_TOKEN", help="GitHub token.", show_default=False)] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Synchronize issues from a source repository to a target repository."""
    configure_logging(debug)
    try:
        source_owner, source_repo = split_repository_in_configuration(source)
        target_owner, target_repo = split_repository_in_configuration(target)
        sync_filter = SyncFilter(state=state, labels=labels, label_match=label_match)
        issue_sync = IssueSync.create(github_token=github_token, settings=get_settings(), skip_failed_comments=skip_failed_comments)
    except IssueSyncError as exc:
        typer.echo(str(exc), err=True)
        sys.exit(1)

    typer.echo(f"Synchronizing issues from {source_owner}/{source_repo} to {target_owner}/{target_repo}...")
    try:
        result = asyncio.run(
            issue_sync.sync_issues(
                source_owner,
                source_repo,
                target_owner,
                target_repo,
                sync_filter=sync_filter,
                sync_comments=sync_comments,
                dry_run=dry_run,
            )
        )
    except SyncError as exc:
        typer.echo(str(exc), err=True)
        for issue in exc.result.created:
            typer.echo(f"Created issue #{issue.number} before the failure: \"{issue.title}\"", err=True)
        sys.exit(1)

    verb = "Would create" if dry_run else "Created"
    if not result.created:
        typer.echo("No new issues to synchronize.")
    for issue in result.created:
        typer.echo(f"{verb} issue #{issue.number}: \"{issue.title}\"")
    for target_number, failed in result.failed_comments.items():
        typer.echo(f"Skipped {len(failed)} comments that could not be copied to issue #{target_number}", err=True)
    if result.skipped:
        typer.echo(f"\nSkipped {len(result.skipped)} issues (already exist in target repo)")
    summary_verb = "Would synchronize" if dry_run else "Synchronized"
    typer.echo(f"\n{summary_verb} {len(result.created)} issues from {source_owner}/{source_repo} to {target_owner}/{target_repo}")


if __name__ == "__main__":
    typer_app()
