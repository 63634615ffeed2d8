"""lint2hub - command line entry point.

Posts lint findings as inline review comments on a GitHub pull request.
"""

import argparse
import sys
from typing import Optional, Sequence, TextIO

from lint2hub import __version__
from lint2hub.config import Settings, settings
from lint2hub.core.deadline import Deadline
from lint2hub.core.exceptions import ConfigurationError, Lint2HubError
from lint2hub.core.logging import configure_logging, get_logger
from lint2hub.services.commenter import (
    Commenter,
    PendingComment,
    compile_record_pattern,
    post_finding,
    process_batch,
)
from lint2hub.services.github import GitHubClient, create_github

logger = get_logger("main")


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    """Build the argument parser; every flag defaults to its LINT2HUB_* setting."""
    parser = argparse.ArgumentParser(
        prog="lint2hub",
        description="Post lint findings as inline comments on a GitHub pull request.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--github-access-token",
        default=defaults.github_access_token,
        help="Access token for GitHub API",
    )
    parser.add_argument(
        "--github-base-url",
        default=defaults.github_base_url,
        help="GitHub API base URL (for GitHub Enterprise)",
    )
    parser.add_argument(
        "--owner",
        default=defaults.owner,
        help="Owner of the GitHub repository (i.e., the username or organization name)",
    )
    parser.add_argument("--repo", default=defaults.repo, help="Name of the GitHub repository")
    parser.add_argument(
        "--pull-request",
        type=int,
        default=defaults.pull_request,
        help="Pull request number",
    )
    parser.add_argument(
        "--sha",
        default=defaults.sha,
        help=(
            "SHA of the commit of this checkout. If this SHA does not match the "
            "latest SHA of the pull request, no comments will be posted"
        ),
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.timeout,
        help="Timeout for the whole run, in seconds",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        default=defaults.batch,
        help="Batch mode: read findings from stdin, one per line",
    )
    parser.add_argument(
        "--pattern",
        default=defaults.pattern,
        help=(
            "Regular expression with named groups 'file', 'line' and 'body' used "
            "to parse batch lines (default: file<TAB>line<TAB>body)"
        ),
    )
    parser.add_argument("--file", default=defaults.file, help="Filename")
    parser.add_argument("--line", type=int, default=defaults.line, help="Line number")
    parser.add_argument("--body", default=defaults.body, help="Body of the comment")
    parser.add_argument("--debug", action="store_true", default=defaults.debug, help="Verbose logging")
    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Check required and mutually exclusive options."""
    for flag, value in (
        ("--github-access-token", args.github_access_token),
        ("--owner", args.owner),
        ("--repo", args.repo),
        ("--pull-request", args.pull_request),
        ("--sha", args.sha),
    ):
        if not value:
            raise ConfigurationError(f"required flag missing: {flag}")

    if args.timeout <= 0:
        raise ConfigurationError("--timeout must be positive")

    single = (("--file", args.file), ("--line", args.line), ("--body", args.body))
    if args.batch:
        for flag, value in single:
            if value not in (None, ""):
                raise ConfigurationError(f"both {flag} and --batch cannot be specified at the same time")
    else:
        if args.pattern:
            raise ConfigurationError("--pattern can only be used with --batch")
        for flag, value in single:
            if value in (None, ""):
                raise ConfigurationError(f"required flag missing: {flag}")


def run(args: argparse.Namespace, stdin: TextIO) -> None:
    """Post the requested comments. Raises Lint2HubError on hard errors."""
    validate_args(args)
    if args.batch and args.pattern:
        # Report a bad pattern before touching the network.
        compile_record_pattern(args.pattern)

    deadline = Deadline(args.timeout)
    github = create_github(
        args.github_access_token,
        base_url=args.github_base_url,
        per_page=settings.per_page,
        timeout=args.timeout,
    )
    client = GitHubClient(
        github,
        owner=args.owner,
        repo=args.repo,
        pr_number=args.pull_request,
        deadline=deadline,
        per_page=settings.per_page,
    )
    commenter = Commenter(client, sha=args.sha)
    logger.info(f"Commenting on {args.owner}/{args.repo}#{args.pull_request} at {args.sha}")

    if args.batch:
        process_batch(commenter, stdin, pattern=args.pattern)
    else:
        pending = PendingComment(file=args.file, line=args.line, body=args.body)
        post_finding(commenter, pending)


def main(argv: Optional[Sequence[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """Run the command line tool and return the process exit status."""
    args = build_parser(settings).parse_args(argv)
    configure_logging(debug=args.debug)

    try:
        run(args, stdin if stdin is not None else sys.stdin)
    except Lint2HubError as e:
        logger.error(e.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
