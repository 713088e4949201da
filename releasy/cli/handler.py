#!/usr/bin/env python3
"""
releasy-handler - react to an event received by the current repo.

    releasy-handler --event new-commit-to-dependency \
        --repo-name fuels-rs --repo-owner FuelLabs --commit-hash 337d0ea

    releasy-handler --json '{"event_type": "new-commit-to-self", "client_payload": {...}}'
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from releasy.cli.common import add_common_arguments, configure_logging, load_plan
from releasy.config import ReleasyConfig
from releasy.errors import ReleasyError
from releasy.event import event_from_cli
from releasy.git import GitAutomation, GitIdentity
from releasy.handle import EventHandler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='releasy-handler',
        description='Handle a repository dispatch event in the current repo',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    add_common_arguments(parser)
    parser.add_argument('--repo-name', default=None, help='Name of the repo that created the event')
    parser.add_argument('--repo-owner', default=None, help='Owner of the repo that created the event')
    parser.add_argument(
        '--workdir',
        type=Path,
        default=Path('.'),
        help='Local clone of the current repo (default: current directory)'
    )
    return parser


def main(argv: Optional[List[str]] = None, git: Optional[GitAutomation] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        event = event_from_cli(
            json_str=args.json,
            event=args.event,
            repo_name=args.repo_name,
            repo_owner=args.repo_owner,
            commit_hash=args.commit_hash,
            release_tag=args.release_tag,
        )
        manifest, plan = load_plan(args.path)

        if git is None:
            config = ReleasyConfig.from_env()
            git = GitAutomation(
                workdir=args.workdir,
                identity=GitIdentity.from_config(config),
                base_branch=config.base_branch,
            )

        result = EventHandler(plan, manifest.current_repo, git).handle(event)
        for branch in result.updated_branches:
            print(f"Updated {branch}")
        for branch in result.rebased_branches:
            print(f"Rebased {branch}")
    except (ReleasyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
