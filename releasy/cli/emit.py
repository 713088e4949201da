#!/usr/bin/env python3
"""
releasy-emit - send an event to every repo depending on the current repo.

Event details can be provided via flags:

    releasy-emit --event new-commit-to-dependency --commit-hash 337d0ea

Or a JSON can be used to describe the event, which is more useful for CI:

    releasy-emit --json '{"event_type": "new-release", "client_payload": {...}}'

The current repo and its dependents come from the manifest
(`repo-plan.toml` in the current directory unless --path is given).
"""
import argparse
import sys
from typing import List, Optional

from releasy.cli.common import add_common_arguments, configure_logging, load_plan
from releasy.config import ReleasyConfig
from releasy.dispatch import Dispatcher
from releasy.errors import ReleasyError
from releasy.event import event_from_cli


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='releasy-emit',
        description='Send a repository dispatch event to every dependent of the current repo',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    add_common_arguments(parser)
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the target repos without sending anything'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        manifest, plan = load_plan(args.path)
        current_repo = manifest.current_repo

        if args.json is not None:
            event = event_from_cli(
                json_str=args.json,
                event=args.event,
                commit_hash=args.commit_hash,
                release_tag=args.release_tag,
            )
        else:
            event = event_from_cli(
                event=args.event,
                repo_name=current_repo.name,
                repo_owner=current_repo.owner,
                commit_hash=args.commit_hash,
                release_tag=args.release_tag,
            )

        if args.dry_run:
            for target_repo in plan.neighbors(current_repo):
                print(f"Would send {event.event_type} to {target_repo.slug}")
            return

        if not plan.neighbors(current_repo):
            print(f"No repos depend on {current_repo.slug}, nothing to send")
            return

        dispatcher = Dispatcher(ReleasyConfig.from_env())
        for target_repo in dispatcher.dispatch_to_neighbors(plan, event, current_repo):
            print(f"Sent {event.event_type} to {target_repo.slug}")
    except (ReleasyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
