"""
Argument and loading helpers shared by the releasy command line tools.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from releasy.defaults import DEFAULT_MANIFEST_FILE_NAME
from releasy.graph.plan import Plan
from releasy.manifest import Manifest, ManifestFile


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[releasy] %(levelname)s %(message)s",
        force=True,
    )


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--path',
        type=Path,
        default=None,
        help=f'Path to the manifest file (default: ./{DEFAULT_MANIFEST_FILE_NAME})'
    )
    parser.add_argument(
        '--json',
        default=None,
        help='JSON string describing the event. Cannot be combined with other event flags.'
    )
    parser.add_argument(
        '--event',
        default=None,
        help='Type of the event: new-commit-to-dependency, new-commit-to-self, new-release'
    )
    parser.add_argument('--commit-hash', default=None, help='Commit hash carried by the event')
    parser.add_argument('--release-tag', default=None, help='Release tag carried by the event')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')


def manifest_path(path: Optional[Path]) -> Path:
    return path if path is not None else Path.cwd() / DEFAULT_MANIFEST_FILE_NAME


def load_plan(path: Optional[Path]) -> Tuple[Manifest, Plan]:
    """
    Load the manifest, print its warnings and build the plan.

    Raises:
        ManifestFileError: If the manifest cannot be loaded
        MissingDependencyDefinition: If the manifest references an undefined key
    """
    manifest_file = ManifestFile.from_file(manifest_path(path))
    for warning in manifest_file.warnings:
        print(f"WARNING: {warning}", file=sys.stderr)
    manifest = manifest_file.manifest
    return manifest, Plan.try_from_manifest(manifest)
