"""
Manifest loader for releasy.

A manifest describes the repositories in a dependency tree and which of them
is the repository the command runs in. Both TOML (`repo-plan.toml`) and YAML
manifests are supported:

    [current-repo]
    name = "sway"
    owner = "FuelLabs"

    [repo.sway.details]
    name = "sway"
    owner = "FuelLabs"

    [repo.sway]
    dependencies = ["rust-sdk"]

    [repo.rust-sdk.details]
    name = "fuels-rs"
    owner = "FuelLabs"
"""
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from releasy.errors import FailedToParseManifest, MissingManifestFile
from releasy.repo import Repo


logger = logging.getLogger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')

# Known keys per manifest section, used to report unused keys
_TOP_LEVEL_KEYS = {'repo', 'current-repo'}
_ENTRY_KEYS = {'details', 'dependencies'}
_REPO_KEYS = {'name', 'owner'}


class RepoEntry(BaseModel):
    """A repository entry in the manifest: a repo and the keys it depends on."""
    model_config = ConfigDict(frozen=True)

    details: Repo
    dependencies: Optional[List[str]] = None

    def dependency_keys(self) -> List[str]:
        """Return dependency keys in declaration order (empty if none declared)."""
        return list(self.dependencies or [])


class Manifest(BaseModel):
    """Relations between repositories plus the repo this manifest belongs to."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    repo: Dict[str, RepoEntry]
    current_repo: Repo = Field(..., alias='current-repo')


class ManifestFile:
    """Generated `Manifest` and the warnings produced while loading it."""

    def __init__(self, manifest: Manifest, warnings: Optional[List[str]] = None):
        self.manifest = manifest
        self.warnings = list(warnings or [])

    @classmethod
    def from_file(cls, path: Path) -> 'ManifestFile':
        """
        Load a manifest from disk.

        The format is picked from the file suffix: `.yaml`/`.yml` are read as
        YAML, anything else as TOML.

        Args:
            path: Path to the manifest file

        Returns:
            ManifestFile instance

        Raises:
            MissingManifestFile: If the file cannot be read
            FailedToParseManifest: If the content is not valid UTF-8 or not a valid manifest
        """
        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except OSError as e:
            raise MissingManifestFile(str(path), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise FailedToParseManifest(f"{path} is not valid UTF-8: {e}") from e

        fmt = 'yaml' if path.suffix.lower() in YAML_SUFFIXES else 'toml'
        logger.debug(f"Loading {fmt} manifest from {path}")
        return cls.from_str(text, fmt=fmt)

    @classmethod
    def from_str(cls, text: str, fmt: str = 'toml') -> 'ManifestFile':
        """
        Parse manifest text.

        Args:
            text: Manifest content
            fmt: "toml" or "yaml"

        Returns:
            ManifestFile instance

        Raises:
            FailedToParseManifest: If the text cannot be parsed or has the wrong shape
        """
        data = _load_raw(text, fmt)
        try:
            manifest = Manifest.model_validate(data)
        except ValidationError as e:
            raise FailedToParseManifest(str(e)) from e

        warnings = [f"unused manifest key: {key}" for key in _unused_keys(data)]
        for warning in warnings:
            logger.debug(warning)
        return cls(manifest, warnings)


def _load_raw(text: str, fmt: str) -> Dict[str, Any]:
    if fmt == 'toml':
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise FailedToParseManifest(str(e)) from e
    elif fmt == 'yaml':
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise FailedToParseManifest(str(e)) from e
    else:
        raise ValueError(f"Unknown manifest format: {fmt}")

    if not isinstance(data, dict):
        raise FailedToParseManifest(
            f"expected a mapping at the top level, got {type(data).__name__}"
        )
    return data


def _unused_keys(data: Dict[str, Any]) -> List[str]:
    """Return dotted paths of keys the manifest model does not use."""
    unused = [key for key in data if key not in _TOP_LEVEL_KEYS]

    current = data.get('current-repo')
    if isinstance(current, dict):
        unused += [f"current-repo.{key}" for key in current if key not in _REPO_KEYS]

    for repo_key, entry in (data.get('repo') or {}).items():
        if not isinstance(entry, dict):
            continue
        unused += [f"repo.{repo_key}.{key}" for key in entry if key not in _ENTRY_KEYS]
        details = entry.get('details')
        if isinstance(details, dict):
            unused += [
                f"repo.{repo_key}.details.{key}" for key in details if key not in _REPO_KEYS
            ]

    return unused
