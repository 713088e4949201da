"""
Events exchanged between repositories through GitHub repository dispatch.

The serialized form is the body of a `repository_dispatch` request:

    {"event_type": "new-commit-to-dependency",
     "client_payload": {"repo": {"name": "fuels-rs", "owner": "FuelLabs"},
                        "details": {"commit_hash": "...", "release_tag": null}}}
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from releasy.errors import InvalidEventInput, InvalidEventType
from releasy.repo import Repo


class EventType(str, Enum):
    """Closed set of event kinds."""
    NEW_COMMIT_TO_DEPENDENCY = "new-commit-to-dependency"
    NEW_COMMIT_TO_SELF = "new-commit-to-self"
    NEW_RELEASE = "new-release"

    @classmethod
    def parse(cls, value: str) -> 'EventType':
        """
        Convert a string to an EventType.

        Raises:
            InvalidEventType: If `value` is not a known event type
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidEventType(value, [e.value for e in cls]) from None

    def __str__(self) -> str:
        return self.value


class EventDetails(BaseModel):
    """What happened in the source repo."""
    model_config = ConfigDict(frozen=True)

    commit_hash: Optional[str] = None
    release_tag: Optional[str] = None


class ClientPayload(BaseModel):
    """Repo that produced the event and its details."""
    model_config = ConfigDict(frozen=True)

    repo: Repo
    details: EventDetails = EventDetails()


class Event(BaseModel):
    """An event to be emitted or handled."""
    model_config = ConfigDict(frozen=True)

    event_type: EventType
    client_payload: ClientPayload

    @property
    def repo(self) -> Repo:
        return self.client_payload.repo

    @property
    def details(self) -> EventDetails:
        return self.client_payload.details

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, json_str: str) -> 'Event':
        """
        Parse an event from its JSON form.

        Raises:
            InvalidEventInput: If the JSON is malformed or has the wrong shape
        """
        try:
            return cls.model_validate_json(json_str)
        except ValidationError as e:
            raise InvalidEventInput(f"failed to parse event JSON: {e}") from e

    @classmethod
    def build(
        cls,
        event_type: str,
        repo: Repo,
        commit_hash: Optional[str] = None,
        release_tag: Optional[str] = None,
    ) -> 'Event':
        """Build an event from plain values, parsing the event type string."""
        details = EventDetails(commit_hash=commit_hash, release_tag=release_tag)
        return cls(
            event_type=EventType.parse(event_type),
            client_payload=ClientPayload(repo=repo, details=details),
        )


def event_from_cli(
    json_str: Optional[str] = None,
    event: Optional[str] = None,
    repo_name: Optional[str] = None,
    repo_owner: Optional[str] = None,
    commit_hash: Optional[str] = None,
    release_tag: Optional[str] = None,
) -> Event:
    """
    Build an event from command line input.

    Either `json_str` is given on its own, or `event`, `repo_name` and
    `repo_owner` are all given.

    Raises:
        InvalidEventInput: If the input is incomplete or mixes both forms
        InvalidEventType: If `event` is not a known event type
    """
    if json_str is not None:
        others = [event, repo_name, repo_owner, commit_hash, release_tag]
        if any(value is not None for value in others):
            raise InvalidEventInput("--json should be used without any other event parameters")
        return Event.from_json(json_str)

    if event is None:
        raise InvalidEventInput("event should not be empty")
    if repo_name is None:
        raise InvalidEventInput("repo_name should not be empty")
    if repo_owner is None:
        raise InvalidEventInput("repo_owner should not be empty")

    return Event.build(
        event,
        Repo(name=repo_name, owner=repo_owner),
        commit_hash=commit_hash,
        release_tag=release_tag,
    )
