"""Data models for the meeting training corpus."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import StrEnum


class MeetingType(StrEnum):
    """How a meeting is attended."""

    IN_PERSON = "inPerson"
    VIRTUAL = "virtual"
    HYBRID = "hybrid"


class Organization(StrEnum):
    """The fellowship a meeting belongs to."""

    RECOGNIZED = "recognizedFellowship"
    UNKNOWN = "unknown"


class TagLabel(StrEnum):
    """Semantic labels attached to tokens for sequence-tagging training."""

    MEETING_NAME = "meetingName"
    MEETING_TYPE = "meetingType"
    WEEKDAY = "weekday"
    START_TIME = "startTime"
    DURATION = "duration"
    TIME_ZONE = "timeZone"
    ADDRESS = "address"
    FORMAT = "format"


@dataclass(frozen=True)
class MeetingFormat:
    """A meeting format code, e.g. ``O`` / ``Open``."""

    name: str
    description: str = ""
    key: str = ""


@dataclass(frozen=True)
class MeetingRecord:
    """One meeting entry from the directory service."""

    id: int
    name: str
    meeting_type: MeetingType
    organization: Organization
    weekday: int  # 1 = Sunday
    start_time: time
    duration: int  # seconds
    time_zone: str
    address: str = ""
    location_info: str | None = None
    coordinates: tuple[float, float] | None = None
    virtual_url: str | None = None
    virtual_phone_number: str | None = None
    virtual_info: str | None = None
    comments: str | None = None
    formats: tuple[MeetingFormat, ...] = ()


@dataclass
class TrainingExample:
    """Narrative description plus aligned token/label sequences for one record."""

    description: str
    tokens: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)

    def tag(self, token: str, label: TagLabel) -> None:
        """Append one aligned (token, label) pair."""
        self.tokens.append(token)
        self.labels.append(label.value)
