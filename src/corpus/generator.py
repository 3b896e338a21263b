"""Narrative and tag generation: one meeting record -> one training example.

The description is built field by field. Taggable fields also append
``(token, label)`` pairs in the same order as their clauses, so ``tokens`` and
``labels`` always have equal length. Empty optional fields contribute nothing
to either output.
"""

from __future__ import annotations

from src.corpus.formatting import (
    coordinates_valid,
    duration_minutes,
    format_time_12h,
    format_time_24h,
    round_coordinate,
    weekday_name,
    zone_display_name,
)
from src.corpus.models import MeetingRecord, MeetingType, TagLabel, TrainingExample

TYPE_KEYWORDS: dict[MeetingType, str] = {
    MeetingType.IN_PERSON: "local",
    MeetingType.VIRTUAL: "virtual",
    MeetingType.HYBRID: "hybrid",
}


def collapse_lines(text: str) -> str:
    """Join a multi-line block into one comma-separated line."""
    return ", ".join(line.strip() for line in text.splitlines() if line.strip())


def _add_header(example: TrainingExample, record: MeetingRecord) -> None:
    keyword = TYPE_KEYWORDS[record.meeting_type]
    example.description = f'"{record.name}" is a {keyword} {record.organization.value} meeting'
    example.tag(record.name, TagLabel.MEETING_NAME)
    example.tag(keyword, TagLabel.MEETING_TYPE)


def _add_schedule(example: TrainingExample, record: MeetingRecord) -> None:
    weekday = weekday_name(record.weekday)
    time_12h = format_time_12h(record.start_time)
    minutes = str(duration_minutes(record.duration))
    example.description += (
        f", that meets every {weekday}, at {time_12h}, and lasts for {minutes} minutes."
    )
    example.tag(weekday.lower(), TagLabel.WEEKDAY)
    example.tag(time_12h, TagLabel.START_TIME)
    example.tag(format_time_24h(record.start_time), TagLabel.START_TIME)
    example.tag(minutes, TagLabel.DURATION)


def _add_time_zone(example: TrainingExample, record: MeetingRecord) -> None:
    example.tag(record.time_zone, TagLabel.TIME_ZONE)
    zone_name = zone_display_name(record.time_zone)
    if zone_name:
        example.description += f"\nIts time zone is {zone_name}."
        example.tag(zone_name, TagLabel.TIME_ZONE)


def _add_address(example: TrainingExample, record: MeetingRecord) -> None:
    """Add the street address for meetings with an in-person part (in-person or hybrid)."""
    if record.meeting_type is MeetingType.VIRTUAL:
        return
    address = collapse_lines(record.address)
    if address:
        example.description += f"\nIt meets at {address}."
        example.tag(address, TagLabel.ADDRESS)


def _add_untagged_details(example: TrainingExample, record: MeetingRecord) -> None:
    if record.location_info:
        example.description += f"\n{record.location_info}"

    if record.coordinates is not None and coordinates_valid(*record.coordinates):
        latitude, longitude = (round_coordinate(c) for c in record.coordinates)
        example.description += f"\nIts latitude/longitude is {latitude}, {longitude}."

    if record.virtual_url:
        example.description += f"\nThe virtual URL is {record.virtual_url} ."
    if record.virtual_phone_number:
        example.description += f"\nThe virtual phone number is {record.virtual_phone_number} ."
    if record.virtual_info:
        example.description += f"\n{record.virtual_info}"

    if record.comments:
        example.description += f"\n{record.comments}"


def _add_formats(example: TrainingExample, record: MeetingRecord) -> None:
    for meeting_format in record.formats:
        if meeting_format.description:
            example.description += f"\n{meeting_format.description}"
            example.tag(meeting_format.description, TagLabel.FORMAT)
        example.tag(meeting_format.name, TagLabel.FORMAT)


def generate_example(record: MeetingRecord) -> TrainingExample:
    """Build the description and aligned token/label sequences for *record*.

    Raises:
        ValueError: If the record's weekday is outside 1..7.
    """
    example = TrainingExample(description="")
    _add_header(example, record)
    _add_schedule(example, record)
    _add_time_zone(example, record)
    _add_address(example, record)
    _add_untagged_details(example, record)
    _add_formats(example, record)
    return example
