"""Tests for narrative and tag generation."""

from __future__ import annotations

from dataclasses import replace
from datetime import time

import pytest

from src.corpus.generator import collapse_lines, generate_example
from src.corpus.models import MeetingFormat, MeetingRecord, MeetingType, Organization

FRIDAY_NIGHT = MeetingRecord(
    id=42,
    name="Friday Night Group",
    meeting_type=MeetingType.IN_PERSON,
    organization=Organization.RECOGNIZED,
    weekday=6,
    start_time=time(19, 30),
    duration=3600,
    time_zone="America/New_York",
    address="123 Main St",
)


class TestEndToEndExample:
    def test_description(self) -> None:
        example = generate_example(FRIDAY_NIGHT)
        assert example.description == (
            '"Friday Night Group" is a local recognizedFellowship meeting, '
            "that meets every Friday, at 7:30 PM, and lasts for 60 minutes.\n"
            "Its time zone is Eastern Time.\n"
            "It meets at 123 Main St."
        )

    def test_tokens_and_labels(self) -> None:
        example = generate_example(FRIDAY_NIGHT)
        assert example.tokens == [
            "Friday Night Group",
            "local",
            "friday",
            "7:30 PM",
            "19:30",
            "60",
            "America/New_York",
            "Eastern Time",
            "123 Main St",
        ]
        assert example.labels == [
            "meetingName",
            "meetingType",
            "weekday",
            "startTime",
            "startTime",
            "duration",
            "timeZone",
            "timeZone",
            "address",
        ]


class TestInvariants:
    def test_deterministic(self) -> None:
        first = generate_example(FRIDAY_NIGHT)
        second = generate_example(FRIDAY_NIGHT)
        assert first == second

    @pytest.mark.parametrize(
        "record",
        [
            FRIDAY_NIGHT,
            replace(FRIDAY_NIGHT, address="", time_zone="Antarctica/Troll"),
            replace(
                FRIDAY_NIGHT,
                meeting_type=MeetingType.HYBRID,
                formats=(MeetingFormat("O", "Open"), MeetingFormat("WC")),
                virtual_url="https://zoom.us/j/1",
                comments="Bring a friend.",
            ),
        ],
    )
    def test_tokens_and_labels_aligned(self, record: MeetingRecord) -> None:
        example = generate_example(record)
        assert len(example.tokens) == len(example.labels)

    def test_bad_weekday_raises(self) -> None:
        with pytest.raises(ValueError):
            generate_example(replace(FRIDAY_NIGHT, weekday=0))


class TestOptionalFields:
    def test_minimal_record_only_has_core_clauses(self) -> None:
        record = replace(FRIDAY_NIGHT, meeting_type=MeetingType.VIRTUAL, address="")
        example = generate_example(record)
        assert example.description.splitlines() == [
            '"Friday Night Group" is a virtual recognizedFellowship meeting, '
            "that meets every Friday, at 7:30 PM, and lasts for 60 minutes.",
            "Its time zone is Eastern Time.",
        ]
        assert example.labels == [
            "meetingName",
            "meetingType",
            "weekday",
            "startTime",
            "startTime",
            "duration",
            "timeZone",
            "timeZone",
        ]

    def test_unresolved_zone_is_tagged_without_clause(self) -> None:
        record = replace(FRIDAY_NIGHT, time_zone="Antarctica/Troll", address="")
        example = generate_example(record)
        assert "time zone" not in example.description
        assert example.tokens[-1] == "Antarctica/Troll"
        assert example.labels.count("timeZone") == 1

    def test_multiline_address_collapsed(self) -> None:
        record = replace(FRIDAY_NIGHT, address="123 Main St\nSpringfield, IL 62701")
        example = generate_example(record)
        assert "\nIt meets at 123 Main St, Springfield, IL 62701." in example.description
        assert example.tokens[-1] == "123 Main St, Springfield, IL 62701"

    def test_virtual_meeting_ignores_address(self) -> None:
        record = replace(FRIDAY_NIGHT, meeting_type=MeetingType.VIRTUAL)
        example = generate_example(record)
        assert "It meets at" not in example.description
        assert "address" not in example.labels

    def test_hybrid_meeting_keeps_address(self) -> None:
        record = replace(FRIDAY_NIGHT, meeting_type=MeetingType.HYBRID)
        example = generate_example(record)
        assert "\nIt meets at 123 Main St." in example.description
        assert example.labels[-1] == "address"

    def test_untagged_details(self) -> None:
        record = replace(
            FRIDAY_NIGHT,
            location_info="Basement entrance",
            coordinates=(12.345675, -77.0364512),
            virtual_url="https://zoom.us/j/123",
            virtual_phone_number="+1 555 0100",
            virtual_info="Meeting ID 123",
            comments="Wheelchair accessible.",
        )
        example = generate_example(record)
        lines = example.description.splitlines()
        assert lines[3:] == [
            "Basement entrance",
            "Its latitude/longitude is 12.34568, -77.03645.",
            "The virtual URL is https://zoom.us/j/123 .",
            "The virtual phone number is +1 555 0100 .",
            "Meeting ID 123",
            "Wheelchair accessible.",
        ]
        assert example.tokens == generate_example(FRIDAY_NIGHT).tokens

    def test_invalid_coordinates_skipped(self) -> None:
        record = replace(FRIDAY_NIGHT, coordinates=(123.0, 45.0))
        assert "latitude" not in generate_example(record).description

    def test_unknown_organization(self) -> None:
        record = replace(FRIDAY_NIGHT, organization=Organization.UNKNOWN)
        assert " is a local unknown meeting," in generate_example(record).description


class TestFormatTagging:
    def test_format_with_description_yields_two_tags(self) -> None:
        record = replace(FRIDAY_NIGHT, formats=(MeetingFormat("O", "Open meeting"),))
        example = generate_example(record)
        assert example.tokens[-2:] == ["Open meeting", "O"]
        assert example.labels[-2:] == ["format", "format"]
        assert example.description.endswith("\nOpen meeting")

    def test_format_without_description_yields_one_tag(self) -> None:
        record = replace(FRIDAY_NIGHT, formats=(MeetingFormat("WC"),))
        example = generate_example(record)
        assert example.tokens[-1] == "WC"
        assert example.labels.count("format") == 1
        assert example.description == generate_example(FRIDAY_NIGHT).description

    def test_formats_keep_order(self) -> None:
        record = replace(
            FRIDAY_NIGHT,
            formats=(MeetingFormat("O", "Open"), MeetingFormat("WC"), MeetingFormat("ST", "Steps")),
        )
        example = generate_example(record)
        assert example.tokens[-5:] == ["Open", "O", "WC", "Steps", "ST"]


class TestCollapseLines:
    def test_drops_blank_lines(self) -> None:
        assert collapse_lines("a\n\n b \r\nc") == "a, b, c"

    def test_empty(self) -> None:
        assert collapse_lines("") == ""
