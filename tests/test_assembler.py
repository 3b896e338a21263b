"""Tests for dataset assembly."""

from __future__ import annotations

import json
from dataclasses import replace
from datetime import time
from unittest.mock import patch

import pytest

from src.corpus.assembler import assemble_dataset, records_to_json
from src.corpus.errors import CardinalityMismatchError
from src.corpus.models import MeetingFormat, MeetingRecord, MeetingType, Organization

BASE = MeetingRecord(
    id=1,
    name="Early Birds",
    meeting_type=MeetingType.IN_PERSON,
    organization=Organization.RECOGNIZED,
    weekday=2,
    start_time=time(7, 0),
    duration=3600,
    time_zone="America/Chicago",
    address="9 Oak Ave",
    coordinates=(41.8781, -87.6298),
    formats=(MeetingFormat("O", "Open"),),
)

BATCH = [
    BASE,
    replace(BASE, id=7, name="Night Owls", meeting_type=MeetingType.VIRTUAL, address=""),
    replace(BASE, id=3, name="Lunch Bunch", weekday=4, start_time=time(12, 15)),
]


class TestAssembleDataset:
    def test_row_counts_match(self) -> None:
        dataset = assemble_dataset(BATCH)
        assert len(dataset) == 3
        assert len(dataset.simple) == len(dataset.tagger) == len(dataset.raw) == 3

    def test_order_preserved(self) -> None:
        dataset = assemble_dataset(BATCH)
        assert list(dataset.simple["id"]) == [1, 7, 3]
        assert list(dataset.raw["id"]) == [1, 7, 3]
        assert dataset.tagger["tokens"][1][0] == "Night Owls"
        assert dataset.simple["description"][2].startswith('"Lunch Bunch"')

    def test_columns(self) -> None:
        dataset = assemble_dataset(BATCH)
        assert list(dataset.simple.columns) == ["id", "description"]
        assert list(dataset.tagger.columns) == ["tokens", "labels"]
        assert str(dataset.simple["id"].dtype) == "uint64"

    def test_tagger_rows_aligned(self) -> None:
        dataset = assemble_dataset(BATCH)
        for tokens, labels in zip(dataset.tagger["tokens"], dataset.tagger["labels"], strict=True):
            assert len(tokens) == len(labels)

    def test_raw_view_flattened_from_json(self) -> None:
        dataset = assemble_dataset(BATCH)
        assert json.loads(dataset.raw_json)[0]["name"] == "Early Birds"
        assert "coordinates.latitude" in dataset.raw.columns
        assert dataset.raw["coordinates.latitude"][0] == 41.8781

    def test_empty_batch(self) -> None:
        dataset = assemble_dataset([])
        assert len(dataset) == 0
        assert dataset.raw_json == "[]"

    def test_large_ids_survive(self) -> None:
        big_id = (3 << 44) + 12345
        dataset = assemble_dataset([replace(BASE, id=big_id)])
        assert int(dataset.simple["id"][0]) == big_id

    def test_raw_view_row_mismatch_raises(self) -> None:
        """A raw view that loses rows must abort the assembly."""
        with (
            patch("src.corpus.assembler.pd.json_normalize", return_value=[]),
            pytest.raises(CardinalityMismatchError) as exc_info,
        ):
            assemble_dataset(BATCH[:1])
        assert exc_info.value.view == "complex"
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 0


class TestRecordsToJson:
    def test_mirror_fields(self) -> None:
        data = json.loads(records_to_json([BASE]))
        assert data[0]["meetingType"] == "inPerson"
        assert data[0]["startTime"] == "07:00"
        assert data[0]["formats"] == [{"key": "", "name": "O", "description": "Open"}]
