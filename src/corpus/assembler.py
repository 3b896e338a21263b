"""Dataset assembly: run the generator over a record batch and build the views."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from src.corpus.errors import CardinalityMismatchError
from src.corpus.generator import generate_example
from src.corpus.models import MeetingRecord
from src.corpus.parsers import record_to_dict

logger = logging.getLogger(__name__)


@dataclass
class Dataset:
    """The three exported views of one fetched batch.

    Row ``i`` of every frame describes the same source record.
    """

    simple: pd.DataFrame  # id, description
    tagger: pd.DataFrame  # tokens, labels
    raw: pd.DataFrame  # flattened from raw_json
    raw_json: str

    def __len__(self) -> int:
        return len(self.simple)


def records_to_json(records: Sequence[MeetingRecord]) -> str:
    """Serialize the batch into the JSON mirror written to ``meetingData.json``."""
    return json.dumps([record_to_dict(r) for r in records], indent=2, ensure_ascii=False)


def assemble_dataset(records: Sequence[MeetingRecord]) -> Dataset:
    """Generate a training example per record and collect the three views.

    Args:
        records: The fetched batch, in server order.

    Returns:
        A :class:`Dataset` whose frames preserve input order.

    Raises:
        CardinalityMismatchError: If any view's row count differs from the
            number of records.
    """
    examples = [generate_example(record) for record in records]

    ids = [record.id for record in records]
    descriptions = [example.description for example in examples]
    if len(ids) != len(descriptions):
        raise CardinalityMismatchError(len(ids), len(descriptions), "simple")

    simple = pd.DataFrame(
        {
            "id": pd.Series(ids, dtype="uint64"),
            "description": pd.Series(descriptions, dtype="object"),
        }
    )
    tagger = pd.DataFrame(
        {
            "tokens": pd.Series([e.tokens for e in examples], dtype="object"),
            "labels": pd.Series([e.labels for e in examples], dtype="object"),
        }
    )
    if len(tagger) != len(records):
        raise CardinalityMismatchError(len(records), len(tagger), "textTagger")

    raw_json = records_to_json(records)
    raw = pd.json_normalize(json.loads(raw_json))
    if len(raw) != len(records):
        raise CardinalityMismatchError(len(records), len(raw), "complex")

    logger.info("Assembled %d training examples", len(simple))
    return Dataset(simple=simple, tagger=tagger, raw=raw, raw_json=raw_json)
