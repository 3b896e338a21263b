"""Conversion between directory-service JSON and ``MeetingRecord``.

The meeting server speaks snake_case with nested ``physical_address`` /
``virtual_information`` objects. The raw export mirror uses the flat camelCase
form produced by :func:`record_to_dict`. :func:`parse_meeting` accepts either,
so an exported ``meetingData.json`` can be read back in.
"""

from __future__ import annotations

from datetime import time
from typing import Any

from src.corpus.models import MeetingFormat, MeetingRecord, MeetingType, Organization

# Server ids pack the aggregator server id above the per-server meeting id.
SERVER_ID_SHIFT = 44
MAX_RECORD_ID = 1 << 64

_MEETING_TYPES: dict[str, MeetingType] = {
    "in_person": MeetingType.IN_PERSON,
    "inperson": MeetingType.IN_PERSON,
    "virtual": MeetingType.VIRTUAL,
    "hybrid": MeetingType.HYBRID,
}

_RECOGNIZED_ORGANIZATIONS = {"na", "recognizedfellowship"}


def _first(data: dict[str, Any], *keys: str) -> Any:
    """Return the first non-None value among *keys*."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_start_time(value: Any) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS``; seconds are discarded."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        msg = f"Unrecognized start time: {value!r}"
        raise ValueError(msg)
    return time(hour=int(parts[0]), minute=int(parts[1]))


def _parse_meeting_type(value: Any) -> MeetingType:
    meeting_type = _MEETING_TYPES.get(str(value).strip().lower())
    if meeting_type is None:
        msg = f"Unknown meeting type: {value!r}. Supported: {sorted(_MEETING_TYPES)}"
        raise ValueError(msg)
    return meeting_type


def _parse_organization(value: Any) -> Organization:
    if value is not None and str(value).strip().lower() in _RECOGNIZED_ORGANIZATIONS:
        return Organization.RECOGNIZED
    return Organization.UNKNOWN


def _parse_record_id(data: dict[str, Any]) -> int:
    if data.get("id") is not None:
        record_id = int(data["id"])
    else:
        server_id = data.get("server_id")
        meeting_id = data.get("meeting_id")
        if server_id is None or meeting_id is None:
            msg = f"Meeting has no id. Keys: {list(data.keys())}"
            raise ValueError(msg)
        record_id = (int(server_id) << SERVER_ID_SHIFT) + int(meeting_id)
    if not 0 <= record_id < MAX_RECORD_ID:
        msg = f"Meeting id must be an unsigned 64-bit integer, got {record_id}"
        raise ValueError(msg)
    return record_id


def basic_address(physical: dict[str, Any]) -> str:
    """Build a line-broken street address from a ``physical_address`` object.

    Produces ``street`` on the first line and ``town, state postcode`` on the
    second; missing parts are dropped.
    """
    street = _optional_text(physical.get("street")) or ""
    locality = ", ".join(
        part
        for part in (
            _optional_text(physical.get("town")),
            _optional_text(physical.get("state")),
        )
        if part
    )
    postcode = _optional_text(physical.get("postcode"))
    if postcode:
        locality = f"{locality} {postcode}".strip()
    return "\n".join(line for line in (street, locality) if line)


def _parse_coordinates(data: dict[str, Any]) -> tuple[float, float] | None:
    coords = _first(data, "coords", "coordinates")
    if isinstance(coords, dict):
        latitude = coords.get("latitude")
        longitude = coords.get("longitude")
    elif isinstance(coords, list | tuple) and len(coords) == 2:
        latitude, longitude = coords
    else:
        return None
    try:
        return float(latitude), float(longitude)
    except (TypeError, ValueError):
        return None


def _parse_formats(data: dict[str, Any]) -> tuple[MeetingFormat, ...]:
    formats: list[MeetingFormat] = []
    for item in data.get("formats") or []:
        if not isinstance(item, dict):
            continue
        name = _optional_text(item.get("name")) or _optional_text(item.get("key"))
        if not name:
            continue
        formats.append(
            MeetingFormat(
                name=name,
                description=_optional_text(item.get("description")) or "",
                key=_optional_text(item.get("key")) or "",
            )
        )
    return tuple(formats)


def parse_meeting(data: dict[str, Any]) -> MeetingRecord:
    """Parse one meeting object into a :class:`MeetingRecord`.

    Raises:
        ValueError: If a required field is missing or out of range.
    """
    name = _optional_text(data.get("name"))
    if not name:
        msg = "Meeting has no name"
        raise ValueError(msg)

    weekday = int(_first(data, "weekday", "weekday_tinyint"))
    if not 1 <= weekday <= 7:
        msg = f"Weekday must be 1..7, got {weekday}"
        raise ValueError(msg)

    duration = int(_first(data, "duration", "duration_seconds"))
    if duration <= 0:
        msg = f"Duration must be positive, got {duration}"
        raise ValueError(msg)

    time_zone = _optional_text(_first(data, "time_zone", "timeZone", "timezone"))
    if not time_zone:
        msg = f"Meeting {name!r} has no time zone"
        raise ValueError(msg)

    physical = data.get("physical_address")
    if isinstance(physical, dict):
        address = basic_address(physical)
        location_info = _optional_text(physical.get("extra_info"))
    else:
        address = _optional_text(data.get("address")) or ""
        location_info = None
    location_info = _optional_text(_first(data, "locationInfo", "location_info")) or location_info

    virtual = data.get("virtual_information")
    if not isinstance(virtual, dict):
        virtual = {}

    return MeetingRecord(
        id=_parse_record_id(data),
        name=name,
        meeting_type=_parse_meeting_type(_first(data, "type", "meetingType", "meeting_type")),
        organization=_parse_organization(_first(data, "organization", "organization_key")),
        weekday=weekday,
        start_time=_parse_start_time(_first(data, "start_time", "startTime")),
        duration=duration,
        time_zone=time_zone,
        address=address,
        location_info=location_info,
        coordinates=_parse_coordinates(data),
        virtual_url=_optional_text(_first(data, "virtualURL", "virtual_url") or virtual.get("url")),
        virtual_phone_number=_optional_text(
            _first(data, "virtualPhoneNumber", "virtual_phone_number")
            or virtual.get("phone_number")
        ),
        virtual_info=_optional_text(
            _first(data, "virtualInfo", "virtual_info") or virtual.get("extra_info")
        ),
        comments=_optional_text(data.get("comments")),
        formats=_parse_formats(data),
    )


def parse_search_results(payload: Any) -> list[MeetingRecord]:
    """Parse a search response (``{"meetings": [...]}`` or a bare list).

    Raises:
        ValueError: If the payload shape is not recognized or an entry is
            not a meeting object.
    """
    if isinstance(payload, dict) and "meetings" in payload:
        meetings = payload["meetings"]
    elif isinstance(payload, list):
        meetings = payload
    else:
        keys = list(payload.keys()) if isinstance(payload, dict) else type(payload).__name__
        msg = f"Unrecognized search response. Keys: {keys}"
        raise ValueError(msg)

    records: list[MeetingRecord] = []
    for item in meetings:
        if not isinstance(item, dict):
            msg = f"Meeting entry is not an object: {type(item).__name__}"
            raise ValueError(msg)
        records.append(parse_meeting(item))
    return records


def record_to_dict(record: MeetingRecord) -> dict[str, Any]:
    """Serialize a record into the flat JSON mirror form."""
    coordinates = None
    if record.coordinates is not None:
        coordinates = {"latitude": record.coordinates[0], "longitude": record.coordinates[1]}
    return {
        "id": record.id,
        "name": record.name,
        "meetingType": record.meeting_type.value,
        "organization": record.organization.value,
        "weekday": record.weekday,
        "startTime": record.start_time.strftime("%H:%M"),
        "duration": record.duration,
        "timeZone": record.time_zone,
        "address": record.address,
        "locationInfo": record.location_info,
        "coordinates": coordinates,
        "virtualURL": record.virtual_url,
        "virtualPhoneNumber": record.virtual_phone_number,
        "virtualInfo": record.virtual_info,
        "comments": record.comments,
        "formats": [
            {"key": f.key, "name": f.name, "description": f.description} for f in record.formats
        ],
    }
