"""Unit tests for event parsing."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from region_colorizer.application.dto.events import TimeWindowChangedEvent
from region_colorizer.domain.entities import TimeWindow


def test_parse_time_window_changed_event():
    """Test parsing a camelCase timeline event."""
    event_data = {
        "startPosition": 336,
        "endPosition": 384,
        "startInstant": "2024-06-14T12:00:00Z",
        "endInstant": "2024-06-16T12:00:00Z",
    }

    event = TimeWindowChangedEvent(**event_data)

    assert event.start_position == 336
    assert event.end_position == 384
    assert event.start_instant == datetime(2024, 6, 14, 12, tzinfo=timezone.utc)
    assert event.end_instant - event.start_instant == timedelta(hours=48)


def test_parse_event_by_field_name():
    """Test snake_case field names are accepted too."""
    start = datetime(2024, 6, 15, 12, tzinfo=timezone.utc)

    event = TimeWindowChangedEvent(
        start_position=360,
        end_position=361,
        start_instant=start,
        end_instant=start + timedelta(hours=1),
    )

    assert event.to_window() == TimeWindow.single_hour(start)


def test_parse_event_ignores_extra_fields():
    """Test extra fields sent by the timeline widget are ignored."""
    event_data = {
        "startPosition": 0,
        "endPosition": 1,
        "startInstant": "2024-06-01T00:00:00Z",
        "endInstant": "2024-06-01T01:00:00Z",
        "mode": "single",
    }

    event = TimeWindowChangedEvent(**event_data)

    assert event.start_position == 0


def test_event_rejects_inverted_positions():
    """Test end position before start position is rejected."""
    with pytest.raises(ValidationError):
        TimeWindowChangedEvent(
            startPosition=10,
            endPosition=5,
            startInstant="2024-06-01T10:00:00Z",
            endInstant="2024-06-01T11:00:00Z",
        )


def test_event_rejects_inverted_instants():
    """Test end instant before start instant is rejected."""
    with pytest.raises(ValidationError):
        TimeWindowChangedEvent(
            startPosition=5,
            endPosition=10,
            startInstant="2024-06-01T10:00:00Z",
            endInstant="2024-06-01T09:00:00Z",
        )


def test_event_rejects_negative_position():
    """Test positions before the timeline origin are rejected."""
    with pytest.raises(ValidationError):
        TimeWindowChangedEvent(
            startPosition=-1,
            endPosition=0,
            startInstant="2024-06-01T10:00:00Z",
            endInstant="2024-06-01T11:00:00Z",
        )


def test_event_is_immutable():
    """Test events are frozen."""
    event = TimeWindowChangedEvent(
        startPosition=0,
        endPosition=1,
        startInstant="2024-06-01T00:00:00Z",
        endInstant="2024-06-01T01:00:00Z",
    )

    with pytest.raises(ValidationError):
        event.start_position = 3
