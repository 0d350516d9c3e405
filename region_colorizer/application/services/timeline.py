"""Hour-offset timeline mapping for single and range selection."""

from datetime import timedelta

from region_colorizer.application.dto.events import TimeWindowChangedEvent
from region_colorizer.domain.enums import TimelineMode
from region_colorizer.domain.types import Timestamp


class Timeline:
    """Hourly timeline spanning `days` centred on an anchor instant.

    Positions are hour offsets from the timeline origin, clamped to
    [0, total_hours]. Range handles are kept at least one hour apart.
    """

    def __init__(self, anchor: Timestamp, days: int = 30) -> None:
        """Initialize timeline."""
        if days < 1:
            raise ValueError(f"Timeline must span >= 1 day, got {days}")
        self.total_hours = days * 24
        self.center = self.total_hours // 2
        anchor_hour = anchor.replace(minute=0, second=0, microsecond=0)
        self.origin = anchor_hour - timedelta(hours=self.center)

    def clamp(self, position: int) -> int:
        """Clamp a position to the timeline bounds."""
        return max(0, min(position, self.total_hours))

    def instant_at(self, position: int) -> Timestamp:
        """Instant for an hour offset."""
        return self.origin + timedelta(hours=position)

    def single(self, position: int | None = None) -> TimeWindowChangedEvent:
        """Single-handle selection: [position, position + 1h)."""
        if position is None:
            position = self.center
        start = min(self.clamp(position), self.total_hours - 1)
        start_instant = self.instant_at(start)
        return TimeWindowChangedEvent(
            start_position=start,
            end_position=start + 1,
            start_instant=start_instant,
            end_instant=start_instant + timedelta(hours=1),
        )

    def range(
        self,
        start_position: int | None = None,
        end_position: int | None = None,
    ) -> TimeWindowChangedEvent:
        """Two-handle selection, defaulting to one day either side of the centre."""
        if start_position is None:
            start_position = self.center - 24
        if end_position is None:
            end_position = self.center + 24

        start = self.clamp(start_position)
        end = self.clamp(end_position)
        if end <= start:
            end = min(start + 1, self.total_hours)
            start = end - 1

        return TimeWindowChangedEvent(
            start_position=start,
            end_position=end,
            start_instant=self.instant_at(start),
            end_instant=self.instant_at(end),
        )

    def select(
        self,
        mode: TimelineMode | str,
        start_position: int | None = None,
        end_position: int | None = None,
    ) -> TimeWindowChangedEvent:
        """Selection for the given handle mode; `end_position` is ignored in single mode."""
        if TimelineMode(mode) == TimelineMode.SINGLE:
            return self.single(start_position)
        return self.range(start_position, end_position)
