"""Clock implementation."""

from datetime import datetime, timezone

from region_colorizer.domain.ports import ClockPort
from region_colorizer.domain.types import Timestamp


class SystemClock(ClockPort):
    """System clock implementation."""

    def now(self) -> Timestamp:
        """Get current UTC timestamp."""
        return datetime.now(timezone.utc)

    def isoformat(self, ts: Timestamp) -> str:
        """Format timestamp as ISO 8601 with a Z suffix for UTC."""
        if ts.tzinfo is None:
            return ts.isoformat(timespec="milliseconds") + "Z"
        return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
