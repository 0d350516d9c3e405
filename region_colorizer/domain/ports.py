"""Ports (interfaces) for infrastructure adapters."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from region_colorizer.domain.entities import DrawnShape, HourlySeries
from region_colorizer.domain.types import LayerStyleDict, Timestamp


class SeriesProviderPort(ABC):
    """Port for obtaining hourly series for a location."""

    @abstractmethod
    async def get_series(
        self,
        latitude: float,
        longitude: float,
        start: Timestamp,
        end: Timestamp,
        field_id: str,
    ) -> HourlySeries:
        """Get an hourly series covering [start, end] for one field."""


class RenderHandlePort(ABC):
    """Port for a polygon's visual layer on the map."""

    @abstractmethod
    def apply_style(self, style: LayerStyleDict) -> None:
        """Apply color, fill opacity and stroke weight to the layer."""


ShapeCompletedCallback = Callable[[DrawnShape], Awaitable[object]]


class DrawingSessionPort(ABC):
    """Port for the map's drawing session."""

    @abstractmethod
    def start(self, on_complete: ShapeCompletedCallback) -> bool:
        """Start drawing. Returns False if a drawing is already active."""

    @abstractmethod
    async def finish_if_ready(self) -> bool:
        """Complete the shape if it has enough vertices and notify the callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Abort the active drawing."""

    @abstractmethod
    def register_external_layer(self, layer: RenderHandlePort) -> None:
        """Track a layer created outside the drawing flow."""

    @abstractmethod
    def unregister_layer(self, layer: RenderHandlePort) -> None:
        """Stop tracking a layer and remove it from the map."""


class ClockPort(ABC):
    """Port for time operations."""

    @abstractmethod
    def now(self) -> Timestamp:
        """Get current timestamp."""

    @abstractmethod
    def isoformat(self, ts: Timestamp) -> str:
        """Format timestamp as ISO 8601 string."""
