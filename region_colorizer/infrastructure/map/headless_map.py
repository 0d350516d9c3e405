"""Headless map adapters: in-memory layers and drawing session."""

import itertools

import structlog

from region_colorizer.domain.entities import DrawnShape
from region_colorizer.domain.ports import (
    DrawingSessionPort,
    RenderHandlePort,
    ShapeCompletedCallback,
)
from region_colorizer.domain.types import LatLng, LayerStyleDict

logger = structlog.get_logger()

_layer_ids = itertools.count(1)


class HeadlessLayer(RenderHandlePort):
    """In-memory render handle that records applied styles."""

    def __init__(self) -> None:
        """Initialize layer."""
        self.id = next(_layer_ids)
        self.on_map = False
        self.style: LayerStyleDict | None = None
        self.style_history: list[LayerStyleDict] = []

    def apply_style(self, style: LayerStyleDict) -> None:
        """Record the style."""
        self.style = style
        self.style_history.append(style)

    def __repr__(self) -> str:
        return f"HeadlessLayer(id={self.id}, on_map={self.on_map})"


class HeadlessDrawingSession(DrawingSessionPort):
    """Drawing session without a map widget.

    Vertices are fed with `add_vertex`; a shape can be finished once it has
    at least three vertices.
    """

    min_vertices = 3

    def __init__(self) -> None:
        """Initialize drawing session."""
        self.is_drawing = False
        self._vertices: list[LatLng] = []
        self._on_complete: ShapeCompletedCallback | None = None
        self._layers: set[RenderHandlePort] = set()

    @property
    def drawing_points(self) -> int:
        return len(self._vertices)

    @property
    def can_finish(self) -> bool:
        return self.is_drawing and len(self._vertices) >= self.min_vertices

    @property
    def total_tracked_layers(self) -> int:
        return len(self._layers)

    def is_tracked(self, layer: RenderHandlePort) -> bool:
        return layer in self._layers

    def start(self, on_complete: ShapeCompletedCallback) -> bool:
        """Start drawing."""
        if self.is_drawing:
            logger.warning("drawing_already_active")
            return False
        self.is_drawing = True
        self._vertices = []
        self._on_complete = on_complete
        logger.debug("drawing_started")
        return True

    def add_vertex(self, latitude: float, longitude: float) -> int:
        """Add a vertex to the active drawing; returns the vertex count."""
        if not self.is_drawing:
            raise RuntimeError("No active drawing")
        self._vertices.append((latitude, longitude))
        return len(self._vertices)

    async def finish_if_ready(self) -> bool:
        """Complete the shape and hand it to the completion callback."""
        if not self.can_finish or self._on_complete is None:
            logger.debug("drawing_not_ready", points=len(self._vertices))
            return False

        layer = HeadlessLayer()
        self.register_external_layer(layer)
        shape = DrawnShape(vertices=list(self._vertices), count=len(self._vertices), layer=layer)
        on_complete = self._on_complete
        self._reset()

        await on_complete(shape)
        return True

    def cancel(self) -> None:
        """Abort the active drawing."""
        if self.is_drawing:
            logger.debug("drawing_cancelled", points=len(self._vertices))
        self._reset()

    def register_external_layer(self, layer: RenderHandlePort) -> None:
        """Track a layer and put it on the map."""
        self._layers.add(layer)
        if isinstance(layer, HeadlessLayer):
            layer.on_map = True

    def unregister_layer(self, layer: RenderHandlePort) -> None:
        """Stop tracking a layer and take it off the map."""
        self._layers.discard(layer)
        if isinstance(layer, HeadlessLayer):
            layer.on_map = False

    def clear_all_layers(self) -> None:
        """Remove every tracked layer."""
        for layer in list(self._layers):
            self.unregister_layer(layer)
        logger.debug("all_layers_cleared")

    def _reset(self) -> None:
        self.is_drawing = False
        self._vertices = []
        self._on_complete = None
