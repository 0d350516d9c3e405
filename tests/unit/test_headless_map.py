"""Unit tests for the headless drawing session."""

from unittest.mock import AsyncMock

import pytest

from region_colorizer.infrastructure.map.headless_map import HeadlessDrawingSession, HeadlessLayer


@pytest.fixture
def session():
    """Create drawing session."""
    return HeadlessDrawingSession()


def test_start_once(session):
    """Test a second start while drawing is refused."""
    assert session.start(AsyncMock()) is True
    assert session.start(AsyncMock()) is False
    assert session.is_drawing


def test_add_vertex_requires_active_drawing(session):
    """Test vertices can only be added while drawing."""
    with pytest.raises(RuntimeError):
        session.add_vertex(1.0, 2.0)


@pytest.mark.asyncio
async def test_finish_needs_three_vertices(session):
    """Test a shape with two vertices cannot be finished."""
    on_complete = AsyncMock()
    session.start(on_complete)
    session.add_vertex(0.0, 0.0)
    session.add_vertex(0.0, 1.0)

    assert session.can_finish is False
    assert await session.finish_if_ready() is False
    on_complete.assert_not_awaited()
    assert session.is_drawing


@pytest.mark.asyncio
async def test_finish_hands_shape_to_callback(session):
    """Test finishing creates a tracked layer and reports the shape."""
    on_complete = AsyncMock()
    session.start(on_complete)
    for lat, lng in [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)]:
        session.add_vertex(lat, lng)

    assert await session.finish_if_ready() is True

    shape = on_complete.await_args.args[0]
    assert shape.count == 3
    assert shape.vertices == [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    assert isinstance(shape.layer, HeadlessLayer)
    assert shape.layer.on_map
    assert session.is_tracked(shape.layer)
    assert session.is_drawing is False
    assert session.drawing_points == 0


def test_cancel_resets(session):
    """Test cancel discards the vertices."""
    session.start(AsyncMock())
    session.add_vertex(0.0, 0.0)

    session.cancel()

    assert session.is_drawing is False
    assert session.drawing_points == 0


def test_register_and_unregister_layers(session):
    """Test external layers are tracked until unregistered."""
    first, second = HeadlessLayer(), HeadlessLayer()
    session.register_external_layer(first)
    session.register_external_layer(second)

    session.unregister_layer(first)

    assert session.total_tracked_layers == 1
    assert not first.on_map
    assert second.on_map

    session.clear_all_layers()

    assert session.total_tracked_layers == 0
    assert not second.on_map


def test_layer_records_styles():
    """Test applied styles are recorded in order."""
    layer = HeadlessLayer()
    layer.apply_style({"color": "#111111", "fillColor": "#111111", "fillOpacity": 0.3, "weight": 3})
    layer.apply_style({"color": "#222222", "fillColor": "#222222", "fillOpacity": 0.2, "weight": 2})

    assert layer.style["color"] == "#222222"
    assert [s["color"] for s in layer.style_history] == ["#111111", "#222222"]
