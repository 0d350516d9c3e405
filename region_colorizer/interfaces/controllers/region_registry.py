"""Region registry: owns polygons, data sources and the time window."""

import copy
import uuid
from collections.abc import Callable, Sequence
from dataclasses import replace

import structlog

from region_colorizer.application.dto.events import TimeWindowChangedEvent
from region_colorizer.application.use_cases.create_polygon import build_pending
from region_colorizer.application.use_cases.create_polygon import run as create_polygon
from region_colorizer.application.use_cases.process_polygons import PolygonInput
from region_colorizer.application.use_cases.process_polygons import run as process_polygons
from region_colorizer.domain.constants import active_style, muted_style
from region_colorizer.domain.entities import (
    DataSource,
    DrawnShape,
    PendingPolygon,
    Polygon,
    PolygonDataResult,
    ThresholdRule,
    TimeWindow,
)
from region_colorizer.domain.enums import ComparisonOperator, ResultStatus
from region_colorizer.domain.errors import (
    DataSourceLockedError,
    DomainError,
    InvalidGeometryError,
    NoEnabledSourcesError,
    NoMatchingSourceError,
    UnknownDataSourceError,
    UnknownRuleError,
)
from region_colorizer.domain.ports import ClockPort, DrawingSessionPort, SeriesProviderPort
from region_colorizer.domain.types import LayerStyleDict
from region_colorizer.infrastructure.observability.metrics import (
    batch_duration_seconds,
    batches_applied,
    batches_discarded,
    batches_started,
    polygons_processed,
)

logger = structlog.get_logger()

PolygonIdFactory = Callable[[ClockPort], str]


def _default_polygon_id(clock: ClockPort) -> str:
    millis = int(clock.now().timestamp() * 1000)
    return f"polygon-{millis}-{uuid.uuid4().hex[:9]}"


def _style_for(result: PolygonDataResult) -> LayerStyleDict:
    if result.status in (ResultStatus.ERROR, ResultStatus.SOURCE_DISABLED):
        return muted_style(result.color)
    return active_style(result.color)


class RegionRegistry:
    """Single-writer owner of the region state.

    Every change that affects colors starts a recompute batch tagged with a
    new generation. A batch is applied only if no newer batch started while
    it was in flight; superseded batches are discarded. Applying a batch
    swaps the whole polygon mapping at once.
    """

    def __init__(
        self,
        data_sources: Sequence[DataSource],
        provider: SeriesProviderPort,
        drawing_session: DrawingSessionPort,
        clock: ClockPort,
        polygon_id_factory: PolygonIdFactory = _default_polygon_id,
    ) -> None:
        """Initialize region registry."""
        self.provider = provider
        self.drawing_session = drawing_session
        self.clock = clock
        self._new_polygon_id = polygon_id_factory
        self._data_sources = list(data_sources)
        self._polygons: dict[str, Polygon] = {}
        self._time_window: TimeWindow | None = None
        self._pending: PendingPolygon | None = None
        self._generation = 0
        self._regions_created = 0

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def polygons(self) -> tuple[Polygon, ...]:
        return tuple(self._polygons.values())

    @property
    def data_sources(self) -> tuple[DataSource, ...]:
        return tuple(self._data_sources)

    @property
    def enabled_sources(self) -> list[DataSource]:
        return [ds for ds in self._data_sources if ds.enabled]

    @property
    def time_window(self) -> TimeWindow | None:
        return self._time_window

    @property
    def pending(self) -> PendingPolygon | None:
        return self._pending

    @property
    def generation(self) -> int:
        return self._generation

    def get_polygon(self, polygon_id: str) -> Polygon | None:
        return self._polygons.get(polygon_id)

    # ------------------------------------------------------------------
    # Drawing collaborator
    # ------------------------------------------------------------------

    def start_drawing(self) -> bool:
        """Start a drawing session wired to this registry."""
        return self.drawing_session.start(self.handle_shape_completed)

    async def handle_shape_completed(self, shape: DrawnShape) -> Polygon | None:
        """Accept a completed shape.

        With one enabled source the polygon is created right away; with
        several it waits for `assign_data_source`. With none the layer is
        released and NoEnabledSourcesError is raised.
        """
        try:
            pending = build_pending(shape)
        except InvalidGeometryError:
            self.drawing_session.unregister_layer(shape.layer)
            raise

        enabled = self.enabled_sources
        if not enabled:
            self.drawing_session.unregister_layer(shape.layer)
            logger.warning("shape_rejected_no_enabled_sources")
            raise NoEnabledSourcesError(
                "No data sources enabled. Enable at least one data source to draw polygons."
            )

        self.cancel_pending()
        self._pending = pending

        if len(enabled) == 1:
            return await self.assign_data_source(enabled[0].id)

        logger.info(
            "awaiting_data_source_selection",
            options=[ds.id for ds in enabled],
        )
        return None

    async def assign_data_source(self, source_id: str) -> Polygon:
        """Bind the pending shape to an enabled data source and color it.

        Region numbers keep counting across deletions so names stay unique.
        """
        if self._pending is None:
            raise DomainError("No pending shape to assign a data source to")

        data_source = self._source(source_id)
        if not data_source.enabled:
            raise NoMatchingSourceError(f"Data source {source_id} is not enabled")

        self._regions_created += 1
        polygon = create_polygon(
            self._pending,
            data_source,
            polygon_id=self._new_polygon_id(self.clock),
            sequence_number=self._regions_created,
            created_at=self.clock.now(),
        )
        self._pending = None
        self._polygons = {**self._polygons, polygon.id: polygon}

        await self.recompute()
        return self._polygons.get(polygon.id, polygon)

    def cancel_pending(self) -> None:
        """Drop the pending shape and release its layer."""
        if self._pending is not None:
            self.drawing_session.unregister_layer(self._pending.layer)
            self._pending = None

    def delete_polygon(self, polygon_id: str) -> bool:
        """Remove a polygon and release its render handle."""
        polygon = self._polygons.get(polygon_id)
        if polygon is None:
            return False

        self.drawing_session.unregister_layer(polygon.layer)
        self._polygons = {pid: p for pid, p in self._polygons.items() if pid != polygon_id}
        logger.info("polygon_deleted", polygon_id=polygon_id, remaining=len(self._polygons))
        return True

    # ------------------------------------------------------------------
    # Timeline collaborator
    # ------------------------------------------------------------------

    async def set_time_window(self, window: TimeWindow) -> bool:
        """Replace the time window; an identical window is ignored."""
        if window == self._time_window:
            logger.debug("time_window_unchanged")
            return False

        self._time_window = window
        logger.info(
            "time_window_changed",
            start=window.start.isoformat(),
            end=window.end.isoformat(),
        )
        await self.recompute()
        return True

    async def handle_time_window_changed(self, event: TimeWindowChangedEvent) -> bool:
        return await self.set_time_window(event.to_window())

    # ------------------------------------------------------------------
    # Data source configuration surface
    # ------------------------------------------------------------------

    async def toggle_source(self, source_id: str) -> bool:
        """Flip a source's enabled flag. Required sources cannot be disabled."""
        data_source = self._source(source_id)
        try:
            data_source.set_enabled(not data_source.enabled)
        except DataSourceLockedError:
            logger.warning("required_source_toggle_blocked", source_id=source_id)
            return False

        logger.info("source_toggled", source_id=source_id, enabled=data_source.enabled)
        await self.recompute()
        return True

    async def select_field(self, source_id: str, field_id: str) -> None:
        data_source = self._source(source_id)
        data_source.select_field(field_id)
        logger.info("source_field_selected", source_id=source_id, field=field_id)
        await self.recompute()

    async def add_rule(self, source_id: str, rule: ThresholdRule, position: int | None = None) -> None:
        data_source = self._source(source_id)
        if any(r.id == rule.id for r in data_source.threshold_rules):
            raise DomainError(f"Rule {rule.id} already exists in {source_id}")

        rules = list(data_source.threshold_rules)
        rules.insert(len(rules) if position is None else position, rule)
        data_source.threshold_rules = rules
        await self.recompute()

    async def update_rule(
        self,
        source_id: str,
        rule_id: str,
        *,
        color: str | None = None,
        operator: ComparisonOperator | str | None = None,
        value: float | None = None,
        label: str | None = None,
    ) -> ThresholdRule:
        """Edit a rule's color, operator, value or label in place in the sequence."""
        data_source = self._source(source_id)
        index = self._rule_index(data_source, rule_id)

        changes: dict[str, object] = {}
        if color is not None:
            changes["color"] = color
        if operator is not None:
            changes["operator"] = ComparisonOperator(operator)
        if value is not None:
            changes["value"] = float(value)
        if label is not None:
            changes["label"] = label

        updated = replace(data_source.threshold_rules[index], **changes)
        rules = list(data_source.threshold_rules)
        rules[index] = updated
        data_source.threshold_rules = rules

        logger.info("rule_updated", source_id=source_id, rule_id=rule_id, changes=sorted(changes))
        await self.recompute()
        return updated

    async def reorder_rules(self, source_id: str, rule_ids: Sequence[str]) -> None:
        """Reorder rules; `rule_ids` must list every rule exactly once."""
        data_source = self._source(source_id)
        by_id = {r.id: r for r in data_source.threshold_rules}
        if sorted(rule_ids) != sorted(by_id):
            raise UnknownRuleError(
                f"Rule order {list(rule_ids)} does not match rules {sorted(by_id)} of {source_id}"
            )
        data_source.threshold_rules = [by_id[rule_id] for rule_id in rule_ids]
        await self.recompute()

    async def remove_rule(self, source_id: str, rule_id: str) -> None:
        data_source = self._source(source_id)
        index = self._rule_index(data_source, rule_id)
        rules = list(data_source.threshold_rules)
        del rules[index]
        data_source.threshold_rules = rules
        await self.recompute()

    # ------------------------------------------------------------------
    # Batch recompute
    # ------------------------------------------------------------------

    async def recompute(self) -> bool:
        """Recompute every polygon for the current window.

        Returns True when the batch was applied, False when there was
        nothing to do or a newer batch superseded this one.
        """
        self._generation += 1
        generation = self._generation

        window = self._time_window
        if window is None or not self._polygons:
            return False

        snapshot = [
            PolygonInput(id=p.id, coordinates=p.coordinates, data_source=p.data_source)
            for p in self._polygons.values()
        ]
        # Edits made while the batch is in flight must not leak into it
        sources = copy.deepcopy(self._data_sources)

        batches_started.inc()
        logger.info("batch_started", generation=generation, polygon_count=len(snapshot))
        with batch_duration_seconds.time():
            results = await process_polygons(
                snapshot,
                sources,
                window.start,
                window.end,
                self.provider,
                self.clock,
            )

        if generation != self._generation:
            batches_discarded.inc()
            logger.info(
                "stale_batch_discarded",
                generation=generation,
                current_generation=self._generation,
            )
            return False

        self._apply(results)
        batches_applied.inc()
        logger.info("batch_applied", generation=generation, polygon_count=len(results))
        return True

    def _apply(self, results: Sequence[PolygonDataResult]) -> None:
        """Swap in the batch results as one state replacement."""
        by_id = {r.polygon_id: r for r in results}
        updated: dict[str, Polygon] = {}
        for polygon_id, polygon in self._polygons.items():
            result = by_id.get(polygon_id)
            if result is None:
                # Created after the batch snapshot
                updated[polygon_id] = polygon
                continue
            updated[polygon_id] = replace(
                polygon,
                current_value=result.value,
                current_color=result.color,
                last_result=result,
            )

        self._polygons = updated

        for polygon_id, result in by_id.items():
            polygon = updated.get(polygon_id)
            if polygon is None:
                # Deleted while the batch was in flight
                continue
            polygon.layer.apply_style(_style_for(result))
            polygons_processed.labels(status=result.status.value).inc()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _source(self, source_id: str) -> DataSource:
        for data_source in self._data_sources:
            if data_source.id == source_id:
                return data_source
        raise UnknownDataSourceError(f"Unknown data source: {source_id}")

    @staticmethod
    def _rule_index(data_source: DataSource, rule_id: str) -> int:
        for index, rule in enumerate(data_source.threshold_rules):
            if rule.id == rule_id:
                return index
        raise UnknownRuleError(f"Unknown rule {rule_id} in data source {data_source.id}")
