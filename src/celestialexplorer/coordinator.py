"""View-state coordinator: the only entry point for viewer controls.

Owns the ViewState and drives the layer manager, marker manager and zoom
adapter so that the map, the readouts and the state never disagree. Every
public operation applies all of its side effects before returning, then
notifies observers once with the new state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace

from loguru import logger

from celestialexplorer import zoom as zoom_adapter
from celestialexplorer.catalog import (
    DEFAULT_CENTER,
    DEFAULT_TILE_ZOOM,
    FLY_TO_DURATION,
    FLY_TO_ZOOM,
    INITIAL_DATE,
    MAX_TILE_ZOOM,
    MIN_TILE_ZOOM,
    earth_dates,
    get_body,
)
from celestialexplorer.coords import validate
from celestialexplorer.errors import (
    FlyToUnavailable,
    InvalidDateSelection,
    LayerLoadFailure,
)
from celestialexplorer.layers import LayerManager
from celestialexplorer.markers import MarkerManager
from celestialexplorer.models import (
    BodyDescriptor,
    BodyId,
    ImageScale,
    LatLng,
    Marker,
    TileZoom,
    ViewMode,
    ViewState,
)
from celestialexplorer.surface import MapSurface, create_view

StateObserver = Callable[[ViewState], None]

ARCHIVE_DATA = "Archive Data"


class ViewCoordinator:
    """Coordinates body, mode, date, zoom and marker for one viewer session."""

    def __init__(self, surface: MapSurface | None = None, container: str = "celestial-map") -> None:
        self.surface = surface or create_view(
            container,
            center=DEFAULT_CENTER,
            zoom=DEFAULT_TILE_ZOOM,
            min_zoom=MIN_TILE_ZOOM,
            max_zoom=MAX_TILE_ZOOM,
        )
        self.layers = LayerManager(self.surface)
        self.markers = MarkerManager(self.surface)
        self._observers: list[StateObserver] = []
        self._depth = 0
        self._dirty = False
        self._state = ViewState(
            body=BodyId.EARTH,
            mode=ViewMode.SATELLITE,
            date=INITIAL_DATE,
            zoom=TileZoom(DEFAULT_TILE_ZOOM),
        )
        self._unsubscribe_zoom = self.surface.on_zoom_changed(self._on_surface_zoom)
        self.layers.swap_to(self.body, self._state.date)

    # --- State access ---

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def body(self) -> BodyDescriptor:
        return get_body(self._state.body)

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Call `observer(state)` after every state change. Returns an unsubscribe callable."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        # Nested mutations (surface zoom callbacks fired mid-operation) defer
        # notification to the outermost one.
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            if self._depth == 0 and self._dirty:
                self._dirty = False
                for observer in list(self._observers):
                    observer(self._state)

    def _update(self, **changes: object) -> None:
        new_state = replace(self._state, **changes)
        if new_state != self._state:
            self._state = new_state
            self._dirty = True

    def _on_surface_zoom(self, level: int) -> None:
        if self._state.mode is not ViewMode.SATELLITE:
            return
        with self._mutation():
            self._update(zoom=TileZoom(level))

    # --- Controls ---

    def select_body(self, body_id: BodyId | str) -> None:
        """Switch body. Recenters the map in Satellite mode, resets scale in Elevation mode.

        Raises:
            InvalidBodySelection: Unknown body id; state is unchanged.
        """
        body = get_body(body_id)
        if body.id is self._state.body:
            return
        logger.info(f"Body {self._state.body.value} -> {body.id.value} ({self._state.mode.value})")
        with self._mutation():
            if self._state.mode is ViewMode.SATELLITE:
                self.layers.swap_to(body, self._state.date)
                zoom = TileZoom(DEFAULT_TILE_ZOOM)
            else:
                zoom = ImageScale(zoom_adapter.SCALE_DEFAULT)
            # A fly-to marker belongs to Earth's geography
            self.markers.clear()
            self._update(body=body.id, zoom=zoom, marker=None, notice=None)

    def select_mode(self, mode: ViewMode | str) -> None:
        """Switch between the tiled map and the elevation image."""
        mode = ViewMode(mode)
        if mode is self._state.mode:
            return
        logger.info(f"Mode {self._state.mode.value} -> {mode.value} ({self._state.body.value})")
        with self._mutation():
            if mode is ViewMode.ELEVATION:
                self.layers.release()
                self.markers.clear()
                self._update(
                    mode=mode,
                    zoom=ImageScale(zoom_adapter.SCALE_DEFAULT),
                    marker=None,
                    notice=None,
                )
            else:
                self.layers.swap_to(self.body, self._state.date)
                self._update(mode=mode, zoom=TileZoom(DEFAULT_TILE_ZOOM), notice=None)

    def select_date(self, date: str) -> None:
        """Choose the Earth imagery date.

        Applied immediately (keeping the user's pan/zoom) for Earth in
        Satellite mode. For any other body or mode the date is stored and
        takes effect once Earth imagery is shown again.

        Raises:
            InvalidDateSelection: Date is not one of Earth's selectable dates.
        """
        if date not in {entry.value for entry in earth_dates()}:
            raise InvalidDateSelection(date)
        if date == self._state.date:
            return
        with self._mutation():
            if self._state.body is BodyId.EARTH and self._state.mode is ViewMode.SATELLITE:
                self.layers.swap_to(self.body, date, preserve_viewport=True)
                self._update(date=date, notice=None)
            else:
                logger.debug(f"Date {date} stored; not applied to {self._state.body.value}")
                self._update(date=date)

    def zoom_in(self) -> None:
        with self._mutation():
            self._update(zoom=zoom_adapter.zoom_in(self._state.zoom, self.surface))

    def zoom_out(self) -> None:
        with self._mutation():
            self._update(zoom=zoom_adapter.zoom_out(self._state.zoom, self.surface))

    def reset_zoom(self) -> None:
        with self._mutation():
            self._update(zoom=zoom_adapter.reset_zoom(self._state.zoom, self.surface))

    def fly_to(self, lat_text: str | float, lng_text: str | float) -> Marker:
        """Animate the map to a coordinate and mark it.

        Only Earth in Satellite mode has a coordinate system to fly to.

        Args:
            lat_text: Latitude, as typed or as a number.
            lng_text: Longitude, as typed or as a number.

        Returns:
            The placed marker.

        Raises:
            FlyToUnavailable: Not Earth, or not Satellite mode.
            InvalidCoordinateInput: Validation failed; nothing moved.
        """
        if self._state.body is not BodyId.EARTH or self._state.mode is not ViewMode.SATELLITE:
            raise FlyToUnavailable(
                f"Fly-to needs Earth in satellite mode, not {self._state.body.value}/{self._state.mode.value}"
            )
        position = validate(lat_text, lng_text)
        logger.info(f"Flying to ({position.lat}, {position.lng})")
        with self._mutation():
            self.surface.animate_to(position, FLY_TO_ZOOM, FLY_TO_DURATION)
            marker = self.markers.place(position)
            self._update(zoom=TileZoom(self.surface.zoom), marker=marker)
        return marker

    def open_chat(self) -> None:
        with self._mutation():
            self._update(chat_open=True)

    def close_chat(self) -> None:
        with self._mutation():
            self._update(chat_open=False)

    def toggle_chat(self) -> None:
        with self._mutation():
            self._update(chat_open=not self._state.chat_open)

    # --- Feedback from the rendered map ---

    def report_viewport(
        self, lat: float, lng: float, level: int, epoch: int | None = None
    ) -> bool:
        """Apply a pan/zoom the user made directly on the map.

        Reports rendered before the latest recenter/zoom/fly-to (older
        `epoch`) and reports arriving outside Satellite mode are ignored.

        Returns:
            True when the report was applied.
        """
        if self._state.mode is not ViewMode.SATELLITE:
            return False
        with self._mutation():
            return self.surface.report_viewport(LatLng(lat=lat, lng=lng), level, epoch)

    def report_tile_error(self, generation: int, detail: str) -> LayerLoadFailure | None:
        """Surface a tile-load error as a notice. Errors from superseded layers are ignored."""
        failure = self.layers.report_load_failure(generation, detail)
        if failure is not None:
            with self._mutation():
                self._update(notice=str(failure))
        return failure

    def dismiss_notice(self) -> None:
        with self._mutation():
            self._update(notice=None)

    # --- Readouts ---

    def zoom_readout_text(self) -> str:
        return zoom_adapter.format_zoom(self._state.zoom)

    def date_info_text(self) -> str:
        state = self._state
        if state.mode is ViewMode.ELEVATION:
            return self.body.elevation.source_label
        if state.body is BodyId.EARTH and state.date:
            return state.date
        return ARCHIVE_DATA

    def info_lines(self) -> tuple[str, str, str, str]:
        """Info box rows: body, imagery source, date info, zoom."""
        body = self.body
        return (
            f"{body.icon} {body.name}",
            f"🛰️ {body.tiles.label}",
            f"📅 {self.date_info_text()}",
            f"🔎 {self.zoom_readout_text()}",
        )

    def teardown(self) -> None:
        """Release the layer and marker and destroy the map view."""
        self.layers.release()
        self.markers.clear()
        self._unsubscribe_zoom()
        self.surface.clear()
        self._observers.clear()
        logger.debug("View torn down")
