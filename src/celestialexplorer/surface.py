"""Rendering surface: the map the core drives.

`RenderingSurface` is the interface the layer/marker managers and the zoom
adapter talk to. `MapSurface` is the in-process model of the embedded
Leaflet map: it holds what is attached and where the viewport is, and the
Leaflet renderer turns it into HTML on every rerun. Pan/zoom done by the
user inside the browser comes back through `report_viewport`.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from celestialexplorer.models import FlyTo, LatLng, TileLayer

ZoomListener = Callable[[int], None]


@dataclass(frozen=True)
class MarkerStyle:
    """Div-icon marker appearance."""

    color: str = "#FF4444"
    size: int = 18  # px
    border: str = "2px solid white"


class RenderingSurface(Protocol):
    @property
    def zoom(self) -> int: ...

    def attach_layer(self, layer: TileLayer) -> None: ...

    def detach_layer(self, layer: TileLayer) -> None: ...

    def set_viewport(self, center: LatLng, zoom: int) -> None: ...

    def animate_to(self, center: LatLng, zoom: int, duration: float) -> None: ...

    def zoom_in(self) -> None: ...

    def zoom_out(self) -> None: ...

    def place_marker(self, position: LatLng, style: MarkerStyle) -> int: ...

    def remove_marker(self, handle: int) -> None: ...

    def on_zoom_changed(self, listener: ZoomListener) -> Callable[[], None]: ...


class MapSurface:
    """In-process model of a Leaflet map view.

    `center`/`zoom` always hold the latest known viewport. `anchor` is the
    viewport the rendered page opens at; it only moves when the page content
    changes anyway (layers, markers, programmatic viewport changes), so a
    pan reported back from the browser does not reload the map.
    """

    def __init__(
        self,
        container: str,
        center: LatLng,
        zoom: int,
        min_zoom: int,
        max_zoom: int,
    ) -> None:
        self.container = container
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.center = center
        self._zoom = self._clamp(zoom)
        self.anchor: tuple[LatLng, int] = (self.center, self._zoom)
        self.layers: list[TileLayer] = []
        self.markers: dict[int, tuple[LatLng, MarkerStyle]] = {}
        self.pending_fly_to: FlyTo | None = None
        # Bumped on every programmatic viewport change. Browser reports carry
        # the epoch they were rendered with; older ones are dropped.
        self.viewport_epoch = 0
        self._handles = itertools.count(1)
        self._listeners: list[ZoomListener] = []

    @property
    def zoom(self) -> int:
        return self._zoom

    def _clamp(self, zoom: int) -> int:
        return max(self.min_zoom, min(self.max_zoom, int(zoom)))

    def _set_zoom(self, zoom: int) -> None:
        zoom = self._clamp(zoom)
        if zoom == self._zoom:
            return
        self._zoom = zoom
        for listener in list(self._listeners):
            listener(zoom)

    def _reanchor(self) -> None:
        self.anchor = (self.center, self._zoom)

    def on_zoom_changed(self, listener: ZoomListener) -> Callable[[], None]:
        """Register a zoom-change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Layers ---

    def attach_layer(self, layer: TileLayer) -> None:
        if layer not in self.layers:
            self.layers.append(layer)
            self._reanchor()

    def detach_layer(self, layer: TileLayer) -> None:
        try:
            self.layers.remove(layer)
        except ValueError:
            raise KeyError(f"layer generation {layer.generation} is not attached") from None
        self._reanchor()

    # --- Viewport ---

    def _move(self, center: LatLng, zoom: int) -> None:
        # Any programmatic move supersedes an animation still in flight.
        self.pending_fly_to = None
        self.center = center
        self.viewport_epoch += 1
        self._set_zoom(zoom)
        self._reanchor()

    def set_viewport(self, center: LatLng, zoom: int) -> None:
        self._move(center, zoom)

    def animate_to(self, center: LatLng, zoom: int, duration: float) -> None:
        """Commit the target viewport and queue the animation for the renderer.

        The animation stays queued, so every rerender replays the same page,
        until the browser reports the viewport it landed on.
        """
        fly = FlyTo(
            start=self.center,
            start_zoom=self._zoom,
            center=center,
            zoom=self._clamp(zoom),
            duration=duration,
        )
        self._move(center, zoom)
        self.pending_fly_to = fly

    def zoom_in(self) -> None:
        self._move(self.center, self._zoom + 1)

    def zoom_out(self) -> None:
        self._move(self.center, self._zoom - 1)

    def report_viewport(self, center: LatLng, zoom: int, epoch: int | None = None) -> bool:
        """Apply a pan/zoom the user made inside the browser.

        Returns False (and changes nothing) when the report was rendered
        before the latest programmatic viewport change.
        """
        if epoch is not None and epoch != self.viewport_epoch:
            return False
        self.pending_fly_to = None
        self.center = center
        self._set_zoom(zoom)
        return True

    # --- Markers ---

    def place_marker(self, position: LatLng, style: MarkerStyle) -> int:
        handle = next(self._handles)
        self.markers[handle] = (position, style)
        self._reanchor()
        return handle

    def remove_marker(self, handle: int) -> None:
        try:
            del self.markers[handle]
        except KeyError:
            raise KeyError(f"marker {handle} is not placed") from None
        self._reanchor()

    def clear(self) -> None:
        """Destroy the view: drop layers, markers and listeners."""
        logger.debug(
            f"Destroying surface {self.container}: {len(self.layers)} layer(s), {len(self.markers)} marker(s)"
        )
        self.layers.clear()
        self.markers.clear()
        self.pending_fly_to = None
        self._listeners.clear()


def create_view(
    container: str,
    center: tuple[float, float],
    zoom: int,
    min_zoom: int,
    max_zoom: int,
) -> MapSurface:
    """Create a map view bound to `container` (the component key of the embedded map)."""
    return MapSurface(
        container,
        center=LatLng(lat=center[0], lng=center[1]),
        zoom=zoom,
        min_zoom=min_zoom,
        max_zoom=max_zoom,
    )
