"""Marker manager: at most one fly-to marker on the map."""

from loguru import logger

from celestialexplorer.models import LatLng, Marker
from celestialexplorer.surface import MarkerStyle, RenderingSurface

FLY_TO_MARKER = MarkerStyle()


class MarkerManager:
    def __init__(self, surface: RenderingSurface, style: MarkerStyle = FLY_TO_MARKER) -> None:
        self._surface = surface
        self._style = style
        self._marker: Marker | None = None

    @property
    def current(self) -> Marker | None:
        return self._marker

    def place(self, position: LatLng) -> Marker:
        """Replace the held marker with a new one at `position`."""
        self.clear()
        handle = self._surface.place_marker(position, self._style)
        self._marker = Marker(handle=handle, position=position)
        logger.debug(f"Placed marker {handle} at ({position.lat}, {position.lng})")
        return self._marker

    def clear(self) -> None:
        if self._marker is None:
            return
        self._surface.remove_marker(self._marker.handle)
        self._marker = None
