"""Zoom model adapter: maps zoom in/out/reset onto whichever zoom is live.

Satellite mode steps the map's own discrete zoom (the surface clamps it).
Elevation mode scales a static image multiplicatively, so every step feels
the same size at any scale.
"""

from celestialexplorer.catalog import DEFAULT_CENTER, DEFAULT_TILE_ZOOM, MAX_TILE_ZOOM
from celestialexplorer.models import ImageScale, LatLng, TileZoom, Zoom
from celestialexplorer.surface import RenderingSurface

SCALE_STEP = 1.3
SCALE_MIN = 0.5
SCALE_MAX = 5.0
SCALE_DEFAULT = 1.0


def _clamp_scale(factor: float) -> float:
    return max(SCALE_MIN, min(SCALE_MAX, factor))


def zoom_in(zoom: Zoom, surface: RenderingSurface) -> Zoom:
    if isinstance(zoom, TileZoom):
        surface.zoom_in()
        return TileZoom(surface.zoom)
    return ImageScale(_clamp_scale(zoom.factor * SCALE_STEP))


def zoom_out(zoom: Zoom, surface: RenderingSurface) -> Zoom:
    if isinstance(zoom, TileZoom):
        surface.zoom_out()
        return TileZoom(surface.zoom)
    return ImageScale(_clamp_scale(zoom.factor / SCALE_STEP))


def reset_zoom(zoom: Zoom, surface: RenderingSurface) -> Zoom:
    if isinstance(zoom, TileZoom):
        surface.set_viewport(LatLng(*DEFAULT_CENTER), DEFAULT_TILE_ZOOM)
        return TileZoom(surface.zoom)
    return ImageScale(SCALE_DEFAULT)


def format_zoom(zoom: Zoom) -> str:
    """Human-readable zoom readout ("Zoom: 2/9" or "Zoom: 1.3x")."""
    if isinstance(zoom, TileZoom):
        return f"Zoom: {zoom.level}/{MAX_TILE_ZOOM}"
    return f"Zoom: {zoom.factor:.1f}x"
