"""Data model definitions: explicit boundaries between catalog, view state, and render layers."""

from dataclasses import dataclass
from enum import Enum


class BodyId(str, Enum):
    """Supported celestial bodies."""

    EARTH = "earth"
    MOON = "moon"
    MARS = "mars"
    MERCURY = "mercury"


class ViewMode(str, Enum):
    """Presentation mode. Exactly one is active at a time."""

    SATELLITE = "satellite"  # Pannable tiled map
    ELEVATION = "elevation"  # Single static topography image


@dataclass(frozen=True)
class DateEntry:
    """A selectable imagery date (Earth only)."""

    value: str  # "YYYY-MM-DD", substituted into the tile URL
    label: str  # Display label for the date selector


@dataclass(frozen=True)
class TileSource:
    """Tiled imagery source for a body."""

    url_template: str  # {z}/{y}/{x} placeholders, plus {date} when date_parameterized
    label: str  # Product name shown in the info box
    date_parameterized: bool = False


@dataclass(frozen=True)
class ElevationImage:
    """Static topography image for a body."""

    url: str
    caption: str  # "Moon Topography"
    source_label: str  # Data source shown as date info in Elevation mode


@dataclass(frozen=True)
class BodyDescriptor:
    """Static record of imagery sources and metadata for one body."""

    id: BodyId
    name: str
    icon: str
    tiles: TileSource
    elevation: ElevationImage
    has_dates: bool = False
    dates: tuple[DateEntry, ...] = ()


@dataclass(frozen=True)
class LatLng:
    """Geographic position in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class TileZoom:
    """Discrete tile-pyramid zoom level. Live in Satellite mode."""

    level: int


@dataclass(frozen=True)
class ImageScale:
    """Continuous image scale factor. Live in Elevation mode."""

    factor: float


Zoom = TileZoom | ImageScale


@dataclass(frozen=True)
class TileLayer:
    """One constructed tile layer. Never reused after it is superseded."""

    body_id: BodyId
    url: str  # Resolved template, {z}/{y}/{x} still in place
    generation: int  # Monotonically increasing; identifies late callbacks
    bounds: tuple[tuple[float, float], tuple[float, float]]
    attribution: str
    tile_size: int


@dataclass(frozen=True)
class Marker:
    """A placed fly-to marker."""

    handle: int  # Surface-issued handle, used for removal
    position: LatLng


@dataclass(frozen=True)
class FlyTo:
    """A viewport animation waiting to be replayed by the renderer."""

    start: LatLng  # Viewport center before the animation
    start_zoom: int
    center: LatLng  # Target
    zoom: int
    duration: float  # Seconds


@dataclass(frozen=True)
class ViewState:
    """Single source of truth for what the viewer shows."""

    body: BodyId
    mode: ViewMode
    date: str  # Meaningful only for Earth in Satellite mode
    zoom: Zoom  # TileZoom in Satellite mode, ImageScale in Elevation mode
    marker: Marker | None = None
    chat_open: bool = False
    notice: str | None = None  # Latest non-fatal message (tile-load failure)
