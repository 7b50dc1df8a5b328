"""Body catalog: static imagery sources and metadata for each supported body."""

from collections.abc import Iterator

from celestialexplorer.errors import InvalidBodySelection, LayerLoadFailure
from celestialexplorer.models import (
    BodyDescriptor,
    BodyId,
    DateEntry,
    ElevationImage,
    TileSource,
)

INITIAL_DATE = "2024-08-15"

DEFAULT_CENTER = (20.0, 0.0)  # Global view, slightly north so landmasses fill the frame
DEFAULT_TILE_ZOOM = 2
MIN_TILE_ZOOM = 1
MAX_TILE_ZOOM = 9  # GIBS GoogleMapsCompatible_Level9 pyramid

FLY_TO_ZOOM = 7
FLY_TO_DURATION = 1.5  # Seconds

# Web-mercator usable band
TILE_BOUNDS = ((-85.0511, -180.0), (85.0511, 180.0))
TILE_SIZE = 256
ATTRIBUTION = "NASA"

_TREK = "https://trek.nasa.gov/tiles/{body}/EQ/{product}/1.0.0//default/default028mm/{{z}}/{{y}}/{{x}}.jpg"

_BODIES: dict[BodyId, BodyDescriptor] = {
    BodyId.EARTH: BodyDescriptor(
        id=BodyId.EARTH,
        name="Earth",
        icon="🌍",
        tiles=TileSource(
            url_template=(
                "https://gibs.earthdata.nasa.gov/wmts/epsg3857/best/"
                "VIIRS_SNPP_CorrectedReflectance_TrueColor/default/{date}/"
                "GoogleMapsCompatible_Level9/{z}/{y}/{x}.jpg"
            ),
            label="VIIRS/SNPP True Color",
            date_parameterized=True,
        ),
        elevation=ElevationImage(
            url="https://media.sciencephoto.com/image/e0500675/800wm",
            caption="Global Elevation Map",
            source_label="SRTM/ASTER Data",
        ),
        has_dates=True,
        dates=(
            DateEntry("2024-09-01", "2024-09-01 (September)"),
            DateEntry("2024-08-15", "2024-08-15 (August)"),
            DateEntry("2024-07-01", "2024-07-01 (July)"),
        ),
    ),
    BodyId.MOON: BodyDescriptor(
        id=BodyId.MOON,
        name="Moon",
        icon="🌙",
        tiles=TileSource(
            url_template=_TREK.format(
                body="Moon", product="LRO_WAC_Mosaic_Global_303ppd_v02"
            ),
            label="LRO WAC Global Mosaic",
        ),
        elevation=ElevationImage(
            url="https://pubs.usgs.gov/of/2006/1367/images/coverphoto.jpg",
            caption="Moon Topography",
            source_label="3D Elevation Model",
        ),
    ),
    BodyId.MARS: BodyDescriptor(
        id=BodyId.MARS,
        name="Mars",
        icon="🔴",
        tiles=TileSource(
            url_template=_TREK.format(
                body="Mars", product="Mars_Viking_MDIM21_ClrMosaic_global_232m"
            ),
            label="Viking MDIM Mosaic",
        ),
        elevation=ElevationImage(
            url="https://cdn.mos.cms.futurecdn.net/XdrsSzvjJB9bc5wTyFW3KV-1200-80.jpg.webp",
            caption="Mars Topography",
            source_label="MOLA Elevation Data",
        ),
    ),
    BodyId.MERCURY: BodyDescriptor(
        id=BodyId.MERCURY,
        name="Mercury",
        icon="☿",
        tiles=TileSource(
            url_template=_TREK.format(
                body="Mercury",
                product="Mercury_MESSENGER_MDIS_Basemap_LOI_Mosaic_Global_166m",
            ),
            label="MESSENGER MDIS Mosaic",
        ),
        elevation=ElevationImage(
            url="https://pressbooks.online.ucf.edu/app/uploads/sites/40/2018/12/OSC_Astro_09_05_MercuryTopo-1.jpg",
            caption="MLA Elevation Data",
            source_label="MESSENGER Laser Altimeter",
        ),
    ),
}


def get_body(body_id: BodyId | str) -> BodyDescriptor:
    """Look up a body descriptor.

    Args:
        body_id: BodyId member or its string value ("earth", "moon", ...).

    Returns:
        The matching BodyDescriptor.

    Raises:
        InvalidBodySelection: When the id is not in the catalog.
    """
    try:
        return _BODIES[BodyId(body_id)]
    except ValueError:
        raise InvalidBodySelection(body_id) from None


def iter_bodies() -> Iterator[BodyDescriptor]:
    """Yield every body in display order (Earth first)."""
    yield from _BODIES.values()


def earth_dates() -> tuple[DateEntry, ...]:
    return _BODIES[BodyId.EARTH].dates


def tile_url(body: BodyDescriptor, date: str) -> str:
    """Resolve a body's tile URL template, leaving {z}/{y}/{x} in place.

    Only date-parameterized sources (Earth) consume `date`; for every other
    body it is ignored.

    Raises:
        LayerLoadFailure: A date-parameterized source with an empty date.
    """
    source = body.tiles
    if not source.date_parameterized:
        return source.url_template
    if not date:
        raise LayerLoadFailure(f"{body.name} imagery requires a date")
    return source.url_template.replace("{date}", date)
