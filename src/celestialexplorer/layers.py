"""Layer lifecycle: owns the single tile layer attached to the map."""

import itertools

from loguru import logger

from celestialexplorer.catalog import (
    ATTRIBUTION,
    DEFAULT_CENTER,
    DEFAULT_TILE_ZOOM,
    TILE_BOUNDS,
    TILE_SIZE,
    tile_url,
)
from celestialexplorer.errors import LayerLoadFailure
from celestialexplorer.models import BodyDescriptor, LatLng, TileLayer
from celestialexplorer.surface import RenderingSurface


class LayerManager:
    """Creates, swaps and releases the active tile layer.

    Each constructed layer carries a fresh generation number. Callbacks from
    the browser are tagged with the generation they belong to, so a late
    tile error from a superseded layer can be recognised and dropped.
    """

    def __init__(self, surface: RenderingSurface) -> None:
        self._surface = surface
        self._generations = itertools.count(1)
        self._active: TileLayer | None = None

    @property
    def active(self) -> TileLayer | None:
        return self._active

    def _build(self, body: BodyDescriptor, date: str) -> TileLayer:
        url = tile_url(body, date)
        return TileLayer(
            body_id=body.id,
            url=url,
            generation=next(self._generations),
            bounds=TILE_BOUNDS,
            attribution=ATTRIBUTION,
            tile_size=TILE_SIZE,
        )

    def swap_to(
        self, body: BodyDescriptor, date: str, preserve_viewport: bool = False
    ) -> TileLayer:
        """Replace the active layer with one for (body, date).

        The new layer is built before the old one is touched, so a failed
        build leaves the current layer attached. The viewport is recentered
        to the default global view unless `preserve_viewport` is set.

        Args:
            body: Body whose tile source to use.
            date: Imagery date; only consumed by date-parameterized sources.
            preserve_viewport: Keep the user's pan/zoom (Earth date change).

        Returns:
            The newly attached layer.

        Raises:
            LayerLoadFailure: When the tile URL cannot be resolved.
        """
        layer = self._build(body, date)
        self.release()
        self._surface.attach_layer(layer)
        self._active = layer
        if not preserve_viewport:
            self._surface.set_viewport(LatLng(*DEFAULT_CENTER), DEFAULT_TILE_ZOOM)
        logger.info(
            f"Attached {body.name} tile layer gen={layer.generation} date={date or '-'}"
            f"{' (viewport kept)' if preserve_viewport else ''}"
        )
        return layer

    def release(self) -> None:
        """Detach the active layer, if any. It is not kept for reuse."""
        if self._active is None:
            return
        self._surface.detach_layer(self._active)
        logger.debug(f"Released tile layer gen={self._active.generation}")
        self._active = None

    def report_load_failure(self, generation: int, detail: str) -> LayerLoadFailure | None:
        """Turn a browser tile error into a notice, or drop it when stale."""
        if self._active is None or generation != self._active.generation:
            logger.debug(f"Ignoring tile error from superseded layer gen={generation}")
            return None
        logger.warning(f"Tile load failure gen={generation}: {detail}")
        return LayerLoadFailure(detail, generation=generation)
