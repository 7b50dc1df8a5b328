"""Tests for celestialexplorer.surface: the in-process map model."""

import pytest

from celestialexplorer.catalog import TILE_BOUNDS
from celestialexplorer.models import BodyId, LatLng, TileLayer
from celestialexplorer.surface import MarkerStyle, create_view


def _layer(generation: int) -> TileLayer:
    return TileLayer(
        body_id=BodyId.MOON,
        url="https://example.test/{z}/{y}/{x}.jpg",
        generation=generation,
        bounds=TILE_BOUNDS,
        attribution="NASA",
        tile_size=256,
    )


@pytest.fixture
def surface():
    return create_view("test-map", center=(20.0, 0.0), zoom=2, min_zoom=1, max_zoom=9)


def test_create_view(surface):
    assert surface.center == LatLng(20.0, 0.0)
    assert surface.zoom == 2
    assert surface.layers == []
    assert surface.markers == {}


def test_zoom_stepping_is_clamped(surface):
    seen = []
    surface.on_zoom_changed(seen.append)
    for _ in range(10):
        surface.zoom_in()
    assert surface.zoom == 9
    for _ in range(10):
        surface.zoom_out()
    assert surface.zoom == 1
    # Listeners fire only on actual changes
    assert seen == [3, 4, 5, 6, 7, 8, 9, 8, 7, 6, 5, 4, 3, 2, 1]


def test_unsubscribe_stops_notifications(surface):
    seen = []
    unsubscribe = surface.on_zoom_changed(seen.append)
    unsubscribe()
    surface.zoom_in()
    assert seen == []


def test_detach_unknown_layer_raises(surface):
    with pytest.raises(KeyError):
        surface.detach_layer(_layer(1))


def test_attach_is_idempotent(surface):
    layer = _layer(1)
    surface.attach_layer(layer)
    surface.attach_layer(layer)
    assert surface.layers == [layer]


def test_remove_unknown_marker_raises(surface):
    with pytest.raises(KeyError):
        surface.remove_marker(42)


def test_marker_handles_are_unique(surface):
    first = surface.place_marker(LatLng(1, 1), MarkerStyle())
    second = surface.place_marker(LatLng(2, 2), MarkerStyle())
    assert first != second
    surface.remove_marker(first)
    assert list(surface.markers) == [second]


def test_animate_to_queues_fly_until_reported(surface):
    surface.animate_to(LatLng(41.15, 20.16), 7, 1.5)
    assert surface.center == LatLng(41.15, 20.16)
    assert surface.zoom == 7
    fly = surface.pending_fly_to
    assert fly is not None
    assert fly.start == LatLng(20.0, 0.0)
    assert fly.start_zoom == 2
    assert fly.zoom == 7
    assert fly.duration == 1.5
    # A report rendered before the flight does not land it
    assert not surface.report_viewport(LatLng(0, 0), 2, epoch=surface.viewport_epoch - 1)
    assert surface.pending_fly_to == fly
    assert surface.report_viewport(LatLng(41.15, 20.16), 7, epoch=surface.viewport_epoch)
    assert surface.pending_fly_to is None


def test_programmatic_move_drops_pending_fly(surface):
    surface.animate_to(LatLng(41.15, 20.16), 7, 1.5)
    surface.zoom_out()
    assert surface.pending_fly_to is None
    surface.animate_to(LatLng(10, 10), 7, 1.5)
    surface.set_viewport(LatLng(20.0, 0.0), 2)
    assert surface.pending_fly_to is None


def test_report_viewport_with_stale_epoch_is_ignored(surface):
    epoch = surface.viewport_epoch
    surface.set_viewport(LatLng(0, 0), 4)
    assert not surface.report_viewport(LatLng(10, 10), 6, epoch=epoch)
    assert surface.center == LatLng(0, 0)
    assert surface.zoom == 4
    assert surface.report_viewport(LatLng(10, 10), 6, epoch=surface.viewport_epoch)
    assert surface.zoom == 6


def test_report_viewport_keeps_anchor(surface):
    surface.set_viewport(LatLng(5, 5), 3)
    surface.report_viewport(LatLng(30, 40), 5)
    assert surface.center == LatLng(30, 40)
    assert surface.anchor == (LatLng(5, 5), 3)
    # Content change re-anchors to the latest known viewport
    surface.attach_layer(_layer(1))
    assert surface.anchor == (LatLng(30, 40), 5)


def test_clear_drops_everything(surface):
    seen = []
    surface.on_zoom_changed(seen.append)
    surface.attach_layer(_layer(1))
    surface.place_marker(LatLng(1, 1), MarkerStyle())
    surface.clear()
    surface.zoom_in()
    assert surface.layers == []
    assert surface.markers == {}
    assert seen == []
