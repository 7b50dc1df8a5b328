"""Tests for the layer lifecycle and marker managers."""

import pytest

from celestialexplorer.catalog import get_body
from celestialexplorer.errors import LayerLoadFailure
from celestialexplorer.layers import LayerManager
from celestialexplorer.markers import MarkerManager
from celestialexplorer.models import BodyId, LatLng
from celestialexplorer.surface import create_view


@pytest.fixture
def surface():
    return create_view("test-map", center=(20.0, 0.0), zoom=2, min_zoom=1, max_zoom=9)


class TestLayerManager:
    def test_swap_keeps_exactly_one_layer(self, surface):
        manager = LayerManager(surface)
        first = manager.swap_to(get_body("earth"), "2024-08-15")
        second = manager.swap_to(get_body("mars"), "2024-08-15")
        assert surface.layers == [second]
        assert manager.active is second
        assert second.generation > first.generation
        assert second.body_id is BodyId.MARS

    def test_earth_layer_uses_date(self, surface):
        layer = LayerManager(surface).swap_to(get_body("earth"), "2024-09-01")
        assert "/2024-09-01/" in layer.url

    def test_swap_recenters_by_default(self, surface):
        manager = LayerManager(surface)
        surface.set_viewport(LatLng(41.15, 20.16), 7)
        manager.swap_to(get_body("moon"), "")
        assert surface.center == LatLng(20.0, 0.0)
        assert surface.zoom == 2

    def test_swap_can_preserve_viewport(self, surface):
        manager = LayerManager(surface)
        manager.swap_to(get_body("earth"), "2024-08-15")
        surface.set_viewport(LatLng(41.15, 20.16), 7)
        manager.swap_to(get_body("earth"), "2024-07-01", preserve_viewport=True)
        assert surface.center == LatLng(41.15, 20.16)
        assert surface.zoom == 7

    def test_failed_build_keeps_previous_layer(self, surface):
        manager = LayerManager(surface)
        current = manager.swap_to(get_body("earth"), "2024-08-15")
        with pytest.raises(LayerLoadFailure):
            manager.swap_to(get_body("earth"), "")
        assert surface.layers == [current]
        assert manager.active is current

    def test_release(self, surface):
        manager = LayerManager(surface)
        manager.swap_to(get_body("moon"), "")
        manager.release()
        manager.release()
        assert surface.layers == []
        assert manager.active is None

    def test_load_failure_for_live_layer(self, surface):
        manager = LayerManager(surface)
        layer = manager.swap_to(get_body("moon"), "")
        failure = manager.report_load_failure(layer.generation, "404")
        assert isinstance(failure, LayerLoadFailure)
        assert failure.generation == layer.generation

    def test_load_failure_from_superseded_layer_is_ignored(self, surface):
        manager = LayerManager(surface)
        old = manager.swap_to(get_body("moon"), "")
        manager.swap_to(get_body("mars"), "")
        assert manager.report_load_failure(old.generation, "404") is None

    def test_load_failure_after_release_is_ignored(self, surface):
        manager = LayerManager(surface)
        layer = manager.swap_to(get_body("moon"), "")
        manager.release()
        assert manager.report_load_failure(layer.generation, "404") is None


class TestMarkerManager:
    def test_place_replaces_previous(self, surface):
        manager = MarkerManager(surface)
        manager.place(LatLng(1, 1))
        second = manager.place(LatLng(2, 2))
        assert list(surface.markers) == [second.handle]
        assert manager.current == second

    def test_clear(self, surface):
        manager = MarkerManager(surface)
        manager.place(LatLng(1, 1))
        manager.clear()
        manager.clear()
        assert surface.markers == {}
        assert manager.current is None

    def test_marker_style(self, surface):
        manager = MarkerManager(surface)
        marker = manager.place(LatLng(1, 1))
        _, style = surface.markers[marker.handle]
        assert style.color == "#FF4444"
        assert style.size == 18
