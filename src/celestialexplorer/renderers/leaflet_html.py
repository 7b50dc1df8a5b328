"""Leaflet tiled-map renderer.

Produces a self-contained HTML page (Leaflet + JS) for embedding via
st.components.v1.html(). The page is built from the MapSurface
model: attached tile layers, placed markers, current viewport and an
optional fly-to animation to replay.

The iframe talks back through the parent page's sessionStorage (the
components iframe is same-origin):
  VIEWPORT_KEY    {"lat", "lng", "zoom", "epoch"} on load and after every
                  moveend, which also clicks the hidden sync button
  TILE_ERROR_KEY  {"generation", "detail", "seq"} on the first tile error
                  of each layer generation
"""

from __future__ import annotations

import json

from celestialexplorer.surface import MapSurface

VIEWPORT_KEY = "celestial_viewport"
TILE_ERROR_KEY = "celestial_tile_error"
SYNC_BUTTON_KEY = "map_sync"
SYNC_BUTTON_SELECTOR = f".st-key-{SYNC_BUTTON_KEY} button"

_LEAFLET_VERSION = "1.9.4"
_BG = "#000000"


def _layer_js(surface: MapSurface) -> str:
    layers = [
        {
            "url": layer.url,
            "generation": layer.generation,
            "attribution": layer.attribution,
            "tileSize": layer.tile_size,
            "bounds": [list(corner) for corner in layer.bounds],
        }
        for layer in surface.layers
    ]
    return json.dumps(layers)


def _marker_js(surface: MapSurface) -> str:
    markers = [
        {
            "lat": position.lat,
            "lng": position.lng,
            "color": style.color,
            "size": style.size,
            "border": style.border,
        }
        for position, style in surface.markers.values()
    ]
    return json.dumps(markers)


def render_map_html(surface: MapSurface, height: int = 640) -> str:
    """Return a self-contained HTML page with the Leaflet map.

    While a fly-to is queued the map opens at the animation's start and
    flies to its target. The page is identical on every render until the
    browser reports where it landed, so a rerun mid-flight leaves the
    iframe (and the running animation) alone.

    Args:
        surface: The map model to draw.
        height: Map height in pixels.

    Returns:
        HTML string suitable for st.components.v1.html().
    """
    fly = surface.pending_fly_to
    if fly is not None:
        start = {"lat": fly.start.lat, "lng": fly.start.lng, "zoom": fly.start_zoom}
        fly_js = json.dumps(
            {
                "lat": fly.center.lat,
                "lng": fly.center.lng,
                "zoom": fly.zoom,
                "duration": fly.duration,
            }
        )
    else:
        center, zoom = surface.anchor
        start = {"lat": center.lat, "lng": center.lng, "zoom": zoom}
        fly_js = "null"

    cdn = f"https://unpkg.com/leaflet@{_LEAFLET_VERSION}/dist"
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<link rel="stylesheet" href="{cdn}/leaflet.css">
<script src="{cdn}/leaflet.js"></script>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{ width: 100%; height: 100%; background: {_BG}; overflow: hidden; }}
#map {{ width: 100%; height: {height}px; background: {_BG}; }}
</style>
</head>
<body>
<div id="map"></div>
<script>
(function() {{
  var start = {json.dumps(start)};
  var fly = {fly_js};
  var layers = {_layer_js(surface)};
  var markers = {_marker_js(surface)};
  var store = null;
  try {{ store = window.parent.sessionStorage; }} catch (e) {{ store = null; }}

  var map = L.map("map", {{
    center: [start.lat, start.lng],
    zoom: start.zoom,
    minZoom: {surface.min_zoom},
    maxZoom: {surface.max_zoom},
    worldCopyJump: true,
    zoomControl: false
  }});

  layers.forEach(function(spec) {{
    var reported = false;
    var layer = L.tileLayer(spec.url, {{
      attribution: spec.attribution,
      tileSize: spec.tileSize,
      bounds: spec.bounds
    }});
    // Tag errors with the layer generation; Python drops stale ones.
    layer.on("tileerror", function(ev) {{
      if (reported || !store) return;
      reported = true;
      store.setItem("{TILE_ERROR_KEY}", JSON.stringify({{
        generation: spec.generation,
        detail: "Tile failed to load: " + ((ev.tile && ev.tile.src) || spec.url),
        seq: Date.now()
      }}));
    }});
    layer.addTo(map);
  }});

  markers.forEach(function(m) {{
    var half = m.size / 2;
    L.marker([m.lat, m.lng], {{
      icon: L.divIcon({{
        className: "custom-marker",
        html: '<div style="background:' + m.color + ';width:' + m.size + 'px;height:' + m.size +
              'px;border-radius:50%;border:' + m.border + ';box-shadow:0 0 8px rgba(0,0,0,0.5);"></div>',
        iconSize: [m.size, m.size],
        iconAnchor: [half, half]
      }})
    }}).addTo(map);
  }});

  function reportViewport() {{
    if (!store) return;
    var c = map.getCenter();
    store.setItem("{VIEWPORT_KEY}", JSON.stringify({{
      lat: c.lat, lng: c.lng, zoom: map.getZoom(), epoch: {surface.viewport_epoch}
    }}));
  }}
  // Wake Streamlit so the coordinator picks up the new viewport.
  function requestSync() {{
    try {{
      var btn = window.parent.document.querySelector("{SYNC_BUTTON_SELECTOR}");
      if (btn) btn.click();
    }} catch (e) {{}}
  }}
  if (!fly) reportViewport();
  map.on("moveend", function() {{ reportViewport(); requestSync(); }});

  if (fly) {{
    map.flyTo([fly.lat, fly.lng], fly.zoom, {{ animate: true, duration: fly.duration }});
  }}
}})();
</script>
</body>
</html>"""
