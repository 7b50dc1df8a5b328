"""Elevation renderer: one topography image, centred and scaled."""

import html

from celestialexplorer.models import BodyDescriptor

_BG = "#000000"


def render_elevation_html(body: BodyDescriptor, scale: float, height: int = 640) -> str:
    """Return an HTML page showing the body's elevation image at `scale`.

    Args:
        body: Body whose elevation image to show.
        scale: Image scale factor (1.0 = fit to frame).
        height: Frame height in pixels.

    Returns:
        HTML string suitable for st.components.v1.html().
    """
    image = body.elevation
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{ width: 100%; height: 100%; background: {_BG}; overflow: hidden; }}
#frame {{
    width: 100%;
    height: {height}px;
    display: flex;
    align-items: center;
    justify-content: center;
    overflow: hidden;
}}
#frame img {{
    max-width: 100%;
    max-height: 100%;
    object-fit: contain;
    transform: scale({scale:.4f});
    transition: transform 0.2s ease-out;
}}
</style>
</head>
<body>
<div id="frame">
  <img src="{html.escape(image.url)}" alt="{html.escape(image.caption)}" title="{html.escape(image.caption)}">
</div>
</body>
</html>"""
