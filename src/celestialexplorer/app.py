"""NASA Explorer: Streamlit viewer for Earth, Moon, Mars and Mercury imagery."""

import html
import json
import os
import sys
from collections.abc import Callable

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv
from loguru import logger
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from celestialexplorer.catalog import earth_dates, iter_bodies  # noqa: E402
from celestialexplorer.chat import ChatSession  # noqa: E402
from celestialexplorer.coordinator import ViewCoordinator  # noqa: E402
from celestialexplorer.errors import (  # noqa: E402
    CoordinateErrorKind,
    ExplorerError,
    FlyToUnavailable,
    InvalidCoordinateInput,
)
from celestialexplorer.i18n import t  # noqa: E402
from celestialexplorer.models import BodyId, ImageScale, ViewMode, ViewState  # noqa: E402
from celestialexplorer.renderers.elevation_html import render_elevation_html  # noqa: E402
from celestialexplorer.renderers.leaflet_html import (  # noqa: E402
    SYNC_BUTTON_KEY,
    TILE_ERROR_KEY,
    VIEWPORT_KEY,
    render_map_html,
)

_MAP_HEIGHT = 640


# --- Logging ---
# The script reruns on every interaction; sinks are configured once per process.
@st.cache_resource
def _configure_logging() -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=os.environ.get("CELESTIAL_LOG_LEVEL", "INFO"),
        format="<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {message}",
    )
    log_file = os.environ.get("CELESTIAL_LOG_FILE")
    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            rotation="5 MB",
            retention="3 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {message}",
        )
    logger.info("NASA Explorer starting")


_configure_logging()

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect"
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="🛰️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# --- Session state initialization ---


def _log_state(state: ViewState) -> None:
    logger.debug(f"View state: {state}")


if "coordinator" not in st.session_state:
    st.session_state.coordinator = ViewCoordinator()
    st.session_state.coordinator.subscribe(_log_state)
if "chat" not in st.session_state:
    st.session_state.chat = ChatSession()
if "sync_seq" not in st.session_state:
    st.session_state.sync_seq = 0
if "tile_error_seq" not in st.session_state:
    st.session_state.tile_error_seq = None
if "flash" not in st.session_state:
    st.session_state.flash = None
if "clear_coords" not in st.session_state:
    st.session_state.clear_coords = False

coordinator: ViewCoordinator = st.session_state.coordinator
chat: ChatSession = st.session_state.chat

st.markdown(
    f"""
    <style>
    /* Hide streamlit_js_eval iframes and the map sync trigger */
    iframe[src*="streamlit_js_eval"] {{ display: none !important; }}
    .st-key-{SYNC_BUTTON_KEY} {{ display: none !important; }}
    [data-testid="stMainBlockContainer"] {{ padding-top: 1rem !important; }}
    /* Info box */
    .info-box {{
        background: rgba(31, 41, 55, 0.9);
        border-radius: 8px;
        padding: 0.75rem;
        font-size: 0.875rem;
        line-height: 1.6;
        color: #ffffff;
    }}
    .info-box p {{ margin: 0; }}
    </style>
    """,
    unsafe_allow_html=True,
)


# --- Browser feedback: map pan/zoom and tile errors ---
# A fresh js_eval key per sync_seq re-reads sessionStorage after each action.
def _apply_feedback(raw: str | None) -> None:
    if not raw:
        return
    payload = json.loads(raw)
    if payload.get("viewport"):
        vp = json.loads(payload["viewport"])
        coordinator.report_viewport(vp["lat"], vp["lng"], int(vp["zoom"]), epoch=vp.get("epoch"))
    if payload.get("tileError"):
        err = json.loads(payload["tileError"])
        if err.get("seq") != st.session_state.tile_error_seq:
            st.session_state.tile_error_seq = err.get("seq")
            coordinator.report_tile_error(int(err["generation"]), str(err["detail"]))


_apply_feedback(
    streamlit_js_eval(
        js_expressions=(
            "JSON.stringify({"
            f"viewport: window.parent.sessionStorage.getItem('{VIEWPORT_KEY}'), "
            f"tileError: window.parent.sessionStorage.getItem('{TILE_ERROR_KEY}')"
            "})"
        ),
        key=f"_map_feedback_{st.session_state.sync_seq}",
    )
)


def _error_message(error: ExplorerError) -> str:
    if isinstance(error, InvalidCoordinateInput):
        key = {
            CoordinateErrorKind.NOT_A_NUMBER: "error_not_a_number",
            CoordinateErrorKind.LATITUDE_OUT_OF_RANGE: "error_latitude",
            CoordinateErrorKind.LONGITUDE_OUT_OF_RANGE: "error_longitude",
        }[error.kind]
        return t(key, _lang)
    if isinstance(error, FlyToUnavailable):
        return t("error_fly_unavailable", _lang)
    return t("error_selection", _lang).format(error=html.escape(str(error)))


def _act(operation: Callable[..., object], *args: object) -> None:
    """Run one coordinator operation, record any validation error, and rerun."""
    try:
        operation(*args)
    except ExplorerError as e:
        logger.info(f"Rejected {operation.__name__}{args}: {e}")
        st.session_state.flash = _error_message(e)
    st.session_state.sync_seq += 1
    st.rerun()


state = coordinator.state

# --- Sidebar: controls ---
with st.sidebar:
    st.subheader(t("header_bodies", _lang))
    for body in iter_bodies():
        if st.button(
            f"{body.icon} {body.name}",
            key=f"body_{body.id.value}",
            type="primary" if body.id is state.body else "secondary",
            use_container_width=True,
        ):
            _act(coordinator.select_body, body.id)

    st.subheader(t("header_view", _lang))
    for mode, label in (
        (ViewMode.SATELLITE, t("view_satellite", _lang)),
        (ViewMode.ELEVATION, t("view_elevation", _lang)),
    ):
        if st.button(
            label,
            key=f"mode_{mode.value}",
            type="primary" if mode is state.mode else "secondary",
            use_container_width=True,
        ):
            _act(coordinator.select_mode, mode)

    # Date and fly-to only make sense for Earth's satellite imagery
    if state.body is BodyId.EARTH and state.mode is ViewMode.SATELLITE:
        dates = earth_dates()
        values = [d.value for d in dates]
        labels = {d.value: d.label for d in dates}
        chosen = st.selectbox(
            t("label_date", _lang),
            options=values,
            index=values.index(state.date) if state.date in values else 0,
            format_func=lambda v: labels[v],
        )
        if chosen != state.date:
            _act(coordinator.select_date, chosen)

        if st.session_state.clear_coords:
            st.session_state.lat_input = ""
            st.session_state.lng_input = ""
            st.session_state.clear_coords = False
        st.markdown(f"**{t('label_coords', _lang)}**")
        lat_col, lng_col = st.columns(2)
        with lat_col:
            lat_text = st.text_input(
                "lat",
                key="lat_input",
                placeholder=t("placeholder_lat", _lang),
                label_visibility="collapsed",
            )
        with lng_col:
            lng_text = st.text_input(
                "lng",
                key="lng_input",
                placeholder=t("placeholder_lng", _lang),
                label_visibility="collapsed",
            )
        if st.button(t("btn_fly_to", _lang), key="fly_btn", use_container_width=True):
            st.session_state.clear_coords = True
            try:
                coordinator.fly_to(lat_text, lng_text)
            except ExplorerError as e:
                st.session_state.clear_coords = False
                st.session_state.flash = _error_message(e)
            st.session_state.sync_seq += 1
            st.rerun()

    st.subheader(t("header_assistant", _lang))
    if st.button(t("btn_open_chat", _lang), key="chat_toggle", use_container_width=True):
        _act(coordinator.open_chat)

# Hidden trigger clicked by the map iframe after the user pans or zooms
if st.button("sync", key=SYNC_BUTTON_KEY):
    st.session_state.sync_seq += 1
    st.rerun()

# --- Messages ---
if st.session_state.flash:
    st.warning(st.session_state.flash)
    st.session_state.flash = None

if state.notice:
    notice_col, dismiss_col = st.columns([8, 1])
    with notice_col:
        st.warning(t("notice_tiles", _lang).format(error=html.escape(state.notice)))
    with dismiss_col:
        if st.button(t("btn_dismiss", _lang), key="dismiss_notice"):
            _act(coordinator.dismiss_notice)

# --- Main area: view, zoom controls, info box, chat panel ---
if state.chat_open:
    view_col, zoom_col, chat_col = st.columns([7, 0.6, 3.4])
else:
    view_col, zoom_col = st.columns([10, 0.6])
    chat_col = None

with view_col:
    if isinstance(state.zoom, ImageScale):
        components.html(
            render_elevation_html(coordinator.body, state.zoom.factor, height=_MAP_HEIGHT),
            height=_MAP_HEIGHT,
        )
    else:
        components.html(
            render_map_html(coordinator.surface, height=_MAP_HEIGHT),
            height=_MAP_HEIGHT,
        )
    rows = "".join(f"<p>{html.escape(line)}</p>" for line in coordinator.info_lines())
    st.markdown(f"<div class='info-box'>{rows}</div>", unsafe_allow_html=True)

with zoom_col:
    if st.button("➕", key="zoom_in", help=t("zoom_in", _lang)):
        _act(coordinator.zoom_in)
    if st.button("➖", key="zoom_out", help=t("zoom_out", _lang)):
        _act(coordinator.zoom_out)
    # Reset only appears in Elevation view
    if state.mode is ViewMode.ELEVATION:
        if st.button("⟲", key="zoom_reset", help=t("zoom_reset", _lang)):
            _act(coordinator.reset_zoom)

if chat_col is not None:
    with chat_col:
        title_col, close_col = st.columns([3, 1])
        with title_col:
            st.markdown(f"**{t('chat_title', _lang)}**")
        with close_col:
            if st.button(t("btn_close_chat", _lang), key="chat_close"):
                _act(coordinator.close_chat)
        with st.container(height=_MAP_HEIGHT - 160):
            for turn in chat.turns:
                with st.chat_message(turn.role):
                    st.markdown(turn.text)
        with st.form("chat_form", clear_on_submit=True):
            message = st.text_input(
                "message",
                placeholder=t("chat_waiting", _lang) if chat.sending else t("chat_placeholder", _lang),
                label_visibility="collapsed",
            )
            sent = st.form_submit_button("Send", use_container_width=True)
        if sent and message.strip():
            with st.spinner(t("chat_waiting", _lang)):
                chat.send(message)
            st.rerun()
