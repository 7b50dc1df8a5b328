"""Simple two-language (en/ko) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "NASA 천체 탐색기",
        "en": "NASA Explorer",
    },
    "header_bodies": {
        "ko": "천체",
        "en": "Celestial Bodies",
    },
    "header_view": {
        "ko": "보기 모드",
        "en": "View Mode",
    },
    "view_satellite": {
        "ko": "위성 보기",
        "en": "Satellite View",
    },
    "view_elevation": {
        "ko": "지형도",
        "en": "Topography",
    },
    "label_date": {
        "ko": "날짜 선택 (지구)",
        "en": "Select Date (Earth)",
    },
    "label_coords": {
        "ko": "좌표로 이동",
        "en": "Go to Coordinates",
    },
    "placeholder_lat": {
        "ko": "위도 (41.15)",
        "en": "Lat (41.15)",
    },
    "placeholder_lng": {
        "ko": "경도 (20.16)",
        "en": "Lng (20.16)",
    },
    "btn_fly_to": {
        "ko": "위치로 이동",
        "en": "Go to Location",
    },
    "header_assistant": {
        "ko": "도우미",
        "en": "Assistant",
    },
    "btn_open_chat": {
        "ko": "AI 챗봇 열기",
        "en": "Open AI Chatbot",
    },
    "btn_close_chat": {
        "ko": "✖ 닫기",
        "en": "✖ Close",
    },
    "chat_title": {
        "ko": "NASA AI 도우미",
        "en": "NASA AI Assistant",
    },
    "chat_placeholder": {
        "ko": "우주, 행성, NASA 임무에 대해 물어보세요...",
        "en": "Ask about space, planets, or NASA missions...",
    },
    "chat_waiting": {
        "ko": "응답을 기다리는 중...",
        "en": "Waiting for response...",
    },
    "zoom_in": {
        "ko": "확대",
        "en": "Zoom in",
    },
    "zoom_out": {
        "ko": "축소",
        "en": "Zoom out",
    },
    "zoom_reset": {
        "ko": "확대 초기화",
        "en": "Reset Zoom",
    },
    "error_not_a_number": {
        "ko": "⚠️ 좌표는 숫자여야 해요. 소수점은 점(.)을 사용하세요.",
        "en": "⚠️ Coordinates must be numbers. Use dot (.) for decimals.",
    },
    "error_latitude": {
        "ko": "⚠️ 위도는 -60°에서 85° 사이여야 해요.",
        "en": "⚠️ Latitude must be between -60° and 85°.",
    },
    "error_longitude": {
        "ko": "⚠️ 경도는 -180°에서 180° 사이여야 해요.",
        "en": "⚠️ Longitude must be between -180° and 180°.",
    },
    "error_fly_unavailable": {
        "ko": "⚠️ 좌표 이동은 지구 위성 보기에서만 가능해요.",
        "en": "⚠️ Go to coordinates is only available for Earth in satellite view.",
    },
    "error_selection": {
        "ko": "⚠️ 선택할 수 없는 항목이에요. ({error})",
        "en": "⚠️ Invalid selection. ({error})",
    },
    "notice_tiles": {
        "ko": "일부 타일을 불러오지 못했어요. 천체나 날짜를 다시 선택해 보세요. ({error})",
        "en": "Some tiles failed to load. Re-select the body or date to retry. ({error})",
    },
    "btn_dismiss": {
        "ko": "닫기",
        "en": "Dismiss",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
