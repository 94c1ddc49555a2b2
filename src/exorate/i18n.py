"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "외계행성 평가하기",
        "en": "Rate Real Exoplanets!",
    },
    "btn_sign_in": {
        "ko": "GitHub로 로그인",
        "en": "Sign in with GitHub",
    },
    "btn_sign_out": {
        "ko": "로그아웃 ({label})",
        "en": "Sign out ({label})",
    },
    "btn_reload": {
        "ko": "카탈로그 새로고침",
        "en": "Reload catalog",
    },
    "btn_submit": {
        "ko": "평가 제출",
        "en": "Submit Ratings",
    },
    "label_search": {
        "ko": "검색",
        "en": "Search",
    },
    "placeholder_search": {
        "ko": "행성 이름...",
        "en": "Planet name...",
    },
    "label_sort": {
        "ko": "정렬",
        "en": "Sort by",
    },
    "label_radius": {
        "ko": "반지름 (R⊕)",
        "en": "Radius (R⊕)",
    },
    "label_min_esi": {
        "ko": "최소 ESI",
        "en": "Min ESI",
    },
    "label_show_first": {
        "ko": "표시 개수",
        "en": "Show first",
    },
    "card_radius": {
        "ko": "반지름: {value:.2f} R⊕",
        "en": "Radius: {value:.2f} R⊕",
    },
    "card_temp": {
        "ko": "평형 온도: {value:.1f} K",
        "en": "Temperature: {value:.1f} K",
    },
    "card_star_temp": {
        "ko": "항성 온도: {value:.1f} K",
        "en": "Star Temp: {value:.1f} K",
    },
    "card_esi": {
        "ko": "🌍 ESI: {value:.3f}",
        "en": "🌍 ESI: {value:.3f}",
    },
    "card_stats": {
        "ko": "⭐️ 평균: {average:.2f} ({count}건)",
        "en": "⭐️ Avg: {average:.2f} ({count} ratings)",
    },
    "card_stats_pending": {
        "ko": "통계 불러오는 중…",
        "en": "Loading stats…",
    },
    "label_rating": {
        "ko": "거주 가능성 평가 (0–10)",
        "en": "Habitability Rating (0–10)",
    },
    "loading_catalog": {
        "ko": "NASA 카탈로그를 불러오는 중",
        "en": "Fetching the NASA catalog",
    },
    "error_catalog": {
        "ko": "행성 데이터를 불러오지 못했어요. ({error})",
        "en": "Failed to fetch exoplanet data. ({error})",
    },
    "empty_catalog": {
        "ko": "조건에 맞는 행성이 없어요.",
        "en": "No planets match these filters.",
    },
    "sign_in_required": {
        "ko": "평가를 제출하려면 먼저 로그인하세요!",
        "en": "Please Sign In before submitting your ratings!",
    },
    "submit_thanks": {
        "ko": "평가해 주셔서 감사합니다! 🚀",
        "en": "Thanks for rating! 🚀",
    },
    "submit_partial": {
        "ko": "일부 평가를 저장하지 못했어요: {names}",
        "en": "Some ratings could not be saved: {names}",
    },
    "ratings_disabled": {
        "ko": "평가 저장소가 설정되지 않아 평가 기능이 꺼져 있어요.",
        "en": "Ratings are disabled: no ratings backend is configured.",
    },
}


def t(key: str, lang: str, **kwargs: object) -> str:
    """Return the translated string for key in lang, formatted with kwargs.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    text = entry.get(lang) or entry.get("en") or key
    return text.format(**kwargs) if kwargs else text
