"""ExoRate — Streamlit app for browsing and rating real exoplanets."""

import asyncio
import html
import logging

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from exorate.aggregator import RatingAggregator  # noqa: E402
from exorate.catalog import CatalogError, load_catalog  # noqa: E402
from exorate.config import configure_logging, load_settings  # noqa: E402
from exorate.i18n import t  # noqa: E402
from exorate.models import CatalogQuery, SessionInfo, SortField  # noqa: E402
from exorate.query import clamp_display_count, filter_records  # noqa: E402
from exorate.ratings import MAX_RATING, MIN_RATING, RatingsBackend  # noqa: E402
from exorate.renderers.plotly_scatter import render_catalog_scatter  # noqa: E402
from exorate.state import ExplorerState  # noqa: E402
from exorate.submission import SignInRequiredError, SubmissionCoordinator  # noqa: E402

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# --- Language detection (browser-first via streamlit-js-eval) ---
# First run returns None; the rerun triggered by streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="🌍",
    layout="wide",
)

st.markdown(
    """
    <style>
    /* Hide streamlit_js_eval invisible iframe */
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
    }
    h1, h2, h3, p, label, [data-testid="stWidgetLabel"] p { color: #e8e8e8 !important; }
    .st-key-submit_btn button { width: 12rem !important; }
    </style>
    """,
    unsafe_allow_html=True,
)


# --- Session state initialization ---


def _build_backend() -> RatingsBackend | None:
    if not settings.ratings_enabled:
        return None
    return RatingsBackend(
        settings.supabase_url,
        settings.supabase_anon_key,
        table=settings.ratings_table,
        timeout=settings.http_timeout,
    )


if "explorer" not in st.session_state:
    _backend = _build_backend()
    _aggregator = (
        RatingAggregator(_backend, settings.max_concurrency) if _backend else None
    )
    st.session_state.explorer = ExplorerState(aggregator=_aggregator)
    st.session_state.coordinator = (
        SubmissionCoordinator(_backend, _aggregator, settings.max_concurrency)
        if _backend and _aggregator
        else None
    )
if "notice" not in st.session_state:
    st.session_state.notice = None

explorer: ExplorerState = st.session_state.explorer
coordinator: SubmissionCoordinator | None = st.session_state.coordinator


def _current_session() -> SessionInfo | None:
    """Signed-in user from Streamlit's OIDC login, or None."""
    if not st.user.get("is_logged_in", False):
        return None
    label = st.user.get("email") or st.user.get("name") or ""
    return SessionInfo(label=str(label))


def _on_rating_change(planet_name: str, widget_key: str) -> None:
    explorer.set_rating(planet_name, int(st.session_state[widget_key]))


session = _current_session()

# --- Catalog fetch (once per session, or on reload) ---
if not explorer.loaded:
    with st.spinner(t("loading_catalog", _lang)):
        try:
            explorer.replace_records(
                load_catalog(settings.catalog_url, timeout=settings.http_timeout)
            )
        except CatalogError as e:
            logger.warning("Catalog load failed: %s", e)
            explorer.fail_fetch(str(e))

# --- Header ---
st.title(t("page_title", _lang))

hcol1, hcol2, _ = st.columns([2, 2, 6])
with hcol1:
    if session is None:
        if st.button(t("btn_sign_in", _lang), key="sign_in_btn"):
            st.login("github")
    elif st.button(t("btn_sign_out", _lang, label=session.label), key="sign_out_btn"):
        st.logout()
with hcol2:
    if st.button(t("btn_reload", _lang), key="reload_btn"):
        explorer.loaded = False
        st.rerun()

if explorer.fetch_error:
    st.error(t("error_catalog", _lang, error=html.escape(explorer.fetch_error)))
if coordinator is None:
    st.info(t("ratings_disabled", _lang))

if st.session_state.notice:
    _kind, _message = st.session_state.notice
    getattr(st, _kind)(_message)
    st.session_state.notice = None

# --- Search, filter & sort controls ---
col1, col2, col3, col4, col5 = st.columns([3, 2, 3, 2, 1.5])
with col1:
    search_term = st.text_input(
        t("label_search", _lang),
        value=explorer.query.search_term,
        placeholder=t("placeholder_search", _lang),
    )
with col2:
    _sort_options = list(SortField)
    sort_field = st.selectbox(
        t("label_sort", _lang),
        _sort_options,
        index=_sort_options.index(explorer.query.sort_field),
        format_func=lambda f: f.value,
    )
with col3:
    min_radius, max_radius = st.slider(
        t("label_radius", _lang),
        min_value=0.0,
        max_value=10.0,
        value=(explorer.query.min_radius, explorer.query.max_radius),
        step=0.1,
    )
with col4:
    min_similarity = st.slider(
        t("label_min_esi", _lang),
        min_value=0.0,
        max_value=1.0,
        value=explorer.query.min_similarity,
        step=0.01,
    )

_draft_query = CatalogQuery(
    search_term=search_term,
    min_radius=min_radius,
    max_radius=max_radius,
    min_similarity=min_similarity,
    sort_field=sort_field,
    display_count=explorer.query.display_count,
)
_filtered_count = len(filter_records(explorer.records, _draft_query))
with col5:
    display_count = st.number_input(
        t("label_show_first", _lang),
        min_value=1,
        max_value=_filtered_count or 1,
        value=clamp_display_count(explorer.query.display_count, _filtered_count),
        step=1,
    )

explorer.query = CatalogQuery(
    search_term=search_term,
    min_radius=min_radius,
    max_radius=max_radius,
    min_similarity=min_similarity,
    sort_field=sort_field,
    display_count=int(display_count),
)

# --- Visible subset + lazy stat resolution ---
visible = explorer.visible()
if explorer.aggregator is not None:
    _pending = [p.name for p in visible if explorer.aggregator.is_pending(p.name)]
    if _pending:
        asyncio.run(explorer.aggregator.resolve(_pending))
        if explorer.query.sort_field is SortField.AVERAGE_RATING:
            visible = explorer.visible()

if not visible:
    if explorer.records:
        st.info(t("empty_catalog", _lang))
else:
    st.plotly_chart(render_catalog_scatter(visible), use_container_width=True)

    card_cols = st.columns(3)
    for i, planet in enumerate(visible):
        with card_cols[i % 3].container(border=True):
            st.subheader(planet.name)
            st.markdown(
                "  \n".join(
                    [
                        t("card_radius", _lang, value=planet.radius),
                        t("card_temp", _lang, value=planet.equilibrium_temp),
                        t("card_star_temp", _lang, value=planet.host_star_temp),
                        t("card_esi", _lang, value=planet.similarity_score),
                    ]
                )
            )
            if explorer.aggregator is None:
                continue
            stat = explorer.aggregator.get(planet.name)
            if stat is not None:
                st.markdown(
                    t("card_stats", _lang, average=stat.average, count=stat.count)
                )
            else:
                st.caption(t("card_stats_pending", _lang))
            st.slider(
                t("label_rating", _lang),
                min_value=MIN_RATING,
                max_value=MAX_RATING,
                value=explorer.draft_for(planet.name),
                step=1,
                key=f"rating::{i}::{planet.name}",
                on_change=_on_rating_change,
                args=(planet.name, f"rating::{i}::{planet.name}"),
            )

# --- Submission ---
if coordinator is not None:
    if st.button(t("btn_submit", _lang), key="submit_btn", disabled=session is None):
        try:
            report = asyncio.run(coordinator.submit(explorer.drafts, session))
        except SignInRequiredError:
            st.session_state.notice = ("warning", t("sign_in_required", _lang))
        else:
            if report.complete:
                st.session_state.notice = ("success", t("submit_thanks", _lang))
            else:
                st.session_state.notice = (
                    "warning",
                    t("submit_partial", _lang, names=", ".join(report.failed)),
                )
        st.rerun()
