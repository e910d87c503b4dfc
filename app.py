"""
Video Ad Material Dashboard - Main Entry Point
Stats cards and material table over mocked reporting data
"""
import logging
from datetime import date

import streamlit as st

from adboard.config import load_config
from adboard.data_loader import LoadTracker, load_dashboard
from adboard.filters import apply_filters, apply_highlights
from adboard.io.export import export_csv, export_json, rows_to_frame
from adboard.logging_config import configure_logging
from adboard.metrics import derive_rows, now_ms
from adboard.overview import STAT_METRICS, highlight_thresholds
from adboard.table_state import build_view, initial_state
from adboard.ui.components import (
    STATE_KEY,
    STYLES,
    render_column_customizer,
    render_detail_picker,
    render_filter_inputs,
    render_pagination,
    render_sort_control,
    render_stats_cards,
    render_table,
    render_view_field_selector,
    render_window_select,
    sync_page_index,
)

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="视频广告素材数据",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="collapsed",
)
st.markdown(STYLES, unsafe_allow_html=True)


def init_session(cfg):
    """Session-scoped state; survives reloads of the material list."""
    if "load_tracker" not in st.session_state:
        st.session_state["load_tracker"] = LoadTracker()
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = initial_state(page_size=cfg.default_page_size)
    if "window_minutes" not in st.session_state:
        st.session_state["window_minutes"] = cfg.default_window
    if "view_fields" not in st.session_state:
        st.session_state["view_fields"] = [m.id for m in STAT_METRICS]
    if "active_cards" not in st.session_state:
        st.session_state["active_cards"] = set()


def main():
    cfg = load_config()
    init_session(cfg)
    tracker = st.session_state["load_tracker"]

    st.markdown('<p class="page-title">视频广告素材数据</p>', unsafe_allow_html=True)

    # Controls
    c_date, c_window, c_fields = st.columns([2, 2, 2])
    with c_date:
        day = st.date_input("日期", value=date.today(), key="day")
    with c_window:
        window = render_window_select(st.session_state["window_minutes"])
        st.session_state["window_minutes"] = window
    with c_fields:
        selected_fields = render_view_field_selector()

    # Load on date or window change
    key = (day.isoformat(), window)
    if tracker.needs_load(key):
        with st.spinner("加载中..."):
            load_dashboard(tracker, day, window, cfg)

    state = tracker.state
    if state.error:
        st.error(state.error)
        if st.button("重试", key="retry_load"):
            with st.spinner("加载中..."):
                load_dashboard(tracker, day, window, cfg)
            st.rerun()
        return
    if state.data is None:
        st.info("暂无数据。")
        return

    data = state.data
    now = now_ms()

    # Stats cards
    active = render_stats_cards(
        data.overview, selected_fields, st.session_state["active_cards"], window, now,
    )
    st.session_state["active_cards"] = active

    # Filter -> derive -> sort/paginate
    materials = apply_highlights(data.materials, highlight_thresholds(active, data.overview))

    st.divider()
    c_name, c_sort = st.columns([1, 1])
    with c_name:
        criteria = render_filter_inputs()
    render_column_customizer(window)

    filtered = apply_filters(materials, criteria, window, now)
    rows = derive_rows(filtered, window, now)
    view = build_view(st.session_state[STATE_KEY], rows, window_minutes=window)
    sync_page_index(view)

    with c_sort:
        render_sort_control(view)

    render_table(view, window, now)
    render_pagination(view)
    render_detail_picker(view)

    # Export the whole filtered view, not just this page
    if view.sorted_rows:
        export_df = rows_to_frame(view.sorted_rows, [c.id for c in view.columns], window)
        stamp = day.strftime("%Y%m%d")
        d1, d2, _ = st.columns([1, 1, 6])
        d1.download_button("下载 CSV", export_csv(export_df), file_name=f"materials_{stamp}.csv")
        d2.download_button("下载 JSON", export_json(export_df), file_name=f"materials_{stamp}.json")


if __name__ == "__main__":
    main()
