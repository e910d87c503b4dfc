from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from adboard.columns import COLUMNS_BY_ID
from adboard.config import PAGE_SIZES
from adboard.customizer import (
    remove_selected,
    reorder_selected,
    reset_columns,
    search_columns,
    selected_columns,
    set_visible,
)
from adboard.filters import FilterCriteria
from adboard.metrics import window_samples
from adboard.overview import STAT_METRICS, format_stat, latest_value
from adboard.table_state import (
    TableView,
    go_to_page,
    next_page,
    previous_page,
    set_column_width,
    set_page_size,
    toggle_sort,
)
from adboard.time_window import parse_custom_minutes, window_label, window_options
from adboard.ui.charts import fig_sparkline
from adboard.utils import format_value

logger = logging.getLogger(__name__)

STATE_KEY = "table_state"
DETAIL_PAGE = "pages/1_Material_Detail.py"

SORT_ICONS = {"asc": "↑", "desc": "↓", None: "⇅"}


STYLES = """
<style>
#MainMenu, footer, .stDeployButton {
    display: none;
    visibility: hidden;
}

.page-title {
    font-size: 1.8rem;
    font-weight: 700;
    color: #0f172a;
    margin-bottom: 0.5rem;
}

.kpi-label {
    font-size: 0.78rem;
    color: #64748b;
    margin-bottom: 0.25rem;
}

.kpi-value {
    font-size: 1.35rem;
    font-weight: 600;
    color: #0f172a;
    line-height: 1.15;
}

.table-summary {
    color: #64748b;
    font-size: 0.85rem;
}
</style>
"""


# =============================================================================
# STATS CARDS
# =============================================================================

def render_view_field_selector() -> list[str]:
    """Multiselect bound to st.session_state['view_fields']."""
    labels = {m.id: m.label for m in STAT_METRICS}
    with st.popover("选择视图字段"):
        return st.multiselect(
            "显示的指标",
            options=[m.id for m in STAT_METRICS],
            format_func=labels.get,
            key="view_fields",
        )


def render_stats_cards(overview: dict, selected: list[str], active: set, window_minutes: int, now: int) -> set:
    """
    Render one card per selected metric; returns the metrics toggled on as
    highlight filters.
    """
    metrics = [m for m in STAT_METRICS if m.id in selected]
    if not metrics:
        st.caption("未选择任何视图字段。")
        return set()

    new_active = set()
    per_row = 5
    for start in range(0, len(metrics), per_row):
        cols = st.columns(per_row)
        for col, metric in zip(cols, metrics[start:start + per_row]):
            series = overview.get(metric.id, ())
            with col, st.container(border=True):
                st.markdown(
                    f"<div class='kpi-label'>{metric.label}</div>"
                    f"<div class='kpi-value'>{format_stat(metric, latest_value(series))}</div>",
                    unsafe_allow_html=True,
                )
                if window_samples(series, window_minutes, now):
                    st.plotly_chart(
                        fig_sparkline(series, window_minutes, now),
                        use_container_width=True,
                        config={"displayModeBar": False},
                        key=f"spark_{metric.id}",
                    )
                else:
                    st.caption("窗口内无数据")
                if metric.material_field is not None:
                    on = st.toggle(
                        "≥ 均值筛选",
                        value=metric.id in active,
                        key=f"card_filter_{metric.id}",
                    )
                    if on:
                        new_active.add(metric.id)
    return new_active


# =============================================================================
# FILTERS / WINDOW
# =============================================================================

def render_window_select(current: int) -> int:
    options = window_options(current) + ["custom"]
    choice = st.selectbox(
        "时间周期",
        options=options,
        index=options.index(current),
        format_func=lambda v: "自定义..." if v == "custom" else window_label(v),
        key="window_select",
    )
    if choice != "custom":
        return choice

    raw = st.text_input("请输入要查看的时间范围（分钟）", value=str(current), key="window_custom")
    minutes = parse_custom_minutes(raw)
    if minutes is None:
        st.warning("请输入正整数分钟数")
        return current
    return minutes


def render_filter_inputs() -> FilterCriteria:
    name = st.text_input("按名称筛选...", key="name_filter", label_visibility="collapsed", placeholder="按名称筛选...")
    with st.popover("高级筛选"):
        spend = st.text_input("消耗金额 ≥", key="spend_filter", placeholder="最小消耗金额")
        roi = st.text_input("ROI ≥", key="roi_filter", placeholder="最小ROI")
        recent_spend = st.text_input("近X分钟消耗金额 ≥", key="recent_spend_filter", placeholder="最小近期消耗金额")
        recent_roi = st.text_input("近X分钟ROI ≥", key="recent_roi_filter", placeholder="最小近期ROI")
    return FilterCriteria.from_inputs(
        spend=spend, roi=roi, recent_spend=recent_spend, recent_roi=recent_roi, name=name,
    )


# =============================================================================
# STATE CALLBACKS
# =============================================================================

def _update(fn, *args):
    st.session_state[STATE_KEY] = fn(st.session_state[STATE_KEY], *args)


def _set_width(column_id: str, widget_key: str):
    _update(set_column_width, column_id, st.session_state[widget_key])


def _set_page_size(total_rows: int):
    _update(set_page_size, st.session_state["page_size_select"], total_rows)


# =============================================================================
# COLUMN CUSTOMIZER
# =============================================================================

def render_column_customizer(window_minutes: int):
    state = st.session_state[STATE_KEY]
    with st.expander("显示字段"):
        left, right = st.columns(2)

        with left:
            query = st.text_input("请搜索", key="column_search", placeholder="请搜索")
            for choice in search_columns(state, query, window_minutes):
                st.checkbox(
                    choice.label,
                    value=choice.visible,
                    key=f"col_vis_{choice.id}_{choice.visible}",
                    on_change=_update,
                    args=(set_visible, choice.id, not choice.visible),
                )

        with right:
            selected = selected_columns(state)
            head, reset = st.columns([3, 1])
            head.markdown(f"**已添加 ({len(selected)})**")
            reset.button("重置", key="col_reset", on_click=_update, args=(reset_columns,))

            for i, cid in enumerate(selected):
                label = COLUMNS_BY_ID[cid].label(window_minutes)
                width = state.column_widths[cid]
                c_name, c_width, c_up, c_down, c_del = st.columns([4, 2, 1, 1, 1])
                c_name.write(label)
                width_key = f"col_width_{cid}_{width}"
                c_width.number_input(
                    "宽度", min_value=50, max_value=500, value=width, step=10,
                    key=width_key, label_visibility="collapsed",
                    on_change=_set_width, args=(cid, width_key),
                )
                c_up.button("↑", key=f"col_up_{cid}", disabled=i == 0,
                            on_click=_update, args=(reorder_selected, i, i - 1))
                c_down.button("↓", key=f"col_down_{cid}", disabled=i == len(selected) - 1,
                              on_click=_update, args=(reorder_selected, i, i + 1))
                c_del.button("✕", key=f"col_del_{cid}", on_click=_update, args=(remove_selected, cid))


# =============================================================================
# TABLE
# =============================================================================

def render_sort_control(view: TableView):
    sortable = [c for c in view.columns if c.sortable]
    if not sortable:
        return
    current = next((c.id for c in view.columns if c.sort), sortable[0].id)
    ids = [c.id for c in sortable]
    labels = {c.id: f"{c.label} {SORT_ICONS[c.sort]}" for c in sortable}
    col_select, col_btn = st.columns([4, 1])
    column_id = col_select.selectbox(
        "排序字段", ids, index=ids.index(current) if current in ids else 0,
        format_func=labels.get, key="sort_column", label_visibility="collapsed",
    )
    col_btn.button("切换排序", key="sort_toggle", on_click=_update, args=(toggle_sort, column_id))


def table_frame(view: TableView, window_minutes: int, now: int) -> pd.DataFrame:
    """Display values for the rows on the current page, one column per visible id."""
    records = []
    for row in view.rows:
        rec = {}
        for col in view.columns:
            if col.kind == "media":
                rec[col.id] = row.material.video_url
            elif col.kind == "action":
                rec[col.id] = row.id
            elif col.kind == "curve":
                curve = row.value(col.id) or ()
                rec[col.id] = [v for _, v in window_samples(curve, window_minutes, now)]
            else:
                rec[col.id] = format_value(col.kind, row.value(col.id))
        records.append(rec)
    return pd.DataFrame(records, columns=[c.id for c in view.columns])


def table_column_config(view: TableView) -> dict:
    config = {}
    for col in view.columns:
        if col.kind == "media":
            config[col.id] = st.column_config.LinkColumn(col.label, display_text="▶ 播放", width=col.width)
        elif col.kind == "action":
            config[col.id] = st.column_config.TextColumn("ID", width=col.width)
        elif col.kind == "curve":
            config[col.id] = st.column_config.LineChartColumn(col.label, width=col.width)
        else:
            config[col.id] = st.column_config.TextColumn(f"{col.label} {SORT_ICONS[col.sort]}" if col.sortable else col.label, width=col.width)
    return config


def render_table(view: TableView, window_minutes: int, now: int):
    if view.is_empty:
        st.info("没有找到结果。")
        return
    st.dataframe(
        table_frame(view, window_minutes, now),
        column_config=table_column_config(view),
        hide_index=True,
        use_container_width=True,
    )


def render_pagination(view: TableView):
    page = view.page
    c_total, c_prev, c_page, c_next, c_size = st.columns([4, 1, 1, 1, 2])
    c_total.markdown(f"<span class='table-summary'>共 {page.total_rows} 条记录</span>", unsafe_allow_html=True)
    c_prev.button("‹", key="page_prev", disabled=not page.can_previous,
                  on_click=_update, args=(previous_page, page.total_rows))
    c_page.markdown(f"**{page.page_index + 1}** / {page.page_count}")
    c_next.button("›", key="page_next", disabled=not page.can_next,
                  on_click=_update, args=(next_page, page.total_rows))
    c_size.selectbox(
        "每页",
        PAGE_SIZES,
        index=PAGE_SIZES.index(page.page_size),
        format_func=lambda n: f"{n}条/页",
        key="page_size_select",
        label_visibility="collapsed",
        on_change=_set_page_size,
        args=(page.total_rows,),
    )


def sync_page_index(view: TableView):
    """Store the clamped page index after the row count changed."""
    state = st.session_state[STATE_KEY]
    if state.page_index != view.page.page_index:
        st.session_state[STATE_KEY] = go_to_page(state, view.page.page_index, view.page.total_rows)


def render_detail_picker(view: TableView):
    """Open the detail page for one of the rows on screen."""
    if view.is_empty:
        return
    names = {r.id: r.material.name for r in view.rows}
    c_pick, c_go, _ = st.columns([2, 1, 5])
    material_id = c_pick.selectbox(
        "查看详情", list(names), format_func=names.get,
        key="detail_pick", label_visibility="collapsed",
    )
    if c_go.button("查看详情", key="detail_go"):
        st.session_state["detail_id"] = material_id
        st.switch_page(DETAIL_PAGE)
