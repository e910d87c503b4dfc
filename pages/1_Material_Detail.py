"""
Material Detail - Streamlit Page
Filename: pages/1_Material_Detail.py
"""
import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# Add parent directory to path for imports
root = Path(__file__).parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from adboard.columns import COLUMNS, SCALAR_KINDS, get_column
from adboard.metrics import MaterialRow, now_ms, recent_metrics
from adboard.ui.charts import ROI, SPEND, fig_curve
from adboard.utils import format_value

st.set_page_config(page_title="素材详情", page_icon="🎬", layout="wide")


def find_material(material_id):
    tracker = st.session_state.get("load_tracker")
    if tracker is None or tracker.state.data is None:
        return None
    return next((m for m in tracker.state.data.materials if m.id == material_id), None)


def main():
    material_id = st.query_params.get("id") or st.session_state.get("detail_id")
    material = find_material(material_id) if material_id else None

    if material is None:
        st.warning("⚠️ 未找到素材，请先在首页加载数据。")
        st.page_link("app.py", label="← 返回首页", icon="🏠")
        return

    window = st.session_state.get("window_minutes", 30)
    now = now_ms()
    row = MaterialRow(material, recent_metrics(material, window, now))

    st.title(f"🎬 {material.name}")
    st.caption(f"广告 ID: {material.id}")

    left, right = st.columns([1, 2])
    with left:
        st.video(material.video_url, muted=True, loop=True)
        m1, m2 = st.columns(2)
        m1.metric(get_column("recent_spend").label(window), format_value("currency", row.value("recent_spend")))
        m2.metric(get_column("recent_roi").label(window), format_value("ratio", row.value("recent_roi")))

    with right:
        st.plotly_chart(
            fig_curve(material.consumption_curve, window, now, "消耗曲线", color=SPEND),
            use_container_width=True,
        )
        st.plotly_chart(
            fig_curve(material.roi_curve, window, now, "ROI曲线", color=ROI),
            use_container_width=True,
        )

    st.subheader("全部指标")
    metrics = pd.DataFrame(
        [
            {"指标": c.label(window), "数值": format_value(c.kind, row.value(c.id))}
            for c in COLUMNS if c.kind in SCALAR_KINDS
        ]
    )
    st.dataframe(metrics, hide_index=True, use_container_width=True)
    st.page_link("app.py", label="← 返回列表", icon="📊")


main()
