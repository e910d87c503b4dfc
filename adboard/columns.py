"""
Column catalogue for the material table
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .config import DEFAULT_COLUMN_WIDTH, PINNED_COLUMNS


@dataclass(frozen=True)
class ColumnDef:
    id: str
    header: str
    kind: str
    sortable: bool = True
    width: int = DEFAULT_COLUMN_WIDTH

    @property
    def pinned(self) -> bool:
        return self.id in PINNED_COLUMNS

    def label(self, window_minutes: int | None = None) -> str:
        """Header text; recent columns embed the current window."""
        if "{minutes}" in self.header:
            minutes = window_minutes if window_minutes is not None else 30
            return self.header.format(minutes=minutes)
        return self.header


COLUMNS: Tuple[ColumnDef, ...] = (
    ColumnDef("preview", "预览", "media", sortable=False, width=100),
    ColumnDef("actions", "操作", "action", sortable=False, width=50),
    ColumnDef("name", "素材名称", "text"),
    ColumnDef("recent_spend", "近{minutes}分钟消耗", "currency"),
    ColumnDef("recent_roi", "近{minutes}分钟ROI", "ratio"),
    ColumnDef("consumption_curve", "消耗曲线", "curve", sortable=False, width=250),
    ColumnDef("roi_curve", "ROI曲线", "curve", sortable=False, width=250),
    ColumnDef("impressions", "整体展现次数", "number"),
    ColumnDef("clicks", "整体点击次数", "number"),
    ColumnDef("ctr", "整体点击率", "percent"),
    ColumnDef("conversion_rate", "整体转化率", "percent"),
    ColumnDef("orders", "整体成交订单数", "number"),
    ColumnDef("revenue", "整体成交金额", "currency"),
    ColumnDef("spend", "整体消耗", "currency"),
    ColumnDef("spend_ratio", "整体消耗占比", "percent"),
    ColumnDef("base_spend", "基础消耗", "currency"),
    ColumnDef("order_cost", "整体成交订单成本", "currency"),
    ColumnDef("roi", "整体支付ROI", "ratio"),
    ColumnDef("revenue_ratio", "整体成交金额占比", "percent"),
    ColumnDef("presale_amount", "整体预售订单金额", "currency"),
    ColumnDef("presale_orders", "整体预售订单数", "number"),
    ColumnDef("estimated_presale_amount", "整体未完结预售订单预估金额", "currency"),
    ColumnDef("coupon_amount", "整体成交智能优惠券金额", "currency"),
    ColumnDef("tool_effectiveness", "工具效果", "text"),
    ColumnDef("reinvestment_spend", "追投消耗", "currency"),
    ColumnDef("reinvestment_orders", "追投成交订单数", "number"),
    ColumnDef("reinvestment_revenue", "追投成交金额", "currency"),
    ColumnDef("reinvestment_roi", "追投ROI", "ratio"),
)

COLUMN_IDS: Tuple[str, ...] = tuple(c.id for c in COLUMNS)
COLUMNS_BY_ID: Dict[str, ColumnDef] = {c.id: c for c in COLUMNS}

# Kinds whose cell is a single comparable scalar
SCALAR_KINDS = ("number", "currency", "percent", "ratio", "text")


def get_column(column_id: str) -> ColumnDef:
    try:
        return COLUMNS_BY_ID[column_id]
    except KeyError:
        raise KeyError(f"Unknown column id '{column_id}'") from None
