"""
Video Ad Material Dashboard - Core Modules
"""
from .metrics import NO_DATA, derive_rows, recent_roi, recent_spend
from .filters import FilterCriteria, apply_filters, parse_threshold
from .table_state import TableViewState, build_view, initial_state
from .customizer import reorder_selected, reset_columns, search_columns
from .mock_data import fetch_dashboard, fetch_materials
from .utils import fmt_currency, fmt_percent, fmt_number

__all__ = [
    'NO_DATA', 'derive_rows', 'recent_roi', 'recent_spend',
    'FilterCriteria', 'apply_filters', 'parse_threshold',
    'TableViewState', 'build_view', 'initial_state',
    'reorder_selected', 'reset_columns', 'search_columns',
    'fetch_dashboard', 'fetch_materials',
    'fmt_currency', 'fmt_percent', 'fmt_number'
]
