import io
import json

import pandas as pd

from adboard.columns import SCALAR_KINDS, get_column


def rows_to_frame(rows, column_ids, window_minutes=None):
    """Raw values of the scalar columns among column_ids, headed by their labels."""
    cols = [get_column(c) for c in column_ids if get_column(c).kind in SCALAR_KINDS]
    records = [{c.label(window_minutes): r.value(c.id) for c in cols} for r in rows]
    df = pd.DataFrame(records, columns=[c.label(window_minutes) for c in cols])
    df.insert(0, "ID", [r.id for r in rows])
    return df


def export_csv(df):
    buffer = io.StringIO()
    df.to_csv(buffer, index=False)
    # BOM so spreadsheet apps pick up the Chinese headers
    return buffer.getvalue().encode("utf-8-sig")


def export_json(df):
    clean = df.astype(object).where(pd.notna(df), None)
    records = clean.to_dict(orient="records")
    return json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")
