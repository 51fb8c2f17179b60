"""CSV export of the financial trackers."""

import io
from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd


def export_filename(feature: str, on: Optional[date] = None) -> str:
    """e.g. ``wedding-budget-2024-05-01.csv``"""
    on = on or date.today()
    return f"{feature}-{on.isoformat()}.csv"


def rows_to_csv(rows: List[Dict[str, Any]]) -> str:
    """Render rows as CSV with a header taken from the first row's keys."""
    if not rows:
        raise ValueError("No data to export")
    df = pd.DataFrame(rows, columns=list(rows[0].keys()))
    buffer = io.StringIO()
    df.to_csv(buffer, index=False)
    return buffer.getvalue()
