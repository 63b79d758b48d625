from __future__ import annotations

from typing import Any

import pandas as pd

HISTORY_COLUMNS = ["date", "open", "high", "low", "close", "volume"]


def history_frame(payload: Any) -> pd.DataFrame:
    """Flatten a ``{"history": {"day": [...]}}`` payload into an OHLCV frame."""
    history = payload.get("history") if isinstance(payload, dict) else None
    days = history.get("day") if isinstance(history, dict) else None
    if isinstance(days, dict):
        days = [days]
    if not days:
        return pd.DataFrame(columns=HISTORY_COLUMNS)

    frame = pd.DataFrame(days)
    keep_cols = [col for col in HISTORY_COLUMNS if col in frame]
    frame = frame[keep_cols].copy()
    if "date" in frame:
        frame["date"] = pd.to_datetime(frame["date"]).dt.date
    return frame.reset_index(drop=True)
