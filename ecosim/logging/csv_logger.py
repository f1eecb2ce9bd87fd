"""
Per-turn KPI table for a predator-prey run.

One row per collected turn, columns in MetricsCollector.kpi_names() order.
The header goes in whenever a write starts on a missing or empty file, so
rows can be appended turn by turn while the run is still going.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from ecosim.simulation.metrics import MetricsCollector


class CSVLogger:
    """
    Turn KPIs in a CSV file.

        table = CSVLogger(run_dir / "metrics.csv")
        table.log_row(metrics.collect(state))     # after every turn
        table.log_all(metrics.history)            # or everything at the end

    Keys a row has beyond `columns` are dropped; missing ones are left blank.
    """

    def __init__(self, file_path: str | Path, columns: Optional[list[str]] = None):
        self.file_path = Path(file_path)
        self.columns = list(columns) if columns else MetricsCollector.kpi_names()
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def _write(self, rows: Iterable[dict], mode: str) -> int:
        fresh = mode == "w" or not self.file_path.exists() or self.file_path.stat().st_size == 0
        count = 0
        with open(self.file_path, mode, newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=self.columns, extrasaction="ignore")
            if fresh:
                writer.writeheader()
            for row in rows:
                writer.writerow(row)
                count += 1
        return count

    def log_row(self, kpi_dict: dict) -> None:
        self._write([kpi_dict], "a")

    def log_all(self, kpi_list: Iterable[dict]) -> int:
        """Replace the file with `kpi_list`. Returns the number of rows written."""
        return self._write(kpi_list, "w")

    def read_back(self) -> list[dict]:
        """Rows as dicts of strings (empty if nothing was logged yet)."""
        if not self.file_path.exists():
            return []
        with open(self.file_path, "r", newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))

    def read_frame(self) -> pd.DataFrame:
        """The table as a typed DataFrame, for charts."""
        if not self.file_path.exists():
            return pd.DataFrame(columns=self.columns)
        return pd.read_csv(self.file_path)
