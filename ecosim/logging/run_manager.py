"""
Output folder for one predator-prey run.

    {base_dir}/{run_name}/
        config.json        settings the run started with
        metrics.csv        KPI row per turn
        events.log         narrative events, "[turn N] ..."
        snapshots/         turn_NNNN.json full states
        summary.json       final result (finalize)

`run_name` defaults to the start time. When that folder already exists
(two runs started within the same second) a `_1`, `_2`, ... suffix is added.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from ecosim.core.config import SimConfig, save_config
from ecosim.core.events import SimulationEvent
from ecosim.core.world import SimulationState
from ecosim.logging.csv_logger import CSVLogger
from ecosim.logging.event_log import EventLogger
from ecosim.logging.snapshot import SnapshotManager


CONFIG_FILE = "config.json"
METRICS_FILE = "metrics.csv"
EVENTS_FILE = "events.log"
SUMMARY_FILE = "summary.json"


class RunManager:
    """
    Owns a run folder and the three writers inside it.

    Attributes:
        run_dir: The run's folder.
        csv_logger: Per-turn KPI table.
        event_logger: Per-turn event lines.
        snapshot_manager: Full-state JSON snapshots.
    """

    def __init__(
        self,
        config: SimConfig,
        base_dir: Optional[str | Path] = None,
        run_name: Optional[str] = None,
    ):
        """
        Create the folder and store a copy of `config` in it.

        Args:
            config: Settings for the run.
            base_dir: Parent folder. None = config.viz.output_dir.
            run_name: Folder name. None = start time (YYYYmmdd_HHMMSS), made
                      unique under `base_dir`. An explicit name is used as is.
        """
        root = Path(base_dir if base_dir is not None else config.viz.output_dir)
        if run_name:
            self.run_dir = root / run_name
            self.run_dir.mkdir(parents=True, exist_ok=True)
        else:
            self.run_dir = _claim_run_dir(root, datetime.now().strftime("%Y%m%d_%H%M%S"))
        save_config(config, self.config_path)

        self.csv_logger = CSVLogger(self.run_dir / METRICS_FILE)
        self.event_logger = EventLogger(self.run_dir / EVENTS_FILE)
        self.snapshot_manager = SnapshotManager(self.run_dir)

    @property
    def config_path(self) -> Path:
        return self.run_dir / CONFIG_FILE

    @property
    def metrics_path(self) -> Path:
        return self.csv_logger.file_path

    @property
    def events_path(self) -> Path:
        return self.event_logger.file_path

    @property
    def snapshots_dir(self) -> Path:
        return self.snapshot_manager.snapshot_dir

    def log_turn(self, kpi_dict: dict, events: Iterable[SimulationEvent] = ()) -> None:
        """Record one turn: its KPI row and its events."""
        self.csv_logger.log_row(kpi_dict)
        self.event_logger.log_turn(kpi_dict.get("turn", 0), events)

    def save_snapshot(self, state: SimulationState) -> Path:
        return self.snapshot_manager.save(state)

    def finalize(self, summary: Optional[dict] = None) -> None:
        """Write summary.json. Without a summary nothing is written."""
        if summary is None:
            return
        with open(self.run_dir / SUMMARY_FILE, "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2, ensure_ascii=False)

    @staticmethod
    def list_runs(base_dir: str | Path) -> list[str]:
        """Names of the run folders under `base_dir`, sorted."""
        root = Path(base_dir)
        if not root.is_dir():
            return []
        return sorted(p.name for p in root.iterdir() if (p / CONFIG_FILE).is_file())

    def __repr__(self) -> str:
        return f"RunManager(run_dir='{self.run_dir}')"


def _claim_run_dir(root: Path, stem: str) -> Path:
    """Create and return `root/stem`, or the first free `root/stem_N`."""
    root.mkdir(parents=True, exist_ok=True)
    suffix = 0
    while True:
        candidate = root / (f"{stem}_{suffix}" if suffix else stem)
        try:
            candidate.mkdir()
            return candidate
        except FileExistsError:
            suffix += 1
