"""
Snapshot manager for the predator-prey grid.

Saves and loads full state snapshots (JSON) per turn for later replay or
analysis, and can rebuild a SimulationState from one.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np

from ecosim.core.animal import Animal
from ecosim.core.obstacle import Obstacle
from ecosim.core.plant import Plant
from ecosim.core.position import Position
from ecosim.core.world import SimulationState


class SnapshotManager:
    """
    Saves and loads state snapshots as JSON files.

    Each snapshot is saved to: {output_dir}/snapshots/turn_{N:04d}.json

    Attributes:
        output_dir: Base output directory for the run.
    """

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        self.snapshot_dir = self.output_dir / "snapshots"
        self.snapshot_dir.mkdir(parents=True, exist_ok=True)

    def save(self, state: SimulationState) -> Path:
        """
        Save a snapshot of a state, named after its turn.

        Returns:
            Path to the saved snapshot file.
        """
        file_path = self.snapshot_dir / f"turn_{state.turn:04d}.json"

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(state.to_dict(), f, indent=2, ensure_ascii=False, default=_json_default)

        return file_path

    def load(self, turn: int) -> dict:
        """
        Load the snapshot dict for a specific turn.

        Raises:
            FileNotFoundError: If snapshot doesn't exist.
        """
        file_path = self.snapshot_dir / f"turn_{turn:04d}.json"
        if not file_path.exists():
            raise FileNotFoundError(f"Snapshot not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def load_state(self, turn: int) -> SimulationState:
        """Load a snapshot and rebuild the SimulationState (events and stats are not restored)."""
        return state_from_snapshot(self.load(turn))

    def list_snapshots(self) -> list[int]:
        """Sorted list of turn numbers with a snapshot on disk."""
        turns = []
        for p in self.snapshot_dir.glob("turn_*.json"):
            try:
                turns.append(int(p.stem.split("_")[1]))
            except (IndexError, ValueError):
                continue
        return sorted(turns)


def state_from_snapshot(snapshot: dict) -> SimulationState:
    """Rebuild a SimulationState from a snapshot dict."""
    return SimulationState(
        width=int(snapshot["width"]),
        height=int(snapshot["height"]),
        animals=tuple(Animal.from_dict(a) for a in snapshot.get("animals", [])),
        plants=tuple(Plant(Position(p["x"], p["y"])) for p in snapshot.get("plants", [])),
        obstacles=tuple(Obstacle(Position(o["x"], o["y"])) for o in snapshot.get("obstacles", [])),
        turn=int(snapshot.get("turn", 0)),
        next_animal_id=int(snapshot.get("next_animal_id", 0)),
    )


def _json_default(obj: Any) -> Any:
    """JSON serialization fallback for NumPy types."""
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
