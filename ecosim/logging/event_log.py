"""
Narrative event log for the predator-prey grid.

Appends every turn's events to a plain-text file, one line per event,
prefixed with the turn that produced it:

    [turn 3] Herbivore #4 ate a plant at (7, 2).
    [turn 3] 5 new plant(s) spawned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ecosim.core.events import SimulationEvent


class EventLogger:
    """
    Appends turn events to a text file.

    Attributes:
        file_path: Path to the log file.
    """

    def __init__(self, file_path: str | Path):
        self.file_path = Path(file_path)
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def log_turn(self, turn: int, events: Iterable[SimulationEvent]) -> int:
        """
        Append one turn's events.

        Returns:
            Number of lines written.
        """
        lines = [f"[turn {turn}] {event.message}\n" for event in events]
        if lines:
            with open(self.file_path, "a", encoding="utf-8") as f:
                f.writelines(lines)
        return len(lines)

    def read_back(self) -> list[str]:
        """All logged lines, without trailing newlines."""
        if not self.file_path.exists():
            return []
        with open(self.file_path, "r", encoding="utf-8") as f:
            return [line.rstrip("\n") for line in f]
