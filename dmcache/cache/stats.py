from __future__ import annotations
from typing import NamedTuple, Dict, Any


class StatsSnapshot(NamedTuple):
    """Final counters of one mode, in the column order of the results CSV."""
    mode_id: int
    read_words: int   # NRA
    write_words: int  # NWA
    read_hits: int    # NCRH
    read_misses: int  # NCRM
    write_hits: int   # NCWH
    write_misses: int # NCWM

    @property
    def reads(self) -> int:
        return self.read_hits + self.read_misses

    @property
    def writes(self) -> int:
        return self.write_hits + self.write_misses

    @property
    def read_hit_ratio(self) -> float:
        return self.read_hits / self.reads if self.reads else 0.0

    @property
    def write_hit_ratio(self) -> float:
        return self.write_hits / self.writes if self.writes else 0.0

    @property
    def hit_ratio(self) -> float:
        total = self.reads + self.writes
        return (self.read_hits + self.write_hits) / total if total else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode_ID": self.mode_id,
            "NRA": self.read_words,
            "NWA": self.write_words,
            "NCRH": self.read_hits,
            "NCRM": self.read_misses,
            "NCWH": self.write_hits,
            "NCWM": self.write_misses,
        }


class CacheStats:
    """Hit/miss and backing-memory traffic counters for one mode's run."""
    def __init__(self, mode_id: int):
        self.mode_id = mode_id
        self.read_words = 0
        self.write_words = 0
        self.read_hits = 0
        self.read_misses = 0
        self.write_hits = 0
        self.write_misses = 0

    def record_read_hit(self):
        self.read_hits += 1

    def record_read_miss(self):
        self.read_misses += 1

    def record_write_hit(self):
        self.write_hits += 1

    def record_write_miss(self):
        self.write_misses += 1

    def add_read_traffic(self, words: int):
        if words < 0:
            raise ValueError("Traffic counters cannot decrease.")
        self.read_words += words

    def add_write_traffic(self, words: int):
        if words < 0:
            raise ValueError("Traffic counters cannot decrease.")
        self.write_words += words

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            mode_id=self.mode_id,
            read_words=self.read_words,
            write_words=self.write_words,
            read_hits=self.read_hits,
            read_misses=self.read_misses,
            write_hits=self.write_hits,
            write_misses=self.write_misses,
        )
