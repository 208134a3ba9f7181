from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from ..config import SimConfig
from ..cache.mode import CacheMode, generate_modes
from ..cache.state import CacheState
from ..cache.stats import CacheStats, StatsSnapshot
from ..cache.engine import CacheEngine, MalformedAccessError
from ..trace.reader import TraceRecord
from ..utils.logging import get_logger, set_debug

logger = get_logger("dmcache.runtime")


@dataclass
class ModeResult:
    mode: CacheMode
    stats: StatsSnapshot
    skipped: int = 0


def simulate_mode(mode: CacheMode, records: Iterable[TraceRecord], on_malformed: str = "error",
                  debug: bool = False) -> ModeResult:
    """
    Replays the access records through a fresh cache for one mode.

    With on_malformed="error" the first rejected access propagates its
    MalformedAccessError; with "skip" it is logged and left out of the stats.
    Per-access DEBUG lines are only emitted while this run has debug=True.
    """
    state = CacheState(mode)
    stats = CacheStats(mode.mode_id)
    engine = CacheEngine(mode, state, stats)
    skipped = 0

    set_debug("dmcache.engine", debug)
    try:
        for record in records:
            try:
                engine.access(record.kind, record.address)
            except MalformedAccessError as e:
                if on_malformed != "skip":
                    raise
                skipped += 1
                logger.warning("mode %d: skipping trace line %d: %s", mode.mode_id, record.lineno, e)
    finally:
        set_debug("dmcache.engine", False)

    return ModeResult(mode=mode, stats=stats.snapshot(), skipped=skipped)


def run(records: Sequence[TraceRecord], config: SimConfig) -> List[ModeResult]:
    """Runs every selected cache mode over the same trace, in mode order."""
    selected = set(config.modes)
    results = []
    for mode in generate_modes():
        if mode.mode_id not in selected:
            continue
        logger.info("Testing %s", mode.describe())
        result = simulate_mode(mode, records, on_malformed=config.on_malformed, debug=config.debug)
        if result.skipped:
            logger.warning("mode %d: %d malformed accesses skipped", mode.mode_id, result.skipped)
        results.append(result)
    return results
