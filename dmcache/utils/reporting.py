from __future__ import annotations
import json
from pathlib import Path
from typing import List, Dict, Any
import pandas as pd
from ..config import SimConfig
from ..cache.stats import StatsSnapshot
from ..runtime.simulator import ModeResult
from . import viz

CSV_COLUMNS = ["trace_file_name", "mode_ID", "NRA", "NWA", "NCRH", "NCRM", "NCWH", "NCWM"]

def format_stats_table(snapshots: List[StatsSnapshot]) -> str:
    """Console table of per-mode counters."""
    lines = ["\t----------------------\tSimulation results (statistics)\t----------------------", ""]
    for s in snapshots:
        lines.append(
            f"ID: {s.mode_id:<5}\tNCRH: {s.read_hits:<5}\tNCRM: {s.read_misses:<5}\t"
            f"NCWH: {s.write_hits:<5}\tNCWM: {s.write_misses:<5}\t"
            f"NRA: {s.read_words:<5}\tNWA: {s.write_words:<5}"
        )
    return "\n".join(lines)

def stats_dataframe(snapshots: List[StatsSnapshot], trace_name: str) -> pd.DataFrame:
    rows = [{"trace_file_name": trace_name, **s.to_dict()} for s in snapshots]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)

def write_csv(snapshots: List[StatsSnapshot], path: str, trace_name: str, header: bool = True):
    """Writes the results CSV, one row per mode."""
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    stats_dataframe(snapshots, trace_name).to_csv(output, index=False, header=header)

def _mode_row(result: ModeResult) -> Dict[str, Any]:
    s = result.stats
    row = s.to_dict()
    row.update({
        "block_size": result.mode.block_size,
        "block_count": result.mode.block_count,
        "cache_size": result.mode.cache_size,
        "write_policy": result.mode.write_policy,
        "reads": s.reads,
        "writes": s.writes,
        "read_hit_ratio": s.read_hit_ratio,
        "write_hit_ratio": s.write_hit_ratio,
        "hit_ratio": s.hit_ratio,
        "skipped": result.skipped,
    })
    return row

def generate_report_json(results: List[ModeResult], config: SimConfig) -> Dict[str, Any]:
    """Generates a JSON-compatible dictionary from the per-mode results."""
    modes = [_mode_row(r) for r in results]
    best = max(modes, key=lambda row: row["hit_ratio"]) if modes else None
    return {
        "trace_file": config.trace_file,
        "num_accesses": modes[0]["reads"] + modes[0]["writes"] + modes[0]["skipped"] if modes else 0,
        "best_mode": best["mode_ID"] if best else None,
        "modes": modes,
        "config": config.__dict__,
    }

def generate_report(results: List[ModeResult], config: SimConfig):
    """Generates the JSON report and traffic chart in config.report_dir."""
    report_data = generate_report_json(results, config)
    output_dir = Path(config.report_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(output_dir / "report.json", "w") as f:
        json.dump(report_data, f, indent=4)

    viz.export_traffic_chart(report_data['modes'], str(output_dir / "report.html"))

    print(viz.export_hit_ratio_ascii(report_data['modes']))
    if report_data['best_mode'] is not None:
        print(f"Best hit ratio: mode {report_data['best_mode']}")
    print(f"\nReports generated in {output_dir.absolute()}")
