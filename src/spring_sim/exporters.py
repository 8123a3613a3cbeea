"""
Export simulation results to CSV and JSON.

CSV columns (exact schema):
    t, x, v, a, KE, PE, E

Rows are comma-joined, newline-terminated, one per logged sample in log
order. The header line may be omitted.
"""

import csv
import json
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .logger import Logger
from .runner import SimulationResult
from .timeseries import TimeSeriesLog


CSV_COLUMNS = ["t", "x", "v", "a", "KE", "PE", "E"]


def write_csv(log: TimeSeriesLog, path: Path, header: Optional[Sequence[str]] = CSV_COLUMNS) -> None:
    """
    Write a log to CSV.

    Args:
        log: Samples to write.
        path: Output CSV path.
        header: Column names for the first line, or None to omit it.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', newline='') as f:
        writer = csv.writer(f, lineterminator='\n')
        writer.writerows(log.export_rows(header))

    Logger.log(f"Wrote {log.count()} samples to {path}", Logger.LogPriority.INFO)


def get_git_commit() -> Optional[str]:
    """Get current git commit hash if available."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if result.returncode == 0:
        return result.stdout.strip()[:12]
    return None


def export_metadata(result: SimulationResult, path: Path) -> None:
    """
    Export metadata JSON with config and summary.

    Args:
        result: Simulation result.
        path: Output JSON path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    final = result.final_snapshot
    metadata = {
        "timestamp": datetime.now().isoformat(),
        "git_commit": get_git_commit(),
        "config": result.config.to_dict(),
        "columns": CSV_COLUMNS,
        "summary": {
            "n_samples": result.log.count(),
            "n_steps": result.n_steps,
            "final_time": final.time,
            "final_displacement": final.displacement,
            "final_velocity": final.velocity,
            "initial_energy": result.initial_energy,
            "final_energy": result.final_energy,
            "max_energy": result.max_energy
        }
    }

    with open(path, 'w') as f:
        json.dump(metadata, f, indent=2)


def export_results(result: SimulationResult, out_dir: Path, run_name: str) -> dict:
    """
    Export all results to output directory.

    Args:
        result: Simulation result.
        out_dir: Output directory.
        run_name: Base name for output files.

    Returns:
        Dict with paths to exported files.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    csv_path = out_dir / f"{run_name}.csv"
    json_path = out_dir / f"{run_name}_metadata.json"

    header = CSV_COLUMNS if result.config.output.write_header else None
    write_csv(result.log, csv_path, header)
    export_metadata(result, json_path)

    return {
        "csv": str(csv_path),
        "metadata": str(json_path)
    }
