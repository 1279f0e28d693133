from __future__ import annotations

from pathlib import Path
from typing import Any

from gsw_yields.config import Settings, settings
from gsw_yields.datasets.gsw_file import read_gsw_csv
from gsw_yields.io_utils import ensure_dirs_exist, gsw_file_path, toy_panel_path


def describe_parameter_file(path: Path) -> dict[str, Any]:
    """
    Presence, row count and date span of a GSW-layout parameter file.
    """
    info: dict[str, Any] = {"path": path, "exists": path.exists()}
    if not info["exists"]:
        return info
    df = read_gsw_csv(path, validate=False)
    info["rows"] = int(len(df))
    info["first_date"] = df["date"].min().date() if len(df) else None
    info["last_date"] = df["date"].max().date() if len(df) else None
    info["three_factor_rows"] = int(df["TAU2"].isna().sum())
    return info


def data_status(cfg: Settings = settings) -> dict[str, dict[str, Any]]:
    """Create the data/output folders and report which parameter files are available."""
    ensure_dirs_exist([cfg.data_dir, cfg.raw_dir, cfg.processed_dir, cfg.output_dir])
    return {
        "feds200628": describe_parameter_file(gsw_file_path(cfg)),
        "toy_panel": describe_parameter_file(toy_panel_path(cfg)),
    }


def main() -> None:
    status = data_status()

    print("Created/checked folders under:", settings.data_dir, "and", settings.output_dir)
    for name, info in status.items():
        if not info["exists"]:
            print(f"{name}: missing ({info['path']})")
            continue
        print(
            f"{name}: {info['rows']} rows, {info['first_date']} to {info['last_date']}, "
            f"{info['three_factor_rows']} 3-factor rows ({info['path']})"
        )

    if not status["feds200628"]["exists"]:
        print("Place a downloaded feds200628.csv in", settings.raw_dir)
    if not status["toy_panel"]["exists"]:
        print("Build the synthetic panel with: python -m gsw_yields.build_toy_data")


if __name__ == "__main__":
    main()
