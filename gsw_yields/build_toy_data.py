from __future__ import annotations

import argparse

from gsw_yields.config import PROJECT_ROOT, settings
from gsw_yields.datasets.gsw_file import write_gsw_csv
from gsw_yields.datasets.toy_gsw import generate_toy_gsw_panel
from gsw_yields.io_utils import ensure_dirs_exist, toy_panel_path
from gsw_yields.runtime_utils import configure_logging, write_run_metadata


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a synthetic GSW parameter panel.")
    parser.add_argument("--seed", type=int, default=123)
    parser.add_argument("--start-date", type=str, default=settings.start_date)
    parser.add_argument("--end-date", type=str, default=settings.end_date)
    parser.add_argument(
        "--svensson-from",
        type=str,
        default="1983-01-01",
        help="First date with BETA3/TAU2 (earlier rows are 3-factor).",
    )
    parser.add_argument("--missing-prob", type=float, default=0.002)
    parser.add_argument("--metadata-tag", type=str, default="")
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging()
    ensure_dirs_exist([settings.processed_dir, settings.output_dir])

    df = generate_toy_gsw_panel(
        start=args.start_date,
        end=args.end_date,
        seed=args.seed,
        svensson_from=args.svensson_from,
        missing_prob=args.missing_prob,
    )

    out_path = write_gsw_csv(df, toy_panel_path())

    print("Saved:", out_path)
    print("Rows:", len(df))
    print(df.head(10).to_string(index=False))

    summary = {
        "rows": int(len(df)),
        "start_date": args.start_date,
        "end_date": args.end_date,
        "three_factor_rows": int(df["TAU2"].isna().sum()),
        "rows_missing_core": int(df["BETA0"].isna().sum()),
    }
    metadata_path = write_run_metadata(
        output_dir=settings.output_dir,
        run_name="build_toy_data",
        args=args,
        summary=summary,
        project_root=PROJECT_ROOT,
    )
    print("Saved metadata:", metadata_path)


if __name__ == "__main__":
    main()
