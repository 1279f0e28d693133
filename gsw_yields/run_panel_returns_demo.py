from __future__ import annotations

import argparse

import pandas as pd

from gsw_yields.config import PROJECT_ROOT, settings
from gsw_yields.io_utils import ensure_dirs_exist, load_toy_panel
from gsw_yields.panel.columns import return_column_name
from gsw_yields.panel.operators import add_excess_returns, add_prices, add_returns, add_yields
from gsw_yields.plotting import get_pyplot, plot_series
from gsw_yields.runtime_utils import add_common_run_args, configure_logging, write_run_metadata


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Yields, prices and returns across the GSW parameter panel.")
    parser.add_argument("--maturities", type=float, nargs="+", default=[0.5, 1, 2, 5, 10])
    parser.add_argument("--return-maturity", type=float, default=10.0)
    parser.add_argument("--frequency", type=str, default="daily", choices=["daily", "monthly", "annual"])
    parser.add_argument("--kind", type=str, default="log", choices=["log", "arithmetic"])
    parser.add_argument("--risk-free-maturity", type=float, default=settings.risk_free_maturity)
    add_common_run_args(parser)
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.log_level)
    plt = None if args.no_plots else get_pyplot()

    ensure_dirs_exist([settings.output_dir])
    df = load_toy_panel()

    add_yields(df, args.maturities)
    add_prices(df, args.maturities, face_value=settings.panel_face_value)
    add_returns(df, args.return_maturity, frequency=args.frequency, kind=args.kind)
    add_excess_returns(
        df,
        args.return_maturity,
        risk_free_maturity=args.risk_free_maturity,
        frequency=args.frequency,
        kind=args.kind,
    )

    ret_col = return_column_name("ret", args.return_maturity, args.frequency)
    excess_col = return_column_name("excess_ret", args.return_maturity, args.frequency)
    yield_cols = [c for c in df.columns if c.startswith("yield_")]

    df["year"] = pd.to_datetime(df["date"]).dt.year
    stats = df.groupby("year").agg(
        mean_yield=(yield_cols[0], "mean"),
        vol_yield=(yield_cols[0], "std"),
        mean_ret=(ret_col, "mean"),
        vol_ret=(ret_col, "std"),
        mean_excess=(excess_col, "mean"),
    )
    print(stats.to_string())

    if not args.no_plots:
        out_path = plot_series(
            plt,
            df,
            x="date",
            ys=yield_cols,
            title="Synthetic GSW zero-coupon yields",
            ylabel="Yield (%)",
            out_path=settings.output_dir / "gsw_panel_yields.png",
        )
        print("Saved plot:", out_path)

    summary = {
        "rows": int(len(df)),
        "return_column": ret_col,
        "excess_column": excess_col,
        "missing_returns": int(df[ret_col].isna().sum()),
        "mean_return": float(df[ret_col].mean()),
    }
    metadata_path = write_run_metadata(
        output_dir=settings.output_dir,
        run_name="panel_returns_demo",
        args=args,
        summary=summary,
        project_root=PROJECT_ROOT,
    )
    print("Saved metadata:", metadata_path)


if __name__ == "__main__":
    main()
