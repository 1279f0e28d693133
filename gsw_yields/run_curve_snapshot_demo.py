from __future__ import annotations

import argparse

from gsw_yields.config import PROJECT_ROOT, settings
from gsw_yields.curves.evaluator import gsw_forward_rate
from gsw_yields.curves.parameters import is_three_factor, make_parameters
from gsw_yields.curves.snapshot import curve_snapshot
from gsw_yields.io_utils import ensure_dirs_exist
from gsw_yields.plotting import get_pyplot, plot_series
from gsw_yields.runtime_utils import add_common_run_args, configure_logging, write_run_metadata


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Yield and price curve for one set of GSW parameters.")
    parser.add_argument("--beta0", type=float, default=5.0)
    parser.add_argument("--beta1", type=float, default=-2.0)
    parser.add_argument("--beta2", type=float, default=1.5)
    parser.add_argument("--beta3", type=float, default=None, help="Omit for the 3-factor model.")
    parser.add_argument("--tau1", type=float, default=2.5)
    parser.add_argument("--tau2", type=float, default=None, help="Omit for the 3-factor model.")
    parser.add_argument("--face-value", type=float, default=1.0)
    add_common_run_args(parser)
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.log_level)
    plt = None if args.no_plots else get_pyplot()

    ensure_dirs_exist([settings.output_dir])
    params = make_parameters(args.beta0, args.beta1, args.beta2, args.beta3, args.tau1, args.tau2)
    if params is None:
        parser.error("beta0, beta1, beta2 and tau1 are required")

    snap = curve_snapshot(params, face_value=args.face_value)
    model = "3-factor Nelson-Siegel" if is_three_factor(params) else "4-factor Svensson"
    print(f"Model: {model}")
    print(snap.to_string(index=False))

    mats = list(settings.snapshot_maturities)
    print("\nForward rates between consecutive maturities:")
    for t1, t2 in zip(mats[:-1], mats[1:]):
        print(f"  f({t1:>5} -> {t2:>5}) = {gsw_forward_rate(t1, t2, params):.6f}")

    if not args.no_plots:
        out_path = plot_series(
            plt,
            snap,
            x="maturity",
            ys=["yield"],
            title=f"GSW yield curve ({model})",
            ylabel="Yield (%)",
            out_path=settings.output_dir / "gsw_curve_snapshot.png",
        )
        print("Saved plot:", out_path)

    summary = {
        "model": model,
        "yield_short": float(snap["yield"].iloc[0]),
        "yield_long": float(snap["yield"].iloc[-1]),
    }
    metadata_path = write_run_metadata(
        output_dir=settings.output_dir,
        run_name="curve_snapshot_demo",
        args=args,
        summary=summary,
        project_root=PROJECT_ROOT,
    )
    print("Saved metadata:", metadata_path)


if __name__ == "__main__":
    main()
