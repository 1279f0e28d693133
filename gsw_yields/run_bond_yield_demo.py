from __future__ import annotations

import argparse

import pandas as pd

from gsw_yields.bonds.ytm import bond_yield, bond_yield_excel
from gsw_yields.config import PROJECT_ROOT, settings
from gsw_yields.io_utils import ensure_dirs_exist
from gsw_yields.runtime_utils import configure_logging, write_run_metadata


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Yield-to-maturity examples (plain and Excel YIELD style).")
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument("--metadata-tag", type=str, default="")
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.log_level)
    ensure_dirs_exist([settings.output_dir])

    plain = pd.DataFrame(
        [
            ("discount", 950.0, 1000.0, 0.05, 3.5, 2),
            ("par", 1000.0, 1000.0, 0.06, 5.0, 2),
            ("premium", 1050.0, 1000.0, 0.05, 10.0, 2),
            ("quarterly", 980.0, 1000.0, 0.04, 2.0, 4),
            ("annual", 1020.0, 1000.0, 0.03, 5.0, 1),
        ],
        columns=["bond", "price", "face_value", "coupon_rate", "years", "freq"],
    )
    plain["ytm"] = [
        bond_yield(r.price, r.face_value, r.coupon_rate, r.years, r.freq) for r in plain.itertuples()
    ]
    print(plain.to_string(index=False))

    excel = pd.DataFrame(
        [
            ("2008-02-15", "2016-11-15", 0.0575, 95.04287),
            ("2014-04-24", "2015-12-01", 0.04, 105.46),
            ("2013-10-08", "2020-09-01", 0.05, 116.76),
            ("2014-07-31", "2032-05-15", 0.05, 114.083),
        ],
        columns=["settlement", "maturity", "coupon_rate", "price"],
    )
    excel["ytm"] = [
        bond_yield_excel(r.settlement, r.maturity, r.coupon_rate, r.price, 100.0, frequency=2, basis=0)
        for r in excel.itertuples()
    ]
    print()
    print(excel.to_string(index=False))

    summary = {
        "plain": dict(zip(plain["bond"], plain["ytm"].round(6))),
        "excel": [round(float(y), 6) for y in excel["ytm"]],
    }
    metadata_path = write_run_metadata(
        output_dir=settings.output_dir,
        run_name="bond_yield_demo",
        args=args,
        summary=summary,
        project_root=PROJECT_ROOT,
    )
    print("Saved metadata:", metadata_path)


if __name__ == "__main__":
    main()
