from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

import numpy as np

from .config import ScalerConfig
from .errors import IqrScaleError
from .model import RobustScalerModel


_log = logging.getLogger("iqrscale.cli")


def setup_logging(level: str = "WARNING") -> None:
    level_num = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level_num)
    root.handlers.clear()

    # stdout carries CSV output when no -o is given
    console = logging.StreamHandler(stream=sys.stderr)
    console.setLevel(level_num)
    console.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(console)


def _read_csv(path: str, skip_header: bool) -> np.ndarray[Any, Any]:
    return np.loadtxt(
        path,
        delimiter=",",
        dtype=np.float64,
        skiprows=1 if skip_header else 0,
        ndmin=2,
    )


def _write_csv(path: str | None, X: np.ndarray[Any, Any]) -> None:
    np.savetxt(path if path else sys.stdout, X, delimiter=",", fmt="%.17g")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="iqrscale",
        description="Fit and apply median/IQR feature scaling on CSV data.",
    )
    p.add_argument("--log-level", default="WARNING")
    sub = p.add_subparsers(dest="command", required=True)

    fit = sub.add_parser("fit", help="fit parameters and write them as JSON")
    fit.add_argument("data")
    fit.add_argument("-o", "--output", required=True)
    fit.add_argument(
        "--quantile-range", type=float, nargs=2, default=[25.0, 75.0]
    )
    fit.add_argument("--skip-header", action="store_true")

    for name, help_text in (
        ("transform", "scale data with saved parameters"),
        ("inverse", "undo scaling with saved parameters"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("data")
        cmd.add_argument("-p", "--params", required=True)
        cmd.add_argument("-o", "--output", default=None)
        cmd.add_argument("--skip-header", action="store_true")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        X = _read_csv(args.data, args.skip_header)
        if args.command == "fit":
            lo, hi = args.quantile_range
            model = RobustScalerModel(ScalerConfig(quantile_range=(lo, hi))).fit(X)
            info = model.save(args.output)
            _log.info("wrote %s (sha256 %s)", info["json_path"], info["sha256"])
        else:
            model = RobustScalerModel.load(args.params)
            if args.command == "transform":
                out = model.transform(X)
            else:
                out = model.inverse_transform(X)
            _write_csv(args.output, out)
    except (IqrScaleError, ValueError, OSError) as e:
        print(f"iqrscale: error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
