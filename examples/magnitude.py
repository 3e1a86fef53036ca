from __future__ import annotations

import argparse
from pathlib import Path
import sys

import numpy as np

import vecplot


def main() -> None:
    parser = argparse.ArgumentParser(prog="magnitude", description="Plot series whose ticks need offset notation.")
    parser.add_argument("--out", type=Path, default=None, help="Write the SVG here instead of stdout.")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [chart] table.")
    args = parser.parse_args()

    config = vecplot.load_chart_config(args.config) if args.config else None

    x = np.linspace(0.000001, 0.000001000000001, 20)
    plotter = vecplot.plot("tiny magnitudes", "x", "y")
    plotter.scatter("", x=x, y=x)
    plotter.line("drift", x=x, y=x + 1e-16 * np.sin(np.arange(x.size)))

    if args.out is None:
        plotter.render(sys.stdout, config=config)
        return
    with args.out.open("w", encoding="utf-8") as f:
        plotter.render(f, config=config)


if __name__ == "__main__":
    main()
