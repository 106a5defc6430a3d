# tools/plot_stream.py
import argparse
import csv
import math
from pathlib import Path

# Use a non-interactive backend that writes to files
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402


def to_float(v):
    try:
        return float(v)
    except (TypeError, ValueError):
        return math.nan


def read_means(path: Path):
    """Reads the index,mean rows written by CSVSink."""
    idx, means = [], []
    with path.open(newline="") as f:
        r = csv.DictReader(f)
        fieldnames = r.fieldnames or []
        if "mean" not in fieldnames:
            raise ValueError(f"{path} has no 'mean' column (columns: {fieldnames})")
        for i, row in enumerate(r):
            idx.append(int(row["index"]) if row.get("index") else i)
            means.append(to_float(row["mean"]))
    return idx, means


def plot(csv_path: Path, out_path: Path, title: str = "Moving mean") -> Path:
    idx, means = read_means(csv_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(idx, means, lw=1.2)
    ax.set_xlabel("output index")
    ax.set_ylabel("mean")
    ax.set_title(title)
    ax.grid(alpha=0.3)
    fig.tight_layout()
    fig.savefig(out_path, dpi=120)
    plt.close(fig)
    return out_path


def main(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("csv", type=Path)
    p.add_argument("-o", "--out", type=Path, default=None)
    args = p.parse_args(argv)
    out = args.out or args.csv.with_suffix(".png")
    print(f"[plot] wrote {plot(args.csv, out)}")


if __name__ == "__main__":
    main()
