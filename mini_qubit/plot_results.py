# mini_qubit/plot_results.py
import csv, os
import matplotlib.pyplot as plt
from collections import defaultdict
from statistics import median

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

def load_rows(path):
    with open(path, "r") as f:
        return list(csv.DictReader(f))

def median_by_gate(rows):
    buckets = defaultdict(list)
    for r in rows:
        buckets[r["gate"]].append(float(r["ns_per_apply"]))
    return {g: float(median(v)) for g, v in buckets.items()}

def plot_apply(rows, out_dir, tag):
    agg = median_by_gate(rows)
    if not agg: return
    gates = sorted(agg)
    plt.figure()
    plt.bar(gates, [agg[g] for g in gates])
    plt.xlabel("Gate")
    plt.ylabel("Time per apply (ns)")
    plt.title(f"Gate apply cost [{tag}]")
    plt.grid(True, axis="y")
    plt.savefig(os.path.join(out_dir, f"apply_{tag}.png"), dpi=200)
    plt.close()

def plot_measure(rows, out_dir, tag):
    if not rows: return
    xs = [float(r["p0_expected"]) for r in rows]
    ys = [float(r["p0_observed"]) for r in rows]
    plt.figure()
    plt.plot([0, 1], [0, 1], ls="--", lw=0.8, color="gray", label="ideal")
    plt.scatter(xs, ys, marker="o", label="observed")
    for r, x, y in zip(rows, xs, ys):
        plt.annotate(r["circuit"], (x, y), fontsize=7, xytext=(3, 3), textcoords="offset points")
    plt.xlabel("Born probability of |0>")
    plt.ylabel("Observed frequency of |0>")
    plt.title(f"Measurement statistics [{tag}]")
    plt.grid(True)
    plt.legend()
    plt.savefig(os.path.join(out_dir, f"measure_{tag}.png"), dpi=200)
    plt.close()

def main():
    # find all CSVs recursively under data/
    csvs = []
    for root, _, files in os.walk(DATA_DIR):
        for f in files:
            if f.endswith(".csv"):
                csvs.append(os.path.join(root, f))

    if not csvs:
        print("No CSV files found under data/")
        return

    for path in csvs:
        tag = os.path.splitext(os.path.basename(path))[0]
        backend = os.path.basename(os.path.dirname(path))  # 'serial' or 'numba'
        try:
            rows = load_rows(path)
        except (OSError, csv.Error) as e:
            print(f"Skipping {path}: {e}")
            continue

        print(f"Plotting from {backend}/{tag}.csv ({len(rows)} rows)...")
        out_dir = os.path.dirname(path)
        if tag.startswith("apply"):
            plot_apply(rows, out_dir, backend)
        elif tag.startswith("measure"):
            plot_measure(rows, out_dir, backend)
        else:
            print(f"  unknown CSV kind '{tag}', skipped")

    print("\nSaved all plots under data/<backend>/*.png")


if __name__ == "__main__":
    main()
