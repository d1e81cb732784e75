# visualize.py
import os
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def _ensure_dir(outpath):
    dirname = os.path.dirname(outpath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)


def plot_hit_rates(summaries, outpath):
    _ensure_dir(outpath)
    names = [s["name"] for s in summaries]
    hit_rates = [s["hit_rate"] for s in summaries]
    plt.figure(figsize=(8, 4))
    plt.bar(names, hit_rates, color="tab:green")
    plt.ylim(0, 1)
    plt.title("Cache Hit Rate by Configuration")
    plt.ylabel("Hit rate")
    plt.xticks(rotation=30, ha="right")
    plt.grid(True, axis="y")
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()
    return outpath


def plot_cycles(summaries, outpath):
    _ensure_dir(outpath)
    names = [s["name"] for s in summaries]
    cycles = [s["total_cycles"] for s in summaries]
    plt.figure(figsize=(8, 4))
    plt.bar(names, cycles, color="tab:blue")
    plt.title("Total Cycles by Configuration")
    plt.ylabel("Cycles")
    plt.xticks(rotation=30, ha="right")
    plt.grid(True, axis="y")
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()
    return outpath
