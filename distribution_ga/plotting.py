#!/usr/bin/env python3
from pathlib import Path

import matplotlib.pyplot as plt


def plot_fitness_curves(histories, out_path: Path, title="Fitness over iterations"):
    """
    Plot best + mean population score per iteration, one colour per run.

    histories: list of [(iteration, best, mean), ...], one list per run.
    """
    plt.figure()

    colors = ["tab:blue", "tab:orange", "tab:green",
              "tab:red", "tab:purple", "tab:brown"]

    for idx, history in enumerate(histories, start=1):
        c = colors[(idx - 1) % len(colors)]
        iterations = [h[0] for h in history]
        best = [h[1] for h in history]
        mean = [h[2] for h in history]

        # Best = solid line
        plt.plot(iterations, best, linestyle="-", color=c, label=f"Run {idx} best")
        # Mean = dashed line, same colour
        plt.plot(iterations, mean, linestyle="--", color=c, label=f"Run {idx} mean")

    plt.xlabel("Iteration")
    plt.ylabel("Score (higher is better)")
    plt.title(title)
    plt.legend()
    plt.grid(True, which="both", linestyle="--", linewidth=0.5)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()
