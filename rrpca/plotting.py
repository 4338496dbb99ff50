"""Plotting utilities for RRPCA results."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np


def _finish(fig, outfile: str | None) -> None:
    plt.tight_layout()
    if outfile:
        plt.savefig(outfile)
        plt.close(fig)
    else:
        plt.show()


def plot_error_trace(errors: list[float] | np.ndarray,
                     ranks: list[int] | np.ndarray | None = None,
                     tol: float | None = None,
                     title: str = "IALM convergence",
                     outfile: str | None = None) -> None:
    """Plot the relative error per iteration, optionally with the target rank.

    Parameters
    ----------
    errors : sequence of float
        Error history as returned in :attr:`RRPCAResult.errors`.
    ranks : sequence of int, optional
        Target rank after each iteration, drawn on a second y-axis.
    tol : float, optional
        If given, the tolerance is drawn as a horizontal reference line.
    title : str, optional
        Title of the plot.
    outfile : str, optional
        If provided, the figure is saved to this path instead of shown.
    """
    iterations = np.arange(1, len(errors) + 1)
    fig, ax1 = plt.subplots(figsize=(8, 4))
    ax1.semilogy(iterations, errors, marker='o', markersize=3, label="Fro. error")
    if tol is not None:
        ax1.axhline(tol, color="k", linestyle="--", linewidth=0.8, label="tol")
    ax1.set_xlabel("Iteration")
    ax1.set_ylabel("Relative error")
    ax1.grid(True, which='both', linestyle='--', linewidth=0.5)

    lines, labels = ax1.get_legend_handles_labels()
    if ranks is not None:
        ax2 = ax1.twinx()
        ax2.step(iterations, ranks, where="post", color="tab:orange",
                 linestyle=':', linewidth=1.0, label="target rank k")
        ax2.set_ylabel("Rank")
        line, label = ax2.get_legend_handles_labels()
        lines += line
        labels += label
    ax1.legend(lines, labels, loc='best')

    ax1.set_title(title)
    _finish(fig, outfile)


def plot_decomposition(A: np.ndarray,
                       L: np.ndarray,
                       S: np.ndarray,
                       cmap: str = "viridis",
                       outfile: str | None = None) -> None:
    """Show ``A``, ``L`` and ``S`` side by side as images.

    ``A`` and ``L`` share one colour scale; ``S`` uses a symmetric scale
    centred on zero.
    """
    fig, axes = plt.subplots(1, 3, figsize=(12, 4))
    vmin = min(np.min(A), np.min(L))
    vmax = max(np.max(A), np.max(L))
    for ax, mat, name in zip(axes[:2], (A, L), ("A", "L (low-rank)")):
        im = ax.imshow(mat, aspect="auto", cmap=cmap, vmin=vmin, vmax=vmax)
        ax.set_title(name)
        fig.colorbar(im, ax=ax)

    smax = float(np.max(np.abs(S))) or 1.0
    im = axes[2].imshow(S, aspect="auto", cmap="RdBu_r", vmin=-smax, vmax=smax)
    axes[2].set_title("S (sparse)")
    fig.colorbar(im, ax=axes[2])
    _finish(fig, outfile)
