from __future__ import annotations

"""
Dashboard chart utilities.

Read-only plotting functions that consume `InventoryStats` and produce
static PNGs under `output/plots/`. They never touch the inventory store.

Usage:
    from viz.plots import plot_material_distribution
    plot_material_distribution(compute_inventory_stats(store, colors))
"""

from pathlib import Path
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from lens_inventory.analytics import InventoryStats, material_frame  # noqa: E402
from lens_inventory.settings import OUTPUT_DIR  # noqa: E402


BAR_COLOR = "#3b82f6"


def _ensure_plots_dir(output_dir: Path | None = None) -> Path:
    """Ensure `<output>/plots/` exists and return the path."""
    plots_dir = (output_dir or OUTPUT_DIR) / "plots"
    plots_dir.mkdir(parents=True, exist_ok=True)
    return plots_dir


def _save_fig(fig: plt.Figure, filename: str, output_dir: Path | None = None) -> Path:
    plots_dir = _ensure_plots_dir(output_dir)
    out_path = plots_dir / filename
    fig.savefig(out_path, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return out_path


def plot_material_distribution(stats: InventoryStats, output_dir: Path | None = None) -> Path:
    """Horizontal bar chart of units in stock per material, largest on top."""
    df = material_frame(stats)
    fig, ax = plt.subplots(figsize=(8, max(2.5, 0.5 * len(df) + 1)))

    if df.empty:
        ax.text(0.5, 0.5, "Sin datos de stock", ha="center", va="center", transform=ax.transAxes)
        ax.set_axis_off()
    else:
        # barh draws bottom-up; reverse so the largest material sits on top
        ordered = df.iloc[::-1]
        ax.barh(ordered["Material"], ordered["Stock"], color=BAR_COLOR)
        for y, value in enumerate(ordered["Stock"]):
            ax.text(value, y, f" {int(value)}", va="center", fontsize=8)
        ax.set_xlabel("Unidades en stock")
        ax.grid(True, axis="x", alpha=0.3)

    ax.set_title("Distribución de Stock por Material")
    return _save_fig(fig, "material_distribution.png", output_dir)


def generate_dashboard_plots(stats: InventoryStats, output_dir: Path | None = None) -> list[Path]:
    """High-level helper: render every dashboard chart and return the file paths."""
    return [plot_material_distribution(stats, output_dir)]
