from __future__ import annotations

from pathlib import Path

import pytest

from lens_inventory.analytics import compute_inventory_stats
from lens_inventory.catalog import default_colors
from lens_inventory.grid_store import Cell


def test_material_distribution_plot(tmp_path: Path):
    """Smoke test: the chart renders to `<output>/plots/` without raising."""
    pytest.importorskip("matplotlib")
    from viz.plots import generate_dashboard_plots, plot_material_distribution

    store = {
        "Monofocal|Mineral|Sin color|Sin Fotocromático|Antirreflejos|65|0|1.523": {
            "1.00": {"0.00": Cell(12, "#fde047")}
        },
        "Monofocal|Orgánico|Sin color|Sin Fotocromático|Antirreflejos|65|0|1.523": {
            "2.00": {"0.00": Cell(4, "#86efac")}
        },
    }
    out = plot_material_distribution(compute_inventory_stats(store, default_colors()), tmp_path)
    assert out == tmp_path / "plots" / "material_distribution.png"
    assert out.stat().st_size > 0

    empty_paths = generate_dashboard_plots(compute_inventory_stats({}, default_colors()), tmp_path / "empty")
    assert all(p.exists() for p in empty_paths)
