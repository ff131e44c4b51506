#!/usr/bin/env python3
from __future__ import annotations

"""
Command-line front end for the optical lens inventory.

Responsibilities:
- Configure logging to both console and `logs/run.log`
- Load `config/settings.yaml` and the three persisted blobs
- Run one subcommand against the engine state:
  * `export`      write every available cell to a CSV file
  * `import`      merge a CSV file into the store
  * `summary`     print dashboard figures as JSON
  * `plot`        render the material distribution chart
  * `show`        print the stock grid for one attribute selection
  * `add-color`   append a catalog entry
  * `set-price`   change the unit price of a catalog entry
  * `add-option`  add a value to an attribute's option set

Mutating commands persist through the autosave observer attached to the
StateManager, exactly as the interactive front end does.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from lens_inventory.analytics import compute_inventory_stats, low_stock_frame, summary_dict
from lens_inventory.catalog import CatalogError
from lens_inventory.csv_codec import CsvValidationError, import_csv, read_import_file, write_export
from lens_inventory.filter_key import LensFilters
from lens_inventory.grid_view import SortConfig, grid_frame
from lens_inventory.settings import AppSettings, load_settings
from lens_inventory.ui_logic import DataManager, StateManager, ValidationManager
from lens_inventory.ui_logic.state_manager import ViewState
from lens_inventory.utils_logging import configure_logging

log = logging.getLogger("lens_inventory.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Optical lens inventory – grid engine CLI")
    p.add_argument("--config", type=str, help="Path to a settings YAML file (default: config/settings.yaml)")
    p.add_argument("--data-dir", type=str, help="Override the directory holding the persisted blobs")
    p.add_argument("--debug", action="store_true")

    sub = p.add_subparsers(dest="command", required=True)

    exp = sub.add_parser("export", help="Export every available cell to CSV")
    exp.add_argument("--output", type=str, help="Destination file (default: output/<export filename>)")

    imp = sub.add_parser("import", help="Merge a CSV file into the inventory")
    imp.add_argument("path", type=str)

    sub.add_parser("summary", help="Print inventory statistics as JSON")

    plot = sub.add_parser("plot", help="Render the material distribution chart")
    plot.add_argument("--output-dir", type=str, help="Base directory for `plots/` (default: output/)")

    show = sub.add_parser("show", help="Print the stock grid for one attribute selection")
    show.add_argument(
        "--filters",
        nargs="*",
        default=[],
        metavar="ATTRIBUTE=VALUE",
        help="Attribute selections, e.g. material=Orgánico diametro=70",
    )
    show.add_argument("--search", type=str, default="", help='Prefix search, e.g. "-1.2 0.5"')
    show.add_argument("--sort", choices=["sphere", "stock"], default="sphere")
    show.add_argument("--column", type=str, help="Cylinder column for a stock sort")
    show.add_argument("--direction", choices=["asc", "desc"], default=None)

    color = sub.add_parser("add-color", help="Add a color to the catalog")
    color.add_argument("name", type=str)
    color.add_argument("tag", type=str, help="Hex color tag, e.g. #93c5fd")
    color.add_argument("--price", type=float, default=0.0)
    color.add_argument("--threshold", type=int, default=None, help="Low-stock alert threshold")

    price = sub.add_parser("set-price", help="Set the unit price of a catalog color")
    price.add_argument("tag", type=str)
    price.add_argument("price", type=str)

    option = sub.add_parser("add-option", help="Add a value to a lens attribute's options")
    option.add_argument("attribute", type=str)
    option.add_argument("value", type=str)

    return p.parse_args(argv)


def _parse_filter_pairs(pairs: List[str], base: LensFilters) -> LensFilters:
    """Apply `attribute=value` pairs on top of the configured default selection."""
    filters = base
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected ATTRIBUTE=VALUE, got '{pair}'")
        attribute, value = pair.split("=", 1)
        filters = filters.with_value(attribute.strip(), value.strip())
    return filters


def _build_engine(settings: AppSettings) -> tuple[StateManager, DataManager]:
    data_manager = DataManager.from_settings(settings.storage)
    state = data_manager.load_state(ViewState(filters=settings.default_filters))
    state_manager = StateManager(state)
    data_manager.attach_autosave(state_manager)
    return state_manager, data_manager


def _cmd_export(args: argparse.Namespace, settings: AppSettings, sm: StateManager) -> int:
    output = Path(args.output) if args.output else settings.output_dir / settings.export_filename
    path = write_export(output, sm.inventory, sm.colors)
    print(f"Exported inventory to {path}")
    return 0


def _cmd_import(args: argparse.Namespace, settings: AppSettings, sm: StateManager) -> int:
    text = read_import_file(Path(args.path))
    result = import_csv(text, sm.inventory, sm.colors)
    sm.set_inventory(result.store)
    print(f"Imported {result.processed} rows ({result.skipped} skipped)")
    return 0


def _cmd_summary(args: argparse.Namespace, settings: AppSettings, sm: StateManager) -> int:
    stats = compute_inventory_stats(sm.inventory, sm.colors)
    print(json.dumps(summary_dict(stats), ensure_ascii=False, indent=2))
    alerts = low_stock_frame(stats)
    if not alerts.empty:
        print(alerts.to_string(index=False))
    return 0


def _cmd_plot(args: argparse.Namespace, settings: AppSettings, sm: StateManager) -> int:
    try:
        from viz.plots import generate_dashboard_plots
    except Exception as e:
        log.error("Visualization dependencies missing or import failed: %s", e)
        raise

    output_dir = Path(args.output_dir) if args.output_dir else settings.output_dir
    stats = compute_inventory_stats(sm.inventory, sm.colors)
    for path in generate_dashboard_plots(stats, output_dir):
        print(f"Saved {path}")
    return 0


def _cmd_show(args: argparse.Namespace, settings: AppSettings, sm: StateManager) -> int:
    sm.set_filters(_parse_filter_pairs(args.filters, sm.filters))
    sm.set_search_query(args.search)
    sm.set_sort(SortConfig(args.sort, args.column, args.direction or "desc"))

    view = sm.visible_view()
    print(f"Filtros: {sm.current_key}")
    if view.is_empty:
        print("No hay graduaciones que coincidan con la búsqueda")
        return 0
    frame = grid_frame(view, sm.current_grid()).fillna("·")
    print(frame.to_string())
    return 0


def _cmd_add_color(args: argparse.Namespace, settings: AppSettings, sm: StateManager) -> int:
    result = ValidationManager(sm).validate_new_color(args.name, args.tag, args.price, args.threshold)
    for warning in result.get_errors_by_severity("warning"):
        log.warning(str(warning))
    entry = sm.add_color(args.name, args.tag, args.price, args.threshold)
    print(f"Added color '{entry.name}' ({entry.value}) at {entry.price:.2f}")
    return 0


def _cmd_set_price(args: argparse.Namespace, settings: AppSettings, sm: StateManager) -> int:
    if sm.set_price(args.tag, args.price):
        print(f"Price for {args.tag} set to {float(args.price):.2f}")
    else:
        print(f"No change: unknown tag or same price for '{args.tag}'")
    return 0


def _cmd_add_option(args: argparse.Namespace, settings: AppSettings, sm: StateManager) -> int:
    sm.add_attribute_option(args.attribute, args.value)
    print(f"Options for {args.attribute}: {', '.join(sm.filter_options[args.attribute])}")
    return 0


COMMANDS = {
    "export": _cmd_export,
    "import": _cmd_import,
    "summary": _cmd_summary,
    "plot": _cmd_plot,
    "show": _cmd_show,
    "add-color": _cmd_add_color,
    "set-price": _cmd_set_price,
    "add-option": _cmd_add_option,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_settings(Path(args.config) if args.config else None)
    if args.data_dir:
        settings.storage.data_dir = Path(args.data_dir)
    configure_logging(settings.logs_dir, debug=args.debug or settings.debug)
    log.debug("Using data directory %s", settings.storage.data_dir)

    state_manager, _ = _build_engine(settings)
    try:
        return COMMANDS[args.command](args, settings, state_manager)
    except (CsvValidationError, CatalogError, KeyError, ValueError, OSError) as e:
        log.error("%s failed: %s", args.command, e)
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
