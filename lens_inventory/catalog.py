from __future__ import annotations

"""
Color/status catalog and lens attribute option sets.

The color catalog is an ordered list of `ColorInfo` entries. A color tag plays
two roles: it is the swatch painted on a grid cell and it marks the lens as
offered. The entry whose tag is the empty string is the reserved "erase" tool.

Attribute option sets map each lens attribute to the ordered list of values
offered in the selectors. They only ever grow, so that filter keys written in
the past stay valid.

All write helpers return new lists/dicts and never modify their inputs.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

from .filter_key import ATTRIBUTE_NAMES, KEY_SEPARATOR

logger = logging.getLogger(__name__)


ERASE_TAG = ""
ERASE_NAME = "Eliminar"
DEFAULT_IMPORT_COLOR_NAME = "Stock Bajo"

DARK_TEXT = "#111827"
LIGHT_TEXT = "#ffffff"


class CatalogError(ValueError):
    """Raised when a catalog or option-set write would break an invariant."""


def text_color_for(value: str) -> str:
    """Pick a readable text color for a swatch using the W3C luminance formula.

    Tags that are not `#rrggbb` hex (including the erase tag) get dark text.
    """
    if not value or len(value) < 7 or not value.startswith("#"):
        return DARK_TEXT
    try:
        r = int(value[1:3], 16)
        g = int(value[3:5], 16)
        b = int(value[5:7], 16)
    except ValueError:
        return DARK_TEXT
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return DARK_TEXT if luminance > 0.5 else LIGHT_TEXT


def _normalize_threshold(raw: Any) -> Optional[int]:
    """Positive integer threshold or None; zero/negative/garbage means no alert."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = int(float(raw))
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def _normalize_price(raw: Any) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if value != value or value < 0:  # NaN or negative
        return 0.0
    return value


@dataclass(frozen=True)
class ColorInfo:
    """A catalog entry: display name, tag, unit price and optional alert threshold."""

    name: str
    value: str
    price: float = 0.0
    low_stock_threshold: Optional[int] = None
    text_color: str = field(default="")

    def __post_init__(self) -> None:
        if not self.text_color:
            object.__setattr__(self, "text_color", text_color_for(self.value))

    @property
    def is_erase(self) -> bool:
        return self.value == ERASE_TAG

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "price": float(self.price),
            "low_stock_threshold": self.low_stock_threshold,
            "text_color": self.text_color,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ColorInfo":
        """Build an entry from a persisted dict, filling legacy gaps.

        Missing price defaults to 0 and camelCase keys from older blobs are
        accepted. The text color is always recomputed from the tag.
        """
        threshold = data.get("low_stock_threshold", data.get("lowStockThreshold"))
        return cls(
            name=str(data.get("name", "")),
            value=str(data.get("value", "") or ""),
            price=_normalize_price(data.get("price", 0)),
            low_stock_threshold=_normalize_threshold(threshold),
        )


INITIAL_COLORS: List[ColorInfo] = [
    ColorInfo(ERASE_NAME, ERASE_TAG, 0.0),
    ColorInfo("Stock Bajo", "#fde047", 50.0, 15),
    ColorInfo("Stock Medio", "#fdba74", 75.0, 30),
    ColorInfo("Stock Alto", "#86efac", 100.0),
]


INITIAL_FILTER_OPTIONS: Dict[str, List[str]] = {
    "foco": ["Monofocal", "Bifocal", "Progresivo"],
    "material": ["Mineral", "Orgánico", "Policarbonato"],
    "color": ["Sin color", "Marrón", "Gris", "Verde"],
    "fotocromatico": ["Sin Fotocromático", "Transitions", "Fotocromático Genérico"],
    "tratamiento": ["Sin Tratamiento", "Antirreflejos", "Antirrayas", "Filtro Azul"],
    "diametro": ["65", "70", "75"],
    "adicion": ["0", "1.00", "1.25", "1.50", "1.75", "2.00", "2.25", "2.50", "2.75", "3.00"],
    "indice_refraccion": ["1.523", "1.60", "1.67", "1.74"],
}


def default_colors() -> List[ColorInfo]:
    return list(INITIAL_COLORS)


def default_filter_options() -> Dict[str, List[str]]:
    return {name: list(values) for name, values in INITIAL_FILTER_OPTIONS.items()}


# ---------------------------------------------------------------------------
# Color catalog lookups
# ---------------------------------------------------------------------------

def find_by_tag(colors: Sequence[ColorInfo], tag: str) -> Optional[ColorInfo]:
    for color in colors:
        if color.value == tag:
            return color
    return None


def find_by_name(colors: Sequence[ColorInfo], name: str) -> Optional[ColorInfo]:
    for color in colors:
        if color.name == name:
            return color
    return None


def erase_entry(colors: Sequence[ColorInfo]) -> Optional[ColorInfo]:
    return find_by_tag(colors, ERASE_TAG)


def paint_colors(colors: Sequence[ColorInfo]) -> List[ColorInfo]:
    """Entries usable as paint swatches, in palette order (erase excluded)."""
    return [c for c in colors if not c.is_erase]


def price_lookup(colors: Sequence[ColorInfo]) -> Dict[str, ColorInfo]:
    """Tag -> entry map; the first entry wins if a legacy blob repeats a tag."""
    out: Dict[str, ColorInfo] = {}
    for color in colors:
        out.setdefault(color.value, color)
    return out


# ---------------------------------------------------------------------------
# Color catalog writes
# ---------------------------------------------------------------------------

def add_color(
    colors: Sequence[ColorInfo],
    name: str,
    value: str,
    price: Any = 0,
    low_stock_threshold: Any = None,
) -> List[ColorInfo]:
    """Append a new color entry and return the new catalog.

    Raises CatalogError for an empty name, the reserved erase tag, or a name
    or tag already present.
    """
    clean_name = str(name or "").strip()
    clean_value = str(value or "").strip()
    if not clean_name:
        raise CatalogError("A name is required for the new color")
    if clean_value == ERASE_TAG:
        raise CatalogError("The empty tag is reserved for the erase tool")
    if find_by_name(colors, clean_name) is not None:
        raise CatalogError(f"A color named '{clean_name}' already exists")
    if find_by_tag(colors, clean_value) is not None:
        raise CatalogError(f"The tag '{clean_value}' is already used by another color")

    entry = ColorInfo(
        name=clean_name,
        value=clean_value,
        price=_normalize_price(price),
        low_stock_threshold=_normalize_threshold(low_stock_threshold),
    )
    logger.debug("Added color %s (%s)", entry.name, entry.value)
    return [*colors, entry]


def set_price(colors: Sequence[ColorInfo], tag: str, price: Any) -> List[ColorInfo]:
    """Return a catalog where the entry with `tag` carries `price`.

    Unknown tags leave the catalog unchanged. Negative or non-numeric prices
    raise CatalogError.
    """
    try:
        new_price = float(price)
    except (TypeError, ValueError):
        raise CatalogError(f"Price must be a number, got {price!r}")
    if new_price != new_price or new_price < 0:
        raise CatalogError("Price must be zero or positive")
    return [replace(c, price=new_price) if c.value == tag else c for c in colors]


def colors_to_list(colors: Sequence[ColorInfo]) -> List[Dict[str, Any]]:
    return [c.to_dict() for c in colors]


def colors_from_list(data: Any) -> List[ColorInfo]:
    """Rebuild a catalog from persisted data with best-effort default-fill.

    Non-dict items are skipped. When no erase entry survives, the default one
    is put back at the front so the erase tool stays available. Raises
    ValueError when `data` is not a list at all.
    """
    if not isinstance(data, list):
        raise ValueError("Color catalog blob must be a list")
    colors = [ColorInfo.from_dict(item) for item in data if isinstance(item, dict)]
    if erase_entry(colors) is None:
        colors.insert(0, INITIAL_COLORS[0])
    return colors


# ---------------------------------------------------------------------------
# Attribute option sets
# ---------------------------------------------------------------------------

def add_attribute_option(
    options: Mapping[str, Sequence[str]], attribute: str, value: str
) -> Dict[str, List[str]]:
    """Append `value` to an attribute's option list.

    Empty or duplicate values return an unchanged copy. Raises CatalogError
    for unknown attributes or values containing the key separator.
    """
    if attribute not in ATTRIBUTE_NAMES:
        raise CatalogError(f"Unknown lens attribute '{attribute}'")
    clean = str(value or "").strip()
    new_options = {name: list(vals) for name, vals in options.items()}
    current = new_options.setdefault(attribute, [])
    if not clean or clean in current:
        return new_options
    if KEY_SEPARATOR in clean:
        raise CatalogError(f"Option values cannot contain '{KEY_SEPARATOR}'")
    current.append(clean)
    return new_options


def filter_options_from_dict(data: Any) -> Dict[str, List[str]]:
    """Rebuild option sets from persisted data, filling missing attributes.

    Raises ValueError when `data` is not a dict.
    """
    if not isinstance(data, dict):
        raise ValueError("Filter options blob must be a mapping")
    out: Dict[str, List[str]] = {}
    for name in ATTRIBUTE_NAMES:
        values = data.get(name)
        if isinstance(values, list) and values:
            out[name] = [str(v) for v in values]
        else:
            out[name] = list(INITIAL_FILTER_OPTIONS[name])
    return out


__all__ = [
    "ERASE_TAG",
    "DEFAULT_IMPORT_COLOR_NAME",
    "CatalogError",
    "ColorInfo",
    "INITIAL_COLORS",
    "INITIAL_FILTER_OPTIONS",
    "default_colors",
    "default_filter_options",
    "text_color_for",
    "find_by_tag",
    "find_by_name",
    "erase_entry",
    "paint_colors",
    "price_lookup",
    "add_color",
    "set_price",
    "colors_to_list",
    "colors_from_list",
    "add_attribute_option",
    "filter_options_from_dict",
]
