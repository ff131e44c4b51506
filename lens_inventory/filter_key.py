from __future__ import annotations

"""
Filter key codec.

A filter key is the canonical address of one sub-grid in the inventory store:
the eight lens attribute selections joined with "|" in a fixed order.

    Monofocal|Mineral|Sin color|Sin Fotocromático|Antirreflejos|65|0|1.523

The codec does no validation. Attribute values must not contain the
separator; that constraint is enforced where options are added (see
`catalog.add_attribute_option`).
"""

from dataclasses import astuple, dataclass, fields, replace
from typing import Dict, List, Mapping, Sequence, Tuple


KEY_SEPARATOR = "|"
HUMAN_SEPARATOR = " / "
UNKNOWN_MATERIAL = "Desconocido"

# (field name, CSV column name) in key order
LENS_ATTRIBUTES: Tuple[Tuple[str, str], ...] = (
    ("foco", "Foco"),
    ("material", "Material"),
    ("color", "Color"),
    ("fotocromatico", "Fotocromatico"),
    ("tratamiento", "Tratamiento"),
    ("diametro", "Diametro"),
    ("adicion", "Adicion"),
    ("indice_refraccion", "Indice Refraccion"),
)

ATTRIBUTE_NAMES: Tuple[str, ...] = tuple(name for name, _ in LENS_ATTRIBUTES)
ATTRIBUTE_COLUMNS: Tuple[str, ...] = tuple(column for _, column in LENS_ATTRIBUTES)


@dataclass(frozen=True)
class LensFilters:
    """One selection per lens attribute; field order is the key order."""

    foco: str = "Monofocal"
    material: str = "Mineral"
    color: str = "Sin color"
    fotocromatico: str = "Sin Fotocromático"
    tratamiento: str = "Antirreflejos"
    diametro: str = "65"
    adicion: str = "0"
    indice_refraccion: str = "1.523"

    @property
    def key(self) -> str:
        return encode_filter_key(self.values())

    def values(self) -> Tuple[str, ...]:
        return astuple(self)

    def with_value(self, attribute: str, value: str) -> "LensFilters":
        if attribute not in ATTRIBUTE_NAMES:
            raise KeyError(f"Unknown lens attribute '{attribute}'")
        return replace(self, **{attribute: value})

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "LensFilters":
        """Build filters from a mapping, keeping defaults for missing attributes."""
        defaults = cls()
        picked = {}
        for name in ATTRIBUTE_NAMES:
            value = data.get(name) if isinstance(data, Mapping) else None
            picked[name] = str(value) if value is not None else getattr(defaults, name)
        return cls(**picked)

    @classmethod
    def from_key(cls, key: str) -> "LensFilters":
        values = decode_filter_key(key)
        if len(values) != len(ATTRIBUTE_NAMES):
            raise ValueError(
                f"Filter key has {len(values)} segments, expected {len(ATTRIBUTE_NAMES)}: {key!r}"
            )
        return cls(*values)


def encode_filter_key(values: Sequence[str]) -> str:
    """Join attribute selections, in key order, into a filter key."""
    return KEY_SEPARATOR.join(str(v) for v in values)


def decode_filter_key(key: str) -> List[str]:
    """Split a filter key back into its attribute selections."""
    return key.split(KEY_SEPARATOR)


def humanize_filter_key(key: str) -> str:
    """Readable form of a key used in alert listings ("Monofocal / Mineral / ...")."""
    return key.replace(KEY_SEPARATOR, HUMAN_SEPARATOR)


def material_of(key: str) -> str:
    """Material component of a filter key, or "Desconocido" when absent."""
    parts = decode_filter_key(key)
    if len(parts) > 1 and parts[1]:
        return parts[1]
    return UNKNOWN_MATERIAL


__all__ = [
    "KEY_SEPARATOR",
    "UNKNOWN_MATERIAL",
    "LENS_ATTRIBUTES",
    "ATTRIBUTE_NAMES",
    "ATTRIBUTE_COLUMNS",
    "LensFilters",
    "encode_filter_key",
    "decode_filter_key",
    "humanize_filter_key",
    "material_of",
]
