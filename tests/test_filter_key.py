import pytest

from lens_inventory.filter_key import (
    ATTRIBUTE_NAMES,
    LensFilters,
    decode_filter_key,
    encode_filter_key,
    humanize_filter_key,
    material_of,
)


def test_default_filters_key(default_key):
    assert LensFilters().key == default_key


@pytest.mark.parametrize(
    "values",
    [
        ("Monofocal", "Mineral", "Sin color", "Sin Fotocromático", "Antirreflejos", "65", "0", "1.523"),
        ("Progresivo", "Orgánico", "Gris", "Transitions", "Filtro Azul", "70", "2.25", "1.67"),
        ("", "", "", "", "", "", "", ""),
    ],
)
def test_decode_inverts_encode(values):
    assert tuple(decode_filter_key(encode_filter_key(values))) == values


def test_from_key_round_trip():
    filters = LensFilters(material="Policarbonato", diametro="75")
    assert LensFilters.from_key(filters.key) == filters


def test_from_key_rejects_wrong_segment_count():
    with pytest.raises(ValueError):
        LensFilters.from_key("Monofocal|Mineral")


def test_with_value_replaces_one_attribute():
    filters = LensFilters().with_value("material", "Orgánico")
    assert filters.material == "Orgánico"
    assert filters.foco == "Monofocal"
    with pytest.raises(KeyError):
        LensFilters().with_value("brand", "X")


def test_from_mapping_keeps_defaults_for_missing():
    filters = LensFilters.from_mapping({"diametro": 70, "unknown": "x"})
    assert filters.diametro == "70"
    assert filters.material == "Mineral"
    assert list(filters.to_dict()) == list(ATTRIBUTE_NAMES)


def test_humanize_and_material(default_key):
    assert humanize_filter_key("A|B|C") == "A / B / C"
    assert material_of(default_key) == "Mineral"
    assert material_of("Monofocal") == "Desconocido"
    assert material_of("Monofocal||x") == "Desconocido"
