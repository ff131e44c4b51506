import pytest

from lens_inventory.ui_logic import StateManager, ValidationManager
from lens_inventory.ui_logic.validation_manager import ValidationError, ValidationResult


@pytest.fixture
def validator():
    return ValidationManager(StateManager())


class TestValidationResult:
    def test_warnings_do_not_invalidate(self):
        result = ValidationResult()
        result.add_error(ValidationError("x", "careful", severity="warning"))
        assert result.is_valid
        result.add_error(ValidationError("y", "broken"))
        assert not result.is_valid
        assert result.messages() == ["x: careful", "y: broken"]
        assert result.to_dict()["error_count"] == 1
        assert result.to_dict()["warning_count"] == 1
        assert [e.field for e in result.get_errors_by_field("y")] == ["y"]


class TestValidationManager:
    def test_valid_new_color(self, validator):
        assert validator.validate_new_color("Azul", "#93c5fd", 10, 5).is_valid

    def test_new_color_errors(self, validator):
        result = validator.validate_new_color("Stock Bajo", "#fde047", -1)
        assert not result.is_valid
        assert {e.field for e in result.errors} == {"name", "value", "price"}

    def test_new_color_erase_tag_and_bad_threshold(self, validator):
        result = validator.validate_new_color("Nuevo", "", 0, "many")
        fields = {e.field for e in result.get_errors_by_severity("error")}
        assert fields == {"value", "low_stock_threshold"}

    def test_zero_threshold_is_only_a_warning(self, validator):
        result = validator.validate_new_color("Nuevo", "#010101", 0, 0)
        assert result.is_valid
        assert result.get_errors_by_severity("warning")[0].field == "low_stock_threshold"

    @pytest.mark.parametrize("price, ok", [(0, True), ("12.5", True), (-1, False), ("x", False), (None, False)])
    def test_price(self, validator, price, ok):
        assert validator.validate_price(price).is_valid is ok

    def test_attribute_option(self, validator):
        assert validator.validate_attribute_option("diametro", "80").is_valid
        assert not validator.validate_attribute_option("marca", "X").is_valid
        assert not validator.validate_attribute_option("color", " ").is_valid
        assert not validator.validate_attribute_option("color", "a|b").is_valid
        duplicate = validator.validate_attribute_option("diametro", "65")
        assert duplicate.is_valid
        assert duplicate.errors[0].severity == "info"

    def test_stock_text(self, validator):
        assert validator.validate_stock_text("12").is_valid
        assert not validator.validate_stock_text("-1").is_valid
        assert not validator.validate_stock_text("doce").is_valid
