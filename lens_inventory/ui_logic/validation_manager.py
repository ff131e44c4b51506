"""
Framework-agnostic validation for the lens inventory forms.

Checks user input before it reaches the catalog or the store and returns
results the front end can display field by field. The catalog functions
still guard their own invariants; these checks only make the feedback
friendlier.
"""

from typing import Any, Dict, List, Optional
import logging

from ..catalog import ERASE_TAG, find_by_name, find_by_tag
from ..filter_key import ATTRIBUTE_NAMES, KEY_SEPARATOR
from .mutation_manager import parse_stock_input
from .state_manager import StateManager

logger = logging.getLogger(__name__)


class ValidationError:
    """Represents a validation error with context."""

    def __init__(self, field: str, message: str, severity: str = "error", context: Optional[Dict] = None):
        """Initialize a validation error.

        Args:
            field: The field that failed validation
            message: Error message
            severity: Error severity (error, warning, info)
            context: Additional context information
        """
        self.field = field
        self.message = message
        self.severity = severity
        self.context = context or {}

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'field': self.field,
            'message': self.message,
            'severity': self.severity,
            'context': self.context
        }


class ValidationResult:
    """Represents the result of a validation operation."""

    def __init__(self, is_valid: bool = True, errors: Optional[List[ValidationError]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: ValidationError) -> None:
        """Add an error to the result."""
        if error.severity == "error":
            self.is_valid = False
        self.errors.append(error)

    def get_errors_by_severity(self, severity: str) -> List[ValidationError]:
        return [error for error in self.errors if error.severity == severity]

    def get_errors_by_field(self, field: str) -> List[ValidationError]:
        return [error for error in self.errors if error.field == field]

    def messages(self) -> List[str]:
        return [str(error) for error in self.errors]

    def to_dict(self) -> Dict:
        return {
            'is_valid': self.is_valid,
            'errors': [error.to_dict() for error in self.errors],
            'error_count': len(self.get_errors_by_severity('error')),
            'warning_count': len(self.get_errors_by_severity('warning')),
        }


class ValidationManager:
    """
    Validation of catalog and stock input against the current state.
    """

    def __init__(self, state_manager: StateManager):
        self.state_manager = state_manager

    def validate_new_color(self, name: str, value: str, price: Any = 0,
                           low_stock_threshold: Any = None) -> ValidationResult:
        result = ValidationResult()
        colors = self.state_manager.colors
        clean_name = str(name or "").strip()
        clean_value = str(value or "").strip()

        if not clean_name:
            result.add_error(ValidationError('name', 'Please enter a name for the new color'))
        elif find_by_name(colors, clean_name) is not None:
            result.add_error(ValidationError('name', f"A color named '{clean_name}' already exists",
                                             context={'value': clean_name}))

        if clean_value == ERASE_TAG:
            result.add_error(ValidationError('value', 'The empty tag is reserved for the erase tool'))
        elif find_by_tag(colors, clean_value) is not None:
            result.add_error(ValidationError('value', f"The tag '{clean_value}' is already in use",
                                             context={'value': clean_value}))

        price_result = self.validate_price(price)
        result.errors.extend(price_result.errors)
        result.is_valid = result.is_valid and price_result.is_valid

        if low_stock_threshold not in (None, ""):
            try:
                threshold = int(float(low_stock_threshold))
                if threshold <= 0:
                    result.add_error(ValidationError(
                        'low_stock_threshold',
                        'Thresholds of zero or less disable low-stock alerts',
                        severity='warning',
                        context={'value': low_stock_threshold}
                    ))
            except (TypeError, ValueError):
                result.add_error(ValidationError(
                    'low_stock_threshold',
                    'Threshold must be a whole number',
                    context={'value': low_stock_threshold}
                ))
        return result

    def validate_price(self, price: Any) -> ValidationResult:
        result = ValidationResult()
        try:
            value = float(price)
            if value != value or value < 0:
                result.add_error(ValidationError('price', 'Price must be zero or positive',
                                                 context={'value': price}))
        except (TypeError, ValueError):
            result.add_error(ValidationError('price', 'Price must be a valid number',
                                             context={'value': price}))
        return result

    def validate_attribute_option(self, attribute: str, value: str) -> ValidationResult:
        result = ValidationResult()
        if attribute not in ATTRIBUTE_NAMES:
            result.add_error(ValidationError('attribute', f"Unknown lens attribute '{attribute}'"))
            return result
        clean = str(value or "").strip()
        if not clean:
            result.add_error(ValidationError('value', 'Option value cannot be empty'))
        elif KEY_SEPARATOR in clean:
            result.add_error(ValidationError('value', f"Option values cannot contain '{KEY_SEPARATOR}'"))
        elif clean in self.state_manager.filter_options.get(attribute, []):
            result.add_error(ValidationError('value', f"'{clean}' is already an option", severity='info'))
        return result

    def validate_stock_text(self, text: object) -> ValidationResult:
        result = ValidationResult()
        if parse_stock_input(text) is None:
            result.add_error(ValidationError('stock', 'Stock must be a whole number, zero or more',
                                             context={'value': text}))
        return result
