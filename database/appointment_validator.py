"""
AppointmentValidator - Data validation for appointment form input.
Handles required-field checks and business limits.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from utils.appointments import normalize_event_title
from utils.logger import Logger

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 5000


@dataclass
class ValidationResult:
    """Result of a validation operation"""

    is_valid: bool
    errors: list[str]
    warnings: list[str] = None

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []


class AppointmentValidator:
    """
    Validator for submitted appointment input.
    A title and a date are required; everything else is optional.
    """

    def __init__(self):
        self.logger = Logger()

    def validate(self, title: Any, description: Any, when: Any) -> ValidationResult:
        """Validate data for creating or updating an appointment"""
        errors = []
        warnings = []

        if not isinstance(title, str):
            errors.append("Title is required")
        elif not title.strip():
            errors.append("Title cannot be empty")
        else:
            if len(title.strip()) > MAX_TITLE_LENGTH:
                errors.append(f"Title exceeds maximum length ({MAX_TITLE_LENGTH} characters)")
            if normalize_event_title(title) != title:
                warnings.append("Extra whitespace in title will be removed")

        if description is not None and not isinstance(description, str):
            errors.append("Description must be text")
        elif description and len(description) > MAX_DESCRIPTION_LENGTH:
            errors.append(
                f"Description exceeds maximum length ({MAX_DESCRIPTION_LENGTH} characters)"
            )

        if when is None:
            errors.append("Date is required")
        elif not isinstance(when, date):
            errors.append("Date must be a date or date-time value")

        if errors:
            self.logger.debug(f"Appointment input rejected: {'; '.join(errors)}")
        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)
