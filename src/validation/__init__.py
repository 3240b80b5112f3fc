"""Form validation package."""

from src.validation.validator import (
    FormValidator,
    is_valid_email,
    parse_amount,
    parse_date,
)

__all__ = ["FormValidator", "is_valid_email", "parse_amount", "parse_date"]
