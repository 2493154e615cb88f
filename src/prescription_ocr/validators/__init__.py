"""Review record validators (format checks only)."""

from .medicine_validator import validate_medicine
