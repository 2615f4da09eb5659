"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import make_rules_data, make_source, make_translator

__all__ = [
    "make_rules_data",
    "make_source",
    "make_translator",
]
