"""Rule set models for the i18n system.

A rule set carries the grammatical data of one locale: its plural rule and
its text direction. Rule sets are built in layers; the shared ``root`` rules
first, then the locale's own rules on top.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import yaml

from polyglot.i18n.errors import RulesParseError, TranslatorError
from polyglot.i18n.plurals import (
    DEFAULT_PLURAL_RULE,
    PluralRule,
    get_plural_rule,
    plural_other,
)

# Locale code under which sources store rules shared by every locale
ROOT_LOCALE = "root"


class Direction(str, Enum):
    """Text direction of a locale's writing system."""

    LTR = "ltr"
    RTL = "rtl"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        """Convert a case-insensitive string to a Direction.

        Raises:
            ValueError: If the value is not a known direction.
        """
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise ValueError(f"Unsupported text direction: {value}") from e


@dataclass
class TranslatorRules:
    """Grammatical rules for a locale.

    Attributes:
        direction: Text direction.
        plural_rule_name: Name of the plural rule in use.
        plural_rule: Function mapping a quantity to a plural form index.
    """

    direction: Direction = Direction.LTR
    plural_rule_name: str = DEFAULT_PLURAL_RULE
    plural_rule: PluralRule = field(default=plural_other)

    def load(
        self, data: Optional[bytes], locale: Optional[str] = None
    ) -> List[TranslatorError]:
        """Merge raw YAML rule data over the current values.

        Only the fields present in ``data`` are overridden. Invalid fields
        are reported and skipped; the remaining fields still apply.

        Expected format:
            direction: rtl
            plural_rule: one_other

        Args:
            data: Raw rule bytes, or None when there is nothing to merge.
            locale: Locale code the data belongs to (for error reporting).

        Returns:
            List of errors found while parsing.
        """
        if not data:
            return []

        try:
            parsed = yaml.safe_load(data)
        except yaml.YAMLError as e:
            return [RulesParseError(f"could not parse rules: {e}", locale=locale)]

        if parsed is None:
            return []

        if not isinstance(parsed, dict):
            return [RulesParseError("rules must be a mapping", locale=locale)]

        errors: List[TranslatorError] = []

        if "direction" in parsed:
            try:
                self.direction = Direction.from_string(parsed["direction"])
            except ValueError as e:
                errors.append(RulesParseError(str(e), locale=locale))

        if "plural_rule" in parsed:
            name = str(parsed["plural_rule"])
            try:
                self.plural_rule = get_plural_rule(name)
                self.plural_rule_name = name
            except KeyError:
                errors.append(
                    RulesParseError(f"unknown plural rule: {name}", locale=locale)
                )

        return errors
