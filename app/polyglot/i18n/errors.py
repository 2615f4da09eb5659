"""Errors reported by the i18n system.

None of these are raised by the factory or translators. They are collected
into lists and returned next to a best-effort result, so callers can decide
whether a partially localized string is good enough.

Example:
    translation, errors = translator.translate("greeting")
    for error in errors:
        logger.warning("translation_problem", error=str(error))
"""

from typing import Optional


class TranslatorError(Exception):
    """Base class for all i18n errors.

    Attributes:
        message: Human-readable description of the problem.
        locale: Locale code of the translator that reported the error, if any.
    """

    def __init__(self, message: str, locale: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.locale = locale

    def __str__(self) -> str:
        if self.locale is not None:
            return f"translator error (locale: {self.locale}) - {self.message}"
        return f"translator error - {self.message}"


class MissingRootRulesError(TranslatorError):
    """The shared root rule data could not be found."""


class MissingLocaleDataError(TranslatorError):
    """No rule data exists for a requested locale."""


class RulesParseError(TranslatorError):
    """Rule data exists but could not be parsed or applied."""


class KeyNotFoundError(TranslatorError):
    """No translation for a key after exhausting the fallback chain.

    Attributes:
        key: The key that was looked up.
    """

    def __init__(self, key: str, locale: Optional[str] = None):
        super().__init__(f"key not found: {key}", locale=locale)
        self.key = key


class TooFewPluralVariationsError(TranslatorError):
    """The plural form index exceeds the variants a message provides.

    A best-effort variant is still returned alongside this error.
    """

    def __init__(
        self, key: str, form: int, available: int, locale: Optional[str] = None
    ):
        super().__init__(
            f"too few plural variations: {key} (form {form}, {available} available)",
            locale=locale,
        )
        self.key = key
        self.form = form
        self.available = available


class SubstitutionNotFoundError(TranslatorError):
    """A substitution was requested for a placeholder the template lacks.

    Attributes:
        name: Substitution name without braces.
        template: The original template that was searched.
    """

    def __init__(self, name: str, template: str, locale: Optional[str] = None):
        super().__init__(
            f"substitution not found: {{{name}}} in {template!r}", locale=locale
        )
        self.name = name
        self.template = template


class TranslatedError(Exception):
    """Exception whose message is an already-translated string.

    Returned by ``Translator.err`` so application code can raise errors in
    the user's language.
    """

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key
