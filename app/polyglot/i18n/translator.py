"""Per-locale translator.

A Translator resolves keys for one locale. When its locale has no message
for a key it hands the call to its fallback translator, which in turn may
hand it further down the chain built by the TranslatorFactory.
"""

import dataclasses
from typing import Any, Callable, List, Mapping, Optional, Tuple

from polyglot.i18n.errors import (
    KeyNotFoundError,
    TooFewPluralVariationsError,
    TranslatedError,
    TranslatorError,
)
from polyglot.i18n.models import Direction, TranslatorRules
from polyglot.i18n.plurals import select_plural_variant
from polyglot.i18n.substitution import substitute
from polyglot.logging import get_module_logger

logger = get_module_logger()

MessageLookup = Callable[[str, str], Optional[str]]


class Translator:
    """Translator for a single locale.

    Translators are created by a TranslatorFactory and should not be built
    directly by application code. They are read-only after construction.

    Attributes:
        locale: Locale code this translator serves.
        fallback: Translator consulted when a key is missing, or None.
    """

    def __init__(
        self,
        locale: str,
        messages: MessageLookup,
        rules: TranslatorRules,
        fallback: Optional["Translator"] = None,
    ):
        """Initialize Translator.

        Args:
            locale: Locale code.
            messages: Callable looking up a message by (key, locale code).
            rules: Rule set for the locale.
            fallback: Translator to delegate misses to.
        """
        self._locale = locale
        self._messages = messages
        self._rules = rules
        self._fallback = fallback

    def __repr__(self) -> str:
        fallback = self._fallback.locale if self._fallback else None
        return f"Translator(locale={self._locale!r}, fallback={fallback!r})"

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def fallback(self) -> Optional["Translator"]:
        return self._fallback

    def _delegate(self) -> Optional["Translator"]:
        if self._fallback is not None and self._fallback is not self:
            return self._fallback
        return None

    def fallback_chain(self) -> List[str]:
        """Return the locale codes walked when resolving a key.

        Returns:
            Locale codes starting with this translator's own.
        """
        chain = [self._locale]
        current = self._delegate()
        while current is not None:
            chain.append(current.locale)
            current = current._delegate()
        return chain

    def translate(
        self, key: str, substitutions: Optional[Mapping[str, Any]] = None
    ) -> Tuple[str, List[TranslatorError]]:
        """Return the translated message with substitutions applied.

        If neither this translator nor any translator down its fallback
        chain has the key, an empty string and a KeyNotFoundError from the
        last translator in the chain are returned.

        Args:
            key: Message key.
            substitutions: Mapping of placeholder name to value.

        Returns:
            Tuple of the translation and the errors recorded.
        """
        message = self._messages(key, self._locale)

        if message is not None:
            return substitute(message, substitutions, locale=self._locale)

        fallback = self._delegate()
        if fallback is not None:
            logger.debug(
                "delegating_to_fallback",
                key=key,
                locale=self._locale,
                fallback_locale=fallback.locale,
            )
            return fallback.translate(key, substitutions)

        logger.debug("translation_not_found", key=key, locale=self._locale)
        return "", [KeyNotFoundError(key, locale=self._locale)]

    def pluralize(
        self, key: str, quantity: float, display: str
    ) -> Tuple[str, List[TranslatorError]]:
        """Return the plural variant of a message matching ``quantity``.

        The variant is picked by the locale's plural rule and then gets
        ``{n}`` replaced by ``display``. A message with fewer variants than
        the rule asks for yields its last variant along with a
        TooFewPluralVariationsError.

        Args:
            key: Message key.
            quantity: Number deciding the plural form.
            display: How the number is shown in the message (e.g. "1,000").

        Returns:
            Tuple of the translation and the errors recorded.
        """
        message = self._messages(key, self._locale)

        if message is None:
            fallback = self._delegate()
            if fallback is not None:
                logger.debug(
                    "delegating_to_fallback",
                    key=key,
                    locale=self._locale,
                    fallback_locale=fallback.locale,
                )
                return fallback.pluralize(key, quantity, display)

            logger.debug("translation_not_found", key=key, locale=self._locale)
            return "", [KeyNotFoundError(key, locale=self._locale)]

        errors: List[TranslatorError] = []
        selection = select_plural_variant(message, quantity, self._rules.plural_rule)
        if selection.clamped:
            errors.append(
                TooFewPluralVariationsError(
                    key, selection.form, selection.available, locale=self._locale
                )
            )

        translation, substitution_errors = substitute(
            selection.variant, {"n": display}, locale=self._locale
        )
        errors.extend(substitution_errors)
        return translation, errors

    def tr(self, key: str, substitutions: Optional[Mapping[str, Any]] = None) -> str:
        """Translate, returning ``key`` itself if anything went wrong."""
        translation, errors = self.translate(key, substitutions)
        if errors:
            return key
        return translation

    def t(self, key: str) -> str:
        """Translate without substitutions, returning ``key`` on failure."""
        return self.tr(key, {})

    def p(self, key: str, quantity: float, display: str) -> str:
        """Pluralize, returning ``key`` itself if anything went wrong."""
        translation, errors = self.pluralize(key, quantity, display)
        if errors:
            return key
        return translation

    def err(self, key: str) -> TranslatedError:
        """Build an exception carrying the translation of ``key``.

        Example:
            raise translator.err("errors.permission_denied")
        """
        return TranslatedError(key, self.t(key))

    def direction(self) -> Direction:
        """Return the text direction of the locale's writing system."""
        return self._rules.direction

    def rules(self) -> TranslatorRules:
        """Return a copy of the locale's rule set."""
        return dataclasses.replace(self._rules)
