"""Translator factory and fallback resolution.

The factory builds one Translator per locale code and caches it, so asking
for the same locale twice returns the very same object. While building a
translator it works out the translator's fallback: the nearest less
specific locale with rule data ("en-US" for "en-US-posix"), or the global
fallback translator when there is none.
"""

import threading
from typing import Dict, List, Optional, Tuple

from polyglot.configuration import Settings
from polyglot.configuration import settings as default_settings
from polyglot.i18n.errors import (
    MissingLocaleDataError,
    MissingRootRulesError,
    TranslatorError,
)
from polyglot.i18n.models import ROOT_LOCALE, TranslatorRules
from polyglot.i18n.sources import TranslationSource, YAMLTranslationSource
from polyglot.i18n.translator import Translator
from polyglot.logging import get_module_logger

logger = get_module_logger()

LOCALE_SEPARATOR = "-"


class TranslatorFactory:
    """Creates and caches Translators.

    Use ``new_translator_factory`` to get a factory together with the errors
    raised while resolving the global fallback locale.

    Attributes:
        source: TranslationSource providing rules and messages.
        errors: Errors recorded while resolving the global fallback.
    """

    def __init__(self, source: TranslationSource, fallback_locale: str = ""):
        """Initialize TranslatorFactory.

        If ``fallback_locale`` is set, its translator is resolved right away.
        Problems along the way are recorded in ``errors``; the factory is
        usable either way.

        Args:
            source: TranslationSource providing rules and messages.
            fallback_locale: Locale code of the global fallback, or "" for none.
        """
        self.source = source
        self.errors: List[TranslatorError] = []
        self._translators: Dict[str, Translator] = {}
        self._fallback: Optional[Translator] = None
        self._fallback_locale = fallback_locale
        # Re-entrant: fallback resolution calls get_translator recursively
        self._lock = threading.RLock()

        if fallback_locale:
            self._fallback, self.errors = self.get_translator(fallback_locale)

        logger.info(
            "initialized_translator_factory",
            fallback_locale=fallback_locale or None,
            error_count=len(self.errors),
        )

    @property
    def fallback(self) -> Optional[Translator]:
        """The global fallback translator, if one was configured."""
        return self._fallback

    def translators(self) -> Dict[str, Translator]:
        """Return a snapshot of the cached translators by locale code."""
        with self._lock:
            return dict(self._translators)

    def get_translator(
        self, locale_code: str
    ) -> Tuple[Translator, List[TranslatorError]]:
        """Return the Translator for a locale.

        Repeated calls with the same locale code return the same instance
        and no errors.

        Args:
            locale_code: Locale code (e.g. "en-US").

        Returns:
            Tuple of the translator and the errors recorded while building it.
        """
        with self._lock:
            translator = self._translators.get(locale_code)
            if translator is not None:
                return translator, []

            errors: List[TranslatorError] = []
            fallback = self._get_fallback(locale_code, errors)

            rules = TranslatorRules()

            data = self.source.get_rules(ROOT_LOCALE)
            if data is None:
                errors.append(
                    MissingRootRulesError(f"could not find root rules ({ROOT_LOCALE})")
                )
                logger.warning("root_rules_not_found", locale=locale_code)
            errors.extend(rules.load(data, locale=ROOT_LOCALE))

            data = self.source.get_rules(locale_code)
            if data is None:
                errors.append(
                    MissingLocaleDataError(
                        f"could not find rules and messages for locale {locale_code}",
                        locale=locale_code,
                    )
                )
                logger.warning("locale_rules_not_found", locale=locale_code)
            errors.extend(rules.load(data, locale=locale_code))

            translator = Translator(
                locale=locale_code,
                messages=self.source.get_message,
                rules=rules,
                fallback=fallback,
            )
            self._translators[locale_code] = translator

            logger.info(
                "translator_created",
                locale=locale_code,
                fallback_chain=translator.fallback_chain(),
                direction=rules.direction.value,
                plural_rule=rules.plural_rule_name,
                error_count=len(errors),
            )
            return translator, errors

    def _get_fallback(
        self, locale_code: str, errors: List[TranslatorError]
    ) -> Optional[Translator]:
        """Find the best fallback translator for a locale.

        Drops hyphen-separated parts from the end of the locale code and uses
        the first shorter code that has rule data. If none does, the global
        fallback is used. The global fallback locale itself has no fallback.
        """
        if self._fallback_locale and locale_code == self._fallback_locale:
            return None

        fallback = self._fallback
        parts = locale_code.split(LOCALE_SEPARATOR)
        while len(parts) > 1:
            parts = parts[:-1]
            candidate = LOCALE_SEPARATOR.join(parts)

            if self.locale_exists(candidate):
                fallback, parent_errors = self.get_translator(candidate)
                errors.extend(parent_errors)
                break

        return fallback

    def locale_exists(self, locale_code: str) -> bool:
        """Check whether the source has rule data for a locale."""
        return self.source.get_rules(locale_code) is not None


def new_translator_factory(
    source: TranslationSource, fallback_locale: str = ""
) -> Tuple[TranslatorFactory, List[TranslatorError]]:
    """Create a TranslatorFactory.

    Args:
        source: TranslationSource providing rules and messages.
        fallback_locale: Locale code of the global fallback, or "" for none.

    Returns:
        Tuple of the factory and the non-fatal errors recorded while
        resolving the global fallback.

    Usage:
        factory, errors = new_translator_factory(source, "en")
        translator, errors = factory.get_translator("en-US")
        translator.t("greeting")
    """
    factory = TranslatorFactory(source, fallback_locale)
    return factory, list(factory.errors)


def create_translator_factory(
    settings: Optional[Settings] = None,
    source: Optional[TranslationSource] = None,
) -> TranslatorFactory:
    """Create a TranslatorFactory from application settings.

    Args:
        settings: Settings to read the i18n section from (default: the
            module-level settings singleton).
        source: Source to use instead of a YAMLTranslationSource built from
            the configured directories.

    Returns:
        TranslatorFactory: Configured factory.

    Raises:
        ValueError: If no source is given and the configured directories
            are missing.
    """
    settings = settings or default_settings
    i18n = settings.i18n

    if source is None:
        if not i18n.rules_dir or not i18n.messages_dir:
            raise ValueError(
                "I18N_RULES_DIR and I18N_MESSAGES_DIR must be set to load translations"
            )
        source = YAMLTranslationSource(i18n.rules_dir, i18n.messages_dir)

    factory = TranslatorFactory(source, i18n.fallback_locale)
    for error in factory.errors:
        logger.warning("fallback_locale_error", error=str(error))

    if i18n.preload:
        for locale_code in source.available_locales():
            _, errors = factory.get_translator(locale_code)
            for error in errors:
                logger.warning(
                    "preload_locale_error", locale=locale_code, error=str(error)
                )
        logger.info(
            "translator_factory_preloaded",
            locale_count=len(factory.translators()),
        )

    return factory
