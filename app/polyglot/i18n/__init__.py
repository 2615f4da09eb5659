"""i18n system - runtime localization with locale fallback chains.

Main components:
- factory: TranslatorFactory building and caching one Translator per locale
- translator: Translator resolving, pluralizing and substituting messages
- sources: TranslationSource and its YAML and in-memory implementations
- models: TranslatorRules, Direction
- plurals: plural rule functions and variant selection
- substitution: named placeholder substitution
- errors: TranslatorError hierarchy
"""

from polyglot.i18n.errors import (
    KeyNotFoundError,
    MissingLocaleDataError,
    MissingRootRulesError,
    RulesParseError,
    SubstitutionNotFoundError,
    TooFewPluralVariationsError,
    TranslatedError,
    TranslatorError,
)
from polyglot.i18n.factory import (
    TranslatorFactory,
    create_translator_factory,
    new_translator_factory,
)
from polyglot.i18n.models import ROOT_LOCALE, Direction, TranslatorRules
from polyglot.i18n.plurals import PLURAL_RULES, get_plural_rule, select_plural_variant
from polyglot.i18n.sources import (
    InMemoryTranslationSource,
    TranslationSource,
    YAMLTranslationSource,
)
from polyglot.i18n.substitution import substitute
from polyglot.i18n.translator import Translator

__all__ = [
    "ROOT_LOCALE",
    "Direction",
    "TranslatorRules",
    "PLURAL_RULES",
    "get_plural_rule",
    "select_plural_variant",
    "substitute",
    "TranslationSource",
    "YAMLTranslationSource",
    "InMemoryTranslationSource",
    "Translator",
    "TranslatorFactory",
    "new_translator_factory",
    "create_translator_factory",
    "TranslatorError",
    "MissingRootRulesError",
    "MissingLocaleDataError",
    "RulesParseError",
    "KeyNotFoundError",
    "TooFewPluralVariationsError",
    "SubstitutionNotFoundError",
    "TranslatedError",
]
