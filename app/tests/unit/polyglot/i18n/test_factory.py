"""Tests for polyglot.i18n.factory module."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from polyglot.configuration import I18nSettings, Settings
from polyglot.i18n import (
    Direction,
    InMemoryTranslationSource,
    KeyNotFoundError,
    MissingLocaleDataError,
    MissingRootRulesError,
    RulesParseError,
    TranslatorFactory,
    create_translator_factory,
    new_translator_factory,
)
from tests.factories.i18n import make_rules_data, make_source


class CountingSource(InMemoryTranslationSource):
    """In-memory source recording every get_rules call."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.rule_requests = []

    def get_rules(self, locale_code):
        self.rule_requests.append(locale_code)
        return super().get_rules(locale_code)


@pytest.mark.unit
class TestNewTranslatorFactory:
    """Tests for factory construction."""

    def test_returns_factory_and_errors(self, source):
        factory, errors = new_translator_factory(source, "en")

        assert isinstance(factory, TranslatorFactory)
        assert errors == []
        assert factory.fallback is not None
        assert factory.fallback.locale == "en"

    def test_global_fallback_is_cached(self, factory):
        translator, errors = factory.get_translator("en")
        assert translator is factory.fallback
        assert errors == []

    def test_without_fallback(self, source):
        factory, errors = new_translator_factory(source)
        assert factory.fallback is None
        assert errors == []
        assert factory.translators() == {}

    def test_missing_fallback_data_is_not_fatal(self, source):
        factory, errors = new_translator_factory(source, "xx")

        assert factory.fallback.locale == "xx"
        assert len(errors) == 1
        assert isinstance(errors[0], MissingLocaleDataError)
        assert errors[0].locale == "xx"

    def test_errors_are_kept_on_factory(self, source):
        factory, errors = new_translator_factory(source, "xx")
        assert factory.errors == errors


@pytest.mark.unit
class TestGetTranslator:
    """Tests for TranslatorFactory.get_translator()."""

    @pytest.mark.parametrize("locale", ["en", "en-US", "fr", "de", "en-US-x1"])
    def test_same_instance_every_time(self, factory, locale):
        first, _ = factory.get_translator(locale)
        second, errors = factory.get_translator(locale)

        assert first is second
        assert errors == []

    def test_cache_hit_skips_source(self):
        source = CountingSource(rules={"root": "", "fr": ""})
        factory = TranslatorFactory(source)
        factory.get_translator("fr")
        requests = len(source.rule_requests)

        factory.get_translator("fr")

        assert len(source.rule_requests) == requests

    def test_full_chain_through_shorter_codes(self, factory):
        translator, errors = factory.get_translator("en-US-x1")

        assert translator.fallback_chain() == ["en-US-x1", "en-US", "en"]
        assert translator.fallback.fallback is factory.fallback
        assert factory.fallback.fallback is None
        assert len(errors) == 1
        assert isinstance(errors[0], MissingLocaleDataError)

    def test_parent_is_cached_as_side_effect(self, factory):
        factory.get_translator("en-US-posix")
        assert "en-US" in factory.translators()

    def test_skips_missing_intermediate_codes(self, factory):
        translator, _ = factory.get_translator("fr-CA-x-custom")
        assert translator.fallback_chain() == ["fr-CA-x-custom", "fr", "en"]

    def test_unknown_language_uses_global_fallback(self, factory):
        translator, errors = factory.get_translator("de")

        assert translator.fallback is factory.fallback
        assert [type(e) for e in errors] == [MissingLocaleDataError]

    def test_global_fallback_has_no_fallback(self, source):
        factory = TranslatorFactory(source, "en-US")

        assert factory.fallback.fallback is None
        assert factory.fallback.fallback_chain() == ["en-US"]

        # less specific codes still end at the global fallback
        translator, _ = factory.get_translator("en")
        assert translator.fallback_chain() == ["en", "en-US"]

    def test_chains_are_acyclic(self, factory):
        for locale in ["en", "en-US", "en-US-x1", "fr", "fr-CA", "ar", "de-AT"]:
            translator, _ = factory.get_translator(locale)
            chain = translator.fallback_chain()
            assert len(chain) == len(set(chain))
            assert chain[0] == locale

    def test_missing_root_rules(self):
        source = InMemoryTranslationSource(
            rules={"en": make_rules_data(plural_rule="one_other")},
            messages={"en": {"files": "{n} file|{n} files"}},
        )
        factory, errors = new_translator_factory(source, "en")

        assert [type(e) for e in errors] == [MissingRootRulesError]
        assert factory.fallback.p("files", 2, "2") == "2 files"

    def test_no_rules_at_all_uses_defaults(self):
        factory = TranslatorFactory(InMemoryTranslationSource())
        translator, errors = factory.get_translator("xx")

        assert [type(e) for e in errors] == [
            MissingRootRulesError,
            MissingLocaleDataError,
        ]
        assert translator.direction() == Direction.LTR
        assert translator.rules().plural_rule_name == "other"

    def test_locale_rules_override_root(self, factory):
        arabic, _ = factory.get_translator("ar")
        english, _ = factory.get_translator("en")

        assert arabic.direction() == Direction.RTL
        assert arabic.rules().plural_rule_name == "zero_one_two_few_many_other"
        assert english.direction() == Direction.LTR
        assert english.rules().plural_rule_name == "one_other"

    def test_root_layer_applies_when_locale_is_silent(self, factory):
        american, _ = factory.get_translator("en-US")
        assert american.rules().plural_rule_name == "other"

    def test_rule_parse_errors_are_collected(self):
        source = InMemoryTranslationSource(
            rules={"root": "", "bad": "plural_rule: [oops\n"},
        )
        factory = TranslatorFactory(source)
        translator, errors = factory.get_translator("bad")

        assert translator.locale == "bad"
        assert len(errors) == 1
        assert isinstance(errors[0], RulesParseError)

    def test_parent_errors_are_included(self):
        source = InMemoryTranslationSource(
            rules={"de": "", "de-AT": ""},
        )
        factory = TranslatorFactory(source)
        _, errors = factory.get_translator("de-AT")

        # root is missing for both the parent and the child
        assert [type(e) for e in errors] == [
            MissingRootRulesError,
            MissingRootRulesError,
        ]

    def test_concurrent_requests_share_instance(self, factory):
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(
                pool.map(lambda _: factory.get_translator("fr-BE")[0], range(32))
            )

        assert all(result is results[0] for result in results)


@pytest.mark.unit
class TestLocaleExists:
    """Tests for TranslatorFactory.locale_exists()."""

    def test_existing_and_missing(self, factory):
        assert factory.locale_exists("fr") is True
        assert factory.locale_exists("de") is False

    def test_has_no_side_effects(self, factory):
        factory.locale_exists("fr")
        assert "fr" not in factory.translators()


@pytest.mark.unit
class TestResolution:
    """End-to-end resolution through factory-built translators."""

    def test_own_message(self, factory):
        translator, _ = factory.get_translator("en-US")
        assert translator.translate("colour", {}) == ("color", [])

    def test_parent_message(self, factory):
        translator, _ = factory.get_translator("en-US-x1")
        assert translator.translate("greeting", {"name": "Jo"}) == ("Hello Jo", [])

    def test_missing_key_reported_once(self, factory):
        translator, _ = factory.get_translator("en-US-x1")
        translation, errors = translator.translate("missing.key", {})

        assert translation == ""
        assert len(errors) == 1
        assert isinstance(errors[0], KeyNotFoundError)
        assert errors[0].locale == "en"

    def test_pluralize_through_chain(self, factory):
        translator, _ = factory.get_translator("fr-CA")
        assert translator.pluralize("item_count", 1, "1") == ("1 article", [])
        assert translator.p("item_count", 4, "4") == "4 articles"

    def test_accessors_never_raise(self, factory):
        translator, _ = factory.get_translator("ar")

        assert translator.t("missing") == "missing"
        assert translator.tr("greeting", {"wrong": "x"}) == "greeting"
        # three variants but the Arabic rule asks for form 3
        assert translator.p("item_count", 5, "5") == "item_count"
        assert translator.p("item_count", 2, "2") == "2 two"


@pytest.mark.unit
class TestCreateTranslatorFactory:
    """Tests for create_translator_factory()."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "I18N_RULES_DIR",
            "I18N_MESSAGES_DIR",
            "I18N_FALLBACK_LOCALE",
            "I18N_PRELOAD",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_from_configured_directories(self, temp_locale_dirs):
        rules_dir, messages_dir = temp_locale_dirs
        settings = Settings(
            i18n=I18nSettings(
                I18N_RULES_DIR=str(rules_dir),
                I18N_MESSAGES_DIR=str(messages_dir),
                I18N_FALLBACK_LOCALE="en",
            )
        )

        factory = create_translator_factory(settings=settings)

        assert factory.fallback.locale == "en"
        assert set(factory.translators()) == {"en"}

    def test_preload(self, temp_locale_dirs):
        rules_dir, messages_dir = temp_locale_dirs
        settings = Settings(
            i18n=I18nSettings(
                I18N_RULES_DIR=str(rules_dir),
                I18N_MESSAGES_DIR=str(messages_dir),
                I18N_PRELOAD=True,
            )
        )

        factory = create_translator_factory(settings=settings)

        assert set(factory.translators()) == {"en", "fr", "he"}

    def test_with_explicit_source(self):
        settings = Settings(i18n=I18nSettings(I18N_FALLBACK_LOCALE="fr"))
        factory = create_translator_factory(settings=settings, source=make_source())

        assert factory.fallback.locale == "fr"

    def test_missing_directories(self):
        settings = Settings(i18n=I18nSettings())
        with pytest.raises(ValueError, match="I18N_RULES_DIR"):
            create_translator_factory(settings=settings)
