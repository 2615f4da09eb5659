"""Feature-level fixtures for i18n system tests."""

import pytest
import yaml

from polyglot.i18n import TranslatorFactory, YAMLTranslationSource
from tests.factories.i18n import make_rules_data, make_source


@pytest.fixture
def source():
    """In-memory source with root, en, en-US, fr and ar data."""
    return make_source()


@pytest.fixture
def factory(source):
    """TranslatorFactory with "en" as the global fallback."""
    return TranslatorFactory(source, "en")


@pytest.fixture
def temp_locale_dirs(tmp_path):
    """Create rules and messages directories with sample YAML files.

    Returns (rules_dir, messages_dir) laid out as:
    - rules/root.yaml, rules/en.yaml, rules/fr.yml, rules/he.yaml
    - messages/en.yaml
    - messages/fr/01-front-end.yaml, messages/fr/02-email.yaml
    """
    rules_dir = tmp_path / "rules"
    messages_dir = tmp_path / "messages"
    rules_dir.mkdir()
    messages_dir.mkdir()

    (rules_dir / "root.yaml").write_text(
        make_rules_data(plural_rule="other", direction="ltr")
    )
    (rules_dir / "en.yaml").write_text(make_rules_data(plural_rule="one_other"))
    (rules_dir / "fr.yml").write_text(make_rules_data(plural_rule="one_other"))
    (rules_dir / "he.yaml").write_text(make_rules_data(direction="rtl"))

    en_messages = {
        "greeting": "Hello {name}",
        "cart": {
            "item_count": ["{n} item", "{n} items"],
            "empty": "Your cart is empty",
        },
    }
    with open(messages_dir / "en.yaml", "w", encoding="utf-8") as f:
        yaml.dump(en_messages, f)

    fr_dir = messages_dir / "fr"
    fr_dir.mkdir()
    with open(fr_dir / "01-front-end.yaml", "w", encoding="utf-8") as f:
        yaml.dump(
            {"greeting": "Bonjour {name}", "cart": {"empty": "Panier vide"}},
            f,
            allow_unicode=True,
        )
    with open(fr_dir / "02-email.yaml", "w", encoding="utf-8") as f:
        yaml.dump(
            {"greeting": "Chère {name}", "email": {"subject": "Votre commande"}},
            f,
            allow_unicode=True,
        )

    return rules_dir, messages_dir


@pytest.fixture
def yaml_source(temp_locale_dirs):
    """YAMLTranslationSource over the temporary locale directories."""
    rules_dir, messages_dir = temp_locale_dirs
    return YAMLTranslationSource(rules_dir, messages_dir)
