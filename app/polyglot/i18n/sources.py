"""Translation sources.

A source is the storage side of the i18n system: it hands out raw rule data
per locale and looks up single messages by (key, locale). The factory and
translators never see files or parsed catalogs.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from polyglot.i18n.models import ROOT_LOCALE
from polyglot.i18n.plurals import PLURAL_SEPARATOR
from polyglot.logging import get_module_logger

logger = get_module_logger()

YAML_SUFFIXES = (".yaml", ".yml")


class TranslationSource(ABC):
    """Abstract base for translation sources."""

    @abstractmethod
    def get_rules(self, locale_code: str) -> Optional[bytes]:
        """Return raw rule data for a locale.

        Args:
            locale_code: Locale code, or ROOT_LOCALE for the shared rules.

        Returns:
            Raw rule bytes, or None if the locale has no rule data.
        """

    @abstractmethod
    def get_message(self, key: str, locale_code: str) -> Optional[str]:
        """Return the raw message for a key in a locale.

        Args:
            key: Message key (e.g. "cart.item_count").
            locale_code: Locale code.

        Returns:
            The message, possibly holding pipe-delimited plural variants,
            or None if the locale has no message for the key.
        """

    @abstractmethod
    def available_locales(self) -> List[str]:
        """Return the locale codes this source has rule data for.

        The shared ROOT_LOCALE is not included.
        """


def flatten_messages(data: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested message mappings into dot-separated keys.

    Lists are treated as plural variants and joined with the plural
    separator. A list holding mappings or lists is not a valid set of
    variants; it is logged and dropped. Null values are dropped.

    Example:
        {"cart": {"items": ["{n} item", "{n} items"]}}
        -> {"cart.items": "{n} item|{n} items"}
    """
    flat: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten_messages(value, prefix=f"{full_key}."))
        elif isinstance(value, list):
            if any(isinstance(v, (dict, list)) for v in value):
                logger.warning(
                    "invalid_plural_variants", key=full_key, expected="scalars"
                )
                continue
            flat[full_key] = PLURAL_SEPARATOR.join(str(v) for v in value)
        elif value is not None:
            flat[full_key] = str(value)
    return flat


def _is_safe_locale_code(locale_code: str) -> bool:
    return (
        bool(locale_code)
        and "/" not in locale_code
        and "\\" not in locale_code
        and locale_code not in (".", "..")
    )


class YAMLTranslationSource(TranslationSource):
    """Source backed by YAML files on disk.

    Rules live in ``<rules_dir>/<locale>.yaml``; ``root.yaml`` holds the
    rules shared by every locale.

    Messages can be organised in two ways, which may be combined:

        messages/                 messages/
          en.yaml                   en/
          fr.yaml                     front-end.yaml
                                      email.yaml

    Files inside a locale directory are merged in filename order, later
    files overriding earlier ones, after the single ``<locale>.yaml`` file.

    Attributes:
        rules_dir: Directory containing rule files.
        messages_dir: Directory containing message files.
        use_cache: Whether to keep loaded rules and messages in memory.
    """

    def __init__(
        self,
        rules_dir: Union[str, Path],
        messages_dir: Union[str, Path],
        use_cache: bool = True,
    ):
        self.rules_dir = Path(rules_dir)
        self.messages_dir = Path(messages_dir)
        self.use_cache = use_cache
        self._rules_cache: Dict[str, Optional[bytes]] = {}
        self._messages_cache: Dict[str, Dict[str, str]] = {}

        if not self.rules_dir.is_dir():
            raise ValueError(f"Rules directory not found: {self.rules_dir}")
        if not self.messages_dir.is_dir():
            raise ValueError(f"Messages directory not found: {self.messages_dir}")

        logger.info(
            "initialized_yaml_source",
            rules_dir=str(self.rules_dir),
            messages_dir=str(self.messages_dir),
            use_cache=use_cache,
        )

    def get_rules(self, locale_code: str) -> Optional[bytes]:
        if self.use_cache and locale_code in self._rules_cache:
            return self._rules_cache[locale_code]

        data = None
        if _is_safe_locale_code(locale_code):
            for suffix in YAML_SUFFIXES:
                path = self.rules_dir / f"{locale_code}{suffix}"
                if path.is_file():
                    try:
                        data = path.read_bytes()
                    except OSError as e:
                        logger.error(
                            "rules_file_read_error", file=str(path), error=str(e)
                        )
                    break

        if self.use_cache:
            self._rules_cache[locale_code] = data
        return data

    def get_message(self, key: str, locale_code: str) -> Optional[str]:
        return self._load_messages(locale_code).get(key)

    def available_locales(self) -> List[str]:
        locales = {
            path.stem
            for path in self.rules_dir.iterdir()
            if path.is_file() and path.suffix in YAML_SUFFIXES
        }
        locales.discard(ROOT_LOCALE)
        return sorted(locales)

    def _message_files(self, locale_code: str) -> List[Path]:
        files = []
        for suffix in YAML_SUFFIXES:
            path = self.messages_dir / f"{locale_code}{suffix}"
            if path.is_file():
                files.append(path)

        locale_dir = self.messages_dir / locale_code
        if locale_dir.is_dir():
            files.extend(
                sorted(
                    path
                    for path in locale_dir.iterdir()
                    if path.is_file() and path.suffix in YAML_SUFFIXES
                )
            )
        return files

    def _load_messages(self, locale_code: str) -> Dict[str, str]:
        if self.use_cache and locale_code in self._messages_cache:
            return self._messages_cache[locale_code]

        messages: Dict[str, str] = {}
        files = []
        if _is_safe_locale_code(locale_code):
            files = self._message_files(locale_code)

        for message_file in files:
            try:
                with open(message_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(message_file), error=str(e))
                continue
            except (UnicodeDecodeError, OSError) as e:
                logger.error(
                    "message_file_read_error", file=str(message_file), error=str(e)
                )
                continue

            if data is None:
                continue
            if not isinstance(data, dict):
                logger.warning(
                    "invalid_yaml_format", file=str(message_file), expected="dict"
                )
                continue
            messages.update(flatten_messages(data))

        logger.debug(
            "loaded_messages",
            locale=locale_code,
            file_count=len(files),
            message_count=len(messages),
        )

        if self.use_cache:
            self._messages_cache[locale_code] = messages
        return messages


class InMemoryTranslationSource(TranslationSource):
    """Source backed by plain dictionaries.

    Args:
        rules: Mapping of locale code to raw rule data (bytes or str).
        messages: Mapping of locale code to a (possibly nested) message
            mapping, flattened the same way as YAML message files.

    Example:
        source = InMemoryTranslationSource(
            rules={"root": "plural_rule: other", "en": "plural_rule: one_other"},
            messages={"en": {"greeting": "Hello {name}"}},
        )
    """

    def __init__(
        self,
        rules: Optional[Mapping[str, Union[bytes, str]]] = None,
        messages: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ):
        self._rules: Dict[str, bytes] = {
            code: data.encode("utf-8") if isinstance(data, str) else data
            for code, data in (rules or {}).items()
        }
        self._messages: Dict[str, Dict[str, str]] = {
            code: flatten_messages(data) for code, data in (messages or {}).items()
        }

    def get_rules(self, locale_code: str) -> Optional[bytes]:
        return self._rules.get(locale_code)

    def get_message(self, key: str, locale_code: str) -> Optional[str]:
        return self._messages.get(locale_code, {}).get(key)

    def available_locales(self) -> List[str]:
        return sorted(code for code in self._rules if code != ROOT_LOCALE)
