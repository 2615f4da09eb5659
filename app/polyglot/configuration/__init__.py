"""Configuration module - public API.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Localization settings class

Example:
    ```python
    from polyglot.configuration import settings

    fallback = settings.i18n.fallback_locale
    ```
"""

from polyglot.configuration.i18n import I18nSettings
from polyglot.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
