"""Localization settings."""

from typing import Optional

from pydantic import Field, field_validator

from polyglot.configuration.base import ComponentSettings


class I18nSettings(ComponentSettings):
    """Locale data locations and fallback behaviour.

    Environment Variables:
        I18N_RULES_DIR: Directory holding ``<locale>.yaml`` rule files
        I18N_MESSAGES_DIR: Directory holding ``<locale>.yaml`` message files
            or ``<locale>/`` subdirectories of message files
        I18N_FALLBACK_LOCALE: Global fallback locale code (default: en).
            An empty value disables the global fallback.
        I18N_PRELOAD: Resolve every locale found in the source at startup
            (default: False)

    Example:
        ```python
        from polyglot.configuration import settings

        rules_dir = settings.i18n.rules_dir
        fallback = settings.i18n.fallback_locale
        ```
    """

    rules_dir: Optional[str] = Field(default=None, alias="I18N_RULES_DIR")
    messages_dir: Optional[str] = Field(default=None, alias="I18N_MESSAGES_DIR")
    fallback_locale: str = Field(
        default="en",
        alias="I18N_FALLBACK_LOCALE",
        description="Locale used when no less specific locale has a translation",
    )
    preload: bool = Field(
        default=False,
        alias="I18N_PRELOAD",
        description="Resolve all available locales when the factory is created",
    )

    @field_validator("fallback_locale", mode="before")
    @classmethod
    def strip_fallback_locale(cls, v: Optional[str]) -> str:
        """Normalize an unset fallback locale to an empty string."""
        if v is None:
            return ""
        return str(v).strip()
