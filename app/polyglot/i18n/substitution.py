"""Named placeholder substitution for resolved messages."""

from typing import Any, List, Mapping, Optional, Tuple

from polyglot.i18n.errors import SubstitutionNotFoundError, TranslatorError


def placeholder(name: str) -> str:
    return "{" + name + "}"


def substitute(
    template: str,
    substitutions: Optional[Mapping[str, Any]] = None,
    locale: Optional[str] = None,
) -> Tuple[str, List[TranslatorError]]:
    """Replace ``{name}`` placeholders in ``template``.

    Every pair in ``substitutions`` is applied to all occurrences of its
    placeholder. A name whose placeholder does not appear in the original
    template is reported, but the replacement still runs. Pairs are applied
    in mapping order; placeholders that overlap across names give
    order-dependent results.

    Args:
        template: Message containing ``{name}`` placeholders.
        substitutions: Mapping of placeholder name to value. Values are
            converted with ``str()``.
        locale: Locale code attached to any reported errors.

    Returns:
        Tuple of the substituted string and the errors recorded.
    """
    substituted = template
    errors: List[TranslatorError] = []

    for name, value in (substitutions or {}).items():
        token = placeholder(name)
        if token not in template:
            errors.append(SubstitutionNotFoundError(name, template, locale=locale))
        substituted = substituted.replace(token, str(value))

    return substituted, errors
