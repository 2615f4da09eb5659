"""Plural rules and plural variant selection.

A plural rule is a plain function mapping a quantity to a zero-based form
index. Messages carry one variant per form, separated by ``|`` and ordered
by increasing index:

    "{n} item|{n} items"

Rule data names one of the functions in ``PLURAL_RULES``; everything past
that lookup only ever sees the function itself.
"""

from typing import Callable, Dict, List, NamedTuple

PluralRule = Callable[[float], int]

PLURAL_SEPARATOR = "|"
DEFAULT_PLURAL_RULE = "other"


def _is_integer(n: float) -> bool:
    return float(n).is_integer()


def plural_other(n: float) -> int:
    """Single form (ja, zh, ko, ...)."""
    return 0


def plural_one_other(n: float) -> int:
    """one: 1; other: everything else (en, de, es, ...)."""
    return 0 if n == 1 else 1


def plural_zero_one_other(n: float) -> int:
    """zero: 0; one: 1; other: everything else."""
    if n == 0:
        return 0
    if n == 1:
        return 1
    return 2


def plural_one_few_many(n: float) -> int:
    """East Slavic forms (ru, uk, be).

    Fractions share the "few" variant, which matches their written form.
    """
    if not _is_integer(n):
        return 1
    n = abs(int(n))
    if n % 10 == 1 and n % 100 != 11:
        return 0
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return 1
    return 2


def plural_one_few_other(n: float) -> int:
    """Polish forms: one: 1; few: 2-4 outside 12-14; other: everything else."""
    if not _is_integer(n):
        return 1
    n = abs(int(n))
    if n == 1:
        return 0
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return 1
    return 2


def plural_one_two_few_many_other(n: float) -> int:
    """Irish forms: 1, 2, 3-6, 7-10, other."""
    if n == 1:
        return 0
    if n == 2:
        return 1
    if _is_integer(n) and 3 <= n <= 6:
        return 2
    if _is_integer(n) and 7 <= n <= 10:
        return 3
    return 4


def plural_zero_one_two_few_many_other(n: float) -> int:
    """Arabic forms: 0, 1, 2, 3-10, 11-99, other (by n % 100)."""
    if n == 0:
        return 0
    if n == 1:
        return 1
    if n == 2:
        return 2
    if not _is_integer(n):
        return 5
    mod100 = abs(int(n)) % 100
    if 3 <= mod100 <= 10:
        return 3
    if 11 <= mod100 <= 99:
        return 4
    return 5


PLURAL_RULES: Dict[str, PluralRule] = {
    "other": plural_other,
    "one_other": plural_one_other,
    "zero_one_other": plural_zero_one_other,
    "one_few_many": plural_one_few_many,
    "one_few_other": plural_one_few_other,
    "one_two_few_many_other": plural_one_two_few_many_other,
    "zero_one_two_few_many_other": plural_zero_one_two_few_many_other,
}


def get_plural_rule(name: str) -> PluralRule:
    """Look up a plural rule by name.

    Args:
        name: Rule name as used in rule data (e.g. "one_other").

    Returns:
        The plural rule function.

    Raises:
        KeyError: If no rule with that name is registered.
    """
    try:
        return PLURAL_RULES[name]
    except KeyError as e:
        raise KeyError(f"Unknown plural rule: {name}") from e


class PluralSelection(NamedTuple):
    """Outcome of picking a plural variant.

    Attributes:
        variant: The selected message variant.
        form: The form index the rule asked for.
        available: How many variants the message has.
        clamped: True if ``form`` was out of range and the nearest variant was used.
    """

    variant: str
    form: int
    available: int
    clamped: bool


def split_variants(message: str) -> List[str]:
    return message.split(PLURAL_SEPARATOR)


def select_plural_variant(
    message: str, quantity: float, plural_rule: PluralRule
) -> PluralSelection:
    """Pick the variant of ``message`` matching ``quantity``.

    Args:
        message: Pipe-delimited plural variants.
        quantity: The number that decides the plural form.
        plural_rule: Function mapping ``quantity`` to a form index.

    Returns:
        PluralSelection with the chosen variant. When the form index falls
        outside the available variants it is clamped and ``clamped`` is set.
    """
    variants = split_variants(message)
    form = plural_rule(quantity)
    index = min(max(form, 0), len(variants) - 1)
    return PluralSelection(
        variant=variants[index],
        form=form,
        available=len(variants),
        clamped=index != form,
    )
