"""
gnuopt utilities (internal helpers, carefully exposed)

Overview
- UnsetType / Unset
  • Singleton sentinel meaning “no value received yet” without conflating with None.
  • A custom coercer may legitimately return None, so the parse driver cannot use
    None to tell an option that still awaits its value from one that got it.

- nullify(object, default=None)
  • Replace Unset with a concrete default, preserving falsey values like None/0/"".

Quick examples
    >>> nullify(Unset, "fallback")  # "fallback"
    'fallback'
    >>> nullify(0, "fallback")      # 0 is preserved
    0
"""
import functools
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process‑wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    - final: subclassing is forbidden to preserve semantics (see __init_subclass__).
    """

    def __or__(self, other, /):
        """
        support UnsetType | T in annotations and isinstance checks.
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        support T | UnsetType in annotations and isinstance checks.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
internal singleton instance of UnsetType.

note
- exposed for completeness, but intended for internal API use only.
"""


def nullify(object, default=None, /):
    """
    return `default` when `object` is Unset; otherwise return `object` unchanged.

    falsey values like None, 0, "" or [] are preserved as-is; they are not treated
    as “unset”.
    """
    return default if object is Unset else object


__all__ = (
    "UnsetType",
    "Unset",
    "nullify",
)
