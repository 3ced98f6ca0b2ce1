"""
Sentinel for distinguishing unset arguments from None.

UNSET marks an override that was not provided, so merge() style methods can
inherit the current value while still accepting None as an explicit value.

Example:
    >>> def merge(sign: Sign | UnsetType = UNSET):
    ...     sign = ifunset(sign, default=current_sign)
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifunset',
]


class UnsetType:
    """
    Type of the UNSET singleton.

    Compares by identity and is falsy.
    """
    __slots__ = ()

    _instance: "UnsetType | None" = None

    def __new__(cls) -> "UnsetType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (UnsetType, ())


UNSET: Final[UnsetType] = UnsetType()


def ifunset(value: Any, *, default: Any) -> Any:
    """Return default if value is UNSET, otherwise return value."""
    return default if value is UNSET else value
