"""
Scalefmt utilities shared across the package.

Contains helpers used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Builtin classes are never module-qualified.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(int)
        'int'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if fully_qualified and cls.__module__ != "builtins":
        return f"{cls.__module__}.{cls.__qualname__}"
    return cls.__qualname__


def fmt_type(obj: Any) -> str:
    """
    Format type information for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type("abc")
        '<str>'
    """
    return f"<{class_name(obj)}>"
