"""Service identifiers.

An identifier is the key a service is registered and requested under. Four
forms are accepted:

- a ``str``
- a ``Token``, compared by identity like a symbol
- a concrete class
- an abstract class or ``typing.Protocol``

``object`` is rejected: it says nothing about what should be injected.
"""

from typing import Any, Union


class Token:
    """Opaque symbolic identifier, equal only to itself."""

    __slots__ = ("description",)

    def __init__(self, description: str = ""):
        self.description = description

    def __repr__(self) -> str:
        return f"Token({self.description!r})"


ServiceIdent = Union[str, Token, type]


def is_service_ident(value: Any) -> bool:
    """Check whether ``value`` can be used as a service identifier."""
    if isinstance(value, (str, Token)):
        return True
    if isinstance(value, type):
        return value is not object
    return False


def describe_identifier(ident: Any) -> str:
    """Render an identifier for diagnostics."""
    if isinstance(ident, type):
        return ident.__qualname__
    return repr(ident)
