"""Decorators for declaring injectable classes.

A class becomes constructible by the engine once it is decorated with
``@injectable``. Constructor parameters are injected positionally; the
identifier for each one is taken from its type hint, or from an ``Inject``
marker when the hint alone is not enough:

```python
@injectable
class Mailer:
    transport: Annotated[Transport, Inject()]

    def __init__(self, settings: Annotated[dict, Inject("mail.settings")], log: Logger):
        ...
```

Attributes are only injected when they carry an ``Inject`` marker.
"""

import inspect
from typing import (
    Annotated, Any, Callable, Optional, Tuple, TypeVar, Union,
    get_args, get_origin, get_type_hints,
)

from loguru import logger

from ..errors import IdentifierInferenceError, MultipleDecorationError
from .identifiers import describe_identifier, is_service_ident
from .metadata import declare_dependency, is_class_tagged, tag_class

T = TypeVar("T")

_MISSING = object()


class Inject:
    """Injection marker used as ``Annotated`` metadata.

    ``Inject()`` injects by type hint; ``Inject(ident)`` overrides the
    identifier with a string, token or class.
    """

    def __init__(self, ident: Any = None):
        self.ident = ident

    def __repr__(self) -> str:
        if self.ident is None:
            return "Inject()"
        return f"Inject({describe_identifier(self.ident)})"


def _split_annotation(annotation: Any) -> Tuple[Any, Optional[Inject]]:
    """Separate an annotation into its base type and optional Inject marker."""
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        for extra in extras:
            if isinstance(extra, Inject):
                return base, extra
        return base, None
    return annotation, None


def _choose_identifier(base: Any, marker: Optional[Inject]) -> Tuple[Any, Optional[str]]:
    """Pick the identifier for an injection site.

    Returns:
        The identifier, and a reason string when it cannot be used
    """
    if marker is not None and marker.ident is not None:
        ident = marker.ident
    elif base is _MISSING:
        return None, "no type annotation"
    else:
        ident = base

    if not is_service_ident(ident):
        return ident, f"{ident!r} is not a valid identifier"
    return ident, None


def _type_hints(target: Any, owner: type) -> dict:
    try:
        return get_type_hints(target, include_extras=True)
    except NameError as e:
        raise IdentifierInferenceError(
            f"Cannot resolve type hints of class {owner.__qualname__}: {e}",
            owner=owner,
        ).with_suggestion(
            "Define referenced types before the class or use Inject(ident)"
        ) from e


def _declare_constructor(cls: type) -> None:
    """Declare identifiers for every injected constructor parameter."""
    init = cls.__init__
    if init is object.__init__:
        return

    hints = _type_hints(init, cls)
    params = list(inspect.signature(init).parameters.values())[1:]

    index = 0
    stopped = False
    for param in params:
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue

        base, marker = _split_annotation(hints.get(param.name, _MISSING))
        has_default = param.default is not param.empty

        if param.kind == param.KEYWORD_ONLY:
            if marker is not None or not has_default:
                raise IdentifierInferenceError.for_parameter(
                    cls, index, param.name,
                    reason="keyword-only parameters cannot be injected",
                )
            continue

        if has_default and marker is None:
            stopped = True
            index += 1
            continue
        if stopped:
            raise IdentifierInferenceError.for_parameter(
                cls, index, param.name,
                reason="follows a parameter that is left to its default",
            )

        ident, reason = _choose_identifier(base, marker)
        if reason:
            raise IdentifierInferenceError.for_parameter(cls, index, param.name, reason=reason)

        declare_dependency(cls, ident, param_index=index)
        index += 1


def _declare_properties(cls: type) -> None:
    """Declare identifiers for attributes annotated with an Inject marker."""
    for name, annotation in _type_hints(cls, cls).items():
        base, marker = _split_annotation(annotation)
        if marker is None:
            continue

        ident, reason = _choose_identifier(base, marker)
        if reason:
            raise IdentifierInferenceError.for_property(cls, name, reason=reason)

        declare_dependency(cls, ident, prop=name)


def injectable(
    cls: Optional[type] = None,
) -> Union[type, Callable[[type], type]]:
    """Mark a class as constructible by the engine.

    Works both as ``@injectable`` and ``@injectable()``.

    Raises:
        MultipleDecorationError: If the class is already marked
        IdentifierInferenceError: If an injection site has no usable identifier
    """
    def decorator(cls: type) -> type:
        if not inspect.isclass(cls):
            raise TypeError(f"@injectable can only decorate classes, got {cls!r}")
        if is_class_tagged(cls):
            raise MultipleDecorationError.for_class(cls)

        _declare_constructor(cls)
        _declare_properties(cls)
        tag_class(cls)

        logger.debug(f"Marked {cls.__qualname__} as injectable")
        return cls

    if cls is None:
        return decorator
    return decorator(cls)
