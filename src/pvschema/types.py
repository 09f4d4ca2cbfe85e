"""
Contains the types used in the validation framework
"""
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, TypeAlias

if TYPE_CHECKING:
    from .messages import Message
    from .schema import Schema

ValidatorFunction: TypeAlias = Callable[..., Any]
"""
A predicate `(value, context, *bound_args) -> truthy | falsy`. A falsy return value marks the value as invalid.
"""
MessageFunction: TypeAlias = Callable[[str, Any, Any], str]
"""
Produces an error message from `(path, context, bound_arg)`.
"""
MessageLike: TypeAlias = "str | MessageFunction | Message"
ValidatorSpec: TypeAlias = "ValidatorFunction | tuple[ValidatorFunction, Any] | list[Any]"
"""
Either a bare predicate or a `(predicate, bound_arg)` pair as accepted by `Property.use`.
"""
TypeSpec: TypeAlias = "str | type | Any"
"""
A type name (`"number"`, `"string"`, ...) or a Python type / typing annotation.
"""
BoundsRule: TypeAlias = "int | float | Mapping[str, Any]"
"""
Either an exact number or a mapping with optional `min` and `max` keys.
"""
Definition: TypeAlias = "Mapping[str, Any] | list[Any] | str | type | Schema"
"""
Everything the declarative schema builder accepts.
"""
