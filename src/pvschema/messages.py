"""
Contains the built-in error messages and the resolution of message overrides.

A message is looked up in the following order, the first hit wins:

1. the message the property registered for the failing validator
2. the default message of the property
3. the message the schema registered for the failing validator
4. the built-in message for the failing validator
5. the generic built-in `default` message
"""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from .types import BoundsRule, MessageFunction, MessageLike, TypeSpec
from .validators import type_name

if TYPE_CHECKING:
    from .property import Property
    from .schema import Schema


@dataclass(frozen=True)
class LiteralMessage:
    """A fixed message which is returned verbatim"""

    text: str

    def render(self, path: str, context: Any, arg: Any) -> str:  # pylint: disable=unused-argument
        """Returns the text as it is"""
        return self.text


@dataclass(frozen=True)
class ComputedMessage:
    """A message which is produced by calling `function(path, context, arg)`"""

    function: MessageFunction

    def render(self, path: str, context: Any, arg: Any) -> str:
        """Calls the message function"""
        return str(self.function(path, context, arg))


Message = LiteralMessage | ComputedMessage


def as_message(message: MessageLike) -> Message:
    """
    Wraps strings and callables into their respective message type. Messages are returned as they are.
    """
    if isinstance(message, (LiteralMessage, ComputedMessage)):
        return message
    if isinstance(message, str):
        return LiteralMessage(message)
    if callable(message):
        return ComputedMessage(message)
    raise TypeError(f"A message must be a string or a callable, got {type(message).__name__}")


def _describe_bounds(path: str, rule: BoundsRule, noun: str) -> str:
    if not isinstance(rule, Mapping):
        return f"{path} must have a {noun} of {rule}."
    minimum, maximum = rule.get("min"), rule.get("max")
    if minimum is not None and maximum is not None:
        return f"{path} must have a {noun} between {minimum} and {maximum}."
    if maximum is not None:
        return f"{path} must have a maximum {noun} of {maximum}."
    if minimum is not None:
        return f"{path} must have a minimum {noun} of {minimum}."
    return f"{path} must have a valid {noun}."


# built-in message producers, all of them are called with (path, context, arg)
def required(path: str, context: Any, flag: Any = True) -> str:  # pylint: disable=unused-argument
    return f"{path} is required."


def type_(path: str, context: Any, type_spec: TypeSpec) -> str:  # pylint: disable=unused-argument
    return f"{path} must be of type {type_name(type_spec)}."


def match(path: str, context: Any, pattern: Any) -> str:  # pylint: disable=unused-argument
    return f"{path} must match {getattr(pattern, 'pattern', pattern)}."


def length(path: str, context: Any, rule: BoundsRule) -> str:  # pylint: disable=unused-argument
    return _describe_bounds(path, rule, "length")


def size(path: str, context: Any, rule: BoundsRule) -> str:  # pylint: disable=unused-argument
    return _describe_bounds(path, rule, "size")


def enum(path: str, context: Any, choices: Any) -> str:  # pylint: disable=unused-argument
    if not choices:
        return f"{path} has no allowed value."
    *head, last = [str(choice) for choice in choices]
    if not head:
        return f"{path} must be {last}."
    return f"{path} must be either {', '.join(head)} or {last}."


def illegal(path: str, context: Any = None, arg: Any = None) -> str:  # pylint: disable=unused-argument
    return f"{path} is not allowed."


def default(path: str, context: Any = None, arg: Any = None) -> str:  # pylint: disable=unused-argument
    return f"Validation failed for {path}."


BUILTIN_MESSAGES: dict[str, MessageFunction] = {
    "required": required,
    "type": type_,
    "match": match,
    "length": length,
    "size": size,
    "enum": enum,
    "illegal": illegal,
    "default": default,
}


def resolve_schema_message(schema: "Schema", validator_name: str, path: str, context: Any, arg: Any) -> str:
    """
    Produces the message for `validator_name` from the schema overrides or the built-in messages.
    """
    message = schema.messages.get(validator_name)
    if message is None:
        message = ComputedMessage(BUILTIN_MESSAGES.get(validator_name, default))
    return message.render(path, context, arg)


def resolve(prop: "Property", schema: "Schema", validator_name: str, path: str, context: Any, arg: Any) -> str:
    """
    Produces the message for the failing validator `validator_name` of `prop`.
    """
    message: Optional[Message] = prop.messages.get(validator_name)
    if message is None:
        message = prop.default_message
    if message is None:
        return resolve_schema_message(schema, validator_name, path, context, arg)
    return message.render(path, context, arg)
