"""
Contains the Property class which holds the validation configuration of a single path of a schema.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Literal, Optional

from frozendict import frozendict

from . import validators as builtin_validators
from .errors import SchemaError, ValidationError
from .messages import Message, as_message, resolve
from .types import BoundsRule, MessageLike, TypeSpec, ValidatorFunction, ValidatorSpec
from .utils.query_object import WILDCARD, join_path
from .utils.signature import accepts_keyword

if TYPE_CHECKING:
    from .schema import Schema

_PRIORITIZED_VALIDATORS = ("required", "type")


@dataclass(frozen=True)
class ValidatorEntry:
    """
    A validator registered on a property. Entries without an explicit `function` look up the validator of the same
    name in the schema each time they are invoked, so validators registered on the schema later on are used as well.
    """

    name: str
    function: Optional[ValidatorFunction] = None
    args: tuple[Any, ...] = ()

    @property
    def arg(self) -> Any:
        """The bound argument which is handed over to the message functions"""
        return self.args[0] if self.args else None

    def resolve(self, schema: "Schema") -> ValidatorFunction:
        """Returns the function which implements this validator"""
        if self.function is not None:
            return self.function
        try:
            return schema.validators[self.name]
        except KeyError as error:
            raise SchemaError(f"Validator {self.name!r} is not registered on the schema") from error

    def invoke(self, schema: "Schema", value: Any, context: Any, path: str) -> bool:
        """
        Calls the validator with `(value, context, *args)`. If the function accepts a `path` keyword argument, the
        path of the validated value is passed as well.
        """
        function = self.resolve(schema)
        if accepts_keyword(function, "path"):
            return bool(function(value, context, *self.args, path=path))
        return bool(function(value, context, *self.args))


def _freeze(rule: Any) -> Any:
    if isinstance(rule, Mapping) and not isinstance(rule, frozendict):
        return frozendict(rule)
    return rule


class Property:
    """
    The validation configuration of one path of a schema. Properties are created by `Schema.path` and all builder
    methods return the property itself, so they can be chained:
    ```
    schema.path("name").type("string").required().length({"min": 1, "max": 64})
    ```
    """

    def __init__(self, name: str, schema: "Schema"):
        self.name = name
        self._schema = schema
        self._type: Optional[TypeSpec] = None
        self.validators: dict[str, ValidatorEntry] = {}
        self.messages: dict[str, Message] = {}
        self.default_message: Optional[Message] = None

    def __repr__(self):
        return f"Property({self.name!r}, validators={list(self.validators)})"

    def _register(self, name: str, *args: Any) -> "Property":
        self.validators[name] = ValidatorEntry(name, None, args)
        return self

    def message(self, messages: "MessageLike | Mapping[str, MessageLike]") -> "Property":
        """
        A mapping registers messages per validator name. A single string or message function becomes the default
        message for every validator of this property.
        """
        if isinstance(messages, Mapping):
            for name, message in messages.items():
                self.messages[name] = as_message(message)
        else:
            self.default_message = as_message(messages)
        return self

    def use(self, validators: Mapping[str, ValidatorSpec]) -> "Property":
        """
        Registers custom validators. Each value is either a function or a `(function, arg)` pair whose `arg` is
        passed as third argument. The keys are used to look up error messages.
        """
        for name, spec in validators.items():
            if callable(spec):
                self.validators[name] = ValidatorEntry(name, spec)
            elif isinstance(spec, (tuple, list)) and len(spec) == 2 and callable(spec[0]):
                self.validators[name] = ValidatorEntry(name, spec[0], (_freeze(spec[1]),))
            else:
                raise SchemaError(f"Validator {name!r} must be a function or a (function, arg) pair, got {spec!r}")
        return self

    def required(self, flag: bool = True) -> "Property":
        """Values must not be None or an empty string, unless `flag` is False"""
        return self._register("required", flag)

    def type(self, type_spec: TypeSpec) -> "Property":
        """
        Declares the type of the value. It is checked by the `type` validator and used by `typecast`.
        """
        self._type = type_spec
        return self._register("type", type_spec)

    def match(self, pattern: Any) -> "Property":
        return self._register("match", pattern)

    def length(self, rule: BoundsRule) -> "Property":
        """`rule` is an exact length or a mapping with optional `min` and `max`"""
        return self._register("length", _freeze(rule))

    def size(self, rule: BoundsRule) -> "Property":
        return self._register("size", _freeze(rule))

    def enum(self, choices: Any) -> "Property":
        """Values must be one of `choices`"""
        if isinstance(choices, (list, set, frozenset)):
            choices = tuple(choices)
        return self._register("enum", choices)

    def schema(self, sub_schema: "Schema | Mapping[str, Any]") -> "Property":
        """
        Mounts every path of `sub_schema` below this property. The properties are shared, not copied.
        """
        # pylint: disable=import-outside-toplevel
        from .schema import Schema

        if not isinstance(sub_schema, Schema):
            sub_schema = Schema(sub_schema)
        for sub_path, prop in sub_schema.paths.items():
            self._schema.paths[join_path(self.name, sub_path)] = prop
        return self

    def elements(self, specs: list[Any]) -> "Property":
        """
        Declares the paths `<name>.0`, `<name>.1`, ... and configures each of them with the respective spec.
        """
        for index, spec in enumerate(specs):
            self._schema.path(join_path(self.name, str(index)), spec)
        return self

    def each(self, spec: Any) -> "Property":
        """
        Declares the wildcard path `<name>.$` whose configuration is applied to every element of the array.
        """
        self._schema.path(join_path(self.name, WILDCARD), spec)
        return self

    def path(self, *args: Any, **kwargs: Any) -> "Property":
        """Shortcut for `Schema.path` of the owning schema"""
        return self._schema.path(*args, **kwargs)

    def typecast(self, value: Any) -> Any:
        """
        Converts `value` to the declared type. Returns the value unchanged if no type is declared.
        """
        return builtin_validators.typecast(value, self._type)

    def _ordered_validators(self) -> Iterator[ValidatorEntry]:
        for name in _PRIORITIZED_VALIDATORS:
            if name in self.validators:
                yield self.validators[name]
        for name, entry in self.validators.items():
            if name not in _PRIORITIZED_VALIDATORS:
                yield entry

    def validate(
        self, value: Any, context: Any = None, path: Optional[str] = None
    ) -> "Literal[False] | ValidationError":
        """
        Runs the validators, `required` and `type` first, the others in the order of their registration. Returns the
        ValidationError of the first failing validator or False if the value is valid.
        `path` defaults to the name of the property; the schema overrides it for expanded array paths.
        """
        if context is None:
            context = {}
        if path is None:
            path = self.name
        for entry in self._ordered_validators():
            if not entry.invoke(self._schema, value, context, path):
                message = resolve(self, self._schema, entry.name, path, context, entry.arg)
                return ValidationError(message, path, entry.name)
        return False
