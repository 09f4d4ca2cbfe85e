"""
Contains the Schema class, the entry point of the validation framework.
"""
from collections.abc import Mapping
from typing import Any, Callable, Generator, Optional, get_origin

from frozendict import frozendict

from .analysis import ValidationResult
from .errors import SchemaError, ValidationError
from .messages import Message, as_message, resolve_schema_message
from .property import Property
from .types import Definition, MessageLike, ValidatorFunction
from .utils.query_object import (
    delete_field,
    expand_path,
    iter_children,
    join_path,
    set_field,
    split_path,
    to_wildcard_path,
)
from .validators import BUILTIN_VALIDATORS

_SPEC_APPLIERS: dict[str, Callable[[Property, Any], Any]] = {
    "type": Property.type,
    "required": Property.required,
    "match": Property.match,
    "length": Property.length,
    "size": Property.size,
    "enum": Property.enum,
    "schema": Property.schema,
    "elements": Property.elements,
    "each": Property.each,
    "message": Property.message,
    "use": Property.use,
}
"""
The keys of a property spec in a declarative schema definition and the builder methods they are applied with.
"""


def _is_property_spec(definition: Mapping[str, Any]) -> bool:
    """
    A mapping is a property spec if all of its keys are spec keys. A mapping valued `type` key denotes a nested
    field called "type" instead.
    """
    return all(key in _SPEC_APPLIERS for key in definition) and not isinstance(definition.get("type"), Mapping)


def _is_type_spec(definition: Any) -> bool:
    """Type names, classes and typing annotations like `Optional[int]` or `int | None`"""
    return isinstance(definition, (str, type)) or get_origin(definition) is not None


def _strict_prefixes(path: str) -> Generator[str, None, None]:
    segments = path.split(".")
    for index in range(1, len(segments)):
        yield ".".join(segments[:index])


class Schema:
    """
    A schema maps dotted paths onto properties which describe how the value at the respective path is validated.
    It can be built step by step
    ```
    schema = Schema()
    schema.path("name").type("string").required()
    schema.path("tags").type("array").each({"type": "string"})
    ```
    or from a declarative definition
    ```
    schema = Schema({"name": {"type": "string", "required": True}, "tags": [{"type": "string"}]})
    ```
    `validate` returns the list of all ValidationErrors. The options `typecast`, `strip` and `strict` set the defaults
    for every call of `validate`.
    """

    def __init__(
        self,
        definition: Optional[Mapping[str, Any]] = None,
        *,
        typecast: bool = False,
        strip: bool = False,
        strict: bool = False,
    ):
        self.paths: dict[str, Property] = {}
        self.validators: dict[str, ValidatorFunction] = dict(BUILTIN_VALIDATORS)
        self.messages: dict[str, Message] = {}
        self.options: frozendict[str, bool] = frozendict(typecast=typecast, strip=strip, strict=strict)
        if definition is not None:
            if not isinstance(definition, Mapping):
                raise SchemaError(f"A schema definition must be a mapping, got {type(definition).__name__}")
            for name, spec in definition.items():
                self.path(name, spec)

    def __repr__(self):
        return f"Schema({list(self.paths)})"

    def path(self, name: str, spec: Optional[Definition] = None) -> Property:
        """
        Returns the property of the path `name`, creating it if it doesn't exist yet. If `spec` is given, the
        property is configured with it.
        """
        prop = self.paths.get(name)
        if prop is None:
            split_path(name)
            prop = Property(name, self)
            self.paths[name] = prop
        if spec is not None:
            self._apply(prop, spec)
        return prop

    def _apply(self, prop: Property, spec: Definition) -> None:
        """
        Configures `prop` with a declarative definition: a Schema is mounted, a type name, class or annotation declares
        the type, a list declares the array elements (`each` if it holds a single spec), a property spec is applied key
        by key and any other mapping declares nested paths. Lists and nested mappings also declare the property as
        `array` or `object` unless it has a type already.
        """
        if isinstance(spec, Schema):
            prop.schema(spec)
        elif _is_type_spec(spec):
            prop.type(spec)
        elif isinstance(spec, list):
            if prop._type is None:  # pylint: disable=protected-access
                prop.type("array")
            if len(spec) == 1:
                prop.each(spec[0])
            else:
                prop.elements(spec)
        elif isinstance(spec, Mapping):
            if _is_property_spec(spec):
                for key, value in spec.items():
                    _SPEC_APPLIERS[key](prop, value)
            else:
                if prop._type is None:  # pylint: disable=protected-access
                    prop.type("object")
                for key, value in spec.items():
                    self.path(join_path(prop.name, key), value)
        else:
            raise SchemaError(f"Invalid definition for path {prop.name!r}: {spec!r}")

    def validator(self, validators: Mapping[str, ValidatorFunction]) -> "Schema":
        """
        Registers validators by name for all properties of this schema. Existing validators, including the built-in
        ones, are replaced.
        """
        self.validators.update(validators)
        return self

    def message(self, messages: Mapping[str, MessageLike]) -> "Schema":
        """
        Registers error messages by validator name for all properties of this schema. A property's own messages take
        precedence.
        """
        for name, message in messages.items():
            self.messages[name] = as_message(message)
        return self

    def _option(self, name: str, override: Optional[bool]) -> bool:
        return self.options[name] if override is None else override

    def _unknown_paths(self, obj: Any) -> list[str]:
        """
        Returns the paths of all values in `obj` which are neither declared nor lead to a declared path.
        Numeric segments also match the wildcard of a declared path.
        """
        declared = set(self.paths)
        prefixes = {prefix for path in declared for prefix in _strict_prefixes(path)}
        unknown: list[str] = []

        def walk(value: Any, prefix: str) -> None:
            for segment, child in iter_children(value):
                path = join_path(prefix, segment)
                candidates = {path, to_wildcard_path(path)}
                if not candidates & (declared | prefixes):
                    unknown.append(path)
                elif candidates & prefixes:
                    walk(child, path)

        walk(obj, "")
        return unknown

    def validate(
        self,
        obj: Any,
        context: Any = None,
        *,
        typecast: Optional[bool] = None,
        strip: Optional[bool] = None,
        strict: Optional[bool] = None,
    ) -> list[ValidationError]:
        """
        Validates every declared path of `obj` and returns all ValidationErrors in the order the paths were declared.
        Wildcard paths are validated once per array element, the errors carrying the concrete index path.
        `context` is passed to every validator and defaults to `obj` itself.
        With `typecast` the values are converted in place first, with `strict` every value at an undeclared path is
        reported and with `strip` such values are removed from `obj`.
        """
        if context is None:
            context = obj
        if self._option("typecast", typecast):
            self.typecast(obj)
        errors: list[ValidationError] = []
        unknown = self._unknown_paths(obj) if self._option("strict", strict) or self._option("strip", strip) else []
        if self._option("strip", strip):
            for path in reversed(unknown):
                delete_field(obj, path)
        for name, prop in self.paths.items():
            for concrete_path, value in expand_path(obj, name):
                error = prop.validate(value, context, concrete_path)
                if error is not False:
                    errors.append(error)
        if self._option("strict", strict):
            for path in unknown:
                errors.append(
                    ValidationError(resolve_schema_message(self, "illegal", path, context, None), path, "illegal")
                )
        return errors

    def assert_valid(self, obj: Any, context: Any = None, **options: Optional[bool]) -> None:
        """
        Like `validate` but raises the first ValidationError instead of returning them.
        """
        errors = self.validate(obj, context, **options)
        if errors:
            raise errors[0]

    def analyze(self, obj: Any, context: Any = None, **options: Optional[bool]) -> ValidationResult:
        """
        Like `validate` but wraps the errors into a ValidationResult for further analysis.
        """
        return ValidationResult(self.validate(obj, context, **options))

    def typecast(self, obj: Any) -> Any:
        """
        Converts every present value at a declared path to the type of its property. `obj` is modified in place and
        returned. Values inside immutable containers like tuples, frozendicts or frozen dataclasses are left as they
        are.
        """
        for name, prop in self.paths.items():
            for concrete_path, value in list(expand_path(obj, name)):
                if value is None:
                    continue
                converted = prop.typecast(value)
                if converted is not value:
                    set_field(obj, concrete_path, converted)
        return obj
