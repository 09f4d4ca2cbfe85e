"""
Contains the built-in validator functions and the type conversions used by `Property.typecast`.
Every validator is a predicate with the signature `(value, context, arg) -> bool`. All of them except `required`
accept absent values (`None`): whether a value has to be present is solely decided by `required`.
"""
import re
from collections.abc import Mapping, Sized
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable

from typeguard import TypeCheckError, check_type

from .errors import SchemaError
from .types import BoundsRule, TypeSpec, ValidatorFunction

TYPES: dict[str, Any] = {
    "number": int | float | Decimal,
    "string": str,
    "boolean": bool,
    "date": date,
    "array": list | tuple,
    "object": Mapping,
}
"""
Maps the supported type names onto the annotations the values are checked against.
"""

_TYPE_NAMES_BY_CLASS: dict[type, str] = {
    bool: "boolean",
    int: "number",
    float: "number",
    Decimal: "number",
    str: "string",
    date: "date",
    datetime: "date",
    list: "array",
    tuple: "array",
    dict: "object",
}


def type_name(type_spec: TypeSpec) -> str:
    """
    Returns a human-readable name of the type specification, used in error messages.
    """
    if isinstance(type_spec, str):
        return type_spec
    if isinstance(type_spec, type):
        return type_spec.__name__
    return str(type_spec)


def _resolve_type(type_spec: TypeSpec) -> Any:
    if isinstance(type_spec, str):
        try:
            return TYPES[type_spec]
        except KeyError as error:
            raise SchemaError(f"Unknown type {type_spec!r}, expected one of {', '.join(TYPES)}") from error
    if type_spec is None:
        raise SchemaError("The type validator needs a type")
    return type_spec


def required(value: Any, context: Any, flag: bool = True) -> bool:  # pylint: disable=unused-argument
    """
    Fails if `flag` is set and the value is `None` or an empty string.
    """
    if not flag:
        return True
    return value is not None and value != ""


def type_(value: Any, context: Any, type_spec: TypeSpec) -> bool:  # pylint: disable=unused-argument
    """
    Fails if the value is present and doesn't match the type. `type_spec` is either one of the names in `TYPES`
    or any annotation supported by typeguard.
    """
    expected = _resolve_type(type_spec)
    if value is None:
        return True
    if isinstance(value, bool) and type_spec in ("number", int, float):
        # bool is a subclass of int but never counts as a number
        return False
    try:
        check_type(value, expected)
    except TypeCheckError:
        return False
    return True


def match(value: Any, context: Any, pattern: "str | re.Pattern[str]") -> bool:  # pylint: disable=unused-argument
    """
    Fails if the value is present and the regular expression can't be found in it.
    """
    if pattern is None:
        raise SchemaError("The match validator needs a pattern")
    if value is None:
        return True
    return re.search(pattern, value if isinstance(value, str) else str(value)) is not None


def _within_bounds(measure: Any, rule: BoundsRule, validator_name: str) -> bool:
    if isinstance(rule, bool) or not isinstance(rule, (int, float, Mapping)):
        raise SchemaError(f"Invalid {validator_name} rule {rule!r}: expected a number or a mapping with min/max")
    if not isinstance(rule, Mapping):
        return bool(measure == rule)
    minimum = rule.get("min")
    maximum = rule.get("max")
    if minimum is not None and measure < minimum:
        return False
    if maximum is not None and measure > maximum:
        return False
    return True


def length(value: Any, context: Any, rule: BoundsRule) -> bool:  # pylint: disable=unused-argument
    """
    Fails if the length of the value is outside of the bounds. `rule` is either an exact length or a mapping with
    optional (inclusive) `min` and `max` keys. Values without a length fail.
    """
    if value is None:
        return True
    if not isinstance(value, Sized):
        _within_bounds(0, rule, "length")
        return False
    return _within_bounds(len(value), rule, "length")


def size(value: Any, context: Any, rule: BoundsRule) -> bool:  # pylint: disable=unused-argument
    """
    Like `length` but compares the numeric value itself. Non-numeric values fail.
    """
    if value is None:
        return True
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        _within_bounds(0, rule, "size")
        return False
    return _within_bounds(value, rule, "size")


def enum(value: Any, context: Any, choices: Any) -> bool:  # pylint: disable=unused-argument
    """
    Fails if the value is present and not one of the `choices`.
    """
    if value is None:
        return True
    return value in choices


BUILTIN_VALIDATORS: dict[str, ValidatorFunction] = {
    "required": required,
    "type": type_,
    "match": match,
    "length": length,
    "size": size,
    "enum": enum,
}


def to_number(value: Any) -> Any:
    """Converts numeric strings and booleans to numbers"""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        for convert in (int, float):
            try:
                return convert(text)
            except ValueError:
                pass
    return value


def to_string(value: Any) -> Any:
    """Converts scalars to their string representation"""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def to_boolean(value: Any) -> bool:
    """Strings like "false", "0", "no" or "off" are False, everything else is interpreted as usual"""
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no", "off", "")
    return bool(value)


def to_date(value: Any) -> Any:
    """Parses ISO 8601 strings and interprets numbers as UTC timestamps in seconds"""
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return value


def to_array(value: Any) -> Any:
    """Splits comma separated strings, converts sets to lists and wraps scalars. Tuples are arrays already"""
    if isinstance(value, (list, tuple)):
        return value
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    if isinstance(value, Mapping):
        return value
    return [value]


def to_object(value: Any) -> Any:
    """Mappings stay as they are, there is no sensible conversion for other values"""
    return value


TYPECASTERS: dict[str, Callable[[Any], Any]] = {
    "number": to_number,
    "string": to_string,
    "boolean": to_boolean,
    "date": to_date,
    "array": to_array,
    "object": to_object,
}


def typecast(value: Any, type_spec: TypeSpec) -> Any:
    """
    Converts `value` into the type described by `type_spec`. Values which can't be converted are returned unchanged,
    so the `type` validator will report them afterwards.
    """
    if value is None or type_spec is None:
        return value
    if isinstance(type_spec, str):
        name = type_spec
    elif isinstance(type_spec, type) and type_spec in _TYPE_NAMES_BY_CLASS:
        name = _TYPE_NAMES_BY_CLASS[type_spec]
    else:
        return value
    if name not in TYPECASTERS:
        raise SchemaError(f"Unknown type {type_spec!r}, expected one of {', '.join(TYPES)}")
    return TYPECASTERS[name](value)
