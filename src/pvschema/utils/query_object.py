"""
Contains functions to query and modify nested data structures by dotted paths. A path segment addresses a key of a
mapping, an index of a list or tuple or an attribute of any other object. The segment `$` stands for every element
of a list.
"""
import dataclasses
from collections.abc import Mapping, MutableMapping
from typing import Any, Generator, Iterable

from pvschema.errors import SchemaError

WILDCARD = "$"


def split_path(path: str) -> list[str]:
    """
    Splits the `path` into its segments. Raises a SchemaError on empty segments, e.g. `"a..b"`.
    """
    segments = path.split(".")
    if any(segment == "" for segment in segments):
        raise SchemaError(f"Invalid path {path!r}: empty path segment")
    return segments


def join_path(*segments: str) -> str:
    """Joins path segments, skipping empty prefixes"""
    return ".".join(segment for segment in segments if segment != "")


def is_sequence(obj: Any) -> bool:
    """Sequences which can be addressed by index segments and expanded by the wildcard"""
    return isinstance(obj, (list, tuple))


def _get_child(obj: Any, segment: str) -> Any:
    if isinstance(obj, Mapping):
        try:
            return obj[segment]
        except KeyError as error:
            raise AttributeError(segment) from error
    if is_sequence(obj):
        if not segment.isdigit() or int(segment) >= len(obj):
            raise AttributeError(segment)
        return obj[int(segment)]
    if isinstance(obj, (str, bytes, int, float)):
        raise AttributeError(segment)
    return getattr(obj, segment)


def required_field(obj: Any, path: str) -> Any:
    """
    Tries to query the `obj` with the provided `path`. If it is not existent, an AttributeError will be raised
    which names the first missing part of the path.
    """
    current_obj: Any = obj
    splitted_path = split_path(path)
    for index, segment in enumerate(splitted_path):
        try:
            current_obj = _get_child(current_obj, segment)
        except AttributeError as error:
            current_path = ".".join(splitted_path[0 : index + 1])
            raise AttributeError(f"{current_path}: Not found") from error
    return current_obj


def optional_field(obj: Any, path: str) -> Any:
    """
    Tries to query the `obj` with the provided `path`. If it is not existent, `None` will be returned.
    """
    try:
        return required_field(obj, path)
    except AttributeError:
        return None


def _parent_and_segment(obj: Any, path: str) -> tuple[Any, str]:
    *parent_segments, segment = split_path(path)
    parent = required_field(obj, ".".join(parent_segments)) if parent_segments else obj
    return parent, segment


def is_mutable(obj: Any) -> bool:
    """
    Returns False for containers whose children can't be replaced: immutable mappings (e.g. frozendict), tuples,
    scalars and frozen dataclasses.
    """
    if isinstance(obj, (MutableMapping, list)):
        return True
    if isinstance(obj, (Mapping, tuple, str, bytes, int, float)):
        return False
    if dataclasses.is_dataclass(obj) and obj.__dataclass_params__.frozen:  # type: ignore[union-attr]
        return False
    return True


def set_field(obj: Any, path: str, value: Any) -> bool:
    """
    Replaces the value at `path`. The parent of the value must exist, otherwise an AttributeError will be raised.
    Values inside immutable containers (see `is_mutable`) are left untouched; False is returned in that case.
    """
    parent, segment = _parent_and_segment(obj, path)
    if not is_mutable(parent):
        return False
    if isinstance(parent, MutableMapping):
        parent[segment] = value
    elif isinstance(parent, list) and segment.isdigit():
        parent[int(segment)] = value
    else:
        setattr(parent, segment, value)
    return True


def delete_field(obj: Any, path: str) -> None:
    """
    Removes the value at `path` from its parent mapping. List elements and attributes are left untouched since
    removing them would shift indices or break the object.
    """
    parent, segment = _parent_and_segment(obj, path)
    if isinstance(parent, MutableMapping):
        parent.pop(segment, None)


def iter_children(obj: Any) -> Iterable[tuple[str, Any]]:
    """Yields `(segment, value)` for every direct child of a mapping or sequence"""
    if isinstance(obj, Mapping):
        return ((str(key), value) for key, value in obj.items())
    if is_sequence(obj):
        return ((str(index), value) for index, value in enumerate(obj))
    return ()


def expand_path(obj: Any, path: str) -> Generator[tuple[str, Any], None, None]:
    """
    Resolves `path` within `obj` and yields `(concrete_path, value)` pairs. A path without wildcards yields exactly
    one pair, the value being `None` if it doesn't exist. Each wildcard segment is expanded once per element of the
    list found at that position; if there is no list, nothing is yielded for that branch.
    """
    yield from _expand(obj, split_path(path), [])


def _expand(current: Any, segments: list[str], prefix: list[str]) -> Generator[tuple[str, Any], None, None]:
    if not segments:
        yield ".".join(prefix), current
        return
    segment, *rest = segments
    if segment == WILDCARD:
        if is_sequence(current):
            for index, element in enumerate(current):
                yield from _expand(element, rest, [*prefix, str(index)])
        return
    child = optional_field(current, segment)
    yield from _expand(child, rest, [*prefix, segment])


def to_wildcard_path(path: str) -> str:
    """Replaces every index segment with the wildcard, e.g. `"tags.0.name"` becomes `"tags.$.name"`"""
    return ".".join(WILDCARD if segment.isdigit() else segment for segment in path.split("."))
