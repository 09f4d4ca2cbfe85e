"""
Contains functions to inspect the signature of validator functions.
"""
import inspect
import weakref
from typing import Callable

_KeywordNames = tuple[frozenset[str], bool]

_keyword_cache: "weakref.WeakKeyDictionary[Callable, _KeywordNames]" = weakref.WeakKeyDictionary()
"""
Caches the inspected signatures without keeping the validator functions alive.
"""


def _keyword_names(function: Callable) -> _KeywordNames:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        # some builtins don't provide a signature
        return frozenset(), False
    names = frozenset(
        name
        for name, parameter in signature.parameters.items()
        if parameter.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
    )
    has_var_keyword = any(
        parameter.kind == inspect.Parameter.VAR_KEYWORD for parameter in signature.parameters.values()
    )
    return names, has_var_keyword


def _cached_keyword_names(function: Callable) -> _KeywordNames:
    try:
        return _keyword_cache[function]
    except KeyError:
        pass
    except TypeError:
        # neither weakly referenceable nor hashable, e.g. builtin functions
        return _keyword_names(function)
    keyword_names = _keyword_names(function)
    _keyword_cache[function] = keyword_names
    return keyword_names


def accepts_keyword(function: Callable, name: str) -> bool:
    """
    Returns True if `function` can be called with the keyword argument `name`, either because it declares a
    parameter of that name or because it accepts arbitrary keyword arguments.
    """
    names, has_var_keyword = _cached_keyword_names(function)
    return has_var_keyword or name in names
