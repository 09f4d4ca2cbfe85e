"""
Contains helper functions to navigate nested data structures and to inspect validator functions.
"""
from .query_object import expand_path, optional_field, required_field, set_field
from .signature import accepts_keyword
