"""
This package enables you to validate nested data structures against declaratively composed schemas. Every path of
the data is validated by its own pipeline of validators and all failures are reported, each with a human-readable
message that can be overridden per property or per schema.
"""

from .analysis import ValidationResult
from .errors import SchemaError, ValidationError
from .messages import ComputedMessage, LiteralMessage, Message
from .property import Property, ValidatorEntry
from .schema import Schema
