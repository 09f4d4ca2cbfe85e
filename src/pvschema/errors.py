"""
Contains the error classes of the validation framework
"""


class ValidationError(Exception):
    """
    Describes a single failed validator of a property. Instances are returned by `Property.validate` and collected
    by `Schema.validate`; they are only raised by `Schema.assert_valid`.
    """

    def __init__(self, message: str, path: str, validator: str = "default"):
        super().__init__(message)
        self.message = message
        self.path = path
        self.validator = validator

    def __eq__(self, other):
        return (
            isinstance(other, ValidationError)
            and self.message == other.message
            and self.path == other.path
            and self.validator == other.validator
        )

    def __hash__(self):
        return hash((self.message, self.path, self.validator))

    def __str__(self):
        return self.message

    def __repr__(self):
        return f"ValidationError({self.message!r}, path={self.path!r}, validator={self.validator!r})"


class SchemaError(ValueError):
    """
    Raised if a schema is configured wrongly, e.g. an unregistered validator name, an unknown type name or a
    malformed rule. These are programming errors and therefore fail fast instead of being collected.
    """
