"""
Contains functionality to analyze the result of a validation process
"""
import itertools
from typing import Iterator, Optional

from .errors import ValidationError


def _extract_validator(validation_error: ValidationError) -> str:
    return validation_error.validator


class ValidationResult:
    """
    The function `Schema.analyze` will return an instance of this class. It wraps the ValidationErrors of one
    validation and provides properties to group and count them. Note that the values are calculated only if you use
    them.
    """

    def __init__(self, errors: list[ValidationError]):
        self.errors = errors
        self._errors_per_path: Optional[dict[str, list[ValidationError]]] = None
        self._num_errors_per_validator: Optional[dict[str, int]] = None

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def is_valid(self) -> bool:
        """True if no ValidationError was found"""
        return len(self.errors) == 0

    @property
    def num_errors_total(self) -> int:
        """Number of errors in total"""
        return len(self.errors)

    @property
    def errors_per_path(self) -> dict[str, list[ValidationError]]:
        """Maps each concrete path that failed to its errors, in the order of validation"""
        if self._errors_per_path is None:
            self._errors_per_path = {}
            for error in self.errors:
                self._errors_per_path.setdefault(error.path, []).append(error)
        return self._errors_per_path

    @property
    def failed_paths(self) -> list[str]:
        """The concrete paths that failed (equivalent to `list(self.errors_per_path)`)"""
        return list(self.errors_per_path)

    @property
    def num_errors_per_validator(self) -> dict[str, int]:
        """
        This is a dictionary which maps the name of a validator to the number of times it failed.
        """
        if self._num_errors_per_validator is None:
            self._num_errors_per_validator = {
                key: sum(1 for _ in values_iter)
                for key, values_iter in itertools.groupby(
                    sorted(self.errors, key=_extract_validator), key=_extract_validator
                )
            }
        return self._num_errors_per_validator

    def messages(self) -> list[str]:
        """The messages of all errors"""
        return [error.message for error in self.errors]
