"""Lint validator interface and composition."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING

from modinfo.validation.errors import ValidationResult

if TYPE_CHECKING:
    from modinfo.models.modinfo import Modinfo

logger = logging.getLogger(__name__)


class BaseValidator(ABC):
    """A single lint rule (or group of related rules) over a canonical model.

    Validators never raise for findings; they append issues to the shared
    result so that one run reports everything at once.
    """

    @abstractmethod
    def validate(self, modinfo: Modinfo, result: ValidationResult) -> None:
        """Check the descriptor and record issues.

        Args:
        ----
            modinfo: Canonical model to check.
            result: Collector the issues are appended to.

        """
        ...


class CompositeValidator(BaseValidator):
    """Runs a sequence of validators against one result."""

    def __init__(self, validators: Iterable[BaseValidator] = ()) -> None:
        self.validators: list[BaseValidator] = list(validators)

    def add(self, validator: BaseValidator) -> None:
        """Append a validator to the end of the run order."""
        self.validators.append(validator)

    def validate(self, modinfo: Modinfo, result: ValidationResult) -> None:
        """Run every validator in order, logging how many issues each adds."""
        for validator in self.validators:
            before = len(result.issues)
            validator.validate(modinfo, result)
            logger.debug(
                "%s reported %d issue(s) for %r",
                type(validator).__name__,
                len(result.issues) - before,
                modinfo.name,
            )
