"""Exceptions raised by the credential package."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nats_credentials.validation import ValidationIssue


class CredentialError(Exception):
    """Base class for credential errors."""


class CredentialValidationError(CredentialError, ValueError):
    """A credential instance does not satisfy its schema.

    Attributes:
        issues: Every problem found, in field declaration order.
    """

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        reasons = "; ".join(issue.message for issue in self.issues)
        super().__init__(f"Invalid credential: {reasons}")

    @property
    def reasons(self) -> list[str]:
        return [issue.message for issue in self.issues]


class CredsFormatError(CredentialError, ValueError):
    """Creds file content is missing its JWT or NKey seed block."""
