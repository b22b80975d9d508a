# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Typed failures raised by the service layer.

Every failure carries a machine-readable ``code`` and the HTTP status the API
layer answers with, so callers catch by type and never parse messages::

    ExpenseApprovalError
    +-- InvalidCredentials   (401)
    +-- Forbidden            (403)
    +-- NotFound             (404)
    +-- DuplicateIdentity    (409)
    +-- InvalidState         (409)
    +-- ValidationFailed     (422)
"""


class ExpenseApprovalError(Exception):
    """Base class for all service-layer failures."""

    code: str = "error"
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(ExpenseApprovalError):
    """No active account matches the supplied email and password."""

    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid credentials"


class DuplicateIdentity(ExpenseApprovalError):
    """The email address is already registered."""

    code = "duplicate_identity"
    status_code = 409
    default_message = "Email already exists"


class Forbidden(ExpenseApprovalError):
    """The actor lacks the role or ownership the action requires."""

    code = "forbidden"
    status_code = 403
    default_message = "Not allowed"


class InvalidState(ExpenseApprovalError):
    """The action is not legal from the expense's current status."""

    code = "invalid_state"
    status_code = 409
    default_message = "Action not allowed in the current status"


class NotFound(ExpenseApprovalError):
    """The record does not exist or is not visible to the actor."""

    code = "not_found"
    status_code = 404
    default_message = "Not found"


class ValidationFailed(ExpenseApprovalError):
    """Input failed a business rule before anything was written."""

    code = "validation_failed"
    status_code = 422
    default_message = "Validation failed"
