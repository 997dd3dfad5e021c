"""Domain layer errors.

Every failure a command can produce is a subclass of DomainError carrying an
ErrorKind, so callers can branch on the kind without parsing messages.
"""

from typing import ClassVar

from tide.domain.value import ErrorKind, OfferAction, TruequeStatus


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[ErrorKind]


class ValidationError(DomainError):
    """Domain validation error (empty text, negative amounts)."""

    kind = ErrorKind.VALIDATION


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class SelectionError(DomainError):
    """Raised when acting without the required selection, or selecting a
    user outside the selected community."""

    kind = ErrorKind.SELECTION


class IllegalTransitionError(DomainError):
    """Raised when an offer cannot move from its current status."""

    kind = ErrorKind.ILLEGAL_TRANSITION

    def __init__(self, trueque_id: str, status: TruequeStatus, action: OfferAction):
        self.trueque_id = trueque_id
        self.status = status
        self.action = action
        super().__init__(
            f"Cannot {action.value} trueque {trueque_id} while {status.value}"
        )


class SelfActionError(DomainError):
    """Raised when an owner tries to counter, accept or reject their own offer."""

    kind = ErrorKind.SELF_ACTION

    def __init__(self, trueque_id: str, user_id: str, action: OfferAction):
        self.trueque_id = trueque_id
        self.user_id = user_id
        self.action = action
        super().__init__(
            f"User {user_id} cannot {action.value} their own trueque {trueque_id}"
        )


class InsufficientBalanceError(DomainError):
    """Raised when a payer's balance does not cover the amount."""

    kind = ErrorKind.INSUFFICIENT_BALANCE

    def __init__(self, user_id: str, balance: int, required: int):
        self.user_id = user_id
        self.balance = balance
        self.required = required
        super().__init__(
            f"User {user_id} has {balance} TT, {required} TT required"
        )
