"""Validation utilities for users and transactions, plus the transaction error types."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

import models


MAX_TRANSACTION_AMOUNT = 1000000  # $10,000.00 in cents
MAX_MEMO_LENGTH = 140

VALID_TYPES = {t.value for t in models.TransactionType}
VALID_STATUSES = {s.value for s in models.TransactionStatus}
VALID_RELATED_OBJECT_TYPES = {r.value for r in models.RelatedObjectType}


class TransactionValidationError(HTTPException):
    """A transaction field broke one of the validation rules."""

    def __init__(self, code: str, field: str, reason: str):
        self.code = code
        self.field = field
        self.reason = reason
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": code, "field": field, "reason": reason},
        )


class TransactionNotFound(HTTPException):
    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")


class TransactionForbidden(HTTPException):
    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the creator of a transaction can modify it",
        )


def get_user_by_email(db: Session, email: str):
    """Get a user by their email address."""
    return db.query(models.User).filter(models.User.email == email).first()


def validate_transaction(t) -> None:
    """
    Check a transaction against the field rules, in order.

    Only the first failing rule is reported. ``t`` can be anything with the
    transaction attributes (ORM model or schema). Sender and recipient may be
    the same user; no cross-field checks are made.

    Raises:
        TransactionValidationError: for the first rule that fails
    """
    if t.type not in VALID_TYPES:
        raise TransactionValidationError("InvalidType", "type", "The transaction type is invalid")

    if t.status not in VALID_STATUSES:
        raise TransactionValidationError("InvalidStatus", "status", "The transaction status is invalid")

    if t.amount is None or t.amount < 0 or t.amount > MAX_TRANSACTION_AMOUNT:
        raise TransactionValidationError("InvalidAmount", "amount", "The transaction amount is out of range")

    # len() counts code points, not bytes
    if len(t.memo or "") > MAX_MEMO_LENGTH:
        raise TransactionValidationError(
            "InvalidMemo", "memo",
            f"The transaction memo must be less than or equal to {MAX_MEMO_LENGTH} characters"
        )

    if not t.sender_id:
        raise TransactionValidationError("InvalidSender", "sender_id", "The transaction sender_id cannot be 0 or empty")

    if not t.recipient_id:
        raise TransactionValidationError(
            "InvalidRecipient", "recipient_id", "The transaction recipient_id cannot be 0 or empty"
        )

    if not t.related_object_id:
        raise TransactionValidationError(
            "InvalidRelatedObject", "related_object_id", "The transaction related_object_id cannot be 0 or empty"
        )

    if t.related_object_type not in VALID_RELATED_OBJECT_TYPES:
        raise TransactionValidationError(
            "InvalidRelatedObjectType", "related_object_type",
            "The transaction must have a valid related_object_type"
        )
