"""Transaction operations: validation, balance bookkeeping and notifications in a fixed order."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

import models
import schemas
from utils.balances import adjust_friendship_balance, is_friendship_scoped
from utils.notifications import push_notifier
from utils.validation import (
    validate_transaction,
    TransactionValidationError,
    TransactionNotFound,
    TransactionForbidden,
)


MUTABLE_FIELDS = ("type", "amount", "memo")


@dataclass(frozen=True)
class TransactionSnapshot:
    """The ledger-relevant values of a transaction at one point in time."""
    id: int
    amount: int
    sender_id: int
    recipient_id: int
    related_object_type: str
    related_object_id: int

    @classmethod
    def of(cls, t: models.Transaction) -> "TransactionSnapshot":
        return cls(
            id=t.id,
            amount=t.amount,
            sender_id=t.sender_id,
            recipient_id=t.recipient_id,
            related_object_type=t.related_object_type,
            related_object_id=t.related_object_id,
        )


class TransactionService:
    """
    Create, update and delete transactions for an authenticated caller.

    Every write keeps the friendship balance in step with the transaction in
    the same database transaction. Notifications go out only after the commit,
    only for create and update, and only for friendship transactions.
    """

    def __init__(self, db: Session, notifier=None):
        self.db = db
        self.notifier = notifier or push_notifier

    def get(self, transaction_id: int) -> models.Transaction:
        t = self.db.query(models.Transaction).filter(
            models.Transaction.id == transaction_id,
            models.Transaction.deleted_at.is_(None)
        ).first()
        if not t:
            raise TransactionNotFound(transaction_id)
        return t

    def get_for_participant(self, transaction_id: int, caller_id: int) -> models.Transaction:
        t = self.get(transaction_id)
        if caller_id not in (t.sender_id, t.recipient_id, t.creator_id):
            # Don't reveal other people's transactions
            raise TransactionNotFound(transaction_id)
        return t

    def get_for_creator(self, transaction_id: int, caller_id: int) -> models.Transaction:
        t = self.get(transaction_id)
        if t.creator_id != caller_id:
            raise TransactionForbidden(transaction_id)
        return t

    def list_transactions(
        self,
        caller_id: int,
        related_user_id: Optional[int] = None,
        related_object_id: Optional[int] = None,
        related_object_type: Optional[str] = None
    ) -> list[models.Transaction]:
        """
        Transactions between the caller and ``related_user_id`` within one
        related object, or every transaction the caller created when no
        related user/object is given. Newest first.
        """
        query = self.db.query(models.Transaction).filter(models.Transaction.deleted_at.is_(None))

        if related_user_id and related_object_id:
            query = query.filter(
                or_(
                    and_(models.Transaction.sender_id == caller_id,
                         models.Transaction.recipient_id == related_user_id),
                    and_(models.Transaction.sender_id == related_user_id,
                         models.Transaction.recipient_id == caller_id),
                ),
                models.Transaction.related_object_id == related_object_id
            )
            if related_object_type:
                query = query.filter(models.Transaction.related_object_type == related_object_type)
        else:
            query = query.filter(models.Transaction.creator_id == caller_id)

        return query.order_by(models.Transaction.created_at.desc(), models.Transaction.id.desc()).all()

    def create(self, data: schemas.TransactionCreate, caller_id: int) -> models.Transaction:
        t = models.Transaction(**data.model_dump(), creator_id=caller_id, is_settled=False)
        validate_transaction(t)

        self.db.add(t)
        self.db.flush()
        adjust_friendship_balance(self.db, t)
        self.db.commit()
        self.db.refresh(t)

        if is_friendship_scoped(t):
            self.notifier.notify(self.db, t)
        return t

    def update(self, transaction_id: int, patch: schemas.TransactionUpdate, caller_id: int) -> models.Transaction:
        t = self.get_for_creator(transaction_id, caller_id)
        previous = TransactionSnapshot.of(t)

        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        for field in MUTABLE_FIELDS:
            if field in changes:
                setattr(t, field, changes[field])

        try:
            validate_transaction(t)
        except TransactionValidationError:
            # Drop the merged values so the session matches the database again
            self.db.rollback()
            raise

        # Old contribution out before the new one goes in, committed together
        adjust_friendship_balance(self.db, previous, reverse=True)
        self.db.flush()
        adjust_friendship_balance(self.db, t)
        self.db.commit()
        self.db.refresh(t)

        if is_friendship_scoped(t):
            self.notifier.notify(self.db, t)
        return t

    def delete(self, transaction_id: int, caller_id: int) -> None:
        t = self.get_for_creator(transaction_id, caller_id)

        t.deleted_at = datetime.utcnow()
        self.db.flush()
        adjust_friendship_balance(self.db, t, reverse=True)
        self.db.commit()
