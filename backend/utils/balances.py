"""Friendship balance bookkeeping for transaction create/update/delete."""

import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session

import models


logger = logging.getLogger(__name__)


@dataclass
class BalanceChange:
    """Scratch balance starting at zero, used to measure what a step would write."""
    positive_user_id: int
    balance: int = 0


def is_friendship_scoped(t) -> bool:
    return t.related_object_type == models.RelatedObjectType.FRIENDSHIP.value


def balance_delta(fd, t) -> int:
    """
    Signed change a transaction makes to a friendship balance.

    A positive balance means the positive user is owed money, so a transaction
    sent *to* the positive user lowers it and one sent *by* them raises it.
    Transactions touching neither side contribute nothing.
    """
    if fd.positive_user_id == t.recipient_id:
        return -t.amount
    if fd.positive_user_id == t.sender_id:
        return t.amount
    return 0


def apply_forward(fd, t):
    """Apply a transaction's contribution to ``fd.balance`` in memory."""
    fd.balance += balance_delta(fd, t)
    return fd


def apply_reverse(fd, t):
    """Undo a contribution previously made by ``apply_forward``."""
    fd.balance -= balance_delta(fd, t)
    return fd


def get_friendship_data(db: Session, friendship_id: int) -> Optional[models.FriendshipData]:
    return db.query(models.FriendshipData).filter(
        models.FriendshipData.friendship_id == friendship_id
    ).first()


def adjust_friendship_balance(db: Session, t, reverse: bool = False) -> Optional[int]:
    """
    Apply (or reverse) a transaction against its friendship's stored balance.

    The balance is changed with a single ``balance = balance + delta`` UPDATE so
    concurrent adjustments to the same friendship can't overwrite each other.
    The caller owns the commit.

    Args:
        db: Database session
        t: Transaction (or a snapshot with the same attributes)
        reverse: Undo the transaction's contribution instead of applying it

    Returns:
        The delta written, or None when nothing was done (group-scoped
        transaction or missing FriendshipData).
    """
    if not is_friendship_scoped(t):
        return None

    fd = get_friendship_data(db, t.related_object_id)
    if fd is None:
        logger.warning(
            f"No FriendshipData for friendship {t.related_object_id}; "
            f"skipping balance update for transaction {t.id}"
        )
        return None

    step = apply_reverse if reverse else apply_forward
    delta = step(BalanceChange(fd.positive_user_id), t).balance
    if delta == 0:
        return 0

    db.query(models.FriendshipData).filter(
        models.FriendshipData.id == fd.id
    ).update(
        {models.FriendshipData.balance: models.FriendshipData.balance + delta},
        synchronize_session=False
    )
    # The in-session copy is stale after a bulk UPDATE
    db.expire(fd, ["balance"])
    return delta


def balance_for_user(fd: models.FriendshipData, user_id: int) -> int:
    """Balance from ``user_id``'s side: positive means they are owed."""
    if fd.positive_user_id == user_id:
        return fd.balance
    return -fd.balance
