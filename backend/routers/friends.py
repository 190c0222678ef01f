"""Friends router: manage friend relationships and their running balances."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

import models
import schemas
from database import get_db
from dependencies import CurrentUser
from utils.balances import balance_for_user
from utils.validation import get_user_by_email


router = APIRouter(prefix="/friends", tags=["friends"])


def _friend_view(friendship: models.Friendship, friend: models.User, user_id: int) -> schemas.Friend:
    balance = balance_for_user(friendship.data, user_id) if friendship.data else 0
    return schemas.Friend(
        id=friend.id,
        full_name=friend.full_name,
        email=friend.email,
        friendship_id=friendship.id,
        balance=balance
    )


@router.post("", response_model=schemas.Friend)
def add_friend(
    friend_request: schemas.FriendRequest,
    current_user: CurrentUser,
    db: Session = Depends(get_db)
):
    friend_user = get_user_by_email(db, friend_request.email)
    if not friend_user:
        raise HTTPException(status_code=404, detail="User not found")

    if friend_user.id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot add yourself as friend")

    # Check if already friends
    existing = db.query(models.Friendship).filter(
        ((models.Friendship.user_id1 == current_user.id) & (models.Friendship.user_id2 == friend_user.id)) |
        ((models.Friendship.user_id1 == friend_user.id) & (models.Friendship.user_id2 == current_user.id))
    ).first()

    if existing:
        raise HTTPException(status_code=400, detail="Already friends")

    new_friendship = models.Friendship(user_id1=current_user.id, user_id2=friend_user.id)
    db.add(new_friendship)
    db.flush()

    # Balances are tracked from the requester's side
    db.add(models.FriendshipData(
        friendship_id=new_friendship.id,
        positive_user_id=current_user.id,
        balance=0
    ))
    db.commit()
    db.refresh(new_friendship)

    return _friend_view(new_friendship, friend_user, current_user.id)


@router.get("", response_model=list[schemas.Friend])
def read_friends(
    current_user: CurrentUser,
    db: Session = Depends(get_db)
):
    # Find all friendships involving current_user
    friendships = db.query(models.Friendship).filter(
        (models.Friendship.user_id1 == current_user.id) | (models.Friendship.user_id2 == current_user.id)
    ).all()

    friend_ids = [f.user_id2 if f.user_id1 == current_user.id else f.user_id1 for f in friendships]
    users = {
        u.id: u for u in db.query(models.User).filter(models.User.id.in_(friend_ids)).all()
    } if friend_ids else {}

    friends = []
    for f in friendships:
        friend = users.get(f.user_id2 if f.user_id1 == current_user.id else f.user_id1)
        if friend:
            friends.append(_friend_view(f, friend, current_user.id))

    return friends
