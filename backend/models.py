import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from database import Base


class TransactionType(str, enum.Enum):
    BILL = "Bill"
    PAYBACK = "Payback"


class TransactionStatus(str, enum.Enum):
    CONFIRMED = "Confirmed"
    PENDING = "Pending"
    REJECTED = "Rejected"


class RelatedObjectType(str, enum.Enum):
    GROUP = "Group"
    FRIENDSHIP = "Friendship"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True)
    hashed_password = Column(String)
    full_name = Column(String)
    is_active = Column(Boolean, default=True)

class Friendship(Base):
    __tablename__ = "friendships"

    id = Column(Integer, primary_key=True, index=True)
    user_id1 = Column(Integer, ForeignKey("users.id"))
    user_id2 = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)

    data = relationship("FriendshipData", uselist=False, back_populates="friendship")

class FriendshipData(Base):
    __tablename__ = "friendship_data"

    id = Column(Integer, primary_key=True, index=True)
    friendship_id = Column(Integer, ForeignKey("friendships.id"), unique=True, index=True)
    positive_user_id = Column(Integer, ForeignKey("users.id"))
    balance = Column(Integer, default=0, nullable=False)  # Cents, positive means positive_user is owed

    friendship = relationship("Friendship", back_populates="data")

class DeviceToken(Base):
    __tablename__ = "device_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, index=True)
    token = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String)
    status = Column(String)
    amount = Column(Integer)  # Stored in cents
    memo = Column(String, default="")
    is_settled = Column(Boolean, default=False)
    sender_id = Column(Integer, ForeignKey("users.id"), index=True)
    recipient_id = Column(Integer, ForeignKey("users.id"), index=True)
    related_object_type = Column(String)
    related_object_id = Column(Integer, index=True)
    creator_id = Column(Integer, ForeignKey("users.id"), index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    deleted_at = Column(DateTime, nullable=True)

    # Display-only references, never written through the transaction
    sender = relationship("User", foreign_keys=[sender_id], viewonly=True)
    recipient = relationship("User", foreign_keys=[recipient_id], viewonly=True)
    creator = relationship("User", foreign_keys=[creator_id], viewonly=True)
