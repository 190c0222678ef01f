from datetime import datetime
from pydantic import BaseModel, EmailStr
from typing import Optional

class UserBase(BaseModel):
    email: EmailStr
    full_name: Optional[str] = None

class UserCreate(UserBase):
    password: str

class User(UserBase):
    id: int
    is_active: bool

    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    id: int
    full_name: Optional[str] = None

    class Config:
        from_attributes = True

class Token(BaseModel):
    access_token: str
    token_type: str

class TokenData(BaseModel):
    email: Optional[str] = None

class FriendRequest(BaseModel):
    email: str

class Friend(BaseModel):
    id: int
    full_name: Optional[str] = None
    email: str
    friendship_id: int
    balance: int = 0  # Cents. Positive means the friend owes you, negative means you owe

# Type/status/amount checks live in utils.validation so they can report
# the first failing rule in a fixed order.
class TransactionCreate(BaseModel):
    type: str
    status: str
    amount: int
    memo: str = ""
    sender_id: int = 0
    recipient_id: int = 0
    related_object_type: str
    related_object_id: int = 0

class TransactionUpdate(BaseModel):
    type: Optional[str] = None
    amount: Optional[int] = None
    memo: Optional[str] = None

class Transaction(BaseModel):
    id: int
    type: str
    status: str
    amount: int
    memo: Optional[str] = ""
    is_settled: bool = False
    sender_id: int
    recipient_id: int
    related_object_type: str
    related_object_id: int
    creator_id: int
    created_at: datetime
    updated_at: datetime
    sender: Optional[UserSummary] = None
    recipient: Optional[UserSummary] = None
    creator: Optional[UserSummary] = None

    class Config:
        from_attributes = True

class DeviceTokenCreate(BaseModel):
    token: str

class DeviceToken(BaseModel):
    id: int
    user_id: int
    token: str

    class Config:
        from_attributes = True
