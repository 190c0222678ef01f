"""Transactions router: list, create, read, update, delete transactions."""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, status

import schemas
from dependencies import CurrentUser, get_transaction_service
from utils.transactions import TransactionService


router = APIRouter(prefix="/transactions", tags=["transactions"])

Service = Annotated[TransactionService, Depends(get_transaction_service)]


@router.get("", response_model=list[schemas.Transaction])
def read_transactions(
    current_user: CurrentUser,
    service: Service,
    related_user_id: Optional[int] = None,
    related_object_id: Optional[int] = None,
    related_object_type: Optional[str] = None
):
    return service.list_transactions(
        current_user.id,
        related_user_id=related_user_id,
        related_object_id=related_object_id,
        related_object_type=related_object_type
    )


@router.post("", response_model=schemas.Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction: schemas.TransactionCreate,
    current_user: CurrentUser,
    service: Service
):
    return service.create(transaction, caller_id=current_user.id)


@router.get("/{transaction_id}", response_model=schemas.Transaction)
def read_transaction(transaction_id: int, current_user: CurrentUser, service: Service):
    return service.get_for_participant(transaction_id, current_user.id)


@router.patch("/{transaction_id}", response_model=schemas.Transaction)
def update_transaction(
    transaction_id: int,
    patch: schemas.TransactionUpdate,
    current_user: CurrentUser,
    service: Service
):
    return service.update(transaction_id, patch, caller_id=current_user.id)


@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: int, current_user: CurrentUser, service: Service):
    service.delete(transaction_id, caller_id=current_user.id)
    return {"meta": {"success": True}}
