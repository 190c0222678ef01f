"""Device tokens router: register the push token for the current user's device."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models
import schemas
from database import get_db
from dependencies import CurrentUser


router = APIRouter(prefix="/device-tokens", tags=["devices"])


@router.post("", response_model=schemas.DeviceToken)
def register_device_token(
    device: schemas.DeviceTokenCreate,
    current_user: CurrentUser,
    db: Session = Depends(get_db)
):
    # One token per user; a new device replaces the old one
    db_token = db.query(models.DeviceToken).filter(
        models.DeviceToken.user_id == current_user.id
    ).first()

    if db_token:
        db_token.token = device.token
    else:
        db_token = models.DeviceToken(user_id=current_user.id, token=device.token)
        db.add(db_token)

    db.commit()
    db.refresh(db_token)
    return db_token
