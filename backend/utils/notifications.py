"""Push notifications for transactions, sent through Firebase Cloud Messaging"""

import os
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import requests
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

import models
from utils.display import get_user_display_name, format_amount

# Configure logging
logger = logging.getLogger(__name__)

# Environment configuration
FIREBASE_SERVER_KEY = os.getenv("TBBR_FIREBASE_SERVER_KEY")
PUSH_GATEWAY_URL = os.getenv("PUSH_GATEWAY_URL", "https://fcm.googleapis.com/fcm/send")
PUSH_TIMEOUT_SECONDS = float(os.getenv("PUSH_TIMEOUT_SECONDS", "10"))

# Shared by all requests; pushes are never awaited
_push_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="push")


def is_push_configured() -> bool:
    """Check if the push gateway server key is set"""
    return bool(FIREBASE_SERVER_KEY)


def notification_target(t: models.Transaction) -> Tuple[int, str]:
    """
    Who should hear about a transaction, and how it's described to them.

    The counterparty of the creator is notified: when the creator is the
    sender the recipient is told it was "sent", otherwise the sender is told
    it was "received".
    """
    if t.creator_id == t.sender_id:
        return t.recipient_id, "sent"
    return t.sender_id, "received"


def build_notification_payload(db: Session, t: models.Transaction) -> Optional[dict]:
    """
    Build the gateway payload for a transaction.

    Returns:
        The payload dict, or None when the target user has no device token
    """
    target_user_id, action = notification_target(t)

    device_token = db.query(models.DeviceToken).filter(
        models.DeviceToken.user_id == target_user_id
    ).first()
    if not device_token:
        return None

    creator = t.creator
    if creator is None:
        creator = db.query(models.User).filter(models.User.id == t.creator_id).first()

    return {
        "to": device_token.token,
        "priority": "high",
        "notification": {
            "title": f"{get_user_display_name(creator)} {action} {format_amount(t.amount)}",
            "body": t.memo or "",
        },
    }


def send_push_notification(payload: dict) -> bool:
    """
    POST a payload to the push gateway.

    Never raises; every failure is logged.

    Returns:
        bool: True if the gateway accepted the notification
    """
    if not is_push_configured():
        logger.error("Push service not configured: TBBR_FIREBASE_SERVER_KEY required")
        return False

    try:
        headers = {
            "Authorization": f"key={FIREBASE_SERVER_KEY}",
            "Content-Type": "application/json"
        }

        response = requests.post(
            PUSH_GATEWAY_URL,
            json=payload,
            headers=headers,
            timeout=PUSH_TIMEOUT_SECONDS
        )

        if 200 <= response.status_code < 300:
            logger.info(f"Push notification sent (status {response.status_code})")
            return True
        else:
            logger.error(f"Push gateway error ({response.status_code}): {response.text}")
            return False

    except requests.exceptions.Timeout:
        logger.error("Push gateway request timed out")
        return False
    except requests.exceptions.RequestException as e:
        logger.error(f"Push gateway request failed: {e}")
        return False
    except Exception as e:
        logger.error(f"Unexpected error sending push notification: {e}")
        return False


class PushNotifier:
    """
    Fire-and-forget transaction notifications.

    The payload is built on the caller's thread, since it needs the request's
    database session. The HTTP call is handed to an executor and its result is
    never waited on.
    """

    def __init__(self, executor=None):
        self.executor = executor or _push_executor

    def notify(self, db: Session, t: models.Transaction) -> None:
        try:
            payload = build_notification_payload(db, t)
        except SQLAlchemyError as e:
            logger.error(f"Failed to build notification for transaction {t.id}: {e}")
            return

        if payload is None:
            return

        try:
            self.executor.submit(send_push_notification, payload)
        except RuntimeError as e:
            # Executor already shut down
            logger.error(f"Failed to dispatch notification for transaction {t.id}: {e}")


# Singleton instance - shared by all requests
push_notifier = PushNotifier()
