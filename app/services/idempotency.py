# app/services/idempotency.py
"""
Replay protection for retried writes.

The client sends one Idempotency-Key per logical user action and reuses it on
every retry. The first successful response is stored; later requests with the
same key get that response back without touching the cars table.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.idempotency_key import IdempotencyKey
from app.services.errors import IdempotencyKeyReused, StorageError
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class StoredResponse:
    status_code: int
    body: Optional[object]


def lookup_response(db: Session, key: str, method: str, path: str) -> Optional[StoredResponse]:
    """Stored response for `key`, None if the key is new. Raises IdempotencyKeyReused on a mismatched request."""
    try:
        record = db.get(IdempotencyKey, key)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ SQL error during idempotency lookup: {e}")
        raise StorageError("idempotency lookup", e) from e

    if record is None:
        return None
    if record.method != method or record.path != path:
        raise IdempotencyKeyReused(key)

    logger.info(f"[idempotency] replaying {method} {path} for key {key}")
    body = json.loads(record.response_body) if record.response_body is not None else None
    return StoredResponse(status_code=record.status_code, body=body)


def store_response(db: Session, key: str, method: str, path: str, status_code: int, body=None):
    """
    Remember a successful response. The write it belongs to is already
    committed, so a failure here is logged and not raised.
    """
    db.add(IdempotencyKey(
        key=key,
        method=method,
        path=path,
        status_code=status_code,
        response_body=json.dumps(body, ensure_ascii=False) if body is not None else None,
        created_at=datetime.utcnow(),
    ))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"[idempotency] key {key} stored concurrently by another request")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Could not store idempotency key {key}: {e}", exc_info=True)
