# app/models/idempotency_key.py
"""
Stored responses for write requests that carried an Idempotency-Key header.
A retried POST/PUT/DELETE with the same key replays the stored response.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from app.database import Base


class IdempotencyKey(Base):
    __tablename__ = "idempotency_keys"

    key = Column(String(100), primary_key=True)
    method = Column(String(10), nullable=False)
    path = Column(String(200), nullable=False)
    status_code = Column(Integer, nullable=False)
    response_body = Column(Text)               # JSON, NULL for 204
    created_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<IdempotencyKey {self.key} {self.method} {self.path} → {self.status_code}>"
