# CMTracker — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.car import Car                            # noqa
from app.models.idempotency_key import IdempotencyKey     # noqa
