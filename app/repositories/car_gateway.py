# app/repositories/car_gateway.py
"""
Persistence gateway for the `cars` table.
Thin wrapper over parameterized ORM queries. Every method returns rows in
storage representation (dicts keyed by column name) and turns SQLAlchemy
failures into StorageError after rolling back the session.
"""

from contextlib import contextmanager
from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.car import Car
from app.services.errors import DuplicatePlate, StorageError
from app.utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = [column.name for column in Car.__table__.columns]


def to_storage_row(car: Car) -> dict:
    return {name: getattr(car, name) for name in COLUMNS}


class CarGateway:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str, plate: Optional[str] = None):
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            # Storage-level unique constraint is the authoritative duplicate signal
            if plate is not None and "license_plate" in str(e.orig).lower():
                logger.warning(f"[cars] unique constraint rejected plate {plate} during {operation}")
                raise DuplicatePlate(plate) from e
            logger.error(f"❌ SQL error during {operation}: {e.orig}")
            raise StorageError(operation, e) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ SQL error during {operation}: {e}")
            raise StorageError(operation, e) from e

    def select_all(self, plate_filter: Optional[str] = None) -> list[dict]:
        with self._guard("select cars"):
            q = self.db.query(Car)
            if plate_filter:
                q = q.filter(Car.license_plate.icontains(plate_filter, autoescape=True))
            return [to_storage_row(car) for car in q.order_by(Car.financeid.asc()).all()]

    def find_plate_conflicts(self, plate: str, exclude_id: Optional[int] = None) -> list[int]:
        """Ids of records whose uppercased plate equals `plate`, other than `exclude_id`."""
        with self._guard("duplicate plate check"):
            q = self.db.query(Car.financeid).filter(func.upper(Car.license_plate) == plate)
            if exclude_id is not None:
                q = q.filter(Car.financeid != exclude_id)
            return [row.financeid for row in q.all()]

    def insert(self, values: dict) -> dict:
        with self._guard("insert car", plate=values.get("license_plate")):
            car = Car(**values)
            self.db.add(car)
            self.db.commit()
            self.db.refresh(car)
            return to_storage_row(car)

    def update(self, car_id: int, values: dict) -> Optional[dict]:
        """Replace the mutable columns of one row. None when no row has that id."""
        with self._guard("update car", plate=values.get("license_plate")):
            affected = (
                self.db.query(Car)
                .filter(Car.financeid == car_id)
                .update(values, synchronize_session=False)
            )
            if affected == 0:
                self.db.rollback()
                return None
            self.db.commit()
            car = self.db.get(Car, car_id, populate_existing=True)
            return to_storage_row(car)

    def delete(self, car_id: int) -> bool:
        with self._guard("delete car"):
            affected = self.db.query(Car).filter(Car.financeid == car_id).delete(synchronize_session=False)
            self.db.commit()
            return affected > 0
