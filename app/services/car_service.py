# app/services/car_service.py
"""
Record service: the four CRUD operations on vehicle-finance records.

create/update: validate → normalize plate → uniqueness guard → write → wire record
Validation and uniqueness errors are raised before anything is written.
"""

from typing import Optional
from app.repositories.car_gateway import CarGateway
from app.schemas.car import CarIn
from app.services.errors import NotFound
from app.services.uniqueness import ensure_unique
from app.services.validation import validate_car
from app.utils.field_mapping import to_storage_representation, to_wire_representation
from app.utils.logger import get_logger

logger = get_logger(__name__)


class CarService:
    def __init__(self, gateway: CarGateway):
        self.gateway = gateway

    def list_cars(self, plate: Optional[str] = None) -> list[dict]:
        """All records ordered by id, optionally only those whose plate contains `plate` (any case)."""
        rows = self.gateway.select_all(plate_filter=plate)
        return [to_wire_representation(row) for row in rows]

    def create_car(self, payload: CarIn) -> dict:
        car = validate_car(payload)
        ensure_unique(self.gateway, car.licensePlate)

        row = self.gateway.insert(to_storage_representation(car.to_wire()))
        logger.info(f"[cars] created id={row['financeid']} plate={car.licensePlate}")
        return to_wire_representation(row)

    def update_car(self, car_id: int, payload: CarIn) -> dict:
        car = validate_car(payload)
        ensure_unique(self.gateway, car.licensePlate, exclude_id=car_id)

        row = self.gateway.update(car_id, to_storage_representation(car.to_wire()))
        if row is None:
            raise NotFound(car_id)
        logger.info(f"[cars] updated id={car_id} plate={car.licensePlate}")
        return to_wire_representation(row)

    def delete_car(self, car_id: int):
        if not self.gateway.delete(car_id):
            raise NotFound(car_id)
        logger.info(f"[cars] deleted id={car_id}")
