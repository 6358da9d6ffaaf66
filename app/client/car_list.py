# app/client/car_list.py
"""
Client-side state behind the car management screen: form checks, local
search, and the cached list that is reconciled after each call.
"""

from typing import Callable, Optional
from app.client.car_client import CarApiClient

FORM_REQUIRED_FIELDS = ("brand", "model", "licensePlate")


class FormValidationError(ValueError):
    def __init__(self, fields: list[str]):
        super().__init__(f"Please fill in: {', '.join(fields)}")
        self.fields = fields


def validate_form(record: dict):
    """The add form needs brand, model and licensePlate before anything is sent."""
    missing = [name for name in FORM_REQUIRED_FIELDS if not str(record.get(name) or "").strip()]
    if missing:
        raise FormValidationError(missing)


def filter_cars(cars: list[dict], term: Optional[str]) -> list[dict]:
    """Case-insensitive substring match on licensePlate, model or finance. Empty term keeps everything."""
    needle = (term or "").lower()
    if not needle:
        return list(cars)
    return [
        car for car in cars
        if any(needle in (car.get(field) or "").lower() for field in ("licensePlate", "model", "finance"))
    ]


class CarListCache:
    """
    `confirm_delete(car)` is asked before every delete; the screen plugs in its
    confirmation dialog. Without one, deletes go through unasked.
    """

    def __init__(self, client: CarApiClient, confirm_delete: Optional[Callable[[dict], bool]] = None):
        self.client = client
        self.confirm_delete = confirm_delete
        self.cars: list[dict] = []

    async def refresh(self) -> list[dict]:
        self.cars = await self.client.list_cars()
        return self.cars

    async def add(self, record: dict) -> dict:
        validate_form(record)
        car = await self.client.create_car(record)
        self.cars.append(car)
        return car

    async def update(self, record: dict) -> dict:
        if not record.get("id"):
            raise ValueError("Cannot update a car without an id")
        validate_form(record)
        car = await self.client.update_car(record["id"], record)
        self.cars = [car if c.get("id") == car["id"] else c for c in self.cars]
        return car

    async def remove(self, car_id: int) -> bool:
        """False when the user declined the confirmation; nothing is sent then."""
        if self.confirm_delete is not None:
            car = next((c for c in self.cars if c.get("id") == car_id), {"id": car_id})
            if not self.confirm_delete(car):
                return False
        await self.client.delete_car(car_id)
        self.cars = [c for c in self.cars if c.get("id") != car_id]
        return True

    def search(self, term: Optional[str]) -> list[dict]:
        return filter_cars(self.cars, term)
