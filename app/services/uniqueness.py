# app/services/uniqueness.py
"""
Application-level duplicate-plate check, run before every create/update.

This is a fast path for a friendly error. Two concurrent requests can both
pass it; the unique constraint on cars.license_plate then rejects the second
write, which the gateway also reports as DuplicatePlate.
"""

from enum import Enum
from typing import Optional
from app.repositories.car_gateway import CarGateway
from app.services.errors import DuplicatePlate
from app.utils.logger import get_logger

logger = get_logger(__name__)


class UniquenessResult(str, Enum):
    CLEAR = "clear"
    CONFLICT = "conflict"


def check_unique(gateway: CarGateway, normalized_plate: str, exclude_id: Optional[int] = None) -> UniquenessResult:
    """CONFLICT if another record (not `exclude_id`) already holds this plate, compared case-insensitively."""
    conflicts = gateway.find_plate_conflicts(normalized_plate.upper(), exclude_id=exclude_id)
    if conflicts:
        logger.info(f"[cars] plate {normalized_plate} already used by id(s) {conflicts}")
        return UniquenessResult.CONFLICT
    return UniquenessResult.CLEAR


def ensure_unique(gateway: CarGateway, normalized_plate: str, exclude_id: Optional[int] = None):
    if check_unique(gateway, normalized_plate, exclude_id) is UniquenessResult.CONFLICT:
        raise DuplicatePlate(normalized_plate)
