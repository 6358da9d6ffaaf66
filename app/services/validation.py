# app/services/validation.py
"""
Record validation for create/update requests.

- licensePlate, brand and financeStatus are required (absent, empty or blank → MissingRequiredField)
- the plate is normalized before it is checked for uniqueness or stored
- amounts go through coerce_numeric_or_default and never cause a rejection
- empty optional strings are stored as NULL
"""

import math
import re
from dataclasses import dataclass, asdict
from typing import Any, Optional
from app.schemas.car import CarIn
from app.services.errors import MissingRequiredField

REQUIRED_FIELDS = ("licensePlate", "brand", "financeStatus")
OPTIONAL_TEXT_FIELDS = ("registrationNumber", "model", "color", "chassisNo", "engineNo", "finance")

_WHITESPACE = re.compile(r"\s+")
# Plain decimal notation only: no "1_000", "inf" or "nan"
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


@dataclass
class ValidatedCar:
    licensePlate: str
    brand: str
    financeStatus: str
    registrationNumber: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    chassisNo: Optional[str] = None
    engineNo: Optional[str] = None
    finance: Optional[str] = None
    remainingAmount: float = 0
    monthlyPayment: float = 0

    def to_wire(self) -> dict:
        return asdict(self)


def normalize_plate(plate: str) -> str:
    """' ab 1234 กท ' → 'AB1234กท'"""
    return _WHITESPACE.sub("", plate.strip()).upper()


def coerce_numeric_or_default(value: Any, default: float = 0) -> float:
    """
    Use `value` if it is (or parses as) a finite number, else `default`.
    Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _DECIMAL.fullmatch(text):
            return default
        number = float(text)
    else:
        return default
    if not math.isfinite(number):
        return default
    return number


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_car(payload: CarIn) -> ValidatedCar:
    missing = [name for name in REQUIRED_FIELDS if _is_blank(getattr(payload, name))]
    if missing:
        raise MissingRequiredField(missing)

    optional = {name: getattr(payload, name) or None for name in OPTIONAL_TEXT_FIELDS}
    return ValidatedCar(
        licensePlate=normalize_plate(payload.licensePlate),
        brand=payload.brand,
        financeStatus=payload.financeStatus,
        remainingAmount=coerce_numeric_or_default(payload.remainingAmount),
        monthlyPayment=coerce_numeric_or_default(payload.monthlyPayment),
        **optional,
    )
