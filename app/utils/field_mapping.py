# app/utils/field_mapping.py
"""
Translation between storage column names (snake_case, `financeid` primary key)
and wire field names (camelCase, `id`).

Known columns go through the explicit STORAGE_TO_WIRE table. The generic
snake → camel rule only applies to keys outside the table.
"""

import re
from typing import Optional

PRIMARY_KEY_COLUMN = "financeid"

STORAGE_TO_WIRE = {
    PRIMARY_KEY_COLUMN: "id",
    "license_plate": "licensePlate",
    "registration_number": "registrationNumber",
    "brand": "brand",
    "model": "model",
    "color": "color",
    "chassis_no": "chassisNo",
    "engine_no": "engineNo",
    "finance": "finance",
    "finance_status": "financeStatus",
    "remaining_amount": "remainingAmount",
    "monthly_payment": "monthlyPayment",
}

WIRE_TO_STORAGE = {wire: column for column, wire in STORAGE_TO_WIRE.items()}

_UNDERSCORE_LETTER = re.compile(r"_([a-z])")


def snake_to_camel(key: str) -> str:
    """license_plate → licensePlate. Only a lowercase letter after `_` is folded."""
    return _UNDERSCORE_LETTER.sub(lambda m: m.group(1).upper(), key)


def to_wire_representation(row: Optional[dict]) -> Optional[dict]:
    """Rename the keys of a storage row for the API. Values are passed through untouched."""
    if row is None:
        return None
    return {STORAGE_TO_WIRE.get(key) or snake_to_camel(key): value for key, value in row.items()}


def to_storage_representation(record: dict) -> dict:
    """Inverse of to_wire_representation for the known columns; unknown keys are dropped."""
    return {WIRE_TO_STORAGE[key]: value for key, value in record.items() if key in WIRE_TO_STORAGE}
