"""Unit tests for storage ↔ wire field name translation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.models.car import Car
from app.utils.field_mapping import (
    PRIMARY_KEY_COLUMN,
    STORAGE_TO_WIRE,
    snake_to_camel,
    to_storage_representation,
    to_wire_representation,
)


def make_row(**overrides):
    row = {
        "financeid": 7,
        "license_plate": "AB1234กท",
        "registration_number": None,
        "brand": "Toyota",
        "model": "Yaris",
        "color": None,
        "chassis_no": "MR0HA3CD",
        "engine_no": None,
        "finance": "SCB",
        "finance_status": "installment",
        "remaining_amount": 250000.0,
        "monthly_payment": 0,
    }
    row.update(overrides)
    return row


class TestToWireRepresentation:
    def test_primary_key_becomes_id(self):
        wire = to_wire_representation(make_row())
        assert wire["id"] == 7
        assert "financeid" not in wire

    def test_snake_case_columns_become_camel_case(self):
        wire = to_wire_representation(make_row())
        assert wire["licensePlate"] == "AB1234กท"
        assert wire["chassisNo"] == "MR0HA3CD"
        assert wire["financeStatus"] == "installment"
        assert wire["remainingAmount"] == 250000.0

    def test_values_and_types_untouched(self):
        wire = to_wire_representation(make_row())
        assert wire["registrationNumber"] is None
        assert wire["monthlyPayment"] == 0 and isinstance(wire["monthlyPayment"], int)

    def test_none_row_gives_none(self):
        assert to_wire_representation(None) is None

    def test_empty_row_gives_empty(self):
        assert to_wire_representation({}) == {}

    def test_unknown_keys_use_generic_rule(self):
        assert to_wire_representation({"date_of_purchase": "2024-01-01"}) == {"dateOfPurchase": "2024-01-01"}


class TestMappingTable:
    def test_covers_every_car_column(self):
        assert set(STORAGE_TO_WIRE) == {c.name for c in Car.__table__.columns}

    def test_primary_key_column_maps_to_id(self):
        assert STORAGE_TO_WIRE[PRIMARY_KEY_COLUMN] == "id"
        assert PRIMARY_KEY_COLUMN == Car.__table__.primary_key.columns.keys()[0]

    def test_table_agrees_with_generic_rule(self):
        for column, wire in STORAGE_TO_WIRE.items():
            if column != PRIMARY_KEY_COLUMN:
                assert snake_to_camel(column) == wire

    def test_snake_to_camel_only_folds_lowercase_letters(self):
        assert snake_to_camel("engine_no") == "engineNo"
        assert snake_to_camel("plate_1") == "plate_1"

    def test_storage_representation_drops_id_and_unknown_keys(self):
        storage = to_storage_representation({"licensePlate": "X1", "brand": "Honda", "notes": "ignored"})
        assert storage == {"license_plate": "X1", "brand": "Honda"}
