"""Unit tests for the record service and the uniqueness guard."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from app.schemas.car import CarIn
from app.services.car_service import CarService
from app.services.errors import DuplicatePlate, MissingRequiredField, NotFound
from app.services.uniqueness import UniquenessResult, check_unique


def make_input(**overrides):
    data = {"licensePlate": "ab 1234 กท", "brand": "Toyota", "financeStatus": "installment"}
    data.update(overrides)
    return CarIn(**data)


def stored_row(car_id=1, **values):
    row = {
        "financeid": car_id,
        "license_plate": "AB1234กท",
        "registration_number": None,
        "brand": "Toyota",
        "model": None,
        "color": None,
        "chassis_no": None,
        "engine_no": None,
        "finance": None,
        "finance_status": "installment",
        "remaining_amount": 0,
        "monthly_payment": 0,
    }
    row.update(values)
    return row


def make_gateway(conflicts=None):
    gateway = MagicMock()
    gateway.find_plate_conflicts.return_value = conflicts or []
    return gateway


class TestUniquenessGuard:
    def test_clear_when_no_match(self):
        gateway = make_gateway()
        assert check_unique(gateway, "AB1234") is UniquenessResult.CLEAR
        gateway.find_plate_conflicts.assert_called_once_with("AB1234", exclude_id=None)

    def test_conflict_when_match(self):
        assert check_unique(make_gateway([3]), "AB1234") is UniquenessResult.CONFLICT

    def test_exclude_id_is_forwarded(self):
        gateway = make_gateway()
        check_unique(gateway, "AB1234", exclude_id=9)
        gateway.find_plate_conflicts.assert_called_once_with("AB1234", exclude_id=9)


class TestCreateCar:
    def test_inserts_normalized_plate_and_returns_wire_record(self):
        gateway = make_gateway()
        gateway.insert.return_value = stored_row(car_id=5)

        result = CarService(gateway).create_car(make_input())

        values = gateway.insert.call_args[0][0]
        assert values["license_plate"] == "AB1234กท"
        assert values["model"] is None
        assert values["remaining_amount"] == 0
        assert "financeid" not in values
        assert result["id"] == 5
        assert result["licensePlate"] == "AB1234กท"

    def test_duplicate_plate_rejected_before_insert(self):
        gateway = make_gateway([1])

        with pytest.raises(DuplicatePlate) as exc:
            CarService(gateway).create_car(make_input(licensePlate="AB 1234กท"))

        assert exc.value.plate == "AB1234กท"
        assert "AB1234กท" in exc.value.detail
        gateway.insert.assert_not_called()

    def test_missing_field_rejected_before_any_query(self):
        gateway = make_gateway()

        with pytest.raises(MissingRequiredField):
            CarService(gateway).create_car(make_input(brand=" "))

        gateway.find_plate_conflicts.assert_not_called()
        gateway.insert.assert_not_called()


class TestUpdateCar:
    def test_guard_excludes_the_record_itself(self):
        gateway = make_gateway()
        gateway.update.return_value = stored_row(car_id=4, brand="Honda")

        result = CarService(gateway).update_car(4, make_input(brand="Honda"))

        gateway.find_plate_conflicts.assert_called_once_with("AB1234กท", exclude_id=4)
        assert result["brand"] == "Honda"
        assert result["id"] == 4

    def test_not_found_when_no_row_affected(self):
        gateway = make_gateway()
        gateway.update.return_value = None

        with pytest.raises(NotFound):
            CarService(gateway).update_car(99, make_input())

        gateway.update.assert_called_once()

    def test_duplicate_plate_rejected_before_write(self):
        gateway = make_gateway([2])

        with pytest.raises(DuplicatePlate):
            CarService(gateway).update_car(4, make_input())

        gateway.update.assert_not_called()


class TestListAndDelete:
    def test_list_converts_rows_and_passes_filter(self):
        gateway = make_gateway()
        gateway.select_all.return_value = [stored_row(1), stored_row(2, license_plate="XYZ1")]

        result = CarService(gateway).list_cars("xyz")

        gateway.select_all.assert_called_once_with(plate_filter="xyz")
        assert [car["id"] for car in result] == [1, 2]
        assert result[1]["licensePlate"] == "XYZ1"

    def test_delete_success(self):
        gateway = make_gateway()
        gateway.delete.return_value = True
        CarService(gateway).delete_car(3)
        gateway.delete.assert_called_once_with(3)

    def test_delete_not_found(self):
        gateway = make_gateway()
        gateway.delete.return_value = False
        with pytest.raises(NotFound):
            CarService(gateway).delete_car(3)
