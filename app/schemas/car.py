# app/schemas/car.py
from pydantic import BaseModel, Field
from typing import Any, Optional

# Labels used by the mobile client. The set is open-ended and never enforced.
KNOWN_FINANCE_STATUSES = ["ผ่อนชำระ", "เสร็จสิ้น", "ชำระเต็ม", "กำลังผ่อน", "installment", "fully paid"]


class CarIn(BaseModel):
    """
    Request body for create/update, in wire (camelCase) form.
    Everything is optional here so that missing required fields are reported by
    the validator as a 400 instead of a schema 422, and amounts accept any JSON
    value so non-numeric input can fall back to 0.
    """
    licensePlate: Optional[str] = None
    registrationNumber: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    chassisNo: Optional[str] = None
    engineNo: Optional[str] = None
    finance: Optional[str] = None
    financeStatus: Optional[str] = Field(
        None, description=f"Finance status label, e.g. {', '.join(KNOWN_FINANCE_STATUSES)}. Not restricted to these."
    )
    remainingAmount: Optional[Any] = None
    monthlyPayment: Optional[Any] = None

    class Config:
        extra = "ignore"
        coerce_numbers_to_str = True
        json_schema_extra = {
            "example": {
                "licensePlate": "กข 1234 กรุงเทพมหานคร",
                "brand": "Toyota",
                "model": "Yaris",
                "color": "White",
                "finance": "SCB",
                "financeStatus": "ผ่อนชำระ",
                "remainingAmount": 250000,
                "monthlyPayment": 8500,
            }
        }


class CarOut(BaseModel):
    id: int
    licensePlate: str
    registrationNumber: Optional[str]
    brand: str
    model: Optional[str]
    color: Optional[str]
    chassisNo: Optional[str]
    engineNo: Optional[str]
    finance: Optional[str]
    financeStatus: str
    remainingAmount: float
    monthlyPayment: float


class ErrorOut(BaseModel):
    message: str
    detail: str
