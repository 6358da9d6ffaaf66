"""
Vehicle-finance records table.
One row per vehicle, addressed by `financeid`. The license plate is stored in its
normalized form (trimmed, whitespace-free, uppercase) and is unique.
"""

from sqlalchemy import Column, Integer, String, Float
from app.database import Base


class Car(Base):
    __tablename__ = "cars"

    financeid = Column(Integer, primary_key=True, autoincrement=True)
    license_plate = Column(String(50), unique=True, nullable=False, index=True)
    registration_number = Column(String(100))
    brand = Column(String(100), nullable=False)
    model = Column(String(100))
    color = Column(String(50))
    chassis_no = Column(String(100))
    engine_no = Column(String(100))
    finance = Column(String(200))                       # financing institution
    finance_status = Column(String(50), nullable=False)  # e.g. ผ่อนชำระ | ชำระเต็ม
    remaining_amount = Column(Float, nullable=False, default=0)
    monthly_payment = Column(Float, nullable=False, default=0)

    def __repr__(self):
        return f"<Car {self.financeid} plate={self.license_plate} status={self.finance_status}>"
