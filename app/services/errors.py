# app/services/errors.py
"""
Error taxonomy for the car record service.
Each error carries the HTTP status it maps to; the handlers in app.main turn
them into `{"message": ..., "detail": ...}` responses.
"""

from fastapi import status


class CarServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server Error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class MissingRequiredField(CarServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing required fields"

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)} are mandatory.")


class DuplicatePlate(CarServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Duplicate License Plate"

    def __init__(self, plate: str):
        self.plate = plate
        super().__init__(f"License plate '{plate}' already exists in the system")


class NotFound(CarServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not Found"

    def __init__(self, car_id: int):
        self.car_id = car_id
        super().__init__(f"Car with ID {car_id} not found.")


class IdempotencyKeyReused(CarServiceError):
    status_code = status.HTTP_409_CONFLICT
    message = "Idempotency Key Reused"

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Idempotency key '{key}' was already used for a different request")


class StorageError(CarServiceError):
    """Unexpected persistence failure. `detail` is for logs only, never sent to clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server Error"
    public_detail = "Could not complete the request. Check server logs for details."

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")
