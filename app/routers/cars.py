# app/routers/cars.py
"""CRUD endpoints for vehicle-finance records at /api/cars"""

from typing import Optional
from fastapi import APIRouter, Depends, Header, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.database import get_db
from app.repositories.car_gateway import CarGateway
from app.schemas.car import CarIn, CarOut, ErrorOut
from app.services.car_service import CarService
from app.services.idempotency import lookup_response, store_response

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorOut, "description": "Missing required field or duplicate license plate"},
    409: {"model": ErrorOut, "description": "Idempotency-Key already used for another request"},
    500: {"model": ErrorOut, "description": "Server error"},
}


def get_car_service(db: Session = Depends(get_db)) -> CarService:
    return CarService(CarGateway(db))


def _replay(db: Session, request: Request, key: Optional[str]):
    if not key:
        return None
    stored = lookup_response(db, key, request.method, request.url.path)
    if stored is None:
        return None
    if stored.body is None:
        return Response(status_code=stored.status_code)
    return JSONResponse(status_code=stored.status_code, content=stored.body)


@router.get("/cars", response_model=list[CarOut], responses={500: _ERRORS[500]},
            summary="List all cars, or search by partial license plate")
def list_cars(plate: Optional[str] = None, service: CarService = Depends(get_car_service)):
    """`plate` matches anywhere in the stored plate, case-insensitively. Ordered by id."""
    return service.list_cars(plate)


@router.post("/cars", response_model=CarOut, status_code=status.HTTP_201_CREATED,
             responses={k: _ERRORS[k] for k in (400, 409, 500)}, summary="Create a car record")
def create_car(
    body: CarIn,
    request: Request,
    idempotency_key: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    service: CarService = Depends(get_car_service),
):
    replay = _replay(db, request, idempotency_key)
    if replay is not None:
        return replay
    car = service.create_car(body)
    if idempotency_key:
        store_response(db, idempotency_key, request.method, request.url.path, status.HTTP_201_CREATED, car)
    return car


@router.put("/cars/{car_id}", response_model=CarOut,
            responses={**{k: _ERRORS[k] for k in (400, 409, 500)}, 404: {"model": ErrorOut}},
            summary="Replace all fields of a car record")
def update_car(
    car_id: int,
    body: CarIn,
    request: Request,
    idempotency_key: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    service: CarService = Depends(get_car_service),
):
    replay = _replay(db, request, idempotency_key)
    if replay is not None:
        return replay
    car = service.update_car(car_id, body)
    if idempotency_key:
        store_response(db, idempotency_key, request.method, request.url.path, status.HTTP_200_OK, car)
    return car


@router.delete("/cars/{car_id}", status_code=status.HTTP_204_NO_CONTENT,
               responses={**{k: _ERRORS[k] for k in (409, 500)}, 404: {"model": ErrorOut}},
               summary="Delete a car record")
def delete_car(
    car_id: int,
    request: Request,
    idempotency_key: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    service: CarService = Depends(get_car_service),
):
    replay = _replay(db, request, idempotency_key)
    if replay is not None:
        return replay
    service.delete_car(car_id)
    if idempotency_key:
        store_response(db, idempotency_key, request.method, request.url.path, status.HTTP_204_NO_CONTENT)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
