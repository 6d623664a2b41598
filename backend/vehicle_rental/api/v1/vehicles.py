# backend/vehicle_rental/api/v1/vehicles.py
from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Any, Optional
import logging

from ...schemas.vehicle_schema import ApiResponse, VehicleCreate, VehicleUpdate
from ...repositories.vehicle_repository import SqlAlchemyVehicleStore, VehicleStore
from ...core.database import get_db
from ...core.exceptions import ValidationError, VehicleRentalError
from ...services import vehicle_service

router = APIRouter()


def get_vehicle_store(db: Session = Depends(get_db)) -> VehicleStore:
    return SqlAlchemyVehicleStore(db)


def envelope(status_code: int, message: str, data: Any = None, errors: Optional[Any] = None) -> JSONResponse:
    """Renders the {success, message, data, errors} body used by every vehicle route"""
    body = ApiResponse(
        success=status_code < 400,
        message=message,
        data=data,
        errors=errors,
    )
    content = jsonable_encoder(body, exclude_none=True)
    if data is not None:
        # an empty list is still data
        content["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=content)


# ===== VEHICLE CRUD =====

@router.post("/", status_code=201)
def create_vehicle(vehicle: VehicleCreate, store: VehicleStore = Depends(get_vehicle_store)):
    """Create a new vehicle"""
    logging.info(f"Creating vehicle: {vehicle.registration_number}")
    try:
        created = vehicle_service.create_vehicle(store, vehicle.model_dump(exclude_unset=True))
    except ValidationError as e:
        if e.message == "Missing required fields":
            return envelope(400, e.message, errors="All fields are required")
        return envelope(400, e.message, errors=[f"{field} {reason}" for field, reason in e.errors])
    except VehicleRentalError as e:
        return envelope(400, "Error creating vehicle", errors=e.message)

    return envelope(201, "Vehicle created successfully", data=created)


@router.get("/")
def read_vehicles(store: VehicleStore = Depends(get_vehicle_store)):
    """Get list of all vehicles"""
    try:
        vehicles = vehicle_service.get_all_vehicles(store)
    except VehicleRentalError as e:
        return envelope(500, "Error retrieving vehicles", errors=e.message)

    if not vehicles:
        return envelope(200, "No vehicles found", data=[])

    return envelope(200, "Vehicles retrieved successfully", data=vehicles)


@router.get("/{vehicle_id}")
def read_vehicle(vehicle_id: str, store: VehicleStore = Depends(get_vehicle_store)):
    """Get a specific vehicle by ID"""
    try:
        vehicle = vehicle_service.get_vehicle_by_id(store, vehicle_id)
    except VehicleRentalError as e:
        return envelope(404, "Vehicle not found", errors=e.message)

    return envelope(200, "Vehicle retrieved successfully", data=vehicle)


@router.put("/{vehicle_id}")
def update_vehicle(
    vehicle_id: str,
    vehicle_update: VehicleUpdate,
    store: VehicleStore = Depends(get_vehicle_store)
):
    """Update vehicle information (only the supplied fields change)"""
    try:
        vehicle = vehicle_service.update_vehicle(
            store, vehicle_id, vehicle_update.model_dump(exclude_unset=True)
        )
    except VehicleRentalError as e:
        return envelope(400, "Error updating vehicle", errors=e.message)

    return envelope(200, "Vehicle updated successfully", data=vehicle)


@router.delete("/{vehicle_id}")
def delete_vehicle(vehicle_id: str, store: VehicleStore = Depends(get_vehicle_store)):
    """Delete a vehicle permanently"""
    try:
        vehicle_service.delete_vehicle(store, vehicle_id)
    except VehicleRentalError as e:
        return envelope(400, "Error deleting vehicle", errors=e.message)

    return envelope(200, "Vehicle deleted successfully")
