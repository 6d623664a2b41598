from pydantic import BaseModel, Field
from typing import Optional, Any
from decimal import Decimal

class VehicleBase(BaseModel):
    vehicle_name: str = Field(..., description="Display name of the vehicle")
    type: str = Field(..., description="Vehicle type: car, van, bike, etc.")
    registration_number: str = Field(..., description="Registration (plate) number, unique per fleet")
    daily_rent_price: Decimal = Field(..., description="Rent price per day")
    availability_status: str = Field(..., description="Availability: available, rented, etc.")

class VehicleCreate(BaseModel):
    """
    Schema for adding a new vehicle.

    Every field is optional here so that presence checks happen in the
    lifecycle manager and are reported in the standard error envelope.
    """
    vehicle_name: Optional[str] = None
    type: Optional[str] = None
    registration_number: Optional[str] = None
    daily_rent_price: Optional[Decimal] = None
    availability_status: Optional[str] = None

class VehicleUpdate(BaseModel):
    """Schema for updating vehicle information"""
    vehicle_name: Optional[str] = None
    type: Optional[str] = None
    registration_number: Optional[str] = None
    daily_rent_price: Optional[Decimal] = None
    availability_status: Optional[str] = None

class Vehicle(VehicleBase):
    """Schema for reading vehicle (output)"""
    id: int

    class Config:
        from_attributes = True

class ApiResponse(BaseModel):
    """Envelope returned by every vehicle endpoint"""
    success: bool
    message: str
    data: Optional[Any] = None
    errors: Optional[Any] = None
