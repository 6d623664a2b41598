from typing import List, Optional, Tuple


class VehicleRentalError(Exception):
    """Base class for failures surfaced by the vehicle lifecycle manager."""

    def __init__(self, message: str, errors: Optional[List[Tuple[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(VehicleRentalError):
    """Inbound vehicle data failed validation. `errors` holds (field, reason) pairs."""
    pass


class NotFoundError(VehicleRentalError):
    """No vehicle exists for the requested id."""

    def __init__(self, vehicle_id: int):
        super().__init__(f"Vehicle with id {vehicle_id} not found")
        self.vehicle_id = vehicle_id


class StorageError(VehicleRentalError):
    """The underlying store failed to complete the operation."""
    pass
