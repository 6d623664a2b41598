# backend/vehicle_rental/services/vehicle_service.py
"""
Vehicle lifecycle manager.

Validates inbound vehicle data and orchestrates calls against a `VehicleStore`.
Every function is stateless: the store is passed in on each call.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..core.exceptions import ValidationError
from ..models.vehicle_model import PRICE_DECIMAL_PLACES
from ..repositories.vehicle_repository import VehicleStore
from ..schemas.vehicle_schema import Vehicle

logger = logging.getLogger(__name__)

# Required on create: present, not null, not ""
REQUIRED_TEXT_FIELDS = ("vehicle_name", "type", "registration_number", "availability_status")
# Required on create: present and not null (0 is a valid price)
REQUIRED_PRESENT_FIELDS = ("daily_rent_price",)

VEHICLE_FIELDS = (
    "vehicle_name",
    "type",
    "registration_number",
    "daily_rent_price",
    "availability_status",
)

# Ids are stored in a signed 64-bit INTEGER column
MIN_VEHICLE_ID = -(2 ** 63)
MAX_VEHICLE_ID = 2 ** 63 - 1

MISSING_REASONS = ("is required", "must not be empty")


def parse_vehicle_id(vehicle_id: Union[int, str]) -> int:
    """
    Parses a vehicle id from a path segment or int.

    Raises ValidationError if it is not an integer or does not fit the id column.
    """
    if isinstance(vehicle_id, bool):
        raise ValidationError("Invalid vehicle id", [("id", "must be an integer")])
    if isinstance(vehicle_id, int):
        parsed = vehicle_id
    else:
        try:
            parsed = int(str(vehicle_id).strip())
        except ValueError:
            raise ValidationError(
                f"Invalid vehicle id: {vehicle_id!r}", [("id", "must be an integer")]
            ) from None

    if not MIN_VEHICLE_ID <= parsed <= MAX_VEHICLE_ID:
        raise ValidationError(
            f"Invalid vehicle id: {vehicle_id!r}", [("id", "is out of range")]
        )
    return parsed


def check_price(value: Any) -> Optional[str]:
    """Returns why a price is unusable, or None if it fits the price column."""
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        return "must be a number"
    if not price.is_finite():
        return "must be a number"
    if price.normalize().as_tuple().exponent < -PRICE_DECIMAL_PLACES:
        return f"must have at most {PRICE_DECIMAL_PLACES} decimal places"
    return None


def validate_new_vehicle(data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Returns (field, reason) pairs for every required field that is missing, empty or malformed."""
    errors = []
    for field in REQUIRED_TEXT_FIELDS:
        value = data.get(field)
        if value is None:
            errors.append((field, "is required"))
        elif value == "":
            errors.append((field, "must not be empty"))
    for field in REQUIRED_PRESENT_FIELDS:
        if data.get(field) is None:
            errors.append((field, "is required"))
    price = data.get("daily_rent_price")
    if price is not None:
        reason = check_price(price)
        if reason:
            errors.append(("daily_rent_price", reason))
    return errors


def create_vehicle(store: VehicleStore, data: Mapping[str, Any]) -> Vehicle:
    errors = validate_new_vehicle(data)
    if errors:
        logger.warning(f"Rejected vehicle create, invalid fields: {[field for field, _ in errors]}")
        if any(reason in MISSING_REASONS for _, reason in errors):
            raise ValidationError("Missing required fields", errors)
        raise ValidationError("Invalid vehicle data", errors)

    vehicle = store.insert({field: data[field] for field in VEHICLE_FIELDS})
    logger.info(f"Vehicle created: {vehicle.id} ({vehicle.registration_number})")
    return vehicle


def get_all_vehicles(store: VehicleStore) -> List[Vehicle]:
    return store.find_all()


def get_vehicle_by_id(store: VehicleStore, vehicle_id: Union[int, str]) -> Vehicle:
    return store.find_by_id(parse_vehicle_id(vehicle_id))


def update_vehicle(store: VehicleStore, vehicle_id: Union[int, str], changes: Mapping[str, Any]) -> Vehicle:
    """
    Applies a sparse set of changes to a vehicle.

    Only keys present in `changes` are written; values are not re-validated.
    Anything that is not a vehicle business field (including `id`) is ignored.
    """
    parsed_id = parse_vehicle_id(vehicle_id)
    patch: Dict[str, Any] = {
        field: value for field, value in changes.items() if field in VEHICLE_FIELDS
    }
    vehicle = store.update(parsed_id, patch)
    logger.info(f"Vehicle {parsed_id} updated, fields: {sorted(patch)}")
    return vehicle


def delete_vehicle(store: VehicleStore, vehicle_id: Union[int, str]) -> None:
    parsed_id = parse_vehicle_id(vehicle_id)
    store.delete(parsed_id)
    logger.info(f"Vehicle {parsed_id} deleted")
