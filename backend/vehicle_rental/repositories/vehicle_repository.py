# backend/vehicle_rental/repositories/vehicle_repository.py
import logging
import threading
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError, StorageError
from ..models.vehicle_model import PRICE_DECIMAL_PLACES, Vehicle as VehicleModel
from ..schemas.vehicle_schema import Vehicle

logger = logging.getLogger(__name__)

PRICE_QUANTUM = Decimal(1).scaleb(-PRICE_DECIMAL_PLACES)

# Columns that must never hold NULL once stored
REQUIRED_COLUMNS = (
    "vehicle_name",
    "type",
    "registration_number",
    "daily_rent_price",
    "availability_status",
)


class VehicleStore(Protocol):
    """Persistence primitives for vehicle records. Knows nothing about validation."""

    def insert(self, fields: Dict[str, Any]) -> Vehicle: ...

    def find_all(self) -> List[Vehicle]: ...

    def find_by_id(self, vehicle_id: int) -> Vehicle: ...

    def update(self, vehicle_id: int, fields: Dict[str, Any]) -> Vehicle: ...

    def delete(self, vehicle_id: int) -> None: ...


class SqlAlchemyVehicleStore:
    """Vehicle store backed by a SQLAlchemy session. One commit per operation."""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, vehicle_id: int) -> VehicleModel:
        try:
            db_vehicle = self.db.query(VehicleModel).filter(
                VehicleModel.id == vehicle_id
            ).first()
        except OverflowError:
            # the driver cannot bind ids wider than the INTEGER column, so no such row exists
            self.db.rollback()
            raise NotFoundError(vehicle_id) from None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load vehicle {vehicle_id}: {e}", exc_info=True)
            raise StorageError(f"Database error: {e}") from e

        if db_vehicle is None:
            raise NotFoundError(vehicle_id)
        return db_vehicle

    def _commit(self, db_vehicle: VehicleModel, action: str) -> Vehicle:
        try:
            self.db.commit()
            self.db.refresh(db_vehicle)
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action} vehicle: {e}", exc_info=True)
            self.db.rollback()
            raise StorageError(f"Database error: {e}") from e
        return Vehicle.model_validate(db_vehicle)

    def insert(self, fields: Dict[str, Any]) -> Vehicle:
        db_vehicle = VehicleModel(**fields)
        self.db.add(db_vehicle)
        vehicle = self._commit(db_vehicle, "create")
        logger.info(f"Vehicle stored with id {vehicle.id}")
        return vehicle

    def find_all(self) -> List[Vehicle]:
        try:
            vehicles = self.db.query(VehicleModel).order_by(VehicleModel.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list vehicles: {e}", exc_info=True)
            raise StorageError(f"Database error: {e}") from e
        return [Vehicle.model_validate(v) for v in vehicles]

    def find_by_id(self, vehicle_id: int) -> Vehicle:
        return Vehicle.model_validate(self._get(vehicle_id))

    def update(self, vehicle_id: int, fields: Dict[str, Any]) -> Vehicle:
        db_vehicle = self._get(vehicle_id)
        for field, value in fields.items():
            setattr(db_vehicle, field, value)
        return self._commit(db_vehicle, "update")

    def delete(self, vehicle_id: int) -> None:
        db_vehicle = self._get(vehicle_id)
        try:
            self.db.delete(db_vehicle)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete vehicle {vehicle_id}: {e}", exc_info=True)
            self.db.rollback()
            raise StorageError(f"Database error: {e}") from e


class InMemoryVehicleStore:
    """
    Dict-backed vehicle store.

    Mirrors the constraints of the `vehicles` table (NOT NULL columns, unique
    registration_number, prices kept to the column's scale) so it can stand in
    for the database in tests. Each operation holds the store lock, so one
    instance can be shared across request threads.
    """

    def __init__(self):
        self._records: Dict[int, Dict[str, Any]] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _check(self, record: Dict[str, Any], vehicle_id: int) -> None:
        for column in REQUIRED_COLUMNS:
            if record.get(column) is None:
                raise StorageError(f"NOT NULL constraint failed: vehicles.{column}")
        for other_id, other in self._records.items():
            if other_id != vehicle_id and other["registration_number"] == record["registration_number"]:
                raise StorageError("UNIQUE constraint failed: vehicles.registration_number")

    def _scale_price(self, record: Dict[str, Any]) -> Dict[str, Any]:
        price = record.get("daily_rent_price")
        if price is None:
            return record
        try:
            scaled = Decimal(str(price)).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise StorageError(f"Invalid value for vehicles.daily_rent_price: {price!r}") from e
        return {**record, "daily_rent_price": scaled}

    def insert(self, fields: Dict[str, Any]) -> Vehicle:
        with self._lock:
            vehicle_id = self._next_id
            record = self._scale_price({column: fields.get(column) for column in REQUIRED_COLUMNS})
            self._check(record, vehicle_id)
            self._next_id += 1
            self._records[vehicle_id] = record
            return Vehicle(id=vehicle_id, **record)

    def find_all(self) -> List[Vehicle]:
        with self._lock:
            records = sorted(self._records.items())
        return [Vehicle(id=vehicle_id, **record) for vehicle_id, record in records]

    def find_by_id(self, vehicle_id: int) -> Vehicle:
        with self._lock:
            if vehicle_id not in self._records:
                raise NotFoundError(vehicle_id)
            return Vehicle(id=vehicle_id, **self._records[vehicle_id])

    def update(self, vehicle_id: int, fields: Dict[str, Any]) -> Vehicle:
        with self._lock:
            if vehicle_id not in self._records:
                raise NotFoundError(vehicle_id)
            record = self._scale_price({**self._records[vehicle_id], **fields})
            self._check(record, vehicle_id)
            self._records[vehicle_id] = record
            return Vehicle(id=vehicle_id, **record)

    def delete(self, vehicle_id: int) -> None:
        with self._lock:
            if vehicle_id not in self._records:
                raise NotFoundError(vehicle_id)
            del self._records[vehicle_id]
