import os

import pytest
from fastapi.testclient import TestClient

# Keep the module-level app off the on-disk database
os.environ["DATABASE_URL"] = "sqlite://"

from vehicle_rental.core.config import Settings
from vehicle_rental.core.database import Base, build_engine, build_session_factory
from vehicle_rental.main import create_app
from vehicle_rental.models import vehicle_model  # noqa: F401
from vehicle_rental.repositories.vehicle_repository import InMemoryVehicleStore, SqlAlchemyVehicleStore


@pytest.fixture()
def vehicle_data():
    return {
        "vehicle_name": "Toyota Corolla",
        "type": "car",
        "registration_number": "ABC-123",
        "daily_rent_price": 45,
        "availability_status": "available",
    }


@pytest.fixture()
def db_session():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request, db_session):
    if request.param == "memory":
        return InMemoryVehicleStore()
    return SqlAlchemyVehicleStore(db_session)


@pytest.fixture()
def client():
    app = create_app(Settings(DATABASE_URL="sqlite://"))
    with TestClient(app) as test_client:
        yield test_client
