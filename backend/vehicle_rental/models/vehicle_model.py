from sqlalchemy import Column, Integer, String, Numeric
from ..core.database import Base

PRICE_DECIMAL_PLACES = 2

class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_name = Column(String, nullable=False)
    type = Column(String, nullable=False)  # car, van, bike, ...
    registration_number = Column(String, unique=True, index=True, nullable=False)
    daily_rent_price = Column(Numeric(10, PRICE_DECIMAL_PLACES), nullable=False)
    availability_status = Column(String, nullable=False)  # available, rented
