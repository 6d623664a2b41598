from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    APP_NAME: str = "Vehicle Rental API"
    APP_VERSION: str = "1.0.0"

    # Database Settings
    DATABASE_URL: str = "sqlite:///./vehicle_rental.db"
    DATABASE_ECHO: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        # This tells Pydantic to load the variables from a .env file
        env_file = ".env"

# Create a single settings instance to be used across the application
settings = Settings()
