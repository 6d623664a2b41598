# backend/run_api.py
# Script to run the FastAPI server

import uvicorn

from vehicle_rental.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "vehicle_rental.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
