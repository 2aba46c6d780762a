"""
Dependencies de FastAPI para inyeccion de BD y configuracion
"""

from typing import Annotated

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import Settings, get_settings
from app.database import get_database

# Alias de tipos para que se vea mas limpio en los endpoints
Database = Annotated[AsyncIOMotorDatabase, Depends(get_database)]
AppSettings = Annotated[Settings, Depends(get_settings)]
