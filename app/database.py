"""
🔌 Database Connection Setup - MongoDB

Configuración centralizada para conectar a MongoDB
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """Singleton para la conexión a MongoDB"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Conecta a MongoDB"""
        if cls.client is None:
            settings = get_settings()

            if not settings.mongodb_uri:
                raise ValueError("MONGODB_URI not found in environment variables")

            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
            )

            db_name = settings.mongodb_db_name
            cls.db = cls.client[db_name]

            # Test de conexión
            await cls.client.admin.command("ping")
            logger.info(f"✅ Connected to MongoDB: {db_name}")

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Retorna la instancia de la base de datos"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


# ============================================
# 🎯 DEPENDENCY para FastAPI
# ============================================

async def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency para inyectar la DB

    Uso:
        @router.get("/rivalry/schools/{school}/teams")
        async def get_teams(school: str, db: Database):
            service = RivalryService(db)
            return await service.get_all_team_rankings_for_school(school)
    """
    return Database.get_db()


# ============================================
# 🏗️ CREAR ÍNDICES (en el lifespan de la app)
# ============================================

async def create_indexes():
    """
    Crea los índices necesarios para optimizar queries

    Se llama en cada arranque desde el lifespan de main.py
    """
    db = Database.get_db()

    # Índices para users
    await db.users.create_index("email", unique=True, sparse=True)
    await db.users.create_index("share_code", unique=True, sparse=True)
    await db.users.create_index("referred_by_code")
    await db.users.create_index("school")

    # Índices para email_verifications
    await db.email_verifications.create_index("token", unique=True)

    # Índices para attempts
    await db.attempts.create_index([("uid", 1), ("created_at", -1)])

    logger.info("✅ Indexes created successfully")
