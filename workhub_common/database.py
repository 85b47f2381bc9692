import os
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

# Base declarativa común para todos los modelos
Base = declarative_base()

class DatabaseManager:
    """
    Dueño único del engine (y por tanto del pool de conexiones) del proceso.

    Se crea una vez al importar `app.database` y se libera en el lifespan
    de FastAPI con `dispose()`.
    """

    def __init__(self, database_url: str, echo: bool = None):
        self.database_url = database_url
        # Detectar si estamos en modo debug 
        self.env_mode = os.getenv("ENV_MODE", "dev")
        self.debug = self.env_mode == "dev"

        engine_options = {
            "echo": self.debug if echo is None else echo,
            "future": True,
        }
        connect_args = {}

        # SQLite (tests) no admite opciones de pool
        if not self.database_url.startswith("sqlite"):
            engine_options.update({
                "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
                "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "10")),
                "pool_pre_ping": True,
            })
            if self.env_mode == "prod" and "+asyncpg" in self.database_url:
                connect_args["ssl"] = "require"

        if connect_args:
            engine_options["connect_args"] = connect_args

        self.engine = create_async_engine(self.database_url, **engine_options)
        self.session_factory = sessionmaker(
            self.engine, 
            class_=AsyncSession, 
            expire_on_commit=False
        )

    async def get_db(self):
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def create_all(self):
        """Crea las tablas registradas en `Base` (solo dev/tests)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()
