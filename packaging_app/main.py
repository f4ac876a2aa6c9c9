from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .config import settings
from .database import engine, Base
from .routers import calculations, configurations, nutrition_facts, products, sticker_labels

logger = logging.getLogger("packaging_app")
logger.setLevel(settings.LOG_LEVEL)

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

BASE_REVISION = "5b1f0c2d7a41"


def _run_migrations():
    """Run pending Alembic migrations on startup.

    Databases created by Base.metadata.create_all() have the tables but no
    alembic_version row; those are stamped at the base revision first.
    """
    try:
        from alembic.config import Config
        from alembic import command
        from sqlalchemy import inspect

        alembic_ini = os.path.join(os.path.dirname(__file__), "..", "alembic.ini")
        if not os.path.exists(alembic_ini):
            logger.info("alembic.ini not found, skipping migrations")
            return

        alembic_cfg = Config(alembic_ini)

        # Override sqlalchemy.url from environment if DATABASE_URL is set
        database_url = os.environ.get("DATABASE_URL")
        if database_url:
            alembic_cfg.set_main_option("sqlalchemy.url", database_url)

        insp = inspect(engine)
        table_names = insp.get_table_names()
        if "alembic_version" not in table_names and "packaging_configurations" in table_names:
            logger.info("Stamping base migration %s (tables already exist)", BASE_REVISION)
            command.stamp(alembic_cfg, BASE_REVISION)

        logger.info("Running pending Alembic migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")

    except Exception as e:
        # Never let migration errors prevent app startup
        logger.warning(f"Alembic migration warning: {e}")


app = FastAPI(
    title="Packaging Configurator",
    description="Units per box, pallet layer and pallet with weight, cost and timeline projections",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculations.router, prefix="/api")
app.include_router(products.router, prefix="/api")
app.include_router(configurations.router, prefix="/api")
app.include_router(nutrition_facts.router, prefix="/api")
app.include_router(sticker_labels.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "packaging-configurator"}


@app.on_event("startup")
def auto_migrate():
    """Run pending Alembic migrations on startup."""
    _run_migrations()


@app.on_event("startup")
def auto_seed():
    """Seed the default product catalog on first run."""
    from .database import SessionLocal
    db = SessionLocal()
    try:
        added = products.seed_products(db)
        if added:
            logger.info("Seeded %d default products", added)
    finally:
        db.close()
