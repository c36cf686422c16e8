"""
Application startup validation and initialization.

Performs the checks needed before serving requests and creates the
database schema from the ORM metadata.
"""

import logging
from typing import List, Tuple

import sqlalchemy as sa
from sqlalchemy import text

from core.config import DEFAULT_JWT_SECRET, settings
from core.database import Base, engine
import modules.models_registry  # noqa: F401

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ["users", "employees", "payrolls", "vacations"]


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self, bind=None):
        self.engine = bind or engine
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_database_connection(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except sa.exc.SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {e}")
            return False

    def check_environment_config(self) -> bool:
        if settings.jwt_secret_key == DEFAULT_JWT_SECRET:
            self.warnings.append("Using development JWT_SECRET_KEY - change for production")
        if settings.is_production and settings.debug:
            self.errors.append("DEBUG is enabled in production")
            return False
        return True

    def ensure_tables(self) -> bool:
        """Create missing tables; no migrations are involved."""
        try:
            Base.metadata.create_all(bind=self.engine)
            existing = set(sa.inspect(self.engine).get_table_names())
        except sa.exc.SQLAlchemyError as e:
            self.errors.append(f"Could not create database tables: {e}")
            return False

        missing = [t for t in REQUIRED_TABLES if t not in existing]
        if missing:
            self.errors.append(f"Missing database tables: {', '.join(missing)}")
            return False
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.ensure_tables),
        ]

        all_passed = True
        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False

        return all_passed, self.errors, self.warnings


def run_startup_checks(bind=None) -> Tuple[bool, List[str]]:
    """Run all startup validation checks"""
    logger.info(f"Starting {settings.app_name} ({settings.environment})")

    validator = StartupValidator(bind)
    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"Startup warning: {warning}")
    for error in errors:
        logger.error(f"Startup error: {error}")

    if not passed and settings.is_production:
        raise RuntimeError("Cannot start in production with startup errors")
    if passed:
        logger.info("All startup checks passed")

    return passed, warnings


def configure_startup_logging():
    """Configure logging for the application"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
