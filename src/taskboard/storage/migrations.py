"""Database migration handling with automatic upgrade on startup"""

import os
import shutil
import json
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url

logger = logging.getLogger(__name__)

PROJECT_DIR = Path(".taskboard")

DEFAULT_CONFIG = {
    "id_prefix": "tb",
    "transaction_attempts": 3,
    "retry_backoff_seconds": 0.05,
}

def get_database_url() -> str:
    """Get database URL for current project"""
    return os.getenv("TASKBOARD_DATABASE_URL", f"sqlite:///{PROJECT_DIR}/database.db")

def get_sqlite_path() -> Optional[Path]:
    """Path of the SQLite database file, or None for other backends"""
    url = make_url(get_database_url())
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return None
    return Path(url.database)

def get_migration_config() -> Config:
    """Get Alembic configuration"""
    # This file is in taskboard/storage/, so we go up one level to get to taskboard/
    package_root = Path(__file__).parent.parent

    alembic_ini = package_root / "alembic.ini"
    migrations_dir = package_root / "migrations"

    if not alembic_ini.exists():
        raise FileNotFoundError(
            f"alembic.ini not found at {alembic_ini}. "
            "This indicates an incomplete installation. "
            "Please reinstall taskboard."
        )

    if not migrations_dir.exists():
        raise FileNotFoundError(
            f"migrations directory not found at {migrations_dir}. "
            "This indicates an incomplete installation. "
            "Please reinstall taskboard."
        )

    alembic_cfg = Config(str(alembic_ini))
    alembic_cfg.set_main_option("script_location", str(migrations_dir))
    alembic_cfg.set_main_option("sqlalchemy.url", get_database_url())
    return alembic_cfg

def needs_migration() -> bool:
    """Check if database needs migration"""
    db_path = get_sqlite_path()
    if db_path is not None and not db_path.exists():
        return True  # New database needs initial migration

    engine = create_engine(get_database_url())
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            current_rev = context.get_current_revision()

        script_dir = ScriptDirectory.from_config(get_migration_config())
        head_rev = script_dir.get_current_head()

        return current_rev != head_rev
    except Exception as e:
        logger.warning("Error checking migration status: %s", e)
        return True  # Assume migration needed if we can't check
    finally:
        engine.dispose()

def backup_database() -> Optional[Path]:
    """Create backup before migration"""
    db_path = get_sqlite_path()
    if db_path is not None and db_path.exists():
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_path = db_path.with_name(f"{db_path.name}.backup.{timestamp}")
        try:
            shutil.copy2(db_path, backup_path)
            return backup_path
        except OSError as e:
            logger.warning("Could not create backup: %s", e)
            return None
    return None

def run_migrations():
    """Run any pending migrations"""
    alembic_cfg = get_migration_config()
    command.upgrade(alembic_cfg, "head")

def get_project_config() -> dict:
    """Get project configuration from .taskboard/config.json"""
    config = dict(DEFAULT_CONFIG)
    config_file = PROJECT_DIR / "config.json"
    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                config.update(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning("Could not read config: %s", e)

    return config

def save_project_config(config: dict):
    """Save project configuration to .taskboard/config.json"""
    config_file = PROJECT_DIR / "config.json"
    config_file.parent.mkdir(exist_ok=True)

    with open(config_file, "w") as f:
        json.dump(config, f, indent=2)

def initialize_database():
    """Initialize database on first run or run migrations on upgrade"""
    PROJECT_DIR.mkdir(exist_ok=True)

    # Ensure config exists
    config = get_project_config()
    save_project_config(config)

    db_path = get_sqlite_path()

    if db_path is not None and not db_path.exists():
        # Fresh installation - create latest schema
        logger.info("Initializing new taskboard database at %s", db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        run_migrations()
        logger.info("Database initialized successfully")
    elif needs_migration():
        logger.info("Database migration required")
        backup_path = backup_database()
        try:
            run_migrations()
            if backup_path:
                logger.info("Migration successful, backup created at %s", backup_path)
            else:
                logger.info("Migration successful")
        except Exception:
            logger.exception("Migration failed")
            if backup_path:
                logger.error("Database backup available at %s; restore it manually if needed", backup_path)
            raise
    else:
        logger.info("Database is up to date")

async def initialize_database_async():
    """Async wrapper for database initialization"""
    initialize_database()
