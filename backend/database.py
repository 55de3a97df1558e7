import os
import logging
import threading
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config import DATABASE_URL, LOG_LEVEL
from exceptions import StorageUnavailableError

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the engine and session factory; creates the schema once."""

    def __init__(self, url: str = DATABASE_URL):
        self.url = url
        self._init_lock = threading.Lock()
        self._initialized = False

        parsed = make_url(url)
        self._is_sqlite = parsed.get_backend_name() == "sqlite"
        self._sqlite_path = parsed.database if self._is_sqlite else None

        # Only use connect_args if we are using SQLite
        engine_args = {}
        if self._is_sqlite:
            engine_args["connect_args"] = {"check_same_thread": False}
            if not self._sqlite_path or self._sqlite_path == ":memory:":
                # every session must see the same in-memory database
                engine_args["poolclass"] = StaticPool
        else:
            engine_args.update({
                "pool_size": 5,
                "max_overflow": 10,
                "pool_timeout": 30,
                "pool_recycle": 1800,
            })

        try:
            self.engine = create_engine(url, **engine_args, echo=False)
            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
                bind=self.engine,
            )
        except Exception as e:
            logger.error(f"Failed to create engine: {e}")
            raise StorageUnavailableError(f"Failed to create engine: {e}") from e

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init_db(self):
        """Create the database directory and all tables. Runs at most once."""
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return

            # Import all models so they register with Base.metadata
            import models  # noqa: F401

            try:
                if self._sqlite_path and self._sqlite_path != ":memory:":
                    directory = os.path.dirname(os.path.abspath(self._sqlite_path))
                    os.makedirs(directory, exist_ok=True)
                Base.metadata.create_all(bind=self.engine)
            except (SQLAlchemyError, OSError) as e:
                logger.error(f"Error during database initialization: {e}")
                raise StorageUnavailableError(f"Cannot open database {self.url}: {e}") from e

            self._initialized = True
            logger.info("Database initialized successfully.")

    @contextmanager
    def session(self):
        """Yields a database session and closes it after use."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()
