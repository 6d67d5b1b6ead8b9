import logging

from sqlalchemy import create_engine, QueuePool
from sqlalchemy.orm import sessionmaker

from protein_network_loader.sql.model.core.base import Base

# Registers every mapped class on Base.metadata before create_all.
import protein_network_loader.sql.model  # noqa: F401


class DatabaseManager:
    def __init__(self, conf):
        self.conf = conf
        self.logger = logging.getLogger("protein_network_loader")
        self.engine = self.create_engine()
        self.Session = sessionmaker(bind=self.engine)

    def database_uri(self):
        if self.conf.get('DB_URI'):
            return self.conf['DB_URI']
        return (
            f"postgresql+psycopg2://{self.conf['DB_USERNAME']}:"
            f"{self.conf['DB_PASSWORD']}"
            f"@{self.conf['DB_HOST']}:{self.conf['DB_PORT']}/"
            f"{self.conf['DB_NAME']}"
        )

    def create_engine(self):
        """
        Create the SQLAlchemy engine and make sure every table exists.

        PostgreSQL connections go through a QueuePool with pre-ping so a
        long import notices dropped connections. An explicit ``DB_URI`` is
        handed to SQLAlchemy untouched, which lets SQLite back local runs.
        """
        uri = self.database_uri()
        if self.conf.get('DB_URI'):
            engine = create_engine(uri)
        else:
            engine = create_engine(
                uri,
                pool_size=5,
                max_overflow=0,
                poolclass=QueuePool,
                pool_pre_ping=True,
            )

        Base.metadata.create_all(engine)
        self.logger.info(f"Database schema verified on {engine.url.render_as_string(hide_password=True)}")

        return engine

    def get_session(self):
        return self.Session()

    def get_engine(self):
        return self.engine

    def dispose(self):
        self.engine.dispose()
