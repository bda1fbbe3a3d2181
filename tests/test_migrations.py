import shutil
import tempfile
import unittest
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from app.api.entities.catalogue import ENTITY_DEFINITIONS
from app.db.session import Base

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _alembic_config(connection):
    config = Config()
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.attributes["connection"] = connection
    return config


class MigrationTests(unittest.TestCase):
    """Runs the migration chain against a throwaway SQLite file."""

    @classmethod
    def setUpClass(cls):
        cls.workdir = tempfile.mkdtemp(prefix="ticketing-migrations-")
        cls.engine = create_engine(f"sqlite+pysqlite:///{Path(cls.workdir) / 'migrated.db'}")
        with cls.engine.begin() as connection:
            command.upgrade(_alembic_config(connection), "head")

    @classmethod
    def tearDownClass(cls):
        cls.engine.dispose()
        shutil.rmtree(cls.workdir, ignore_errors=True)

    def test_upgrade_head_creates_every_entity_table(self):
        expected = {definition.model.__tablename__ for definition in ENTITY_DEFINITIONS}
        tables = set(inspect(self.engine).get_table_names())
        self.assertEqual(tables - {"alembic_version"}, expected)
        self.assertEqual(set(Base.metadata.tables), expected)

    def test_migrated_columns_match_the_models(self):
        inspector = inspect(self.engine)
        for table in Base.metadata.sorted_tables:
            with self.subTest(table=table.name):
                migrated = {column["name"]: column["nullable"] for column in inspector.get_columns(table.name)}
                modelled = {column.name: column.nullable for column in table.columns}
                self.assertEqual(migrated, modelled)

    def test_timestamps_are_required(self):
        inspector = inspect(self.engine)
        for table in ("venues", "bookings", "payments"):
            columns = {column["name"]: column for column in inspector.get_columns(table)}
            self.assertFalse(columns["created_at"]["nullable"], table)
            self.assertFalse(columns["updated_at"]["nullable"], table)

    def test_alembic_version_is_set(self):
        with self.engine.connect() as conn:
            version = conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one()
        self.assertEqual(version, "0001_init")


class DowngradeTests(unittest.TestCase):
    def test_downgrade_to_base_drops_every_entity_table(self):
        workdir = tempfile.mkdtemp(prefix="ticketing-downgrade-")
        self.addCleanup(shutil.rmtree, workdir, True)
        engine = create_engine(f"sqlite+pysqlite:///{Path(workdir) / 'downgraded.db'}")
        self.addCleanup(engine.dispose)
        with engine.begin() as connection:
            command.upgrade(_alembic_config(connection), "head")
        with engine.begin() as connection:
            command.downgrade(_alembic_config(connection), "base")
        self.assertEqual(set(inspect(engine).get_table_names()) - {"alembic_version"}, set())


if __name__ == "__main__":
    unittest.main()
