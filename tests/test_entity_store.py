import os
import unittest
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from app.api.entities.catalogue import EntityDefinition, table_for
from app.api.entities.store import SqlAlchemyEntityStore
from app.core.errors import InvalidPayload
from app.db.session import Base
from app.models.event import Event
from app.models.promo_code import PromoCode
from app.models.discount import Discount
from app.models.venue import Venue


class EntityStoreTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        Base.metadata.create_all(bind=cls.engine)

    @classmethod
    def tearDownClass(cls):
        Base.metadata.drop_all(bind=cls.engine)
        cls.engine.dispose()

    def setUp(self):
        self.db = self.SessionLocal()
        for table in reversed(Base.metadata.sorted_tables):
            self.db.execute(table.delete())
        self.db.commit()
        self.venues = SqlAlchemyEntityStore(self.db, Venue, table_for(EntityDefinition(Venue)))
        self.events = SqlAlchemyEntityStore(self.db, Event, table_for(EntityDefinition(Event)))

    def tearDown(self):
        self.db.close()

    def _venue(self, name: str) -> uuid.UUID:
        return self.venues.insert({"name": name, "address": "1 Main St", "city": "Oslo", "country": "NO"})

    def test_insert_assigns_id_and_timestamps(self):
        venue_id = self._venue("Arena")
        self.assertIsInstance(venue_id, uuid.UUID)
        row = self.venues.fetch_by_id(venue_id)
        self.assertEqual(row.name, "Arena")
        self.assertEqual(row.capacity, 0)
        self.assertIsNotNone(row.created_at)

    def test_fetch_all_keeps_insertion_order(self):
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        for index, name in enumerate(("first", "second", "third")):
            self.db.add(
                Venue(name=name, address="a", city="c", country="n", created_at=base + timedelta(minutes=index))
            )
        self.db.commit()
        self.assertEqual([row.name for row in self.venues.fetch_all()], ["first", "second", "third"])

    def test_fetch_all_loads_included_relations(self):
        venue_id = self._venue("Arena")
        self.events.insert({"venue_id": venue_id, "name": "Gala", "starts_at": datetime(2026, 5, 1, tzinfo=timezone.utc)})
        rows = self.events.fetch_all(("venue",))
        self.assertEqual(rows[0].venue.name, "Arena")

    def test_missing_record(self):
        missing = uuid.uuid4()
        self.assertIsNone(self.venues.fetch_by_id(missing))
        self.assertFalse(self.venues.replace(missing, {"name": "x"}))
        self.assertFalse(self.venues.apply_patch(missing, [{"op": "replace", "path": "/name", "value": "x"}]))
        self.assertFalse(self.venues.remove(missing))

    def test_replace_patch_and_remove(self):
        venue_id = self._venue("Arena")
        self.assertTrue(self.venues.replace(venue_id, {"name": "Dome", "capacity": 900}))
        self.assertTrue(self.venues.apply_patch(venue_id, [{"op": "replace", "path": "/City", "value": "Bergen"}]))
        self.db.expire_all()
        row = self.venues.fetch_by_id(venue_id)
        self.assertEqual((row.name, row.capacity, row.city), ("Dome", 900, "Bergen"))

        self.assertTrue(self.venues.remove(venue_id))
        self.assertIsNone(self.venues.fetch_by_id(venue_id))

    def test_patch_values_are_validated(self):
        venue_id = self._venue("Arena")
        with self.assertRaises(InvalidPayload):
            self.venues.apply_patch(venue_id, [{"op": "remove", "path": "/name"}])

    def test_unique_violation_becomes_invalid_payload(self):
        discounts = SqlAlchemyEntityStore(self.db, Discount, table_for(EntityDefinition(Discount)))
        promo_codes = SqlAlchemyEntityStore(self.db, PromoCode, table_for(EntityDefinition(PromoCode)))
        discount_id = discounts.insert({"name": "Early bird", "percentage": 10})
        promo_codes.insert({"discount_id": discount_id, "code": "EARLY"})
        with self.assertRaises(InvalidPayload):
            promo_codes.insert({"discount_id": discount_id, "code": "EARLY"})
        self.assertEqual(len(promo_codes.fetch_all()), 1)


if __name__ == "__main__":
    unittest.main()
