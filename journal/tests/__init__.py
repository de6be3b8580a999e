import unittest

from journal.core.database import Database
from journal.services.store import RecordsStore

TEST_DATABASE_URL = "sqlite://"


def setup_database(url=TEST_DATABASE_URL):
    db = Database(url)
    db.create_all()
    return db


def teardown_database(db):
    db.drop_all()
    db.dispose()


class StoreTestCase(unittest.TestCase):
    """Fresh in-memory database and store for every test."""

    def setUp(self):
        self.db = setup_database()
        self.store = RecordsStore(self.db)

    def tearDown(self):
        teardown_database(self.db)
