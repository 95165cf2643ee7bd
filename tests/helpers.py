"""Shared fixtures for the database-backed test cases."""

import unittest

from quickchat.infra.database import SessionLocal, reset_db


def reset_database():
    reset_db()


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema and a session per test."""

    def setUp(self):
        reset_database()
        self.db = SessionLocal()

    def tearDown(self):
        self.db.close()
