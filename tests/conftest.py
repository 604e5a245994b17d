import copy
import os
import tempfile
from pathlib import Path
from types import SimpleNamespace

# Set dummy env vars for testing before any app import
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MONGODB_URL"] = "mongodb://localhost:1"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="pickupdesk_test_")
os.environ.pop("EXPOSE_OTP", None)
os.environ.pop("TWILIO_ACCOUNT_SID", None)

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ASCENDING

from app.core.config import settings
from app.core.context import AppContext, get_context
from app.main import app
from app.services.sms_service import SmsService


class FakeCursor:
    """Just enough of a Motor cursor for sort() + to_list()."""

    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=ASCENDING):
        self._docs = sorted(self._docs, key=lambda d: d[key], reverse=direction != ASCENDING)
        return self

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """
    In-memory stand-in for the Motor collection calls the services make.
    Supports equality and $in filters, $set updates, upserts and projections.
    """

    def __init__(self):
        self.docs = []

    @staticmethod
    def _matches(doc, query):
        for key, expected in (query or {}).items():
            if isinstance(expected, dict) and "$in" in expected:
                if doc.get(key) not in expected["$in"]:
                    return False
            elif doc.get(key) != expected:
                return False
        return True

    @staticmethod
    def _project(doc, projection):
        if not projection:
            return copy.deepcopy(doc)
        keys = {k for k, v in projection.items() if v} | {"_id"}
        return {k: copy.deepcopy(v) for k, v in doc.items() if k in keys}

    async def find_one(self, query, projection=None):
        for doc in self.docs:
            if self._matches(doc, query):
                return self._project(doc, projection)
        return None

    def find(self, query=None, projection=None):
        return FakeCursor([self._project(d, projection) for d in self.docs if self._matches(d, query)])

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one_and_update(self, query, update, upsert=False, return_document=False):
        for doc in self.docs:
            if self._matches(doc, query):
                before = copy.deepcopy(doc)
                doc.update(update.get("$set", {}))
                return copy.deepcopy(doc) if return_document else before

        if not upsert:
            return None

        doc = {"_id": ObjectId(), **query, **update.get("$set", {})}
        self.docs.append(doc)
        return copy.deepcopy(doc) if return_document else None


def make_context(config=None, users=None, orders=None):
    config = config or settings
    return AppContext(
        settings=config,
        users=users if users is not None else FakeCollection(),
        orders=orders if orders is not None else FakeCollection(),
        upload_dir=Path(config.UPLOAD_DIR),
        sms=SmsService(config),
    )


@pytest.fixture
def context():
    return make_context()


@pytest.fixture
def client(context):
    app.dependency_overrides[get_context] = lambda: context
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(context):
    """A registered customer."""
    doc = {"_id": ObjectId(), "mobile": "9876543210", "otp": None, "otpExpiry": None}
    context.users.docs.append(doc)
    return doc


def photo(name="shirt.jpg", content=b"\xff\xd8\xff fake jpeg"):
    return ("photos", (name, content, "image/jpeg"))
