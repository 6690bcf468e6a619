"""Shared fixtures for the Buckets TUI test suite.

Run:  pytest tests/ -v
"""

from __future__ import annotations

import asyncio
import threading
from unittest.mock import MagicMock

import pytest

from bucketstui.models import Bucket, Label, Organization, RetentionRule, RetentionRuleType
from bucketstui.store import BucketStore

HOUR = 3600
DAY = 24 * HOUR


def expire(seconds: int) -> RetentionRule:
    return RetentionRule(type=RetentionRuleType.EXPIRE, every_seconds=seconds)


class FakeActions:
    """In-memory stand-in for BucketActions that records every call."""

    def __init__(self, store: BucketStore, org: Organization | None = None, buckets=()):
        self.store = store
        self.org = org
        self.buckets = list(buckets)
        self.created: list[Bucket] = []
        self.updated: list[Bucket] = []
        self.deleted: list[tuple[str, str]] = []
        self.create_error: Exception | None = None
        self.create_gate: asyncio.Event | None = None
        self.load_error: Exception | None = None
        self.threads: list[int] = []
        self.dispatch = lambda callback: callback()

    def load(self):
        if self.load_error is not None:
            raise self.load_error
        return self.org, list(self.buckets)

    async def create_bucket(self, bucket: Bucket) -> None:
        if self.create_gate is not None:
            await self.create_gate.wait()
        if self.create_error is not None:
            raise self.create_error
        self.created.append(bucket)
        self.store.add_bucket(bucket)

    def update_bucket(self, bucket: Bucket) -> None:
        self.threads.append(threading.get_ident())
        self.updated.append(bucket)
        self.dispatch(lambda: self.store.replace_bucket(bucket))

    def delete_bucket(self, bucket_id: str, name: str) -> None:
        self.threads.append(threading.get_ident())
        self.deleted.append((bucket_id, name))
        self.dispatch(lambda: self.store.remove_bucket(bucket_id))


@pytest.fixture
def org():
    return Organization(id="owner-1", name="acme")


@pytest.fixture
def buckets(org):
    return [
        Bucket(id="b-logs", name="logs", org_id=org.id, retention_rules=(expire(7 * DAY),), labels=(Label("env", "prod"),)),
        Bucket(id="b-metrics", name="metrics", org_id=org.id, retention_rules=(expire(HOUR),)),
        Bucket(id="b-archive", name="archive", org_id=org.id, labels=(Label("team", "data"), Label("cold"))),
    ]


@pytest.fixture
def store(org, buckets):
    return BucketStore(org=org, buckets=buckets)


@pytest.fixture
def actions(store, org, buckets):
    return FakeActions(store, org=org, buckets=buckets)


@pytest.fixture
def s3_client():
    """A boto3 S3 client double."""
    return MagicMock(name="s3_client")
