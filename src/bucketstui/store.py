"""In-process store holding the organization and its buckets."""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from bucketstui.models import Bucket, Organization

Subscriber = Callable[["StoreSnapshot"], None]


@dataclass(frozen=True)
class StoreSnapshot:
    org: Optional[Organization]
    buckets: tuple[Bucket, ...]


class BucketStore:
    """Holds the current buckets and notifies subscribers on every change."""

    def __init__(self, org: Optional[Organization] = None, buckets: Iterable[Bucket] = ()) -> None:
        self._org = org
        self._buckets: tuple[Bucket, ...] = tuple(buckets)
        self._subscribers: list[Subscriber] = []

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(org=self._org, buckets=self._buckets)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> None:
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            callback(snapshot)

    def set_org(self, org: Optional[Organization]) -> None:
        self._org = org
        self._publish()

    def set_buckets(self, buckets: Iterable[Bucket]) -> None:
        self._buckets = tuple(buckets)
        self._publish()

    def add_bucket(self, bucket: Bucket) -> None:
        self._buckets = self._buckets + (bucket,)
        self._publish()

    def replace_bucket(self, bucket: Bucket) -> None:
        self._buckets = tuple(bucket if b.id == bucket.id else b for b in self._buckets)
        self._publish()

    def remove_bucket(self, bucket_id: str) -> None:
        self._buckets = tuple(b for b in self._buckets if b.id != bucket_id)
        self._publish()
