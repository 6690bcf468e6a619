"""Create, update and delete operations that keep the store in sync with S3.

``update_bucket`` and ``delete_bucket`` block on S3 and are meant to run in a
worker thread. Every store change and notification they make goes through
``dispatch``, which the app points at its main thread.
"""

import asyncio
from dataclasses import replace
from typing import Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from bucketstui.errors import BucketActionError
from bucketstui.gateways.s3 import S3
from bucketstui.models import Bucket, Organization
from bucketstui.store import BucketStore

Notify = Callable[..., None]
Dispatch = Callable[[Callable[[], None]], None]

GATEWAY_ERRORS = (BotoCoreError, ClientError)


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class BucketActions:
    """Gateway calls plus the store updates that follow them.

    ``notify`` receives ``(message, severity=...)`` the same way Textual's
    ``App.notify`` does.
    """

    def __init__(
        self,
        store: BucketStore,
        notify: Optional[Notify] = None,
        gateway=S3,
        dispatch: Optional[Dispatch] = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self._notify = notify or (lambda *args, **kwargs: None)
        self._dispatch = dispatch or _call_now

    def _report(self, message: str, severity: str) -> None:
        self._dispatch(lambda: self._notify(message, severity=severity))

    # -------------------------Load------------------------- #

    def fetch_bucket(self, raw_bucket: dict, org_id: str = "") -> Bucket:
        """Build a bucket record from a ``list_buckets`` entry and its configuration."""
        name = raw_bucket["Name"]
        created = raw_bucket.get("CreationDate")
        return Bucket(
            id=name,
            name=name,
            org_id=org_id,
            retention_rules=tuple(self.gateway.get_retention_rules(bucket_name=name)),
            labels=tuple(self.gateway.get_labels(bucket_name=name)),
            region=raw_bucket.get("BucketRegion") or self.gateway.get_bucket_region(bucket_name=name),
            created=created.strftime("%Y-%m-%d") if created else "",
        )

    def read_back(self, bucket: Bucket) -> Optional[Bucket]:
        """Re-read ``bucket`` from S3, or ``None`` if that fails too."""
        try:
            fetched = self.fetch_bucket({"Name": bucket.name, "BucketRegion": bucket.region}, bucket.org_id)
        except GATEWAY_ERRORS as e:
            logger.error(f"Could not re-read bucket '{bucket.name}': {e}")
            return None
        return replace(fetched, id=bucket.id, created=bucket.created)

    def load(self) -> tuple[Organization, list[Bucket]]:
        """Read the organization and all of its buckets from S3."""
        try:
            owner, raw_buckets = self.gateway.list_buckets()
            org = Organization(id=owner.get("ID", ""), name=owner.get("DisplayName") or owner.get("ID", ""))
            buckets = [self.fetch_bucket(raw, org.id) for raw in raw_buckets]
        except GATEWAY_ERRORS as e:
            raise BucketActionError("list", "*", e) from e

        logger.info(f"Loaded {len(buckets)} bucket(s) for organization '{org.name}'")
        return org, buckets

    def refresh(self) -> None:
        """Reload the store from S3."""
        org, buckets = self.load()

        def apply() -> None:
            self.store.set_org(org)
            self.store.set_buckets(buckets)

        self._dispatch(apply)

    # -------------------------Create------------------------- #

    def _configure(self, bucket: Bucket) -> None:
        if bucket.expire_rule() is not None:
            self.gateway.put_retention_rules(bucket_name=bucket.name, rules=list(bucket.retention_rules))
        if bucket.labels:
            self.gateway.put_labels(bucket_name=bucket.name, labels=list(bucket.labels))

    def _rollback_create(self, bucket: Bucket) -> Optional[Bucket]:
        """Delete a bucket whose configuration failed.

        Returns:
            ``None`` once the bucket is gone, otherwise the bucket as it now exists in S3
        """
        try:
            self.gateway.delete_bucket(bucket_name=bucket.name)
        except GATEWAY_ERRORS as e:
            logger.error(f"Rollback of bucket '{bucket.name}' failed: {e}")
            return self.read_back(bucket) or replace(bucket, retention_rules=(), labels=())

        logger.info(f"Rolled back creation of bucket '{bucket.name}'")
        return None

    async def create_bucket(self, bucket: Bucket) -> None:
        """Create ``bucket`` in S3 and add it to the store.

        If the bucket is created but its retention or labels cannot be set,
        it is deleted again so the form can be resubmitted. A bucket that
        cannot be rolled back is added to the store as S3 reports it.

        Raises:
            BucketActionError: if S3 rejects the bucket or its configuration
        """
        created = replace(bucket, id=bucket.name)
        try:
            await asyncio.to_thread(
                self.gateway.create_bucket, bucket_name=bucket.name, region_name=bucket.region or None
            )
        except GATEWAY_ERRORS as e:
            logger.error(f"Create failed for bucket '{bucket.name}': {e}")
            raise BucketActionError("create", bucket.name, e) from e

        try:
            await asyncio.to_thread(self._configure, created)
        except GATEWAY_ERRORS as e:
            logger.error(f"Configuring new bucket '{bucket.name}' failed: {e}")
            leftover = await asyncio.to_thread(self._rollback_create, created)
            if leftover is not None:
                self.store.add_bucket(leftover)
            raise BucketActionError("create", bucket.name, e) from e

        self.store.add_bucket(created)
        self._notify(f"Created bucket '{created.name}'", severity="information")

    # -------------------------Update------------------------- #

    def update_bucket(self, bucket: Bucket) -> None:
        """Write retention and labels of ``bucket``; failures are reported, not raised.

        After a partial write the store is refreshed from S3.
        """
        try:
            self.gateway.put_retention_rules(bucket_name=bucket.name, rules=list(bucket.retention_rules))
            self.gateway.put_labels(bucket_name=bucket.name, labels=list(bucket.labels))
        except GATEWAY_ERRORS as e:
            logger.error(f"Update failed for bucket '{bucket.name}': {e}")
            actual = self.read_back(bucket)
            if actual is not None:
                self._dispatch(lambda: self.store.replace_bucket(actual))
            self._report(f"Failed to update bucket: {e}", "error")
            return

        self._dispatch(lambda: self.store.replace_bucket(bucket))
        self._report(f"Updated bucket '{bucket.name}'", "information")

    # -------------------------Delete------------------------- #

    def delete_bucket(self, bucket_id: str, name: str) -> None:
        """Delete the bucket; failures are reported, not raised."""
        try:
            self.gateway.delete_bucket(bucket_name=name)
        except GATEWAY_ERRORS as e:
            logger.error(f"Delete failed for bucket '{name}': {e}")
            self._report(f"Failed to delete bucket: {e}", "error")
            return

        self._dispatch(lambda: self.store.remove_bucket(bucket_id))
        self._report(f"Deleted bucket '{name}'", "information")
