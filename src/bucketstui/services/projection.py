"""Turn stored buckets into the rows the bucket list displays.

A row's retention string comes from the bucket's first expire rule, or is
"forever" when it has none. Rows are rebuilt on every render and the input
buckets are never modified.
"""

from typing import Iterable

from loguru import logger

from bucketstui.formatting import rule_to_string
from bucketstui.models import Bucket, DisplayBucket, RetentionRuleType

FOREVER = "forever"


def rule_string_for(bucket: Bucket) -> str:
    """Return the retention string shown for a bucket."""
    expire_rules = [rule for rule in bucket.retention_rules if rule.type == RetentionRuleType.EXPIRE]
    if not expire_rules:
        return FOREVER

    if len(expire_rules) > 1:
        # Upstream data is expected to carry a single expire rule
        logger.debug(f"Bucket '{bucket.name}' has {len(expire_rules)} expire rules, using the first")

    return rule_to_string(expire_rules[0].every_seconds)


def pretty_buckets(buckets: Iterable[Bucket]) -> list[DisplayBucket]:
    """Attach a precomputed retention string to each bucket, preserving order."""
    return [DisplayBucket.from_bucket(bucket, rule_string_for(bucket)) for bucket in buckets]
