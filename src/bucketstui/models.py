"""Bucket records and their display-ready counterparts."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional


class RetentionRuleType(str, Enum):
    """Kinds of retention rules a bucket can carry."""

    EXPIRE = "expire"


@dataclass(frozen=True)
class RetentionRule:
    type: RetentionRuleType
    every_seconds: int = 0


@dataclass(frozen=True)
class Label:
    """A bucket label, stored as an S3 tag."""

    name: str
    value: str = ""


@dataclass(frozen=True)
class Organization:
    id: str
    name: str


@dataclass(frozen=True)
class Bucket:
    """A bucket as owned by the store. Never mutated in place."""

    id: str
    name: str
    org_id: str = ""
    retention_rules: tuple[RetentionRule, ...] = ()
    labels: tuple[Label, ...] = ()
    region: str = ""
    created: str = ""

    def expire_rule(self) -> Optional[RetentionRule]:
        """Return the first expire rule, if any."""
        return next((rule for rule in self.retention_rules if rule.type == RetentionRuleType.EXPIRE), None)


@dataclass(frozen=True)
class DisplayBucket(Bucket):
    """A bucket enriched with its human-readable retention string."""

    rule_string: str = "forever"

    @classmethod
    def from_bucket(cls, bucket: Bucket, rule_string: str) -> "DisplayBucket":
        return cls(**{f.name: getattr(bucket, f.name) for f in fields(Bucket)}, rule_string=rule_string)

    def to_bucket(self) -> Bucket:
        """Strip the derived rule string and return the plain bucket."""
        return Bucket(**{f.name: getattr(self, f.name) for f in fields(Bucket)})
