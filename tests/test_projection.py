"""Tests for projecting buckets into display buckets."""

from bucketstui.formatting import rule_to_string
from bucketstui.models import Bucket, DisplayBucket, Label, RetentionRule
from bucketstui.services import projection
from bucketstui.services.projection import FOREVER, pretty_buckets
from tests.conftest import DAY, HOUR, expire


class TestPrettyBuckets:
    def test_scenario_forever_and_one_hour(self):
        records = [Bucket(id="1", name="a"), Bucket(id="2", name="b", retention_rules=(expire(HOUR),))]

        assert [b.rule_string for b in pretty_buckets(records)] == ["forever", "1 hour"]

    def test_no_expire_rule_is_forever(self):
        other = RetentionRule(type="archive", every_seconds=10)
        result = pretty_buckets([Bucket(id="1", name="a", retention_rules=(other,))])

        assert result[0].rule_string == FOREVER

    def test_expire_rule_uses_formatter(self, buckets):
        for display in pretty_buckets(buckets):
            rule = display.expire_rule()
            expected = rule_to_string(rule.every_seconds) if rule else FOREVER
            assert display.rule_string == expected

    def test_first_expire_rule_wins(self):
        bucket = Bucket(id="1", name="a", retention_rules=(expire(DAY), expire(HOUR)))

        assert pretty_buckets([bucket])[0].rule_string == "1 day"

    def test_preserves_order_and_fields(self, buckets):
        result = pretty_buckets(buckets)

        assert [b.id for b in result] == [b.id for b in buckets]
        assert all(isinstance(b, DisplayBucket) for b in result)
        assert result[0].labels == (Label("env", "prod"),)
        assert result[0].to_bucket() == buckets[0]

    def test_does_not_mutate_input(self, buckets):
        before = list(buckets)
        pretty_buckets(buckets)

        assert buckets == before
        assert not any(isinstance(b, DisplayBucket) for b in buckets)

    def test_empty(self):
        assert pretty_buckets([]) == []

    def test_module_documents_forever_default(self):
        assert projection.__doc__
        assert FOREVER in projection.__doc__
