"""Tests for substring filtering over nested fields."""

from bucketstui.controllers.buckets_tab import SEARCH_KEYS
from bucketstui.services.filtering import filter_list, resolve_path
from bucketstui.services.projection import pretty_buckets


def names(items):
    return [item.name for item in items]


class TestResolvePath:
    def test_plain_attribute(self, buckets):
        assert list(resolve_path(buckets[0], "name")) == ["logs"]

    def test_fan_out_over_sequence(self, buckets):
        assert list(resolve_path(buckets[2], "labels[].name")) == ["team", "cold"]

    def test_mappings(self):
        record = {"name": "x", "labels": [{"name": "a"}, {"name": "b"}]}

        assert list(resolve_path(record, "labels[].name")) == ["a", "b"]

    def test_missing_field_yields_nothing(self, buckets):
        assert list(resolve_path(buckets[0], "nope[].name")) == []


class TestFilterList:
    def test_empty_term_matches_all(self, buckets):
        items = pretty_buckets(buckets)

        assert filter_list("", SEARCH_KEYS, items) == items

    def test_matches_name_case_insensitively(self, buckets):
        items = pretty_buckets(buckets)

        assert names(filter_list("LOG", SEARCH_KEYS, items)) == ["logs"]

    def test_matches_rule_string(self, buckets):
        items = pretty_buckets(buckets)

        assert names(filter_list("forever", SEARCH_KEYS, items)) == ["archive"]
        assert names(filter_list("7 days", SEARCH_KEYS, items)) == ["logs"]

    def test_matches_label_names(self, buckets):
        items = pretty_buckets(buckets)

        assert names(filter_list("cold", SEARCH_KEYS, items)) == ["archive"]

    def test_label_values_are_not_searched(self, buckets):
        items = pretty_buckets(buckets)

        assert filter_list("prod", SEARCH_KEYS, items) == []

    def test_idempotent(self, buckets):
        items = pretty_buckets(buckets)
        once = filter_list("s", SEARCH_KEYS, items)

        assert filter_list("s", SEARCH_KEYS, once) == once

    def test_monotonic(self, buckets):
        items = pretty_buckets(buckets)
        broad = filter_list("r", SEARCH_KEYS, items)
        narrow = filter_list("ar", SEARCH_KEYS, items)

        assert set(names(narrow)) <= set(names(broad))

    def test_preserves_order(self, buckets):
        items = pretty_buckets(buckets)

        assert names(filter_list("s", SEARCH_KEYS, items)) == ["logs", "metrics"]
