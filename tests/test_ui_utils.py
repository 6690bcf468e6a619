import pytest

from bucketstui.models import Bucket, Label
from bucketstui.ui.utils import (
    format_label_names,
    format_labels,
    format_retention_days,
    parse_labels,
    parse_retention_days,
)
from tests.conftest import DAY, HOUR, expire


class TestRetentionField:
    def test_empty_is_forever(self):
        assert parse_retention_days("  ") == ()

    def test_days(self):
        assert parse_retention_days("7") == (expire(7 * DAY),)

    @pytest.mark.parametrize("text", ["abc", "0", "-3", "1.5"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_retention_days(text)

    def test_format_for_prefill(self):
        assert format_retention_days(Bucket(id="1", name="a", retention_rules=(expire(3 * DAY),))) == "3"
        assert format_retention_days(Bucket(id="1", name="a", retention_rules=(expire(HOUR),))) == "1"
        assert format_retention_days(Bucket(id="1", name="a")) == ""


class TestLabelsField:
    def test_parse(self):
        assert parse_labels("env=prod, cold ,") == (Label("env", "prod"), Label("cold"))

    def test_parse_empty(self):
        assert parse_labels("") == ()

    def test_nameless_label(self):
        with pytest.raises(ValueError):
            parse_labels("=prod")

    def test_format(self):
        labels = (Label("env", "prod"), Label("cold"))

        assert format_labels(labels) == "env=prod, cold"
        assert parse_labels(format_labels(labels)) == labels

    def test_format_names(self):
        assert format_label_names((Label("env", "prod"), Label("cold"))) == "#env #cold"
