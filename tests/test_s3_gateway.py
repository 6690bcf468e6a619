"""Tests for the boto3 gateway using a client double."""

import datetime
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from bucketstui.gateways.s3 import RETENTION_RULE_ID, S3
from bucketstui.models import Label, RetentionRuleType
from tests.conftest import DAY, HOUR, expire


def client_error(code: str, operation: str = "Operation") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestList:
    def test_list_buckets_returns_owner_and_buckets(self, s3_client):
        created = datetime.datetime(2024, 1, 2)
        s3_client.list_buckets.return_value = {
            "Owner": {"ID": "abc", "DisplayName": "acme"},
            "Buckets": [{"Name": "logs", "CreationDate": created}],
        }

        owner, buckets = S3.list_buckets(client=s3_client)

        assert owner == {"ID": "abc", "DisplayName": "acme"}
        assert buckets == [{"Name": "logs", "CreationDate": created}]
        s3_client.list_buckets.assert_called_once_with()

    def test_bucket_region_defaults_to_us_east_1(self, s3_client):
        s3_client.get_bucket_location.return_value = {"LocationConstraint": None}

        assert S3.get_bucket_region(client=s3_client, bucket_name="logs") == "us-east-1"


class TestRetentionRules:
    def test_reads_enabled_expiration(self, s3_client):
        s3_client.get_bucket_lifecycle_configuration.return_value = {
            "Rules": [
                {"ID": "a", "Status": "Enabled", "Expiration": {"Days": 7}},
                {"ID": "b", "Status": "Disabled", "Expiration": {"Days": 1}},
                {"ID": "c", "Status": "Enabled", "Transitions": []},
            ]
        }

        rules = S3.get_retention_rules(client=s3_client, bucket_name="logs")

        assert len(rules) == 1
        assert rules[0].type is RetentionRuleType.EXPIRE
        assert rules[0].every_seconds == 7 * DAY

    def test_no_lifecycle_means_no_rules(self, s3_client):
        s3_client.get_bucket_lifecycle_configuration.side_effect = client_error("NoSuchLifecycleConfiguration")

        assert S3.get_retention_rules(client=s3_client, bucket_name="logs") == []

    def test_other_errors_propagate(self, s3_client):
        s3_client.get_bucket_lifecycle_configuration.side_effect = client_error("AccessDenied")

        with pytest.raises(ClientError):
            S3.get_retention_rules(client=s3_client, bucket_name="logs")

    def test_put_rounds_up_to_days(self, s3_client):
        S3.put_retention_rules(client=s3_client, bucket_name="logs", rules=[expire(DAY + HOUR)])

        kwargs = s3_client.put_bucket_lifecycle_configuration.call_args.kwargs
        rule = kwargs["LifecycleConfiguration"]["Rules"][0]
        assert kwargs["Bucket"] == "logs"
        assert rule["ID"] == RETENTION_RULE_ID
        assert rule["Expiration"] == {"Days": 2}

    def test_put_sub_day_is_one_day(self, s3_client):
        S3.put_retention_rules(client=s3_client, bucket_name="logs", rules=[expire(HOUR)])

        rule = s3_client.put_bucket_lifecycle_configuration.call_args.kwargs["LifecycleConfiguration"]["Rules"][0]
        assert rule["Expiration"] == {"Days": 1}

    def test_put_without_expire_removes_lifecycle(self, s3_client):
        S3.put_retention_rules(client=s3_client, bucket_name="logs", rules=[])

        s3_client.delete_bucket_lifecycle.assert_called_once_with(Bucket="logs")
        s3_client.put_bucket_lifecycle_configuration.assert_not_called()


class TestLabels:
    def test_reads_tags(self, s3_client):
        s3_client.get_bucket_tagging.return_value = {"TagSet": [{"Key": "env", "Value": "prod"}]}

        assert S3.get_labels(client=s3_client, bucket_name="logs") == [Label("env", "prod")]

    def test_no_tags(self, s3_client):
        s3_client.get_bucket_tagging.side_effect = client_error("NoSuchTagSet")

        assert S3.get_labels(client=s3_client, bucket_name="logs") == []

    def test_put_labels(self, s3_client):
        S3.put_labels(client=s3_client, bucket_name="logs", labels=[Label("env", "prod"), Label("cold")])

        s3_client.put_bucket_tagging.assert_called_once_with(
            Bucket="logs",
            Tagging={"TagSet": [{"Key": "env", "Value": "prod"}, {"Key": "cold", "Value": ""}]},
        )

    def test_put_no_labels_removes_tagging(self, s3_client):
        S3.put_labels(client=s3_client, bucket_name="logs", labels=[])

        s3_client.delete_bucket_tagging.assert_called_once_with(Bucket="logs")


class TestCreateDelete:
    def test_create_in_default_region(self, s3_client):
        S3.create_bucket(client=s3_client, bucket_name="logs")

        s3_client.create_bucket.assert_called_once_with(Bucket="logs")

    def test_create_in_us_east_1_has_no_constraint(self, s3_client):
        S3.create_bucket(client=s3_client, bucket_name="logs", region_name="us-east-1")

        s3_client.create_bucket.assert_called_once_with(Bucket="logs")

    def test_create_in_region(self, s3_client):
        S3.create_bucket(client=s3_client, bucket_name="logs", region_name="eu-west-1")

        s3_client.create_bucket.assert_called_once_with(
            Bucket="logs", CreateBucketConfiguration={"LocationConstraint": "eu-west-1"}
        )

    def test_delete(self, s3_client):
        S3.delete_bucket(client=s3_client, bucket_name="logs")

        s3_client.delete_bucket.assert_called_once_with(Bucket="logs")


class TestClientFactory:
    def teardown_method(self):
        S3.set_endpoint_url(None)
        S3.set_region_name(None)
        S3.set_profile_name(None)
        S3.set_credentials(None, None, None)

    def test_client_created_when_missing(self, s3_client):
        with patch.object(S3, "create_client", return_value=s3_client) as create_client:
            s3_client.list_buckets.return_value = {"Buckets": []}

            assert S3.list_buckets() == ({}, [])
            create_client.assert_called_once()

    def test_create_client_uses_settings(self):
        S3.set_endpoint_url("http://localhost:9000")
        S3.set_region_name("eu-west-1")
        S3.set_credentials("AKIA", "secret", None)

        with patch("bucketstui.gateways.s3.boto3.Session") as session_cls:
            S3.create_client()

        session_cls.assert_called_once_with()
        session_cls.return_value.client.assert_called_once_with(
            "s3",
            endpoint_url="http://localhost:9000",
            region_name="eu-west-1",
            aws_access_key_id="AKIA",
            aws_secret_access_key="secret",
        )

    def test_create_client_with_profile(self):
        S3.set_profile_name("dev")

        with patch("bucketstui.gateways.s3.boto3.Session") as session_cls:
            S3.create_client()

        session_cls.assert_called_once_with(profile_name="dev")
