import math
from functools import wraps

import boto3
from botocore.exceptions import ClientError
from loguru import logger

from bucketstui.formatting import SECONDS_PER_DAY
from bucketstui.models import Label, RetentionRule, RetentionRuleType

RETENTION_RULE_ID = "bucketstui-retention"

# Error codes S3 returns when a bucket simply has no configuration of that kind
NO_LIFECYCLE_CODES = {"NoSuchLifecycleConfiguration"}
NO_TAGGING_CODES = {"NoSuchTagSet", "NoSuchTagSetError"}


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class S3:
    endpoint_url: str = None
    region_name: str = None
    profile_name: str = None
    aws_access_key_id: str = None
    aws_secret_access_key: str = None
    aws_session_token: str = None

    @classmethod
    def set_endpoint_url(cls, endpoint_url: str = None) -> None:
        cls.endpoint_url = endpoint_url

    @classmethod
    def set_region_name(cls, region_name: str = None) -> None:
        cls.region_name = region_name

    @classmethod
    def set_profile_name(cls, profile_name: str = None) -> None:
        cls.profile_name = profile_name

    @classmethod
    def set_credentials(
        cls,
        aws_access_key_id: str = None,
        aws_secret_access_key: str = None,
        aws_session_token: str = None,
    ) -> None:
        cls.aws_access_key_id = aws_access_key_id
        cls.aws_secret_access_key = aws_secret_access_key
        cls.aws_session_token = aws_session_token

    @classmethod
    def create_client(cls):
        """Create an S3 client from the configured profile, region, endpoint and credentials."""
        session = boto3.Session(profile_name=cls.profile_name) if cls.profile_name else boto3.Session()
        client_kwargs = {}
        if cls.endpoint_url:
            client_kwargs["endpoint_url"] = cls.endpoint_url
        if cls.region_name:
            client_kwargs["region_name"] = cls.region_name
        if cls.aws_access_key_id and cls.aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = cls.aws_access_key_id
            client_kwargs["aws_secret_access_key"] = cls.aws_secret_access_key
            if cls.aws_session_token:
                client_kwargs["aws_session_token"] = cls.aws_session_token

        return session.client("s3", **client_kwargs)

    @staticmethod
    def get_client(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not kwargs.get("client"):
                # Create a new S3 client if not provided
                kwargs["client"] = S3.create_client()
            return func(*args, **kwargs)

        return wrapper

    # -------------------------List------------------------- #

    @get_client
    @staticmethod
    def list_buckets(client: boto3.client) -> tuple[dict, list[dict]]:
        """List all S3 buckets.

        Returns:
            Tuple of (owner with ID and DisplayName, buckets)
        """
        logger.info("Listing S3 buckets")
        response = client.list_buckets()

        return response.get("Owner", {}), response.get("Buckets", [])

    @get_client
    @staticmethod
    def get_bucket_region(client: boto3.client, *, bucket_name: str) -> str:
        response = client.get_bucket_location(Bucket=bucket_name)

        # us-east-1 is reported as an empty location constraint
        return response.get("LocationConstraint") or "us-east-1"

    @get_client
    @staticmethod
    def get_retention_rules(client: boto3.client, *, bucket_name: str) -> list[RetentionRule]:
        """Read the expiration rules of a bucket's lifecycle configuration."""
        try:
            response = client.get_bucket_lifecycle_configuration(Bucket=bucket_name)
        except ClientError as e:
            if _error_code(e) in NO_LIFECYCLE_CODES:
                return []
            raise

        rules = []
        for rule in response.get("Rules", []):
            days = rule.get("Expiration", {}).get("Days")
            if rule.get("Status") == "Enabled" and days:
                rules.append(RetentionRule(type=RetentionRuleType.EXPIRE, every_seconds=days * SECONDS_PER_DAY))

        return rules

    @get_client
    @staticmethod
    def get_labels(client: boto3.client, *, bucket_name: str) -> list[Label]:
        """Read a bucket's tags as labels."""
        try:
            response = client.get_bucket_tagging(Bucket=bucket_name)
        except ClientError as e:
            if _error_code(e) in NO_TAGGING_CODES:
                return []
            raise

        return [Label(name=tag["Key"], value=tag.get("Value", "")) for tag in response.get("TagSet", [])]

    # -------------------------Create------------------------- #

    @get_client
    @staticmethod
    def create_bucket(client: boto3.client, *, bucket_name: str, region_name: str = None) -> None:
        """Create a bucket, in ``region_name`` when given."""
        logger.info(f"Creating bucket '{bucket_name}' in region '{region_name or 'default'}'")
        kwargs = {"Bucket": bucket_name}
        if region_name and region_name != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region_name}

        client.create_bucket(**kwargs)

    # -------------------------Update------------------------- #

    @get_client
    @staticmethod
    def put_retention_rules(client: boto3.client, *, bucket_name: str, rules: list[RetentionRule]) -> None:
        """Replace a bucket's lifecycle expiration with the first expire rule.

        S3 expires objects in whole days, so the interval is rounded up.
        """
        expire = next((rule for rule in rules if rule.type == RetentionRuleType.EXPIRE), None)
        if expire is None:
            logger.info(f"Removing retention from bucket '{bucket_name}'")
            client.delete_bucket_lifecycle(Bucket=bucket_name)
            return

        days = max(1, math.ceil(expire.every_seconds / SECONDS_PER_DAY))
        logger.info(f"Setting retention of bucket '{bucket_name}' to {days} day(s)")
        client.put_bucket_lifecycle_configuration(
            Bucket=bucket_name,
            LifecycleConfiguration={
                "Rules": [
                    {
                        "ID": RETENTION_RULE_ID,
                        "Status": "Enabled",
                        "Filter": {"Prefix": ""},
                        "Expiration": {"Days": days},
                    }
                ]
            },
        )

    @get_client
    @staticmethod
    def put_labels(client: boto3.client, *, bucket_name: str, labels: list[Label]) -> None:
        """Replace a bucket's tags with ``labels``."""
        if not labels:
            logger.info(f"Removing labels from bucket '{bucket_name}'")
            client.delete_bucket_tagging(Bucket=bucket_name)
            return

        logger.info(f"Setting {len(labels)} label(s) on bucket '{bucket_name}'")
        client.put_bucket_tagging(
            Bucket=bucket_name,
            Tagging={"TagSet": [{"Key": label.name, "Value": label.value} for label in labels]},
        )

    # -------------------------Delete------------------------- #

    @get_client
    @staticmethod
    def delete_bucket(client: boto3.client, *, bucket_name: str) -> None:
        """Delete an (empty) bucket."""
        logger.info(f"Deleting bucket '{bucket_name}'")
        client.delete_bucket(Bucket=bucket_name)
