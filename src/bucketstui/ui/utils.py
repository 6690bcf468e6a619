from bucketstui.formatting import SECONDS_PER_DAY, days_to_seconds
from bucketstui.models import Bucket, Label, RetentionRule, RetentionRuleType

LABEL_SEPARATOR = ","
LABEL_VALUE_SEPARATOR = "="


def parse_retention_days(text: str) -> tuple[RetentionRule, ...]:
    """Parse the retention field of a bucket form.

    Args:
        text: Number of days, or empty for no expiration

    Returns:
        A single expire rule, or no rules when the field is empty
    """
    text = text.strip()
    if not text:
        return ()

    try:
        days = int(text)
    except ValueError:
        raise ValueError(f"Retention must be a whole number of days, got '{text}'")
    if days <= 0:
        raise ValueError("Retention must be at least 1 day")

    return (RetentionRule(type=RetentionRuleType.EXPIRE, every_seconds=days_to_seconds(days)),)


def format_retention_days(bucket: Bucket) -> str:
    """Inverse of :func:`parse_retention_days` for prefilling a form."""
    rule = bucket.expire_rule()
    if rule is None:
        return ""
    return str(max(1, rule.every_seconds // SECONDS_PER_DAY))


def parse_labels(text: str) -> tuple[Label, ...]:
    """Parse ``"env=prod, team"`` into labels."""
    labels = []
    for chunk in text.split(LABEL_SEPARATOR):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, _, value = chunk.partition(LABEL_VALUE_SEPARATOR)
        name = name.strip()
        if not name:
            raise ValueError(f"Label '{chunk}' has no name")
        labels.append(Label(name=name, value=value.strip()))

    return tuple(labels)


def format_labels(labels: tuple[Label, ...]) -> str:
    return f"{LABEL_SEPARATOR} ".join(
        f"{label.name}{LABEL_VALUE_SEPARATOR}{label.value}" if label.value else label.name for label in labels
    )


def format_label_names(labels: tuple[Label, ...]) -> str:
    """Format label names for a list row."""
    return " ".join(f"#{label.name}" for label in labels)
