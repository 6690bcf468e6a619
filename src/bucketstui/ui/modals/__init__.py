"""Modal dialogs for Buckets TUI."""

from .create_bucket_modal import CreateBucketModal
from .delete_modal import DeleteModal
from .update_bucket_modal import UpdateBucketModal

__all__ = ["CreateBucketModal", "DeleteModal", "UpdateBucketModal"]
