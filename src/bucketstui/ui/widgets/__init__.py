from .bucket_list import BucketList
from .buckets_tab import BucketsTab
from .empty_state import EmptyStateView
from .title_bar import TitleBar

__all__ = ["BucketList", "BucketsTab", "EmptyStateView", "TitleBar"]
