from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Click
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

from bucketstui.models import DisplayBucket
from bucketstui.services.sorting import SortDirection
from bucketstui.ui.utils import format_label_names

SORT_ARROWS = {SortDirection.ASCENDING: "▲", SortDirection.DESCENDING: "▼"}


class BucketItem(ListItem):
    """Individual bucket row"""

    def __init__(self, bucket: DisplayBucket):
        super().__init__()
        self._bucket = bucket

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Label(self._bucket.name, classes="bucket-name")
            yield Label(self._bucket.rule_string, classes="bucket-retention")
            yield Label(format_label_names(self._bucket.labels), classes="bucket-labels")
            yield Label(self._bucket.region, classes="bucket-region")

    @property
    def bucket(self) -> DisplayBucket:
        return self._bucket


class ColumnHeader(Static):
    """Clickable header that requests sorting by its column."""

    def __init__(self, title: str, sort_key: str, **kwargs) -> None:
        super().__init__(title, **kwargs)
        self._title = title
        self.sort_key = sort_key

    def show_sort(self, sort_key: str, direction: SortDirection) -> None:
        if sort_key == self.sort_key:
            self.update(f"{self._title} {SORT_ARROWS[direction]}")
        else:
            self.update(self._title)

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(BucketList.ColumnClicked(self.sort_key))


class BucketList(Static):
    """Sortable list of display buckets"""

    BINDINGS = [
        Binding("s", "flip_sort", "Flip Sort"),
        Binding("e", "edit_bucket", "Edit"),
        Binding("delete", "delete_bucket", "Delete"),
        Binding("l", "filter_by_label", "Filter Label"),
    ]

    class ColumnClicked(Message):
        def __init__(self, sort_key: str) -> None:
            super().__init__()
            self.sort_key = sort_key

    class SortRequested(Message):
        """Sent when the user asks for a new sort order."""

        def __init__(self, sort_key: str, direction: SortDirection) -> None:
            super().__init__()
            self.sort_key = sort_key
            self.direction = direction

    class UpdateRequested(Message):
        def __init__(self, bucket: DisplayBucket) -> None:
            super().__init__()
            self.bucket = bucket

    class DeleteRequested(Message):
        def __init__(self, bucket: DisplayBucket) -> None:
            super().__init__()
            self.bucket = bucket

    class FilterRequested(Message):
        """Sent when the user narrows the list to a label."""

        def __init__(self, search_term: str) -> None:
            super().__init__()
            self.search_term = search_term

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.buckets: list[DisplayBucket] = []
        self.sort_key = "name"
        self.sort_direction = SortDirection.ASCENDING

    def compose(self) -> ComposeResult:
        with Vertical(id="bucket-list-container"):
            with Horizontal(id="bucket-list-header"):
                yield ColumnHeader("Name", "name", classes="bucket-name-header")
                yield ColumnHeader("Retention", "rule_string", classes="bucket-retention-header")
                yield Label("Labels", classes="bucket-labels-header")
                yield ColumnHeader("Region", "region", classes="bucket-region-header")
            yield ListView(id="bucket-list-view")

    def update_buckets(self, buckets: list[DisplayBucket], sort_key: str, direction: SortDirection) -> None:
        """Repopulate the rows and header arrows (called from the main thread)."""
        self.buckets = buckets
        self.sort_key = sort_key
        self.sort_direction = direction

        for header in self.query(ColumnHeader):
            header.show_sort(sort_key, direction)

        list_view = self.query_one("#bucket-list-view", ListView)
        index = list_view.index
        list_view.clear()
        for bucket in buckets:
            list_view.append(BucketItem(bucket))

        if buckets:
            list_view.index = min(index or 0, len(buckets) - 1)

    def get_focused_bucket(self) -> DisplayBucket | None:
        list_view = self.query_one("#bucket-list-view", ListView)
        if list_view.index is None or not self.buckets:
            return None
        if 0 <= list_view.index < len(self.buckets):
            return self.buckets[list_view.index]
        return None

    def focus_list_view(self) -> None:
        try:
            self.query_one("#bucket-list-view", ListView).focus()
        except Exception:
            self.focus()

    def on_bucket_list_column_clicked(self, message: ColumnClicked) -> None:
        message.stop()
        if message.sort_key == self.sort_key:
            direction = self.sort_direction.flipped()
        else:
            direction = SortDirection.ASCENDING
        self.post_message(self.SortRequested(message.sort_key, direction))

    def action_flip_sort(self) -> None:
        self.post_message(self.SortRequested(self.sort_key, self.sort_direction.flipped()))

    def action_edit_bucket(self) -> None:
        bucket = self.get_focused_bucket()
        if bucket is None:
            self.notify("No bucket selected", severity="error")
            return
        self.post_message(self.UpdateRequested(bucket))

    def action_delete_bucket(self) -> None:
        bucket = self.get_focused_bucket()
        if bucket is None:
            self.notify("No bucket selected for deletion", severity="error")
            return
        self.post_message(self.DeleteRequested(bucket))

    def action_filter_by_label(self) -> None:
        bucket = self.get_focused_bucket()
        if bucket is None or not bucket.labels:
            return
        self.post_message(self.FilterRequested(bucket.labels[0].name))
