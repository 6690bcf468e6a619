from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Button, Static

from bucketstui.controllers.buckets_tab import EmptyState

EMPTY_CREATE_BUTTON = "empty-create-btn"


class EmptyStateView(Static):
    """Shown in place of the bucket list when there are no rows."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.message = ""

    def compose(self) -> ComposeResult:
        with Vertical(id="empty-state-container"):
            yield Static("", id="empty-state-text")
            yield Button("Create Bucket", variant="primary", id=EMPTY_CREATE_BUTTON)

    def show(self, empty_state: EmptyState) -> None:
        self.show_message(empty_state.message, offers_create=empty_state.offers_create)

    def show_message(self, message: str, offers_create: bool = False) -> None:
        self.message = message
        self.query_one("#empty-state-text", Static).update(message)
        self.query_one(f"#{EMPTY_CREATE_BUTTON}", Button).display = offers_create
