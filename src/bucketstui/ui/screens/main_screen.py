from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Footer, Input

from bucketstui.ui.widgets.bucket_list import BucketList
from bucketstui.ui.widgets.buckets_tab import FILTER_INPUT, BucketsTab
from bucketstui.ui.widgets.title_bar import TitleBar


class MainScreen(Screen):
    """Main screen displaying the organization's buckets."""

    BINDINGS = [
        Binding("q", "app.quit", "Quit"),
        Binding("c", "create_bucket", "Create"),
        Binding("slash", "focus_filter", "Filter"),
        Binding("r", "refresh", "Refresh"),
        Binding("h", "help", "Help", show=False),
    ]

    def __init__(self, profile_name: str = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.profile_name = profile_name

    def compose(self) -> ComposeResult:
        """Create the layout for the main screen."""
        with Container(id="main-container"):
            yield TitleBar(profile_name=self.profile_name, id="title-bar")
            with Container(id="content-container"):
                yield BucketsTab(id="buckets-tab")

            yield Footer(id="main-footer", show_command_palette=False)

    def on_mount(self) -> None:
        """Set initial focus to the bucket list."""
        self.query_one("#bucket-list", BucketList).focus_list_view()

    def action_create_bucket(self) -> None:
        self.query_one("#buckets-tab", BucketsTab).open_create_modal()

    def action_focus_filter(self) -> None:
        self.query_one(f"#{FILTER_INPUT}", Input).focus()

    def action_refresh(self) -> None:
        """Reload buckets from S3."""
        self.query_one("#buckets-tab", BucketsTab).load_buckets()

    def action_help(self) -> None:
        self.notify(
            "Help: 'c' create, 'e' edit, 'delete' delete, '/' filter, 's' flip sort, "
            "'l' filter by label, 'r' refresh, 'q' quit.",
            severity="information",
        )
