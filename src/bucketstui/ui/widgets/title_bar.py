from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Static


class TitleBar(Static):
    """Title bar with the organization name and a connection indicator."""

    org_name: str = reactive("")
    connection_error: bool = reactive(False)

    def __init__(self, profile_name: str = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._profile_name = profile_name or "default"

    def compose(self) -> ComposeResult:
        with Horizontal(id="title-bar-container"):
            yield Static("Buckets", id="title")
            with Horizontal(id="status-container"):
                yield Static("●", id="connected-indicator")
                yield Static("org: -", id="org-info")
                yield Static(f"aws-profile: {self._profile_name}", id="aws-info")

    def watch_org_name(self, org_name: str) -> None:
        try:
            self.query_one("#org-info", Static).update(f"org: {org_name or '-'}")
        except Exception:
            # Not composed yet
            pass

    def watch_connection_error(self, connection_error: bool) -> None:
        try:
            indicator = self.query_one("#connected-indicator", Static)
            indicator.set_class(connection_error, "error")
        except Exception:
            pass
