"""Main Buckets TUI application."""

import threading
from typing import Callable

from loguru import logger
from textual.app import App
from textual.binding import Binding

from bucketstui.controllers.buckets_tab import BucketsTabController
from bucketstui.errors import ErrorBoundary
from bucketstui.gateways.s3 import S3
from bucketstui.services.bucket_actions import BucketActions
from bucketstui.store import BucketStore
from bucketstui.ui.screens.main_screen import MainScreen


class BucketsApp(App):
    """Buckets terminal UI application.

    This is the composition root: it owns the store, the actions that
    talk to S3 and the controller, which widgets only reach through an
    error boundary.
    """

    TITLE = "Buckets"
    CSS_PATH = "app.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        endpoint_url: str = None,
        region_name: str = None,
        profile_name: str = None,
        aws_access_key_id: str = None,
        aws_secret_access_key: str = None,
        aws_session_token: str = None,
        theme: str = "textual-dark",
        store: BucketStore = None,
        actions: BucketActions = None,
        **kwargs,
    ):
        """Initialize the app.

        Args:
            endpoint_url: Custom S3 endpoint URL for S3-compatible services.
            region_name: AWS region name for S3 operations.
            profile_name: AWS profile name for authentication.
            aws_access_key_id: AWS access key ID for authentication.
            aws_secret_access_key: AWS secret access key for authentication.
            aws_session_token: AWS session token for temporary credentials.
            theme: Name of a built-in Textual theme.
            store: Store to render; a new empty one by default.
            actions: Create/update/delete collaborator; S3-backed by default.
        """
        super().__init__(**kwargs)
        self.region_name = region_name
        self.profile_name = profile_name
        self.initial_theme = theme

        # Set the endpoint URL, region, profile, and credentials globally for the S3 class
        S3.set_endpoint_url(endpoint_url)
        S3.set_region_name(region_name)
        S3.set_profile_name(profile_name)
        S3.set_credentials(aws_access_key_id, aws_secret_access_key, aws_session_token)

        self._main_thread_id = threading.get_ident()
        self.store = store or BucketStore()
        self.actions = actions or BucketActions(self.store, notify=self.notify, dispatch=self.run_on_main)
        self.controller = ErrorBoundary(BucketsTabController(self.store, self.actions), report=self.report_error)

    def report_error(self, error: Exception) -> None:
        """Surface an error caught by the error boundary without crashing the UI."""
        self.run_on_main(lambda: self.notify(str(error), title="Error", severity="error"))

    def run_on_main(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on the app's thread, waiting for it when called from a worker."""
        if threading.get_ident() == self._main_thread_id:
            callback()
        else:
            self.call_from_thread(callback)

    def on_mount(self) -> None:
        """Called when app starts."""
        self._main_thread_id = threading.get_ident()
        self.theme = self.initial_theme
        logger.info("Buckets TUI started")
        self.push_screen(MainScreen(profile_name=self.profile_name))
