from textual import work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import DescendantBlur
from textual.reactive import reactive
from textual.widgets import Button, Input, LoadingIndicator, Static

from bucketstui.controllers.buckets_tab import BucketsTabView
from bucketstui.models import Bucket, DisplayBucket, Organization
from bucketstui.ui.modals.create_bucket_modal import CreateBucketModal
from bucketstui.ui.modals.delete_modal import DeleteModal
from bucketstui.ui.modals.update_bucket_modal import UpdateBucketModal
from bucketstui.ui.widgets.bucket_list import BucketList
from bucketstui.ui.widgets.empty_state import EMPTY_CREATE_BUTTON, EmptyStateView
from bucketstui.ui.widgets.title_bar import TitleBar

FILTER_INPUT = "filter-input"
CREATE_BUTTON = "create-bucket-btn"
LOAD_FAILED_MESSAGE = "Could not load buckets. Press 'r' to retry."


class BucketsTab(Static):
    """Filter input, create button and the bucket list.

    All state lives in the app's controller; this widget forwards user
    intents to it and re-renders from ``controller.view()``.
    """

    is_loading: bool = reactive(False)

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._create_modal: CreateBucketModal | None = None
        self._unsubscribe = None
        self._load_failed = False

    @property
    def controller(self):
        return self.app.controller

    def compose(self) -> ComposeResult:
        with Vertical(id="buckets-tab-container"):
            with Horizontal(id="buckets-tab-header"):
                yield Input(placeholder="Filter buckets...", id=FILTER_INPUT)
                yield Button("+ Create Bucket", variant="primary", id=CREATE_BUTTON)
            yield LoadingIndicator(id="bucket-loading")
            yield BucketList(id="bucket-list")
            yield EmptyStateView(id="empty-state")

    def on_mount(self) -> None:
        self._unsubscribe = self.app.store.subscribe(lambda _snapshot: self.refresh_view())
        # Load buckets after UI is ready
        self.call_later(self.load_buckets)

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()

    # -------------------------Loading------------------------- #

    def watch_is_loading(self, is_loading: bool) -> None:
        """React to loading state changes."""
        try:
            self.query_one("#bucket-loading", LoadingIndicator).display = is_loading
            if is_loading:
                self.query_one("#bucket-list", BucketList).display = False
                self.query_one("#empty-state", EmptyStateView).display = False
        except Exception:
            # Widgets not ready yet
            pass

    def load_buckets(self) -> None:
        """Load buckets from S3 with loading indicator."""
        self.is_loading = True
        self._load_buckets_async()

    @work(thread=True, exclusive=True, group="load-buckets")
    def _load_buckets_async(self) -> None:
        try:
            org, buckets = self.app.actions.load()
        except Exception as e:
            error = e
            self.app.call_from_thread(self._on_buckets_error, error)
            return
        self.app.call_from_thread(self._on_buckets_loaded, org, buckets)

    def _on_buckets_loaded(self, org: Organization, buckets: list[Bucket]) -> None:
        self.is_loading = False
        self._set_connection_error(False)
        self.app.store.set_org(org)
        self.app.store.set_buckets(buckets)

    def _on_buckets_error(self, error: Exception) -> None:
        self.notify(f"Error loading buckets: {error}", severity="error")
        self.is_loading = False
        self._set_connection_error(True)
        self.refresh_view()

    def _set_connection_error(self, connection_error: bool) -> None:
        self._load_failed = connection_error
        try:
            title_bar = self.screen.query_one(TitleBar)
            title_bar.connection_error = connection_error
        except Exception:
            # Title bar not found or not ready
            pass

    # -------------------------Rendering------------------------- #

    def refresh_view(self) -> None:
        """Render the controller's current view."""
        view = self.controller.view()
        if view is None or self.is_loading:
            return

        filter_input = self.query_one(f"#{FILTER_INPUT}", Input)
        if filter_input.value != view.search_term:
            with filter_input.prevent(Input.Changed):
                filter_input.value = view.search_term

        bucket_list = self.query_one("#bucket-list", BucketList)
        bucket_list.update_buckets(view.buckets, view.sort_key, view.sort_direction)
        bucket_list.display = bool(view.buckets)

        empty_state = self.query_one("#empty-state", EmptyStateView)
        empty_state.display = not view.buckets
        if self._load_failed and not view.total_count:
            empty_state.show_message(LOAD_FAILED_MESSAGE)
        elif not view.buckets:
            empty_state.show(view.empty_state)

        try:
            title_bar = self.screen.query_one(TitleBar)
            title_bar.org_name = view.org.name if view.org else ""
        except Exception:
            pass

        self._sync_modal(view)

    def _sync_modal(self, view: BucketsTabView) -> None:
        """Push or dismiss the create modal to match the controller's modal state."""
        if view.modal_open and self._create_modal is None:
            self._create_modal = CreateBucketModal(
                view.org,
                on_create=self._handle_create,
                on_close=self._handle_close,
                default_region=getattr(self.app, "region_name", None) or "",
            )
            self.app.push_screen(self._create_modal)
        elif not view.modal_open and self._create_modal is not None:
            modal, self._create_modal = self._create_modal, None
            if modal.is_current:
                modal.dismiss()

    # -------------------------Search------------------------- #

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == FILTER_INPUT:
            self.controller.handle_filter_change(event.value)
            self.refresh_view()

    def on_descendant_blur(self, event: DescendantBlur) -> None:
        if getattr(event.widget, "id", None) == FILTER_INPUT:
            self.controller.handle_filter_blur(event.widget.value)
            self.refresh_view()

    def on_bucket_list_filter_requested(self, message: BucketList.FilterRequested) -> None:
        self.controller.set_search_term(message.search_term)
        self.refresh_view()

    # -------------------------Sort------------------------- #

    def on_bucket_list_sort_requested(self, message: BucketList.SortRequested) -> None:
        self.controller.handle_click_column(message.direction, message.sort_key)
        self.refresh_view()

    # -------------------------Create------------------------- #

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id in (CREATE_BUTTON, EMPTY_CREATE_BUTTON):
            self.open_create_modal()

    def open_create_modal(self) -> None:
        self.controller.request_create()
        self.refresh_view()

    def _handle_create(self, bucket: Bucket) -> None:
        # Owned by the tab so that closing the modal does not cancel the create.
        # Not exclusive: an exclusive worker would cancel a create that is still running
        self.run_worker(self._create_bucket(bucket), group="create-bucket")

    async def _create_bucket(self, bucket: Bucket) -> None:
        await self.controller.submit_create(bucket)
        self.refresh_view()

    def _handle_close(self) -> None:
        self.controller.request_close()
        self.refresh_view()

    # -------------------------Update / Delete------------------------- #

    def on_bucket_list_update_requested(self, message: BucketList.UpdateRequested) -> None:
        def on_update_result(result: DisplayBucket | None) -> None:
            if result is not None:
                self._submit_update(result)
            self.call_later(self.focus_list)

        self.app.push_screen(UpdateBucketModal(message.bucket), on_update_result)

    def on_bucket_list_delete_requested(self, message: BucketList.DeleteRequested) -> None:
        bucket = message.bucket

        def on_delete_result(result: bool) -> None:
            if result:
                self._submit_delete(bucket)
            self.call_later(self.focus_list)

        self.app.push_screen(DeleteModal(bucket.name), on_delete_result)

    @work(thread=True, group="bucket-changes")
    def _submit_update(self, bucket: DisplayBucket) -> None:
        self.controller.submit_update(bucket)

    @work(thread=True, group="bucket-changes")
    def _submit_delete(self, bucket: DisplayBucket) -> None:
        self.controller.submit_delete(bucket)

    def focus_list(self) -> None:
        self.query_one("#bucket-list", BucketList).focus_list_view()
