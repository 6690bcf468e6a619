"""Modal for creating a bucket."""

from typing import Callable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from bucketstui.models import Bucket, Organization
from bucketstui.ui.utils import parse_labels, parse_retention_days


# UI Element IDs
class CreateBucketModalIDs:
    """Constants for UI element IDs."""

    CREATE_MODAL = "create-bucket-modal"
    MODAL_TITLE = "modal-title"
    FORM_CONTAINER = "form-container"
    NAME_INPUT = "name-input"
    RETENTION_INPUT = "retention-input"
    LABELS_INPUT = "labels-input"
    REGION_INPUT = "region-input"
    BUTTON_CONTAINER = "button-container"
    CREATE_BUTTON = "create-btn"
    CANCEL_BUTTON = "cancel-btn"


class CreateBucketModal(ModalScreen):
    """Form for a new bucket.

    The modal does not dismiss itself: it hands the bucket to ``on_create``
    and closing is driven by whoever owns the modal state.
    """

    BINDINGS = [
        Binding("escape", "close", "Cancel"),
    ]

    def __init__(
        self,
        org: Optional[Organization],
        on_create: Callable[[Bucket], None],
        on_close: Callable[[], None],
        default_region: str = "",
    ) -> None:
        """Initialize the create modal.

        Args:
            org: Organization the bucket will belong to
            on_create: Called with the new bucket; it must return without waiting on S3
            on_close: Called when the user cancels
            default_region: Prefilled region
        """
        super().__init__()
        self.org = org
        self._on_create = on_create
        self._on_close = on_close
        self.default_region = default_region

    def compose(self) -> ComposeResult:
        """Create the layout for the create modal."""
        with Vertical(id=CreateBucketModalIDs.CREATE_MODAL):
            yield Static("Create Bucket", id=CreateBucketModalIDs.MODAL_TITLE)

            with Vertical(id=CreateBucketModalIDs.FORM_CONTAINER):
                yield Label("Name:")
                yield Input(placeholder="Give your bucket a name", id=CreateBucketModalIDs.NAME_INPUT)

                yield Label("Delete data older than (days):")
                yield Input(
                    placeholder="Leave empty to keep data forever",
                    type="integer",
                    id=CreateBucketModalIDs.RETENTION_INPUT,
                )

                yield Label("Labels:")
                yield Input(placeholder="key=value, key=value", id=CreateBucketModalIDs.LABELS_INPUT)

                yield Label("Region:")
                yield Input(
                    value=self.default_region,
                    placeholder="Default region",
                    id=CreateBucketModalIDs.REGION_INPUT,
                )

            with Horizontal(id=CreateBucketModalIDs.BUTTON_CONTAINER):
                yield Button("Create", variant="primary", id=CreateBucketModalIDs.CREATE_BUTTON)
                yield Button("Cancel", variant="default", id=CreateBucketModalIDs.CANCEL_BUTTON)

    def action_close(self) -> None:
        self._on_close()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == CreateBucketModalIDs.CANCEL_BUTTON:
            self.action_close()
        elif event.button.id == CreateBucketModalIDs.CREATE_BUTTON:
            self._validate_and_create()

    def _input_value(self, input_id: str) -> str:
        return self.query_one(f"#{input_id}", Input).value.strip()

    def build_bucket(self) -> Bucket:
        """Build a bucket from the form.

        Raises:
            ValueError: if a field is invalid
        """
        name = self._input_value(CreateBucketModalIDs.NAME_INPUT)
        if not name:
            raise ValueError("Please enter a bucket name")

        return Bucket(
            id="",
            name=name,
            org_id=self.org.id if self.org else "",
            retention_rules=parse_retention_days(self._input_value(CreateBucketModalIDs.RETENTION_INPUT)),
            labels=parse_labels(self._input_value(CreateBucketModalIDs.LABELS_INPUT)),
            region=self._input_value(CreateBucketModalIDs.REGION_INPUT),
        )

    def _validate_and_create(self) -> None:
        """Validate input and hand the bucket over if valid."""
        try:
            bucket = self.build_bucket()
        except ValueError as e:
            self.notify(str(e), severity="error")
            return

        self._on_create(bucket)
