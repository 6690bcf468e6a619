"""Modal for editing a bucket's retention and labels."""

from dataclasses import replace

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from bucketstui.models import DisplayBucket
from bucketstui.ui.utils import format_labels, format_retention_days, parse_labels, parse_retention_days


class UpdateBucketModalIDs:
    UPDATE_MODAL = "update-bucket-modal"
    MODAL_TITLE = "modal-title"
    FORM_CONTAINER = "form-container"
    BUCKET_NAME = "bucket-name"
    RETENTION_INPUT = "retention-input"
    LABELS_INPUT = "labels-input"
    BUTTON_CONTAINER = "button-container"
    SAVE_BUTTON = "save-btn"
    CANCEL_BUTTON = "cancel-btn"


class UpdateBucketModal(ModalScreen[DisplayBucket | None]):
    """Edit form; dismisses with the edited bucket, or ``None`` when cancelled."""

    BINDINGS = [
        Binding("escape", "dismiss", "Cancel"),
    ]

    def __init__(self, bucket: DisplayBucket) -> None:
        super().__init__()
        self.bucket = bucket

    def compose(self) -> ComposeResult:
        with Vertical(id=UpdateBucketModalIDs.UPDATE_MODAL):
            yield Static("Edit Bucket", id=UpdateBucketModalIDs.MODAL_TITLE)

            with Vertical(id=UpdateBucketModalIDs.FORM_CONTAINER):
                yield Label("Name:")
                yield Static(self.bucket.name, id=UpdateBucketModalIDs.BUCKET_NAME)

                yield Label("Delete data older than (days):")
                yield Input(
                    value=format_retention_days(self.bucket),
                    placeholder="Leave empty to keep data forever",
                    type="integer",
                    id=UpdateBucketModalIDs.RETENTION_INPUT,
                )

                yield Label("Labels:")
                yield Input(
                    value=format_labels(self.bucket.labels),
                    placeholder="key=value, key=value",
                    id=UpdateBucketModalIDs.LABELS_INPUT,
                )

            with Horizontal(id=UpdateBucketModalIDs.BUTTON_CONTAINER):
                yield Button("Save", variant="primary", id=UpdateBucketModalIDs.SAVE_BUTTON)
                yield Button("Cancel", variant="default", id=UpdateBucketModalIDs.CANCEL_BUTTON)

    def action_dismiss(self) -> None:
        self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == UpdateBucketModalIDs.CANCEL_BUTTON:
            self.action_dismiss()
        elif event.button.id == UpdateBucketModalIDs.SAVE_BUTTON:
            self._validate_and_save()

    def _validate_and_save(self) -> None:
        retention = self.query_one(f"#{UpdateBucketModalIDs.RETENTION_INPUT}", Input).value
        labels = self.query_one(f"#{UpdateBucketModalIDs.LABELS_INPUT}", Input).value
        try:
            updated = replace(
                self.bucket,
                retention_rules=parse_retention_days(retention),
                labels=parse_labels(labels),
            )
        except ValueError as e:
            self.notify(str(e), severity="error")
            return

        self.dismiss(updated)
