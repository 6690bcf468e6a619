"""Delete modal for confirming bucket deletion."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static


# UI Element IDs
class DeleteModalIDs:
    """Constants for UI element IDs."""

    DELETE_MODAL = "delete-modal"
    MODAL_TITLE = "modal-title"
    FORM_CONTAINER = "form-container"
    BUCKET_NAME = "bucket-name"
    BUTTON_CONTAINER = "button-container"
    DELETE_BUTTON = "delete-btn"
    CANCEL_BUTTON = "cancel-btn"


class DeleteModal(ModalScreen[bool]):
    """Modal screen confirming the deletion of a bucket."""

    BINDINGS = [
        Binding("escape", "dismiss", "Cancel"),
    ]

    def __init__(self, bucket_name: str) -> None:
        """Initialize the delete modal.

        Args:
            bucket_name: Name of the bucket to delete
        """
        super().__init__()
        self.bucket_name = bucket_name

    def compose(self) -> ComposeResult:
        """Create the layout for the delete modal."""
        with Vertical(id=DeleteModalIDs.DELETE_MODAL):
            yield Static("Confirm Deletion", id=DeleteModalIDs.MODAL_TITLE)

            with Vertical(id=DeleteModalIDs.FORM_CONTAINER):
                yield Label("Are you sure you want to permanently delete this bucket and its data?")
                yield Static(self.bucket_name, id=DeleteModalIDs.BUCKET_NAME)

            with Horizontal(id=DeleteModalIDs.BUTTON_CONTAINER):
                yield Button("Delete", variant="error", id=DeleteModalIDs.DELETE_BUTTON)
                yield Button("Cancel", variant="default", id=DeleteModalIDs.CANCEL_BUTTON)

    def action_dismiss(self) -> None:
        """Dismiss the modal."""
        self.dismiss(False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == DeleteModalIDs.CANCEL_BUTTON:
            self.action_dismiss()
        elif event.button.id == DeleteModalIDs.DELETE_BUTTON:
            self.dismiss(True)
