from enum import Enum


class ModalState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class ModalStateMachine:
    """Visibility of the create-bucket modal.

    Any state may move to either state; opening an open modal is a no-op.
    """

    def __init__(self) -> None:
        self.state = ModalState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state is ModalState.OPEN

    def open(self) -> None:
        self.state = ModalState.OPEN

    def close(self) -> None:
        self.state = ModalState.CLOSED
