"""State and intent handling for the buckets tab.

The controller owns the search, sort and modal state. Bucket data is read
from the injected store on every render, projected into display buckets,
filtered and sorted. Changes to buckets go through the injected actions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol

from loguru import logger

from bucketstui.controllers.modal import ModalState, ModalStateMachine
from bucketstui.errors import CreateInProgressError
from bucketstui.models import Bucket, DisplayBucket, Organization
from bucketstui.services.filtering import filter_list
from bucketstui.services.projection import pretty_buckets
from bucketstui.services.sorting import SortDirection, SortType, sort_list
from bucketstui.store import BucketStore

SEARCH_KEYS = ("name", "rule_string", "labels[].name")
DEFAULT_SORT_KEY = "name"


class BucketActionsProtocol(Protocol):
    create_bucket: Callable[[Bucket], Awaitable[None]]
    update_bucket: Callable[[Bucket], None]
    delete_bucket: Callable[[str, str], None]


class EmptyState(Enum):
    """What to show when the list has no rows."""

    CREATE_ONE = ("Looks like there aren't any Buckets, why not create one?", True)
    NO_MATCH = ("No Buckets match your query", False)

    def __init__(self, message: str, offers_create: bool) -> None:
        self.message = message
        self.offers_create = offers_create


@dataclass(frozen=True)
class BucketsTabView:
    """Everything the buckets tab needs to render one frame."""

    org: Optional[Organization]
    buckets: list[DisplayBucket]
    total_count: int
    search_term: str
    sort_key: str
    sort_direction: SortDirection
    sort_type: SortType
    modal_open: bool
    empty_state: EmptyState


class BucketsTabController:
    def __init__(self, store: BucketStore, actions: BucketActionsProtocol) -> None:
        self.store = store
        self.actions = actions

        self.search_term = ""
        self.sort_key = DEFAULT_SORT_KEY
        self.sort_direction = SortDirection.ASCENDING
        self.sort_type = SortType.STRING
        self.modal = ModalStateMachine()
        self._create_pending = False

    # -------------------------Search------------------------- #

    def set_search_term(self, search_term: str) -> None:
        self.search_term = search_term

    def handle_filter_change(self, search_term: str) -> None:
        """Live update while the user types."""
        self.set_search_term(search_term)

    def handle_filter_blur(self, search_term: str) -> None:
        """Commit the filter input's value when it loses focus."""
        self.set_search_term(search_term)

    # -------------------------Sort------------------------- #

    def set_sort(self, sort_key: str, sort_direction: SortDirection) -> None:
        # Every column currently sorts as a string
        self.sort_key = sort_key
        self.sort_direction = SortDirection(sort_direction)
        self.sort_type = SortType.STRING

    def handle_click_column(self, next_sort: SortDirection, sort_key: str) -> None:
        self.set_sort(sort_key, next_sort)

    # -------------------------Modal------------------------- #

    @property
    def modal_state(self) -> ModalState:
        return self.modal.state

    @property
    def create_pending(self) -> bool:
        return self._create_pending

    def request_create(self) -> None:
        self.modal.open()

    def request_close(self) -> None:
        self.modal.close()

    # -------------------------CRUD------------------------- #

    async def submit_create(self, bucket: Bucket) -> None:
        """Create ``bucket`` and close the modal once the create succeeds.

        Failures from the create propagate and leave the modal open.

        Raises:
            CreateInProgressError: if a previous create has not finished yet
        """
        if self._create_pending:
            logger.warning(f"Ignoring create of '{bucket.name}' while another create is pending")
            raise CreateInProgressError(f"A bucket is already being created, '{bucket.name}' was not submitted")

        self._create_pending = True
        try:
            await self.actions.create_bucket(bucket)
        finally:
            self._create_pending = False

        self.request_close()

    def submit_update(self, display_bucket: DisplayBucket) -> None:
        self.actions.update_bucket(display_bucket.to_bucket())

    def submit_delete(self, display_bucket: DisplayBucket) -> None:
        self.actions.delete_bucket(display_bucket.id, display_bucket.name)

    # -------------------------View------------------------- #

    def empty_state_view(self) -> EmptyState:
        if not self.search_term:
            return EmptyState.CREATE_ONE
        return EmptyState.NO_MATCH

    def display_buckets(self, buckets: Optional[list[Bucket]] = None) -> list[DisplayBucket]:
        """Project, filter and sort ``buckets`` (the store's buckets by default)."""
        if buckets is None:
            buckets = self.store.snapshot().buckets

        filtered = filter_list(self.search_term, SEARCH_KEYS, pretty_buckets(buckets))
        return sort_list(filtered, self.sort_key, self.sort_direction, self.sort_type)

    def view(self) -> BucketsTabView:
        snapshot = self.store.snapshot()
        return BucketsTabView(
            org=snapshot.org,
            buckets=self.display_buckets(list(snapshot.buckets)),
            total_count=len(snapshot.buckets),
            search_term=self.search_term,
            sort_key=self.sort_key,
            sort_direction=self.sort_direction,
            sort_type=self.sort_type,
            modal_open=self.modal.is_open,
            empty_state=self.empty_state_view(),
        )
