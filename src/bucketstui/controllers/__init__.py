from .buckets_tab import BucketsTabController, BucketsTabView, EmptyState
from .modal import ModalState, ModalStateMachine

__all__ = ["BucketsTabController", "BucketsTabView", "EmptyState", "ModalState", "ModalStateMachine"]
