"""Paging module for coordinating asynchronous page fetches."""

from gridpager.paging.coordinator import FetchCoordinator
from gridpager.paging.models import (
    Failed,
    FetchPhase,
    FetchState,
    Idle,
    Loaded,
    Loading,
    PageRequest,
    PageResult,
)
from gridpager.paging.notifier import StateNotifier, Subscription
from gridpager.paging.page_math import clamp_page_index, compute_page_range, page_count
from gridpager.paging.pager import Pager
from gridpager.paging.source import InMemoryPageSource, PageSource

__all__ = [
    "Failed",
    "FetchCoordinator",
    "FetchPhase",
    "FetchState",
    "Idle",
    "InMemoryPageSource",
    "Loaded",
    "Loading",
    "PageRequest",
    "PageResult",
    "PageSource",
    "Pager",
    "StateNotifier",
    "Subscription",
    "clamp_page_index",
    "compute_page_range",
    "page_count",
]
