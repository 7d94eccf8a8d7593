"""Publish/subscribe plumbing for fetch state transitions."""

import logging
from collections.abc import Callable

from gridpager.paging.models import FetchState

logger = logging.getLogger(__name__)

StateListener = Callable[[FetchState], None]


class Subscription:
    """Handle returned by ``StateNotifier.subscribe``."""

    def __init__(self, notifier: "StateNotifier", listener: StateListener):
        self._notifier = notifier
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        """Whether the listener still receives notifications."""
        return self._active

    def cancel(self) -> None:
        """Stop receiving notifications. Safe to call more than once."""
        if self._active:
            self._active = False
            self._notifier._remove(self)


class StateNotifier:
    """Delivers fetch state transitions to subscribed listeners.

    Listeners run synchronously, in subscription order. A listener that
    raises is logged and skipped; the other listeners still run and the
    publisher never sees the exception.

    Example:
        >>> notifier = StateNotifier()
        >>> sub = notifier.subscribe(lambda state: print(state.phase))
        >>> notifier.publish(Idle())
        FetchPhase.IDLE
        >>> sub.cancel()
    """

    def __init__(self):
        self._subscriptions: list[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, listener: StateListener) -> Subscription:
        """Register a listener.

        Args:
            listener: Callable invoked with each published state

        Returns:
            Subscription handle used to unsubscribe
        """
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        return subscription

    def publish(self, state: FetchState) -> None:
        """Deliver a state to every active listener.

        Args:
            state: State to deliver
        """
        # Snapshot so listeners may unsubscribe while being notified
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription._listener(state)
            except Exception:
                logger.exception(f"State listener failed while handling {state.phase.value} state")

    def clear(self) -> None:
        """Cancel every subscription."""
        for subscription in list(self._subscriptions):
            subscription.cancel()

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass
