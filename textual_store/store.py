"""Store - holds one state value, runs the reducer and notifies subscribers."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from .types import Reducer, Subscriber, Unsubscribe
from .validation import action_type, validate_action

logger = logging.getLogger(__name__)

T = TypeVar("T")
A = TypeVar("A")

# Reserved action type, never handled by application reducers.
INIT = "@@textual_store/INIT"


class _Subscription:
    """One registration of a subscriber callback."""

    __slots__ = ("handler",)

    def __init__(self, handler: Subscriber) -> None:
        self.handler = handler


class Store(Generic[T, A]):
    """
    A single-writer state container driven by a reducer.

    The store owns the current state and the list of subscribers. Every
    dispatch replaces the state with ``reducer(state, action)`` and then
    calls each subscriber with no arguments; subscribers read the new state
    back with ``get_state()``.

    Usage:
        ```python
        store = create_store(notes_reducer, name="notes")

        def render() -> None:
            print(store.get_state())

        unsubscribe = store.subscribe(render)
        store.dispatch({"type": "CREATE_NOTE"})
        unsubscribe()
        ```
    """

    __slots__ = ("_reducer", "_state", "_subscribers", "_name")

    def __init__(
        self,
        reducer: Reducer[T, A],
        *,
        name: str | None = None,
    ) -> None:
        self._reducer = reducer
        self._state: T | None = None
        self._subscribers: list[_Subscription] = []
        self._name = name

        self.dispatch({"type": INIT})  # type: ignore[arg-type]

    @property
    def name(self) -> str | None:
        """Get store name."""
        return self._name

    @property
    def state(self) -> T:
        """Get the current state (alias for get_state)."""
        return self.get_state()

    def get_state(self) -> T:
        """Get the current state."""
        return self._state  # type: ignore[return-value]

    def dispatch(self, action: A) -> None:
        """
        Run an action through the reducer and notify every subscriber.

        Subscribers run synchronously, in registration order, after the new
        state is in place. A subscriber may dispatch again; the nested
        dispatch finishes its own notifications before this one continues.

        Args:
            action: A mapping with a ``"type"`` key or an object with a
                ``type`` attribute.

        Raises:
            InvalidActionError: If the action is malformed. Nothing changes
                and no subscriber runs.
        """
        validate_action(action)
        logger.debug(
            "dispatch %s on store %s", action_type(action), self._name or "unnamed"
        )

        self._state = self._reducer(self._state, action)

        for subscription in list(self._subscribers):
            subscription.handler()

    def subscribe(self, handler: Subscriber) -> Unsubscribe:
        """
        Register a callback to run after every dispatch.

        Each dispatch notifies the subscribers registered when its
        notification starts. A callback added during a notification first
        runs on the next dispatch; a callback removed during a notification
        by another subscriber still runs for that dispatch.

        Args:
            handler: A callable taking no arguments.

        Returns:
            A function removing this registration. Calling it more than
            once does nothing.

        Raises:
            TypeError: If ``handler`` is not callable.
        """
        if not callable(handler):
            raise TypeError(f"Expected a callable subscriber, got {handler!r}")

        subscription = _Subscription(handler)
        self._subscribers.append(subscription)
        logger.debug(
            "subscriber added to store %s (%d total)",
            self._name or "unnamed",
            len(self._subscribers),
        )

        def unsubscribe() -> None:
            try:
                self._subscribers.remove(subscription)
            except ValueError:
                return
            logger.debug(
                "subscriber removed from store %s (%d left)",
                self._name or "unnamed",
                len(self._subscribers),
            )

        return unsubscribe

    def __repr__(self) -> str:
        name = f" name={self._name!r}" if self._name else ""
        return f"Store({self._state!r}{name})"


def create_store(
    reducer: Reducer[T, A] | Callable[[Any, Any], T],
    *,
    name: str | None = None,
) -> Store[T, A]:
    """
    Create a new store.

    The reducer is called once straight away with ``None`` and the reserved
    ``INIT`` action, so it can return its initial state.

    Args:
        reducer: Function (state, action) -> new_state.
        name: Optional name for debugging.

    Returns:
        A Store instance.

    Example:
        ```python
        def reducer(state: int | None, action) -> int:
            if state is None:
                state = 0
            match action:
                case {"type": "INCREMENT"}:
                    return state + 1
            return state

        store = create_store(reducer)
        store.dispatch({"type": "INCREMENT"})
        assert store.get_state() == 1
        ```
    """
    store: Store[T, A] = Store(reducer, name=name)
    logger.debug("created store %s", name or "unnamed")
    return store
