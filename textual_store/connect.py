"""Connect - derive a consumer's props from a store and keep them current."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Generic, TypeVar

from .store import Store
from .types import (
    Consumer,
    DispatchFunc,
    DispatchProjector,
    Props,
    StateProjector,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
A = TypeVar("A")


class BridgeLifecycleError(RuntimeError):
    """Raised when a bridge is mounted twice or after it was unmounted."""

    def __init__(self, bridge: Bridge[Any, Any], operation: str) -> None:
        self.bridge = bridge
        self.operation = operation
        super().__init__(
            f"Cannot {operation} a bridge in state {bridge.status.value!r}. "
            f"Create a fresh bridge from the connector instead."
        )


class BridgeStatus(Enum):
    """Lifecycle of a bridge: UNMOUNTED -> MOUNTED -> DISPOSED."""

    UNMOUNTED = "unmounted"
    MOUNTED = "mounted"
    DISPOSED = "disposed"


def _no_state_props(state: Any) -> Props:
    return {}


def _dispatch_prop(dispatch: DispatchFunc[Any]) -> Props:
    return {"dispatch": dispatch}


def _project(projector: Callable[[Any], Any], value: Any, label: str) -> Props:
    props = projector(value)
    if not isinstance(props, Mapping):
        raise TypeError(
            f"{label} must return a mapping of props, got {type(props).__name__}"
        )
    return props


class Bridge(Generic[T, A]):
    """
    Keeps one consumer rendered with props derived from a store.

    Props are merged as ``{**state_props, **dispatch_props, **own_props}``.
    State props are recomputed on every store notification and every own
    props change; dispatch props are computed once at mount time.

    A bridge is mounted once and unmounted once. Unmounting releases the
    store subscription; to mount again, ask the connector for a new bridge.
    """

    __slots__ = (
        "_store",
        "_consumer",
        "_project_state",
        "_project_dispatch",
        "_own_props",
        "_dispatch_props",
        "_props",
        "_unsubscribe",
        "_status",
    )

    def __init__(
        self,
        store: Store[T, A],
        consumer: Consumer,
        project_state: StateProjector,
        project_dispatch: DispatchProjector,
        own_props: Props | None = None,
    ) -> None:
        self._store = store
        self._consumer = consumer
        self._project_state = project_state
        self._project_dispatch = project_dispatch
        self._own_props: dict[str, Any] = dict(own_props or {})
        self._dispatch_props: Props = {}
        self._props: Props = MappingProxyType({})
        self._unsubscribe: Unsubscribe | None = None
        self._status = BridgeStatus.UNMOUNTED

    @property
    def store(self) -> Store[T, A]:
        """Get the store this bridge reads from."""
        return self._store

    @property
    def status(self) -> BridgeStatus:
        """Get the lifecycle status."""
        return self._status

    @property
    def props(self) -> Props:
        """Get the last computed props."""
        return self._props

    @property
    def own_props(self) -> Props:
        """Get the externally supplied props."""
        return MappingProxyType(self._own_props)

    def mount(self) -> None:
        """
        Compute the initial props, subscribe to the store and render.

        If the first render raises, the bridge unsubscribes, ends up
        DISPOSED and the error propagates.

        Raises:
            BridgeLifecycleError: If the bridge is already mounted or was
                unmounted before.
        """
        if self._status is not BridgeStatus.UNMOUNTED:
            raise BridgeLifecycleError(self, "mount")

        self._dispatch_props = _project(
            self._project_dispatch, self._store.dispatch, "project_dispatch"
        )
        self._status = BridgeStatus.MOUNTED
        self._unsubscribe = self._store.subscribe(self._on_store_change)
        try:
            self._render()
        except Exception:
            # A bridge that failed its first render must not stay subscribed.
            self.unmount()
            raise
        logger.debug("bridge mounted for %r", self._consumer)

    def unmount(self) -> None:
        """Unsubscribe from the store. Does nothing unless mounted."""
        if self._status is not BridgeStatus.MOUNTED:
            return

        self._status = BridgeStatus.DISPOSED
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        logger.debug("bridge unmounted for %r", self._consumer)

    def set_own_props(self, **own_props: Any) -> None:
        """Update some own props and re-render straight away."""
        self._own_props.update(own_props)
        self._on_own_props_change()

    def replace_own_props(self, own_props: Props) -> None:
        """Replace all own props and re-render straight away."""
        self._own_props = dict(own_props)
        self._on_own_props_change()

    def _on_own_props_change(self) -> None:
        if self._status is BridgeStatus.MOUNTED:
            self._render()

    def _on_store_change(self) -> None:
        # A subscriber earlier in the same notification may have unmounted us.
        if self._status is BridgeStatus.MOUNTED:
            self._render()

    def _render(self) -> None:
        state_props = _project(
            self._project_state, self._store.get_state(), "project_state"
        )
        self._props = MappingProxyType(
            {**state_props, **self._dispatch_props, **self._own_props}
        )
        self._consumer(self._props)

    def __repr__(self) -> str:
        return f"Bridge({self._consumer!r} status={self._status.value!r})"


class Connector(Generic[T, A]):
    """
    A consumer paired with its projections.

    Call it with a store (and own props) to get a bridge for one mount of
    the consumer.
    """

    __slots__ = ("_consumer", "_project_state", "_project_dispatch")

    def __init__(
        self,
        consumer: Consumer,
        project_state: StateProjector,
        project_dispatch: DispatchProjector,
    ) -> None:
        self._consumer = consumer
        self._project_state = project_state
        self._project_dispatch = project_dispatch

    @property
    def consumer(self) -> Consumer:
        """Get the wrapped consumer."""
        return self._consumer

    def __call__(self, store: Store[T, A], **own_props: Any) -> Bridge[T, A]:
        return Bridge(
            store,
            self._consumer,
            self._project_state,
            self._project_dispatch,
            own_props,
        )


def connect(
    project_state: StateProjector | None = None,
    project_dispatch: DispatchProjector | None = None,
) -> Callable[[Consumer], Connector[Any, Any]]:
    """
    Bind a consumer to store-derived props.

    Args:
        project_state: Function state -> props. Defaults to no props.
        project_dispatch: Function dispatch -> props. Defaults to
            ``{"dispatch": dispatch}``.

    Returns:
        A function wrapping a consumer (a callable receiving the props)
        into a Connector.

    Example:
        ```python
        def note_list(props):
            print(sorted(props["notes"]))

        NoteList = connect(
            lambda state: {"notes": state.notes},
            lambda dispatch: {"on_open": lambda i: dispatch(open_note(i))},
        )(note_list)

        bridge = NoteList(store, title="All notes")
        bridge.mount()    # renders, then re-renders on every dispatch
        bridge.unmount()  # stops listening
        ```
    """
    state_projector = project_state or _no_state_props
    dispatch_projector = project_dispatch or _dispatch_prop

    def wrap(consumer: Consumer) -> Connector[Any, Any]:
        return Connector(consumer, state_projector, dispatch_projector)

    return wrap
