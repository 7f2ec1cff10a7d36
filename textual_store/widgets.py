"""Textual widgets driven by a store."""

from __future__ import annotations

from typing import Any, Callable

from rich.console import RenderableType
from textual.widgets import Static

from .connect import Bridge, Connector
from .store import Store
from .types import Consumer, Props


class ConnectedView(Static):
    """
    A Static widget whose content is rendered from store-derived props.

    The widget holds a bridge for as long as it is mounted: mounting
    subscribes to the store, removing the widget from the tree unsubscribes.

    Example:
        ```python
        NoteCount = connect(lambda state: {"count": len(state.notes)})

        class NotesApp(App):
            def __init__(self, store: Store[NotesState, Any]) -> None:
                super().__init__()
                self.store = store

            def compose(self) -> ComposeResult:
                yield ConnectedView(
                    self.store,
                    NoteCount,
                    lambda props: f"{props['count']} notes",
                    id="count",
                )
        ```
    """

    DEFAULT_CSS = """
    ConnectedView {
        width: 100%;
        height: auto;
    }
    """

    def __init__(
        self,
        store: Store[Any, Any],
        binding: Callable[[Consumer], Connector[Any, Any]],
        view: Callable[[Props], RenderableType],
        *,
        props: Props | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__("", name=name, id=id, classes=classes)
        self._store = store
        self._connector = binding(self._render_props)
        self._props_view = view
        self._own_props = dict(props or {})
        self._store_bridge: Bridge[Any, Any] | None = None

    @property
    def store(self) -> Store[Any, Any]:
        """Get the store this view reads from."""
        return self._store

    @property
    def bridge(self) -> Bridge[Any, Any] | None:
        """Get the bridge of the current mount, if mounted."""
        return self._store_bridge

    @property
    def props(self) -> Props:
        """Get the props of the last render."""
        if self._store_bridge is None:
            return {}
        return self._store_bridge.props

    def set_own_props(self, **props: Any) -> None:
        """Change own props; the view re-renders at once while mounted."""
        self._own_props.update(props)
        if self._store_bridge is not None:
            self._store_bridge.set_own_props(**props)

    def on_mount(self) -> None:
        self._store_bridge = self._connector(self._store, **self._own_props)
        self._store_bridge.mount()

    def on_unmount(self) -> None:
        if self._store_bridge is not None:
            self._store_bridge.unmount()

    def _render_props(self, props: Props) -> None:
        self.update(self._props_view(props))
