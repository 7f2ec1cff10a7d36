"""
Textual Store - a small Redux-style store for Textual TUI applications.

This module provides a synchronous store driven by a reducer, and a
``connect`` bridge that keeps presentation code rendered with props derived
from the store's state.

Key Features:
- create_store: One state value, changed only by dispatching actions
- subscribe: Callbacks run after every dispatch, in registration order
- connect: Project state and dispatch into props, re-derived on change
- ConnectedView: A Textual widget rendered from connected props
- notes_reducer: A worked note-taking reducer built on pydantic models

Example:
    ```python
    from textual.app import App, ComposeResult
    from textual.widgets import Button
    from textual_store import ConnectedView, connect, create_store
    from textual_store.notes import create_note, notes_reducer

    store = create_store(notes_reducer, name="notes")

    NoteCount = connect(lambda state: {"count": len(state.notes)})

    class Notes(App):
        def compose(self) -> ComposeResult:
            yield ConnectedView(
                store, NoteCount, lambda props: f"{props['count']} notes"
            )
            yield Button("New note")

        def on_button_pressed(self, event: Button.Pressed) -> None:
            store.dispatch(create_note())
    ```
"""

# Validation
from .validation import (
    InvalidActionError,
    action_type,
    validate_action,
)

# Store
from .store import (
    INIT,
    Store,
    create_store,
)

# Connect
from .connect import (
    Bridge,
    BridgeLifecycleError,
    BridgeStatus,
    Connector,
    connect,
)

# Widgets
from .widgets import (
    ConnectedView,
)

# Types
from .types import (
    Action,
    Reducer,
    DispatchFunc,
    Subscriber,
    Unsubscribe,
    Props,
)

__version__ = "0.1.0a1"

__all__ = [
    # Validation
    "InvalidActionError",
    "action_type",
    "validate_action",
    # Store
    "INIT",
    "Store",
    "create_store",
    # Connect
    "Bridge",
    "BridgeLifecycleError",
    "BridgeStatus",
    "Connector",
    "connect",
    # Widgets
    "ConnectedView",
    # Types
    "Action",
    "Reducer",
    "DispatchFunc",
    "Subscriber",
    "Unsubscribe",
    "Props",
]
