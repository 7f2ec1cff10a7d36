"""
Print Example - Demonstrates subscribe without any widgets.

The subscriber is the whole "renderer": it prints the state as JSON after
every dispatch.
"""

import json

from textual_store import create_store
from textual_store.notes import create_note, notes_reducer, update_note

store = create_store(notes_reducer, name="notes")


def render() -> None:
    state = store.get_state()
    print(json.dumps(state.model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    store.subscribe(render)

    store.dispatch(create_note())
    store.dispatch(update_note(1, "Hello from the store"))
