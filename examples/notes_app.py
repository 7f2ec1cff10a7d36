"""
Notes Example - Demonstrates create_store, connect and ConnectedView.

A small note-taking app: the list shows note titles, selecting one opens it
in the editor, and the panel at the bottom prints the raw store state after
every dispatch.
"""

import json
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Button, OptionList, TextArea
from textual.widgets.option_list import Option

from textual_store import Bridge, ConnectedView, Props, Store, connect, create_store
from textual_store.notes import (
    Note,
    NotesState,
    close_note,
    create_note,
    notes_reducer,
    open_note,
    open_note_of,
    update_note,
)


# --- Views ---


def note_title(note: Note) -> Text:
    """Use the first line of a note as its title."""
    title = note.content.split("\n")[0].strip()
    if title == "":
        return Text("Untitled", style="italic")
    return Text(title)


def state_dump(props: Props) -> Text:
    # Note content is user text, never markup.
    return Text(json.dumps(props["state"], indent=2))


# --- Bindings ---


NoteApp = connect(
    lambda state: {"notes": state.notes, "open_note": open_note_of(state)},
    lambda dispatch: {
        "on_add_note": lambda: dispatch(create_note()),
        "on_change_note": lambda note_id, content: dispatch(
            update_note(note_id, content)
        ),
        "on_open_note": lambda note_id: dispatch(open_note(note_id)),
        "on_close_note": lambda: dispatch(close_note()),
    },
)

StateDump = connect(
    lambda state: {"state": state.model_dump(mode="json", by_alias=True)},
)


class NotesApp(App):
    """Note-taking app backed by a store."""

    CSS = """
    Screen {
        layout: vertical;
        padding: 1;
    }

    #editor, #browser {
        height: auto;
    }

    #content {
        height: 12;
    }

    #note-list {
        height: 10;
        border: solid $secondary;
    }

    #state {
        margin-top: 1;
        padding: 1;
        background: $surface;
    }

    Button {
        margin: 1 0;
    }
    """

    def __init__(self, store: Store[NotesState, Any]) -> None:
        super().__init__()
        self.store = store
        self.props: Props = {}
        self._notes_bridge: Bridge[NotesState, Any] | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="editor"):
            yield TextArea(id="content")
            yield Button("Close", id="close", variant="primary")
        with Vertical(id="browser"):
            yield OptionList(id="note-list")
            yield Button("New Note", id="new", variant="success")
        yield ConnectedView(self.store, StateDump, state_dump, id="state")

    def on_mount(self) -> None:
        self._notes_bridge = NoteApp(self._show)(self.store)
        self._notes_bridge.mount()

    def on_unmount(self) -> None:
        if self._notes_bridge is not None:
            self._notes_bridge.unmount()

    def _show(self, props: Props) -> None:
        self.props = props
        note = props["open_note"]

        self.query_one("#editor").display = note is not None
        self.query_one("#browser").display = note is None

        if note is not None:
            editor = self.query_one("#content", TextArea)
            if editor.text != note.content:
                editor.load_text(note.content)
            editor.focus()
            return

        note_list = self.query_one("#note-list", OptionList)
        note_list.clear_options()
        note_list.add_options(
            [Option(note_title(n), id=str(n.id)) for n in props["notes"].values()]
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "new":
                self.props["on_add_note"]()
            case "close":
                self.props["on_close_note"]()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        note = self.props.get("open_note")
        if note is not None and event.text_area.text != note.content:
            self.props["on_change_note"](note.id, event.text_area.text)

    def on_option_list_option_selected(
        self, event: OptionList.OptionSelected
    ) -> None:
        if event.option.id is not None:
            self.props["on_open_note"](int(event.option.id))


if __name__ == "__main__":
    NotesApp(create_store(notes_reducer, name="notes")).run()
