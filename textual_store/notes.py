"""
Note-taking state, actions and reducer.

A worked example of the reducer contract: notes are created with an empty
body, edited by replacing their content, and opened or closed one at a time.

Example:
    ```python
    store = create_store(notes_reducer)

    store.dispatch(create_note())
    store.dispatch(update_note(1, "Groceries"))
    store.dispatch({"type": "CLOSE_NOTE"})

    store.get_state().model_dump(by_alias=True)
    # {"nextNoteId": 2, "notes": {1: {...}}, "openNoteId": None}
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from .types import Action
from .validation import action_type

CREATE_NOTE = "CREATE_NOTE"
UPDATE_NOTE = "UPDATE_NOTE"
OPEN_NOTE = "OPEN_NOTE"
CLOSE_NOTE = "CLOSE_NOTE"

NOTE_ACTION_TYPES = frozenset({CREATE_NOTE, UPDATE_NOTE, OPEN_NOTE, CLOSE_NOTE})


class NoteNotFoundError(LookupError):
    """Raised when an action refers to a note that does not exist."""

    def __init__(self, note_id: int) -> None:
        self.note_id = note_id
        super().__init__(f"Note {note_id} does not exist.")


# --- State ---


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Note(_Frozen):
    """A single note."""

    id: int
    content: str = ""


class NotesState(_Frozen):
    """State of the note-taking app."""

    next_note_id: int = Field(default=1, ge=1)
    notes: dict[int, Note] = {}
    open_note_id: int | None = None


# --- Actions ---


class CreateNote(_Frozen):
    """Create an empty note and open it."""

    type: Literal["CREATE_NOTE"] = CREATE_NOTE


class UpdateNote(_Frozen):
    """Replace the content of an existing note."""

    type: Literal["UPDATE_NOTE"] = UPDATE_NOTE
    id: int
    content: str


class OpenNote(_Frozen):
    """Open a note in the editor."""

    type: Literal["OPEN_NOTE"] = OPEN_NOTE
    id: int


class CloseNote(_Frozen):
    """Close the open note."""

    type: Literal["CLOSE_NOTE"] = CLOSE_NOTE


NoteAction = Annotated[
    Union[CreateNote, UpdateNote, OpenNote, CloseNote],
    Field(discriminator="type"),
]

_note_action_adapter: TypeAdapter[NoteAction] = TypeAdapter(NoteAction)


def create_note() -> CreateNote:
    return CreateNote()


def update_note(note_id: int, content: str) -> UpdateNote:
    return UpdateNote(id=note_id, content=content)


def open_note(note_id: int) -> OpenNote:
    return OpenNote(id=note_id)


def close_note() -> CloseNote:
    return CloseNote()


def parse_note_action(action: Action | Mapping[str, Any]) -> NoteAction | None:
    """
    Turn a dispatched action into one of the note action models.

    Mappings are validated against the discriminated union. Actions whose
    type is not a note action give None.

    Raises:
        pydantic.ValidationError: If a note action type has bad fields.
    """
    if isinstance(action, (CreateNote, UpdateNote, OpenNote, CloseNote)):
        return action
    kind = action_type(action)
    if not isinstance(kind, str) or kind not in NOTE_ACTION_TYPES:
        return None
    if isinstance(action, Mapping):
        return _note_action_adapter.validate_python(dict(action))
    fields = {
        name: getattr(action, name)
        for name in ("type", "id", "content")
        if hasattr(action, name)
    }
    return _note_action_adapter.validate_python(fields)


# --- Reducer ---


def notes_reducer(state: NotesState | None, action: Any) -> NotesState:
    """Process note actions and return the next state."""
    if state is None:
        state = NotesState()

    match parse_note_action(action):
        case CreateNote():
            note_id = state.next_note_id
            return state.model_copy(
                update={
                    "next_note_id": note_id + 1,
                    "notes": {**state.notes, note_id: Note(id=note_id)},
                    "open_note_id": note_id,
                }
            )

        case UpdateNote(id=note_id, content=content):
            if note_id not in state.notes:
                raise NoteNotFoundError(note_id)
            edited = state.notes[note_id].model_copy(update={"content": content})
            return state.model_copy(
                update={"notes": {**state.notes, note_id: edited}}
            )

        case OpenNote(id=note_id):
            return state.model_copy(update={"open_note_id": note_id})

        case CloseNote():
            return state.model_copy(update={"open_note_id": None})

    return state


def open_note_of(state: NotesState) -> Note | None:
    """Get the open note, if any."""
    if state.open_note_id is None:
        return None
    return state.notes.get(state.open_note_id)
