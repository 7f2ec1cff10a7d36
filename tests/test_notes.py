"""Tests for the note-taking reducer."""

from dataclasses import dataclass

import pytest
from pydantic import ValidationError

from textual_store import INIT, InvalidActionError, create_store
from textual_store.notes import (
    CloseNote,
    CreateNote,
    Note,
    NoteNotFoundError,
    NotesState,
    OpenNote,
    UpdateNote,
    close_note,
    create_note,
    notes_reducer,
    open_note,
    open_note_of,
    parse_note_action,
    update_note,
)


@pytest.fixture
def store():
    return create_store(notes_reducer, name="notes")


class TestScenarios:
    """End-to-end dispatch scenarios over plain mapping actions."""

    def test_initial_state(self, store):
        assert store.get_state().model_dump(by_alias=True) == {
            "nextNoteId": 1,
            "notes": {},
            "openNoteId": None,
        }

    def test_create_note(self, store):
        store.dispatch({"type": "CREATE_NOTE"})

        assert store.get_state().model_dump(by_alias=True) == {
            "nextNoteId": 2,
            "notes": {1: {"id": 1, "content": ""}},
            "openNoteId": 1,
        }

    def test_update_note(self, store):
        store.dispatch({"type": "CREATE_NOTE"})
        store.dispatch({"type": "UPDATE_NOTE", "id": 1, "content": "hi"})

        state = store.get_state()
        assert state.notes[1].content == "hi"
        assert state.open_note_id == 1

    def test_close_then_open(self, store):
        store.dispatch({"type": "CREATE_NOTE"})

        store.dispatch({"type": "CLOSE_NOTE"})
        assert store.get_state().open_note_id is None

        store.dispatch({"type": "OPEN_NOTE", "id": 1})
        assert store.get_state().open_note_id == 1

    @pytest.mark.parametrize("action", [None, {}])
    def test_invalid_action(self, store, action):
        store.dispatch({"type": "CREATE_NOTE"})
        before = store.get_state()

        with pytest.raises(InvalidActionError):
            store.dispatch(action)

        assert store.get_state() is before


class TestNotesReducer:
    """Tests for notes_reducer as a plain function."""

    def test_default_state(self):
        assert notes_reducer(None, {"type": INIT}) == NotesState()

    def test_unknown_action_returns_same_state(self):
        state = notes_reducer(None, create_note())

        assert notes_reducer(state, {"type": "SOMETHING_ELSE"}) is state

    def test_ids_are_sequential(self):
        state = notes_reducer(None, {"type": INIT})
        for _ in range(5):
            state = notes_reducer(state, create_note())

        assert sorted(state.notes) == [1, 2, 3, 4, 5]
        assert [note.id for note in state.notes.values()] == [1, 2, 3, 4, 5]
        assert state.next_note_id == 6
        assert state.open_note_id == 5

    def test_does_not_mutate_prior_state(self):
        before = notes_reducer(None, create_note())
        after = notes_reducer(before, update_note(1, "changed"))

        assert before.notes[1].content == ""
        assert after.notes[1].content == "changed"
        assert before is not after

    def test_update_keeps_other_notes(self):
        state = notes_reducer(None, create_note())
        state = notes_reducer(state, create_note())
        untouched = state.notes[2]

        state = notes_reducer(state, update_note(1, "first"))

        assert state.notes[1] == Note(id=1, content="first")
        assert state.notes[2] is untouched

    def test_update_replaces_whole_content(self):
        state = notes_reducer(None, create_note())
        state = notes_reducer(state, update_note(1, "line one\nline two"))
        state = notes_reducer(state, update_note(1, "x"))

        assert state.notes[1].content == "x"

    def test_update_missing_note(self):
        state = notes_reducer(None, create_note())

        with pytest.raises(NoteNotFoundError) as info:
            notes_reducer(state, update_note(7, "nope"))

        assert info.value.note_id == 7

    def test_open_and_close(self):
        state = notes_reducer(None, create_note())
        state = notes_reducer(state, create_note())

        state = notes_reducer(state, open_note(1))
        assert open_note_of(state) == state.notes[1]

        state = notes_reducer(state, close_note())
        assert state.open_note_id is None
        assert open_note_of(state) is None

    def test_state_is_frozen(self):
        state = NotesState()

        with pytest.raises(ValidationError):
            state.next_note_id = 5


class TestParseNoteAction:
    """Tests for turning dispatched actions into note action models."""

    def test_models_pass_through(self):
        action = UpdateNote(id=1, content="a")
        assert parse_note_action(action) is action

    def test_parses_mappings(self):
        assert parse_note_action({"type": "CREATE_NOTE"}) == CreateNote()
        assert parse_note_action({"type": "CLOSE_NOTE"}) == CloseNote()
        assert parse_note_action({"type": "OPEN_NOTE", "id": 3}) == OpenNote(id=3)
        assert parse_note_action(
            {"type": "UPDATE_NOTE", "id": 3, "content": "c"}
        ) == UpdateNote(id=3, content="c")

    def test_parses_other_objects(self):
        @dataclass
        class Open:
            id: int
            type: str = "OPEN_NOTE"

        assert parse_note_action(Open(4)) == OpenNote(id=4)

    def test_unknown_type_is_none(self):
        assert parse_note_action({"type": INIT}) is None

    def test_unhashable_type_is_unknown(self, store):
        assert parse_note_action({"type": ["CREATE_NOTE"]}) is None
        before = store.get_state()

        store.dispatch({"type": ["CREATE_NOTE"]})

        assert store.get_state() is before

    def test_bad_fields_raise(self):
        with pytest.raises(ValidationError):
            parse_note_action({"type": "UPDATE_NOTE", "id": 1})

    def test_bad_fields_leave_store_unchanged(self, store):
        store.dispatch(create_note())
        before = store.get_state()

        with pytest.raises(ValidationError):
            store.dispatch({"type": "OPEN_NOTE"})

        assert store.get_state() is before
