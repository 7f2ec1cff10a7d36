"""Tests for ConnectedView inside a running Textual app."""

from textual.app import App, ComposeResult

from textual_store import ConnectedView, connect, create_store
from textual_store.notes import create_note, notes_reducer, update_note

NoteCount = connect(lambda state: {"count": len(state.notes)})


def count_view(props):
    return f"{props['count']} notes ({props.get('label', 'all')})"


class CountApp(App):
    def __init__(self, store) -> None:
        super().__init__()
        self.store = store

    def compose(self) -> ComposeResult:
        yield ConnectedView(self.store, NoteCount, count_view, id="count")


class TestConnectedView:
    """Tests for ConnectedView."""

    async def test_renders_on_mount(self):
        store = create_store(notes_reducer)
        store.dispatch(create_note())
        app = CountApp(store)

        async with app.run_test() as pilot:
            await pilot.pause()
            view = app.query_one("#count", ConnectedView)

            assert view.props["count"] == 1
            assert len(store._subscribers) == 1

    async def test_follows_store(self):
        store = create_store(notes_reducer)
        app = CountApp(store)

        async with app.run_test() as pilot:
            await pilot.pause()
            view = app.query_one("#count", ConnectedView)
            assert view.props["count"] == 0

            store.dispatch(create_note())
            store.dispatch(create_note())
            store.dispatch(update_note(2, "second"))
            await pilot.pause()

            assert view.props["count"] == 2

    async def test_own_props(self):
        store = create_store(notes_reducer)
        app = CountApp(store)

        async with app.run_test() as pilot:
            await pilot.pause()
            view = app.query_one("#count", ConnectedView)

            view.set_own_props(label="mine")

            assert view.props["label"] == "mine"
            assert view.props["count"] == 0

    async def test_remove_unsubscribes(self):
        store = create_store(notes_reducer)
        app = CountApp(store)

        async with app.run_test() as pilot:
            await pilot.pause()
            view = app.query_one("#count", ConnectedView)
            assert len(store._subscribers) == 1

            await view.remove()
            await pilot.pause()

            assert store._subscribers == []
            store.dispatch(create_note())
            assert view.props["count"] == 0

    def test_props_empty_before_mount(self):
        store = create_store(notes_reducer)
        view = ConnectedView(store, NoteCount, count_view)

        assert view.props == {}
        assert view.bridge is None
        assert view.store is store
