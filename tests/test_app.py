"""Tests for the LinkerApp facade."""

import pytest

from wwise_linker.app import LinkerApp
from wwise_linker.core.output import clear_ui_buffer


@pytest.fixture
def app(session):
    app = LinkerApp(session)
    yield app
    clear_ui_buffer()


@pytest.fixture
def wwise_selection(database, originals, source_row):
    for name in ("a", "b"):
        (originals / f"{name}.wav").write_text(name)
    database.selection = [{"id": "p", "name": "Parent", "path": "\\Parent"}]
    database.descendants = {
        "p": [source_row("A", str(originals / "a.wav")), source_row("B", str(originals / "b.wav"))]
    }


def run(app):
    while app.tick():
        pass


class TestConnection:
    def test_connect_uses_config(self, app, database):
        app.session.config.waapi.port = 8095
        assert app.connect()
        assert database.connect_calls == [("127.0.0.1", 8095)]
        assert app.connection_label == "Connected"

    def test_retry_with_invalid_port(self, app, database, notices):
        assert app.retry_connection("99999") is False
        assert app.retry_connection("abc") is False
        assert [title for title, _ in notices] == ["Error", "Error"]
        assert database.connect_calls == []

    def test_retry_with_new_port(self, app, database):
        assert app.retry_connection(" 8096 ")
        assert app.session.config.waapi.port == 8096
        assert database.connect_calls == [("127.0.0.1", 8096)]


class TestImportAndRender:
    """Tests for starting tasks from the app."""

    def test_import_requires_connection(self, app, database, notices):
        database.connected = False
        assert app.start_import() is False
        assert notices == [("Not connected", "Connect to Wwise first")]

    def test_import_flow(self, app, wwise_selection, host):
        assert app.start_import()
        assert app.snapshot().running
        run(app)

        snapshot = app.snapshot()
        assert not snapshot.running
        assert [row.name for row in snapshot.records] == ["A", "B"]
        assert snapshot.status_text == "Import complete, 2 files in list"
        assert host.containers == ["Wwise Import #1"]

    def test_empty_resolve_gives_notice(self, app, notices):
        app.start_import()
        run(app)
        assert notices[-1][0] == "Notice"
        assert app.session.registry.count() == 0

    def test_render_rejected_during_import(self, app, wwise_selection, notices):
        app.start_import()
        app.tick()
        assert app.start_render() is False
        assert notices[-1][0] == "Busy"
        assert app.status_text == "Importing from Wwise..."

    def test_render_selected_items(self, app, wwise_selection, host, version_control):
        app.start_import()
        run(app)

        host.set_selection(list(host.items))
        assert app.start_render()
        run(app)

        assert app.scheduler.last_report.succeeded == 2
        assert len(version_control.checkouts) == 2
        assert app.status_text == "Render complete"

    def test_render_with_nothing_selected(self, app, notices):
        app.start_render()
        run(app)
        assert notices[-1] == ("Notice", "Select the items to render first.")


class TestImportedList:
    """Tests for list management."""

    def test_select_all_skips_deleted_items(self, app, wwise_selection, host):
        app.start_import()
        run(app)
        host.delete_item(host.items[0])

        assert app.select_all_imported_items() == 1
        assert host.selection == host.items
        assert app.status_text == "Selected 1 items"

    def test_select_record(self, app, wwise_selection, host):
        app.start_import()
        run(app)
        assert app.select_record(1)
        assert host.selection == [host.items[1]]
        assert app.select_record(5) is False

    def test_clear_list(self, app, wwise_selection):
        app.start_import()
        run(app)
        app.clear_list()
        assert app.session.registry.count() == 0
        assert app.status_text == "List cleared"

    def test_log_lines_in_snapshot(self, app, wwise_selection):
        app.attach_log()
        app.start_import()
        run(app)
        lines = app.snapshot().log_lines
        assert any("[OK] A" in line for line in lines)
        app.clear_log()
        assert app.snapshot().log_lines == []


class TestShutdown:
    def test_shutdown_abandons_task_and_disconnects(self, app, wwise_selection, database, host):
        app.start_import()
        app.tick()
        app.shutdown()
        assert not app.scheduler.is_running
        assert not database.connected
        assert host.undo_log[-1] == "end"
