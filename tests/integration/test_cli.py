"""
Integration Tests for the notekeeper CLI.

Each test points NOTEKEEPER_DATABASE_PATH at its own SQLite file and runs
commands through typer's CliRunner with real execution paths.
"""

import pytest
from typer.testing import CliRunner

from notekeeper.cli.main import app

pytestmark = [pytest.mark.integration, pytest.mark.usefixtures("clear_config_cache")]

runner = CliRunner()


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Route every command to a per-test database file."""
    path = tmp_path / "cli.db"
    monkeypatch.setenv("NOTEKEEPER_DATABASE_PATH", str(path))
    return path


def _add(title: str = "", body: str = ""):
    return runner.invoke(app, ["add", "--title", title, "--body", body])


class TestHelp:
    """Tests for help output."""

    def test_main_help(self) -> None:
        """Should list the note commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("list", "add", "edit", "show", "delete", "info"):
            assert command in result.stdout

    def test_add_help(self) -> None:
        """Should describe the add command."""
        result = runner.invoke(app, ["add", "--help"])

        assert result.exit_code == 0
        assert "Write a new note" in result.stdout


class TestAddAndList:
    """Tests for composing and listing notes."""

    def test_add_saves_note(self) -> None:
        """Should print the new note id."""
        result = _add("Groceries", "milk, eggs")

        assert result.exit_code == 0
        assert "Saved note 1" in result.stdout

    def test_empty_add_saves_nothing(self) -> None:
        """Should skip blank notes."""
        result = _add("  ", "")

        assert result.exit_code == 0
        assert "Empty note, nothing saved" in result.stdout
        assert "No notes found" in runner.invoke(app, ["list"]).stdout

    def test_list_shows_notes(self) -> None:
        """Should render saved notes in a table."""
        _add("Groceries", "milk, eggs")
        _add("Work", "standup notes")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Groceries" in result.stdout
        assert "Work" in result.stdout
        assert result.stdout.index("Work") < result.stdout.index("Groceries")

    def test_list_search_filters_by_title(self) -> None:
        """Should only show notes whose title matches."""
        _add("Groceries", "milk")
        _add("Work", "buy groceries later")

        result = runner.invoke(app, ["list", "--search", "groc"])

        assert result.exit_code == 0
        assert "Groceries" in result.stdout
        assert "Work" not in result.stdout

    def test_list_search_without_matches(self) -> None:
        """Should report an empty result."""
        _add("Groceries", "milk")

        result = runner.invoke(app, ["list", "-s", "zzz"])

        assert result.exit_code == 0
        assert "No notes found" in result.stdout


class TestEditAndShow:
    """Tests for editing and printing a note."""

    def test_edit_updates_note(self) -> None:
        """Should update the title and keep the body."""
        _add("Hi", "Body")

        result = runner.invoke(app, ["edit", "1", "--title", "Hi!"])
        shown = runner.invoke(app, ["show", "1"])

        assert result.exit_code == 0
        assert "Updated note 1" in result.stdout
        assert "Hi!" in shown.stdout
        assert "Body" in shown.stdout

    def test_edit_without_changes(self) -> None:
        """Should not rewrite an unchanged note."""
        _add("Hi", "Body")

        result = runner.invoke(app, ["edit", "1", "--title", "Hi"])

        assert result.exit_code == 0
        assert "No changes" in result.stdout

    def test_edit_missing_note(self) -> None:
        """Should fail for an unknown id."""
        result = runner.invoke(app, ["edit", "99", "--title", "x"])

        assert result.exit_code == 1
        assert "Note 99 not found" in result.stdout

    def test_show_missing_note(self) -> None:
        """Should fail for an unknown id."""
        result = runner.invoke(app, ["show", "5"])

        assert result.exit_code == 1
        assert "Note 5 not found" in result.stdout


class TestDelete:
    """Tests for delete with confirmation."""

    def test_declined_confirmation_keeps_note(self) -> None:
        """Should abort and leave the note in place."""
        _add("Keep me", "")

        result = runner.invoke(app, ["delete", "1"], input="n\n")

        assert result.exit_code == 1
        assert "Keep me" in runner.invoke(app, ["list"]).stdout

    def test_confirmed_delete(self) -> None:
        """Should delete after confirmation."""
        _add("Doomed", "")

        result = runner.invoke(app, ["delete", "1"], input="y\n")

        assert result.exit_code == 0
        assert "Deleted note 1" in result.stdout
        assert "No notes found" in runner.invoke(app, ["list"]).stdout

    def test_delete_with_yes_flag(self) -> None:
        """Should skip the prompt."""
        _add("Doomed", "")

        result = runner.invoke(app, ["delete", "1", "--yes"])

        assert result.exit_code == 0
        assert "Deleted note 1" in result.stdout

    def test_delete_missing_note(self) -> None:
        """Should fail for an unknown id."""
        result = runner.invoke(app, ["delete", "99", "--yes"])

        assert result.exit_code == 1
        assert "Note 99 not found" in result.stdout


class TestInfo:
    """Tests for the info command."""

    def test_info_shows_location_and_count(self) -> None:
        """Should print the database file and number of notes."""
        _add("One", "")
        _add("Two", "")

        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert "Notekeeper" in result.stdout
        assert "Database" in result.stdout
        assert "Notes" in result.stdout
        assert "2" in result.stdout


class TestUnavailableStore:
    """Tests for an unopenable database location."""

    def test_error_banner_and_exit_code(self, tmp_path, monkeypatch) -> None:
        """Should print the store error and exit 1."""
        blocker = tmp_path / "file"
        blocker.write_text("")
        monkeypatch.setenv("NOTEKEEPER_DATABASE_PATH", str(blocker / "notes.db"))

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "Error: Could not open note store" in result.stdout
