import pytest

from profiles import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    db_url = f"sqlite:///{tmp_path / 'profiles.db'}"

    def _run(*argv):
        return cli.main(["--database-url", db_url, *argv])

    assert _run("init-db") == cli.EXIT_OK
    return _run


def test_add_list_get(run, capsys):
    capsys.readouterr()
    assert run("add", "Ada Lovelace", "ada@example.com", "36") == cli.EXIT_OK
    assert "created 1" in capsys.readouterr().out

    assert run("list") == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "Ada Lovelace\tada@example.com\t36" in out

    assert run("get", "1") == cli.EXIT_OK
    listed = [line for line in out.splitlines() if "ada@example.com" in line]
    shown = [line for line in capsys.readouterr().out.splitlines() if "ada@example.com" in line]
    assert listed == shown


def test_duplicate_email_exits_with_rejection(run, capsys):
    run("add", "Ada", "ada@example.com", "36")
    capsys.readouterr()

    assert run("add", "Other", "ada@example.com", "40") == cli.EXIT_REJECTED
    assert "error:" in capsys.readouterr().err


def test_update_and_delete(run, capsys):
    run("add", "Ada", "ada@example.com", "36")

    assert run("update", "1", "Ada King", "king@example.com", "37") == cli.EXIT_OK
    assert run("delete", "1") == cli.EXIT_OK
    assert run("delete", "1") == cli.EXIT_OK
    assert "no user profile with id 1" in capsys.readouterr().out


def test_get_missing_and_invalid_input(run, capsys):
    assert run("get", "5") == cli.EXIT_REJECTED
    assert run("add", "", "ada@example.com", "36") == cli.EXIT_REJECTED
    assert run("update", "9", "Ghost", "ghost@example.com", "1") == cli.EXIT_REJECTED


def test_missing_table_is_store_failure(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    db_url = f"sqlite:///{tmp_path / 'empty.db'}"

    assert cli.main(["--database-url", db_url, "list"]) == cli.EXIT_STORE_FAILURE
    assert "error:" in capsys.readouterr().err
