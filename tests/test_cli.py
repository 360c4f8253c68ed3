"""
Tests for the postfeed CLI
"""

import sqlite3

import pytest
from click.testing import CliRunner

from postfeed import __version__
from postfeed.cli import cli
from postfeed.database.connection import reset_database


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_db_creates_tables(runner, tmp_path):
    db_file = tmp_path / "feed.db"
    try:
        result = runner.invoke(cli, ["init-db", "--database-url", f"sqlite:///{db_file}"])
    finally:
        reset_database()

    assert result.exit_code == 0, result.output
    assert "Database tables are ready." in result.output

    with sqlite3.connect(db_file) as conn:
        tables = {
            row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert {"users", "posts"} <= tables


def test_init_db_rejects_unsupported_url(runner):
    try:
        result = runner.invoke(cli, ["init-db", "--database-url", "mysql://nobody@localhost/db"])
    finally:
        reset_database()

    assert result.exit_code == 1
