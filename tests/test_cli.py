"""Tests for the command-line interface."""

import json
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "scripts", "cli"))

from url_shortener_cli import URLShortenerCLI, build_parser, run, main  # noqa: E402

from conftest import TEST_PASSWORD, TEST_SECRET


@pytest.fixture
async def cli(test_db):
    cli = URLShortenerCLI(
        db_url="memory://",
        base_url="http://sho.rt",
        jwt_secret=TEST_SECRET,
        db=test_db,
    )
    await cli.initialize()
    return cli


async def invoke(cli, capsys, *argv):
    """Run one command and return (exit code, parsed stdout or stderr)."""
    args = build_parser().parse_args(list(argv))
    code = await run(cli, args)
    captured = capsys.readouterr()
    # Log lines may share stdout; the JSON document starts at the first brace
    text = captured.out if code == 0 else captured.err
    return code, json.loads(text[text.index("{"):])


class TestCLI:
    """Test CLI commands against the memory store."""

    async def test_full_lifecycle(self, cli, capsys):
        code, registered = await invoke(cli, capsys, "register", "me@example.com", TEST_PASSWORD)
        assert code == 0
        token = registered["token"]

        code, shortened = await invoke(cli, capsys, "shorten", "https://example.com/a", "--token", token)
        assert code == 0
        assert shortened["short_url"] == f"http://sho.rt/{shortened['short_code']}"

        code, resolved = await invoke(cli, capsys, "resolve", shortened["short_code"])
        assert resolved["original_url"] == "https://example.com/a"

        code, listed = await invoke(cli, capsys, "list", "--token", token)
        assert listed["count"] == 1
        url_id = listed["urls"][0]["id"]
        assert listed["urls"][0]["click_count"] == 1

        code, updated = await invoke(cli, capsys, "update", str(url_id), "https://example.com/b", "--token", token)
        assert code == 0
        assert updated["url"]["original_url"] == "https://example.com/b"

        code, _ = await invoke(cli, capsys, "delete", str(url_id), "--token", token)
        assert code == 0

        code, error = await invoke(cli, capsys, "delete", str(url_id), "--token", token)
        assert code == 1
        assert error["error"] == "not_found: URL not found"

    async def test_login(self, cli, capsys):
        await invoke(cli, capsys, "register", "me@example.com", TEST_PASSWORD)

        code, logged_in = await invoke(cli, capsys, "login", "me@example.com", TEST_PASSWORD)
        assert code == 0
        assert logged_in["user"]["email"] == "me@example.com"

        code, error = await invoke(cli, capsys, "login", "me@example.com", "wrong-password")
        assert code == 1
        assert error["error"] == "unauthorized: Invalid credentials"

    async def test_shorten_rejects_bad_url(self, cli, capsys):
        code, error = await invoke(cli, capsys, "shorten", "not-a-url")

        assert code == 1
        assert error["success"] is False

    async def test_list_with_bad_token(self, cli, capsys):
        code, error = await invoke(cli, capsys, "list", "--token", "garbage")

        assert code == 1
        assert error["error"] == "Token invalid"

    async def test_health(self, cli, capsys):
        code, health = await invoke(cli, capsys, "health")

        assert code == 0
        assert health["health"]["overall"] is True

    async def test_main_rejects_unknown_store(self, capsys):
        code = await main(["--db-url", "mysql://localhost/db", "health"])

        assert code == 1
        assert "Unsupported" in capsys.readouterr().err
