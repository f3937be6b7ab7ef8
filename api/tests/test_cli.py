"""Unit tests for the maintenance CLI."""

import json
import sys
from unittest.mock import patch

import pytest

import cli


@pytest.fixture
def catalog(tmp_path, monkeypatch):
    path = tmp_path / "resources.json"
    path.write_text(
        json.dumps(
            {
                "resources": [
                    {"id": 123, "permalink": "http://example.com/2012/notes/"},
                    {
                        "id": 456,
                        "permalink": "http://example.com/2012/on-the-train/",
                        "format": "status",
                    },
                    {
                        "id": 900,
                        "permalink": "http://example.com/q/",
                        "format": "quote",
                    },
                ]
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("CATALOG_PATH", str(path))
    monkeypatch.setenv("SHORTLINK_BASE", "http://ex.am")
    monkeypatch.delenv("HUM_SHORTLINK_BASE", raising=False)
    return path


def _run(*argv: str) -> int:
    with patch.object(sys, "argv", ["hum", *argv]):
        return cli.main()


@pytest.mark.unit
class TestEncodeDecode:
    def test_encode(self, capsys):
        assert _run("encode", "123", "16622") == 0
        assert capsys.readouterr().out.splitlines() == ["123\t23", "16622\t4c2"]

    def test_encode_zero(self, capsys):
        assert _run("encode", "0") == 0
        assert capsys.readouterr().out == "0\t0\n"

    def test_encode_negative_fails(self):
        assert _run("encode", "--", "-5") == 1

    def test_decode_is_lenient(self, capsys):
        assert _run("decode", "4c2", "I", "!") == 0
        assert capsys.readouterr().out.splitlines() == ["4c2\t16622", "I\t1", "!\t0"]


@pytest.mark.unit
class TestCatalogCommands:
    def test_resolve(self, catalog, capsys):
        assert _run("resolve", "b/23", "/t/7b)") == 0
        assert capsys.readouterr().out.splitlines() == [
            "b/23\thttp://example.com/2012/notes/",
            "/t/7b)\thttp://example.com/2012/on-the-train/",
        ]

    def test_resolve_unresolved_exit_code(self, catalog, capsys):
        assert _run("resolve", "z/nothing") == 1
        assert capsys.readouterr().out == "z/nothing\t404\n"

    def test_shortlink(self, catalog, capsys):
        assert _run("shortlink", "123", "456") == 0
        assert capsys.readouterr().out.splitlines() == [
            "123\thttp://ex.am/b/23",
            "456\thttp://ex.am/t/7b",
        ]

    def test_shortlink_unknown_id(self, catalog, capsys):
        assert _run("shortlink", "9999") == 1
        assert capsys.readouterr().out == ""

    def test_shortlink_error_policy(self, catalog, monkeypatch, capsys):
        monkeypatch.setenv("UNKNOWN_FORMAT_POLICY", "error")
        assert _run("shortlink", "900") == 1

    def test_legacy(self, catalog, capsys):
        assert _run("legacy", "123", "3r", "nope0") == 0
        assert capsys.readouterr().out.splitlines() == [
            "123\thttp://example.com/2012/notes/",
            "3r\thttp://example.com/2012/notes/",
            "nope0\t404",
        ]


@pytest.mark.unit
class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert _run() == 1
        assert "Hum shortlinks CLI" in capsys.readouterr().out
