from __future__ import annotations

import sys
import types

from polly_ssml import start_server


def test_host_port_defaults(monkeypatch) -> None:
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    assert start_server.server_address() == ("0.0.0.0", 7860)


def test_host_port_from_env(monkeypatch) -> None:
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    assert start_server.server_address() == ("127.0.0.1", 9000)


def test_bad_port_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "http")
    assert start_server.server_address()[1] == 7860


def test_main_runs_app_under_uvicorn(monkeypatch) -> None:
    runs = []
    fake_uvicorn = types.SimpleNamespace(run=lambda app, host, port: runs.append((app, host, port)))
    monkeypatch.setitem(sys.modules, "uvicorn", fake_uvicorn)
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "8123")

    start_server.main()

    import web_ui
    assert runs == [(web_ui.app, "127.0.0.1", 8123)]


def test_server_address_reads_given_mapping() -> None:
    assert start_server.server_address({"HOST": "", "PORT": "-1"}) == ("0.0.0.0", 7860)
    assert start_server.server_address({"PORT": "8080"}) == ("0.0.0.0", 8080)
