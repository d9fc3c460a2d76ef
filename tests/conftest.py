"""Shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path_factory, monkeypatch):
    """Keep real ~/.config/doctag and ./.doctag.yaml files out of every test."""
    root = tmp_path_factory.mktemp("env")
    (root / "home").mkdir()
    (root / "work").mkdir()
    monkeypatch.setenv("HOME", str(root / "home"))
    monkeypatch.chdir(root / "work")
