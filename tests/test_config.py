# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0"]
# ///
"""Tests for environment-based configuration."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import config


class TestDataDir:
    def test_default(self, monkeypatch):
        monkeypatch.delenv(config.DATA_DIR_ENV, raising=False)
        assert config.get_data_dir() == config.DEFAULT_DATA_DIR

    def test_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(config.DATA_DIR_ENV, str(tmp_path))
        assert config.get_data_dir() == tmp_path


class TestLogLevel:
    def test_default_info(self, monkeypatch):
        monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
        assert config.get_log_level() == logging.INFO

    def test_named_level(self, monkeypatch):
        monkeypatch.setenv(config.LOG_LEVEL_ENV, "debug")
        assert config.get_log_level() == logging.DEBUG

    def test_unknown_level(self, monkeypatch):
        monkeypatch.setenv(config.LOG_LEVEL_ENV, "chatty")
        assert config.get_log_level() == logging.INFO


class TestPort:
    def test_default(self, monkeypatch):
        monkeypatch.delenv(config.PORT_ENV, raising=False)
        assert config.get_port() == 5050

    def test_override(self, monkeypatch):
        monkeypatch.setenv(config.PORT_ENV, "8080")
        assert config.get_port() == 8080

    def test_bad_value(self, monkeypatch):
        monkeypatch.setenv(config.PORT_ENV, "http")
        assert config.get_port() == config.DEFAULT_PORT
