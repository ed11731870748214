"""Unit tests for Config and related Pydantic models (mvcgen.config).

Tests cover:
- DatabaseConfig defaults
- Config defaults, save/load round trip, from_env
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from mvcgen.config import Config, DatabaseConfig


# ---------------------------------------------------------------------------
# DatabaseConfig
# ---------------------------------------------------------------------------


class TestDatabaseConfig:
    @pytest.mark.unit
    def test_defaults(self):
        db = DatabaseConfig()
        assert db.host == "localhost"
        assert db.database == "your_database_name"
        assert db.username == "root"
        assert db.password == ""
        assert db.charset == "utf8mb4"


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.output_dir == Path(".")
        assert config.php_version == ">=8.0"
        assert config.bootstrap_version == "5.3.0"
        assert isinstance(config.database, DatabaseConfig)

    @pytest.mark.unit
    def test_output_dir_coerced_to_path(self):
        assert Config(output_dir="/tmp/out").output_dir == Path("/tmp/out")

    @pytest.mark.unit
    def test_nested_dict_accepted(self):
        config = Config(database={"host": "db.local"})
        assert config.database.host == "db.local"
        assert config.database.username == "root"


class TestConfigSaveLoad:
    @pytest.mark.unit
    def test_round_trip(self, tmp_path: Path):
        original = Config(
            output_dir=tmp_path / "projects",
            database=DatabaseConfig(host="db", password="secret"),
            php_version=">=8.2",
        )
        path = original.save(tmp_path / "nested" / "mvcgen.json")

        assert path.is_file()
        loaded = Config.load(path)
        assert loaded == original

    @pytest.mark.unit
    def test_saved_file_is_json(self, tmp_path: Path):
        path = Config().save(tmp_path / "config.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["database"]["charset"] == "utf8mb4"

    @pytest.mark.unit
    def test_load_partial_file_fills_defaults(self, tmp_path: Path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"database": {"database": "shop"}}), encoding="utf-8")
        config = Config.load(path)
        assert config.database.database == "shop"
        assert config.bootstrap_version == "5.3.0"

    @pytest.mark.unit
    def test_load_invalid_raises(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"database": "nope"}), encoding="utf-8")
        with pytest.raises(ValidationError):
            Config.load(path)


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_no_variables_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert Config.from_env() == Config()

    @pytest.mark.unit
    def test_database_variables(self):
        env = {
            "MVCGEN_DB_HOST": "db.internal",
            "MVCGEN_DB_NAME": "blog",
            "MVCGEN_DB_USER": "app",
            "MVCGEN_DB_PASSWORD": "pw",
            "MVCGEN_DB_CHARSET": "utf8",
        }
        with patch.dict(os.environ, env, clear=True):
            db = Config.from_env().database
        assert (db.host, db.database, db.username, db.password, db.charset) == (
            "db.internal",
            "blog",
            "app",
            "pw",
            "utf8",
        )

    @pytest.mark.unit
    def test_empty_password_is_kept(self):
        with patch.dict(os.environ, {"MVCGEN_DB_PASSWORD": ""}, clear=True):
            assert Config.from_env().database.password == ""

    @pytest.mark.unit
    def test_output_dir(self, tmp_path: Path):
        with patch.dict(os.environ, {"MVCGEN_OUTPUT_DIR": str(tmp_path)}, clear=True):
            assert Config.from_env().output_dir == tmp_path

    @pytest.mark.unit
    def test_empty_output_dir_ignored(self):
        with patch.dict(os.environ, {"MVCGEN_OUTPUT_DIR": ""}, clear=True):
            assert Config.from_env().output_dir == Path(".")
