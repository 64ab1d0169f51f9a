"""Tests for persistence safety features (backups, atomic writes, corruption handling)."""

import json
from pathlib import Path

import pytest
from pydantic import BaseModel, Field

from rainbowtoken.exceptions import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
)
from rainbowtoken.model_manager.persistence import PydanticPersistence


class SampleModel(BaseModel):
    """Simple model for testing."""

    name: str = "test"
    value: int = Field(default=42, ge=0)


class TestPersistenceSafety:
    """Test safety features of PydanticPersistence."""

    def test_save_creates_backup(self, tmp_path: Path):
        """Test that save_json creates a .bak file before overwriting."""
        path = tmp_path / "game.json"

        PydanticPersistence.save_json(SampleModel(name="original", value=1), path, backup=False)
        PydanticPersistence.save_json(SampleModel(name="modified", value=2), path, backup=True)

        backup_path = path.with_suffix(".json.bak")
        assert backup_path.exists()

        backup_data = PydanticPersistence.load_json(backup_path, SampleModel)
        assert backup_data.name == "original"
        assert backup_data.value == 1

        current_data = PydanticPersistence.load_json(path, SampleModel)
        assert current_data.name == "modified"
        assert current_data.value == 2

    def test_save_without_backup(self, tmp_path: Path):
        """Test that backup can be disabled."""
        path = tmp_path / "game.json"

        PydanticPersistence.save_json(SampleModel(name="original"), path, backup=False)
        PydanticPersistence.save_json(SampleModel(name="modified"), path, backup=False)

        assert not path.with_suffix(".json.bak").exists()

    def test_first_save_has_nothing_to_back_up(self, tmp_path: Path):
        path = tmp_path / "game.json"
        PydanticPersistence.save_json(SampleModel(), path)
        assert not path.with_suffix(".json.bak").exists()

    def test_atomic_write_cleans_up_temp_file(self, tmp_path: Path):
        """Test that temporary file is cleaned up after successful write."""
        path = tmp_path / "game.json"

        PydanticPersistence.save_json(SampleModel(name="test", value=123), path)

        assert not path.with_suffix(".json.tmp").exists()
        loaded = PydanticPersistence.load_json(path, SampleModel)
        assert loaded.value == 123

    def test_save_creates_parent_directories(self, tmp_path: Path):
        path = tmp_path / "nested" / "dir" / "game.json"
        PydanticPersistence.save_json(SampleModel(), path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"name": "test", "value": 42}

    def test_load_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.load_json(tmp_path / "missing.json", SampleModel)

    def test_load_empty_file_raises(self, tmp_path: Path):
        path = tmp_path / "empty.json"
        path.write_text("   \n", encoding="utf-8")

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            PydanticPersistence.load_json(path, SampleModel)
        assert exc_info.value.user_message == "Configuration file is empty"

    def test_load_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "corrupted.json"
        path.write_text("{ invalid json }", encoding="utf-8")

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            PydanticPersistence.load_json(path, SampleModel)
        assert exc_info.value.file_path == str(path)

    def test_load_schema_violation_raises(self, tmp_path: Path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps({"name": "x", "value": -5}), encoding="utf-8")

        with pytest.raises(ConfigValidationError) as exc_info:
            PydanticPersistence.load_json(path, SampleModel)
        assert exc_info.value.field == "value"
        assert exc_info.value.value == -5

    def test_load_json_or_default_missing_file(self, tmp_path: Path):
        """Test load_json_or_default with missing file."""
        path = tmp_path / "missing.json"

        result = PydanticPersistence.load_json_or_default(path, SampleModel)

        assert result.name == "test"
        assert result.value == 42
        # Defaults are not written
        assert not path.exists()

    def test_load_json_or_default_with_factory(self, tmp_path: Path):
        result = PydanticPersistence.load_json_or_default(
            tmp_path / "missing.json",
            SampleModel,
            default_factory=lambda: SampleModel(name="custom", value=999),
        )
        assert result.name == "custom"

    def test_load_json_or_default_corrupted_file_raises(self, tmp_path: Path):
        """Corrupted files are reported, never silently replaced."""
        path = tmp_path / "corrupted.json"
        path.write_text("{ invalid }", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            PydanticPersistence.load_json_or_default(path, SampleModel)
        assert path.read_text(encoding="utf-8") == "{ invalid }"
