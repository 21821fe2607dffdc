"""Tests for configuration and seed loading."""

from datetime import datetime
from pathlib import Path

import pytest
from todo_board.config import AppConfig, load_config
from todo_board.exceptions import ConfigError
from todo_board.models import TaskDefaults
from todo_board.seed import SAMPLE_TASKS, load_seed_file, sample_tasks


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


class TestAppConfig:
    """Tests for AppConfig validation."""

    def test_defaults(self):
        config = AppConfig()

        assert config.task_defaults == TaskDefaults()
        assert config.sample_data is True
        assert config.seed_file is None
        assert config.level == 30

    def test_priority_normalized(self):
        assert AppConfig(default_priority="HIGH").default_priority == "high"

    def test_invalid_priority(self):
        with pytest.raises(ConfigError, match="Invalid priority"):
            AppConfig(default_priority="urgent")

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError, match="Invalid log_level"):
            AppConfig(log_level="chatty")

    def test_empty_default_title(self):
        with pytest.raises(ConfigError, match="default_title"):
            AppConfig(default_title="  ")

    def test_with_overrides_ignores_none(self):
        config = AppConfig(default_category="work").with_overrides(
            default_category=None, sample_data=False
        )

        assert config.default_category == "work"
        assert config.sample_data is False


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_no_sources(self):
        assert load_config() == AppConfig()

    def test_yaml_file(self, write_file):
        path = write_file("board.yaml", "default_category: work\nsample_data: false\nlog_level: info\n")
        config = load_config(path)

        assert config.default_category == "work"
        assert config.sample_data is False
        assert config.log_level == "INFO"

    def test_empty_yaml_file(self, write_file):
        assert load_config(write_file("empty.yaml", "")) == AppConfig()

    def test_env_overrides_yaml(self, write_file, monkeypatch):
        path = write_file("board.yaml", "default_category: work\n")
        monkeypatch.setenv("TODO_BOARD_DEFAULT_CATEGORY", "home")
        monkeypatch.setenv("TODO_BOARD_SAMPLE_DATA", "no")
        monkeypatch.setenv("TODO_BOARD_SEED_FILE", "/tmp/tasks.yaml")

        config = load_config(path)

        assert config.default_category == "home"
        assert config.sample_data is False
        assert config.seed_file == Path("/tmp/tasks.yaml")

    def test_invalid_boolean(self, monkeypatch):
        monkeypatch.setenv("TODO_BOARD_SAMPLE_DATA", "maybe")
        with pytest.raises(ConfigError, match="Invalid boolean"):
            load_config()

    def test_unknown_key(self, write_file):
        with pytest.raises(ConfigError, match="Unknown config keys"):
            load_config(write_file("board.yaml", "colour: blue\n"))

    def test_not_a_mapping(self, write_file):
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(write_file("board.yaml", "- a\n- b\n"))

    def test_invalid_yaml(self, write_file):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(write_file("board.yaml", "key: [unclosed\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(tmp_path / "missing.yaml")


class TestSeed:
    """Tests for sample data and seed files."""

    def test_sample_tasks(self):
        tasks = sample_tasks()

        assert [t.id for t in tasks] == [1, 2, 3, 4]
        assert [t.title for t in tasks] == [raw["title"] for raw in SAMPLE_TASKS]
        assert tasks[2].completed is True

    def test_load_seed_file(self, write_file):
        path = write_file(
            "tasks.yaml",
            "- id: 10\n"
            "  title: Plan trip\n"
            "  priority: high\n"
            "  created_at: '2026-01-02T08:00:00'\n"
            "- id: 11\n"
            "  completed: true\n",
        )
        tasks = load_seed_file(path, TaskDefaults(category="inbox"))

        assert [t.id for t in tasks] == [10, 11]
        assert tasks[0].created_at == datetime(2026, 1, 2, 8, 0)
        assert tasks[0].category == "inbox"
        assert tasks[1].title == "Untitled Task"
        assert tasks[1].completed is True

    def test_seed_file_empty(self, write_file):
        assert load_seed_file(write_file("tasks.yaml", "")) == []

    def test_seed_file_not_a_list(self, write_file):
        with pytest.raises(ConfigError, match="must contain a list"):
            load_seed_file(write_file("tasks.yaml", "id: 1\n"))

    def test_seed_entry_without_id(self, write_file):
        with pytest.raises(ConfigError, match="Entry 1"):
            load_seed_file(write_file("tasks.yaml", "- title: Orphan\n"))

    def test_seed_completed_strings(self, write_file):
        path = write_file(
            "tasks.yaml",
            "- id: 1\n  title: A\n  completed: \"false\"\n"
            "- id: 2\n  title: B\n  completed: \"yes\"\n"
            "- id: 3\n  title: C\n  completed: 0\n",
        )
        tasks = load_seed_file(path)

        assert [t.completed for t in tasks] == [False, True, False]

    def test_seed_completed_invalid(self, write_file):
        path = write_file("tasks.yaml", "- id: 1\n  completed: maybe\n")
        with pytest.raises(ConfigError, match="Entry 1.*Invalid completed"):
            load_seed_file(path)

    def test_seed_id_must_be_positive(self, write_file):
        with pytest.raises(ConfigError, match="Entry 2.*Invalid task id"):
            load_seed_file(write_file("tasks.yaml", "- id: 1\n- id: 0\n"))

    def test_seed_entry_not_mapping(self, write_file):
        with pytest.raises(ConfigError, match="not a mapping"):
            load_seed_file(write_file("tasks.yaml", "- just text\n"))

    def test_seed_file_missing(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read seed file"):
            load_seed_file(tmp_path / "missing.yaml")
