"""Shared pytest fixtures for globignore tests."""
import os
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml


@pytest.fixture(scope="session")
def test_data_dir() -> Path:
    """Path to test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture(scope="session")
def basic_ruleset_file(test_data_dir: Path) -> Path:
    """Annotated rules file shipped with the tests."""
    return test_data_dir / "basic.ruleset"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep GLOBIGNORE_* variables of the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("GLOBIGNORE_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    """Create a small rules file."""
    path = tmp_path / "rules.ignore"
    path.write_text("# build output\n*.o\n/build\n!keep.o\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_config(rules_file: Path) -> Dict[str, Any]:
    """Provide a sample globignore configuration."""
    return {
        "globignore": {
            "rules_file": str(rules_file),
            "matching": {"strict_question_mark": False},
            "logging": {"level": "ERROR", "file": None},
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = tmp_path / "globignore.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path
