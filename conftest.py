from pathlib import Path

import pytest

from trellis.common import MemoryFileSystem
from trellis.spec import BuildConfig
from trellis.test_utils import WorkspaceFactory


@pytest.fixture
def workspace_factory(tmp_path, monkeypatch):
    # Clean workspace per test, used as the working directory.
    factory = WorkspaceFactory(tmp_path)
    monkeypatch.chdir(tmp_path)
    return factory


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture
def memory_config(memory_fs: MemoryFileSystem) -> BuildConfig:
    return BuildConfig(
        fs=memory_fs,
        home_dir=Path("/home/user"),
        working_dir=Path("/work"),
    )
