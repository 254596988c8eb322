from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from trellis.common import MemoryFileSystem
from trellis.spec import (
    BuildConfig,
    BuildResult,
    DirectoryStack,
    Operation,
    OperationKind,
    PlannedStep,
)


def test_stack_truncates_to_level_and_keeps_root():
    stack = DirectoryStack(Path("/r"))
    stack.push(Path("/r/a"))
    stack.push(Path("/r/a/b"))

    stack.truncate(1)
    assert stack.top == Path("/r/a")
    assert len(stack) == 2

    stack.truncate(0)
    assert stack.top == Path("/r")

    stack.truncate(-3)
    assert stack.depth == 0
    assert stack[0] == Path("/r")


def test_stack_truncate_to_deeper_level_is_a_no_op():
    stack = DirectoryStack(Path("/r"))
    stack.truncate(4)
    assert len(stack) == 1


def test_operation_requires_source_only_for_transfers():
    with pytest.raises(ValueError):
        Operation(kind=OperationKind.COPY, name="x")
    with pytest.raises(ValueError):
        Operation(kind=OperationKind.CREATE_FILE, name="x", source_path=Path("/a"))
    with pytest.raises(ValueError):
        Operation(kind=OperationKind.CREATE_DIRECTORY, name="")


def _config(**kwargs) -> BuildConfig:
    return BuildConfig(fs=MemoryFileSystem(), **kwargs)


def test_substitution_replaces_first_occurrence_in_file_names():
    config = _config(search="old", replace="new", replace_file_names=True)
    op = Operation(kind=OperationKind.CREATE_FILE, name="old-old.txt")

    renamed = config.substitute(op)

    assert renamed.name == "new-old.txt"
    # The original value is untouched.
    assert op.name == "old-old.txt"


def test_substitution_respects_kind_flags():
    config = _config(search="old", replace="new", replace_file_names=True)
    folder = Operation(kind=OperationKind.CREATE_DIRECTORY, name="old-dir")
    assert config.substitute(folder) is folder

    config = _config(search="old", replace="new", replace_folder_names=True)
    assert config.substitute(folder).name == "new-dir"


def test_substitution_is_literal_and_skips_transfers():
    config = _config(
        search=".*", replace="X", replace_file_names=True, replace_folder_names=True
    )
    assert config.substitute(Operation(OperationKind.CREATE_FILE, "a.txt")).name == "a.txt"
    assert config.substitute(Operation(OperationKind.CREATE_FILE, "a.*.txt")).name == "aX.txt"

    copy = Operation(OperationKind.COPY, "old.txt", source_path=Path("/src/old.txt"))
    config = _config(search="old", replace="new", replace_file_names=True)
    assert config.substitute(copy) is copy


def test_empty_search_disables_substitution():
    config = _config(search="", replace="prefix-", replace_file_names=True)
    op = Operation(OperationKind.CREATE_FILE, "a.txt")
    assert config.substitute(op) is op


def test_build_config_is_immutable():
    config = _config()
    with pytest.raises(FrozenInstanceError):
        config.verbose = True


def test_build_result_success_tracks_warnings():
    result = BuildResult(root=Path("/r"))
    assert result.success
    result.warnings.append("something went wrong")
    assert not result.success


def test_planned_step_descriptions():
    copy = Operation(OperationKind.COPY, "b.txt", source_path=Path("/src/a.txt"))
    assert PlannedStep(1, copy, Path("/r/b.txt")).describe() == "[COPY] /src/a.txt -> /r/b.txt"
    folder = Operation(OperationKind.CREATE_DIRECTORY, "d")
    assert PlannedStep(2, folder, Path("/r/d")).describe() == "[DIR] /r/d"
