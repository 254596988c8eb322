import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from trellis.common import bus
from trellis.needle import L
from trellis.parser import LineParser
from trellis.spec import (
    BuildConfig,
    BuildResult,
    DirectoryStack,
    OperationKind,
    ParsedLine,
    PlannedStep,
    StructureRootError,
)
from .executor import OperationExecutor

log = logging.getLogger(__name__)


class StructureBuilder:
    def __init__(self, config: Optional[BuildConfig] = None):
        self.config = config or BuildConfig()
        self.parser = LineParser(home_dir=self.config.home_dir)
        self.executor = OperationExecutor(self.config)

    def _lines(self, text: str) -> Iterator[Tuple[int, str]]:
        # Blank lines never reach the stack logic.
        for number, line in enumerate(text.split("\n"), start=1):
            if line.strip():
                yield number, line

    def _report_ragged(self, number: int, line: str, parsed: ParsedLine) -> None:
        if parsed.ragged_indent and self.config.verbose:
            spaces = len(line) - len(line.lstrip())
            bus.debug(
                L.build.ragged_indent, number=number, spaces=spaces, level=parsed.level
            )

    def _ensure_root(self, root: Path) -> None:
        fs = self.config.fs
        try:
            if not fs.exists(root):
                fs.make_dirs(root)
        except OSError as e:
            raise StructureRootError(root, str(e)) from e
        if not fs.is_dir(root):
            raise StructureRootError(root, "a file with that name already exists")

    def build(self, text: str, root: Union[str, Path]) -> BuildResult:
        """
        Creates the structure described by `text` under `root`.

        Per-line failures are reported and recorded on the result; only a root
        directory that cannot be created raises.
        """
        root = self.config.absolute(root)
        if self.config.verbose:
            bus.info(L.build.start, root=root)
        self._ensure_root(root)

        result = BuildResult(root=root)
        stack = DirectoryStack(root)

        for number, line in self._lines(text):
            try:
                parsed = self.parser.parse(line)
                if parsed.operation is None:
                    continue
                self._report_ragged(number, line, parsed)

                stack.truncate(parsed.level)
                operation = self.config.substitute(parsed.operation)
                target = stack.top / operation.name

                if self.config.verbose:
                    bus.debug(
                        L.build.line, kind=operation.kind.value.upper(), line=line.strip()
                    )

                outcome = self.executor.execute(operation, target)
                result.outcomes.append(outcome)
                result.warnings.extend(outcome.warnings)
                if (
                    operation.kind is OperationKind.CREATE_DIRECTORY
                    and outcome.created_directory is not None
                ):
                    stack.push(outcome.created_directory)
            except Exception as e:
                log.debug(f"Line {number} failed", exc_info=True)
                result.warnings.append(
                    bus.render_to_string(
                        L.build.line_failed, number=number, line=line.strip(), error=e
                    )
                )
                bus.warning(L.build.line_failed, number=number, line=line.strip(), error=e)

        if result.success:
            if self.config.verbose:
                bus.success(L.build.success)
        else:
            bus.warning(L.build.with_warnings, count=len(result.warnings))
        return result

    def preview(self, text: str, root: Union[str, Path]) -> List[PlannedStep]:
        """
        Walks the same stack logic as `build` without touching the adapter,
        assuming every directory entry can be created.
        """
        root = self.config.absolute(root)
        stack = DirectoryStack(root)
        steps: List[PlannedStep] = []

        for number, line in self._lines(text):
            parsed = self.parser.parse(line)
            if parsed.operation is None:
                continue
            stack.truncate(parsed.level)
            operation = self.config.substitute(parsed.operation)
            target = stack.top / operation.name
            if operation.source_path is not None:
                operation = replace(
                    operation, source_path=self.config.absolute(operation.source_path)
                )
            steps.append(PlannedStep(number, operation, target))
            if operation.kind is OperationKind.CREATE_DIRECTORY:
                stack.push(target)

        return steps


def create_structure_from_string(
    text: str,
    root_dir: Union[str, Path],
    config: Optional[BuildConfig] = None,
) -> BuildResult:
    """
    Programmatic entry point: builds `text` under `root_dir`.

    Returns normally whether or not warnings were recorded; check
    `BuildResult.success`. Raises StructureRootError only when the root
    directory cannot be created.
    """
    return StructureBuilder(config).build(text, root_dir)


def plan_structure(
    text: str,
    root_dir: Union[str, Path],
    config: Optional[BuildConfig] = None,
) -> List[PlannedStep]:
    return StructureBuilder(config).preview(text, root_dir)
