import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from trellis.common import bus
from trellis.needle import L, SemanticPointer
from trellis.spec import (
    BuildConfig,
    Operation,
    OperationKind,
    OperationOutcome,
    OutcomeStatus,
)

log = logging.getLogger(__name__)


class OperationExecutor:
    """
    Performs one parsed operation against the configured filesystem adapter.

    Nothing raised by the adapter escapes `execute`: every failure becomes a
    warning on the returned outcome plus an empty file at the target, so the
    interpreter always has an entry to keep building under.
    """

    def __init__(self, config: BuildConfig):
        self.config = config
        self.fs = config.fs

    # --- Reporting helpers ---

    def _warn(
        self,
        warnings: List[str],
        msg_id: Union[str, SemanticPointer],
        **kwargs: Any,
    ) -> None:
        warnings.append(bus.render_to_string(msg_id, **kwargs))
        bus.warning(msg_id, **kwargs)

    def _notice(self, msg_id: Union[str, SemanticPointer], **kwargs: Any) -> None:
        if self.config.verbose:
            bus.debug(msg_id, **kwargs)

    # --- Fallback policy ---

    def _fallback(
        self, target: Path, warnings: List[str], error: Exception
    ) -> OperationOutcome:
        self._warn(warnings, L.fs.fallback.created, path=target, error=error)
        try:
            outcome = self._create_file(target)
        except Exception as e:
            log.debug(f"Fallback file creation failed for {target}", exc_info=True)
            self._warn(warnings, L.fs.fallback.failed, path=target, error=e)
            return OperationOutcome(OutcomeStatus.RECOVERED, target, warnings)
        return OperationOutcome(OutcomeStatus.RECOVERED, outcome.path, warnings)

    def _attempt(
        self,
        target: Path,
        action: Callable[[], OperationOutcome],
        cleanup: Optional[Callable[[], None]] = None,
        warnings: Optional[List[str]] = None,
    ) -> OperationOutcome:
        warnings = [] if warnings is None else warnings
        try:
            return action()
        except Exception as e:
            log.debug(f"Operation on {target} failed", exc_info=True)
            if cleanup:
                cleanup()
            return self._fallback(target, warnings, e)

    # --- Entry point ---

    def execute(self, operation: Operation, target: Path) -> OperationOutcome:
        target = self.config.absolute(target)
        return self._attempt(target, lambda: self._dispatch(operation, target))

    def _dispatch(self, operation: Operation, target: Path) -> OperationOutcome:
        self._ensure_directory(target.parent)

        if operation.kind is OperationKind.CREATE_FILE:
            return self._create_file(target)
        if operation.kind is OperationKind.CREATE_DIRECTORY:
            return self._create_directory(target)

        source = self._resolve_source(operation.source_path)
        if not self.fs.exists(source):
            return self._missing_source(operation.kind, source, target)
        if operation.kind is OperationKind.COPY:
            return self._copy(source, target)
        return self._move(source, target)

    # --- Primitive steps ---

    def _ensure_directory(self, path: Path) -> None:
        if not self.fs.exists(path):
            self.fs.make_dirs(path)
            self._notice(L.fs.dir.created, path=path)

    def _resolve_source(self, source: Optional[Path]) -> Path:
        if source is None:
            raise ValueError("Transfer operation without a source path.")
        return self.config.absolute(source)

    def _create_file(self, target: Path) -> OperationOutcome:
        self._ensure_directory(target.parent)
        if self.fs.exists(target):
            self._notice(L.fs.file.exists, path=target)
            return OperationOutcome(OutcomeStatus.SKIPPED, target)
        self.fs.write_text(target, "")
        self._notice(L.fs.file.created, path=target)
        return OperationOutcome(OutcomeStatus.SUCCESS, target)

    def _create_directory(self, target: Path) -> OperationOutcome:
        if self.fs.exists(target):
            self._notice(L.fs.dir.exists, path=target)
            return OperationOutcome(
                OutcomeStatus.SKIPPED, target, created_directory=target
            )
        self.fs.make_dirs(target)
        self._notice(L.fs.dir.created, path=target)
        return OperationOutcome(OutcomeStatus.SUCCESS, target, created_directory=target)

    def _copy_tree(self, source: Path, destination: Path) -> None:
        if destination == source or source in destination.parents:
            raise ValueError(f"Cannot copy '{source}' into itself.")
        if not self.fs.exists(destination):
            self.fs.make_dirs(destination)

        for entry in self.fs.list_dir(source):
            src_path = source / entry.name
            dest_path = destination / entry.name
            if entry.is_dir:
                self._copy_tree(src_path, dest_path)
            else:
                self.fs.copy_file(src_path, dest_path)
                self._notice(L.copy.entry, name=entry.name)

    def _remove(self, path: Path) -> bool:
        """Removes whatever is at `path`; returns True if it was a directory."""
        if self.fs.is_dir(path):
            self.fs.remove_tree(path)
            return True
        self.fs.remove_file(path)
        return False

    def _missing_source(
        self, kind: OperationKind, source: Path, target: Path
    ) -> OperationOutcome:
        warnings: List[str] = []
        self._warn(warnings, L[kind.value].source_missing, source=source)
        try:
            self._create_file(target)
        except Exception as e:
            log.debug(f"Fallback file creation failed for {target}", exc_info=True)
            self._warn(warnings, L.fs.fallback.failed, path=target, error=e)
        return OperationOutcome(OutcomeStatus.RECOVERED, target, warnings)

    # --- Copy ---

    def _copy(self, source: Path, target: Path) -> OperationOutcome:
        warnings: List[str] = []

        def action() -> OperationOutcome:
            try:
                if self.fs.is_dir(source):
                    self._notice(L.copy.directory, source=source, target=target)
                    self._copy_tree(source, target)
                else:
                    self.fs.copy_file(source, target)
            except Exception as e:
                self._warn(warnings, L.copy.failed, source=source, error=e)
                raise
            self._notice(L.copy.done, source=source, target=target)
            return OperationOutcome(OutcomeStatus.SUCCESS, target)

        return self._attempt(target, action, warnings=warnings)

    # --- Move ---

    def _move(self, source: Path, target: Path) -> OperationOutcome:
        if source == target:
            self._notice(L.move.same_path, path=target)
            return OperationOutcome(OutcomeStatus.SKIPPED, target)

        warnings: List[str] = []
        transfer_started = False

        def discard_partial() -> None:
            # Once the destination was cleared, anything there is a
            # half-finished copy.
            if not transfer_started:
                return
            try:
                if self.fs.exists(target):
                    self._remove(target)
            except Exception:
                log.debug(f"Could not discard partial move at {target}", exc_info=True)

        def action() -> OperationOutcome:
            nonlocal transfer_started
            try:
                source_is_dir = self.fs.is_dir(source)
                if source_is_dir and source in target.parents:
                    raise ValueError(f"Cannot move '{source}' into itself.")
                if target in source.parents:
                    raise ValueError(f"Cannot replace '{target}', it contains the source.")
                transfer_started = True
                self._clear_destination(target)
                if source_is_dir:
                    self._notice(L.move.directory, source=source, target=target)
                    self._copy_tree(source, target)
                    self._discard_source(source, target, warnings)
                else:
                    self._notice(L.move.file, source=source, target=target)
                    self._move_file(source, target, warnings)
            except Exception as e:
                self._warn(warnings, L.move.failed, source=source, error=e)
                raise
            self._notice(L.move.done, source=source, target=target)
            status = OutcomeStatus.RECOVERED if warnings else OutcomeStatus.SUCCESS
            return OperationOutcome(status, target, warnings)

        return self._attempt(target, action, cleanup=discard_partial, warnings=warnings)

    def _clear_destination(self, target: Path) -> None:
        if not self.fs.exists(target):
            return
        if self._remove(target):
            self._notice(L.move.replaced_dir, path=target)
        else:
            self._notice(L.move.replaced_file, path=target)

    def _move_file(self, source: Path, target: Path, warnings: List[str]) -> None:
        try:
            self.fs.rename(source, target)
            return
        except OSError:
            log.debug(f"Rename {source} -> {target} failed; copying instead", exc_info=True)
        self.fs.copy_file(source, target)
        self._discard_source(source, target, warnings)

    def _discard_source(self, source: Path, target: Path, warnings: List[str]) -> None:
        try:
            self._remove(source)
        except Exception as e:
            log.debug(f"Could not remove move source {source}", exc_info=True)
            self._warn(warnings, L.move.source_kept, source=source, target=target, error=e)
