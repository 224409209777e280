"""Output tree writer.

Materializes generated pages and copied assets under the output root.
Every file is written to a temporary file in its target directory and then
moved into place, so a failed write never leaves a truncated file behind.
"""

import logging
import os
import shutil
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from mdsite.core.types import ContentPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputFile:
    """A file to materialize in the output tree.

    Exactly one of data and copy_from is set.

    Attributes:
        path: File path relative to the output root
        source: Content path that produced the file, for error reports
        data: Generated bytes
        copy_from: Source file copied byte for byte
    """

    path: ContentPath
    source: str
    data: bytes | None = None
    copy_from: Path | None = None


@dataclass(frozen=True)
class WriteFailure:
    """A file that could not be written."""

    path: ContentPath
    source: str
    error: str

    def __str__(self) -> str:
        return f"{self.source} -> {self.path}: {self.error}"


@dataclass
class WriteReport:
    """Outcome of writing a batch of files."""

    written: list[ContentPath] = field(default_factory=list)
    failed: list[WriteFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class SiteWriter:
    """Writes files under an output root.

    The build is additive: existing files are overwritten, unrelated files
    are kept unless the writer is created with clean=True.
    """

    def __init__(self, output_root: Path, *, clean: bool = False) -> None:
        """Initialize writer.

        Args:
            output_root: Output directory (created if absent)
            clean: Remove existing output directory contents in prepare()
        """
        self._output_root = output_root
        self._clean = clean
        self._report = WriteReport()

    @property
    def output_root(self) -> Path:
        return self._output_root

    @property
    def report(self) -> WriteReport:
        return self._report

    def prepare(self) -> None:
        """Create the output directory, emptying it first when cleaning."""
        if self._clean and self._output_root.exists():
            logger.info(f"Cleaning output directory {self._output_root}")
            for child in self._output_root.iterdir():
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
        self._output_root.mkdir(parents=True, exist_ok=True)

    def write(self, file: OutputFile) -> WriteFailure | None:
        """Write one file, recording the outcome in the report.

        Args:
            file: File to write

        Returns:
            WriteFailure if the file could not be written, None otherwise
        """
        target = file.path.to_fs(self._output_root)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self._write_atomic(target, file)
        except OSError as e:
            return self.record_failure(file.path, file.source, str(e))

        logger.debug(f"Wrote {file.source} -> {file.path}")
        self._report.written.append(file.path)
        return None

    def record_failure(self, path: ContentPath, source: str, error: str) -> WriteFailure:
        """Record a file that could not be produced at all."""
        failure = WriteFailure(path=path, source=source, error=error)
        logger.error(f"Failed to write {failure}")
        self._report.failed.append(failure)
        return failure

    def write_all(self, files: Iterable[OutputFile]) -> WriteReport:
        """Write every file, continuing past individual failures."""
        for file in files:
            self.write(file)
        return self._report

    def _write_atomic(self, target: Path, file: OutputFile) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=".mdsite-", dir=target.parent)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as tmp:
                if file.copy_from is not None:
                    with file.copy_from.open("rb") as src:
                        shutil.copyfileobj(src, tmp)
                elif file.data is not None:
                    tmp.write(file.data)
            if file.copy_from is not None:
                shutil.copymode(file.copy_from, tmp_path)
            else:
                os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, target)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


def write_site(
    output_root: Path,
    files: Iterable[OutputFile],
    *,
    clean: bool = False,
) -> WriteReport:
    """Write a sequence of files under output_root.

    Args:
        output_root: Output directory (created if absent)
        files: Files to write
        clean: Remove existing contents first

    Returns:
        WriteReport listing written and failed files
    """
    writer = SiteWriter(output_root, clean=clean)
    writer.prepare()
    return writer.write_all(files)
