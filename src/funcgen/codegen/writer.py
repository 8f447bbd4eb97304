"""Output sinks for generated function text.

A generation pass opens exactly one sink, appends every generated function to it and
closes it once, after the last declaration.
"""

from __future__ import annotations

import io
import typing
from pathlib import Path

DEFAULT_FILE_NAME = "GeneratedFunctions"
DEFAULT_EXTENSION = "kt"


class OutputSink(typing.Protocol):
    def write(self, text: str) -> None: ...

    def close(self) -> None: ...


def output_path(
    output_dir: Path,
    package_name: str = "",
    file_name: str = DEFAULT_FILE_NAME,
    extension: str = DEFAULT_EXTENSION,
) -> Path:
    # Convert package name to a directory path
    package_dir = output_dir.joinpath(*package_name.split(".")) if package_name else output_dir
    return package_dir / f"{file_name}.{extension}"


class FileSink:
    """Writes generated text to a single UTF-8 file."""

    def __init__(self, path: Path, stream: typing.TextIO):
        self.path = path
        self._stream = stream
        self.closed = False

    @classmethod
    def open(
        cls,
        output_dir: Path,
        package_name: str = "",
        file_name: str = DEFAULT_FILE_NAME,
        extension: str = DEFAULT_EXTENSION,
    ) -> FileSink:
        path = output_path(Path(output_dir), package_name, file_name, extension)
        # Create parent directories
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(path, path.open("w", encoding="utf-8", newline="\n"))

    def write(self, text: str) -> None:
        if self.closed:
            raise ValueError(f"Write to closed output {self.path}")
        self._stream.write(text)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._stream.close()


class BufferSink:
    """Collects generated text in memory."""

    def __init__(self):
        self._buffer = io.StringIO()
        self.closed = False
        self.close_count = 0

    def write(self, text: str) -> None:
        if self.closed:
            raise ValueError("Write to closed output buffer")
        self._buffer.write(text)

    def close(self) -> None:
        self.close_count += 1
        self.closed = True

    def getvalue(self) -> str:
        return self._buffer.getvalue()
