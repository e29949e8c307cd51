"""
Delimited-source discovery, chunked loading, and dataset assembly.
"""
from __future__ import annotations

import codecs
import datetime as dt
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional, Union

import pandas as pd

from climate_outlook.config import LOAD_CHUNK_ROWS
from climate_outlook.data.normalize import build_header_map, discover_variables, normalize_frame
from climate_outlook.data.schemas import Dataset

Source = Union[str, Path, IO]


class LoadCancelled(Exception):
    """Raised when the caller cancels an in-flight load."""


# ---------------------------------------------------------------------------
# Delimiter detection
# ---------------------------------------------------------------------------

def detect_delimiter(first_line: str) -> str:
    """Semicolon if the header line contains one, else comma."""
    return ";" if ";" in first_line else ","


class _ReplayStream:
    """Text reader that replays an already-consumed first line before the rest.

    Lets the delimiter be sniffed from streams that cannot seek. Byte streams
    are decoded incrementally as UTF-8 (a leading BOM is dropped). When
    ``cancel`` is set, the next read from the underlying stream raises
    LoadCancelled, so a slow source stops mid-chunk.
    """

    mode = "r"

    def __init__(self, head: str, stream: IO, decoder=None, cancel: Optional[threading.Event] = None) -> None:
        self._buffer = head
        self._stream = stream
        self._decoder = decoder
        self._cancel = cancel

    def _pull(self, size: int) -> str:
        if self._cancel is not None and self._cancel.is_set():
            raise LoadCancelled("load cancelled while reading")
        chunk = self._stream.read(size)
        if self._decoder is not None:
            return self._decoder.decode(chunk or b"", final=not chunk)
        return chunk or ""

    def read(self, size: int = -1) -> str:
        if size is None or size < 0:
            out = self._buffer + self._pull(-1)
            self._buffer = ""
            return out
        while len(self._buffer) < size:
            chunk = self._pull(size)
            if not chunk:
                break
            self._buffer += chunk
        out, self._buffer = self._buffer[:size], self._buffer[size:]
        return out

    def readline(self) -> str:
        while "\n" not in self._buffer:
            chunk = self._pull(8192)
            if not chunk:
                break
            self._buffer += chunk
        idx = self._buffer.find("\n")
        if idx < 0:
            out, self._buffer = self._buffer, ""
        else:
            out, self._buffer = self._buffer[: idx + 1], self._buffer[idx + 1:]
        return out

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.readline()
            if not line:
                return
            yield line


def _read_first_line(stream: IO):
    """Read the header line of a text or byte stream; return (line, decoder)."""
    first = stream.readline()
    if isinstance(first, bytes):
        decoder = codecs.getincrementaldecoder("utf-8-sig")()
        return decoder.decode(first), decoder
    return first.lstrip("\ufeff"), None


@contextmanager
def open_source(source: Source, cancel: Optional[threading.Event] = None):
    """Yield (text_reader, delimiter, label) for a path or an open stream."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        with open(path, "r", encoding="utf-8-sig", newline="") as fh:
            first, decoder = _read_first_line(fh)
            yield _ReplayStream(first, fh, decoder, cancel), detect_delimiter(first), str(path)
    else:
        first, decoder = _read_first_line(source)
        label = getattr(source, "name", None)
        yield _ReplayStream(first, source, decoder, cancel), detect_delimiter(first), (
            str(label) if isinstance(label, (str, Path)) else "<stream>"
        )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_dataset(
    source: Source,
    cancel: Optional[threading.Event] = None,
    chunk_rows: int = LOAD_CHUNK_ROWS,
) -> Dataset:
    """Read, normalize, and assemble a complete Dataset.

    Nothing is published here: the caller decides what to do with the result.
    Raises on I/O or parse errors, and LoadCancelled once ``cancel`` is set
    (checked before every read from the source and between chunks).
    """
    frames: list[pd.DataFrame] = []
    raw_rows = 0

    with open_source(source, cancel) as (reader, delimiter, label):
        csv_reader = pd.read_csv(
            reader,
            sep=delimiter,
            dtype=str,
            skipinitialspace=True,
            chunksize=chunk_rows,
        )
        with csv_reader:
            header_map: dict[str, str] | None = None
            for chunk in csv_reader:
                if cancel is not None and cancel.is_set():
                    raise LoadCancelled(f"load of {label} cancelled")
                chunk.columns = [str(c).strip() for c in chunk.columns]
                if header_map is None:
                    header_map = build_header_map(chunk.columns)
                raw_rows += len(chunk)
                frames.append(normalize_frame(chunk, header_map))

    if cancel is not None and cancel.is_set():
        raise LoadCancelled(f"load of {label} cancelled")

    if frames:
        records = pd.concat(frames, ignore_index=True)
    else:
        records = Dataset.empty().records

    variables = discover_variables(records)
    dropped = raw_rows - len(records)
    print(f"  {label}: {raw_rows:,} rows read, {dropped:,} without a usable date")
    print(f"  Loaded {len(records):,} rows; vars: {', '.join(sorted(variables)) or '(none)'}")

    return Dataset(
        records=records,
        variables=variables,
        source=label,
        loaded_at=dt.datetime.now(dt.timezone.utc),
    )
