# lexrel/adapters/persistence/glove_binary.py
"""
glove_binary
============

Reader and writer for the binary GloVe layout produced by the Java GloVe
tooling (`GloveBinaryWriter`), plus a converter from the plain GloVe text
format.

Layout
------
A binary embedding source is a folder holding two files:

- ``dict.bin``: one record per word, in source order::

      writeUTF(word)       2-byte big-endian length + Java modified UTF-8
      writeVLong(offset)   Hadoop WritableUtils variable-length long

  ``offset`` is the byte position of the word's vector in ``vectors.bin``.

- ``vectors.bin``: the vectors back to back, ``D`` big-endian float32 each.

There is no explicit header. The vocabulary size is the number of dictionary
records and the dimensionality is the offset stride divided by 4; both are
validated against the size of ``vectors.bin`` when the folder is opened.

Error behaviour
---------------
- Missing folder/files, truncated records, a non-uniform offset stride or a
  vector table of the wrong size raise `LoadError`.
- The writer refuses records of mismatched dimensionality with
  `InvalidInputError`.
"""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List, Tuple, Union

import numpy as np
import structlog

from lexrel.core.domain.exceptions import InvalidInputError, LoadError
from lexrel.core.domain.models import VectorRecord

logger = structlog.get_logger()

PathLike = Union[str, "os.PathLike[str]"]

DICT_FILE_NAME = "dict.bin"
VECTORS_FILE_NAME = "vectors.bin"
FLOAT_SIZE = 4
VECTOR_DTYPE = np.dtype(">f4")

_MAX_UTF_BYTES = 0xFFFF
_LONG_MIN = -(2 ** 63)
_LONG_MAX = 2 ** 63 - 1


@dataclass(frozen=True, slots=True)
class DictEntry:
    word: str
    offset: int


@dataclass(frozen=True, slots=True)
class GloveHeader:
    """Shape of a binary embedding source, derived from its dictionary."""
    vocabulary_size: int
    dimension: int

    @property
    def stride(self) -> int:
        """Bytes per vector in the vector table."""
        return self.dimension * FLOAT_SIZE


# ---------------------------------------------------------------------------
# Primitive encodings
# ---------------------------------------------------------------------------


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


def write_vlong(out: BinaryIO, value: int) -> None:
    """Writes `value` with the Hadoop `WritableUtils.writeVLong` encoding."""
    if not _LONG_MIN <= value <= _LONG_MAX:
        raise InvalidInputError(f"{value} does not fit in a signed 64-bit long")

    if -112 <= value <= 127:
        out.write(struct.pack(">b", value))
        return

    length = -112
    if value < 0:
        value = ~value
        length = -120

    tmp = value
    while tmp != 0:
        tmp >>= 8
        length -= 1

    out.write(struct.pack(">b", length))
    size = -(length + 120) if length < -120 else -(length + 112)
    out.write(value.to_bytes(size, "big"))


def read_vlong(stream: BinaryIO) -> int:
    """
    Reads one variable-length long.

    Raises:
        EOFError: If the stream ends inside the value.
    """
    first = struct.unpack(">b", _read_exact(stream, 1))[0]
    if first >= -112:
        return first

    negative = first < -120
    size = (-119 - first) if negative else (-111 - first)
    value = int.from_bytes(_read_exact(stream, size - 1), "big")
    return ~value if negative else value


def encode_java_utf(text: str) -> bytes:
    """
    Java "modified UTF-8": NUL is written as two bytes and characters outside
    the BMP as two 3-byte surrogates.
    """
    raw = text.encode("utf-16-be", "surrogatepass")
    units = struct.unpack(f">{len(raw) // 2}H", raw)

    out = bytearray()
    for unit in units:
        if 0x0001 <= unit <= 0x007F:
            out.append(unit)
        elif unit <= 0x07FF:
            out.append(0xC0 | (unit >> 6))
            out.append(0x80 | (unit & 0x3F))
        else:
            out.append(0xE0 | (unit >> 12))
            out.append(0x80 | ((unit >> 6) & 0x3F))
            out.append(0x80 | (unit & 0x3F))

    if len(out) > _MAX_UTF_BYTES:
        raise InvalidInputError(f"encoded word is {len(out)} bytes, limit is {_MAX_UTF_BYTES}")
    return bytes(out)


def decode_java_utf(raw: bytes) -> str:
    """Inverse of `encode_java_utf`. Raises UnicodeDecodeError on malformed input."""
    text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
    # Re-pair surrogates that were encoded one by one
    return text.encode("utf-16-be", "surrogatepass").decode("utf-16-be")


def write_java_utf(out: BinaryIO, text: str) -> None:
    encoded = encode_java_utf(text)
    out.write(struct.pack(">H", len(encoded)))
    out.write(encoded)


def read_java_utf(stream: BinaryIO) -> str:
    (length,) = struct.unpack(">H", _read_exact(stream, 2))
    return decode_java_utf(_read_exact(stream, length))


def decode_vector(raw: bytes) -> np.ndarray:
    """Big-endian float32 bytes -> float64 vector."""
    return np.frombuffer(raw, dtype=VECTOR_DTYPE).astype(np.float64)


# ---------------------------------------------------------------------------
# Folder level reading
# ---------------------------------------------------------------------------


def resolve_paths(folder: PathLike) -> Tuple[Path, Path]:
    """
    Returns the dictionary and vector table paths of a binary folder.

    Raises:
        LoadError: If the folder or one of its files is missing.
    """
    base = Path(folder)
    if not base.is_dir():
        raise LoadError(str(base), "not a directory")

    dict_path = base / DICT_FILE_NAME
    vectors_path = base / VECTORS_FILE_NAME
    for path in (dict_path, vectors_path):
        if not path.is_file():
            raise LoadError(str(base), f"missing '{path.name}'")
    return dict_path, vectors_path


def iter_dictionary(dict_path: Path) -> Iterator[DictEntry]:
    """Streams the records of a ``dict.bin`` file."""
    with dict_path.open("rb") as stream:
        size = os.fstat(stream.fileno()).st_size
        index = 0
        while stream.tell() < size:
            try:
                word = read_java_utf(stream)
                offset = read_vlong(stream)
            except EOFError as e:
                raise LoadError(str(dict_path), f"dictionary truncated in record {index}") from e
            except UnicodeDecodeError as e:
                raise LoadError(str(dict_path), f"record {index} is not valid modified UTF-8") from e
            yield DictEntry(word=word, offset=offset)
            index += 1


def _derive_header(source: str, entries: List[DictEntry], vectors_size: int) -> GloveHeader:
    count = len(entries)
    if count == 0:
        if vectors_size:
            raise LoadError(source, "vector table holds data but the dictionary is empty")
        return GloveHeader(vocabulary_size=0, dimension=0)

    stride = vectors_size if count == 1 else entries[1].offset - entries[0].offset
    if stride <= 0 or stride % FLOAT_SIZE:
        raise LoadError(source, f"invalid vector stride of {stride} bytes")

    for position, entry in enumerate(entries):
        if entry.offset != position * stride:
            raise LoadError(
                source,
                f"inconsistent vector dimensionality at '{entry.word}' (record {position})",
            )

    expected = count * stride
    if vectors_size < expected:
        raise LoadError(source, f"vector table truncated: expected {expected} bytes, found {vectors_size}")
    if vectors_size > expected:
        raise LoadError(source, f"vector table has {vectors_size - expected} unexpected trailing bytes")

    return GloveHeader(vocabulary_size=count, dimension=stride // FLOAT_SIZE)


def read_header(folder: PathLike) -> Tuple[GloveHeader, List[DictEntry]]:
    """
    Scans and validates the dictionary of a binary folder.

    Returns:
        The derived header and the dictionary records in source order.

    Raises:
        LoadError: On any structural problem (see module docstring).
    """
    dict_path, vectors_path = resolve_paths(folder)
    try:
        entries = list(iter_dictionary(dict_path))
        vectors_size = vectors_path.stat().st_size
    except OSError as e:
        raise LoadError(str(folder), f"unreadable: {e}") from e

    return _derive_header(str(folder), entries, vectors_size), entries


def iter_glove_binary(folder: PathLike) -> Iterator[VectorRecord]:
    """
    Streams every record of a binary folder once, in dictionary order.
    Duplicate words are yielded as many times as they occur.
    """
    header, entries = read_header(folder)
    _, vectors_path = resolve_paths(folder)

    try:
        with vectors_path.open("rb") as stream:
            for entry in entries:
                raw = stream.read(header.stride)
                if len(raw) != header.stride:
                    raise LoadError(str(folder), f"vector of '{entry.word}' is truncated")
                yield VectorRecord(word=entry.word, vector=decode_vector(raw))
    except OSError as e:
        raise LoadError(str(folder), f"unreadable: {e}") from e


# ---------------------------------------------------------------------------
# Writing & conversion
# ---------------------------------------------------------------------------


def write_glove_binary(records: Iterable[VectorRecord], folder: PathLike) -> GloveHeader:
    """
    Writes records into a binary folder (created if needed).

    Raises:
        InvalidInputError: If a vector is empty or its dimensionality differs
            from the first record's.
    """
    base = Path(folder)
    base.mkdir(parents=True, exist_ok=True)

    dimension = 0
    count = 0
    with (base / DICT_FILE_NAME).open("wb") as dict_out, (base / VECTORS_FILE_NAME).open("wb") as vectors_out:
        for record in records:
            vector = np.asarray(record.vector, dtype=np.float64)
            if vector.ndim != 1 or vector.size == 0:
                raise InvalidInputError(f"vector of '{record.word}' must be a non-empty 1-D array")
            if count == 0:
                dimension = vector.size
            elif vector.size != dimension:
                raise InvalidInputError(
                    f"vector of '{record.word}' has {vector.size} components, expected {dimension}"
                )

            write_java_utf(dict_out, record.word)
            write_vlong(dict_out, count * dimension * FLOAT_SIZE)
            vectors_out.write(vector.astype(VECTOR_DTYPE).tobytes())
            count += 1

    logger.info("glove_binary_written", path=str(base), vocabulary_size=count, dimension=dimension)
    return GloveHeader(vocabulary_size=count, dimension=dimension)


def iter_glove_text(path: PathLike) -> Iterator[VectorRecord]:
    """
    Streams a GloVe text file (``word v1 v2 ... vD`` per line).

    Raises:
        LoadError: If a line has no components, a component is not a number,
            or the dimensionality changes between lines.
    """
    source = str(path)
    dimension = None
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                parts = line.rstrip().split(" ")
                if not parts[0]:
                    continue

                word, values = parts[0], parts[1:]
                if not values:
                    raise LoadError(source, f"line {line_no}: '{word}' has no vector components")
                try:
                    vector = np.array([float(v) for v in values], dtype=np.float64)
                except ValueError as e:
                    raise LoadError(source, f"line {line_no}: {e}") from e

                if dimension is None:
                    dimension = vector.size
                elif vector.size != dimension:
                    raise LoadError(
                        source,
                        f"line {line_no}: {vector.size} components, expected {dimension}",
                    )
                yield VectorRecord(word=word, vector=vector)
    except OSError as e:
        raise LoadError(source, f"unreadable: {e}") from e


def convert_text_to_binary(text_path: PathLike, folder: PathLike) -> GloveHeader:
    """Converts a GloVe text file into a binary folder."""
    logger.info("glove_text_conversion_started", source=str(text_path), target=str(folder))
    return write_glove_binary(iter_glove_text(text_path), folder)
