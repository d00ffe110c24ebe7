# tests/adapters/test_glove_binary.py
import io
import struct

import pytest
import numpy as np

from lexrel.adapters.persistence.glove_binary import (
    DICT_FILE_NAME,
    VECTORS_FILE_NAME,
    GloveHeader,
    convert_text_to_binary,
    decode_java_utf,
    encode_java_utf,
    iter_glove_binary,
    iter_glove_text,
    read_header,
    read_java_utf,
    read_vlong,
    write_glove_binary,
    write_java_utf,
    write_vlong,
)
from lexrel.core.domain.exceptions import InvalidInputError, LoadError
from tests.conftest import TOY_VECTORS, make_records

def _raw_folder(path, dict_records, vector_rows):
    """
    Writes a folder byte by byte, bypassing the writer's checks.
    dict_records: [(word, offset)], vector_rows: [[floats]]
    """
    path.mkdir()
    with open(path / DICT_FILE_NAME, "wb") as f:
        for word, offset in dict_records:
            write_java_utf(f, word)
            write_vlong(f, offset)
    with open(path / VECTORS_FILE_NAME, "wb") as f:
        for row in vector_rows:
            f.write(struct.pack(f">{len(row)}f", *row))
    return path

class TestVLong:
    @pytest.mark.parametrize(
        "value, encoded",
        [
            (0, b"\x00"),
            (127, b"\x7f"),
            (-112, b"\x90"),
            (300, b"\x8e\x01\x2c"),
            (-200, b"\x87\xc7"),
        ],
    )
    def test_known_encodings(self, value, encoded):
        out = io.BytesIO()
        write_vlong(out, value)
        assert out.getvalue() == encoded
        assert read_vlong(io.BytesIO(encoded)) == value

    def test_large_offsets_read_back(self):
        out = io.BytesIO()
        for value in (128, 2 ** 31, 2 ** 40 + 5, 2 ** 63 - 1, -(2 ** 63)):
            write_vlong(out, value)
        stream = io.BytesIO(out.getvalue())
        assert [read_vlong(stream) for _ in range(5)] == [128, 2 ** 31, 2 ** 40 + 5, 2 ** 63 - 1, -(2 ** 63)]

    def test_out_of_range(self):
        with pytest.raises(InvalidInputError):
            write_vlong(io.BytesIO(), 2 ** 63)

    def test_truncated_value(self):
        with pytest.raises(EOFError):
            read_vlong(io.BytesIO(b"\x8e\x01"))

class TestJavaUtf:
    @pytest.mark.parametrize(
        "text, encoded",
        [
            ("a", b"a"),
            ("\x00", b"\xc0\x80"),
            ("é", b"\xc3\xa9"),
            ("😀", b"\xed\xa0\xbd\xed\xb8\x80"),
        ],
    )
    def test_modified_utf8(self, text, encoded):
        assert encode_java_utf(text) == encoded
        assert decode_java_utf(encoded) == text

    def test_length_prefix(self):
        out = io.BytesIO()
        write_java_utf(out, "naïve")
        raw = out.getvalue()
        assert struct.unpack(">H", raw[:2])[0] == len(raw) - 2
        assert read_java_utf(io.BytesIO(raw)) == "naïve"

    def test_word_too_long(self):
        with pytest.raises(InvalidInputError):
            encode_java_utf("x" * 70000)

class TestReadHeader:
    def test_header_of_written_folder(self, toy_folder):
        header, entries = read_header(toy_folder)
        assert header == GloveHeader(vocabulary_size=3, dimension=2)
        assert header.stride == 8
        assert [e.word for e in entries] == ["cat", "dog", "car"]
        assert [e.offset for e in entries] == [0, 8, 16]

    def test_single_record_dimension_from_table_size(self, glove_folder_factory):
        folder = glove_folder_factory({"solo": [0.5, 0.25, 1.0, 2.0]})
        header, _ = read_header(folder)
        assert header.dimension == 4

    def test_empty_folder_is_valid(self, glove_folder_factory):
        folder = glove_folder_factory([])
        header, entries = read_header(folder)
        assert header == GloveHeader(vocabulary_size=0, dimension=0)
        assert entries == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(LoadError):
            read_header(tmp_path / "nope")

    def test_missing_vector_table(self, toy_folder):
        (toy_folder / VECTORS_FILE_NAME).unlink()
        with pytest.raises(LoadError) as excinfo:
            read_header(toy_folder)
        assert VECTORS_FILE_NAME in str(excinfo.value)

    def test_mismatched_vector_lengths(self, tmp_path):
        """
        Scenario: The second record holds 3 floats while the others hold 2.
        Expected: LoadError naming the first record whose offset breaks the stride.
        """
        folder = _raw_folder(
            tmp_path / "bad",
            [("a", 0), ("b", 8), ("c", 20)],
            [[1.0, 0.0], [0.0, 1.0, 0.0], [1.0, 1.0]],
        )
        with pytest.raises(LoadError) as excinfo:
            read_header(folder)
        assert "inconsistent vector dimensionality at 'c'" in str(excinfo.value)

    def test_trailing_bytes_in_vector_table(self, tmp_path):
        folder = _raw_folder(
            tmp_path / "bad",
            [("a", 0), ("b", 8)],
            [[1.0, 0.0], [0.0, 1.0, 0.0]],
        )
        with pytest.raises(LoadError):
            read_header(folder)

    def test_truncated_vector_table(self, toy_folder):
        vectors = toy_folder / VECTORS_FILE_NAME
        vectors.write_bytes(vectors.read_bytes()[:-4])
        with pytest.raises(LoadError) as excinfo:
            read_header(toy_folder)
        assert "truncated" in str(excinfo.value)

    def test_truncated_dictionary(self, toy_folder):
        dictionary = toy_folder / DICT_FILE_NAME
        dictionary.write_bytes(dictionary.read_bytes()[:-2])
        with pytest.raises(LoadError) as excinfo:
            read_header(toy_folder)
        assert "dictionary truncated" in str(excinfo.value)

    def test_stride_not_a_float_multiple(self, tmp_path):
        folder = tmp_path / "bad"
        folder.mkdir()
        with open(folder / DICT_FILE_NAME, "wb") as f:
            write_java_utf(f, "a")
            write_vlong(f, 0)
            write_java_utf(f, "b")
            write_vlong(f, 6)
        (folder / VECTORS_FILE_NAME).write_bytes(b"\x00" * 12)
        with pytest.raises(LoadError):
            read_header(folder)

class TestStreaming:
    def test_stream_in_source_order(self, toy_folder):
        records = list(iter_glove_binary(toy_folder))
        assert [r.word for r in records] == ["cat", "dog", "car"]
        assert records[1].vector.dtype == np.float64
        np.testing.assert_allclose(records[1].vector, [0.9, 0.1], rtol=1e-6)

    def test_duplicates_are_streamed(self, glove_folder_factory):
        folder = glove_folder_factory([("cat", [1.0, 0.0]), ("dog", [0.0, 1.0]), ("cat", [0.5, 0.5])])
        assert [r.word for r in iter_glove_binary(folder)] == ["cat", "dog", "cat"]

    def test_unicode_words(self, glove_folder_factory):
        folder = glove_folder_factory({"café": [1.0], "😀": [2.0], "a\x00b": [3.0]})
        assert [r.word for r in iter_glove_binary(folder)] == ["café", "😀", "a\x00b"]

class TestWriter:
    def test_returns_header(self, tmp_path):
        header = write_glove_binary(make_records(TOY_VECTORS), tmp_path / "out")
        assert header == GloveHeader(vocabulary_size=3, dimension=2)
        assert (tmp_path / "out" / VECTORS_FILE_NAME).stat().st_size == 3 * 2 * 4

    def test_rejects_mismatched_dimensions(self, tmp_path):
        records = make_records([("a", [1.0, 2.0]), ("b", [1.0])])
        with pytest.raises(InvalidInputError):
            write_glove_binary(records, tmp_path / "out")

    def test_rejects_empty_vector(self, tmp_path):
        with pytest.raises(InvalidInputError):
            write_glove_binary(make_records([("a", [])]), tmp_path / "out")

class TestTextFormat:
    def test_read_text(self, tmp_path):
        text = tmp_path / "glove.txt"
        text.write_text("the 0.1 0.2 0.3\n\nof -0.5 1e-2 4\n", encoding="utf-8")
        records = list(iter_glove_text(text))
        assert [r.word for r in records] == ["the", "of"]
        np.testing.assert_allclose(records[1].vector, [-0.5, 0.01, 4.0])

    def test_inconsistent_text_dimensions(self, tmp_path):
        text = tmp_path / "glove.txt"
        text.write_text("the 0.1 0.2\nof 0.3\n", encoding="utf-8")
        with pytest.raises(LoadError) as excinfo:
            list(iter_glove_text(text))
        assert "line 2" in str(excinfo.value)

    def test_non_numeric_component(self, tmp_path):
        text = tmp_path / "glove.txt"
        text.write_text("the 0.1 abc\n", encoding="utf-8")
        with pytest.raises(LoadError):
            list(iter_glove_text(text))

    def test_word_without_components(self, tmp_path):
        text = tmp_path / "glove.txt"
        text.write_text("lonely\n", encoding="utf-8")
        with pytest.raises(LoadError):
            list(iter_glove_text(text))

    def test_convert_text_to_binary(self, tmp_path):
        text = tmp_path / "glove.txt"
        text.write_text("cat 1 0\ndog 0.9 0.1\ncar 0 1\n", encoding="utf-8")
        header = convert_text_to_binary(text, tmp_path / "bin")
        assert header == GloveHeader(vocabulary_size=3, dimension=2)
        assert [r.word for r in iter_glove_binary(tmp_path / "bin")] == ["cat", "dog", "car"]
