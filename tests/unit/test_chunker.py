"""Unit tests for answer chunking."""

import pytest_check as check

from docchat.relay.chunker import MAX_CHUNK_SIZE, chunk_text


class TestChunkText:
    def test_short_text_is_single_chunk(self) -> None:
        text = "Hola, ¿cómo puedo ayudarte hoy?"
        assert chunk_text(text) == [text]

    def test_text_at_max_size_is_single_chunk(self) -> None:
        text = "a" * MAX_CHUNK_SIZE
        assert chunk_text(text) == [text]

    def test_empty_text(self) -> None:
        assert chunk_text("") == [""]

    def test_prefers_sentence_break(self) -> None:
        text = "a" * 650 + "." + "b" * 400

        chunks = chunk_text(text)

        check.equal(len(chunks), 2)
        check.equal(chunks[0], "a" * 650 + ".")
        check.equal(chunks[1], "b" * 400)

    def test_falls_back_to_word_break(self) -> None:
        text = "x" * 700 + " " + "y" * 300

        chunks = chunk_text(text)

        check.equal(chunks[0], "x" * 700 + " ")
        check.equal(chunks[1], "y" * 300)

    def test_sentence_break_wins_over_later_word_break(self) -> None:
        text = "a" * 620 + ". " + "b" * 100 + " " + "c" * 300

        chunks = chunk_text(text)

        check.equal(chunks[0], "a" * 620 + ".")

    def test_break_before_min_size_is_ignored(self) -> None:
        text = "a" * 100 + "." + "b" * 1000

        chunks = chunk_text(text)

        check.equal(len(chunks[0]), MAX_CHUNK_SIZE)
        check.equal("".join(chunks), text)

    def test_hard_cut_without_breaks(self) -> None:
        chunks = chunk_text("z" * 2000)

        assert [len(c) for c in chunks] == [800, 800, 400]

    def test_break_exactly_at_max_extends_by_one(self) -> None:
        text = "a" * 800 + "." + "b" * 300

        chunks = chunk_text(text)

        check.equal(chunks[0], "a" * 800 + ".")
        check.equal(len(chunks[0]), MAX_CHUNK_SIZE + 1)

    def test_chunks_reassemble_prose(self) -> None:
        sentence = "The relay forwards generated text to the browser as it arrives. "
        text = sentence * 60

        chunks = chunk_text(text)

        check.equal("".join(chunks), text)
        check.greater(len(chunks), 1)
        for chunk in chunks:
            check.is_true(0 < len(chunk) <= MAX_CHUNK_SIZE + 1)
        for chunk in chunks[:-1]:
            check.is_true(chunk.endswith("."))

    def test_custom_bounds(self) -> None:
        chunks = chunk_text("one two three four five six", min_chunk_size=5, max_chunk_size=10)

        check.equal("".join(chunks), "one two three four five six")
        for chunk in chunks:
            check.less_equal(len(chunk), 11)
