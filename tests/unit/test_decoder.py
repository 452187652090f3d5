"""Unit tests for IncrementalTextDecoder."""

import pytest_check as check

from chat_relay.client.decoder import IncrementalTextDecoder


class TestIncrementalTextDecoder:
    """Tests for decoding text split across chunk boundaries."""

    def test_ascii_passes_through(self) -> None:
        """Single-byte text decodes chunk by chunk."""
        decoder = IncrementalTextDecoder()

        check.equal(decoder.feed(b"Hel"), "Hel")
        check.equal(decoder.feed(b"lo"), "lo")
        check.equal(decoder.finish(), "")

    def test_holds_partial_two_byte_sequence(self) -> None:
        """A split 'é' is held back until its second byte arrives."""
        decoder = IncrementalTextDecoder()

        check.equal(decoder.feed(b"caf\xc3"), "caf")
        check.equal(decoder.feed(b"\xa9!"), "é!")

    def test_split_matches_single_chunk(self) -> None:
        """Every split point of multi-byte text decodes to the same string."""
        text = "naïve ☕ 日本 😀"
        data = text.encode("utf-8")

        for split in range(len(data) + 1):
            decoder = IncrementalTextDecoder()
            decoded = decoder.feed(data[:split]) + decoder.feed(data[split:]) + decoder.finish()
            check.equal(decoded, text, f"split at byte {split}")

    def test_one_byte_at_a_time(self) -> None:
        """Feeding a four-byte emoji byte by byte yields it once, at the end."""
        decoder = IncrementalTextDecoder()
        pieces = [decoder.feed(bytes([b])) for b in "😀".encode()]

        check.equal(pieces, ["", "", "", "😀"])

    def test_finish_flushes_truncated_sequence(self) -> None:
        """An incomplete trailing sequence becomes a replacement character."""
        decoder = IncrementalTextDecoder()

        check.equal(decoder.feed(b"ok\xe2\x98"), "ok")
        check.equal(decoder.finish(), "�")

    def test_other_encodings(self) -> None:
        """The encoding named by the response charset is honored."""
        decoder = IncrementalTextDecoder("utf-16-le")
        data = "hé".encode("utf-16-le")

        check.equal(decoder.feed(data[:3]) + decoder.feed(data[3:]), "hé")
