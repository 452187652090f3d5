"""Stateful text decoding for byte streams.

Chunk boundaries from the network do not line up with character boundaries,
so a multi-byte character may be split across two reads. The decoder keeps
the incomplete tail between calls to ``feed``.
"""

import codecs


class IncrementalTextDecoder:
    """Decode a byte stream into text one chunk at a time.

    Example:
        >>> decoder = IncrementalTextDecoder()
        >>> decoder.feed(b"caf\\xc3")
        'caf'
        >>> decoder.feed(b"\\xa9")
        'é'
        >>> decoder.finish()
        ''
    """

    def __init__(self, encoding: str = "utf-8", errors: str = "replace") -> None:
        self.encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)(errors=errors)

    def feed(self, data: bytes) -> str:
        """Decode a chunk, holding back any trailing partial sequence."""
        return self._decoder.decode(data, final=False)

    def finish(self) -> str:
        """Flush pending bytes at end of stream.

        An incomplete trailing sequence decodes to the replacement character
        with the default ``errors="replace"``.
        """
        text = self._decoder.decode(b"", final=True)
        self._decoder.reset()
        return text
