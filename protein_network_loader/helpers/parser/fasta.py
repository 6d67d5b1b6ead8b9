FASTA_HEADER_PREFIX = '>'


class FastaRecordBuffer:
    """
    Line-fed FASTA accumulator.

    The buffer is either ``idle`` (no header seen since the last flush) or
    ``accumulating`` (a header was seen and sequence lines are being joined).
    A header line or the end of the stream triggers a flush, which hands back
    the buffered ``(identifier, sequence)`` pair and returns to ``idle``.

    The identifier is everything after ``>``, kept verbatim (no splitting at
    inner whitespace) except that trailing whitespace is removed, so a header
    written as ``>P1 \\t`` stores ``P1`` rather than a key with invisible
    padding. Sequence lines are stripped and concatenated without separator.
    Records with an empty identifier or an empty sequence are not emitted, and
    lines seen before the first header are discarded.

    Example::

        buffer = FastaRecordBuffer()
        for line in handle:
            record = buffer.feed(line)
            if record:
                store(record)
        record = buffer.close()
    """

    IDLE = 'idle'
    ACCUMULATING = 'accumulating'

    def __init__(self):
        self.state = self.IDLE
        self.identifier = None
        self._chunks = []

    def feed(self, line):
        """
        Consumes one line.

        :return: The flushed ``(identifier, sequence)`` when ``line`` is a header
            closing a non-empty record, otherwise None.
        """
        line = line.rstrip('\r\n')
        if line.startswith(FASTA_HEADER_PREFIX):
            record = self.flush()
            self.identifier = line[len(FASTA_HEADER_PREFIX):].rstrip()
            self.state = self.ACCUMULATING
            return record

        if self.state == self.ACCUMULATING:
            chunk = line.strip()
            if chunk:
                self._chunks.append(chunk)
        return None

    def flush(self):
        record = None
        if self.state == self.ACCUMULATING and self.identifier and self._chunks:
            record = (self.identifier, ''.join(self._chunks))
        self.state = self.IDLE
        self.identifier = None
        self._chunks = []
        return record

    def close(self):
        """End of stream: flushes whatever record is still buffered."""
        return self.flush()


def iter_fasta_records(handle):
    """
    Streams ``(identifier, sequence)`` pairs from a FASTA text handle.

    :param handle: Iterable of text lines.
    """
    buffer = FastaRecordBuffer()
    for line in handle:
        record = buffer.feed(line)
        if record:
            yield record
    record = buffer.close()
    if record:
        yield record
