"""Split a complete answer into display-sized segments for streaming."""

MIN_CHUNK_SIZE = 600
MAX_CHUNK_SIZE = 800


def chunk_text(
    text: str,
    min_chunk_size: int = MIN_CHUNK_SIZE,
    max_chunk_size: int = MAX_CHUNK_SIZE,
) -> list[str]:
    """Split text into segments of roughly min..max characters.

    Each cut prefers the end of a sentence, then a word boundary, as long as
    the resulting segment is longer than ``min_chunk_size``; otherwise the
    text is cut hard at ``max_chunk_size``. Joining the segments gives back
    the original text.
    """
    if len(text) <= max_chunk_size:
        return [text]

    chunks: list[str] = []
    pos = 0
    while pos < len(text):
        end = min(pos + max_chunk_size, len(text))

        if end < len(text):
            # A break character sitting exactly at `end` still counts
            sentence_break = text.rfind(".", 0, end + 1)
            word_break = text.rfind(" ", 0, end + 1)
            if sentence_break > pos + min_chunk_size:
                end = sentence_break + 1
            elif word_break > pos + min_chunk_size:
                end = word_break + 1

        chunks.append(text[pos:end])
        pos = end

    return chunks
