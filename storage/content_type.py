"""
Content type detection from file bytes.

Only the leading bytes are inspected; the file name plays no part.
Covers the signatures objects in a bucket commonly carry and falls
back to text or generic binary.
"""

SNIFF_LEN = 512

DEFAULT_CONTENT_TYPE = "application/octet-stream"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

# Leading byte signatures, checked in order
SIGNATURES: list[tuple[bytes, str]] = [
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", TEXT_CONTENT_TYPE),
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"\x00\x00\x02\x00", "image/x-icon"),
    (b"OggS\x00", "application/ogg"),
    (b"ID3", "audio/mpeg"),
    (b"fLaC", "audio/flac"),
    (b"\x1a\x45\xdf\xa3", "video/webm"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"PK\x03\x04", "application/zip"),
    (b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    (b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    (b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (b"\x00asm", "application/wasm"),
    (b"wOFF", "font/woff"),
    (b"wOF2", "font/woff2"),
]

# Case-insensitive markup prefixes, matched after leading whitespace
HTML_MARKERS = [
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
]

# Control bytes that never appear in text
BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def _match_html(data: bytes) -> bool:
    upper = data.upper()
    for marker in HTML_MARKERS:
        if not upper.startswith(marker):
            continue
        # Marker must be followed by a tag-terminating byte
        rest = data[len(marker):len(marker) + 1]
        if marker == b"<!--" or rest in (b" ", b">"):
            return True
    return False


def _match_riff(data: bytes) -> str | None:
    if len(data) < 12 or data[:4] != b"RIFF":
        return None
    form = data[8:12]
    if form == b"WEBP":
        return "image/webp"
    if form == b"WAVE":
        return "audio/wave"
    if form == b"AVI ":
        return "video/avi"
    return None


def _match_mp4(data: bytes) -> bool:
    if len(data) < 12 or data[4:8] != b"ftyp":
        return False
    box_size = int.from_bytes(data[:4], "big")
    if box_size < 12 or box_size % 4 != 0 or len(data) < box_size:
        return False
    brands = [data[8:11]] + [data[i:i + 3] for i in range(16, box_size, 4)]
    return b"mp4" in brands


def detect_content_type(data: bytes) -> str:
    """
    Return the MIME type of a buffer based on its leading bytes.

    Empty input is reported as application/octet-stream.

    Example:
        >>> detect_content_type(b"hello")
        'text/plain; charset=utf-8'
        >>> detect_content_type(b"%PDF-1.7")
        'application/pdf'
    """
    if not data:
        return DEFAULT_CONTENT_TYPE

    head = data[:SNIFF_LEN]

    for signature, content_type in SIGNATURES:
        if head.startswith(signature):
            return content_type

    riff = _match_riff(head)
    if riff:
        return riff

    if _match_mp4(head):
        return "video/mp4"

    stripped = head.lstrip(b"\t\n\x0c\r ")
    if _match_html(stripped):
        return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    if any(byte in BINARY_BYTES for byte in head):
        return DEFAULT_CONTENT_TYPE
    return TEXT_CONTENT_TYPE
