"""Extension to file-type classification."""

from typing import NamedTuple


class FileKind(NamedTuple):
    type: str
    extension: str


DOCUMENT_EXTENSIONS = frozenset({
    "pdf", "doc", "docx", "txt", "xls", "xlsx", "csv", "rtf", "ods", "ppt",
    "odp", "md", "html", "htm", "epub", "pages", "fig", "psd", "ai", "indd",
    "xd", "sketch", "afdesign", "afphoto",
})

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "svg", "webp"})

VIDEO_EXTENSIONS = frozenset({"mp4", "avi", "mov", "mkv", "webm"})

AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "ogg", "flac"})


def get_file_type(file_name: str) -> FileKind:
    """
    Classify a file by the extension of its name.

    Args:
        file_name: Name of the file, e.g. "report.PDF"

    Returns:
        FileKind with the type (document, image, video, audio or other)
        and the lower-cased extension ("" when the name has none)
    """
    _, dot, extension = file_name.rpartition(".")
    extension = extension.lower() if dot else ""

    if not extension:
        return FileKind("other", "")

    if extension in DOCUMENT_EXTENSIONS:
        return FileKind("document", extension)
    if extension in IMAGE_EXTENSIONS:
        return FileKind("image", extension)
    if extension in VIDEO_EXTENSIONS:
        return FileKind("video", extension)
    if extension in AUDIO_EXTENSIONS:
        return FileKind("audio", extension)

    return FileKind("other", extension)
