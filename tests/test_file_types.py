"""Tests for extension-based file classification."""

import pytest

from common.file_types import FileKind, get_file_type


@pytest.mark.parametrize('file_name,expected', [
    ('report.pdf', FileKind('document', 'pdf')),
    ('Budget.XLSX', FileKind('document', 'xlsx')),
    ('photo.jpeg', FileKind('image', 'jpeg')),
    ('clip.mkv', FileKind('video', 'mkv')),
    ('song.flac', FileKind('audio', 'flac')),
    ('archive.tar.gz', FileKind('other', 'gz')),
    ('README', FileKind('other', '')),
    ('trailing.', FileKind('other', '')),
])
def test_get_file_type(file_name, expected):
    assert get_file_type(file_name) == expected
