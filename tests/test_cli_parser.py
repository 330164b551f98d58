"""Tests for the CLI command parser."""

import pytest

from cli.models import (
    DeleteCommand,
    ListCommand,
    RenameCommand,
    SearchCommand,
    ShareCommand,
    SignInCommand,
    SignUpCommand,
    UploadCommand,
    VerifyCommand,
    WhereCommand,
)
from cli.parser import ParseError, parse_command


def test_parse_sign_up_multi_word_name():
    cmd = parse_command('sign-up Ada King Lovelace ada@example.com')

    assert cmd == SignUpCommand(full_name='Ada King Lovelace', email='ada@example.com')


def test_parse_sign_up_quoted_name():
    cmd = parse_command('sign-up "Ada Lovelace" ada@example.com')

    assert cmd.full_name == 'Ada Lovelace'


def test_parse_sign_up_requires_email():
    with pytest.raises(ParseError, match='Invalid email'):
        parse_command('sign-up Ada Lovelace')


def test_parse_sign_in_and_verify():
    assert parse_command('sign-in ada@example.com') == SignInCommand(email='ada@example.com')
    assert parse_command('verify acct_1 123456') == VerifyCommand(account_id='acct_1', code='123456')


def test_parse_upload():
    cmd = parse_command('upload a.txt "my photo.png"')

    assert cmd == UploadCommand(file_paths=('a.txt', 'my photo.png'))


def test_parse_upload_requires_path():
    with pytest.raises(ParseError):
        parse_command('upload')


def test_parse_list_defaults():
    assert parse_command('list') == ListCommand()


def test_parse_list_with_view_and_options():
    cmd = parse_command('list media --query "road trip" --sort size-asc --limit 5')

    assert cmd == ListCommand(view='/media', query='road trip', sort='size-asc', limit=5)


@pytest.mark.parametrize('line,message', [
    ('list photos', 'Unknown view'),
    ('list images media', 'at most one view'),
    ('list --limit', 'requires a value'),
    ('list --limit zero', 'Invalid limit'),
    ('list --limit 0', 'positive'),
    ('list --sort name', 'Invalid sort'),
    ('list --owner me', 'Unknown option'),
])
def test_parse_list_errors(line, message):
    with pytest.raises(ParseError, match=message):
        parse_command(line)


def test_parse_rename():
    assert parse_command('rename file_1 "new name.pdf"') == RenameCommand(file_id='file_1', name='new name.pdf')


def test_parse_share_replaces_with_given_emails():
    cmd = parse_command('share file_1 bob@example.com carol@example.com')

    assert cmd == ShareCommand(file_id='file_1', emails=('bob@example.com', 'carol@example.com'))


def test_parse_share_with_no_emails():
    assert parse_command('share file_1') == ShareCommand(file_id='file_1', emails=())


def test_parse_share_rejects_bad_email():
    with pytest.raises(ParseError, match='Invalid email'):
        parse_command('share file_1 bob')


def test_parse_delete():
    assert parse_command('delete file_1') == DeleteCommand(file_id='file_1')
    assert parse_command('delete file_1 blob_1') == DeleteCommand(file_id='file_1', bucket_file_id='blob_1')


def test_parse_no_argument_commands():
    assert parse_command('search') == SearchCommand()
    assert parse_command('where') == WhereCommand()
    with pytest.raises(ParseError, match='takes no arguments'):
        parse_command('usage now')


def test_parse_unknown_and_empty():
    with pytest.raises(ParseError, match='Unknown command'):
        parse_command('download file_1')
    with pytest.raises(ParseError, match='Empty command'):
        parse_command('   ')
    with pytest.raises(ParseError, match='Invalid syntax'):
        parse_command('rename file_1 "unterminated')
