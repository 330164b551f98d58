"""Tests for CLI command handlers."""

from unittest.mock import AsyncMock, Mock, patch

from cli.commands import (
    handle_delete,
    handle_list,
    handle_rename,
    handle_search,
    handle_share,
    handle_sign_in,
    handle_sign_up,
    handle_upload,
    handle_usage,
    handle_verify,
    handle_where,
)
from cli.location import Location
from cli.models import (
    DeleteCommand,
    ListCommand,
    RenameCommand,
    SearchCommand,
    ShareCommand,
    SignInCommand,
    SignUpCommand,
    UploadCommand,
    UsageCommand,
    VerifyCommand,
    WhereCommand,
)
from cli.server_client import ServerClient


def test_handle_sign_up():
    """Test sign-up command handler with mocked client."""
    mock_client = Mock(spec=ServerClient)
    mock_client.sign_up.return_value = "Account ready."

    result = handle_sign_up(SignUpCommand(full_name='Ada Lovelace', email='ada@example.com'), client=mock_client)

    assert result == "Account ready."
    mock_client.sign_up.assert_called_once_with('Ada Lovelace', 'ada@example.com')


def test_handle_sign_in_and_verify():
    mock_client = Mock(spec=ServerClient)
    mock_client.sign_in.return_value = "Code sent"
    mock_client.verify.return_value = "Signed in."

    assert handle_sign_in(SignInCommand(email='ada@example.com'), client=mock_client) == "Code sent"
    assert handle_verify(VerifyCommand(account_id='acct_1', code='123456'), client=mock_client) == "Signed in."
    mock_client.verify.assert_called_once_with('acct_1', '123456')


def test_handle_upload():
    mock_client = Mock(spec=ServerClient)
    mock_client.upload_files.return_value = "Uploaded: a.txt"

    result = handle_upload(UploadCommand(file_paths=('a.txt', 'b.png')), client=mock_client)

    assert 'Uploaded' in result
    mock_client.upload_files.assert_called_once_with(['a.txt', 'b.png'])


def test_handle_list_current_location():
    """A bare list shows the current view and its query."""
    mock_client = Mock(spec=ServerClient)
    mock_client.list_files.return_value = "Found 1 file(s)"
    location = Location.parse('/media?query=trip')

    handle_list(ListCommand(), client=mock_client, location=location)

    mock_client.list_files.assert_called_once_with(['video', 'audio'], 'trip', '$createdAt-desc', None)
    assert str(location) == '/media?query=trip'


def test_handle_list_with_view_moves_location():
    mock_client = Mock(spec=ServerClient)
    mock_client.list_files.return_value = "Found 1 file(s)"
    location = Location.parse('/media?query=trip')

    handle_list(ListCommand(view='/images', sort='name-asc', limit=3), client=mock_client, location=location)

    mock_client.list_files.assert_called_once_with(['image'], '', 'name-asc', 3)
    assert str(location) == '/images'


def test_handle_list_with_query_keeps_view():
    mock_client = Mock(spec=ServerClient)
    mock_client.list_files.return_value = "Found 1 file(s)"
    location = Location('/documents')

    handle_list(ListCommand(query='invoice'), client=mock_client, location=location)

    mock_client.list_files.assert_called_once_with(['document'], 'invoice', '$createdAt-desc', None)
    assert str(location) == '/documents?query=invoice'


def test_handle_rename_share_delete_usage():
    mock_client = Mock(spec=ServerClient)
    mock_client.rename_file.return_value = "Renamed"
    mock_client.share_file.return_value = "Shared"
    mock_client.delete_file.return_value = "Deleted"
    mock_client.usage.return_value = "Used"

    assert handle_rename(RenameCommand(file_id='f1', name='n.pdf'), client=mock_client) == "Renamed"
    assert handle_share(ShareCommand(file_id='f1', emails=('x@example.com',)), client=mock_client) == "Shared"
    assert handle_delete(DeleteCommand(file_id='f1', bucket_file_id='b1'), client=mock_client) == "Deleted"
    assert handle_usage(UsageCommand(), client=mock_client) == "Used"

    mock_client.share_file.assert_called_once_with('f1', ['x@example.com'])
    mock_client.delete_file.assert_called_once_with('f1', 'b1')


def test_handle_where():
    assert handle_where(WhereCommand(), location=Location.parse('/others?query=x')) == '/others?query=x'


def test_handle_search_lists_selected_view():
    mock_client = Mock(spec=ServerClient)
    mock_client.list_files.return_value = "Found 1 file(s)"
    location = Location()

    async def fake_run_search(client, loc):
        loc.navigate('/images', 'beach')
        return {'name': 'beach.png', 'type': 'image'}

    with patch('cli.commands.run_search', AsyncMock(side_effect=fake_run_search)):
        result = handle_search(SearchCommand(), client=mock_client, location=location)

    assert result.startswith('Opened /images?query=beach')
    mock_client.list_files.assert_called_once_with(['image'], 'beach')


def test_handle_search_closed_without_selection():
    mock_client = Mock(spec=ServerClient)

    with patch('cli.commands.run_search', AsyncMock(return_value=None)):
        result = handle_search(SearchCommand(), client=mock_client, location=Location('/documents'))

    assert result == 'Search closed. Current view: /documents'
    mock_client.list_files.assert_not_called()
