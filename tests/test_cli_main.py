"""Tests for the CLI entry point arguments."""

from unittest.mock import patch

import pytest

from cli import commands
from cli.main import main, parse_start_location


@pytest.fixture(autouse=True)
def reset_location(monkeypatch):
    monkeypatch.setattr(commands, '_location', None)


def test_parse_start_location_normalizes_view():
    location = parse_start_location('images?query=beach+day')

    assert location.path == '/images'
    assert location.query == 'beach day'


def test_parse_start_location_rejects_unknown_view():
    with pytest.raises(ValueError, match='Unknown view'):
        parse_start_location('/spreadsheets')


def test_main_starts_repl_at_given_location():
    with patch('cli.main.repl_loop') as mock_repl:
        main(['--start', '/media?query=trip'])

    mock_repl.assert_called_once_with()
    assert str(commands.get_location()) == '/media?query=trip'


def test_main_defaults_to_root_view():
    with patch('cli.main.repl_loop'):
        main([])

    assert str(commands.get_location()) == '/'


def test_main_exits_on_unknown_start_view():
    with patch('cli.main.repl_loop') as mock_repl:
        with pytest.raises(SystemExit):
            main(['--start', '/nowhere'])

    mock_repl.assert_not_called()
