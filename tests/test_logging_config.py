"""Tests for log setup and masking of credentials."""

import logging

from common.logging_config import SensitiveDataFilter, setup_logging


def make_record(msg, args=()):
    return logging.LogRecord('server', logging.INFO, __file__, 1, msg, args, None)


def test_masks_bearer_and_session_secrets():
    record = make_record('GET /auth/me Authorization: Bearer abc123 session_token=xyz')

    SensitiveDataFilter().filter(record)

    assert 'abc123' not in record.msg
    assert 'xyz' not in record.msg
    assert record.msg.count('***MASKED***') == 2


def test_masks_api_key_and_cookie():
    record = make_record('headers X-Appwrite-Key: k-999 cookie appwrite-session=s-111; path=/')

    SensitiveDataFilter().filter(record)

    assert 'k-999' not in record.msg
    assert 's-111' not in record.msg


def test_masks_format_args():
    record = make_record('verify %s', ('password=123456',))

    SensitiveDataFilter().filter(record)

    assert record.getMessage() == 'verify password=***MASKED***'


def test_leaves_plain_messages_alone():
    record = make_record('Uploaded file file_1 (document, 17 bytes)')

    SensitiveDataFilter().filter(record)

    assert record.msg == 'Uploaded file file_1 (document, 17 bytes)'


def test_setup_logging_configures_component_and_common():
    logger = setup_logging('cli', log_level='DEBUG')

    assert logger.name == 'cli'
    assert logger.level == logging.DEBUG
    assert logging.getLogger('common').level == logging.DEBUG
    assert logger.propagate is False
    assert any(isinstance(f, SensitiveDataFilter) for h in logger.handlers for f in h.filters)
