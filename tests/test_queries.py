"""Tests for the file listing predicate builder."""

import json

from common.types import User
from server.backend.query import Query
from server.queries import build_file_queries, parse_sort

USER = User(user_id='user_1', account_id='acct_1', full_name='Ada', email='ada@example.com')

OWNERSHIP = Query.or_([
    Query.equal('owner', ['user_1']),
    Query.contains('users', ['ada@example.com']),
])


def test_defaults_give_ownership_and_sort_only():
    queries = build_file_queries(USER)

    assert queries == [OWNERSHIP, Query.order_desc('$createdAt')]


def test_ownership_predicate_comes_first():
    queries = build_file_queries(USER, types=['image', 'video'], search_text='cat', sort='name-asc', limit=5)

    assert queries[0] == OWNERSHIP
    assert queries[1:] == [
        Query.equal('type', ['image', 'video']),
        Query.contains('name', 'cat'),
        Query.limit(5),
        Query.order_asc('name'),
    ]


def test_empty_sort_adds_no_order():
    queries = build_file_queries(USER, sort='')

    assert queries == [OWNERSHIP]


def test_parse_sort_directions():
    assert parse_sort('size-asc') == Query.order_asc('size')
    assert parse_sort('size-desc') == Query.order_desc('size')
    assert parse_sort('$createdAt') == Query.order_desc('$createdAt')
    assert parse_sort('name-sideways') == Query.order_desc('name')


def test_query_json_format():
    """Nested predicates serialise inline in the backend's JSON format."""
    assert json.loads(OWNERSHIP.to_json()) == {
        'method': 'or',
        'values': [
            {'method': 'equal', 'attribute': 'owner', 'values': ['user_1']},
            {'method': 'contains', 'attribute': 'users', 'values': ['ada@example.com']},
        ],
    }
    assert Query.order_desc('$createdAt').to_json() == '{"method":"orderDesc","attribute":"$createdAt"}'
    assert Query.limit(10).to_json() == '{"method":"limit","values":[10]}'


def test_explicit_zero_limit_is_kept():
    queries = build_file_queries(USER, sort='', limit=0)

    assert queries == [OWNERSHIP, Query.limit(0)]
