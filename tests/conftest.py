"""Shared pytest fixtures for all tests."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from cli.config import Config
from common.types import User
from server import config as server_config
from server.exceptions import NotFoundError


@pytest.fixture(autouse=True)
def backend_settings(monkeypatch):
    """
    Point the server configuration at a fake project.

    Every test gets distinct database, collection and bucket ids so the
    in-memory backend can tell the collections apart.
    """
    monkeypatch.setattr(server_config, 'APPWRITE_ENDPOINT', 'https://backend.test/v1')
    monkeypatch.setattr(server_config, 'APPWRITE_PROJECT', 'proj')
    monkeypatch.setattr(server_config, 'APPWRITE_DATABASE', 'db')
    monkeypatch.setattr(server_config, 'APPWRITE_USERS_COLLECTION', 'users')
    monkeypatch.setattr(server_config, 'APPWRITE_FILES_COLLECTION', 'files')
    monkeypatch.setattr(server_config, 'APPWRITE_BUCKET', 'bucket')
    monkeypatch.setattr(server_config, 'APPWRITE_SECRET_KEY', 'admin-key')
    monkeypatch.setattr(server_config, 'TOTAL_CAPACITY', 1000)


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .skybox directory
    """
    config_dir = tmp_path / '.skybox'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'report.pdf'
    file_path.write_bytes(b'%PDF-1.4 sample content')
    return file_path


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _matches(document: dict, query) -> bool:
    if query.method == 'or':
        return any(_matches(document, sub) for sub in query.values)
    if query.method == 'equal':
        return document.get(query.attribute) in query.values
    if query.method == 'contains':
        value = document.get(query.attribute)
        if isinstance(value, list):
            return any(v in value for v in query.values)
        return any(str(v) in (value or '') for v in query.values)
    return True


class FakeDatabases:
    """In-memory document database keyed by collection id."""

    def __init__(self):
        self.collections = {}
        self.fail_create = None
        self.calls = []

    def add(self, collection_id: str, document_id: str, data: dict) -> dict:
        document = {'$id': document_id, '$createdAt': _now(), '$updatedAt': _now(), **data}
        self.collections.setdefault(collection_id, {})[document_id] = document
        return document

    async def create_document(self, database_id, collection_id, document_id, data):
        self.calls.append(('create_document', collection_id, document_id))
        if self.fail_create is not None:
            raise self.fail_create
        return dict(self.add(collection_id, document_id, data))

    async def get_document(self, database_id, collection_id, document_id):
        self.calls.append(('get_document', collection_id, document_id))
        try:
            return dict(self.collections[collection_id][document_id])
        except KeyError:
            raise NotFoundError(f"Document {document_id} not found")

    async def update_document(self, database_id, collection_id, document_id, data):
        self.calls.append(('update_document', collection_id, document_id))
        document = self.collections.get(collection_id, {}).get(document_id)
        if document is None:
            raise NotFoundError(f"Document {document_id} not found")
        document.update(data)
        document['$updatedAt'] = _now()
        return dict(document)

    async def delete_document(self, database_id, collection_id, document_id):
        self.calls.append(('delete_document', collection_id, document_id))
        if self.collections.get(collection_id, {}).pop(document_id, None) is None:
            raise NotFoundError(f"Document {document_id} not found")

    async def list_documents(self, database_id, collection_id, queries=None):
        self.calls.append(('list_documents', collection_id, queries))
        queries = list(queries or [])
        filters = [q for q in queries if q.method in ('or', 'equal', 'contains')]
        documents = [
            dict(doc) for doc in self.collections.get(collection_id, {}).values()
            if all(_matches(doc, q) for q in filters)
        ]
        total = len(documents)

        offset = next((q.values[0] for q in queries if q.method == 'offset'), 0)
        limit = next((q.values[0] for q in queries if q.method == 'limit'), None)
        documents = documents[offset:]
        if limit is not None:
            documents = documents[:limit]
        return {'total': total, 'documents': documents}

    async def list_all_documents(self, database_id, collection_id, queries, page_size=100):
        result = await self.list_documents(database_id, collection_id, queries)
        return result['documents']


class FakeStorage:
    """In-memory blob bucket."""

    def __init__(self):
        self.blobs = {}
        self.fail_delete = None

    async def create_file(self, bucket_id, file_id, file_name, data):
        self.blobs[file_id] = data
        return {'$id': file_id, 'name': file_name, 'sizeOriginal': len(data)}

    async def delete_file(self, bucket_id, file_id):
        if self.fail_delete is not None:
            raise self.fail_delete
        if self.blobs.pop(file_id, None) is None:
            raise NotFoundError(f"Blob {file_id} not found")


class FakeAccount:
    """Account endpoint double recording the calls it receives."""

    def __init__(self, account_id='acct_1'):
        self.account_id = account_id
        self.tokens = []
        self.deleted_sessions = []
        self.get_error = None

    async def create_email_token(self, user_id, email):
        self.tokens.append(email)
        return {'$id': 'token_1', 'userId': self.account_id}

    async def create_session(self, user_id, secret):
        return {'$id': 'session_1', 'secret': f'secret-for-{user_id}', 'userId': user_id}

    async def get(self):
        if self.get_error is not None:
            raise self.get_error
        return {'$id': self.account_id, 'email': 'owner@example.com'}

    async def delete_session(self, session_id='current'):
        self.deleted_sessions.append(session_id)


@pytest.fixture
def fake_backend():
    """Admin-scoped client double backed by in-memory stores."""
    return SimpleNamespace(
        account=FakeAccount(),
        databases=FakeDatabases(),
        storage=FakeStorage(),
    )


@pytest.fixture
def owner(fake_backend):
    """Owner user with a document in the users collection."""
    fake_backend.databases.add('users', 'user_owner', {
        'fullName': 'Olive Owner',
        'email': 'owner@example.com',
        'accountId': 'acct_1',
        'avatar': 'https://avatar.test/o.png',
    })
    return User(
        user_id='user_owner',
        account_id='acct_1',
        full_name='Olive Owner',
        email='owner@example.com',
        avatar_url='https://avatar.test/o.png',
    )


@pytest.fixture
def stored_file(fake_backend, owner):
    """A file owned by owner, shared with two users, with its blob stored."""
    fake_backend.storage.blobs['blob_1'] = b'quarterly numbers'
    return fake_backend.databases.add('files', 'file_1', {
        'type': 'document',
        'name': 'report.pdf',
        'url': 'https://backend.test/v1/storage/buckets/bucket/files/blob_1/view?project=proj',
        'extension': 'pdf',
        'size': 17,
        'owner': owner.user_id,
        'accountId': owner.account_id,
        'users': ['alice@example.com', 'bob@example.com'],
        'bucketFileId': 'blob_1',
    })
