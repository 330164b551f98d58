"""HTTP client for communicating with the SkyBox server."""

import os
import time
import uuid
from typing import Any, Dict, List, Optional

import httpx

from common.constants import DEFAULT_SORT, SEARCH_RESULT_LIMIT
from common.logging_config import get_logger
from cli.config import Config
from cli.utils import format_file_size, format_timestamp

logger = get_logger(__name__)


class ServerClient:
    """HTTP client for the SkyBox API with retry of idempotent reads and error mapping."""

    def __init__(self, config: Config):
        """
        Initialize server client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.async_transport: Optional[httpx.AsyncBaseTransport] = None
        self.request_id = None
        logger.info(f"Initialized ServerClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request, retrying GETs on 5xx errors and network failures.

        Uploads and other writes are sent once: repeating them could store
        a blob twice.

        Raises:
            ConnectionError: If the server cannot be reached
        """
        retry_config = self.config.get_retry_config()
        max_retries = retry_config['max_retries'] if method == 'GET' else 0
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})
        kwargs['headers']['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error: {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        raise ConnectionError("Cannot connect to SkyBox server. Is it running?")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        error_messages = {
            'UNAUTHENTICATED': 'Not signed in. Please run: sign-in <email>',
            'USER_NOT_FOUND': 'No account for this email. Please run: sign-up <full name> <email>',
            'NOT_FOUND': 'File not found.',
            'UNAUTHORIZED': 'You do not have permission to do that.',
            'CONFLICT': 'A file with that id already exists.',
            'BACKEND_UNAVAILABLE': 'Storage backend is currently unavailable. Please try again later.',
            'QUOTA_EXCEEDED': 'Storage capacity exceeded. Please delete some files.',
            'OTP_DELIVERY_FAILED': 'Could not send the sign-in code. Please try again.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            401: 'Not signed in',
            403: 'Access forbidden',
            404: 'Not found',
            413: 'File too large',
            422: 'Invalid input',
            500: 'Server error',
            503: 'Service unavailable',
            507: 'Insufficient storage',
        }

        message = status_messages.get(response.status_code, detail)
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def _get_auth_header(self) -> dict:
        """
        Get Authorization header with the stored session.

        Raises:
            ValueError: If not signed in
        """
        token = self.config.get_session_token()
        if not token:
            raise ValueError("Not signed in. Please run: sign-in <email>")
        return {'Authorization': f'Bearer {token}'}

    def sign_up(self, full_name: str, email: str) -> str:
        logger.info(f"Attempting to sign up: {email}")
        try:
            response = self._request_with_retry(
                'POST',
                '/auth/sign-up',
                json={'full_name': full_name, 'email': email}
            )
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code == 201:
            account_id = response.json()['account_id']
            return (
                f"Account ready. A sign-in code was sent to {email}.\n"
                f"Run: verify {account_id} <code>"
            )
        return f"Sign-up failed: {self._format_error(response)}"

    def sign_in(self, email: str) -> str:
        logger.info(f"Attempting to sign in: {email}")
        try:
            response = self._request_with_retry('POST', '/auth/sign-in', json={'email': email})
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code == 200:
            account_id = response.json()['account_id']
            return f"A sign-in code was sent to {email}.\nRun: verify {account_id} <code>"
        return f"Sign-in failed: {self._format_error(response)}"

    def verify(self, account_id: str, code: str) -> str:
        try:
            response = self._request_with_retry(
                'POST',
                '/auth/verify',
                json={'account_id': account_id, 'password': code}
            )
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code == 200:
            self.config.set_session_token(response.json()['session_token'])
            logger.info(f"Verified session [account_id={account_id}]")
            return "Signed in. Session saved to config."
        return f"Verification failed: {self._format_error(response)}"

    def sign_out(self) -> str:
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        try:
            response = self._request_with_retry('POST', '/auth/sign-out', headers=headers)
        except ConnectionError as e:
            return f"Error: {e}"

        self.config.clear_session_token()
        if response.status_code == 200:
            return "Signed out."
        return f"Signed out locally; server said: {self._format_error(response)}"

    def whoami(self) -> str:
        try:
            headers = self._get_auth_header()
            response = self._request_with_retry('GET', '/auth/me', headers=headers)
        except (ValueError, ConnectionError) as e:
            return f"Error: {e}"

        if response.status_code == 200:
            user = response.json()
            return f"{user['full_name']} <{user['email']}> (user ID: {user['user_id']})"
        return f"Error: {self._format_error(response)}"

    def upload_files(self, file_paths: List[str]) -> str:
        """
        Upload local files one at a time.

        Returns:
            One result line per file
        """
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        results = []
        for file_path in file_paths:
            path = os.path.expanduser(file_path)

            if not os.path.isfile(path):
                results.append(f"Error: Not a file: {file_path}")
                continue

            filename = os.path.basename(path)
            try:
                with open(path, 'rb') as f:
                    response = self._request_with_retry(
                        'POST',
                        '/files',
                        files={'file': (filename, f)},
                        headers=dict(headers),
                    )
            except (ConnectionError, IOError) as e:
                results.append(f"Error uploading {file_path}: {e}")
                continue

            if response.status_code == 201:
                record = response.json()
                results.append(
                    f"Uploaded: {record['name']} "
                    f"(ID: {record['file_id']}, Type: {record['type']}, "
                    f"Size: {format_file_size(record['size'])})"
                )
            else:
                results.append(f"Error uploading {file_path}: {self._format_error(response)}")

        return '\n'.join(results) if results else "No files uploaded."

    def _list_params(self, types: List[str], query: str, sort: str, limit: Optional[int]) -> Dict[str, Any]:
        params: Dict[str, Any] = {'sort': sort}
        if types:
            params['types'] = ','.join(types)
        if query:
            params['query'] = query
        if limit:
            params['limit'] = limit
        return params

    def list_files(
        self,
        types: List[str],
        query: str = "",
        sort: str = DEFAULT_SORT,
        limit: Optional[int] = None,
    ) -> str:
        try:
            headers = self._get_auth_header()
            response = self._request_with_retry(
                'GET',
                '/files',
                headers=headers,
                params=self._list_params(types, query, sort, limit),
            )
        except (ValueError, ConnectionError) as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        data = response.json()
        files = data['documents']
        if not files:
            return f"No files found{f' matching {query!r}' if query else ''}."

        total_size = sum(f['size'] for f in files)
        output = [f"Found {data['total']} file(s), showing {len(files)} ({format_file_size(total_size)}):\n"]
        for record in files:
            shared = f", shared with: {', '.join(record['users'])}" if record['users'] else ""
            output.append(
                f"  - {record['name']} [{record['type']}] (ID: {record['file_id']}, blob: {record['bucket_file_id']})\n"
                f"    Size: {format_file_size(record['size'])}, "
                f"Created: {format_timestamp(record.get('created_at'))}{shared}"
            )
        return '\n'.join(output)

    async def search_files(self, query: str) -> List[Dict[str, Any]]:
        """
        Fetch files whose name contains query, for the search dropdown.

        Raises:
            ValueError: If not signed in
            httpx.HTTPError: On transport failure or error status
        """
        headers = self._get_auth_header()
        async with httpx.AsyncClient(
            base_url=self.config.get_base_url(),
            timeout=self.config.get_timeout(),
            transport=self.async_transport,
        ) as client:
            response = await client.get(
                '/files',
                headers=headers,
                params=self._list_params([], query, DEFAULT_SORT, SEARCH_RESULT_LIMIT),
            )
            response.raise_for_status()
            return response.json()['documents']

    def rename_file(self, file_id: str, name: str) -> str:
        try:
            headers = self._get_auth_header()
            response = self._request_with_retry(
                'PATCH',
                f'/files/{file_id}/name',
                json={'name': name},
                headers=headers,
            )
        except (ValueError, ConnectionError) as e:
            return f"Error: {e}"

        if response.status_code == 200:
            return f"Renamed {file_id} to {response.json()['name']}"
        return f"Error: {self._format_error(response)}"

    def share_file(self, file_id: str, emails: List[str]) -> str:
        try:
            headers = self._get_auth_header()
            response = self._request_with_retry(
                'PUT',
                f'/files/{file_id}/users',
                json={'emails': emails},
                headers=headers,
            )
        except (ValueError, ConnectionError) as e:
            return f"Error: {e}"

        if response.status_code == 200:
            users = response.json()['users']
            if not users:
                return f"File {file_id} is no longer shared."
            return f"File {file_id} shared with: {', '.join(users)}"
        return f"Error: {self._format_error(response)}"

    def delete_file(self, file_id: str, bucket_file_id: Optional[str] = None) -> str:
        params = {'bucket_file_id': bucket_file_id} if bucket_file_id else {}
        try:
            headers = self._get_auth_header()
            response = self._request_with_retry(
                'DELETE',
                f'/files/{file_id}',
                params=params,
                headers=headers,
            )
        except (ValueError, ConnectionError) as e:
            return f"Error: {e}"

        if response.status_code == 200:
            if response.json()['action'] == 'unshared':
                return f"Removed {file_id} from your shared files."
            return f"Deleted {file_id}."
        return f"Error: {self._format_error(response)}"

    def usage(self) -> str:
        try:
            headers = self._get_auth_header()
            response = self._request_with_retry('GET', '/files/usage', headers=headers)
        except (ValueError, ConnectionError) as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        data = response.json()
        output = [
            f"Used {format_file_size(data['used'])} of {format_file_size(data['all'])} "
            f"({data['percentage']:.2f}%)"
        ]
        for file_type, bucket in data['per_type'].items():
            output.append(
                f"  {file_type:<9} {format_file_size(bucket['size']):>12}   "
                f"last update: {format_timestamp(bucket.get('latest_date'))}"
            )
        return '\n'.join(output)

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
