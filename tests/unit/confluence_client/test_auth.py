"""Unit tests for confluence_client.auth module."""

import pytest
from unittest.mock import patch

from src.confluence_client.auth import Authenticator, Credentials
from src.confluence_client.errors import InvalidCredentialsError

ENV = {
    'CONFLUENCE_URL': 'https://test.atlassian.net/wiki/',
    'CONFLUENCE_USER': 'test@example.com',
    'CONFLUENCE_API_TOKEN': 'test-token-123',
}


def _getenv(overrides=None):
    env = {**ENV, **(overrides or {})}
    return lambda key: env.get(key)


class TestCredentials:
    """Test cases for Credentials NamedTuple."""

    def test_credentials_are_immutable(self):
        """Credentials fields cannot be modified after creation."""
        creds = Credentials(url="https://x", user="u", api_token="t")
        with pytest.raises(AttributeError):
            creds.url = "different-url"


class TestAuthenticator:
    """Test cases for Authenticator class."""

    @patch('src.confluence_client.auth.load_dotenv')
    def test_init_loads_dotenv(self, mock_load_dotenv):
        """Authenticator __init__ should call load_dotenv()."""
        Authenticator()
        mock_load_dotenv.assert_called_once()

    @patch('src.confluence_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_get_credentials_success(self, mock_getenv, mock_load_dotenv):
        """All variables set: credentials returned, trailing slash stripped."""
        mock_getenv.side_effect = _getenv()

        creds = Authenticator().get_credentials()

        assert creds == Credentials(
            url='https://test.atlassian.net/wiki',
            user='test@example.com',
            api_token='test-token-123',
        )

    @patch('src.confluence_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_missing_url_reports_unknown_endpoint(self, mock_getenv, mock_load_dotenv):
        """A missing URL is reported as unknown endpoint."""
        mock_getenv.side_effect = _getenv({'CONFLUENCE_URL': None})

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.user == 'test@example.com'
        assert exc_info.value.endpoint == 'unknown'

    @patch('src.confluence_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_missing_token_raises(self, mock_getenv, mock_load_dotenv):
        """A missing token fails even though user and URL are known."""
        mock_getenv.side_effect = _getenv({'CONFLUENCE_API_TOKEN': ''})

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert 'test-token-123' not in str(exc_info.value)

    @patch('src.confluence_client.auth.load_dotenv')
    @patch('os.getenv')
    def test_all_missing(self, mock_getenv, mock_load_dotenv):
        """Nothing configured: both user and endpoint are unknown."""
        mock_getenv.return_value = None

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.user == 'unknown'
        assert exc_info.value.endpoint == 'unknown'
