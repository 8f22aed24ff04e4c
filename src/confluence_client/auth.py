"""Authentication module for loading Confluence credentials.

Credentials come from environment variables, optionally populated from a
.env file by python-dotenv. They are never cached on disk or logged.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """Confluence API credentials."""
    url: str
    user: str
    api_token: str


class Authenticator:
    """Loads and validates Confluence credentials from environment variables.

    Required environment variables:
        CONFLUENCE_URL: Confluence instance URL (e.g., https://yourinstance.atlassian.net/wiki)
        CONFLUENCE_USER: Confluence user email address
        CONFLUENCE_API_TOKEN: Confluence API token

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Publishing to {creds.url}")
    """

    REQUIRED_VARIABLES = ('CONFLUENCE_URL', 'CONFLUENCE_USER', 'CONFLUENCE_API_TOKEN')

    def __init__(self):
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get Confluence credentials from environment variables.

        Returns:
            Credentials: A named tuple containing url, user, and api_token

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        values = {name: os.getenv(name) for name in self.REQUIRED_VARIABLES}
        missing = [name for name, value in values.items() if not value]

        if missing:
            raise InvalidCredentialsError(
                user=values['CONFLUENCE_USER'] or "unknown",
                endpoint=values['CONFLUENCE_URL'] or "unknown",
            )

        return Credentials(
            url=values['CONFLUENCE_URL'].rstrip('/'),  # type: ignore[union-attr]
            user=values['CONFLUENCE_USER'],  # type: ignore[arg-type]
            api_token=values['CONFLUENCE_API_TOKEN'],  # type: ignore[arg-type]
        )
