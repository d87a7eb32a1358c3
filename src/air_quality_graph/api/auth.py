"""
Credential handling for the QuantAQ device API.

Resolves the API key and encodes it as an HTTP Basic authorization value.
"""

import base64
import logging
import os
from typing import Optional

from ..core import constants


class CredentialProvider:
    """Look up the device API key and build the authorization token."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_key_env: str = constants.DEFAULT_API_KEY_ENV,
        password: str = "",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize credential provider.

        Args:
            api_key: API key. If None, read from the api_key_env variable
            api_key_env: Name of the environment variable holding the key
            password: Basic auth password (empty for the device API)
            logger: Logger instance
        """
        self.api_key = api_key
        self.api_key_env = api_key_env
        self.password = password
        self.logger = logger or logging.getLogger(__name__)

    def get_secret(self) -> str:
        """
        Get the raw API key.

        Returns:
            API key string

        Raises:
            ValueError: If no key is configured
        """
        secret = self.api_key or os.getenv(self.api_key_env)
        if not secret:
            raise ValueError(
                f"API key is required: set {self.api_key_env} or authentication.api_key"
            )
        return secret.strip()

    def get_token(self) -> str:
        """
        Get the encoded authorization token.

        The token is returned to the caller, who passes it into every request.

        Returns:
            'Basic <base64(key:password)>'
        """
        secret = self.get_secret()
        encoded = base64.b64encode(f"{secret}:{self.password}".encode("utf-8")).decode("ascii")
        self.logger.debug("Built device API token")
        return f"Basic {encoded}"
