"""Credentials used to sign requests."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


class CredentialsError(Exception):
    """Raised when credentials cannot be obtained."""

    pass


@dataclass(frozen=True)
class AwsCredentials:
    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: Optional[str] = field(default=None, repr=False)


class ProvideAwsCredentials(ABC):
    """Source of credentials for a client."""

    @abstractmethod
    def credentials(self) -> AwsCredentials:
        """Return credentials or raise CredentialsError."""
        pass


class StaticProvider(ProvideAwsCredentials):
    """Always returns the same credentials."""

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        session_token: Optional[str] = None,
    ):
        self._credentials = AwsCredentials(
            access_key_id, secret_access_key, session_token
        )

    def credentials(self) -> AwsCredentials:
        return self._credentials


class EnvironmentProvider(ProvideAwsCredentials):
    """Reads ``AWS_ACCESS_KEY_ID``, ``AWS_SECRET_ACCESS_KEY`` and ``AWS_SESSION_TOKEN``."""

    def credentials(self) -> AwsCredentials:
        access_key_id = os.environ.get("AWS_ACCESS_KEY_ID")
        secret_access_key = os.environ.get("AWS_SECRET_ACCESS_KEY")

        if not access_key_id or not secret_access_key:
            raise CredentialsError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must both be set"
            )

        return AwsCredentials(
            access_key_id,
            secret_access_key,
            os.environ.get("AWS_SESSION_TOKEN"),
        )
