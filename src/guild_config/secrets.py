"""Secret providers applied to Notion API keys at rest."""

from abc import ABC, abstractmethod


class SecretProvider(ABC):
    """Abstract base class for at-rest secret handling.

    Stores call encrypt before writing a key and decrypt after reading it,
    so the Notion client only ever sees the plain credential.
    """

    @abstractmethod
    def encrypt(self, value: str) -> str:
        """Transform a secret for storage.

        :param value: Plain secret.
        :returns: Stored form of the secret.
        """
        ...

    @abstractmethod
    def decrypt(self, value: str) -> str:
        """Recover a secret from its stored form.

        :param value: Stored form of the secret.
        :returns: Plain secret.
        """
        ...


class PassthroughSecretProvider(SecretProvider):
    """Stores secrets unchanged. Rely on database-level encryption."""

    def encrypt(self, value: str) -> str:
        """Return the value unchanged."""
        return value

    def decrypt(self, value: str) -> str:
        """Return the value unchanged."""
        return value
