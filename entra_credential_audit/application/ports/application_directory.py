"""Port for the identity directory - driven/secondary port."""

from typing import Protocol

from ...domain.entities import Application


class ApplicationDirectory(Protocol):
    """
    Port for reading application registrations from an identity directory.

    This is a driven (secondary) port that defines how the application
    authenticates against and reads from the external identity provider.
    """

    async def authenticate(self) -> None:
        """
        Acquire the access token used by subsequent calls.

        Raises:
            AuthenticationError: If the token cannot be acquired.
        """
        ...

    async def list_applications(self) -> list[Application]:
        """
        Retrieve all application registrations with their credentials.

        Returns:
            Applications in directory order.

        Raises:
            DirectoryQueryError: If listing fails.
        """
        ...
