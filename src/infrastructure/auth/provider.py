"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class TokenUser:
    """Verified subject extracted from an identity token."""

    subject_id: str
    email: str
    display_name: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an identity token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create a token for a subject.

        Args:
            user: The subject to create a token for

        Returns:
            The generated token string
        """
        ...
