"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile, UserRole


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: int) -> Profile | None:
        """Get a profile by internal ID."""
        ...

    async def get_by_external_auth_id(self, external_auth_id: str) -> Profile | None:
        """Get a profile by the identity provider's subject ID."""
        ...

    async def get_by_role(self, role: UserRole) -> list[Profile]:
        """Get all profiles with the given role, ordered by ID."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get all profiles, ordered by ID."""
        ...

    async def exists_by_external_auth_id(self, external_auth_id: str) -> bool:
        """Check whether a profile is registered for the subject ID."""
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether a profile is registered for the email."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile; the returned entity carries the assigned ID."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        ...
