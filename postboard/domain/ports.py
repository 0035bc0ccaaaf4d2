"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Any, Protocol

from .entities import Post, User


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def add(self, name: str, email: str, password_hash: str, bio: str | None, active: bool) -> User | None:
        """
        Persist a new user under a store-assigned identifier.

        Args:
            name: Display name
            email: Normalized email address
            password_hash: bcrypt hashed password
            bio: Optional biography
            active: Initial activation state

        Returns:
            The stored user, or None if the email is already registered
        """
        ...

    def get(self, user_id: str) -> User | None:
        """Fetch a user by identifier, None if absent."""
        ...

    def find_by_email(self, email: str) -> User | None:
        """Fetch a user by normalized email, None if absent."""
        ...

    def activate(self, user_id: str) -> User | None:
        """
        Set active = true.

        Returns:
            The updated user, or None if no such user exists
        """
        ...

    def ping(self) -> None:
        """Raise if the backing store is unreachable."""
        ...


class PostRepository(Protocol):
    """Port interface for post persistence."""

    def add(self, title: str, text: str, author: str) -> Post:
        """Persist a new draft post with zero views and current timestamps."""
        ...

    def get(self, post_id: str) -> Post | None:
        ...

    def list_all(self) -> list[Post]:
        ...

    def update(self, post_id: str, changes: dict[str, Any]) -> Post | None:
        """
        Overwrite the given fields of a post.

        Args:
            post_id: Post identifier
            changes: Mapping of Post attribute names to already-validated values

        Returns:
            The updated post, or None if the post no longer exists
        """
        ...

    def delete(self, post_id: str) -> bool:
        """Remove a post. Returns False if it did not exist."""
        ...

    def increment_views(self, post_id: str) -> Post | None:
        """
        Atomically add one to the view counter.

        Implementations must not split this into a read and a write,
        so concurrent calls never lose an increment.

        Returns:
            The updated post, or None if no such post exists
        """
        ...


class ActivationNotifier(Protocol):
    """Port interface for delivering activation links."""

    def send_activation_link(self, email: str, link: str) -> None:
        """
        Deliver the activation link for a newly registered account.

        Args:
            email: Recipient email address
            link: Absolute URL of the activation endpoint
        """
        ...
