"""
Post domain service - create, read, update, delete and view counting.

Partial updates
===============

update() merges an arbitrary subset of post fields onto the stored
record. Which fields may be merged is decided by ``mutable_fields``:
None (the default) allows every post field, including ``status`` and
``views``. Keys outside the allow-list or unknown to Post are ignored.
The merged record is validated as a whole before it is written, and
``updated_at`` is refreshed to the current time.

View counting goes through PostRepository.increment_views so the
counter is never updated with a separate read and write.
"""

import logging
from collections.abc import Collection, Mapping
from dataclasses import asdict, dataclass
from typing import Any

from .entities import POST_FIELDS, Post, utcnow
from .exceptions import PostNotFound, ValidationFailed
from .identifiers import check_identifier
from .ports import PostRepository
from .validation import validate_post

logger = logging.getLogger(__name__)


@dataclass
class PostService:
    """Domain service for posts."""

    repository: PostRepository
    mutable_fields: Collection[str] | None = None

    def create(self, title: str, text: str, author: str) -> Post:
        """
        Create a draft post.

        Raises:
            ValidationFailed: If title/text are shorter than 5 characters
                or a field is missing
        """
        result = validate_post({"title": title, "text": text, "author": author})
        if not result.ok:
            raise ValidationFailed(result.errors)

        post = self.repository.add(title=title, text=text, author=author)
        logger.info("Created post %s", post.id)
        return post

    def list_all(self) -> list[Post]:
        return self.repository.list_all()

    def get(self, post_id: str) -> Post:
        """
        Raises:
            MalformedIdentifier: If post_id is not a store identifier
            PostNotFound: If no such post exists
        """
        post = self.repository.get(check_identifier(post_id))
        if post is None:
            raise PostNotFound(post_id)
        return post

    def update(self, post_id: str, fields: Mapping[str, Any]) -> Post:
        """
        Merge fields onto an existing post.

        Args:
            post_id: Post identifier
            fields: Post attribute names (snake_case) to new values

        Returns:
            The post after the merge

        Raises:
            MalformedIdentifier: If post_id is not a store identifier
            PostNotFound: If no such post exists
            ValidationFailed: If the merged post breaks the post rules
        """
        current = self.get(post_id)

        changes = {name: value for name, value in fields.items() if self._is_mutable(name)}
        merged = asdict(current)
        merged.update(changes)

        result = validate_post(merged)
        if not result.ok:
            raise ValidationFailed(result.errors)

        changes["updated_at"] = utcnow()
        updated = self.repository.update(current.id, changes)
        if updated is None:
            raise PostNotFound(post_id)
        logger.info("Updated post %s fields=%s", updated.id, sorted(changes))
        return updated

    def delete(self, post_id: str) -> None:
        """
        Raises:
            MalformedIdentifier: If post_id is not a store identifier
            PostNotFound: If no such post exists
        """
        if not self.repository.delete(check_identifier(post_id)):
            raise PostNotFound(post_id)
        logger.info("Deleted post %s", post_id)

    def view(self, post_id: str) -> Post:
        """
        Count one view of a post.

        Raises:
            MalformedIdentifier: If post_id is not a store identifier
            PostNotFound: If no such post exists
        """
        post = self.repository.increment_views(check_identifier(post_id))
        if post is None:
            raise PostNotFound(post_id)
        return post

    def _is_mutable(self, name: str) -> bool:
        if name not in POST_FIELDS:
            return False
        return self.mutable_fields is None or name in self.mutable_fields
