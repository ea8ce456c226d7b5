"""Unit tests for CommentService."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from civic.config import CommentSettings
from civic.domain.error import (
    DatabaseError,
    EmptyContentError,
    InvalidParentError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from civic.domain.model import Comment, CommentEdit
from civic.domain.repository import CommentEditRepository, CommentRepository
from civic.domain.service import CommentService
from civic.domain.value import CommentId, TargetRef, TargetType, UserId
from civic.persistence.repository.inmemory import (
    InMemoryCommentEditRepository,
    InMemoryCommentRepository,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

PETITION_7 = TargetRef(target_type=TargetType.PETITION, target_id=7)
BILL_42 = TargetRef(target_type=TargetType.BILL, target_id=42)
ALICE = UserId("alice")
BOB = UserId("bob")
MOD = UserId("moderator")


class TestPostComment:
    """Tests for post_comment method."""

    @pytest.mark.asyncio
    async def test_post_top_level_comment(self, unit_env):
        """Bob commenting on petition 7 should store a fresh, unedited comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act
        comment = await comment_service.post_comment(BOB, PETITION_7, "  Hello  ")

        # Assert
        assert comment.id is not None
        assert comment.content == "Hello"
        assert comment.author_id == BOB
        assert comment.target == PETITION_7
        assert comment.parent_id is None
        assert comment.is_edited is False
        assert comment.edit_count == 0
        assert comment.is_deleted is False

    @pytest.mark.asyncio
    async def test_post_reply(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        parent = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act
        reply = await comment_service.post_comment(
            ALICE, PETITION_7, "Hi Bob", parent_id=parent.id
        )

        # Assert
        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    async def test_blank_content_raises(self, unit_env, content):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act & Assert
        with pytest.raises(EmptyContentError):
            await comment_service.post_comment(BOB, PETITION_7, content)
        assert await comment_repo.count_by_target(PETITION_7) == 0

    @pytest.mark.asyncio
    async def test_too_long_content_raises(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        limit = comment_service.comment_settings.max_length

        # Act & Assert
        with pytest.raises(ValidationError, match="at most"):
            await comment_service.post_comment(BOB, PETITION_7, "x" * (limit + 1))

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(InvalidParentError, match="not found"):
            await comment_service.post_comment(
                BOB, PETITION_7, "Orphan", parent_id=CommentId(999)
            )

    @pytest.mark.asyncio
    async def test_reply_to_deleted_parent_raises(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        parent = await comment_service.post_comment(BOB, PETITION_7, "Hello")
        await comment_service.delete_comment(BOB, parent.id)

        # Act & Assert
        with pytest.raises(InvalidParentError, match="deleted"):
            await comment_service.post_comment(
                ALICE, PETITION_7, "Too late", parent_id=parent.id
            )

    @pytest.mark.asyncio
    async def test_reply_across_targets_raises_and_creates_nothing(self, unit_env):
        """A parent on another target must be rejected without writing."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_service.post_comment(BOB, BILL_42, "On the bill")

        # Act & Assert
        with pytest.raises(InvalidParentError):
            await comment_service.post_comment(
                ALICE, PETITION_7, "Wrong thread", parent_id=parent.id
            )
        assert await comment_repo.find_by_target(PETITION_7) == []


    @pytest.mark.asyncio
    async def test_reply_beyond_max_depth_raises(self):
        """With a depth limit of 2, a third level of replies is rejected."""
        # Arrange
        comment_service = CommentService(
            comment_repository=InMemoryCommentRepository(),
            comment_edit_repository=InMemoryCommentEditRepository(),
            comment_settings=CommentSettings(max_depth=2),
        )
        top = await comment_service.post_comment(BOB, PETITION_7, "Top")
        first = await comment_service.post_comment(
            ALICE, PETITION_7, "Depth 1", parent_id=top.id
        )
        second = await comment_service.post_comment(
            BOB, PETITION_7, "Depth 2", parent_id=first.id
        )

        # Act & Assert
        with pytest.raises(InvalidParentError, match="limited to 2 levels"):
            await comment_service.post_comment(
                ALICE, PETITION_7, "Depth 3", parent_id=second.id
            )
        assert await comment_service.count_comments(PETITION_7) == 3


class _ConflictingEditRepository(InMemoryCommentEditRepository):
    """Rejects every insert as if a concurrent edit took the edit number."""

    async def save(self, edit: CommentEdit) -> CommentEdit:
        raise IntegrityError("Duplicate edit number", None, Exception())


class TestEditComment:
    """Tests for edit_comment method."""

    @pytest.mark.asyncio
    async def test_edit_records_previous_content(self, unit_env):
        """Editing "Hello" to "Hello world" should keep "Hello" in history."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act
        updated = await comment_service.edit_comment(BOB, comment.id, "Hello world")

        # Assert
        assert updated.content == "Hello world"
        assert updated.is_edited is True
        assert updated.edit_count == 1
        assert updated.last_edited_at is not None

        history = await comment_service.get_edit_history(comment.id)
        assert history.comment.content == "Hello world"
        assert len(history.edits) == 1
        assert history.edits[0].edit_number == 1
        assert history.edits[0].original_content == "Hello"

    @pytest.mark.asyncio
    async def test_edit_numbers_are_contiguous(self, unit_env):
        """edit_count should always equal the number of history rows."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        edit_repo = await unit_env.get(CommentEditRepository)
        comment = await comment_service.post_comment(BOB, PETITION_7, "v0")

        # Act
        for version in ("v1", "v2", "v3"):
            updated = await comment_service.edit_comment(BOB, comment.id, version)

        # Assert
        edits = await edit_repo.find_by_comment(comment.id)
        assert updated.edit_count == len(edits) == 3
        assert [e.edit_number for e in edits] == [3, 2, 1]
        assert [e.original_content for e in edits] == ["v2", "v1", "v0"]

    @pytest.mark.asyncio
    async def test_unchanged_content_is_noop(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        edit_repo = await unit_env.get(CommentEditRepository)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act
        result = await comment_service.edit_comment(BOB, comment.id, " Hello ")

        # Assert
        assert result.edit_count == 0
        assert result.is_edited is False
        assert await edit_repo.find_by_comment(comment.id) == []

    @pytest.mark.asyncio
    async def test_non_author_cannot_edit(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await comment_service.edit_comment(ALICE, comment.id, "Hijacked")

        unchanged = await comment_repo.find_by_id(comment.id)
        assert unchanged.content == "Hello"

    @pytest.mark.asyncio
    async def test_blank_edit_raises(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act & Assert
        with pytest.raises(EmptyContentError):
            await comment_service.edit_comment(BOB, comment.id, "   ")

    @pytest.mark.asyncio
    async def test_edit_deleted_comment_raises_not_found(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")
        await comment_service.delete_comment(BOB, comment.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.edit_comment(BOB, comment.id, "Back again")

    @pytest.mark.asyncio
    async def test_edit_missing_comment_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.edit_comment(BOB, CommentId(404), "Anything")


    @pytest.mark.asyncio
    async def test_conflicting_edit_number_raises_database_error(self):
        # Arrange
        comment_service = CommentService(
            comment_repository=InMemoryCommentRepository(),
            comment_edit_repository=_ConflictingEditRepository(),
            comment_settings=CommentSettings(),
        )
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act & Assert
        with pytest.raises(DatabaseError):
            await comment_service.edit_comment(BOB, comment.id, "Hello again")


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    async def test_author_can_delete(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act
        deleted = await comment_service.delete_comment(BOB, comment.id)

        # Assert
        assert deleted.is_deleted is True
        assert deleted.deleted_by == BOB
        # Content is retained, only hidden
        assert deleted.content == "Hello"

    @pytest.mark.asyncio
    async def test_delete_twice_is_idempotent(self, unit_env):
        """The second delete should succeed and keep the first deletion."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")
        first = await comment_service.delete_comment(BOB, comment.id)

        # Act
        second = await comment_service.delete_comment(BOB, comment.id)

        # Assert
        assert second.is_deleted is True
        assert second.deleted_at == first.deleted_at

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(ALICE, comment.id)

        still_there = await comment_repo.find_by_id(comment.id)
        assert still_there.is_deleted is False

    @pytest.mark.asyncio
    async def test_moderator_can_delete_any_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act
        deleted = await comment_service.delete_comment(
            MOD, comment.id, can_moderate=True
        )

        # Assert
        assert deleted.is_deleted is True
        assert deleted.deleted_by == MOD

    @pytest.mark.asyncio
    async def test_delete_missing_comment_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(BOB, CommentId(404))


class TestGetEditHistory:
    """Tests for get_edit_history method."""

    @pytest.mark.asyncio
    async def test_unedited_comment_has_empty_history(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")

        # Act
        history = await comment_service.get_edit_history(comment.id)

        # Assert
        assert history.comment.id == comment.id
        assert history.edits == []

    @pytest.mark.asyncio
    async def test_history_of_deleted_comment_is_hidden(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.post_comment(BOB, PETITION_7, "Hello")
        await comment_service.edit_comment(BOB, comment.id, "Hello world")
        await comment_service.delete_comment(BOB, comment.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.get_edit_history(comment.id)


class TestListComments:
    """Tests for list_comments method."""

    @pytest.mark.asyncio
    async def test_thread_is_nested_and_ordered_oldest_first(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        first = await comment_service.post_comment(BOB, PETITION_7, "First")
        second = await comment_service.post_comment(ALICE, PETITION_7, "Second")
        reply_a = await comment_service.post_comment(
            ALICE, PETITION_7, "Reply A", parent_id=first.id
        )
        reply_b = await comment_service.post_comment(
            BOB, PETITION_7, "Reply B", parent_id=first.id
        )
        nested = await comment_service.post_comment(
            BOB, PETITION_7, "Nested", parent_id=reply_a.id
        )
        await comment_service.post_comment(BOB, BILL_42, "Elsewhere")

        # Act
        roots = await comment_service.list_comments(PETITION_7)

        # Assert
        assert [n.comment.id for n in roots] == [first.id, second.id]
        assert [n.comment.id for n in roots[0].replies] == [reply_a.id, reply_b.id]
        assert [n.comment.id for n in roots[0].replies[0].replies] == [nested.id]
        assert roots[1].replies == []

    @pytest.mark.asyncio
    async def test_deleted_parent_with_live_reply_is_placeholder(self, unit_env):
        """Deleting a parent should keep its replies reachable."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        parent = await comment_service.post_comment(BOB, PETITION_7, "Hello")
        reply = await comment_service.post_comment(
            BOB, PETITION_7, "Follow-up", parent_id=parent.id
        )

        # Act
        await comment_service.delete_comment(BOB, parent.id)
        roots = await comment_service.list_comments(PETITION_7)

        # Assert
        assert len(roots) == 1
        assert roots[0].is_placeholder
        assert comment_service.visible_content(roots[0].comment) == "[deleted]"
        assert [n.comment.id for n in roots[0].replies] == [reply.id]
        assert roots[0].replies[0].comment.content == "Follow-up"

    @pytest.mark.asyncio
    async def test_deleted_leaf_is_omitted(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        parent = await comment_service.post_comment(BOB, PETITION_7, "Hello")
        reply = await comment_service.post_comment(
            ALICE, PETITION_7, "Oops", parent_id=parent.id
        )

        # Act
        await comment_service.delete_comment(ALICE, reply.id)
        roots = await comment_service.list_comments(PETITION_7)

        # Assert
        assert len(roots) == 1
        assert roots[0].replies == []

    @pytest.mark.asyncio
    async def test_deleted_chain_without_live_descendants_is_omitted(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        parent = await comment_service.post_comment(BOB, PETITION_7, "Hello")
        reply = await comment_service.post_comment(
            BOB, PETITION_7, "Reply", parent_id=parent.id
        )

        # Act
        await comment_service.delete_comment(BOB, reply.id)
        await comment_service.delete_comment(BOB, parent.id)

        # Assert
        assert await comment_service.list_comments(PETITION_7) == []

    @pytest.mark.asyncio
    async def test_orphaned_reply_is_promoted_to_top_level(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        now = datetime.now()
        top = await comment_service.post_comment(BOB, PETITION_7, "Top")
        orphan = await comment_repo.save(
            Comment(
                target_type=TargetType.PETITION,
                target_id=7,
                author_id=ALICE,
                content="Parent row is gone",
                parent_id=CommentId(12345),
                created_at=now + timedelta(seconds=1),
            )
        )

        # Act
        roots = await comment_service.list_comments(PETITION_7)

        # Assert
        assert [n.comment.id for n in roots] == [top.id, orphan.id]

    @pytest.mark.asyncio
    async def test_empty_target_has_no_comments(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.list_comments(PETITION_7) == []

    @pytest.mark.asyncio
    async def test_long_reply_chain_is_listed(self, unit_env):
        """A chain of 1200 nested replies should come back fully nested."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        now = datetime.now()
        parent_id = None
        for depth in range(1200):
            saved = await comment_repo.save(
                Comment(
                    target_type=TargetType.PETITION,
                    target_id=7,
                    author_id=BOB if depth % 2 else ALICE,
                    content=f"Depth {depth}",
                    parent_id=parent_id,
                    created_at=now + timedelta(seconds=depth),
                )
            )
            parent_id = saved.id

        # Act
        roots = await comment_service.list_comments(PETITION_7)

        # Assert
        assert len(roots) == 1
        node, depth = roots[0], 0
        while node.replies:
            assert len(node.replies) == 1
            node, depth = node.replies[0], depth + 1
        assert depth == 1199
        assert node.comment.content == "Depth 1199"
