"""Unit tests for vote use cases."""

import pytest

from civic.application.usecase.vote import (
    CastVoteCommand,
    CastVoteUseCase,
    GetVoteAggregateRequest,
    GetVoteAggregateUseCase,
)
from civic.domain.error import InvalidTargetError
from civic.domain.repository import VoteRepository
from civic.domain.value import TargetType, VoteType
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_cast_vote_returns_aggregate_for_target(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)

        # Act
        response = await use_case.execute(
            CastVoteCommand(
                user_id="alice",
                target_type="politician",
                target_id="3",
                vote_type=VoteType.UPVOTE,
            )
        )

        # Assert
        assert response.target_type == "politician"
        assert response.target_id == 3
        assert response.total_score == 1
        assert response.user_vote == VoteType.UPVOTE
        assert response.model_dump(by_alias=True)["totalScore"] == 1

    @pytest.mark.asyncio
    async def test_invalid_target_is_rejected_before_writing(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        vote_repo = await unit_env.get(VoteRepository)

        # Act & Assert
        with pytest.raises(InvalidTargetError):
            await use_case.execute(
                CastVoteCommand(
                    user_id="alice",
                    target_type="spaceship",
                    target_id=1,
                    vote_type=VoteType.UPVOTE,
                )
            )
        for target_type in TargetType:
            votes = await vote_repo.find_by_user_and_targets("alice", target_type, [1])
            assert votes == []

    def test_command_accepts_camel_case_keys(self):
        command = CastVoteCommand.model_validate(
            {
                "userId": "alice",
                "targetType": "bill",
                "targetId": 42,
                "voteType": "downvote",
            }
        )

        assert command.vote_type == VoteType.DOWNVOTE


class TestGetVoteAggregateUseCase:
    """Tests for GetVoteAggregateUseCase."""

    @pytest.mark.asyncio
    async def test_user_vote_only_for_authenticated_reader(self, unit_env):
        # Arrange
        cast = await unit_env.get(CastVoteUseCase)
        get_aggregate = await unit_env.get(GetVoteAggregateUseCase)
        await cast.execute(
            CastVoteCommand(
                user_id="alice",
                target_type="bill",
                target_id=42,
                vote_type=VoteType.DOWNVOTE,
            )
        )

        # Act
        as_alice = await get_aggregate.execute(
            GetVoteAggregateRequest(target_type="bill", target_id=42, user_id="alice")
        )
        anonymous = await get_aggregate.execute(
            GetVoteAggregateRequest(target_type="bill", target_id=42)
        )

        # Assert
        assert as_alice.user_vote == VoteType.DOWNVOTE
        assert anonymous.user_vote is None
        assert anonymous.downvotes == 1
        assert anonymous.total_score == -1
