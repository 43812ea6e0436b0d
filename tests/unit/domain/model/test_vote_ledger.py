"""Unit tests for the vote ledger."""

from uuid import uuid4

import pytest

from querynet.domain.model import Vote, VoteLedger
from querynet.domain.value import UserId, VotableType, VoteDirection, VoteId

UP = VoteDirection.UPVOTE
DOWN = VoteDirection.DOWNVOTE


def empty_ledger() -> VoteLedger:
    return VoteLedger(votable_type=VotableType.ANSWER, votable_id=uuid4())


class TestApply:
    """Toggle semantics of VoteLedger.apply."""

    @pytest.mark.parametrize("direction", [UP, DOWN])
    def test_same_direction_twice_leaves_no_vote(self, direction):
        voter = UserId(uuid4())
        ledger, _ = empty_ledger().apply(voter, direction)
        ledger, change = ledger.apply(voter, direction)

        assert ledger.vote_of(voter) is None
        assert ledger.score == 0
        assert change.is_retraction
        assert change.user_vote is None

    @pytest.mark.parametrize("first,second", [(UP, DOWN), (DOWN, UP)])
    def test_opposite_direction_replaces_vote(self, first, second):
        voter = UserId(uuid4())
        ledger, _ = empty_ledger().apply(voter, first)
        ledger, change = ledger.apply(voter, second)

        votes = [v for v in ledger.votes if v.user_id == voter]
        assert len(votes) == 1
        assert votes[0].direction is second
        assert change.removed is not None and change.added is not None
        assert change.user_vote is second

    def test_alice_scenario(self):
        """Upvote, upvote again, then downvote: 0 -> 1 -> 0 -> -1."""
        alice = UserId(uuid4())
        ledger = empty_ledger()

        ledger, _ = ledger.apply(alice, UP)
        assert ledger.score == 1

        ledger, _ = ledger.apply(alice, UP)
        assert ledger.score == 0
        assert ledger.votes == ()

        ledger, _ = ledger.apply(alice, DOWN)
        assert ledger.score == -1
        assert len(ledger.votes) == 1
        assert ledger.votes[0].direction is DOWN

    def test_apply_does_not_touch_other_voters(self):
        alice, bob = UserId(uuid4()), UserId(uuid4())
        ledger, _ = empty_ledger().apply(alice, UP)
        ledger, _ = ledger.apply(bob, DOWN)
        ledger, _ = ledger.apply(bob, DOWN)

        assert ledger.vote_of(alice).direction is UP
        assert ledger.score == 1


class TestScore:
    def test_score_is_upvotes_minus_downvotes(self):
        ledger = empty_ledger()
        for direction in (UP, UP, UP, DOWN):
            ledger, _ = ledger.apply(UserId(uuid4()), direction)

        assert ledger.upvotes == 3
        assert ledger.downvotes == 1
        assert ledger.score == 2


class TestInvariants:
    def test_rejects_two_votes_from_same_voter(self):
        ledger = empty_ledger()
        voter = UserId(uuid4())
        votes = tuple(
            Vote(
                id=VoteId(uuid4()),
                user_id=voter,
                votable_type=ledger.votable_type,
                votable_id=ledger.votable_id,
                direction=UP,
            )
            for _ in range(2)
        )

        with pytest.raises(ValueError, match="only one vote"):
            VoteLedger(
                votable_type=ledger.votable_type,
                votable_id=ledger.votable_id,
                votes=votes,
            )

    def test_rejects_vote_for_other_item(self):
        vote = Vote(
            id=VoteId(uuid4()),
            user_id=UserId(uuid4()),
            votable_type=VotableType.ANSWER,
            votable_id=uuid4(),
            direction=UP,
        )

        with pytest.raises(ValueError, match="does not belong"):
            VoteLedger(votable_type=VotableType.ANSWER, votable_id=uuid4(), votes=(vote,))
