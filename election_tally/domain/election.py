import logging
from collections.abc import Mapping
from functools import cmp_to_key
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ValidationError

from election_tally.config import MINIMUM_VOTER_AGE
from election_tally.domain.models import Candidate, ResultRecord, VoteReceipt, Voter

logger = logging.getLogger(__name__)


def _noop(*args, **kwargs):
    return None


def _as_payload(value):
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return dict(value)
    return None


def _read_candidates(candidates) -> List[Candidate]:
    if not isinstance(candidates, (list, tuple)):
        return []
    parsed = []
    for entry in candidates:
        payload = _as_payload(entry)
        if payload is None:
            continue
        try:
            parsed.append(Candidate.model_validate(payload))
        except ValidationError:
            logger.debug("Skipping malformed candidate: %r", entry)
    return parsed


class ElectionSession:
    """A single election: candidate list, registered voters and vote counts.

    The candidate list is fixed at construction. Counts and voter sets live in
    private attributes and change only through ``register_voter`` and
    ``cast_vote``.
    """

    def __init__(self, candidates):
        self.__candidates = tuple(_read_candidates(candidates))
        self.__votes = {candidate.id: 0 for candidate in self.__candidates}
        self.__registered = set()
        self.__voted = set()
        logger.info("Election created with %d candidate(s)", len(self.__candidates))

    @property
    def candidates(self):
        return self.__candidates

    @property
    def total_votes(self) -> int:
        return len(self.__voted)

    def is_registered(self, voter_id) -> bool:
        return isinstance(voter_id, str) and voter_id in self.__registered

    def has_voted(self, voter_id) -> bool:
        return isinstance(voter_id, str) and voter_id in self.__voted

    def register_voter(self, voter) -> bool:
        payload = _as_payload(voter)
        if payload is None:
            return False
        try:
            parsed = Voter.model_validate(payload)
        except ValidationError:
            return False
        if parsed.age < MINIMUM_VOTER_AGE or parsed.id in self.__registered:
            return False

        self.__registered.add(parsed.id)
        logger.debug("Voter registered: %s", parsed.id)
        return True

    def cast_vote(
        self,
        voter_id,
        candidate_id,
        on_success: Optional[Callable[[dict], Any]] = None,
        on_error: Optional[Callable[[str], Any]] = None,
    ):
        """Record one vote and report the outcome through a handler.

        Exactly one of ``on_success`` / ``on_error`` is called, inline, and its
        return value is returned. The error reason is the first failing check
        among: voter registered, candidate known, voter not yet voted.
        """
        if not callable(on_success):
            on_success = _noop
        if not callable(on_error):
            on_error = _noop

        if not isinstance(voter_id, str) or voter_id not in self.__registered:
            return on_error("Voter not registered")
        if not isinstance(candidate_id, str) or candidate_id not in self.__votes:
            return on_error("Candidate does not exist")
        if voter_id in self.__voted:
            return on_error("Voter has already voted")

        self.__votes[candidate_id] += 1
        self.__voted.add(voter_id)
        logger.debug("Vote recorded: %s -> %s", voter_id, candidate_id)

        receipt = VoteReceipt(voter_id=voter_id, candidate_id=candidate_id)
        return on_success(receipt.model_dump(by_alias=True))

    def _unsorted_results(self) -> List[ResultRecord]:
        return [
            ResultRecord(
                id=candidate.id,
                name=candidate.name,
                party=candidate.party,
                votes=self.__votes.get(candidate.id, 0),
            )
            for candidate in self.__candidates
        ]

    def get_results(self, sort_fn=None) -> List[ResultRecord]:
        """Results per candidate, most votes first unless a comparator is given.

        ``sort_fn(a, b)`` follows the usual comparator contract: negative when
        ``a`` sorts first, zero for ties, positive otherwise. A ``None``
        result counts as a tie.
        """
        results = self._unsorted_results()
        if callable(sort_fn):
            compare = lambda a, b: sort_fn(a, b) or 0
            return sorted(results, key=cmp_to_key(compare))
        return sorted(results, key=lambda record: record.votes, reverse=True)

    def get_winner(self) -> Optional[ResultRecord]:
        results = self._unsorted_results()
        if not results or all(record.votes == 0 for record in results):
            return None

        winner = results[0]
        for record in results[1:]:
            if record.votes > winner.votes:
                winner = record
        return winner


def create_election(candidates) -> ElectionSession:
    return ElectionSession(candidates)
