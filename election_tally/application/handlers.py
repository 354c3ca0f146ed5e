import logging

from election_tally.application.commands import CastVoteCommand, RegisterVoterCommand
from election_tally.application.queries import CountRegionVotesQuery, GetElectionResultsQuery, TopCandidateQuery, ValidateVoterQuery
from election_tally.application.query_bus import QueryBus
from election_tally.domain.election import ElectionSession
from election_tally.domain.regions import count_votes_in_regions
from election_tally.domain.validator import create_vote_validator

logger = logging.getLogger(__name__)


class RegisterVoterHandler:
    def __init__(self, session: ElectionSession):
        self.session = session

    def handle(self, command: RegisterVoterCommand):
        voter = {"id": command.voter_id, "name": command.name, "age": command.age}
        if not self.session.register_voter(voter):
            raise ValueError("Voter registration rejected")
        return command.voter_id


class CastVoteHandler:
    def __init__(self, session: ElectionSession):
        self.session = session

    def handle(self, command: CastVoteCommand):
        def rejected(reason: str):
            raise ValueError(reason)

        # on_success hands the receipt straight back to the caller
        return self.session.cast_vote(
            command.voter_id,
            command.candidate_id,
            lambda receipt: receipt,
            rejected,
        )


class GetElectionResultsHandler:
    def __init__(self, session: ElectionSession):
        self.session = session

    def handle(self, query: GetElectionResultsQuery):
        return [record.model_dump() for record in self.session.get_results(query.sort_fn)]


class TopCandidateHandler:
    def __init__(self, session: ElectionSession):
        self.session = session

    def handle(self, query: TopCandidateQuery):
        winner = self.session.get_winner()
        if winner is None:
            return None
        return winner.model_dump()


class CountRegionVotesHandler:
    def handle(self, query: CountRegionVotesQuery):
        return count_votes_in_regions(query.region_tree)


class ValidateVoterHandler:
    def handle(self, query: ValidateVoterQuery):
        validator = create_vote_validator(query.rules)
        return validator(query.voter)


class CommandBus:
    def __init__(self):
        self.handlers = {}

    def register_handler(self, command_type, handler):
        self.handlers[command_type] = handler

    def handle(self, command):
        command_type = type(command)
        if command_type not in self.handlers:
            raise ValueError(f"No handler registered for {command_type.__name__}")
        logger.debug("Handling %s", command_type.__name__)
        return self.handlers[command_type].handle(command)


def create_buses(session: ElectionSession):
    """Wire every command and query handler to ``session``."""
    command_bus = CommandBus()
    command_bus.register_handler(RegisterVoterCommand, RegisterVoterHandler(session))
    command_bus.register_handler(CastVoteCommand, CastVoteHandler(session))

    query_bus = QueryBus()
    query_bus.register_handler(GetElectionResultsQuery, GetElectionResultsHandler(session))
    query_bus.register_handler(TopCandidateQuery, TopCandidateHandler(session))
    query_bus.register_handler(CountRegionVotesQuery, CountRegionVotesHandler())
    query_bus.register_handler(ValidateVoterQuery, ValidateVoterHandler())

    return command_bus, query_bus
