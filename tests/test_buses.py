import pytest
from pydantic import ValidationError
from election_tally.application.commands import CastVoteCommand, RegisterVoterCommand
from election_tally.application.handlers import create_buses
from election_tally.application.queries import CountRegionVotesQuery, GetElectionResultsQuery, TopCandidateQuery, ValidateVoterQuery
from election_tally.domain.election import create_election
from election_tally.domain.models import ValidationResult


@pytest.fixture
def election():
    return create_election([
        {"id": "C1", "name": "Sarpanch Ram", "party": "Janata"},
        {"id": "C2", "name": "Pradhan Sita", "party": "Lok"},
    ])

@pytest.fixture
def buses(election):
    return create_buses(election)

@pytest.fixture
def command_bus(buses):
    return buses[0]

@pytest.fixture
def query_bus(buses):
    return buses[1]


def test_register_voter_command(command_bus, election):
    assert command_bus.handle(RegisterVoterCommand(voter_id="V1", name="Mohan", age=25)) == "V1"
    assert election.is_registered("V1")

def test_rejected_registration_raises(command_bus):
    command_bus.handle(RegisterVoterCommand(voter_id="V1", name="Mohan", age=25))
    with pytest.raises(ValueError, match="Voter registration rejected"):
        command_bus.handle(RegisterVoterCommand(voter_id="V1", name="Mohan", age=25))
    with pytest.raises(ValueError, match="Voter registration rejected"):
        command_bus.handle(RegisterVoterCommand(voter_id="V2", name="Chotu", age=12))

def test_register_command_validates_fields():
    with pytest.raises(ValidationError):
        RegisterVoterCommand(voter_id="V1", name="Mohan", age="twenty")

def test_cast_vote_command_returns_receipt(command_bus):
    command_bus.handle(RegisterVoterCommand(voter_id="V1", name="Mohan", age=25))
    receipt = command_bus.handle(CastVoteCommand(voter_id="V1", candidate_id="C2"))
    assert receipt == {"voterId": "V1", "candidateId": "C2"}

@pytest.mark.parametrize("voter_id, candidate_id, reason", [
    ("ghost", "C1", "Voter not registered"),
    ("V1", "C9", "Candidate does not exist"),
])
def test_cast_vote_failures_raise_with_reason(command_bus, voter_id, candidate_id, reason):
    command_bus.handle(RegisterVoterCommand(voter_id="V1", name="Mohan", age=25))
    with pytest.raises(ValueError, match=reason):
        command_bus.handle(CastVoteCommand(voter_id=voter_id, candidate_id=candidate_id))

def test_repeat_vote_raises(command_bus, election):
    command_bus.handle(RegisterVoterCommand(voter_id="V1", name="Mohan", age=25))
    command_bus.handle(CastVoteCommand(voter_id="V1", candidate_id="C1"))
    with pytest.raises(ValueError, match="Voter has already voted"):
        command_bus.handle(CastVoteCommand(voter_id="V1", candidate_id="C2"))
    assert election.total_votes == 1

def test_results_and_top_candidate_queries(command_bus, query_bus):
    assert query_bus.handle(TopCandidateQuery()) is None

    for voter_id, candidate_id in [("V1", "C2"), ("V2", "C2"), ("V3", "C1")]:
        command_bus.handle(RegisterVoterCommand(voter_id=voter_id, name=voter_id, age=30))
        command_bus.handle(CastVoteCommand(voter_id=voter_id, candidate_id=candidate_id))

    assert query_bus.handle(GetElectionResultsQuery()) == [
        {"id": "C2", "name": "Pradhan Sita", "party": "Lok", "votes": 2},
        {"id": "C1", "name": "Sarpanch Ram", "party": "Janata", "votes": 1},
    ]
    by_id = lambda a, b: (a.id > b.id) - (a.id < b.id)
    assert [row["id"] for row in query_bus.handle(GetElectionResultsQuery(sort_fn=by_id))] == ["C1", "C2"]
    assert query_bus.handle(TopCandidateQuery()) == {"id": "C2", "name": "Pradhan Sita", "party": "Lok", "votes": 2}

def test_region_and_validator_queries(query_bus):
    tree = {"votes": 2, "subRegions": [{"votes": 3, "subRegions": []}, {"votes": 1}]}
    assert query_bus.handle(CountRegionVotesQuery(tree)) == 6

    result = query_bus.handle(ValidateVoterQuery({"id": "v1", "age": 19}, {"minAge": 21, "requiredFields": ["id", "age"]}))
    assert result == ValidationResult(valid=False, reason="Voter below minimum age 21")
    assert query_bus.handle(ValidateVoterQuery({"id": "v1", "name": "A", "age": 19})).valid is True

def test_unknown_messages_raise(command_bus, query_bus):
    class UnknownMessage:
        pass

    with pytest.raises(ValueError, match="No handler registered"):
        command_bus.handle(UnknownMessage())
    with pytest.raises(ValueError, match="No handler registered for query type"):
        query_bus.handle(UnknownMessage())

def test_buses_are_bound_to_their_own_session(command_bus):
    other_commands, other_queries = create_buses(create_election([{"id": "C1", "name": "A", "party": "X"}]))
    command_bus.handle(RegisterVoterCommand(voter_id="V1", name="Mohan", age=25))
    with pytest.raises(ValueError, match="Voter not registered"):
        other_commands.handle(CastVoteCommand(voter_id="V1", candidate_id="C1"))
    assert other_queries.handle(TopCandidateQuery()) is None
