from pydantic import BaseModel

from election_tally.domain.models import Number


class RegisterVoterCommand(BaseModel):
    voter_id: str
    name: str
    age: Number


class CastVoteCommand(BaseModel):
    voter_id: str
    candidate_id: str
