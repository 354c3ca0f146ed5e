from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from election_tally.config import MINIMUM_VOTER_AGE, REQUIRED_VOTER_FIELDS

# bools and numeric strings are rejected
Number = Union[StrictInt, StrictFloat]


class Candidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(min_length=1)
    name: Any = None
    party: Any = None


class Voter(BaseModel):
    id: StrictStr
    name: StrictStr
    age: Number


class VoteReceipt(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    voter_id: str = Field(alias="voterId")
    candidate_id: str = Field(alias="candidateId")


class ResultRecord(BaseModel):
    id: str
    name: Any = None
    party: Any = None
    votes: int = 0


class RegionNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    votes: Number = 0
    sub_regions: List["RegionNode"] = Field(default_factory=list, alias="subRegions")


class ValidatorRules(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    min_age: Number = Field(MINIMUM_VOTER_AGE, alias="minAge")
    required_fields: List[StrictStr] = Field(
        default_factory=lambda: list(REQUIRED_VOTER_FIELDS), alias="requiredFields"
    )


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    reason: Optional[str] = None
