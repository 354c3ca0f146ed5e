from typing import Any


class GetElectionResultsQuery:
    def __init__(self, sort_fn=None):
        self.sort_fn = sort_fn  # optional two-argument comparator

class TopCandidateQuery:
    pass  # The winner needs no parameters

class CountRegionVotesQuery:
    def __init__(self, region_tree: Any):
        self.region_tree = region_tree

class ValidateVoterQuery:
    def __init__(self, voter: Any, rules: Any = None):
        self.voter = voter
        self.rules = {} if rules is None else rules
