from collections.abc import Hashable, Mapping


def tally_pure(current_tally, candidate_id) -> dict:
    """Return a new tally with ``candidate_id`` counted once more.

    ``current_tally`` is left untouched. Bad input yields an empty tally.
    """
    if not isinstance(current_tally, Mapping) or candidate_id is None:
        return {}
    if not isinstance(candidate_id, Hashable):
        return {}
    return {**current_tally, candidate_id: (current_tally.get(candidate_id) or 0) + 1}
