from collections.abc import Mapping

from election_tally.domain.models import RegionNode


def count_votes_in_regions(region_tree):
    """Sum ``votes`` over a region and all of its nested sub-regions.

    Accepts nested mappings (``{"votes": ..., "subRegions": [...]}``) or
    ``RegionNode`` models. The tree must be acyclic: a cycle recurses until
    ``RecursionError``.
    """
    if isinstance(region_tree, RegionNode):
        votes, sub_regions = region_tree.votes, region_tree.sub_regions
    elif isinstance(region_tree, Mapping):
        votes = region_tree.get("votes")
        sub_regions = region_tree.get("subRegions")
    else:
        return 0

    total = votes if isinstance(votes, (int, float)) and not isinstance(votes, bool) else 0
    if isinstance(sub_regions, (list, tuple)):
        for sub_region in sub_regions:
            total += count_votes_in_regions(sub_region)
    return total
