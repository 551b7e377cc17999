import random
from typing import Dict, List, Mapping, Optional, Tuple

from .config import settings
from .tree import Feature, Internal, Leaf, Node, Split, Tree

Limits = Dict[str, Tuple[float, float]]

DEFAULT_PADDING = 0.15


def infer_limits(x: Feature, overrides: Optional[Mapping[str, Tuple[float, float]]] = None) -> Limits:
    # Every seen feature gets the default range; configured limits take precedence
    limits: Limits = {key: settings.value_range for key in x}
    if overrides:
        limits.update({key: (float(lo), float(hi)) for key, (lo, hi) in overrides.items()})
    return limits


def build_tree(rng: random.Random, limits: Mapping[str, Tuple[float, float]], height: int,
               padding: float = DEFAULT_PADDING) -> Tree:
    """
    Build one tree of the given height by recursively bisecting the
    hyper-rectangle described by `limits`.

    Each split picks a feature uniformly and a threshold uniformly inside
    the feature's current range, shrunk by `padding` on both sides.
    """
    nodes: List[Node] = []
    bounds = dict(limits)
    features = list(bounds)

    def grow(depth: int) -> int:
        index = len(nodes)
        if depth == 0:
            nodes.append(Leaf())
            return index
        nodes.append(Leaf())  # placeholder until both children exist

        on = rng.choice(features)
        lo, hi = bounds[on]
        at = rng.uniform(lo + padding * (hi - lo), hi - padding * (hi - lo))

        bounds[on] = (lo, at)
        left = grow(depth - 1)
        bounds[on] = (at, hi)
        right = grow(depth - 1)
        bounds[on] = (lo, hi)

        nodes[index] = Internal(split=Split(feature=on, threshold=at), left=left, right=right)
        return index

    grow(height)
    return Tree(nodes, height)


def build_forest(rng: random.Random, limits: Mapping[str, Tuple[float, float]], height: int,
                 n_trees: int, padding: float = DEFAULT_PADDING) -> List[Tree]:
    return [build_tree(rng, limits, height, padding) for _ in range(n_trees)]
