import random
from typing import Dict, List, Optional, Tuple

import structlog

from .forest import build_forest, infer_limits
from .schema import validate_config
from .tree import Feature, Tree

log = structlog.get_logger()


class HalfSpaceTrees:
    """
    Half-Space Trees, an online variant of isolation forests.

    Trees are built lazily from the keys of the first learned vector (each
    feature defaulting to the range [0, 1] unless `limits` says otherwise).
    Mass is counted in two generations: the running one fills up during the
    current window and becomes the reference used for scoring once
    `window_size` vectors have been learned.

    >>> hst = HalfSpaceTrees(n_trees=10, height=3, window_size=3, seed=1)
    >>> for v in (0.5, 0.45, 0.43):
    ...     _ = hst.learn({"x": v, "y": v, "z": v})
    >>> hst.score({"x": 0.445, "y": 0.445, "z": 0.445}) < 0.5
    True
    """
    def __init__(self, n_trees: int = 10, height: int = 8, window_size: int = 250,
                 limits: Optional[Dict[str, Tuple[float, float]]] = None,
                 padding: float = 0.15, seed: Optional[int] = None):
        cfg = validate_config(
            n_trees=n_trees, height=height, window_size=window_size,
            limits=limits, padding=padding, seed=seed,
        )
        self.n_trees = cfg.n_trees
        self.height = cfg.height
        self.window_size = cfg.window_size
        self.limits = cfg.limits
        self.padding = cfg.padding
        self.trees: Optional[List[Tree]] = None
        self.counter = 0
        self.first_window = True
        self._rng = random.Random(cfg.seed)

    @property
    def size_limit(self) -> float:
        return 0.1 * self.window_size

    @property
    def max_score(self) -> int:
        return self.n_trees * self.window_size * (2 ** (self.height + 1) - 1)

    def learn(self, x: Feature) -> "HalfSpaceTrees":
        if self.trees is None:
            limits = infer_limits(x, self.limits)
            if limits:
                self.trees = build_forest(self._rng, limits, self.height, self.n_trees, self.padding)
                log.info("ensemble_built", n_trees=self.n_trees, height=self.height,
                         features=sorted(limits))
            else:
                # Nothing to split on yet, the event still counts toward the window
                log.debug("ensemble_deferred", reason="no_features")

        for tree in self.trees or ():
            for node in tree.walk(x):
                node.running_mass += 1

        self.counter += 1
        if self.counter == self.window_size:
            self._rotate()
        return self

    def _rotate(self):
        for tree in self.trees or ():
            for node in tree.nodes():
                node.reference_mass = node.running_mass
                node.running_mass = 0
        self.first_window = False
        self.counter = 0
        log.debug("window_rotated", window_size=self.window_size)

    def score(self, x: Feature) -> float:
        """
        Anomaly score of `x`, higher means more anomalous. Always 0.0 until
        the first window has completed.
        """
        if self.first_window:
            return 0.0

        # No trees yet means no recorded mass, every point scores 1.0
        total = 0
        for tree in self.trees or ():
            for depth, node in enumerate(tree.walk(x)):
                total += node.reference_mass * 2 ** depth
                if node.reference_mass < self.size_limit:
                    break
        return 1.0 - total / self.max_score
