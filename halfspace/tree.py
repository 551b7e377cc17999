from dataclasses import dataclass
from typing import Dict, Iterator, List, Union

Feature = Dict[str, float]


@dataclass(frozen=True)
class Split:
    feature: str
    threshold: float
    how: str = "lt"

    def __post_init__(self):
        if self.how != "lt":
            raise ValueError(f"unsupported split comparator {self.how!r}")


@dataclass
class Leaf:
    running_mass: int = 0
    reference_mass: int = 0


@dataclass
class Internal:
    split: Split
    left: int
    right: int
    running_mass: int = 0
    reference_mass: int = 0


Node = Union[Leaf, Internal]


class Tree:
    """
    Half-space tree stored as an arena of nodes. The root lives at index 0,
    internal nodes address their children by index.
    """
    def __init__(self, nodes: List[Node], height: int):
        self._nodes = nodes
        self.height = height

    @property
    def root(self) -> Node:
        return self._nodes[0]

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def left(self, node: Internal) -> Node:
        return self._nodes[node.left]

    def right(self, node: Internal) -> Node:
        return self._nodes[node.right]

    def nodes(self) -> Iterator[Node]:
        # Arena order, every node exactly once
        return iter(self._nodes)

    def walk(self, x: Feature) -> Iterator[Node]:
        """
        Yield the nodes visited by `x` from the root down to a leaf.

        When `x` lacks the split feature of a node, the walk follows the
        child holding the larger running mass (left on ties).
        """
        node = self.root
        yield node
        while isinstance(node, Internal):
            node = self._next(node, x)
            yield node

    def _next(self, node: Internal, x: Feature) -> Node:
        left, right = self.left(node), self.right(node)
        value = x.get(node.split.feature)
        if value is None:
            return right if right.running_mass > left.running_mass else left
        return left if value < node.split.threshold else right
