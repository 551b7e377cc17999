import random

from halfspace.forest import DEFAULT_PADDING, build_forest, build_tree, infer_limits
from halfspace.tree import Internal


def check_thresholds(tree, index, bounds, padding):
    node = tree[index]
    if not isinstance(node, Internal):
        return
    lo, hi = bounds[node.split.feature]
    width = hi - lo
    assert lo + padding * width <= node.split.threshold <= hi - padding * width
    left = dict(bounds)
    left[node.split.feature] = (lo, node.split.threshold)
    right = dict(bounds)
    right[node.split.feature] = (node.split.threshold, hi)
    check_thresholds(tree, node.left, left, padding)
    check_thresholds(tree, node.right, right, padding)


def test_thresholds_respect_padding_within_narrowed_ranges():
    limits = {"a": (0.0, 1.0), "b": (-10.0, 10.0)}
    for seed in range(5):
        tree = build_tree(random.Random(seed), limits, height=6)
        check_thresholds(tree, 0, limits, DEFAULT_PADDING)


def test_build_tree_does_not_mutate_limits():
    limits = {"a": (0.0, 1.0)}
    build_tree(random.Random(1), limits, height=4)
    assert limits == {"a": (0.0, 1.0)}


def test_split_features_come_from_limits():
    limits = {"a": (0.0, 1.0), "b": (0.0, 1.0), "c": (0.0, 1.0)}
    forest = build_forest(random.Random(3), limits, height=4, n_trees=5)
    used = {n.split.feature for t in forest for n in t.nodes() if isinstance(n, Internal)}
    assert used <= set(limits)
    assert len(forest) == 5


def splits(forest):
    return [[(n.split.feature, n.split.threshold) for n in t.nodes() if isinstance(n, Internal)]
            for t in forest]


def test_same_seed_builds_same_forest():
    limits = {"a": (0.0, 1.0), "b": (0.0, 1.0)}
    f1 = build_forest(random.Random(7), limits, height=3, n_trees=4)
    f2 = build_forest(random.Random(7), limits, height=3, n_trees=4)
    assert splits(f1) == splits(f2)


def test_trees_in_forest_are_independent():
    forest = build_forest(random.Random(7), {"a": (0.0, 1.0)}, height=3, n_trees=2)
    s = splits(forest)
    assert s[0] != s[1]


def test_infer_limits_defaults_and_overrides():
    limits = infer_limits({"a": 0.1, "b": 5.0}, {"b": (0, 10), "c": (-1, 1)})
    assert limits == {"a": (0.0, 1.0), "b": (0.0, 10.0), "c": (-1.0, 1.0)}
    assert infer_limits({"a": 0.1}) == {"a": (0.0, 1.0)}


def test_default_range_comes_from_settings(monkeypatch):
    from halfspace.config import settings
    from halfspace.quality import range_checks

    monkeypatch.setattr(settings, "value_range", (-5.0, 5.0))
    assert infer_limits({"a": 2.0}) == {"a": (-5.0, 5.0)}
    assert range_checks({"a": 2.0}) == []
