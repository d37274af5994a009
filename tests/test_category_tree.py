"""Pure tree helpers: path calculation, cycle detection, full recompute"""
from types import SimpleNamespace

import pytest

from cmscore.core.exceptions import CategoryCycleException, CategoryTreeCorruptedException
from cmscore.services.category_tree import (
    compute_path,
    would_create_cycle,
    recompute_paths,
    children_index,
)


def node(id, slug, parent_id=None, path=None):
    return SimpleNamespace(id=id, slug=slug, parent_id=parent_id, path=path)


class TestComputePath:

    def test_root_path_is_slug(self):
        assert compute_path(node(1, "tech"), lambda _id: None) == "tech"

    def test_child_path_extends_parent_path(self):
        parents = {1: node(1, "tech", path="tech"), 2: node(2, "programming", 1, "tech/programming")}
        assert compute_path(node(3, "web", 2), parents.get) == "tech/programming/web"

    def test_missing_parent_treated_as_root(self):
        assert compute_path(node(3, "web", 99), {}.get) == "web"

    def test_parent_without_stored_path_falls_back_to_slug(self):
        parents = {1: node(1, "tech")}
        assert compute_path(node(2, "ai", 1), parents.get) == "tech/ai"

    def test_does_not_mutate_node(self):
        child = node(2, "ai", 1, path="old/ai")
        compute_path(child, {1: node(1, "tech", path="tech")}.get)
        assert child.path == "old/ai"


class TestWouldCreateCycle:

    parents = {1: None, 2: 1, 3: 2, 4: None}

    def test_moving_ancestor_under_descendant(self):
        assert would_create_cycle(1, 3, self.parents.get) is True
        assert would_create_cycle(2, 3, self.parents.get) is True

    def test_self_parent_reported(self):
        assert would_create_cycle(2, 2, self.parents.get) is True

    def test_valid_moves(self):
        assert would_create_cycle(3, 4, self.parents.get) is False
        assert would_create_cycle(4, 3, self.parents.get) is False
        assert would_create_cycle(3, None, self.parents.get) is False

    def test_chain_ending_at_unknown_id_terminates(self):
        assert would_create_cycle(1, 7, {7: 99}.get) is False

    def test_corrupt_loop_is_reported_as_unknown(self):
        corrupt = {1: 2, 2: 1, 5: None}
        with pytest.raises(CategoryTreeCorruptedException):
            would_create_cycle(5, 1, corrupt.get)


class TestRecomputePaths:

    def test_builds_every_path(self):
        slugs = {1: "tech", 2: "programming", 3: "web", 4: "news"}
        parents = {1: None, 2: 1, 3: 2, 4: None}

        assert recompute_paths(slugs, parents) == {
            1: "tech",
            2: "tech/programming",
            3: "tech/programming/web",
            4: "news",
        }

    def test_order_of_input_does_not_matter(self):
        slugs = {3: "web", 2: "programming", 1: "tech"}
        parents = {3: 2, 2: 1, 1: None}
        assert recompute_paths(slugs, parents)[3] == "tech/programming/web"

    def test_dangling_parent_becomes_root(self):
        assert recompute_paths({5: "orphan", 6: "leaf"}, {5: 42, 6: 5}) == {
            5: "orphan",
            6: "orphan/leaf",
        }

    def test_cycle_raises(self):
        with pytest.raises(CategoryCycleException):
            recompute_paths({1: "a", 2: "b", 3: "c"}, {1: 2, 2: 1, 3: 1})


def test_children_index_files_orphans_under_root():
    index = children_index({1: None, 2: 1, 3: 1, 4: 99})
    assert index == {None: [1, 4], 1: [2, 3]}
