# tests/unit/report/test_unit_tree.py — v1
"""Tests for report/tree.py — generic leaf walker."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from hypatia.report.tree import iter_leaves


def _children(node):
    return node.get("children", [])


def _is_leaf(node):
    return "children" not in node


class TestIterLeaves:
    def test_flat(self):
        tree = {"children": [{"n": 1}, {"n": 2}]}
        assert [n["n"] for n in iter_leaves(tree, _children, _is_leaf)] == [1, 2]

    def test_arbitrary_depth_preserves_order(self):
        tree = {"children": [
            {"n": 1},
            {"children": [{"children": [{"children": [{"n": 2}]}]}, {"n": 3}]},
            {"n": 4},
        ]}
        assert [n["n"] for n in iter_leaves(tree, _children, _is_leaf)] == [1, 2, 3, 4]

    def test_empty_containers(self):
        tree = {"children": [{"children": []}, {"children": [{"children": []}]}]}
        assert list(iter_leaves(tree, _children, _is_leaf)) == []

    def test_root_never_yielded(self):
        assert list(iter_leaves({"n": 0}, lambda n: [], lambda n: True)) == []

    def test_is_lazy(self):
        seen = []

        def children(node):
            seen.append(node.get("name"))
            return node.get("children", [])

        tree = {"name": "root", "children": [
            {"n": 1}, {"name": "later", "children": [{"n": 2}]},
        ]}
        walker = iter_leaves(tree, children, _is_leaf)
        assert next(walker)["n"] == 1
        assert "later" not in seen

    def test_deep_nesting_without_recursion_limit(self):
        node = {"n": "leaf"}
        for _ in range(5000):
            node = {"children": [node]}
        assert [n["n"] for n in iter_leaves(node, _children, _is_leaf)] == ["leaf"]

    def test_works_on_element_tree(self):
        root = ET.fromstring("<r><d><f id='a'/><d><f id='b'/></d></d><f id='c'/></r>")
        leaves = iter_leaves(root, list, lambda el: el.tag == "f")
        assert [el.get("id") for el in leaves] == ["a", "b", "c"]
