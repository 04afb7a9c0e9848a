#!/usr/bin/env python3
"""
Build the two-level treemap hierarchy (borough -> descriptor) from a count table.
"""


class TreemapNode(object):
    """
    A node of the treemap hierarchy.

    Leaves carry their own count as value; a node built with children
    takes the sum of its children's values. Children are stored as a
    tuple and never change after construction.
    """

    def __init__(self, label, value=None, children=()):
        self.label = label
        self.children = tuple(children)
        if self.children:
            self.value = sum(child.value for child in self.children)
        else:
            self.value = value or 0
        if self.value < 0:
            raise ValueError(f"Node value must be non-negative, got {self.value} for {label!r}")

    @property
    def is_leaf(self):
        return not self.children

    def leaves(self):
        if self.is_leaf:
            return [self]
        return [leaf for child in self.children for leaf in child.leaves()]

    def depth_first(self, depth=0):
        """Yield (node, depth) in pre-order"""
        yield self, depth
        for child in self.children:
            yield from child.depth_first(depth + 1)

    def __eq__(self, other):
        if not isinstance(other, TreemapNode):
            return NotImplemented
        return (self.label, self.value, self.children) == (other.label, other.value, other.children)

    def __hash__(self):
        return hash((self.label, self.value, self.children))

    def __repr__(self):
        info = f'{self.value}'
        if self.children:
            info += f', {len(self.children)} children'
        return f'<TreemapNode {self.label}: {info}>'


def sort_nodes(nodes):
    """Descending by value; equal values keep their input order"""
    return sorted(nodes, key=lambda node: node.value, reverse=True)


def build_hierarchy(table):
    """Turn {borough: {descriptor: count}} into a sorted root node"""
    borough_nodes = []
    for borough, descriptors in table.items():
        leaves = [TreemapNode(descriptor, count) for descriptor, count in descriptors.items()]
        borough_nodes.append(TreemapNode(borough, children=sort_nodes(leaves)))

    return TreemapNode(None, 0, children=sort_nodes(borough_nodes))


def tree_to_dict(node):
    """Nested name/value/children dict, the shape D3's hierarchy() expects"""
    data = {
        'name': node.label,
        'value': node.value,
    }
    if node.children:
        data['children'] = [tree_to_dict(child) for child in node.children]
    return data
