"""Node lookup in forests."""

from __future__ import annotations

from treeutil.keys import as_list, get_keys
from treeutil.types import Forest, Node, NodeId


def find_node(forest: Forest, node_id: NodeId, keys=None) -> Node | None:
    """
    Depth first search of a node.

    :param forest: list of root nodes
    :param node_id: id of the node we're looking for
    :param keys: a :class:`treeutil.keys.NodeKeys`, defaults are used if
        not given

    :returns: the first node (in pre-order) with the given id, or ``None``

    Example::

        forest = [
            {'id': 1, 'children': [{'id': 2, 'children': [{'id': 3}]}]},
            {'id': 4},
        ]
        find_node(forest, 3)  # {'id': 3}
    """
    keys = get_keys(keys)
    # iterative preorder, children are pushed reversed so the leftmost one
    # is popped first
    stack = as_list(forest)[::-1]
    while stack:
        node = stack.pop()
        if keys.get_id(node) == node_id:
            return node
        stack.extend(keys.get_children(node)[::-1])
    return None


def find_path(forest: Forest, node_id: NodeId, keys=None) -> list[Node]:
    """
    Depth first search of the path that leads to a node.

    :returns: a list of nodes, starting with the root and ending with the
        node itself. An empty list if the node doesn't exist.

    Example::

        forest = [
            {'id': 1, 'children': [{'id': 2, 'children': [{'id': 3}]}]},
            {'id': 4},
        ]
        find_path(forest, 3)
        # [{'id': 1, ...}, {'id': 2, ...}, {'id': 3}]
    """
    keys = get_keys(keys)
    stack: list[tuple[Node, list[Node]]] = [
        (node, [node]) for node in as_list(forest)[::-1]]
    while stack:
        node, path = stack.pop()
        if keys.get_id(node) == node_id:
            return path
        stack.extend([(child, path + [child])
                      for child in keys.get_children(node)[::-1]])
    return []


def get_leaves(forest: Forest, keys=None) -> list[Node]:
    ":returns: every node without children, from left to right"
    keys = get_keys(keys)
    leaves = []
    stack = as_list(forest)[::-1]
    while stack:
        node = stack.pop()
        children = keys.get_children(node)
        if children:
            stack.extend(children[::-1])
        else:
            leaves.append(node)
    return leaves
