"""
    treeutil.selection
    ------------------

    Conversion between "selected leaves" and "selected branches", the two
    ways a tree of checkboxes can be stored.

"""

import logging
from collections import deque

from treeutil.keys import as_list, get_keys

logger = logging.getLogger(__name__)


def leaf_to_parent(forest, leaf_ids, keys=None):
    """
    Replaces selected children with their parent wherever all the children
    of a node are selected, going up the tree as long as possible.

    :param forest: list of root nodes
    :param leaf_ids: ids of the selected nodes, usually leaves
    :param keys: a :class:`treeutil.keys.NodeKeys`, defaults are used if
        not given

    :returns: a list with the ids of the minimal set of nodes that covers
        the selection. Ids that don't exist in the forest are kept as they
        are.

    Example::

        forest = [
            {'id': 1, 'children': [
                {'id': 2, 'children': [{'id': 4}, {'id': 5}]},
                {'id': 3, 'children': [{'id': 6}, {'id': 7}]},
            ]},
        ]
        leaf_to_parent(forest, [4, 5, 6, 7])  # [1]
        leaf_to_parent(forest, [4, 5, 6])     # [6, 2]

    """
    keys = get_keys(keys)
    # dict as an ordered set
    selected = dict.fromkeys(as_list(leaf_ids, what='leaf_ids'))
    seeded = set(selected)

    # child id -> parent node
    parents = {}
    # parent id -> number of children not covered yet
    remaining = {}
    # id -> node, for nodes with children
    branches = {}
    root_ids = set()
    stack = as_list(forest)
    for node in stack:
        root_ids.add(keys.get_id(node))
    while stack:
        node = stack.pop()
        children = keys.get_children(node)
        if children:
            for child in children:
                parents[keys.get_id(child)] = node
            stack.extend(children)
            remaining[keys.get_id(node)] = len(children)
            branches[keys.get_id(node)] = node

    unknown = [node_id for node_id in selected
               if node_id not in parents and node_id not in root_ids]
    if unknown:
        logger.debug('leaf_to_parent: ids not found in the forest, kept '
                     'as they are: %r', unknown)

    queue = deque()

    def cover(node_id):
        parent = parents.get(node_id)
        if parent is None:
            return
        parent_id = keys.get_id(parent)
        remaining[parent_id] -= 1
        if remaining[parent_id] == 0:
            queue.append(parent)

    def drop_descendants(node):
        branch = keys.get_children(node)
        while branch:
            current = branch.pop()
            selected.pop(keys.get_id(current), None)
            branch.extend(keys.get_children(current))

    for node_id in selected:
        cover(node_id)

    while queue:
        parent = queue.popleft()
        parent_id = keys.get_id(parent)
        selected[parent_id] = None
        drop_descendants(parent)
        # a selected branch already counted for its parent when seeding
        if parent_id not in seeded:
            cover(parent_id)

    # branches selected by the caller cover whatever was picked below them
    for node_id in seeded:
        if node_id in selected and node_id in branches:
            drop_descendants(branches[node_id])

    logger.debug('leaf_to_parent: %d selected ids reduced to %d',
                 len(seeded), len(selected))
    return list(selected)


def parent_to_leaf(forest, parent_ids, keys=None, get_all_leaves=False):
    """
    Expands selected nodes into the ids of the leaves below them. This is
    the inverse of :func:`leaf_to_parent`.

    :param parent_ids: ids of the selected nodes. Selected leaves expand to
        themselves; nodes nested in a non selected branch are found too.
    :param get_all_leaves: when nothing is selected, return every leaf of
        the forest instead of an empty list

    :returns: a list of leaf ids, from left to right
    """
    keys = get_keys(keys)
    wanted = set(as_list(parent_ids, what='parent_ids'))
    select_all = not wanted and get_all_leaves
    if not wanted and not select_all:
        return []

    leaf_ids = []
    stack = as_list(forest)[::-1]
    while stack:
        node = stack.pop()
        if select_all or keys.get_id(node) in wanted:
            branch = [node]
            while branch:
                current = branch.pop()
                children = keys.get_children(current)
                if children:
                    branch.extend(children[::-1])
                else:
                    leaf_ids.append(keys.get_id(current))
        else:
            stack.extend(keys.get_children(node)[::-1])
    return leaf_ids
