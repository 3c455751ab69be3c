"""
    treeutil.convert
    ----------------

    Conversions between nested forests, flat lists and the ``data`` /
    ``children`` bulk structure used by django tree models.

"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from treeutil.keys import as_list, get_keys
from treeutil.types import BulkNodeData, Forest, Node, NodeId

logger = logging.getLogger(__name__)


def _preorder(forest, keys) -> Iterator[tuple[Node, int]]:
    "yields (node, depth) tuples, roots have a depth of 1"
    stack = [(node, 1) for node in as_list(forest)[::-1]]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend([(child, depth + 1)
                      for child in keys.get_children(node)[::-1]])


def flatten(forest: Forest, keys=None) -> list[Node]:
    """
    Converts a forest into a flat list.

    :returns: a list with every node of the forest in pre-order, each node
        followed by all of its descendants. The nodes themselves are
        returned, with their children field untouched.

    Example::

        forest = [
            {'id': 1, 'name': 'Node 1', 'children': [
                {'id': 2, 'name': 'Node 1.1'},
                {'id': 3, 'name': 'Node 1.2'},
            ]},
            {'id': 4, 'name': 'Node 2'},
        ]
        flatten(forest)
        # [{'id': 1, 'name': 'Node 1', 'children': [...]},
        #  {'id': 2, 'name': 'Node 1.1'},
        #  {'id': 3, 'name': 'Node 1.2'},
        #  {'id': 4, 'name': 'Node 2'}]
    """
    keys = get_keys(keys)
    return [node for node, _ in _preorder(forest, keys)]


def unflatten(records, keys=None) -> list[dict[str, Any]]:
    """
    Builds a forest out of a flat list of records linked to their parents.

    :param records: a list of mappings, each one with an id field and a
        parent reference field (``parentId`` unless configured otherwise)
    :param keys: a :class:`treeutil.keys.NodeKeys`, defaults are used if
        not given

    :returns: the list of root nodes. Every record is copied into a new dict
        that gets an empty children list, the input isn't modified.

    Records without a parent reference are roots. Records pointing to a
    parent that isn't in the list are roots too, so filtered lists can be
    converted.

    Example::

        records = [
            {'id': 1, 'parentId': None},
            {'id': 2, 'parentId': 1},
            {'id': 3, 'parentId': None},
        ]
        unflatten(records)
        # [{'id': 1, 'parentId': None, 'children': [
        #      {'id': 2, 'parentId': 1, 'children': []}]},
        #  {'id': 3, 'parentId': None, 'children': []}]
    """
    keys = get_keys(keys)
    nodes = {}
    for record in as_list(records, what='records'):
        node_id = keys.get_id(record)
        node = dict(record)
        node[keys.children_key] = []
        nodes[node_id] = node

    roots = []
    for node_id, node in nodes.items():
        parent_id = keys.get_parent_id(node)
        if parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(parent_id)
        if parent is None or parent is node:
            logger.debug('unflatten: parent %r of node %r not found, '
                         'added as a root node', parent_id, node_id)
            roots.append(node)
        else:
            parent[keys.children_key].append(node)
    return roots


def get_annotated_list(forest: Forest, node_id: NodeId | None = None,
                       keys=None) -> list[tuple[Node, dict[str, Any]]]:
    """
    Gets an annotated list from a forest branch, useful to render a tree
    with a flat loop in a template.

    :param node_id: id of the node that will be used as the top of the
        branch. If not given, the whole forest is used.

    :returns: a list of ``(node, info)`` tuples in pre-order, where
        ``info`` is a dict with:

        - ``open``: ``True`` if a new level starts with this node
        - ``close``: list of levels that end after this node
        - ``level``: depth of the node, the top of the branch is 0

        An empty list if ``node_id`` doesn't exist.

    Example::

        {% for node, info in annotated_list %}
            {% if info.open %}<ul><li>{% else %}</li><li>{% endif %}
            {{ node.name }}
            {% for close in info.close %}</li></ul>{% endfor %}
        {% endfor %}
    """
    keys = get_keys(keys)
    if node_id is not None:
        top = next((node for node, _ in _preorder(forest, keys)
                    if keys.get_id(node) == node_id), None)
        if top is None:
            return []
        forest = [top]

    result, info = [], {}
    prev_depth = None
    for node, depth in _preorder(forest, keys):
        if prev_depth is not None and depth < prev_depth:
            info['close'] = list(range(0, prev_depth - depth))
        info = {'open': prev_depth is None or depth > prev_depth,
                'close': [],
                'level': depth - 1}
        result.append((node, info))
        prev_depth = depth
    if prev_depth is not None:
        info['close'] = list(range(0, prev_depth))
    return result


def to_bulk(forest: Forest, keep_ids: bool = True,
            keys=None) -> list[BulkNodeData]:
    """
    Dumps a forest to the structure accepted by ``load_bulk`` in django tree
    models.

    :param keep_ids: stores the id of every node next to its ``data``.
        Enabled by default.

    :returns: a list of dicts with a ``data`` key holding every field of the
        node except the id, children and parent reference fields, and a
        ``children`` key for nodes with children.

    Example::

        to_bulk([{'id': 1, 'desc': '1', 'children': [{'id': 2, 'desc': '2'}]}])
        # [{'data': {'desc': '1'}, 'id': 1,
        #   'children': [{'data': {'desc': '2'}, 'id': 2}]}]
    """
    keys = get_keys(keys)
    skip = (keys.id_key, keys.children_key, keys.parent_key)
    ret: list[BulkNodeData] = []
    # stack of (list that receives the node, node)
    stack = [(ret, node) for node in as_list(forest)[::-1]]
    while stack:
        siblings, node = stack.pop()
        newobj: BulkNodeData = {
            'data': {k: v for k, v in node.items() if k not in skip}}
        if keep_ids:
            newobj[keys.id_key] = keys.get_id(node)
        siblings.append(newobj)
        children = keys.get_children(node)
        if children:
            newobj['children'] = []
            stack.extend([(newobj['children'], child)
                          for child in children[::-1]])
    return ret


def from_bulk(bulk_data: list[BulkNodeData], keys=None) -> list[dict[str, Any]]:
    """
    Loads a ``data`` / ``children`` structure (see :func:`to_bulk`) as a
    forest of new dicts. Ids are restored when the structure has them.
    """
    keys = get_keys(keys)
    roots: list[dict[str, Any]] = []
    stack = [(roots, struct)
             for struct in as_list(bulk_data, what='bulk_data')[::-1]]
    while stack:
        siblings, struct = stack.pop()
        # shallow copy of the data structure so it doesn't persist...
        node = dict(struct['data'])
        if keys.id_key in struct:
            node[keys.id_key] = struct[keys.id_key]
        node[keys.children_key] = []
        siblings.append(node)
        stack.extend([(node[keys.children_key], child)
                      for child in (struct.get('children') or [])[::-1]])
    return roots
