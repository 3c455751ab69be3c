from django.template import Library
from django.utils.html import format_html, format_html_join

from treeutil.keys import as_list, get_keys

register = Library()


def _line(node, label_key, keys):
    label = node.get(label_key)
    if label is None:
        label = keys.get_id(node)
    return format_html('<span data-node-id="{}">{}</span>',
                       keys.get_id(node), label)


def _subtree(node, label_key, keys):
    tree = format_html_join(
        '', '<li>{}</li>',
        ((_subtree(child, label_key, keys), )
         for child in keys.get_children(node)))
    if tree:
        tree = format_html('<ul>{}</ul>', tree)
    return _line(node, label_key, keys) + tree


@register.simple_tag
def render_tree(forest, label_key='name', keys=None):
    """Renders a forest as nested ``<ul>`` lists."""
    keys = get_keys(keys)
    tree = format_html_join(
        '', '<li>{}</li>',
        ((_subtree(node, label_key, keys), ) for node in as_list(forest)))
    return format_html('<ul>{}</ul>', tree)


@register.simple_tag
def tree_context(forest, keys=None):
    """
    Generate a list containing additional context for each node of the
    forest, in pre-order, for use by the frontend. Root nodes have a
    ``parent-id`` of 0 and a ``level`` of 1.
    """
    keys = get_keys(keys)
    ret = []
    stack = [(node, 0, 1) for node in as_list(forest)[::-1]]
    while stack:
        node, parent_id, level = stack.pop()
        children = keys.get_children(node)
        ret.append({
            'node-id': str(keys.get_id(node)),
            'parent-id': parent_id,
            'level': level,
            'children-num': len(children),
        })
        stack.extend([(child, keys.get_id(node), level + 1)
                      for child in children[::-1]])
    return ret
