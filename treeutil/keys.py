"""
    treeutil.keys
    -------------

    Field access for nodes.

    Every operation in treeutil reads nodes through a :class:`NodeKeys`
    object, so forests using other field names (``uid``, ``items``,
    ``pid``...) work without being rewritten first.

    Defaults can be changed project-wide with the ``TREEUTIL_ID_KEY``,
    ``TREEUTIL_CHILDREN_KEY`` and ``TREEUTIL_PARENT_KEY`` Django settings.
"""

from collections.abc import Mapping

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from treeutil.exceptions import InvalidArgument

DEFAULT_ID_KEY = 'id'
DEFAULT_CHILDREN_KEY = 'children'
DEFAULT_PARENT_KEY = 'parentId'


def _setting(name, default):
    # usable outside of a django project: no settings means builtin defaults
    try:
        return getattr(settings, name, default)
    except ImproperlyConfigured:
        return default


def as_list(value, what='forest'):
    """
    :returns: ``value`` as a new list. ``None`` is an empty list.

    :raise InvalidArgument: when ``value`` is a mapping, a string or isn't
        iterable at all
    """
    if value is None:
        return []
    if isinstance(value, (Mapping, str, bytes)):
        raise InvalidArgument('%s must be a sequence, got %s' % (
            what, type(value).__name__))
    try:
        return list(value)
    except TypeError:
        raise InvalidArgument('%s must be a sequence, got %s' % (
            what, type(value).__name__)) from None


def _check_node(node):
    if not isinstance(node, Mapping):
        raise InvalidArgument('nodes must be mappings, got %s' % (
            type(node).__name__, ))
    return node


class NodeKeys:
    """Reads ids, children and parent references out of nodes.

    :param id_key: name of the field holding the node id
    :param children_key: name of the field holding the list of children
    :param parent_key: name of the field holding the parent id, only used
        when building a forest out of a flat list

    Keys that aren't given are taken from settings, falling back to
    ``id``, ``children`` and ``parentId``.

    Example::

        keys = NodeKeys(id_key='uid', children_key='items')
        find_node(forest, 42, keys=keys)
    """

    def __init__(self, id_key=None, children_key=None, parent_key=None):
        self.id_key = id_key or _setting('TREEUTIL_ID_KEY', DEFAULT_ID_KEY)
        self.children_key = children_key or _setting(
            'TREEUTIL_CHILDREN_KEY', DEFAULT_CHILDREN_KEY)
        self.parent_key = parent_key or _setting(
            'TREEUTIL_PARENT_KEY', DEFAULT_PARENT_KEY)

    def __repr__(self):
        return '<NodeKeys id=%r children=%r parent=%r>' % (
            self.id_key, self.children_key, self.parent_key)

    def get_id(self, node):
        return _check_node(node).get(self.id_key)

    def get_children(self, node):
        """
        :returns: a list with the children of ``node``. A missing or empty
            children field is an empty list.
        """
        children = _check_node(node).get(self.children_key)
        if not children:
            return []
        return as_list(children, what='children of %r' % (self.get_id(node), ))

    def get_parent_id(self, node):
        return _check_node(node).get(self.parent_key)

    def is_leaf(self, node):
        return not self.get_children(node)

    def is_parent_of(self, node, node_id):
        ":returns: ``True`` if ``node_id`` is a direct child of ``node``"
        return any(self.get_id(child) == node_id
                   for child in self.get_children(node))


def get_keys(keys=None):
    ":returns: ``keys``, or a :class:`NodeKeys` built from the defaults"
    if keys is None:
        return NodeKeys()
    return keys
