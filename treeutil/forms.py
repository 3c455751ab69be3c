"Form fields for treeutil."

from django import forms

from treeutil.convert import flatten, get_annotated_list
from treeutil.keys import as_list, get_keys
from treeutil.selection import leaf_to_parent, parent_to_leaf


def mk_dropdown_tree(forest, label_key='name', keys=None):
    """ Creates a tree-like list of choices """

    keys = get_keys(keys)

    def mk_indent(level):
        return '. . ' * level

    def mk_label(node):
        label = node.get(label_key)
        if label is None:
            label = keys.get_id(node)
        return str(label)

    return [(keys.get_id(node), mk_indent(info['level']) + mk_label(node))
            for node, info in get_annotated_list(forest, keys=keys)]


class TreeChoiceMixin:
    """
    Builds the field choices out of a forest.

    Choice values arrive as strings, so the cleaned values are mapped back
    to the ids found in the forest.
    """

    def _get_forest(self):
        return self._forest

    def _set_forest(self, forest):
        keys = get_keys(self.keys)
        self._forest = as_list(forest)
        self.id_map = {str(keys.get_id(node)): keys.get_id(node)
                       for node in flatten(self._forest, keys=keys)}
        choices = mk_dropdown_tree(self._forest, self.label_key, keys)
        if self.empty_label is not None:
            choices.insert(0, ('', self.empty_label))
        self.choices = choices

    forest = property(_get_forest, _set_forest)

    def __deepcopy__(self, memo):
        result = super().__deepcopy__(memo)
        # forms copy their fields, coerce must use the copy's id_map
        result.coerce = result.coerce_id
        return result

    def coerce_id(self, value):
        try:
            return self.id_map[str(value)]
        except KeyError:
            raise ValueError(value) from None


class TreeChoiceField(TreeChoiceMixin, forms.TypedChoiceField):
    """
    Field to pick a single node out of a forest. Nodes are listed in
    pre-order and indented by depth.

    :param forest: list of root nodes
    :param label_key: node field displayed in the choices, the id is used
        for nodes without it
    :param keys: a :class:`treeutil.keys.NodeKeys`
    :param empty_label: label of the "no node" choice, ``None`` to remove it
    """

    def __init__(self, forest=(), label_key='name', keys=None,
                 empty_label='---------', **kwargs):
        self.label_key = label_key
        self.keys = keys
        self.empty_label = empty_label
        kwargs.setdefault('empty_value', None)
        super().__init__(coerce=self.coerce_id, **kwargs)
        self.forest = forest


class TreeMultipleChoiceField(TreeChoiceMixin, forms.TypedMultipleChoiceField):
    """
    Field to select several nodes of a forest, usually rendered with
    checkboxes.

    With ``compress`` enabled (the default) the cleaned value is the
    smallest list of ids that covers the selection: branches with every
    child selected replace their children, see
    :func:`treeutil.selection.leaf_to_parent`. Values given as ``initial``
    are expanded back to the leaves they cover before rendering.
    """

    empty_label = None

    def __init__(self, forest=(), label_key='name', keys=None, compress=True,
                 **kwargs):
        self.label_key = label_key
        self.keys = keys
        self.compress = compress
        super().__init__(coerce=self.coerce_id, **kwargs)
        self.forest = forest

    def clean(self, value):
        value = super().clean(value)
        if self.compress and value:
            return leaf_to_parent(self._forest, value, keys=self.keys)
        return value

    def prepare_value(self, value):
        if not self.compress or not isinstance(value, (list, tuple)):
            return value
        selected = [self.id_map.get(str(v), v) for v in value]
        # only leaves are checked, unchecking one drops its branch on clean
        return [str(v) for v in
                parent_to_leaf(self._forest, selected, keys=self.keys)]
