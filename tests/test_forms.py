"""Tests for the form fields and template tags"""

import pytest
from django import forms
from django.core.exceptions import ValidationError
from django.template import Context, Template

from tests.test_treeutil import BASE_FOREST, SIMPLE_TREE
from treeutil.forms import TreeChoiceField, TreeMultipleChoiceField, mk_dropdown_tree
from treeutil.keys import NodeKeys
from treeutil.templatetags.treeutil_tags import render_tree, tree_context


class NodesForm(forms.Form):
    nodes = TreeMultipleChoiceField(
        SIMPLE_TREE, label_key="id", required=False, widget=forms.CheckboxSelectMultiple
    )


class TestDropdownTree:
    def test_mk_dropdown_tree(self):
        assert mk_dropdown_tree(BASE_FOREST, "desc") == [
            (1, "1"),
            (2, "2"),
            (21, ". . 21"),
            (22, ". . 22"),
            (23, ". . 23"),
            (231, ". . . . 231"),
            (24, ". . 24"),
            (3, "3"),
            (4, "4"),
            (41, ". . 41"),
        ]

    def test_label_falls_back_to_id(self):
        assert mk_dropdown_tree(SIMPLE_TREE)[:3] == [(1, "1"), (2, ". . 2"), (4, ". . . . 4")]

    def test_custom_keys(self):
        forest = [{"uid": "a", "title": "A", "items": [{"uid": "b", "title": "B"}]}]
        keys = NodeKeys(id_key="uid", children_key="items")
        assert mk_dropdown_tree(forest, "title", keys) == [("a", "A"), ("b", ". . B")]


class TestTreeChoiceField:
    def test_choices(self):
        field = TreeChoiceField(BASE_FOREST, label_key="desc")
        assert field.choices[0][1] == "---------"
        assert field.choices[0][0] == ""
        assert field.choices[1:] == mk_dropdown_tree(BASE_FOREST, "desc")

    def test_without_empty_label(self):
        field = TreeChoiceField(BASE_FOREST, label_key="desc", empty_label=None)
        assert field.choices == mk_dropdown_tree(BASE_FOREST, "desc")

    def test_clean_returns_node_id(self):
        field = TreeChoiceField(BASE_FOREST, label_key="desc")
        assert field.clean("231") == 231

    def test_clean_string_ids(self):
        field = TreeChoiceField([{"id": "a", "children": [{"id": "b"}]}])
        assert field.clean("b") == "b"

    def test_clean_invalid(self):
        field = TreeChoiceField(BASE_FOREST, label_key="desc")
        with pytest.raises(ValidationError):
            field.clean("99")

    def test_clean_empty(self):
        field = TreeChoiceField(BASE_FOREST, required=False)
        assert field.clean("") is None
        with pytest.raises(ValidationError):
            TreeChoiceField(BASE_FOREST).clean("")

    def test_change_forest(self):
        field = TreeChoiceField(BASE_FOREST, label_key="desc", empty_label=None)
        field.forest = SIMPLE_TREE
        assert [value for value, _ in field.choices] == [1, 2, 4, 5, 3, 6, 7]
        assert field.clean("7") == 7


class TestTreeMultipleChoiceField:
    def test_clean_compresses_selection(self):
        field = TreeMultipleChoiceField(SIMPLE_TREE)
        assert field.clean(["4", "5", "6", "7"]) == [1]
        assert sorted(field.clean(["4", "5", "6"])) == [2, 6]

    def test_clean_without_compress(self):
        field = TreeMultipleChoiceField(SIMPLE_TREE, compress=False)
        assert field.clean(["4", "5", "6"]) == [4, 5, 6]

    def test_clean_invalid(self):
        field = TreeMultipleChoiceField(SIMPLE_TREE)
        with pytest.raises(ValidationError):
            field.clean(["4", "99"])

    def test_clean_empty(self):
        assert TreeMultipleChoiceField(SIMPLE_TREE, required=False).clean([]) == []
        with pytest.raises(ValidationError):
            TreeMultipleChoiceField(SIMPLE_TREE).clean([])

    def test_no_empty_choice(self):
        field = TreeMultipleChoiceField(SIMPLE_TREE)
        assert field.choices == mk_dropdown_tree(SIMPLE_TREE)

    def test_prepare_value_expands_selection(self):
        field = TreeMultipleChoiceField(SIMPLE_TREE)
        assert field.prepare_value([1]) == ["4", "5", "6", "7"]
        assert field.prepare_value(["2", 6]) == ["4", "5", "6"]

    def test_prepare_value_without_compress(self):
        field = TreeMultipleChoiceField(SIMPLE_TREE, compress=False)
        assert field.prepare_value([1]) == [1]

    def test_form_initial(self):
        form = NodesForm(initial={"nodes": [2]})
        assert form["nodes"].value() == ["4", "5"]

    def test_form_bound(self):
        form = NodesForm(data={"nodes": ["4", "5", "7"]})
        assert form.is_valid()
        assert form.cleaned_data["nodes"] == [7, 2]

    def test_unchecked_leaf_leaves_the_branch(self):
        # a stored branch renders as its leaves, unchecking one of them
        # keeps only the other one
        initial = NodesForm(initial={"nodes": [2]})
        assert "2" not in initial["nodes"].value()
        form = NodesForm(data={"nodes": ["4"]}, initial={"nodes": [2]})
        assert form.is_valid()
        assert form.cleaned_data["nodes"] == [4]
        assert form["nodes"].value() == ["4"]

    def test_untouched_selection_round_trips(self):
        rendered = NodesForm(initial={"nodes": [2, 7]})["nodes"].value()
        assert rendered == ["4", "5", "7"]
        form = NodesForm(data={"nodes": rendered})
        assert form.is_valid()
        assert form.cleaned_data["nodes"] == [7, 2]

    def test_form_render(self):
        html = str(NodesForm()["nodes"])
        assert 'value="4"' in html
        assert ". . . . 4" in html


class TestTemplateTags:
    def test_tree_context(self):
        got = tree_context(BASE_FOREST)
        assert got[:3] == [
            {"node-id": "1", "parent-id": 0, "level": 1, "children-num": 0},
            {"node-id": "2", "parent-id": 0, "level": 1, "children-num": 4},
            {"node-id": "21", "parent-id": 2, "level": 2, "children-num": 0},
        ]
        assert got[5] == {"node-id": "231", "parent-id": 23, "level": 3, "children-num": 0}
        assert [item["node-id"] for item in got] == ["1", "2", "21", "22", "23", "231", "24", "3", "4", "41"]

    def test_render_tree(self):
        expected = (
            '<ul><li><span data-node-id="1">1</span>'
            '<ul><li><span data-node-id="2">2</span>'
            '<ul><li><span data-node-id="4">4</span></li>'
            '<li><span data-node-id="5">5</span></li></ul></li>'
            '<li><span data-node-id="3">3</span>'
            '<ul><li><span data-node-id="6">6</span></li>'
            '<li><span data-node-id="7">7</span></li></ul></li></ul>'
            "</li></ul>"
        )
        assert render_tree(SIMPLE_TREE, "id") == expected

    def test_render_tree_escapes(self):
        html = render_tree([{"id": 1, "name": "<b>bold</b>"}])
        assert html == '<ul><li><span data-node-id="1">&lt;b&gt;bold&lt;/b&gt;</span></li></ul>'

    def test_render_empty(self):
        assert render_tree([]) == "<ul></ul>"

    def test_template(self):
        template = Template(
            "{% load treeutil_tags %}"
            '{% render_tree forest "desc" %}'
            "{% tree_context forest as rows %}{{ rows.0.level }}"
        )
        html = template.render(Context({"forest": [{"id": 1, "desc": "a"}]}))
        assert html == '<ul><li><span data-node-id="1">a</span></li></ul>1'
