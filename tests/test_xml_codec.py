from collections import Counter

import pytest

from gtask.task_tree import (
    ParseError,
    Task,
    TaskNode,
    UnknownElementError,
    completion_percent,
    create_node,
    create_root,
    create_task,
    decode,
    decode_document,
    encode,
    encode_text,
    format_percent,
    total_children,
    total_done_children,
)
from gtask.task_tree.xml_codec import (
    EMPTY_DOCUMENT,
    parse_bool,
    parse_int,
    read_attribute,
    repair_ampersands,
)


def _task_multiset(node: TaskNode):
    return Counter((task.name, task.done) for task in node.tasks)


def _assert_same_tree(a: TaskNode, b: TaskNode):
    assert a.name == b.name
    assert a.expanded == b.expanded
    assert a.kind == b.kind
    assert _task_multiset(a) == _task_multiset(b)
    assert len(a.child_nodes) == len(b.child_nodes)
    for left, right in zip(a.child_nodes, b.child_nodes):
        _assert_same_tree(left, right)


class TestDecode:
    def test_basic_document(self):
        root = decode(
            '<GTask version="1"><Tasks name="Root" folded="true">'
            '<Task name="A" done="true"/><Task name="B" done="false"/>'
            '</Tasks></GTask>'
        )
        assert root.is_root
        assert root.name == "Root"
        assert root.expanded is True
        assert len(root.tasks) == 2
        assert total_children(root) == 2
        assert total_done_children(root) == 1
        assert format_percent(completion_percent(root)) == "50.00"

    def test_missing_attributes_use_defaults(self):
        document = decode_document('<Tasks><Task name="X"/></Tasks>')
        root = document.root
        assert root.expanded is False
        assert root.name == "New Node"
        assert root.tasks[0].name == "X"
        assert root.tasks[0].done is False
        assert "Tasks@folded" in document.healed
        assert "Tasks/Task[0]@done" in document.healed
        assert document.version == 0

    def test_unknown_child_names_tag(self):
        with pytest.raises(UnknownElementError) as excinfo:
            decode('<GTask><Tasks><Foo/></Tasks></GTask>')
        assert excinfo.value.tag == "Foo"
        assert "Foo" in str(excinfo.value)

    def test_unknown_top_element(self):
        with pytest.raises(UnknownElementError):
            decode("<Other/>")

    def test_empty_document(self):
        document = decode_document(EMPTY_DOCUMENT)
        assert document.root.is_root
        assert document.root.tasks == [] and document.root.child_nodes == []
        assert document.version == 0

    def test_wrapper_without_tasks_gives_empty_root(self):
        document = decode_document('<GTask version="1"/>')
        assert document.root.is_root
        assert document.version == 1
        assert "GTask/Tasks" in document.healed

    def test_nested_nodes_keep_order(self):
        root = decode(
            '<GTask version="1"><Tasks name="R" folded="false">'
            '<Node name="one" folded="true"><Node name="inner" folded="false"/></Node>'
            '<Node name="two" folded="false"/>'
            '<Task name="t1" done="false"/><Task name="t2" done="true"/>'
            '</Tasks></GTask>'
        )
        assert [n.name for n in root.child_nodes] == ["one", "two"]
        assert [t.name for t in root.tasks] == ["t1", "t2"]
        assert root.child_nodes[0].child_nodes[0].name == "inner"
        assert not root.child_nodes[0].is_root

    @pytest.mark.parametrize("literal", ["True", "FALSE", "1", "yes", ""])
    def test_bad_boolean(self, literal):
        with pytest.raises(ParseError):
            decode(f'<GTask><Tasks><Task name="x" done="{literal}"/></Tasks></GTask>')

    def test_bad_version(self):
        with pytest.raises(ParseError):
            decode('<GTask version="one"><Tasks/></GTask>')

    def test_malformed_xml(self):
        with pytest.raises(ParseError):
            decode("<GTask><Tasks></GTask>")

    def test_bare_ampersand_is_repaired(self):
        root = decode('<GTask><Tasks name="R &amp; D"><Task name="Salt & pepper" done="false"/></Tasks></GTask>')
        assert root.name == "R & D"
        assert root.tasks[0].name == "Salt & pepper"

    def test_bytes_with_bom(self):
        root = decode("\ufeff<GTask><Tasks name=\"Zoë\"/></GTask>".encode("utf-8"))
        assert root.name == "Zoë"

    def test_newer_version_is_accepted(self, caplog):
        with caplog.at_level("WARNING", logger="gtask"):
            document = decode_document('<GTask version="7"><Tasks/></GTask>')
        assert document.version == 7
        assert "newer" in caplog.text


class TestHelpers:
    def test_read_attribute_does_not_mutate(self):
        import xml.etree.ElementTree as ET

        element = ET.fromstring("<Task/>")
        assert read_attribute(element, "name", "New Task") == ("New Task", True)
        assert element.get("name") is None
        element.set("name", "x")
        assert read_attribute(element, "name", "New Task") == ("x", False)

    def test_parse_bool_is_case_sensitive(self):
        assert parse_bool("true") is True
        assert parse_bool("false") is False
        with pytest.raises(ParseError):
            parse_bool("True")

    def test_parse_int(self):
        assert parse_int("12") == 12
        assert parse_int("-3") == -3
        with pytest.raises(ParseError):
            parse_int("1.5")

    def test_repair_leaves_entities_alone(self):
        assert repair_ampersands("a & b") == "a &amp; b"
        assert repair_ampersands("&amp; &lt; &#10; &#x41;") == "&amp; &lt; &#10; &#x41;"


class TestEncode:
    def test_layout(self):
        root = create_root("Root", expanded=True)
        root.tasks.append(create_task("first", done=True))
        child = create_node("Child")
        child.tasks.append(create_task("inner"))
        root.child_nodes.append(child)

        assert encode_text(root).splitlines() == [
            '<GTask version="1"> <!-- This is auto generated xml code, please do not modify -->',
            '\t<Tasks name="Root" folded="true">',
            '\t\t<Node name="Child" folded="false">',
            '\t\t\t<Task name="inner" done="false"/>',
            '\t\t</Node>',
            '\t\t<Task name="first" done="true"/>',
            '\t</Tasks>',
            '</GTask>',
        ]

    def test_encode_returns_utf8_bytes(self):
        root = create_root("Café")
        assert encode(root) == encode_text(root).encode("utf-8")

    def test_encode_requires_root(self):
        with pytest.raises(ValueError):
            encode(create_node())

    def test_round_trip_preserves_values(self):
        root = create_root('Root "quoted" <tag>', expanded=True)
        a = create_node("A & B", expanded=True)
        a.tasks.extend([create_task("tab\there", done=True), create_task("line\nbreak")])
        b = create_node("B")
        b.child_nodes.append(create_node("deep", expanded=True))
        a.child_nodes.append(b)
        root.child_nodes.append(a)
        root.tasks.append(create_task("&lt; literally"))

        decoded = decode(encode(root))
        _assert_same_tree(root, decoded)

    def test_tasks_before_nodes_are_reordered_on_disk(self):
        text = (
            '<GTask version="1"><Tasks name="R" folded="false">'
            '<Task name="t" done="false"/><Node name="n" folded="false"/>'
            '</Tasks></GTask>'
        )
        root = decode(text)
        lines = encode_text(root).splitlines()
        assert lines[2].strip().startswith("<Node")
        assert lines[4].strip().startswith("<Task")
        _assert_same_tree(root, decode(encode(root)))

    def test_healed_attributes_are_written(self):
        root = decode('<Tasks><Task name="X"/></Tasks>')
        text = encode_text(root)
        assert '<Tasks name="New Node" folded="false">' in text
        assert '<Task name="X" done="false"/>' in text

    @pytest.mark.parametrize("name", ["paste\x0bd", "nul\x00", "form\x0cfeed", "odd\ufffe", "half\ud800"])
    def test_names_xml_cannot_store_are_refused(self, name):
        root = create_root()
        root.tasks.append(create_task(name))
        with pytest.raises(ValueError, match="XML cannot store"):
            encode_text(root)

    def test_node_name_xml_cannot_store_is_refused(self):
        root = create_root()
        root.child_nodes.append(create_node("bell\x07"))
        with pytest.raises(ValueError):
            encode(root)

    def test_whitespace_controls_still_round_trip(self):
        root = create_root()
        root.tasks.append(create_task("a\tb\r\nc"))
        assert decode(encode(root)).tasks[0].name == "a\tb\r\nc"
