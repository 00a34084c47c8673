from __future__ import annotations

import unittest

from sketchpad_core.ui.markup import ElementNode, MarkupError, TextNode, UINode, UINodeFactory, build, tag


class _OrderRecordingFactory(UINodeFactory):
    def __init__(self) -> None:
        self.log: list[str] = []

    def set_attribute(self, node: UINode, key: str, value: str) -> None:
        self.log.append(f"attr:{node.tag}.{key}")
        super().set_attribute(node, key, value)

    def append_child(self, parent: UINode, child: UINode) -> None:
        self.log.append(f"child:{parent.tag}")
        super().append_child(parent, child)


class MarkupBuildTests(unittest.TestCase):
    def test_builds_nested_tree(self) -> None:
        html = tag(
            "div",
            {"id": "root", "data-size": [3, 4], "hidden": False},
            [tag("span", {}, ["hello"]), " world", tag("canvas", {"width": 640})],
        )
        root = build(html, UINodeFactory())
        self.assertEqual(root.tag, "div")
        self.assertEqual(root.attributes, {"id": "root", "data-size": "[3, 4]", "hidden": "false"})
        self.assertEqual([c.tag for c in root.children], ["span", None, "canvas"])
        self.assertEqual(root.text_content(), "hello world")
        self.assertEqual(root.find_all("canvas")[0].attributes["width"], "640")
        self.assertIs(root.children[0].parent, root)

    def test_children_before_attributes_then_apply(self) -> None:
        factory = _OrderRecordingFactory()
        applied: list[UINode] = []

        def on_built(node: UINode) -> None:
            factory.log.append("apply")
            applied.append(node)

        node = build(tag("ul", {"class": "list"}, [tag("li")], apply=on_built), factory)
        self.assertEqual(factory.log, ["child:ul", "attr:ul.class", "apply"])
        self.assertEqual(applied, [node])

    def test_text_node(self) -> None:
        node = build(TextNode("plain"), UINodeFactory())
        self.assertTrue(node.is_text)
        self.assertEqual(node.text_content(), "plain")

    def test_rejects_non_node_values(self) -> None:
        with self.assertRaises(MarkupError):
            build("raw string", UINodeFactory())  # type: ignore[arg-type]
        with self.assertRaises(MarkupError):
            build(ElementNode(tag="div", children=(42,)), UINodeFactory())  # type: ignore[arg-type]
        with self.assertRaises(MarkupError):
            build(tag("div", {"bad": object()}), UINodeFactory())
        with self.assertRaises(MarkupError):
            tag("")

    def test_markup_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(MarkupError, ValueError))

    def test_text_nodes_reject_children_and_attributes(self) -> None:
        factory = UINodeFactory()
        text = factory.create_text("x")
        with self.assertRaises(MarkupError):
            factory.append_child(text, factory.create_element("b"))
        with self.assertRaises(MarkupError):
            factory.set_attribute(text, "id", "x")


if __name__ == "__main__":
    unittest.main()
