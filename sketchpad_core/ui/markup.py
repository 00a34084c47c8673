from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any, Callable, Protocol, TypeVar, Union

N = TypeVar("N")


class MarkupError(ValueError):
    """Raised when a node description is neither an element nor text."""


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class ElementNode:
    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: tuple["Html", ...] = ()
    apply: Callable[[Any], None] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.tag, str) or not self.tag.strip():
            raise MarkupError("element tag must be a non-empty string")
        object.__setattr__(self, "children", tuple(self.children))


Html = Union[ElementNode, TextNode]


def tag(
    name: str,
    attrs: dict[str, Any] | None = None,
    children: list[Html | str] | tuple[Html | str, ...] = (),
    apply: Callable[[Any], None] | None = None,
) -> ElementNode:
    """Shorthand element constructor; bare strings in `children` become `TextNode`s."""
    return ElementNode(
        tag=name,
        attrs=dict(attrs or {}),
        children=tuple(TextNode(c) if isinstance(c, str) else c for c in children),
        apply=apply,
    )


class NodeFactory(Protocol[N]):
    def create_element(self, tag: str) -> N:
        ...

    def create_text(self, text: str) -> N:
        ...

    def set_attribute(self, node: N, key: str, value: str) -> None:
        ...

    def append_child(self, parent: N, child: N) -> None:
        ...


def build(html: Html, factory: NodeFactory[N]) -> N:
    """Materialize a node description into a live tree.

    Children are appended before attributes are set, and `apply` runs last on the
    fully populated element.
    """
    if isinstance(html, ElementNode):
        node = factory.create_element(html.tag)
        for child in html.children:
            factory.append_child(node, build(child, factory))
        for key, value in html.attrs.items():
            factory.set_attribute(node, key, _attribute_text(key, value))
        if html.apply is not None:
            html.apply(node)
        return node
    if isinstance(html, TextNode):
        return factory.create_text(html.text)
    raise MarkupError(f"invalid node: expected ElementNode or TextNode, got {type(html).__name__}")


def _attribute_text(key: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except TypeError as exc:
        raise MarkupError(f"attribute `{key}` is not JSON-encodable") from exc


@dataclass
class UINode:
    tag: str | None = None
    text: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["UINode"] = field(default_factory=list)
    parent: "UINode | None" = field(default=None, repr=False, compare=False)

    @property
    def is_text(self) -> bool:
        return self.tag is None

    def text_content(self) -> str:
        if self.is_text:
            return self.text or ""
        return "".join(child.text_content() for child in self.children)

    def find_all(self, tag_name: str) -> list["UINode"]:
        found = [self] if self.tag == tag_name else []
        for child in self.children:
            found.extend(child.find_all(tag_name))
        return found


class UINodeFactory:
    """In-memory node factory producing a `UINode` tree."""

    def create_element(self, tag: str) -> UINode:
        return UINode(tag=tag)

    def create_text(self, text: str) -> UINode:
        return UINode(text=text)

    def set_attribute(self, node: UINode, key: str, value: str) -> None:
        if node.is_text:
            raise MarkupError("text nodes do not carry attributes")
        node.attributes[key] = value

    def append_child(self, parent: UINode, child: UINode) -> None:
        if parent.is_text:
            raise MarkupError("text nodes cannot have children")
        child.parent = parent
        parent.children.append(child)
