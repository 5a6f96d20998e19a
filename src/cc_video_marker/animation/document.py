"""SVG document model with named-node lookup and per-frame mutation."""

import copy
import xml.etree.ElementTree as ET
from os import PathLike

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

# Serialize without ns0: prefixes so rasterizers see plain SVG.
ET.register_namespace("", SVG_NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)


def _format_number(value: float) -> str:
    if abs(value) < 5e-5:
        return "0"
    return f"{value:.4f}".rstrip("0").rstrip(".")


class SvgNode:
    """Mutable view over a single element of an SvgDocument."""

    def __init__(self, element: ET.Element) -> None:
        self.element = element
        self.id = element.get("id", "")
        # Offsets are composed with the transform the element had when first looked up.
        self._rest_transform = element.get("transform", "").strip()

    @property
    def opacity(self) -> float:
        return float(self.element.get("opacity", "1"))

    @opacity.setter
    def opacity(self, value: float) -> None:
        clamped = min(max(value, 0.0), 1.0)
        self.element.set("opacity", _format_number(clamped))

    def set_offset(self, dx: float, dy: float) -> None:
        """Translate the node by ``(dx, dy)`` from its rest position."""
        translate = f"translate({_format_number(dx)} {_format_number(dy)})"
        if self._rest_transform:
            translate = f"{translate} {self._rest_transform}"
        self.element.set("transform", translate)

    def __repr__(self) -> str:
        return f"SvgNode(id={self.id!r})"


class SvgDocument:
    """An SVG element tree that frames clone and mutate independently."""

    def __init__(self, root: ET.Element) -> None:
        if root.tag != f"{{{SVG_NAMESPACE}}}svg":
            raise ValueError(f"Not an SVG document (root element is {root.tag!r})")
        self.root = root
        self._nodes: dict[str, SvgNode] = {}

    @classmethod
    def load(cls, path: str | PathLike[str]) -> "SvgDocument":
        """
        Parse an SVG file.

        Raises:
            OSError: If the file cannot be read
            xml.etree.ElementTree.ParseError: If the file is not well-formed XML
            ValueError: If the root element is not ``<svg>``
        """
        return cls(ET.parse(path).getroot())

    @classmethod
    def from_string(cls, markup: str | bytes) -> "SvgDocument":
        return cls(ET.fromstring(markup))

    def clone(self) -> "SvgDocument":
        """Deep copy the element tree; the copy shares nothing with this document."""
        return SvgDocument(copy.deepcopy(self.root))

    def has_node(self, node_id: str) -> bool:
        try:
            self.node_by_id(node_id)
        except KeyError:
            return False
        return True

    def node_by_id(self, node_id: str) -> SvgNode:
        """
        Resolve an element by its ``id`` attribute.

        Raises:
            KeyError: If no element carries the id
        """
        node = self._nodes.get(node_id)
        if node is not None:
            return node
        for element in self.root.iter():
            if element.get("id") == node_id:
                node = SvgNode(element)
                self._nodes[node_id] = node
                return node
        raise KeyError(f"No SVG element with id '{node_id}'")

    def to_bytes(self) -> bytes:
        return ET.tostring(self.root, encoding="utf-8", xml_declaration=True)
