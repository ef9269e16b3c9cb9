"""In-memory XML element tree.

The tree is owned top-down: every element owns its ``children`` list. The
``parent`` field is a non-owning back-reference used only to navigate upwards
(sibling counting, path construction); nothing in this package mutates a tree
once it has been loaded.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union


@dataclass(eq=False)
class XMLElement:
    """Represents a single XML element in the document tree.

    Text is stored the way ElementTree stores it: ``text`` holds character
    data before the first child element and each child's ``tail`` holds the
    data that follows it.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    tail: Optional[str] = None
    children: List["XMLElement"] = field(default_factory=list)
    parent: Optional["XMLElement"] = field(default=None, repr=False)
    namespace_uri: Optional[str] = None
    sourceline: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate element values and establish parent-child relationships."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")

        for child in self.children:
            child.parent = self

    @property
    def local_name(self) -> str:
        """Get local tag name without namespace prefix."""
        if ":" in self.tag:
            return self.tag.split(":", 1)[1]
        return self.tag

    @property
    def has_children(self) -> bool:
        """Check if this element has child elements."""
        return len(self.children) > 0

    @property
    def text_content(self) -> str:
        """Concatenation of all descendant text in document order."""
        parts: List[str] = []
        # Pending items are elements to expand or tail strings to append
        stack: List[Union["XMLElement", str]] = [self]

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            if item.text:
                parts.append(item.text)
            for child in reversed(item.children):
                if child.tail:
                    stack.append(child.tail)
                stack.append(child)

        return "".join(parts)

    def add_child(self, child: "XMLElement") -> None:
        """Add a child element and establish parent relationship."""
        if not isinstance(child, XMLElement):
            raise TypeError("Child must be an XMLElement instance")

        child.parent = self
        self.children.append(child)

    def iter(self) -> Iterator["XMLElement"]:
        """Iterate over this element and all descendants in document order."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def find_by_local_name(self, local_name: str) -> Optional["XMLElement"]:
        """Find the first element, in any namespace, with this local name."""
        return next((e for e in self.iter() if e.local_name == local_name), None)

    def find_by_tag(self, tag: str) -> Optional["XMLElement"]:
        """Find the first element whose qualified tag equals ``tag``."""
        return next((e for e in self.iter() if e.tag == tag), None)

    def find_by_local_name_ci(self, local_name: str) -> Optional["XMLElement"]:
        """Find the first element whose local name matches case-insensitively."""
        wanted = local_name.lower()
        return next((e for e in self.iter() if e.local_name.lower() == wanted), None)

    def ancestors(self) -> Iterator["XMLElement"]:
        """Iterate from the parent up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


@dataclass
class XMLDocument:
    """Root XML document container with metadata and navigation."""

    root: XMLElement
    encoding: str = "utf-8"
    version: str = "1.0"
    source: Optional[str] = None

    # Document metadata
    total_elements: int = 0
    max_depth: int = 0

    def __post_init__(self) -> None:
        """Calculate document statistics."""
        depths: Dict[int, int] = {id(self.root): 0}
        count = 0
        deepest = 0
        for element in self.root.iter():
            count += 1
            depth = depths.pop(id(element))
            deepest = max(deepest, depth)
            for child in element.children:
                depths[id(child)] = depth + 1
        self.total_elements = count
        self.max_depth = deepest

    def iter_elements(self) -> Iterator[XMLElement]:
        """Iterate over all elements in document order."""
        return self.root.iter()
