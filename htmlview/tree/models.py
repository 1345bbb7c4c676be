"""
Data models and types for HTML tree transformation.

This module contains the node types consumed and produced by the transformation
pipeline: the input nodes delivered by the HTML parsing adapter, the output
nodes handed to a rendering collaborator, and the request/result models used by
the caller layer.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple, Union
from enum import Enum
from pydantic import BaseModel, Field, field_validator


class NodeKind(Enum):
    """Layout kind of an output container."""
    BLOCK = "block"
    TEXT = "text"


class TagCategory(Enum):
    """Classification of an HTML tag name."""
    BLOCK = "block"
    INLINE_TEXT = "inline_text"
    IGNORED = "ignored"


# Input nodes (produced by the parsing adapter)

@dataclass
class TextNode:
    """A run of character data from the source document."""
    data: str


@dataclass
class ElementNode:
    """An HTML element with its attributes and children in document order."""
    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: Optional[List["InputNode"]] = field(default_factory=list)


InputNode = Union[TextNode, ElementNode]


# Output nodes (handed to the rendering collaborator)

@dataclass(frozen=True)
class GroupInfo:
    """Position of a list item among its `li` siblings."""
    index: int
    count: int

    def to_dict(self) -> Dict[str, int]:
        return {"index": self.index, "count": self.count}


@dataclass(frozen=True)
class TextRun:
    """Inline text carrying the tag and attributes of the element it came from."""
    text: str
    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "text_run",
            "text": self.text,
            "tag_name": self.tag_name,
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True)
class Container:
    """A block or text container holding further output nodes."""
    kind: NodeKind
    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: Tuple["OutputNode", ...] = ()
    group_info: Optional[GroupInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": "container",
            "kind": self.kind.value,
            "tag_name": self.tag_name,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }
        if self.group_info is not None:
            data["group_info"] = self.group_info.to_dict()
        return data


OutputNode = Union[TextRun, Container]


def count_nodes(node: OutputNode) -> int:
    """Count a node and all of its descendants."""
    if isinstance(node, Container):
        return 1 + sum(count_nodes(child) for child in node.children)
    return 1


@dataclass
class RenderedDocument:
    """Result of rendering a document: the UI tree plus pass-through style options."""
    root: Container
    tags_styles: Dict[str, Any] = field(default_factory=dict)
    classes_styles: Dict[str, Any] = field(default_factory=dict)
    ignored_styles: List[str] = field(default_factory=list)
    em_size: float = 14
    images_max_width: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root.to_dict(),
            "tags_styles": self.tags_styles,
            "classes_styles": self.classes_styles,
            "ignored_styles": self.ignored_styles,
            "em_size": self.em_size,
            "images_max_width": self.images_max_width,
        }


# Pydantic models for API validation

class RenderRequest(BaseModel):
    """Input model for a render call. Either `html` or `uri` should be provided."""
    html: Optional[str] = None
    uri: Optional[str] = None
    ignored_tags: Optional[List[str]] = None
    ignored_styles: List[str] = Field(default_factory=list)
    tags_styles: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    classes_styles: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    em_size: Optional[float] = Field(default=None, gt=0)
    images_max_width: Optional[float] = Field(default=None, gt=0)

    @field_validator('ignored_tags')
    @classmethod
    def normalize_ignored_tags(cls, v):
        """Tag names are matched case-insensitively."""
        if v is None:
            return v
        return [tag.strip().lower() for tag in v if tag and tag.strip()]

    @field_validator('tags_styles')
    @classmethod
    def normalize_tags_styles(cls, v):
        return {tag.lower(): style for tag, style in v.items()}
