"""
Tree model for parsed confindent documents.

A document is a tree of named sections. Each ``Node`` has a name, an optional
raw text value and an ordered tuple of child nodes; duplicate names are kept
in document order. The ``Document`` is the unnamed root. Both are frozen
pydantic models, so a parsed tree can be shared freely but never changed.

Children are stored as a sequence rather than a mapping. Lookups by name are
linear scans over one level, which keeps duplicates and ordering intact.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import MissingChildError, MissingValueError
from ..tools.convert import convert, convert_list


class ConfParent:
    """
    Query operations shared by nodes and the document root.

    Subclasses provide a ``sections`` tuple holding their direct children.
    """

    def _label(self) -> Optional[str]:
        return None

    def __eq__(self, other: Any) -> bool:
        # pairwise and iterative, so deeply nested trees compare without recursion
        if type(self) is not type(other):
            return NotImplemented
        pairs = [(self, other)]
        while pairs:
            left, right = pairs.pop()
            if (
                left._label() != right._label()
                or getattr(left, 'raw_value', None) != getattr(right, 'raw_value', None)
                or len(left.sections) != len(right.sections)
            ):
                return False
            pairs.extend(zip(left.sections, right.sections))
        return True

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def children_iter(self) -> Iterator['Node']:
        """Return a fresh iterator over all direct children."""
        return iter(self.sections)

    def child(self, name: str) -> Optional['Node']:
        """
        Get the first direct child with the given name.

        Names are matched exactly and case-sensitively.

        Args:
            name: Section name to look for

        Returns:
            The first matching child in document order, or None
        """
        for node in self.sections:
            if node.name == name:
                return node
        return None

    def children(self, name: str) -> List['Node']:
        """Get all direct children with the given name, in document order."""
        return [node for node in self.sections if node.name == name]

    def has_child(self, name: str) -> bool:
        return self.child(name) is not None

    def child_value(self, name: str, target: type = str) -> Any:
        """
        Get the converted value of the first child with the given name.

        Args:
            name: Section name to look for
            target: Type to convert the value to

        Returns:
            The child's value converted to ``target``

        Raises:
            MissingChildError: If no child has that name
            MissingValueError: If the child has no value
            ConversionError: If the value cannot be converted
        """
        node = self.child(name)
        if node is None:
            raise MissingChildError(name, self._label())
        return node.value_as(target)

    def find(self, *path: str) -> Optional['Node']:
        """
        Follow a path of names, taking the first match at each level.

        Returns None as soon as one step is missing. An empty path returns self.
        """
        current = self
        for name in path:
            current = current.child(name)
            if current is None:
                return None
        return current

    def value_at(self, *path: str, target: type = str) -> Any:
        """
        Get the converted value of the node at the end of a path of names.

        Raises:
            MissingChildError: Naming the first path step that does not exist
            MissingValueError: If the final node has no value
            ConversionError: If the value cannot be converted
        """
        if not path:
            raise ValueError("value_at() needs at least one section name")

        current = self
        for name in path:
            found = current.child(name)
            if found is None:
                raise MissingChildError(name, current._label())
            current = found
        return current.value_as(target)

    def walk(self) -> Iterator[Tuple[int, 'Node']]:
        """
        Traverse all descendants depth-first in document order.

        Yields:
            (depth, node) pairs where direct children have depth 0
        """
        stack = [(0, node) for node in reversed(self.sections)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.sections))

    def count(self) -> int:
        """Count all descendants."""
        return sum(1 for _ in self.walk())


class Node(ConfParent, BaseModel):
    """
    One named section of a configuration document.

    Attributes:
        name: Section name (non-empty)
        raw_value: Text following the name, or None when the line had none
        sections: Direct children in document order
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Section name")
    raw_value: Optional[str] = Field(None, description="Raw scalar value")
    sections: Tuple['Node', ...] = Field(default=(), description="Child sections")

    def _label(self) -> Optional[str]:
        return self.name

    def has_value(self) -> bool:
        return self.raw_value is not None

    def value(self) -> str:
        """
        Get the raw value of this section.

        Raises:
            MissingValueError: If the section line had no value
        """
        if self.raw_value is None:
            raise MissingValueError(self.name)
        return self.raw_value

    def value_as(self, target: type = str) -> Any:
        """
        Convert the value of this section to ``target``.

        Raises:
            MissingValueError: If the section has no value
            ConversionError: If the value is not valid for ``target``
        """
        return convert(self.value(), target)

    def value_list(self, item_type: type = str, separator: str = ",") -> List[Any]:
        """Split the value on ``separator`` and convert each trimmed item."""
        return convert_list(self.value(), item_type, separator)

    def get(self, target: type = str, default: Any = None) -> Any:
        """
        Convert the value, or return ``default`` when it is absent.

        Conversion failures still raise ConversionError.
        """
        if self.raw_value is None:
            return default
        return convert(self.raw_value, target)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'name': self.name,
            'value': self.raw_value,
            'children': [node.to_dict() for node in self.sections],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Node':
        """Create a Node from the representation produced by ``to_dict``."""
        return cls(
            name=data['name'],
            raw_value=data.get('value'),
            sections=tuple(cls.from_dict(item) for item in data.get('children') or []),
        )

    def __str__(self) -> str:
        if self.raw_value is None:
            return f"{self.name} ({len(self.sections)} children)"
        return f"{self.name} = {self.raw_value!r} ({len(self.sections)} children)"


class Document(ConfParent, BaseModel):
    """
    Root of a parsed configuration.

    The document has no name or value of its own; it only holds the
    top-level sections in document order.
    """

    model_config = ConfigDict(frozen=True)

    sections: Tuple[Node, ...] = Field(default=(), description="Top-level sections")

    def is_empty(self) -> bool:
        return not self.sections

    def has_value(self) -> bool:
        return False

    def value(self) -> str:
        """
        The root never has a value.

        Raises:
            MissingValueError: Always
        """
        raise MissingValueError(None)

    def value_as(self, target: type = str) -> Any:
        """Same as ``value()``: the root has nothing to convert."""
        return convert(self.value(), target)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {'children': [node.to_dict() for node in self.sections]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Document':
        """Create a Document from the representation produced by ``to_dict``."""
        return cls(sections=tuple(Node.from_dict(item) for item in data.get('children') or []))

    def __str__(self) -> str:
        return f"Document ({len(self.sections)} sections, {self.count()} total)"


Node.model_rebuild()
