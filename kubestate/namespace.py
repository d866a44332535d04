"""Hierarchical metric names.

A namespace is an ordered list of elements. Static elements carry a fixed
value; dynamic elements carry a name and description and a value that starts
out as the wildcard and is bound from cluster data at collection time.

Namespaces are never edited in place. Binding goes through ``strings()``,
a mutated copy of that list, and ``with_values()``, so a requested template
and the measurement built from it never share elements.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from pydantic import BaseModel, Field

WILDCARD = "*"

# Characters that may never appear inside a single namespace segment.
NOT_ALLOWED_CHARS: dict[str, tuple[str, ...]] = {
    "brackets": ("(", ")", "[", "]", "{", "}"),
    "spaces": (" ",),
    "punctuations": (".", ",", ";", "?", "!"),
    "slashes": ("|", "\\", "/"),
    "carets": ("^",),
    "quotations": ('"', "`", "'"),
}

_DENIED = frozenset(ch for chars in NOT_ALLOWED_CHARS.values() for ch in chars)


def slugify(value: str | None) -> str:
    """Make a cluster identifier safe to use as one namespace segment."""
    return (value or "").replace(".", "_")


def is_valid_part(part: str) -> bool:
    return not any(ch in _DENIED for ch in part)


class NamespaceElement(BaseModel):
    """One segment of a namespace. Dynamic iff ``name`` is non-empty."""
    value: str = ""
    name: str = ""
    description: str = ""

    def is_dynamic(self) -> bool:
        return self.name != ""


class Namespace(BaseModel):
    """Ordered sequence of namespace elements."""
    elements: List[NamespaceElement] = Field(default_factory=list)

    # -- construction -------------------------------------------------------

    @classmethod
    def new(cls, *values: str) -> "Namespace":
        """Create an all-static namespace from *values*."""
        return cls(elements=[NamespaceElement(value=v) for v in values])

    def add_static_element(self, value: str) -> "Namespace":
        return Namespace(elements=[*self._copied(), NamespaceElement(value=value)])

    def add_static_elements(self, *values: str) -> "Namespace":
        added = [NamespaceElement(value=v) for v in values]
        return Namespace(elements=[*self._copied(), *added])

    def add_dynamic_element(self, name: str, description: str) -> "Namespace":
        element = NamespaceElement(value=WILDCARD, name=name, description=description)
        return Namespace(elements=[*self._copied(), element])

    def with_values(self, values: Sequence[str]) -> "Namespace":
        """Return a fresh namespace holding *values*, keeping element metadata.

        Raises:
            ValueError: If *values* does not have one entry per element.
        """
        if len(values) != len(self.elements):
            raise ValueError(
                f"namespace has {len(self.elements)} elements, got {len(values)} values"
            )
        return Namespace(elements=[
            NamespaceElement(value=value, name=e.name, description=e.description)
            for e, value in zip(self.elements, values)
        ])

    def _copied(self) -> Iterable[NamespaceElement]:
        return (e.model_copy() for e in self.elements)

    # -- inspection ---------------------------------------------------------

    def strings(self) -> List[str]:
        """Current value of every element, in order."""
        return [e.value for e in self.elements]

    def element(self, idx: int) -> NamespaceElement:
        if 0 <= idx < len(self.elements):
            return self.elements[idx]
        return NamespaceElement()

    def is_dynamic(self) -> Tuple[bool, List[int]]:
        idx = [i for i, e in enumerate(self.elements) if e.is_dynamic()]
        return bool(idx), idx

    def is_valid(self) -> bool:
        """False if any segment contains a character outside the allowed set."""
        return all(is_valid_part(part) for part in self.strings())

    def key(self) -> str:
        return ".".join(self.strings())

    def __len__(self) -> int:
        return len(self.elements)
