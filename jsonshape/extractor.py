"""Signature extraction: flattens a JSON value into typed path signatures."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator, Optional

from .exceptions import UnsupportedValueKindError
from .models import ShapeConfig, Signature, ValueKind
from .utils import get_kind, item_path, object_path, trim_path


class SignatureExtractor:
    """
    Walks a JSON value breadth-first and yields one signature per node.

    Containers produce a signature for themselves as well as for each of
    their members, so an empty object still contributes "<path>-object".

    Path rules:
    - Root value of any kind: "$"
    - Members: "$.name", "$.name.child"
    - Root array elements: "$.[0]"
    - Nested array elements: "$.tags[0]"
    """

    def __init__(self, config: Optional[ShapeConfig] = None):
        self.config = config or ShapeConfig()

    def extract(self, value: Any) -> Iterator[Signature]:
        """
        Lazily extract signatures from a JSON value.

        Args:
            value: A parsed JSON value (not mutated)

        Yields:
            Signature for every node in the tree, containers included

        Raises:
            UnsupportedValueKindError: On a value with no JSON counterpart
        """
        queue: deque[tuple[str, Any]] = deque([("", value)])

        while queue:
            parent_path, node = queue.popleft()
            kind = get_kind(node, self.config.date_formats)
            path = trim_path(parent_path) or "$"

            if kind is None:
                raise UnsupportedValueKindError(path, type(node).__name__)

            if kind == ValueKind.OBJECT:
                prefix = object_path(parent_path)
                for key, member in node.items():
                    queue.append((f"{prefix}{key}", member))
            elif kind == ValueKind.ARRAY:
                for i, element in enumerate(node):
                    queue.append((item_path(parent_path, i), element))

            yield Signature(path, kind)


def extract_signatures(value: Any, config: Optional[ShapeConfig] = None) -> Iterator[Signature]:
    """Convenience function to extract signatures with a one-off extractor."""
    return SignatureExtractor(config).extract(value)
