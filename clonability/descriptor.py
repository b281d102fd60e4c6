"""Schema descriptors used to instruct the model about the expected JSON shape.

A descriptor is advisory: it is serialized into the prompt (and, for Gemini,
into the native ``responseSchema``) and can list mismatches for logging, but
nothing downstream rejects a response because of it.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any

PRIMITIVE_KINDS = ("string", "number", "integer", "boolean")
KINDS = PRIMITIVE_KINDS + ("array", "object")


@dataclass(frozen=True)
class SchemaDescriptor:
    kind: str
    items: SchemaDescriptor | None = None
    fields: tuple[tuple[str, SchemaDescriptor], ...] = ()
    enum: tuple[Any, ...] = ()
    minimum: float | None = None
    maximum: float | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise ValueError(f"Unknown schema kind: {self.kind}")
        if self.kind == "array" and self.items is None:
            object.__setattr__(self, "items", SchemaDescriptor("string"))

    @classmethod
    def from_json_schema(cls, schema: dict[str, Any]) -> SchemaDescriptor:
        """Build a descriptor from a JSON-schema style dict."""
        kind = schema.get("type", "object")
        if isinstance(kind, list):
            kind = next((k for k in kind if k != "null"), "string")

        items = None
        if kind == "array":
            items = cls.from_json_schema(schema.get("items") or {"type": "string"})

        fields: tuple[tuple[str, SchemaDescriptor], ...] = ()
        if kind == "object":
            fields = tuple(
                (name, cls.from_json_schema(sub))
                for name, sub in (schema.get("properties") or {}).items()
            )

        return cls(
            kind=kind,
            items=items,
            fields=fields,
            enum=tuple(schema.get("enum") or ()),
            minimum=schema.get("minimum"),
            maximum=schema.get("maximum"),
            description=schema.get("description"),
        )

    def field(self, name: str) -> SchemaDescriptor | None:
        for key, sub in self.fields:
            if key == name:
                return sub
        return None

    def to_json_schema(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.kind}
        if self.description:
            out["description"] = self.description
        if self.enum:
            out["enum"] = list(self.enum)
        if self.minimum is not None:
            out["minimum"] = self.minimum
        if self.maximum is not None:
            out["maximum"] = self.maximum
        if self.kind == "array" and self.items is not None:
            out["items"] = self.items.to_json_schema()
        if self.kind == "object":
            out["properties"] = {k: v.to_json_schema() for k, v in self.fields}
        return out

    def describe(self) -> str:
        """Human-readable schema hint embedded in structured prompts."""
        return json.dumps(self.to_json_schema(), indent=2)

    def to_gemini_schema(self) -> dict[str, Any] | None:
        """Render the subset Gemini accepts as ``responseSchema``.

        Objects without declared fields are rejected by the API, so they are
        dropped (returns None) and only described in the prompt.
        """
        if self.kind == "object":
            props = {}
            for key, sub in self.fields:
                rendered = sub.to_gemini_schema()
                if rendered is not None:
                    props[key] = rendered
            if not props:
                return None
            return {"type": "OBJECT", "properties": props}

        if self.kind == "array":
            items = self.items.to_gemini_schema() if self.items else None
            if items is None:
                items = {"type": "STRING"}
            return {"type": "ARRAY", "items": items}

        out: dict[str, Any] = {"type": self.kind.upper()}
        if self.enum and self.kind == "string":
            out["enum"] = [str(v) for v in self.enum]
        if self.description:
            out["description"] = self.description
        return out

    def mismatches(self, value: Any, path: str = "$") -> list[str]:
        """List paths where ``value`` does not match this descriptor.

        Missing object fields are not reported; the model is free to omit them.
        """
        problems: list[str] = []
        if not _matches_kind(self.kind, value):
            problems.append(f"{path}: expected {self.kind}, got {type(value).__name__}")
            return problems

        if self.enum and value not in self.enum:
            problems.append(f"{path}: {value!r} not in {list(self.enum)}")

        if self.kind == "array" and self.items is not None:
            for i, item in enumerate(value):
                problems.extend(self.items.mismatches(item, f"{path}[{i}]"))
        elif self.kind == "object":
            for key, sub in self.fields:
                if key in value and value[key] is not None:
                    problems.extend(sub.mismatches(value[key], f"{path}.{key}"))
        return problems


def _matches_kind(kind: str, value: Any) -> bool:
    if kind == "string":
        return isinstance(value, str)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == "number":
        return (
            isinstance(value, (int, float))
            and not isinstance(value, bool)
            and not (isinstance(value, float) and math.isnan(value))
        )
    if kind == "array":
        return isinstance(value, list)
    return isinstance(value, dict)

