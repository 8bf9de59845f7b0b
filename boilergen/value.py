"""Semi-structured context values and their merge algorithms."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import yaml

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class ValueKind(str, Enum):
    """Variant tag of a :class:`Value`."""

    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_number(self) -> bool:
        return self in (ValueKind.INTEGER, ValueKind.FLOAT)


class MergeConflict(RuntimeError):
    """Raised when ``union`` finds incompatible values.

    ``path`` holds the object keys leading to the conflict, outermost first.
    It is filled in while the error unwinds through nested objects.
    """

    def __init__(self, reason: str, left: "Value", right: "Value") -> None:
        super().__init__(reason)
        self.reason = reason
        self.left = left
        self.right = right
        self.path: List[str] = []
        self.capability: Optional[str] = None

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    def __str__(self) -> str:
        message = self.reason
        if self.path:
            message = f"at key {self.dotted_path!r}: {message}"
        if self.capability:
            message = f"failed to combine result of detector {self.capability!r}: {message}"
        return message


class Value:
    """A tagged union of null, bool, integer, float, string, array and object.

    Arrays hold ``Value`` items and objects map ``str`` keys to ``Value``.
    Instances are mutable so that merges can update the left operand in place,
    including replacing the whole subtree during ``override_with``.
    """

    __slots__ = ("_kind", "_data")

    def __init__(self, data: Any = None) -> None:
        converted = Value.from_python(data)
        self._kind: ValueKind = converted._kind
        self._data: Any = converted._data

    # ------------------------------------------------------------------
    # Construction

    @classmethod
    def _make(cls, kind: ValueKind, data: Any) -> "Value":
        value = cls.__new__(cls)
        value._kind = kind
        value._data = data
        return value

    @classmethod
    def null(cls) -> "Value":
        return cls._make(ValueKind.NULL, None)

    @classmethod
    def empty_object(cls) -> "Value":
        return cls._make(ValueKind.OBJECT, {})

    @classmethod
    def empty_array(cls) -> "Value":
        return cls._make(ValueKind.ARRAY, [])

    @classmethod
    def from_python(cls, data: Any) -> "Value":
        """Convert plain Python data (as produced by YAML/JSON loaders) to a Value."""
        if isinstance(data, Value):
            return data.copy()
        if data is None:
            return cls._make(ValueKind.NULL, None)
        # bool first: it is a subclass of int
        if isinstance(data, bool):
            return cls._make(ValueKind.BOOL, data)
        if isinstance(data, int):
            if not _I64_MIN <= data <= _I64_MAX:
                raise ValueError(f"integer out of 64-bit range: {data}")
            return cls._make(ValueKind.INTEGER, data)
        if isinstance(data, float):
            return cls._make(ValueKind.FLOAT, data)
        if isinstance(data, str):
            return cls._make(ValueKind.STRING, data)
        if isinstance(data, Mapping):
            items: Dict[str, Value] = {}
            for key, item in data.items():
                if not isinstance(key, str):
                    raise TypeError(f"object keys must be strings, got {type(key).__name__}")
                items[key] = cls.from_python(item)
            return cls._make(ValueKind.OBJECT, items)
        if isinstance(data, (list, tuple)):
            return cls._make(ValueKind.ARRAY, [cls.from_python(item) for item in data])
        raise TypeError(f"unsupported value type: {type(data).__name__}")

    @classmethod
    def from_yaml(cls, text: str) -> "Value":
        return cls.from_python(yaml.safe_load(text))

    # ------------------------------------------------------------------
    # Inspection

    @property
    def kind(self) -> ValueKind:
        return self._kind

    def is_null(self) -> bool:
        return self._kind is ValueKind.NULL

    def is_object(self) -> bool:
        return self._kind is ValueKind.OBJECT

    def is_array(self) -> bool:
        return self._kind is ValueKind.ARRAY

    def as_bool(self) -> Optional[bool]:
        return self._data if self._kind is ValueKind.BOOL else None

    def as_int(self) -> Optional[int]:
        return self._data if self._kind is ValueKind.INTEGER else None

    def as_float(self) -> Optional[float]:
        return self._data if self._kind is ValueKind.FLOAT else None

    def as_str(self) -> Optional[str]:
        return self._data if self._kind is ValueKind.STRING else None

    def as_list(self) -> Optional[List["Value"]]:
        return self._data if self._kind is ValueKind.ARRAY else None

    def as_dict(self) -> Optional[Dict[str, "Value"]]:
        return self._data if self._kind is ValueKind.OBJECT else None

    def get(self, key: str) -> Optional["Value"]:
        """Return the value stored under ``key`` or ``None`` when absent or not an object."""
        if self._kind is not ValueKind.OBJECT:
            return None
        return self._data.get(key)

    def contains(self, item: Any) -> bool:
        """Return True when this array holds an element equal to ``item``."""
        if self._kind is not ValueKind.ARRAY:
            return False
        needle = item if isinstance(item, Value) else Value.from_python(item)
        return any(element == needle for element in self._data)

    def items(self) -> Iterator[Tuple[str, "Value"]]:
        """Iterate object entries in lexicographic key order."""
        if self._kind is not ValueKind.OBJECT:
            raise TypeError(f"not an object: {self!r}")
        for key in sorted(self._data):
            yield key, self._data[key]

    def keys(self) -> List[str]:
        return [key for key, _ in self.items()]

    def __getitem__(self, key: str) -> "Value":
        if self._kind is not ValueKind.OBJECT:
            raise TypeError(f"not an object: {self!r}")
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return self._kind is ValueKind.OBJECT and key in self._data

    def __len__(self) -> int:
        if self._kind in (ValueKind.OBJECT, ValueKind.ARRAY):
            return len(self._data)
        raise TypeError(f"{self._kind.value} value has no length")

    # ------------------------------------------------------------------
    # Mutation

    def insert(self, key: str, value: Any) -> None:
        """Set ``key`` on this object, replacing any previous entry."""
        if self._kind is not ValueKind.OBJECT:
            raise TypeError(f"not an object: {self!r}")
        self._data[key] = Value.from_python(value)

    def union(self, other: "Value") -> None:
        """Combine ``other`` into this value, raising ``MergeConflict`` on disagreement."""
        if other is self:
            other = other.copy()
        kind = self._kind
        if kind is ValueKind.OBJECT and other._kind is ValueKind.OBJECT:
            for key in sorted(other._data):
                incoming = other._data[key]
                existing = self._data.get(key)
                if existing is None:
                    self._data[key] = incoming.copy()
                    continue
                try:
                    existing.union(incoming)
                except MergeConflict as exc:
                    exc.path.insert(0, key)
                    raise
            return
        if kind is ValueKind.ARRAY and other._kind is ValueKind.ARRAY:
            # snapshot first: other may share this list
            self._data.extend([item.copy() for item in other._data])
            return
        if kind is ValueKind.NULL and other._kind is ValueKind.NULL:
            return
        if kind is other._kind and kind in (ValueKind.STRING, ValueKind.BOOL):
            if self._data != other._data:
                raise MergeConflict(
                    f"incompatible {kind.value} values: {self._data!r} and {other._data!r}",
                    self.copy(),
                    other.copy(),
                )
            return
        if kind.is_number and other._kind.is_number:
            if self != other:
                raise MergeConflict(
                    f"incompatible number values: {self!r} and {other!r}",
                    self.copy(),
                    other.copy(),
                )
            return
        raise MergeConflict(
            f"incompatible types: {self!r} and {other!r}",
            self.copy(),
            other.copy(),
        )

    def override_with(self, other: "Value") -> None:
        """Force ``other`` onto this value; objects merge per key, anything else is replaced."""
        if self._kind is ValueKind.OBJECT and other._kind is ValueKind.OBJECT:
            for key in sorted(other._data):
                incoming = other._data[key]
                existing = self._data.get(key)
                if existing is None:
                    self._data[key] = incoming.copy()
                else:
                    existing.override_with(incoming)
            return
        replacement = other.copy()
        self._kind = replacement._kind
        self._data = replacement._data

    # ------------------------------------------------------------------
    # Conversion

    def copy(self) -> "Value":
        if self._kind is ValueKind.OBJECT:
            return Value._make(
                ValueKind.OBJECT, {key: item.copy() for key, item in self._data.items()}
            )
        if self._kind is ValueKind.ARRAY:
            return Value._make(ValueKind.ARRAY, [item.copy() for item in self._data])
        return Value._make(self._kind, self._data)

    def to_python(self) -> Any:
        """Return plain Python data; object keys come out sorted."""
        if self._kind is ValueKind.OBJECT:
            return {key: item.to_python() for key, item in self.items()}
        if self._kind is ValueKind.ARRAY:
            return [item.to_python() for item in self._data]
        return self._data

    def as_yaml(self) -> str:
        return yaml.safe_dump(self.to_python(), sort_keys=True, default_flow_style=False)

    # ------------------------------------------------------------------
    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._kind is ValueKind.NULL:
            return "Value(null)"
        if self._kind is ValueKind.FLOAT:
            return f"Value(float {self._data!r})"
        if self._kind is ValueKind.INTEGER:
            return f"Value(integer {self._data!r})"
        return f"Value({self.to_python()!r})"


def object_of(**entries: Any) -> Value:
    """Shorthand for building an object fragment from keyword arguments."""
    return Value.from_python(entries)


def array_of(items: Sequence[Any]) -> Value:
    return Value.from_python(list(items))


__all__ = ["MergeConflict", "Value", "ValueKind", "array_of", "object_of"]
