"""
Driver overlay — replace one leaf of a BusinessRecord addressed by a path.

Path syntax: dot-separated field names with zero-based [i] subscripts,

    assumptions.customers.segments[0].volume.monthly_growth.value
    opex[1].value.value            (head not a root field -> under assumptions)

The input record is never touched. Only the nodes along the path are rebuilt
(model_copy / new tuple); every other subtree is shared with the input.

Lookups that fail come back as an OverlayResult carrying PATH_NOT_FOUND. The
one structure an overlay may create is an absent optional value field on an
existing object, e.g. `opex[0].variable_revenue_rate.value`.

The new leaf is validated against the owning field's type (and constraints),
so `meta.periods = 16.5` is INVALID_VALUE rather than a record that cannot be
projected.
"""

from __future__ import annotations

import re
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional, Tuple, Type, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from core.errors import ErrorCode, PathNotFoundError, error_for
from core.schema import Assumptions, BusinessRecord
from core.values import ValueWithRationale

Segment = Union[str, int]

_PART = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)((?:\[\d+\])*)$")
_INDEX = re.compile(r"\[(\d+)\]")
_MISSING = object()


class _Unresolved(Exception):
    def __init__(self, detail: str, code: ErrorCode = ErrorCode.PATH_NOT_FOUND):
        super().__init__(detail)
        self.detail = detail
        self.code = code


@dataclass(frozen=True)
class OverlayResult:
    """Either a new record or the reason the path could not be applied."""

    path: str
    record: Optional[BusinessRecord] = None
    error: Optional[ErrorCode] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> BusinessRecord:
        if self.error is not None or self.record is None:
            raise error_for(self.error or ErrorCode.PATH_NOT_FOUND, self.path, self.detail)
        return self.record


def parse_path(path: str) -> List[Segment]:
    """Split a driver path into field names and integer indices."""
    if not isinstance(path, str) or not path.strip():
        raise _Unresolved("empty path")

    segments: List[Segment] = []
    for part in path.strip().split("."):
        m = _PART.match(part)
        if m is None:
            raise _Unresolved(f"malformed segment {part!r}")
        segments.append(m.group(1))
        segments.extend(int(i) for i in _INDEX.findall(m.group(2)))
    return segments


def _rooted(segments: List[Segment]) -> List[Segment]:
    head = segments[0]
    if head not in BusinessRecord.model_fields and head in Assumptions.model_fields:
        return ["assumptions"] + segments
    return segments


def _flatten(annotation: Any) -> List[Any]:
    """Concrete types behind Optional / Union / Annotated."""
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _flatten(typing.get_args(annotation)[0])
    if origin is Union:
        return [t for arg in typing.get_args(annotation) for t in _flatten(arg)]
    return [annotation]


def _field_types(model: BaseModel, name: str) -> List[Any]:
    return _flatten(type(model).model_fields[name].annotation)


def _accepts_value_field(model: BaseModel, name: str) -> bool:
    return ValueWithRationale in _field_types(model, name)


def _is_structure(model: BaseModel, name: str) -> bool:
    """True if the field holds a sub-object or a list, never a plain value."""
    for t in _field_types(model, name):
        if typing.get_origin(t) is tuple:
            return True
        if isinstance(t, type) and issubclass(t, (BaseModel, tuple)):
            return True
    return False


@lru_cache(maxsize=None)
def _field_adapter(model_cls: Type[BaseModel], name: str) -> TypeAdapter:
    field = model_cls.model_fields[name]
    annotation = field.annotation
    if field.metadata:
        annotation = typing.Annotated[(annotation, *field.metadata)]
    return TypeAdapter(annotation)


def _validated(node: BaseModel, name: str, value: Any, here: Tuple[Segment, ...]) -> Any:
    try:
        return _field_adapter(type(node), name).validate_python(value)
    except ValidationError as exc:
        msg = exc.errors()[0]["msg"]
        raise _Unresolved(
            f"{value!r} is not valid for {_describe(here)}: {msg}", ErrorCode.INVALID_VALUE
        ) from None


def _describe(trail: Tuple[Segment, ...]) -> str:
    out = ""
    for seg in trail:
        out += f"[{seg}]" if isinstance(seg, int) else (f".{seg}" if out else seg)
    return out or "<root>"


def _child(node: Any, seg: Segment, trail: Tuple[Segment, ...]) -> Any:
    if isinstance(seg, int):
        if not isinstance(node, tuple):
            raise _Unresolved(f"{_describe(trail)} is not a list")
        if seg >= len(node):
            raise _Unresolved(f"index {seg} out of range for {_describe(trail)} (len {len(node)})")
        return node[seg]

    if not isinstance(node, BaseModel) or seg not in type(node).model_fields:
        raise _Unresolved(f"no field {seg!r} at {_describe(trail)}")
    return getattr(node, seg)


def _replace(node: Any, segments: List[Segment], value: Any, trail: Tuple[Segment, ...]) -> Any:
    seg, rest = segments[0], segments[1:]
    child = _child(node, seg, trail)
    here = trail + (seg,)

    if not rest:
        if isinstance(child, (BaseModel, tuple)) or (
            isinstance(seg, str) and _is_structure(node, seg)
        ):
            raise _Unresolved(f"{_describe(here)} is not a value")
        # tuple elements are validated by the frame owning the tuple
        new_child = _validated(node, seg, value, here) if isinstance(seg, str) else value
    elif child is None:
        # absent optional assumption: create it when the path ends at its value
        if rest == ["value"] and isinstance(seg, str) and _accepts_value_field(node, seg):
            try:
                new_child = ValueWithRationale.model_validate({"value": value})
            except ValidationError:
                raise _Unresolved(
                    f"{value!r} is not valid for {_describe(here + ('value',))}",
                    ErrorCode.INVALID_VALUE,
                ) from None
        else:
            raise _Unresolved(f"{_describe(here)} is absent")
    else:
        new_child = _replace(child, rest, value, here)
        if isinstance(seg, str) and len(rest) == 1 and isinstance(rest[0], int):
            new_child = _validated(node, seg, new_child, here)

    if isinstance(seg, int):
        return node[:seg] + (new_child,) + node[seg + 1:]
    return node.model_copy(update={seg: new_child})


def overlay(record: BusinessRecord, path: str, value: Any) -> OverlayResult:
    """New record with the leaf at `path` replaced by `value`."""
    try:
        segments = _rooted(parse_path(path))
        new_record = _replace(record, segments, value, ())
    except _Unresolved as exc:
        return OverlayResult(path=path, error=exc.code, detail=exc.detail)
    return OverlayResult(path=path, record=new_record)


def get_path(record: BusinessRecord, path: str, default: Any = _MISSING) -> Any:
    """
    Value at `path`, resolved like overlay().
    Raises PathNotFoundError when unresolvable and no default is given.
    """
    try:
        segments = _rooted(parse_path(path))
        node: Any = record
        trail: Tuple[Segment, ...] = ()
        for seg in segments:
            if node is None:
                raise _Unresolved(f"{_describe(trail)} is absent")
            node = _child(node, seg, trail)
            trail = trail + (seg,)
        return node
    except _Unresolved as exc:
        if default is not _MISSING:
            return default
        raise PathNotFoundError(path, exc.detail) from None
