"""
Schema Validator — declarative argument shapes and their checker

A Shape is an ordered set of named FieldSpecs. Each Shape compiles once into
a pydantic model; validate() runs that model, applies defaults, normalizes
integers and reports every violation in declaration order, so a caller sees
all problems in one round trip.

Shapes also render themselves as JSON Schema (tools/list, from the compiled
model) and as short human-readable summaries (catalog introspection).
"""

import copy
import itertools
import json
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Sequence, Tuple, Type

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    confloat,
    conint,
    create_model,
    model_validator,
)
from pydantic_core import PydanticCustomError

STRING = "string"
NUMBER = "number"
INTEGER = "integer"
BOOLEAN = "boolean"
ENUM = "enum"
ARRAY = "array"
OBJECT = "object"

# Violation reasons
MISSING = "missing"
INVALID_TYPE = "invalid_type"
INVALID_ENUM = "invalid_enum"
OUT_OF_RANGE = "out_of_range"

_MISSING = object()

_RANGE_ERRORS = {"greater_than_equal", "less_than_equal", "greater_than", "less_than"}
# Keywords whose values are data, not nested schemas
_LITERAL_KEYWORDS = {"default", "const", "enum", "examples"}

_model_ids = itertools.count(1)


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class FieldSpec:
    """One declared field: type, optionality, default and constraints."""

    __slots__ = (
        "type", "description", "required", "default",
        "values", "items", "shape", "minimum", "maximum",
    )

    def __init__(
        self,
        type: str,
        description: str = "",
        required: Optional[bool] = None,
        default: Any = _MISSING,
        values: Optional[Sequence[Any]] = None,
        items: Optional["FieldSpec"] = None,
        shape: Optional["Shape"] = None,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
    ):
        if type not in (STRING, NUMBER, INTEGER, BOOLEAN, ENUM, ARRAY, OBJECT):
            raise ValueError(f"Unknown field type: {type}")
        if type == ENUM and not values:
            raise ValueError("enum fields need at least one value")
        if type == ARRAY and items is None:
            raise ValueError("array fields need an item spec")
        if type == OBJECT and shape is None:
            raise ValueError("object fields need a shape")

        self.type = type
        self.description = description
        # A field with a default is optional unless stated otherwise
        self.required = (default is _MISSING) if required is None else required
        self.default = default
        self.values = tuple(values) if values is not None else None
        self.items = items
        self.shape = shape
        self.minimum = minimum
        self.maximum = maximum

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING

    def summary(self) -> str:
        """Short description, e.g. 'integer (1-16, optional, default: 7)'."""
        if self.type == ENUM:
            base = "enum[" + ", ".join(_dump(v) for v in self.values) + "]"
        elif self.type == ARRAY:
            base = f"array<{self.items.summary()}>"
        elif self.type == OBJECT:
            base = "object{" + ", ".join(name for name, _ in self.shape.items()) + "}"
        else:
            base = self.type

        notes = []
        if self.minimum is not None and self.maximum is not None:
            notes.append(f"{_dump(self.minimum)}-{_dump(self.maximum)}")
        elif self.minimum is not None:
            notes.append(f">= {_dump(self.minimum)}")
        elif self.maximum is not None:
            notes.append(f"<= {_dump(self.maximum)}")
        if not self.required:
            notes.append("optional")
        if self.has_default:
            notes.append(f"default: {_dump(self.default)}")

        return f"{base} ({', '.join(notes)})" if notes else base

    def annotation(self) -> Any:
        """The pydantic type this field validates against."""
        if self.type == STRING:
            return StrictStr
        if self.type == BOOLEAN:
            return StrictBool
        if self.type == INTEGER:
            return Annotated[
                conint(strict=True, ge=self.minimum, le=self.maximum),
                BeforeValidator(_integral),
            ]
        if self.type == NUMBER:
            return confloat(strict=True, ge=self.minimum, le=self.maximum, allow_inf_nan=False)
        if self.type == ENUM:
            return Annotated[Literal[self.values], BeforeValidator(_enum_guard(self.values))]
        if self.type == ARRAY:
            return List[self.items.annotation()]
        return self.shape.model

    def to_json_schema(self) -> Dict[str, Any]:
        return Shape({"field": self}).to_json_schema()["properties"]["field"]


def _integral(value: Any) -> Any:
    """2.0 -> 2; anything else is left for the strict int check."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _enum_guard(values: Tuple[Any, ...]):
    # True == 1 in Python; keep booleans and numbers apart
    def check(value: Any) -> Any:
        if not any(v == value and isinstance(v, bool) == isinstance(value, bool) for v in values):
            raise PydanticCustomError("literal_error", "Input should be one of the declared values")
        return value
    return check


# --- field constructors ---

def string(description: str = "", **kwargs) -> FieldSpec:
    return FieldSpec(STRING, description, **kwargs)


def number(description: str = "", **kwargs) -> FieldSpec:
    return FieldSpec(NUMBER, description, **kwargs)


def integer(description: str = "", **kwargs) -> FieldSpec:
    return FieldSpec(INTEGER, description, **kwargs)


def boolean(description: str = "", **kwargs) -> FieldSpec:
    return FieldSpec(BOOLEAN, description, **kwargs)


def enum(values: Sequence[Any], description: str = "", **kwargs) -> FieldSpec:
    return FieldSpec(ENUM, description, values=values, **kwargs)


def array(items: FieldSpec, description: str = "", **kwargs) -> FieldSpec:
    return FieldSpec(ARRAY, description, items=items, **kwargs)


def obj(shape: "Shape", description: str = "", **kwargs) -> FieldSpec:
    return FieldSpec(OBJECT, description, shape=shape, **kwargs)


class _ShapeModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _absent() -> None:
    return None


class Shape:
    """Ordered, immutable mapping of field name -> FieldSpec."""

    __slots__ = ("_fields", "_model")

    def __init__(self, fields: Optional[Dict[str, FieldSpec]] = None, **kwargs: FieldSpec):
        merged = dict(fields or {})
        merged.update(kwargs)
        self._fields: Tuple[Tuple[str, FieldSpec], ...] = tuple(merged.items())
        self._model: Optional[Type[BaseModel]] = None

    def items(self) -> Iterator[Tuple[str, FieldSpec]]:
        return iter(self._fields)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, name: str) -> FieldSpec:
        for key, spec in self._fields:
            if key == name:
                return spec
        raise KeyError(name)

    @property
    def model(self) -> Type[BaseModel]:
        """The compiled pydantic model, built on first use."""
        if self._model is None:
            self._model = self._compile()
        return self._model

    def _compile(self) -> Type[BaseModel]:
        # Attributes are positional (f0, f1, ...) and the declared names are
        # aliases, so any field name works, even one BaseModel already uses.
        definitions: Dict[str, Any] = {}
        optional = set()
        for i, (name, spec) in enumerate(self._fields):
            if spec.has_default:
                info = Field(default=spec.default, alias=name, description=spec.description or None)
            elif spec.required:
                info = Field(alias=name, description=spec.description or None)
            else:
                info = Field(default_factory=_absent, alias=name, description=spec.description or None)
            if not spec.required:
                optional.add(name)
            definitions[f"f{i}"] = (spec.annotation(), info)

        optional = frozenset(optional)

        def drop_nulls(cls, data: Any) -> Any:
            # null for an optional field counts as absent
            if isinstance(data, dict):
                return {k: v for k, v in data.items() if not (v is None and k in optional)}
            return data

        return create_model(
            f"Shape{next(_model_ids)}",
            __base__=_ShapeModel,
            __validators__={"drop_nulls": model_validator(mode="before")(drop_nulls)},
            **definitions,
        )

    def summary(self) -> Dict[str, str]:
        return {name: spec.summary() for name, spec in self._fields}

    def to_json_schema(self) -> Dict[str, Any]:
        generated = self.model.model_json_schema(by_alias=True)
        return _tidy(generated, generated.get("$defs", {}))


def _tidy(node: Any, defs: Dict[str, Any]) -> Any:
    """Inline $refs and drop generated titles from a pydantic JSON Schema."""
    if isinstance(node, list):
        return [_tidy(item, defs) for item in node]
    if not isinstance(node, dict):
        return node

    if "allOf" in node and len(node["allOf"]) == 1:
        node = {**node["allOf"][0], **{k: v for k, v in node.items() if k != "allOf"}}
    if "$ref" in node:
        target = defs[node["$ref"].rsplit("/", 1)[-1]]
        node = {**target, **{k: v for k, v in node.items() if k != "$ref"}}

    tidied: Dict[str, Any] = {}
    for key, value in node.items():
        if key in ("title", "$defs"):
            continue
        if key in _LITERAL_KEYWORDS:
            tidied[key] = value
        elif key == "properties":
            tidied[key] = {name: _tidy(prop, defs) for name, prop in value.items()}
        else:
            tidied[key] = _tidy(value, defs)
    return tidied


class Violation:
    """One field that failed validation."""

    __slots__ = ("field", "reason", "detail")

    def __init__(self, field: str, reason: str, detail: str = ""):
        self.field = field
        self.reason = reason
        self.detail = detail

    @property
    def message(self) -> str:
        text = f"{self.field}: {self.reason}"
        if self.detail:
            text += f" ({self.detail})"
        return text

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "reason": self.reason, "detail": self.detail}

    def __repr__(self) -> str:
        return f"Violation({self.message!r})"


class Validation:
    """Outcome of validate(): a normalized value or a list of violations."""

    __slots__ = ("value", "violations")

    def __init__(self, value: Optional[Dict[str, Any]], violations: List[Violation]):
        self.value = value
        self.violations = violations

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def message(self) -> str:
        return "; ".join(v.message for v in self.violations)


def validate(shape: Shape, data: Any) -> Validation:
    """Check `data` against `shape`. Never raises for bad input."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return Validation(None, [Violation("arguments", INVALID_TYPE, "expected an object")])

    try:
        instance = shape.model.model_validate(data)
    except ValidationError as exc:
        return Validation(None, _violations(shape, exc))
    return Validation(_plain_fields(shape, instance), [])


def _plain_fields(shape: Shape, instance: BaseModel) -> Dict[str, Any]:
    """Model instance -> dict keyed by declared names, defaults filled in."""
    normalized: Dict[str, Any] = {}
    for i, (name, spec) in enumerate(shape.items()):
        attr = f"f{i}"
        if attr not in instance.model_fields_set:
            if spec.has_default:
                normalized[name] = copy.deepcopy(spec.default)
            continue
        normalized[name] = _plain_value(spec, getattr(instance, attr))
    return normalized


def _plain_value(spec: FieldSpec, value: Any) -> Any:
    if spec.type == OBJECT:
        return _plain_fields(spec.shape, value)
    if spec.type == ARRAY:
        return [_plain_value(spec.items, item) for item in value]
    return value


def _violations(shape: Shape, exc: ValidationError) -> List[Violation]:
    violations: List[Violation] = []
    seen = set()
    for error in exc.errors(include_url=False):
        loc = error["loc"]
        path = _path(loc)
        if path in seen:
            continue
        seen.add(path)

        spec = _spec_at(shape, loc)
        kind = error["type"]
        if kind == "missing":
            violations.append(Violation(path, MISSING))
        elif kind == "literal_error" and spec is not None and spec.type == ENUM:
            allowed = ", ".join(_dump(v) for v in spec.values)
            violations.append(Violation(path, INVALID_ENUM, f"expected one of {allowed}"))
        elif kind in _RANGE_ERRORS and spec is not None:
            violations.append(Violation(path, OUT_OF_RANGE, _range_text(spec)))
        else:
            detail = f"expected {spec.type}" if spec is not None else ""
            violations.append(Violation(path, INVALID_TYPE, detail))
    return violations


def _path(loc: Tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _spec_at(shape: Shape, loc: Tuple[Any, ...]) -> Optional[FieldSpec]:
    """Walk a pydantic error location back to the FieldSpec it points at."""
    spec: Optional[FieldSpec] = None
    current: Optional[Shape] = shape
    for part in loc:
        if isinstance(part, int):
            if spec is None or spec.type != ARRAY:
                return None
            spec = spec.items
        else:
            if current is None:
                return None
            try:
                spec = current[part]
            except KeyError:
                return None
        current = spec.shape if spec.type == OBJECT else None
    return spec


def _range_text(spec: FieldSpec) -> str:
    if spec.minimum is not None and spec.maximum is not None:
        return f"must be between {_dump(spec.minimum)} and {_dump(spec.maximum)}"
    if spec.minimum is not None:
        return f"must be >= {_dump(spec.minimum)}"
    return f"must be <= {_dump(spec.maximum)}"
