"""
Schema declarations for environment configuration.

A Schema is an ordered, closed set of FieldSpec declarations. Only declared
fields ever reach a ValidatedConfig; anything else in the environment is
ignored.

Example:
    from envconfig import FieldSpec, FieldType, Schema

    schema = Schema([
        FieldSpec("DATABASE_URL", FieldType.STRING, secret=True),
        FieldSpec("PORT", FieldType.NUMBER, required=False, default="8080"),
        FieldSpec("LOG_LEVEL", FieldType.ENUM, choices=("DEBUG", "INFO")),
    ])
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from .errors import SchemaError


class FieldType(str, Enum):
    """Semantic type of a declared field."""
    STRING = "string"
    NUMBER = "number"
    ENUM = "enum"


@dataclass(frozen=True)
class FieldSpec:
    """A single field declaration."""
    name: str  # environment variable name, e.g. "DATABASE_URL"
    type: FieldType = FieldType.STRING
    required: bool = True
    choices: tuple[str, ...] = ()  # permitted values, enum only
    default: Optional[str] = None  # raw value used when unset, optional fields only
    secret: bool = False  # masked in repr, summaries and logs
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise SchemaError("Field name must be a non-empty string")
        # Accept plain strings ("number") as well as FieldType members
        try:
            object.__setattr__(self, "type", FieldType(self.type))
        except ValueError:
            raise SchemaError(f"{self.name}: unknown field type {self.type!r}") from None
        if isinstance(self.choices, str):
            raise SchemaError(f"{self.name}: choices must be a sequence of strings, not a string")
        object.__setattr__(self, "choices", tuple(self.choices))

        if self.type is FieldType.ENUM and not self.choices:
            raise SchemaError(f"{self.name}: enum fields must declare at least one choice")
        if self.type is not FieldType.ENUM and self.choices:
            raise SchemaError(f"{self.name}: choices are only valid for enum fields")
        if self.required and self.default is not None:
            raise SchemaError(f"{self.name}: a required field cannot declare a default")


class Schema:
    """
    Ordered collection of FieldSpecs with unique names.

    Iteration follows declaration order, which is also the order violations
    are reported in.
    """

    def __init__(self, fields: Iterable[FieldSpec]):
        self._fields: dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.name in self._fields:
                raise SchemaError(f"Duplicate field declaration: {spec.name}")
            self._fields[spec.name] = spec

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __getitem__(self, name: str) -> FieldSpec:
        return self._fields[name]

    @property
    def names(self) -> list[str]:
        return list(self._fields)

    def __repr__(self) -> str:
        return f"<Schema: {', '.join(self._fields)}>"
