"""
Field model for the brand kit provenance tree.

PR-1: Wrapped field values + status lifecycle.

Every leaf of a brand kit is either a FieldValue (single value) or an
ArrayField (list of items). Both carry provenance metadata:
- status: found | inferred | missing | manual
- confidence: 0..1 (raw input outside that range is clamped)
- source: where the value came from (domains, URLs, "ai_inference", "manual")
- originalValue / originalItems: the analysis value, captured so an operator
  edit can be undone

Lifecycle:
    (none) -> found | inferred | missing      (analysis)
    found | inferred | missing -> manual      (operator edit)
    manual -> found | missing                 (operator reset)

The "original" slot has three states: absent (never captured), captured as
None, captured as a value. Absence is tracked through pydantic's
model_fields_set, so two fields that differ only in whether an empty original
was captured still compare equal.

The `kind` discriminator ("value" / "array") drives all traversal; raw input
without `kind` is classified once at the boundary by coerce_field().
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_serializer,
)

from brandkit.core.enums import FieldSource, FieldStatus

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# FIELD TYPES
# =============================================================================


class BaseField(BaseModel):
    """Provenance metadata shared by FieldValue and ArrayField."""

    model_config = ConfigDict(populate_by_name=True)

    # Names of the current/original slots on the concrete class
    CURRENT_FIELD: ClassVar[str] = ""
    ORIGINAL_FIELD: ClassVar[str] = ""
    ORIGINAL_ALIAS: ClassVar[str] = ""

    status: FieldStatus
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    description: str = ""
    usage: list[str] = Field(default_factory=list)
    source: list[str] = Field(default_factory=list)
    notes: str | None = None
    is_edited: bool = Field(default=False, alias="isEdited")
    edited_at: datetime | None = Field(default=None, alias="editedAt")
    is_locked: bool | None = Field(default=None, alias="isLocked")

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> Any:
        if value is None:
            return 0.0
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return min(1.0, max(0.0, float(value)))
        return value

    @field_validator("usage", "source", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("description", mode="before")
    @classmethod
    def _none_as_empty_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_serializer(mode="wrap")
    def _omit_uncaptured_original(self, handler):
        data = handler(self)
        if not self.has_original:
            data.pop(self.ORIGINAL_FIELD, None)
            data.pop(self.ORIGINAL_ALIAS, None)
        return data

    @property
    def has_original(self) -> bool:
        """True once an original value has been captured (even if it is None)."""
        return self.ORIGINAL_FIELD in self.model_fields_set

    @property
    def current(self) -> Any:
        return getattr(self, self.CURRENT_FIELD)

    @property
    def original(self) -> Any:
        return getattr(self, self.ORIGINAL_FIELD)

    @property
    def is_missing(self) -> bool:
        return self.status == FieldStatus.MISSING

    @property
    def is_filled(self) -> bool:
        return self.status != FieldStatus.MISSING


class FieldValue(BaseField):
    """A single wrapped value (string, bool, number or structured object)."""

    CURRENT_FIELD: ClassVar[str] = "value"
    ORIGINAL_FIELD: ClassVar[str] = "original_value"
    ORIGINAL_ALIAS: ClassVar[str] = "originalValue"

    kind: Literal["value"] = "value"
    value: Any = None
    original_value: Any = Field(default=None, alias="originalValue")


class ArrayField(BaseField):
    """A wrapped list of items (colors, testimonials, keywords...)."""

    CURRENT_FIELD: ClassVar[str] = "items"
    ORIGINAL_FIELD: ClassVar[str] = "original_items"
    ORIGINAL_ALIAS: ClassVar[str] = "originalItems"

    kind: Literal["array"] = "array"
    items: list[Any] = Field(default_factory=list)
    original_items: list[Any] = Field(default_factory=list, alias="originalItems")

    @field_validator("items", "original_items", mode="before")
    @classmethod
    def _none_as_no_items(cls, value: Any) -> Any:
        return [] if value is None else value


KitField = Annotated[Union[FieldValue, ArrayField], Field(discriminator="kind")]

_KIT_FIELD_ADAPTER: TypeAdapter = TypeAdapter(KitField)


# =============================================================================
# CONSTRUCTORS
# =============================================================================


def create_found_field(
    value: Any,
    description: str,
    usage: Sequence[str],
    source: Sequence[str],
    confidence: float = 1.0,
    notes: str | None = None,
) -> FieldValue:
    """Field observed directly by analysis."""
    return FieldValue(
        value=value,
        original_value=copy.deepcopy(value),
        status=FieldStatus.FOUND,
        confidence=confidence,
        description=description,
        usage=list(usage),
        source=list(source),
        notes=notes,
    )


def create_inferred_field(
    value: Any,
    description: str,
    usage: Sequence[str],
    confidence: float,
    notes: str | None = None,
) -> FieldValue:
    """Field derived (not observed) by analysis."""
    return FieldValue(
        value=value,
        original_value=copy.deepcopy(value),
        status=FieldStatus.INFERRED,
        confidence=confidence,
        description=description,
        usage=list(usage),
        source=[FieldSource.AI_INFERENCE.value],
        notes=notes,
    )


def create_missing_field(
    description: str,
    usage: Sequence[str],
    notes: str | None = None,
) -> FieldValue:
    return FieldValue(
        value=None,
        status=FieldStatus.MISSING,
        confidence=0.0,
        description=description,
        usage=list(usage),
        source=[],
        notes=notes,
    )


def create_manual_field(
    value: Any,
    description: str,
    usage: Sequence[str],
    *,
    now: datetime | None = None,
) -> FieldValue:
    """Field supplied by an operator with nothing from analysis to fall back to."""
    return FieldValue(
        value=value,
        original_value=None,
        is_edited=True,
        edited_at=now or utcnow(),
        status=FieldStatus.MANUAL,
        confidence=1.0,
        description=description,
        usage=list(usage),
        source=[FieldSource.MANUAL.value],
    )


def create_found_array_field(
    items: Sequence[Any],
    description: str,
    usage: Sequence[str],
    source: Sequence[str],
    confidence: float = 1.0,
    notes: str | None = None,
) -> ArrayField:
    return ArrayField(
        items=list(items),
        original_items=copy.deepcopy(list(items)),
        status=FieldStatus.FOUND,
        confidence=confidence,
        description=description,
        usage=list(usage),
        source=list(source),
        notes=notes,
    )


def create_inferred_array_field(
    items: Sequence[Any],
    description: str,
    usage: Sequence[str],
    confidence: float,
    notes: str | None = None,
) -> ArrayField:
    return ArrayField(
        items=list(items),
        original_items=copy.deepcopy(list(items)),
        status=FieldStatus.INFERRED,
        confidence=confidence,
        description=description,
        usage=list(usage),
        source=[FieldSource.AI_INFERENCE.value],
        notes=notes,
    )


def create_missing_array_field(
    description: str,
    usage: Sequence[str],
    notes: str | None = None,
) -> ArrayField:
    return ArrayField(
        items=[],
        status=FieldStatus.MISSING,
        confidence=0.0,
        description=description,
        usage=list(usage),
        source=[],
        notes=notes,
    )


def create_manual_array_field(
    items: Sequence[Any],
    description: str,
    usage: Sequence[str],
    *,
    now: datetime | None = None,
) -> ArrayField:
    return ArrayField(
        items=list(items),
        original_items=[],
        is_edited=True,
        edited_at=now or utcnow(),
        status=FieldStatus.MANUAL,
        confidence=1.0,
        description=description,
        usage=list(usage),
        source=[FieldSource.MANUAL.value],
    )


# =============================================================================
# EDIT / RESET
# =============================================================================


def _as_items(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _without_manual(source: Sequence[str]) -> list[str]:
    return [tag for tag in dict.fromkeys(source) if tag != FieldSource.MANUAL]


def update_field_with_edit(
    field: FieldValue | ArrayField,
    new_value: Any,
    *,
    now: datetime | None = None,
) -> FieldValue | ArrayField:
    """
    Apply an operator edit and return a new field.

    The first edit captures the pre-edit value as the original; later edits
    keep whatever was captured, so a reset always restores the analysis value.
    For an ArrayField, `new_value` becomes the item list (a scalar is wrapped).
    """
    if isinstance(field, ArrayField):
        new_current = _as_items(copy.deepcopy(new_value))
    else:
        new_current = copy.deepcopy(new_value)

    update: dict[str, Any] = {
        field.CURRENT_FIELD: new_current,
        "is_edited": True,
        "edited_at": now or utcnow(),
        "status": FieldStatus.MANUAL,
        "source": _without_manual(field.source) + [FieldSource.MANUAL.value],
    }
    if not field.has_original:
        update[field.ORIGINAL_FIELD] = copy.deepcopy(field.current)

    return field.model_copy(update=update, deep=True)


def reset_field_to_original(field: FieldValue | ArrayField) -> FieldValue | ArrayField:
    """
    Restore the captured original value.

    Returns the field unchanged when no original was ever captured. Otherwise
    the status becomes found (original present) or missing (original empty).
    """
    if not field.has_original:
        return field

    original = field.original
    if isinstance(field, ArrayField):
        restored = bool(original)
    else:
        restored = original is not None

    return field.model_copy(
        update={
            field.CURRENT_FIELD: copy.deepcopy(original),
            "is_edited": False,
            "edited_at": None,
            "status": FieldStatus.FOUND if restored else FieldStatus.MISSING,
            "source": _without_manual(field.source),
        },
        deep=True,
    )


# =============================================================================
# RAW INPUT BOUNDARY
# =============================================================================


_ANALYSIS_STATUSES = frozenset({FieldStatus.FOUND, FieldStatus.INFERRED})


def _with_analysis_original(field: FieldValue | ArrayField) -> FieldValue | ArrayField:
    if field.status in _ANALYSIS_STATUSES and not field.has_original:
        return field.model_copy(update={field.ORIGINAL_FIELD: copy.deepcopy(field.current)})
    return field


def looks_like_field(raw: Any) -> bool:
    """A raw mapping is treated as a wrapped field when it carries status and confidence."""
    return isinstance(raw, Mapping) and "status" in raw and "confidence" in raw


def parse_field(raw: Mapping[str, Any]) -> FieldValue | ArrayField:
    """
    Validate a raw wrapped field.

    `kind` selects the type when present; otherwise a mapping with items is an
    ArrayField and anything else a FieldValue. A found or inferred field that
    arrives without an original captures its current value, as the analysis
    constructors do. Raises ValidationError.
    """
    data = dict(raw)
    if "kind" in data:
        field = _KIT_FIELD_ADAPTER.validate_python(data)
    elif "items" in data or "originalItems" in data or "original_items" in data:
        field = ArrayField.model_validate(data)
    else:
        field = FieldValue.model_validate(data)

    return _with_analysis_original(field)


def coerce_field(raw: Any, *, path: str = "") -> FieldValue | ArrayField | None:
    """
    Classify a raw wrapped field into FieldValue / ArrayField.

    Returns None when `raw` is not a wrapped field or fails validation; the
    caller substitutes the schema default.
    """
    if isinstance(raw, (FieldValue, ArrayField)):
        return _with_analysis_original(raw.model_copy(deep=True))
    if not looks_like_field(raw):
        return None

    try:
        return parse_field(raw)
    except ValidationError as exc:
        logger.warning(
            "Discarding malformed field at %s (%d validation errors)",
            path or "<root>",
            exc.error_count(),
        )
        return None
