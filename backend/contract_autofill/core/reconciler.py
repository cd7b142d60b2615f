"""
Field Reconciler
Merges provider output, property autofill values and manual edits into a
single ordered field list with one entry per field name.
"""

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional

from contract_autofill.core.autofill import AUTOFILL_CONFIDENCE, is_empty
from contract_autofill.core.field_catalog import FIELD_CATALOG, coerce_field_value, get_field_spec
from contract_autofill.schemas.contract import ContractField, FieldSource


DEFAULT_CONFIDENCE = 0.5
VALIDATION_THRESHOLD = 0.8
MANUAL_CONFIDENCE = 1.0


def _confidence_for(name: str, llm_confidence: Mapping[str, Any]) -> float:
    raw = llm_confidence.get(name)
    if raw is None or isinstance(raw, bool):
        return DEFAULT_CONFIDENCE
    try:
        score = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    if score != score:  # NaN
        return DEFAULT_CONFIDENCE
    return min(max(score, 0.0), 1.0)


def _normalize_llm_value(value: Any) -> Any:
    """Providers occasionally answer with lists or objects; keep them as JSON text."""
    if isinstance(value, (list, dict)):
        return json.dumps(value) if value else None
    return value


def reconcile_fields(
    llm_fields: Optional[Mapping[str, Any]],
    llm_confidence: Optional[Mapping[str, Any]],
    autofill: Optional[Mapping[str, Any]],
) -> List[ContractField]:
    """
    Build the field list for a fresh analysis, in catalog order.

    A non-empty provider value always wins; autofill only fills fields the
    provider left empty. Fields without a value are emitted only when the
    catalog marks them required, so they can be reported as missing later.
    """
    llm_fields = llm_fields or {}
    llm_confidence = llm_confidence or {}
    autofill = autofill or {}

    fields = []
    for name, spec in FIELD_CATALOG.items():
        value = _normalize_llm_value(llm_fields.get(name))
        source = FieldSource.LLM
        confidence = _confidence_for(name, llm_confidence)

        if is_empty(value) and not is_empty(autofill.get(name)):
            value = autofill[name]
            source = FieldSource.EXTRACTION
            confidence = AUTOFILL_CONFIDENCE

        if is_empty(value):
            if not spec.required:
                continue
            value = None

        fields.append(ContractField(
            name=name,
            value=value,
            confidence=confidence,
            source=source,
            validated=confidence >= VALIDATION_THRESHOLD,
            required=spec.required,
        ))

    return fields


def _ordered(by_name: Dict[str, ContractField]) -> List[ContractField]:
    """Catalog fields in catalog order, then extra fields in first-seen order."""
    catalog_fields = [by_name[name] for name in FIELD_CATALOG if name in by_name]
    extra_fields = [field for name, field in by_name.items() if name not in FIELD_CATALOG]
    return catalog_fields + extra_fields


def apply_manual_edit(fields: Iterable[ContractField], name: str, value: Any) -> List[ContractField]:
    """Replace (or append) the entry for ``name`` with a manual value."""
    by_name = {field.name: field for field in fields}

    spec = get_field_spec(name)
    if spec is not None:
        required = spec.required
    elif name in by_name:
        required = by_name[name].required
    else:
        required = False

    by_name[name] = ContractField(
        name=name,
        value=coerce_field_value(name, value),
        confidence=MANUAL_CONFIDENCE,
        source=FieldSource.MANUAL,
        validated=True,
        required=required,
    )
    return _ordered(by_name)


def find_missing_required(fields: Iterable[ContractField]) -> List[str]:
    """Names of required fields whose value is absent or blank."""
    return [field.name for field in fields if field.required and is_empty(field.value)]


def overall_confidence(fields: Iterable[Any]) -> float:
    """Arithmetic mean of field confidences; 0 for an empty list."""
    scores = [
        field["confidence"] if isinstance(field, Mapping) else field.confidence
        for field in fields
    ]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)
