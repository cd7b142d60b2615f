"""
Property Autofill Resolver
Maps property record attributes onto catalog fields.
"""

from typing import Any, Dict, Mapping


AUTOFILL_CONFIDENCE = 1.0

# property attribute -> catalog field
PROPERTY_FIELD_MAPPING = {
    "address": "propertyAddress",
    "price": "purchasePrice",
    "square_footage": "squareFootage",
    "bedrooms": "bedrooms",
    "bathrooms": "bathrooms",
    "parcel_id": "parcelId",
}

# camelCase spellings accepted from plain mappings
_ATTRIBUTE_ALIASES = {
    "square_footage": "squareFootage",
    "parcel_id": "parcelId",
}


def is_empty(value: Any) -> bool:
    """A value is empty when absent or a blank string. 0 and False are values."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _read(record: Any, attribute: str) -> Any:
    if isinstance(record, Mapping):
        value = record.get(attribute)
        if value is None and attribute in _ATTRIBUTE_ALIASES:
            value = record.get(_ATTRIBUTE_ALIASES[attribute])
        return value
    return getattr(record, attribute, None)


def resolve_property_autofill(property_record: Any) -> Dict[str, Any]:
    """
    Return the catalog values already known from a property record.

    Accepts an ORM ``Property`` or a plain mapping (snake_case or camelCase
    keys). Only non-empty values are returned.
    """
    if property_record is None:
        return {}

    autofill = {}
    for attribute, field_name in PROPERTY_FIELD_MAPPING.items():
        value = _read(property_record, attribute)
        if not is_empty(value):
            autofill[field_name] = value
    return autofill
