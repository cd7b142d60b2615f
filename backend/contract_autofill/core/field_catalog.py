"""
Field Catalog
Known real-estate contract fields with their required flag and value type.
"""

import math
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from contract_autofill.core.exceptions import ValidationError


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class FieldSpec(NamedTuple):
    required: bool
    type: FieldType
    description: str = ""


# Catalog order is the presentation order of every draft's field list.
FIELD_CATALOG: Dict[str, FieldSpec] = {
    "propertyAddress": FieldSpec(True, FieldType.STRING, "Full property address"),
    "purchasePrice": FieldSpec(True, FieldType.NUMBER, "Total purchase price in dollars"),
    "buyerName": FieldSpec(True, FieldType.STRING, "Full legal name of buyer"),
    "sellerName": FieldSpec(True, FieldType.STRING, "Full legal name of seller"),
    "closingDate": FieldSpec(True, FieldType.STRING, "Closing date (YYYY-MM-DD format)"),
    "possessionDate": FieldSpec(False, FieldType.STRING, "Date of possession (YYYY-MM-DD format)"),
    "earnestMoney": FieldSpec(False, FieldType.NUMBER, "Earnest money amount in dollars"),
    "financingType": FieldSpec(False, FieldType.STRING, "Type of financing (cash, conventional, FHA, VA, etc.)"),
    "contingencyPeriod": FieldSpec(False, FieldType.NUMBER, "Contingency period in days"),
    "inspectionPeriod": FieldSpec(False, FieldType.NUMBER, "Inspection period in days"),
    "appraisalContingency": FieldSpec(False, FieldType.BOOLEAN, "Whether appraisal contingency exists"),
    "loanContingency": FieldSpec(False, FieldType.BOOLEAN, "Whether loan contingency exists"),
    "propertyType": FieldSpec(False, FieldType.STRING, "Property type (single family, condo, townhouse, etc.)"),
    "squareFootage": FieldSpec(False, FieldType.NUMBER, "Property square footage"),
    "bedrooms": FieldSpec(False, FieldType.NUMBER, "Number of bedrooms"),
    "bathrooms": FieldSpec(False, FieldType.NUMBER, "Number of bathrooms"),
    "parcelId": FieldSpec(False, FieldType.STRING, "Parcel/APN number"),
    "legalDescription": FieldSpec(False, FieldType.STRING, "Legal description of property"),
    "hoaName": FieldSpec(False, FieldType.STRING, "HOA name if applicable"),
    "hoaFee": FieldSpec(False, FieldType.NUMBER, "Monthly HOA fee"),
    "propertyTaxes": FieldSpec(False, FieldType.NUMBER, "Annual property taxes"),
    "sellerCredits": FieldSpec(False, FieldType.NUMBER, "Seller credits in dollars"),
    "closingCosts": FieldSpec(False, FieldType.STRING, "Who pays closing costs"),
    "titleCompany": FieldSpec(False, FieldType.STRING, "Title company name"),
    "escrowOfficer": FieldSpec(False, FieldType.STRING, "Escrow officer name"),
    "brokerName": FieldSpec(False, FieldType.STRING, "Broker/realty company name"),
    "specialConditions": FieldSpec(False, FieldType.STRING, "Any special conditions or notes"),
}


def get_field_spec(name: str) -> Optional[FieldSpec]:
    return FIELD_CATALOG.get(name)


def is_catalog_field(name: str) -> bool:
    return name in FIELD_CATALOG


def required_field_names() -> List[str]:
    """Names of all required catalog fields, in catalog order."""
    return [name for name, spec in FIELD_CATALOG.items() if spec.required]


def coerce_field_value(name: str, value: Any) -> Any:
    """
    Validate a manually entered value against the catalog type of ``name``.

    ``None`` clears a field and is always accepted. Numeric strings are
    converted for number fields and "true"/"false" for boolean fields.
    Fields outside the catalog accept any scalar as-is.
    """
    if value is None:
        return None

    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"Field '{name}' must be a finite number", fields=[name])

    spec = get_field_spec(name)
    if spec is None:
        if isinstance(value, (str, int, float, bool)):
            return value
        raise ValidationError(f"Field '{name}' must be a scalar value", fields=[name])

    if spec.type is FieldType.NUMBER:
        if isinstance(value, bool):
            raise ValidationError(f"Field '{name}' must be a number", fields=[name])
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            text = value.strip().replace(",", "")
            try:
                number = float(text)
            except ValueError:
                raise ValidationError(f"Field '{name}' must be a number", fields=[name])
            if not math.isfinite(number):
                raise ValidationError(f"Field '{name}' must be a finite number", fields=[name])
            return int(number) if number.is_integer() and "." not in text else number
        raise ValidationError(f"Field '{name}' must be a number", fields=[name])

    if spec.type is FieldType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ValidationError(f"Field '{name}' must be a boolean", fields=[name])

    if isinstance(value, str):
        return value
    raise ValidationError(f"Field '{name}' must be a string", fields=[name])
