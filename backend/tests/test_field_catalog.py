"""Tests for the contract field catalog."""

import pytest

from contract_autofill.core.exceptions import ValidationError
from contract_autofill.core.field_catalog import (
    FIELD_CATALOG,
    FieldType,
    coerce_field_value,
    get_field_spec,
    is_catalog_field,
    required_field_names,
)


def test_catalog_covers_all_contract_fields():
    assert len(FIELD_CATALOG) == 27
    assert list(FIELD_CATALOG)[0] == "propertyAddress"
    assert list(FIELD_CATALOG)[-1] == "specialConditions"


def test_required_fields_in_catalog_order():
    assert required_field_names() == [
        "propertyAddress",
        "purchasePrice",
        "buyerName",
        "sellerName",
        "closingDate",
    ]


def test_lookup():
    spec = get_field_spec("loanContingency")
    assert spec.type is FieldType.BOOLEAN
    assert spec.required is False
    assert get_field_spec("garageSpaces") is None
    assert is_catalog_field("hoaFee")
    assert not is_catalog_field("garageSpaces")


class TestCoerceFieldValue:
    """Manual values are checked against the catalog type."""

    def test_none_clears_any_field(self):
        assert coerce_field_value("purchasePrice", None) is None

    def test_number_accepts_numbers_and_numeric_strings(self):
        assert coerce_field_value("purchasePrice", 500000) == 500000
        assert coerce_field_value("bathrooms", 2.5) == 2.5
        assert coerce_field_value("purchasePrice", "525,000") == 525000
        assert coerce_field_value("hoaFee", "125.50") == 125.5

    @pytest.mark.parametrize("value", [True, "a lot", ["1"], "NaN", "inf", "-Infinity", float("nan"), float("inf")])
    def test_number_rejects_other_values(self, value):
        with pytest.raises(ValidationError) as exc_info:
            coerce_field_value("purchasePrice", value)
        assert exc_info.value.fields == ["purchasePrice"]

    def test_boolean(self):
        assert coerce_field_value("loanContingency", False) is False
        assert coerce_field_value("loanContingency", "TRUE") is True
        with pytest.raises(ValidationError):
            coerce_field_value("loanContingency", 1)

    def test_string(self):
        assert coerce_field_value("buyerName", "Jane Buyer") == "Jane Buyer"
        with pytest.raises(ValidationError):
            coerce_field_value("buyerName", 42)

    def test_extra_fields_accept_scalars_verbatim(self):
        assert coerce_field_value("garageSpaces", 2) == 2
        assert coerce_field_value("notes", "see addendum") == "see addendum"
        with pytest.raises(ValidationError):
            coerce_field_value("notes", {"a": 1})
        with pytest.raises(ValidationError):
            coerce_field_value("notes", float("nan"))
