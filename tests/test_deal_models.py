"""Tests for Deal validation and field coercion."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from models.deal_models import Deal


class TestDealMapping:
    def test_source_column_names(self):
        deal = Deal.model_validate({
            "Fecha de Contacto": "2025-11-18",
            "Fecha de Trato": "2025-11-19",
            "Asesora Comercial": "Luz Karime",
            "Nombre de Trato": "Mabel",
            "Estado": "Contacto",
            "Programa Académico": "PROGRAMA DE MAQUILLAJE",
            "Fecha de Cierre": None,
        })
        assert deal.contact_date == "2025-11-18"
        assert deal.deal_date == "2025-11-19"
        assert deal.advisor_name == "Luz Karime"
        assert deal.deal_name == "Mabel"
        assert deal.status == "Contacto"
        assert deal.program == "PROGRAMA DE MAQUILLAJE"
        assert deal.close_date is None

    def test_snake_and_camel_case_keys(self):
        snake = Deal.model_validate({"advisor_name": "Ana", "close_date": "2024-01-01"})
        camel = Deal.model_validate({"advisorName": "Ana", "closeDate": "2024-01-01"})
        assert snake == camel

    def test_unknown_keys_ignored(self):
        deal = Deal.model_validate({"Estado": "Won", "row_number": 7})
        assert deal.status == "Won"
        assert "row_number" not in deal.model_dump()

    def test_dump_uses_field_names(self):
        dumped = Deal.model_validate({"Estado": "Won"}).model_dump()
        assert set(dumped) == {
            "contact_date", "deal_date", "advisor_name", "deal_name",
            "status", "program", "close_date",
        }

    def test_frozen(self):
        deal = Deal(status="Won")
        with pytest.raises(ValidationError):
            deal.status = "Lost"


class TestDealCoercion:
    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_becomes_none(self, value):
        deal = Deal.model_validate({"Asesora Comercial": value, "Fecha de Trato": value})
        assert deal.advisor_name is None
        assert deal.deal_date is None

    def test_strings_are_stripped(self):
        deal = Deal.model_validate({"Asesora Comercial": "  Luz Karime "})
        assert deal.advisor_name == "Luz Karime"

    def test_timestamp_truncated_to_date(self):
        deal = Deal.model_validate({"Fecha de Cierre": "2025-11-20T15:04:05.000Z"})
        assert deal.close_date == "2025-11-20"

    def test_date_objects(self):
        deal = Deal.model_validate({
            "Fecha de Trato": date(2024, 3, 1),
            "Fecha de Cierre": datetime(2024, 3, 5, 10, 30),
        })
        assert deal.deal_date == "2024-03-01"
        assert deal.close_date == "2024-03-05"

    @pytest.mark.parametrize("value", ["19/11/2025", "Nov 19, 2025", "2025/11/19", "pronto"])
    def test_non_iso_date_dropped(self, value):
        assert Deal.model_validate({"Fecha de Trato": value}).deal_date is None

    def test_numbers_in_text_fields(self):
        deal = Deal.model_validate({"Nombre de Trato": 1234, "Programa Académico": 2.5})
        assert deal.deal_name == "1234"
        assert deal.program == "2.5"

    @pytest.mark.parametrize("value", [20240101, ["2024-01-01"], {"date": "2024-01-01"}, True])
    def test_unusable_dates_dropped(self, value):
        assert Deal.model_validate({"Fecha de Trato": value}).deal_date is None

    @pytest.mark.parametrize("value", [["Ana"], {"name": "Ana"}, False])
    def test_unusable_text_dropped(self, value):
        assert Deal.model_validate({"Asesora Comercial": value}).advisor_name is None
