from collections.abc import Callable
from unittest.mock import AsyncMock

from repairdesk.catalog.catalog import Catalog
from repairdesk.communication.assembler import (
    EMPTY_EMAIL,
    EMPTY_QUOTE,
    MAINTENANCE_SUMMARY,
    QUOTE_ERROR,
    REPORT_ERROR,
    SMS_ERROR,
    build_quote_payload,
    build_report_payload,
    request_quote,
    request_report,
    summarize_actions,
)
from repairdesk.communication.interface import ReportText
from repairdesk.communication.prompts import build_quote_prompt, build_report_prompt
from repairdesk.repair.models import RepairAction, RepairRecord

R = RepairAction


class TestSummarizeActions:
    def test_replaced_and_repaired(
        self, make_record: Callable[..., RepairRecord], catalog: Catalog
    ) -> None:
        record = make_record(
            actions=(
                ("m-wheel-r", R.REPLACED),
                ("e-battery", R.REPLACED),
                ("a-bumper", R.REPAIRED),
            )
        )

        assert summarize_actions(record, catalog) == (
            "Replaced Components: Right Front Wheel Motor, Battery. "
            "Repaired Components: Bumper."
        )

    def test_only_repaired(
        self, make_record: Callable[..., RepairRecord], catalog: Catalog
    ) -> None:
        record = make_record(actions=(("a-bumper", R.REPAIRED),))

        assert summarize_actions(record, catalog) == "Repaired Components: Bumper."

    def test_unknown_part_uses_id(
        self, make_record: Callable[..., RepairRecord], catalog: Catalog
    ) -> None:
        record = make_record(actions=(("old-part", R.REPLACED),))

        assert summarize_actions(record, catalog) == "Replaced Components: old-part."

    def test_no_parts_is_maintenance(
        self, make_record: Callable[..., RepairRecord], catalog: Catalog
    ) -> None:
        assert summarize_actions(make_record(), catalog) == MAINTENANCE_SUMMARY


class TestPayloads:
    def test_quote_payload(
        self, make_record: Callable[..., RepairRecord], catalog: Catalog
    ) -> None:
        record = make_record(
            actions=(("e-battery", R.REPLACED), ("a-bumper", R.REPAIRED)),
            labor_cost=100,
            notes="Battery swollen",
        )

        payload = build_quote_payload(record, catalog)

        assert payload.customer_name == "Carol White"
        assert payload.product == "Luba 2 3000"
        assert payload.rma_number == "RMA-2001"
        assert [line.name for line in payload.lines] == ["Battery", "Bumper (Repair)"]
        assert payload.labor_cost == 100
        assert payload.total == 700
        assert payload.technician_notes == "Battery swollen"

    def test_report_payload_defaults_product_name(
        self, make_record: Callable[..., RepairRecord], catalog: Catalog
    ) -> None:
        payload = build_report_payload(make_record(notes="Cleaned"), catalog)

        assert payload.product_name == "N/A"
        assert payload.action_summary == MAINTENANCE_SUMMARY

    def test_quote_prompt_lists_lines_and_total(
        self, make_record: Callable[..., RepairRecord], catalog: Catalog
    ) -> None:
        record = make_record(actions=(("e-battery", R.REPLACED),), labor_cost=100)

        prompt = build_quote_prompt(build_quote_payload(record, catalog))

        assert "- Battery: $600.00" in prompt
        assert "$700.00" in prompt
        assert "RMA-2001" in prompt

    def test_report_prompt_includes_summary(
        self, make_record: Callable[..., RepairRecord], catalog: Catalog
    ) -> None:
        record = make_record(actions=(("a-bumper", R.REPAIRED),), notes="Glued")

        prompt = build_report_prompt(build_report_payload(record, catalog))

        assert "Repaired Components: Bumper." in prompt
        assert "Glued" in prompt


class TestRequestQuote:
    async def test_returns_generated_text(
        self,
        make_record: Callable[..., RepairRecord],
        catalog: Catalog,
        mock_generator: AsyncMock,
    ) -> None:
        text = await request_quote(mock_generator, make_record(labor_cost=100), catalog)

        assert text == "Dear customer, here is your quote."
        mock_generator.generate_quote.assert_awaited_once()

    async def test_failure_becomes_error_text(
        self,
        make_record: Callable[..., RepairRecord],
        catalog: Catalog,
        mock_generator: AsyncMock,
    ) -> None:
        mock_generator.generate_quote.side_effect = RuntimeError("offline")

        text = await request_quote(mock_generator, make_record(labor_cost=100), catalog)

        assert text == QUOTE_ERROR

    async def test_empty_text(
        self,
        make_record: Callable[..., RepairRecord],
        catalog: Catalog,
        mock_generator: AsyncMock,
    ) -> None:
        mock_generator.generate_quote.return_value = ""

        text = await request_quote(mock_generator, make_record(labor_cost=100), catalog)

        assert text == EMPTY_QUOTE


class TestRequestReport:
    async def test_returns_generated_text(
        self,
        make_record: Callable[..., RepairRecord],
        catalog: Catalog,
        mock_generator: AsyncMock,
    ) -> None:
        report = await request_report(mock_generator, make_record(notes="ok"), catalog)

        assert report == ReportText(email="Your mower is fixed.", sms="Mower fixed.")

    async def test_failure_becomes_error_text(
        self,
        make_record: Callable[..., RepairRecord],
        catalog: Catalog,
        mock_generator: AsyncMock,
    ) -> None:
        mock_generator.generate_report.side_effect = TimeoutError()

        report = await request_report(mock_generator, make_record(notes="ok"), catalog)

        assert report == ReportText(email=REPORT_ERROR, sms=SMS_ERROR)

    async def test_empty_parts_get_placeholders(
        self,
        make_record: Callable[..., RepairRecord],
        catalog: Catalog,
        mock_generator: AsyncMock,
    ) -> None:
        mock_generator.generate_report.return_value = ReportText(email="", sms="")

        report = await request_report(mock_generator, make_record(notes="ok"), catalog)

        assert report == ReportText(email=EMPTY_EMAIL, sms=SMS_ERROR)
