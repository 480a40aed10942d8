from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage

from repairdesk.communication.interface import QuotePayload, ReportPayload, ReportText
from repairdesk.communication.langchain_engine import LangChainTextGenerator
from repairdesk.communication.models import _ReportOutputSchema
from repairdesk.repair.cost import QuoteLine
from repairdesk.repair.models import RepairAction


@pytest.fixture
def quote_payload() -> QuotePayload:
    return QuotePayload(
        customer_name="Carol White",
        product="Luba 2 3000",
        rma_number="RMA-2001",
        lines=(QuoteLine("e-battery", "Battery", RepairAction.REPLACED, 600),),
        labor_cost=100,
        total=700,
        technician_notes="",
    )


@pytest.fixture
def report_payload() -> ReportPayload:
    return ReportPayload(
        customer_name="Carol White",
        product="Luba 2 3000",
        product_name="N/A",
        rma_number="RMA-2001",
        action_summary="Replaced Components: Battery.",
        technician_notes="Battery swapped",
    )


class TestLangChainTextGenerator:
    async def test_generate_quote(self, quote_payload: QuotePayload) -> None:
        llm = MagicMock(spec=BaseChatModel)
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="Dear Carol"))
        generator = LangChainTextGenerator(llm)

        text = await generator.generate_quote(quote_payload)

        assert text == "Dear Carol"
        messages = llm.ainvoke.await_args.args[0]
        assert messages[0][0] == "system"
        assert "- Battery: $600.00" in messages[1][1]

    async def test_generate_report(self, report_payload: ReportPayload) -> None:
        structured = MagicMock()
        structured.ainvoke = AsyncMock(
            return_value=_ReportOutputSchema(email_body="Report", sms_body="SMS")
        )
        llm = MagicMock(spec=BaseChatModel)
        llm.with_structured_output.return_value = structured
        generator = LangChainTextGenerator(llm)

        report = await generator.generate_report(report_payload)

        assert report == ReportText(email="Report", sms="SMS")
        llm.with_structured_output.assert_called_once_with(_ReportOutputSchema)
        messages = structured.ainvoke.await_args.args[0]
        assert "Replaced Components: Battery." in messages[1][1]

    async def test_llm_errors_propagate(self, quote_payload: QuotePayload) -> None:
        llm = MagicMock(spec=BaseChatModel)
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("quota"))
        generator = LangChainTextGenerator(llm)

        with pytest.raises(RuntimeError):
            await generator.generate_quote(quote_payload)
