from __future__ import annotations

import logging
import time
from typing import cast

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser

from repairdesk.communication.interface import (
    QuotePayload,
    ReportPayload,
    ReportText,
    TextGenerator,
)
from repairdesk.communication.models import _ReportOutputSchema
from repairdesk.communication.prompts import (
    SYSTEM_PROMPT,
    build_quote_prompt,
    build_report_prompt,
)

logger = logging.getLogger(__name__)


class LangChainTextGenerator(TextGenerator):
    """LLM-based quote and report writing using LangChain."""

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm
        self._parser = StrOutputParser()

    async def generate_quote(self, payload: QuotePayload) -> str:
        messages = [
            ("system", SYSTEM_PROMPT),
            ("user", build_quote_prompt(payload)),
        ]

        start = time.monotonic()
        response = await self._llm.ainvoke(messages)
        logger.info(
            "Quote for %s generated in %.1fs",
            payload.rma_number,
            time.monotonic() - start,
        )
        return self._parser.invoke(response)

    async def generate_report(self, payload: ReportPayload) -> ReportText:
        structured_llm = self._llm.with_structured_output(_ReportOutputSchema)
        messages = [
            ("system", SYSTEM_PROMPT),
            ("user", build_report_prompt(payload)),
        ]

        start = time.monotonic()
        response = cast(_ReportOutputSchema, await structured_llm.ainvoke(messages))
        logger.info(
            "Report for %s generated in %.1fs",
            payload.rma_number,
            time.monotonic() - start,
        )
        return ReportText(email=response.email_body, sms=response.sms_body)
