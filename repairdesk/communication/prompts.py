from __future__ import annotations

from repairdesk.communication.interface import QuotePayload, ReportPayload

SYSTEM_PROMPT = """You are a Senior Service Representative at Robomate, an authorized Mammotion service partner. You write customer-facing repair correspondence for robotic lawn mowers.

**Rules:**
- Plain text only. Never use HTML tags (like <br>, <p>, <b>)
- Use Markdown **Bold** for section headers
- Separate paragraphs with blank lines
- Only state facts given in the request; do not invent parts, prices or tests
"""

QUOTE_PROMPT_TEMPLATE = """Write a formal Repair Quotation email.

**Customer:** {customer_name}
**Product:** {product} (RMA: {rma_number})
**Proposed Replacements & Repairs:**
{item_lines}
**Labor Cost:** ${labor_cost:.2f}
**Total Estimated Cost:** ${total:.2f}
**Notes:** {technician_notes}

Structure:
- Subject: Service Quotation: [RMA#] [Product]
- Dear [Name],
- Explain that diagnostics are complete and parts are needed.
- List the parts and costs clearly.
- State the Grand Total.
- Ask for approval to proceed with the repair.
- Sign off: Robomate Service Team."""

REPORT_PROMPT_TEMPLATE = """Write a formal Service Report for a completed repair, plus a short SMS.

**Customer:** {customer_name}
**Product:** {product}
**Device Name/ID:** {product_name}
**RMA Number:** {rma_number}
**Service Performed:** {action_summary}
**Technician Notes:** {technician_notes}

EMAIL structure:
Subject: [RMA#] Service Report: [Product Model]

Dear [Customer Name],

[Opening: briefly confirm the repair is complete and successful]

**Service Details**
[The repairs/replacements from the service summary]

**Test Results**
• The mower was fully tested, including mapping, charging, mowing, and safety checks.
• Customer map has been restored.

**Recommendations**
• Please clean the bottom of the mower regularly.
• Replace the blades when they become blunt.
• Clean the tail panel and the charging pins on the charging dock from time to time.

If there is any logistics information, we will notify you separately.

Thanks for your patience, and thank you for choosing Robomate!

Robomate Service Team

SMS: under 160 characters, e.g. "Robomate Update: Your [Model] (RMA...) is repaired and has passed QC. Please check your email for the service report."
"""


def build_quote_prompt(payload: QuotePayload) -> str:
    item_lines = "\n".join(f"- {line.name}: ${line.price:.2f}" for line in payload.lines)
    return QUOTE_PROMPT_TEMPLATE.format(
        customer_name=payload.customer_name,
        product=payload.product,
        rma_number=payload.rma_number,
        item_lines=item_lines or "- (labor only)",
        labor_cost=payload.labor_cost,
        total=payload.total,
        technician_notes=payload.technician_notes or "None",
    )


def build_report_prompt(payload: ReportPayload) -> str:
    return REPORT_PROMPT_TEMPLATE.format(
        customer_name=payload.customer_name,
        product=payload.product,
        product_name=payload.product_name,
        rma_number=payload.rma_number,
        action_summary=payload.action_summary,
        technician_notes=payload.technician_notes or "None",
    )
