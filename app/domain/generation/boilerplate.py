"""
Deterministic boilerplate contract bodies

Rendered whenever the language model is unavailable. The output depends only on
the request metadata and the generation date, so a streamed rendition and a
single-shot render of the same inputs are identical.
"""

import math
import re
from datetime import date
from typing import Optional, Union

from ...utils.sanitization import sanitize_string
from .schemas import GenerationRequest

HEADING_COLOR = "#8b5cf6"
SUBHEADING_COLOR = "#6366f1"

SERVICE_DETAILS = {
    "photographer": (
        "professional photography coverage, image editing, digital gallery delivery, "
        "and print rights as specified in package details"
    ),
    "caterer": (
        "menu planning, food preparation, service staff, setup/cleanup, "
        "and all catering equipment as specified in package details"
    ),
    "florist": (
        "floral design consultation, fresh flower arrangements, delivery, setup, "
        "and care instructions as specified in package details"
    ),
}
DEFAULT_SERVICE_DETAILS = "professional wedding services as detailed in the selected package"

SPECIFIC_TERMS = {
    "photographer": (
        "PHOTOGRAPHY RIGHTS AND DELIVERY",
        [
            "All images remain property of the Service Provider until full payment",
            "Client receives full resolution digital images within 4-6 weeks of event",
            "Service Provider retains rights to use images for portfolio and marketing",
            "Additional prints and products available at current pricing",
        ],
    ),
    "caterer": (
        "CATERING SPECIFICATIONS",
        [
            "Final guest count must be confirmed 7 days prior to event",
            "Menu changes after contract signing may incur additional charges",
            "Client responsible for providing adequate kitchen facilities and electrical access",
            "Food allergies and dietary restrictions must be disclosed 14 days prior",
        ],
    ),
    "florist": (
        "FLORAL SERVICE SPECIFICATIONS",
        [
            "Fresh flowers are subject to seasonal availability; substitutions may be necessary",
            "Setup will occur 2-4 hours prior to ceremony start time",
            "Client responsible for removal of personal flowers after event",
            "Flowers are living products and natural variations in color/size are expected",
        ],
    ),
}
DEFAULT_SPECIFIC_TERMS = (
    "SERVICE SPECIFICATIONS",
    [
        "Specific service details and requirements as outlined in the selected package",
        "Any changes to services must be agreed upon in writing",
        "Client responsible for providing necessary access and accommodations",
    ],
)

CANCELLATION_SCHEDULE = [
    "Cancellations 120+ days before event: 25% of total fee retained",
    "Cancellations 90-119 days before event: 50% of total fee retained",
    "Cancellations 60-89 days before event: 75% of total fee retained",
    "Cancellations less than 60 days before event: 100% of total fee retained",
]

# Leading decimal number, the prefix a lenient float parse accepts ("12.5abc" -> 12.5)
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(value: Union[float, int, str, None]) -> Optional[float]:
    """Parse an amount leniently; None when no number can be read"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = float(match.group(0))
    if math.isnan(number):
        return None
    return number


def format_number(value: float) -> str:
    """Render a number without a trailing '.0' for whole values (2000.0 -> '2000')"""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def display_amount(value: Union[float, int, str, None]) -> str:
    """The total amount as the caller supplied it"""
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(float(value))
    return str(value)


def half_amounts(value: Union[float, int, str, None]) -> tuple[float, float]:
    """
    Deposit and balance, each exactly half of the total.
    No rounding to currency precision; absent or non-numeric amounts give zero.
    """
    amount = parse_amount(value)
    if amount is None:
        return 0.0, 0.0
    half = amount * 0.5
    return half, half


def service_details(vendor_type: Optional[str]) -> str:
    return SERVICE_DETAILS.get((vendor_type or "").lower(), DEFAULT_SERVICE_DETAILS)


def specific_terms(vendor_type: Optional[str]) -> tuple[str, list[str]]:
    return SPECIFIC_TERMS.get((vendor_type or "").lower(), DEFAULT_SPECIFIC_TERMS)


def format_contract_date(value: date) -> str:
    """US-style short date, e.g. 10/19/2026"""
    return f"{value.month}/{value.day}/{value.year}"


def _heading(text: str) -> str:
    return (
        f'<h3 style="color: {HEADING_COLOR}; font-size: 16px; font-weight: bold; '
        f'margin: 16px 0 8px 0;">{text}</h3>'
    )


def _section_heading(text: str) -> str:
    return (
        f'<h2 style="color: {SUBHEADING_COLOR}; font-size: 18px; font-weight: bold; '
        f'margin: 24px 0 12px 0;">{text}</h2>'
    )


def _bullets(items: list[str]) -> str:
    lines = "\n".join(f"      <li>{item}</li>" for item in items)
    return f'<ul style="margin-bottom: 16px;">\n{lines}\n    </ul>'


def render_contract(request: GenerationRequest, generated_on: Optional[date] = None) -> str:
    """Render the complete boilerplate contract body as HTML"""
    if generated_on is None:
        generated_on = date.today()

    vendor_type = request.vendorType or "vendor"
    category = sanitize_string(vendor_type)
    client_name = sanitize_string(request.clientName or "")
    event_date = sanitize_string(request.eventDate or "")
    venue = sanitize_string(request.eventVenue or "")
    package = sanitize_string(request.servicePackage or "")
    total = sanitize_string(display_amount(request.amount))
    deposit, balance = half_amounts(request.amount)
    terms_heading, terms = specific_terms(vendor_type)
    payment_terms = [
        f"A non-refundable deposit of 50% (<strong>${format_number(deposit)}</strong>) is due upon signing this contract",
        f"Remaining balance of <strong>${format_number(balance)}</strong> is due 30 days prior to the event date",
        "Late payments may result in service cancellation",
    ]

    return f"""<div class="contract-content">
    <h1 style="text-align: center; color: {HEADING_COLOR}; font-size: 24px; font-weight: bold; margin-bottom: 20px;">WEDDING {category.upper()} SERVICE AGREEMENT</h1>

    <p style="margin-bottom: 16px;">
      This Professional Service Agreement ("<strong>Agreement</strong>") is made between the Service Provider and
      <strong>{client_name}</strong> ("<strong>Client</strong>") for {category} services.
    </p>

    {_section_heading("EVENT DETAILS:")}
    <ul style="margin-bottom: 20px;">
      <li><strong>Event Date:</strong> {event_date}</li>
      <li><strong>Venue:</strong> {venue}</li>
      <li><strong>Service Package:</strong> {package}</li>
      <li><strong>Total Contract Amount:</strong> <span style="color: #22c55e; font-weight: bold;">${total}</span></li>
    </ul>

    {_section_heading("TERMS AND CONDITIONS:")}

    {_heading("1. SERVICES PROVIDED")}
    <p style="margin-bottom: 16px;">
      The Service Provider agrees to provide professional {category} services as outlined in the selected package.
      Services include <em>{service_details(vendor_type)}</em>.
    </p>

    {_heading("2. PAYMENT TERMS")}
    {_bullets(payment_terms)}

    {_heading("3. CANCELLATION POLICY")}
    {_bullets(CANCELLATION_SCHEDULE)}

    {_heading(f"4. {terms_heading}")}
    {_bullets(terms)}

    {_heading("5. FORCE MAJEURE")}
    <p style="margin-bottom: 16px;">
      Neither party shall be liable for delays or failures due to circumstances beyond reasonable control,
      including but not limited to acts of God, government regulations, or venue restrictions.
    </p>

    {_heading("6. LIABILITY")}
    <p style="margin-bottom: 16px;">
      Service Provider's liability is limited to the total contract amount. Client acknowledges that
      {category} services carry inherent risks and agrees to hold Service Provider harmless.
    </p>

    {_heading("7. GOVERNING LAW")}
    <p style="margin-bottom: 24px;">
      This agreement shall be governed by local state laws and any disputes will be resolved through binding arbitration.
    </p>

    <div class="signature-block" style="border-top: 2px solid {HEADING_COLOR}; padding-top: 16px; margin-top: 24px;">
      <p style="margin-bottom: 16px; font-style: italic;">
        By signing below, both parties agree to all terms and conditions outlined in this contract.
      </p>

      <div style="display: grid; grid-template-columns: 1fr 1fr; gap: 24px; margin: 24px 0;">
        <div>
          <p><strong>SERVICE PROVIDER:</strong></p>
          <p style="border-bottom: 1px solid #666; padding-bottom: 4px; margin: 8px 0;">_________________________</p>
          <p><strong>DATE:</strong> ___________</p>
        </div>
        <div>
          <p><strong>CLIENT:</strong> {client_name}</p>
          <p style="border-bottom: 1px solid #666; padding-bottom: 4px; margin: 8px 0;">_________________________</p>
          <p><strong>DATE:</strong> ___________</p>
        </div>
      </div>

      <p style="text-align: center; color: #6b7280; font-size: 12px; margin-top: 24px;">
        Contract Generated: {format_contract_date(generated_on)}
      </p>
    </div>
  </div>"""


def split_fragments(text: str, size: int) -> list[str]:
    """Split text into consecutive fragments of at most `size` characters"""
    if size < 1:
        raise ValueError("Fragment size must be positive")
    if not text:
        return []
    return [text[i : i + size] for i in range(0, len(text), size)]
