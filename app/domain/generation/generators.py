"""
Contract body generators

Both generators share one shape: `open()` returns an async iterator of text
fragments, or None when the generator cannot serve the request. The pipeline
picks the first generator that opens.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from datetime import date
from typing import Any, Optional, Protocol

from openai import AsyncOpenAI

from ... import config
from .boilerplate import render_contract, split_fragments
from .schemas import GenerationRequest

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a legal document expert specializing in wedding vendor contracts. "
    "Generate professional, comprehensive contracts that are legally appropriate "
    "and industry-specific."
)


class ContractGenerator(Protocol):
    async def open(self, request: GenerationRequest) -> Optional[AsyncIterator[str]]: ...


def build_prompt(request: GenerationRequest) -> str:
    """Category-specific user prompt asking for a styled HTML contract"""
    vendor_type = request.vendorType
    amount = "" if request.amount is None else request.amount

    return f"""Generate a professional wedding service contract for a {vendor_type}.

Contract details:
- Client: {request.clientName}
- Event Date: {request.eventDate}
- Venue: {request.eventVenue or ""}
- Service Package: {request.servicePackage or ""}
- Amount: ${amount}

Please create a comprehensive contract that includes:
1. Service details specific to {vendor_type} services
2. Payment terms and schedule
3. Cancellation policy
4. Liability clauses
5. Terms and conditions
6. Signature lines

The contract should be professional, legally sound, and tailored for wedding {vendor_type} services. Include specific clauses relevant to {vendor_type} work (e.g., photo/video rights for photographers, menu details for caterers, flower care for florists).

Format it as HTML with proper headings (h1, h2, h3), paragraphs, lists, and styling. Use inline CSS with colors like #8b5cf6 for headings and professional formatting. Make it visually appealing and easy to read."""


class OpenAIContractGenerator:
    """Streams a contract body from the OpenAI chat completions API"""

    def __init__(
        self,
        client: Optional[Any] = None,
        model: str = config.OPENAI_MODEL,
        max_tokens: int = config.OPENAI_MAX_TOKENS,
        temperature: float = config.OPENAI_TEMPERATURE,
    ):
        self.client = client if client is not None else AsyncOpenAI(api_key=config.OPENAI_API_KEY)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def open(self, request: GenerationRequest) -> Optional[AsyncIterator[str]]:
        try:
            stream = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(request)},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                stream=True,
            )
        except Exception as e:
            logger.error(f"❌ OpenAI API error: {str(e)}")
            return None

        logger.info(f"🤖 OpenAI stream opened ({self.model}) for {request.vendorType}")
        return self._fragments(stream)

    async def _fragments(self, stream) -> AsyncIterator[str]:
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content or ""
                if content:
                    yield content
        except Exception as e:
            # Fragments already sent cannot be retracted; the stream ends here
            logger.error(f"❌ OpenAI stream interrupted: {str(e)}")


class BoilerplateContractGenerator:
    """Deterministic local generator, paced to simulate progressive arrival"""

    def __init__(
        self,
        chunk_size: int = config.FALLBACK_CHUNK_SIZE,
        delay: float = config.FALLBACK_CHUNK_DELAY,
        generated_on: Optional[date] = None,
    ):
        self.chunk_size = chunk_size
        self.delay = delay
        self.generated_on = generated_on

    def render(self, request: GenerationRequest) -> str:
        return render_contract(request, self.generated_on)

    async def open(self, request: GenerationRequest) -> AsyncIterator[str]:
        return self._fragments(split_fragments(self.render(request), self.chunk_size))

    async def _fragments(self, fragments: list[str]) -> AsyncIterator[str]:
        for index, fragment in enumerate(fragments):
            if index and self.delay:
                await asyncio.sleep(self.delay)
            yield fragment
