"""Generation pipeline - remote model first, deterministic boilerplate otherwise"""

import json
import logging
from collections.abc import AsyncIterator
from typing import Optional

from ... import config
from .generators import BoilerplateContractGenerator, ContractGenerator, OpenAIContractGenerator
from .schemas import GenerationRequest

logger = logging.getLogger(__name__)

DONE_MARKER = "[DONE]"


def encode_event(fragment: str) -> str:
    """One server-sent event carrying a single content fragment"""
    return f"data: {json.dumps({'content': fragment})}\n\n"


def encode_done() -> str:
    return f"data: {DONE_MARKER}\n\n"


class GenerationPipeline:
    """
    Selects the generator for a request.

    The remote generator is tried first when configured; if its stream cannot
    be opened the fallback generator serves the request. Callers see the same
    event shape either way.
    """

    def __init__(
        self,
        fallback: ContractGenerator,
        remote: Optional[ContractGenerator] = None,
    ):
        self.fallback = fallback
        self.remote = remote

    async def open(self, request: GenerationRequest) -> AsyncIterator[str]:
        if self.remote is not None:
            fragments = await self.remote.open(request)
            if fragments is not None:
                return fragments
            logger.warning("⚠️ Remote generation unavailable, streaming fallback content")
        else:
            logger.info("No remote generator configured, streaming fallback content")
        return await self.fallback.open(request)

    async def generate(self, request: GenerationRequest) -> str:
        """Single-shot generation: the concatenation of every streamed fragment"""
        fragments = await self.open(request)
        return "".join([fragment async for fragment in fragments])

    async def events(self, request: GenerationRequest) -> AsyncIterator[str]:
        """Server-sent events for the request, terminated by the done marker"""
        fragments = await self.open(request)
        count = 0
        async for fragment in fragments:
            count += 1
            yield encode_event(fragment)
        logger.info(f"✅ Generation stream complete ({count} fragments)")
        yield encode_done()


_pipeline: Optional[GenerationPipeline] = None


def get_generation_pipeline() -> GenerationPipeline:
    """Dependency returning the process-wide pipeline"""
    global _pipeline

    if _pipeline is None:
        remote = OpenAIContractGenerator() if config.OPENAI_API_KEY else None
        if remote is None:
            logger.warning("⚠️ OPENAI_API_KEY not set - contract generation will use boilerplate")
        _pipeline = GenerationPipeline(fallback=BoilerplateContractGenerator(), remote=remote)

    return _pipeline
