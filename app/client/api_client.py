"""
HTTP client for the contracts API

Drives the same flow as the web front end: sign in, generate a contract body
into a local draft while the stream arrives, commit the draft, edit and sign.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any, Optional, Union

import httpx

from .. import config
from ..domain.generation.generators import BoilerplateContractGenerator
from ..domain.generation.pipeline import DONE_MARKER
from ..domain.identity.schemas import VendorIdentity
from .draft import ContractDraft

logger = logging.getLogger(__name__)

DraftCallback = Callable[[ContractDraft], Union[None, Awaitable[None]]]

PROGRESS_CONNECTING = "Connecting to AI..."
PROGRESS_GENERATING = "Generating contract..."
PROGRESS_FALLBACK = "Using fallback content..."


class ContractsApiClient:
    """Async client for a vendor session against the contracts API"""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http_client: Optional[httpx.AsyncClient] = None,
        fallback_chunk_size: int = config.CLIENT_FALLBACK_CHUNK_SIZE,
        fallback_interval: float = config.CLIENT_FALLBACK_INTERVAL,
        generated_on: Optional[date] = None,
    ):
        self.http = http_client if http_client is not None else httpx.AsyncClient(base_url=base_url)
        self.fallback = BoilerplateContractGenerator(
            chunk_size=fallback_chunk_size, delay=fallback_interval, generated_on=generated_on
        )
        self.token: Optional[str] = None
        self.vendor: Optional[VendorIdentity] = None

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "ContractsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    # ========================================================================
    # SESSION
    # ========================================================================

    async def login(self, email: str, password: str) -> VendorIdentity:
        """Sign in; raises httpx.HTTPStatusError on rejected credentials"""
        response = await self.http.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        response.raise_for_status()
        payload = response.json()
        self.token = payload["access_token"]
        self.vendor = VendorIdentity(**payload["vendor"])
        logger.info(f"🔐 Signed in as {self.vendor.email}")
        return self.vendor

    def logout(self) -> None:
        self.token = None
        self.vendor = None

    # ========================================================================
    # CONTRACT STORE
    # ========================================================================

    async def list_contracts(self) -> list[dict[str, Any]]:
        response = await self.http.get("/api/contracts", headers=self._headers())
        response.raise_for_status()
        return response.json()

    async def create_contract(self, draft: ContractDraft) -> dict[str, Any]:
        """Commit a draft; the draft is cleared once the store accepts it"""
        response = await self.http.post(
            "/api/contracts", json=draft.create_payload(), headers=self._headers()
        )
        response.raise_for_status()
        draft.reset()
        return response.json()

    async def update_contract(self, contract_id: str, **fields: Any) -> dict[str, Any]:
        response = await self.http.put(
            f"/api/contracts/{contract_id}", json=fields, headers=self._headers()
        )
        response.raise_for_status()
        return response.json()

    async def sign_contract(
        self, contract_id: str, signature: str, mode: Optional[str] = None
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"signature": signature}
        if mode:
            body["mode"] = mode
        response = await self.http.post(
            f"/api/contracts/{contract_id}/sign", json=body, headers=self._headers()
        )
        response.raise_for_status()
        return response.json()

    # ========================================================================
    # GENERATION
    # ========================================================================

    async def generate(
        self, draft: ContractDraft, on_update: Optional[DraftCallback] = None
    ) -> str:
        """
        Generate the draft's content from its metadata.

        Fragments are appended to the draft as they arrive. When the stream
        cannot be opened the same boilerplate is rendered locally and applied
        on a fixed timer instead. Without a session this is a no-op.
        """
        if self.vendor is None:
            logger.debug("Generation skipped: no vendor session")
            return draft.content

        request = draft.generation_request(self.vendor.vendorType.value)
        draft.is_generating = True
        draft.generation_progress = PROGRESS_CONNECTING
        await _notify(on_update, draft)

        received = False
        try:
            async with self.http.stream(
                "POST",
                "/api/generate-contract",
                json=request.model_dump(),
                headers=self._headers(),
            ) as response:
                response.raise_for_status()

                draft.generation_progress = PROGRESS_GENERATING
                draft.content = ""
                buffer = ""

                async for line in response.aiter_lines():
                    if not line.startswith("data: "):
                        continue
                    data = line[len("data: ") :]

                    if data == DONE_MARKER:
                        break

                    try:
                        parsed = json.loads(data)
                    except json.JSONDecodeError:
                        # Partial or malformed event, skip it
                        continue

                    fragment = parsed.get("content") if isinstance(parsed, dict) else None
                    if fragment:
                        received = True
                        buffer += fragment
                        draft.content = buffer
                        await _notify(on_update, draft)

        except httpx.HTTPError as e:
            if received:
                logger.error(f"❌ Generation stream interrupted after partial content: {str(e)}")
            else:
                logger.error(f"❌ AI generation error: {str(e)}")
                return await self._generate_locally(draft, request, on_update)

        self._finish(draft)
        await _notify(on_update, draft)
        return draft.content

    async def _generate_locally(self, draft, request, on_update) -> str:
        draft.generation_progress = PROGRESS_FALLBACK
        draft.content = ""
        await _notify(on_update, draft)

        fragments = await self.fallback.open(request)
        async for fragment in fragments:
            draft.content += fragment
            await _notify(on_update, draft)

        self._finish(draft)
        await _notify(on_update, draft)
        return draft.content

    @staticmethod
    def _finish(draft: ContractDraft) -> None:
        draft.is_generating = False
        draft.generation_progress = ""


async def _notify(callback: Optional[DraftCallback], draft: ContractDraft) -> None:
    if callback is None:
        return
    result = callback(draft)
    if result is not None:
        await result
