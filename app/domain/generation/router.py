"""Generation router - streamed contract body generation"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from ...auth import get_current_vendor
from ..identity.schemas import VendorIdentity
from .pipeline import GenerationPipeline, get_generation_pipeline
from .schemas import GenerationRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Generation"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post("/generate-contract")
async def generate_contract(
    data: GenerationRequest,
    vendor: VendorIdentity = Depends(get_current_vendor),
    pipeline: GenerationPipeline = Depends(get_generation_pipeline),
):
    """Stream a contract body as server-sent events"""
    missing = data.missing_required_fields()
    if missing:
        logger.warning(f"⚠️ Generation request missing fields: {', '.join(missing)}")
        raise HTTPException(status_code=400, detail="Missing required fields")

    logger.info(f"📝 Generating {data.vendorType} contract for vendor {vendor.id}")
    return StreamingResponse(
        pipeline.events(data),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
