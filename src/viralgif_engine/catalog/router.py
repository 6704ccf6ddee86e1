"""Reference data API router."""

from fastapi import APIRouter

from viralgif_engine.catalog.schemas import IndustriesResponse

router = APIRouter()


def _get_catalog():
    from viralgif_engine.deps import get_catalog
    return get_catalog()


@router.get("/industries", response_model=IndustriesResponse)
async def list_industries():
    return IndustriesResponse(industries=_get_catalog().industries())
