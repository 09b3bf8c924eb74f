from fastapi import APIRouter

from clb_retention.api.v1 import retention, standings, inputs

api_router = APIRouter()

api_router.include_router(retention.router, prefix="/retention", tags=["retention"])
api_router.include_router(standings.router, prefix="/standings", tags=["standings"])
api_router.include_router(inputs.router, prefix="/inputs", tags=["inputs"])
