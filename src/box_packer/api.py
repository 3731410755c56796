"""FastAPI endpoint for the box packer."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from box_packer.config import Settings, load_settings
from box_packer.errors import ConfigurationError, InvalidArgumentError, PackingError
from box_packer.io.schemas import PackRequestSchema, result_to_schema
from box_packer.packing.packer import pack_weights

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Box Packer API",
    description="Greedy first-fit / best-fit packing of item weights into identical boxes",
)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """BOX_PACKER_* defaults, read (and .env loaded) once per process."""
    return load_settings()


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"Server configuration error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": {"error": exc.code, "details": str(exc)}},
    )


@app.post("/pack")
async def pack(
    request: PackRequestSchema,
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """
    Pack weights and return the plan.

    Input (request body):
        {"capacity": 10, "strategy": "best_fit", "weights": [6, 5, 4]}

    Missing capacity / strategy / oversize_policy fall back to the
    BOX_PACKER_* defaults. Input errors are returned as 422 and server
    configuration errors as 500, both with {"error": <CODE>, "details": <message>}.
    """
    try:
        capacity = request.capacity if request.capacity is not None else settings.capacity
        if capacity is None:
            raise InvalidArgumentError("capacity is required")

        result = pack_weights(
            capacity,
            request.weights,
            strategy=request.strategy or settings.strategy,
            oversize_policy=request.oversize_policy or settings.oversize_policy,
        )
    except PackingError as e:
        logger.warning(f"Rejected /pack request: {e}")
        raise HTTPException(status_code=422, detail={"error": e.code, "details": str(e)})

    plan = result_to_schema(result)
    logger.info(
        f"strategy={plan.strategy}, items={len(request.weights)}, "
        f"boxes={plan.box_count}, unpacked={len(plan.unpacked)}"
    )
    return plan.model_dump()


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}
