"""
API endpoints for the BigID service.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request, status

from bigid import config
from bigid.bigid_generator import BigIDGenerator, extract_shard_id
from bigid.models import BigID, DecodedBigID, GeneratedID, ParseError, ShardIDError, ShardResponse

logger = logging.getLogger(__name__)


def _bind_id(value: str) -> BigID:
    try:
        return BigID.from_bind(value)
    except ParseError as e:
        logger.warning(f"Rejected ID {value!r}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid ID: {e}"
        )


def create_app(generator: Optional[BigIDGenerator] = None) -> FastAPI:
    """
    Build the FastAPI application around a generator

    Args:
        generator: The generator to serve IDs from. One is built from
            config when omitted.

    Returns:
        FastAPI app: The configured application
    """
    app = FastAPI(
        title=config.API["title"],
        description="Distributed, time-ordered 64-bit ID generation and decoding",
        version=config.API["version"]
    )
    app.state.generator = generator or BigIDGenerator(strict=config.STRICT_SHARD_ID)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/ids", response_model=GeneratedID)
    async def generate_id(request: Request, shard_id: int = Query(config.SHARD_ID, description="Shard ID (0-255)")):
        """Generate a new ID for a shard"""
        try:
            big_id = request.app.state.generator.generate(shard_id)
        except ShardIDError as e:
            logger.warning(f"Rejected shard ID {shard_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e)
            )
        return GeneratedID(id=big_id)

    @app.get("/placeholders/{shard_id}", response_model=GeneratedID)
    async def placeholder_id(request: Request, shard_id: int):
        """Shard-only sentinel ID"""
        try:
            big_id = request.app.state.generator.placeholder(shard_id)
        except ShardIDError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e)
            )
        return GeneratedID(id=big_id)

    @app.get("/ids/{big_id}", response_model=DecodedBigID)
    async def decode_id(request: Request, big_id: str):
        """Decode an ID into its fields"""
        return request.app.state.generator.decode(_bind_id(big_id))

    @app.get("/ids/{big_id}/shard", response_model=ShardResponse)
    async def shard_of_id(big_id: str):
        return ShardResponse(shard_id=extract_shard_id(_bind_id(big_id)))

    return app


def start():
    """Start the BigID service with Uvicorn"""
    logging.basicConfig(level=config.LOGGING["level"], format=config.LOGGING["format"])
    logger.info("Starting BigID service")

    uvicorn.run(
        "bigid.api:create_app",
        factory=True,
        host=config.API["host"],
        port=config.API["port"],
        reload=config.API["debug"],
        log_level=config.LOGGING["level"].lower()
    )


if __name__ == "__main__":
    start()
