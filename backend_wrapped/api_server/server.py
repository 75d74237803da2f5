"""
FastAPI server: Crypto Wrapped slides for a wallet.

GET /wrapped/{address} fetches the wallet's history from the explorer and
returns the ten slides in reveal order. Nothing is stored; every request
computes fresh. Config via env (ETHERSCAN_API_KEY, WRAPPED_TIMEZONE, ...).
"""

from __future__ import annotations

from typing import Iterator

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from backend_wrapped import __version__
from backend_wrapped.analytics.wrapped_pipeline import build_wrapped
from backend_wrapped.config.settings import Settings, get_settings
from backend_wrapped.core.exceptions import EmptyWindowError, InvalidAddressError, WrappedError
from backend_wrapped.explorer.client import EtherscanClient
from backend_wrapped.wrapped_logging import get_logger, short_wallet

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------


def get_app_settings() -> Settings:
    return get_settings()


def get_explorer_client(settings: Settings = Depends(get_app_settings)) -> Iterator[EtherscanClient]:
    """Dependency: one explorer client (and HTTP session) per request."""
    client = EtherscanClient(settings.explorer)
    try:
        yield client
    finally:
        client.close()


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------


class SlideResponse(BaseModel):
    index: int = Field(..., ge=0, description="Position in the reveal order")
    key: str = Field(..., description="Statistic identifier, e.g. transaction_count")
    text: str = Field(..., description="Rendered slide text")
    image: str = Field("", description="Decorative image tag")


class WrappedResponse(BaseModel):
    """GET /wrapped/{address} response."""

    address: str = Field(..., description="Queried wallet address")
    reference_year: int = Field(..., description="Calendar year of 'now'; window starts Jan 1 of the year before")
    title: str
    slides: list[SlideResponse] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------

app = FastAPI(title="Crypto Wrapped", version=__version__)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/wrapped/{address}", response_model=WrappedResponse)
def get_wrapped(
    address: str,
    settings: Settings = Depends(get_app_settings),
    client: EtherscanClient = Depends(get_explorer_client),
) -> WrappedResponse:
    """
    Fetch + compute the wrapped slides. Errors carry only the user-facing message:
    400 blank address, 404 no transactions in the window, 502 any fetch failure.
    """
    logger.info("api_wrapped_request", wallet=short_wallet(address))
    try:
        result = build_wrapped(address, client, tz=settings.timezone)
    except InvalidAddressError as e:
        raise HTTPException(status_code=400, detail=e.user_message)
    except EmptyWindowError as e:
        raise HTTPException(status_code=404, detail=e.user_message)
    except WrappedError as e:
        logger.warning("api_wrapped_failed", wallet=short_wallet(address), error_type=type(e).__name__, error=e.detail)
        raise HTTPException(status_code=502, detail=e.user_message)
    return WrappedResponse(**result.to_dict())
