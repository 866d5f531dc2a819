from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware

from nopassword.config import get_settings
from nopassword.errors import TokenError
from nopassword.models import TokenCreateRequest, TokenCreateResponse, TokenVerifyRequest, TokenVerifyResponse
from nopassword.token_codec import CodecConfig, acreate_token, ais_valid, current_time_ms

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Fails fast with ConfigError when the secret is empty.
    app.state.codec_config = settings.codec_config()
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/tokens", response_model=TokenCreateResponse)
async def create_token(body: TokenCreateRequest, request: Request) -> TokenCreateResponse:
    config: CodecConfig = request.app.state.codec_config
    issued_at_ms = current_time_ms()

    try:
        token = await acreate_token(config, body.username, issued_at_ms)
    except TokenError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception:
        logger.exception("Token issuance failed unexpectedly")
        raise

    return TokenCreateResponse(
        token=token,
        issued_at_ms=issued_at_ms,
        expires_at_ms=issued_at_ms + config.max_token_age_ms,
    )


@app.post("/api/tokens/verify", response_model=TokenVerifyResponse)
async def verify_token(body: TokenVerifyRequest, request: Request) -> TokenVerifyResponse:
    config: CodecConfig = request.app.state.codec_config

    try:
        valid = await ais_valid(config, body.token, body.username)
    except TokenError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception:
        logger.exception("Token verification failed unexpectedly")
        raise

    return TokenVerifyResponse(valid=valid)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=settings.log_level)
    uvicorn.run("nopassword.main:app", host="0.0.0.0", port=8000, reload=True)
