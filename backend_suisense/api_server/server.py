"""
FastAPI server: explain Sui transactions and Move errors.

POST /explain/tx fetches a transaction block from the fullnode, extracts
facts, infers intent and risk, explains them and anchors the explanation
payload. POST /explain/error classifies raw Move error output and explains
it. Remote failures (RPC, blob store) surface as 502, invalid configuration
as 500 and invalid bodies as 400; every error body is {"error": msg}.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend_suisense import __version__
from backend_suisense.analytics import analyze_transaction
from backend_suisense.anchoring import Anchorer, get_anchorer
from backend_suisense.config import get_settings
from backend_suisense.config.env import get_cors_allow_origins, resolve_rpc_url
from backend_suisense.core.exceptions import AnchorError, ConfigError, RpcError
from backend_suisense.diagnostics import parse_error
from backend_suisense.explainers import explain_error, explain_tx
from backend_suisense.suisense_logging import bind_tx, get_logger
from backend_suisense.sui_rpc import fetch_transaction_block

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------


class ExplainTxRequest(BaseModel):
    """POST /explain/tx body."""

    tx_digest: str = Field(..., min_length=20, description="Transaction digest (base58)")
    network: str | None = Field(None, description="devnet | testnet | mainnet | localnet")
    rpc_url: str | None = Field(None, description="Explicit fullnode URL; overrides network")


class ExplainErrorRequest(BaseModel):
    """POST /explain/error body."""

    tool: str = Field(..., description="Tool that produced the error (sui cli, sdk, rpc, ...)")
    raw_error: str = Field(..., min_length=1, description="Raw error output")


class ExplainErrorResponse(BaseModel):
    category: str
    summary: str = Field(..., description="Explanation text (LLM or fallback)")
    likely_cause: str
    fix_steps: list[str]
    confidence: str
    move_stack: list[str]
    abort_code: str
    modules: list[str]


# -----------------------------------------------------------------------------
# Lifespan: log effective configuration once
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        settings = get_settings()
        logger.info("api_started", version=__version__, **settings.to_log_dict())
    except ConfigError as e:
        logger.warning("api_config_invalid", error=str(e))
    yield
    logger.info("api_stopped")


app = FastAPI(
    title="SuiSense API",
    description="Explain Sui transactions and Move errors.",
    version=__version__,
    lifespan=lifespan,
)

# Browser frontend calls the API cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_allow_origins(),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def _now() -> tuple[int, str]:
    """(epoch milliseconds, ISO-8601 UTC with millisecond precision)."""
    now = datetime.now(timezone.utc)
    created_at_ms = int(now.timestamp() * 1000)
    iso = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return created_at_ms, iso


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}


@app.post("/explain/tx")
def explain_transaction(
    body: ExplainTxRequest,
    anchorer: Anchorer = Depends(get_anchorer),
) -> dict[str, Any]:
    """
    Fetch, analyze, explain and anchor one transaction.

    Response carries intent, assets, risk, explanation, the anchoring result
    and the full explanation payload that was hashed.
    """
    tx_digest = body.tx_digest.strip()
    log = bind_tx(tx_digest, body.network)
    log.info("explain_tx_called")

    raw = fetch_transaction_block(tx_digest, body.network, body.rpc_url)
    facts = analyze_transaction(raw)
    facts_dict = facts.to_dict()
    facts_dict["rpc_url"] = resolve_rpc_url(body.network, body.rpc_url)

    explanation = explain_tx(facts_dict)

    created_at_ms, created_at = _now()
    explanation_payload = {
        "tx_digest": tx_digest,
        "intent": facts.intent,
        "assets": facts_dict["assets"],
        "shared_objects": facts_dict["shared_objects"],
        "explanation": explanation,
        "risk": facts.risk,
        "confidence": facts.confidence,
        "facts": facts_dict,
        "created_at": created_at,
    }
    anchor = anchorer.anchor(tx_digest, explanation_payload, created_at_ms)

    log.info(
        "explain_tx_done",
        intent=facts.intent,
        risk=facts.risk,
        confidence=facts.confidence,
        walrus_blob_id=anchor.walrus_blob_id,
    )
    return {
        "tx_digest": tx_digest,
        "intent": facts.intent,
        "assets": facts_dict["assets"],
        "shared_objects": facts_dict["shared_objects"],
        "explanation": explanation,
        "risk": facts.risk,
        "confidence": facts.confidence,
        "called_operations": facts_dict["called_operations"],
        "object_inputs": facts_dict["object_inputs"],
        **anchor.to_dict(),
        "created_at": created_at,
        "explanation_payload": explanation_payload,
    }


@app.post("/explain/error", response_model=ExplainErrorResponse)
def explain_move_error(body: ExplainErrorRequest) -> ExplainErrorResponse:
    """Classify raw Move error output and explain it."""
    summary = parse_error(body.raw_error)
    summary_dict = summary.to_dict()
    summary_dict["tool"] = body.tool

    explanation = explain_error(summary_dict)
    logger.info(
        "explain_error_done",
        tool=body.tool,
        category=summary.category,
        confidence=summary.confidence,
    )
    return ExplainErrorResponse(
        category=summary.category,
        summary=explanation,
        likely_cause=summary.likely_cause,
        fix_steps=list(summary.fix_steps),
        confidence=summary.confidence,
        move_stack=list(summary.move_stack),
        abort_code=summary.abort_code,
        modules=list(summary.modules),
    )


# -----------------------------------------------------------------------------
# Error handlers
# -----------------------------------------------------------------------------


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("api_invalid_payload", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Invalid payload"})


@app.exception_handler(RpcError)
def rpc_exception_handler(request: Request, exc: RpcError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"error": exc.message})


@app.exception_handler(AnchorError)
def anchor_exception_handler(request: Request, exc: AnchorError) -> JSONResponse:
    logger.warning("anchor_failed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=502, content={"error": str(exc)})


@app.exception_handler(ConfigError)
def config_exception_handler(request: Request, exc: ConfigError) -> JSONResponse:
    logger.error("api_config_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": str(exc)})
