import logging
from typing import List

from fastapi import APIRouter, Depends

from .schemas import (
    HealthResponse,
    PhoneCheckOut,
    PhoneCheckRequest,
    PhoneCheckResponse,
    UrlCheckOut,
    UrlCheckRequest,
    UrlCheckResponse,
    VendorStatsOut,
)
from cyberfort.dependencies import get_history_store, get_verdict_engine
from cyberfort.history_store import HistoryStore
from cyberfort.metrics import CHECKS_TOTAL
from cyberfort.verdict_engine import VerdictEngine

logger = logging.getLogger(__name__)

router = APIRouter()
api_router = APIRouter(prefix="/api")


@router.get("/health", response_model=HealthResponse)
def health(engine: VerdictEngine = Depends(get_verdict_engine)) -> HealthResponse:
    """Report which remote services are configured."""
    return HealthResponse(
        status="ok",
        remote_url=engine.url_service is not None,
        remote_phone=engine.phone_service is not None,
    )


@api_router.post("/check-url", response_model=UrlCheckResponse)
def check_url(
    request: UrlCheckRequest,
    engine: VerdictEngine = Depends(get_verdict_engine),
    store: HistoryStore = Depends(get_history_store),
) -> UrlCheckResponse:
    verdict = engine.evaluate_url(request.url)
    store.add_url_check(request.url, verdict.is_safe, verdict.result)
    CHECKS_TOTAL.labels(kind="url", source=verdict.source.value).inc()
    logger.info(
        "URL %s checked via %s",
        request.url,
        verdict.source.value,
        extra={
            "check_kind": "url",
            "verdict_source": verdict.source.value,
            "is_safe": verdict.is_safe,
        },
    )
    return UrlCheckResponse(
        url=request.url,
        is_safe=verdict.is_safe,
        result=verdict.result,
        source=verdict.source,
        stats=VendorStatsOut.model_validate(verdict.stats) if verdict.stats else None,
        history=[UrlCheckOut.model_validate(c) for c in store.recent_url_checks()],
    )


@api_router.post("/check-phone", response_model=PhoneCheckResponse)
def check_phone(
    request: PhoneCheckRequest,
    engine: VerdictEngine = Depends(get_verdict_engine),
    store: HistoryStore = Depends(get_history_store),
) -> PhoneCheckResponse:
    verdict = engine.evaluate_phone(request.phone_number)
    store.add_phone_check(
        verdict.phone_number,
        verdict.is_safe,
        country=verdict.country,
        carrier=verdict.carrier,
        line_type=verdict.line_type,
        risk_score=verdict.risk_score,
        details=verdict.details,
    )
    CHECKS_TOTAL.labels(kind="phone", source=verdict.source.value).inc()
    logger.info(
        "Phone %s checked via %s",
        verdict.phone_number,
        verdict.source.value,
        extra={
            "check_kind": "phone",
            "verdict_source": verdict.source.value,
            "is_safe": verdict.is_safe,
            "risk_score": verdict.risk_score,
        },
    )
    return PhoneCheckResponse(
        phone_number=verdict.phone_number,
        country=verdict.country,
        carrier=verdict.carrier,
        line_type=verdict.line_type,
        risk_score=verdict.risk_score,
        details=verdict.details,
        is_safe=verdict.is_safe,
        source=verdict.source,
        history=[PhoneCheckOut.model_validate(c) for c in store.recent_phone_checks()],
    )


@api_router.get("/url-history", response_model=List[UrlCheckOut])
def url_history(store: HistoryStore = Depends(get_history_store)) -> List[UrlCheckOut]:
    return [UrlCheckOut.model_validate(c) for c in store.recent_url_checks()]


@api_router.get("/phone-history", response_model=List[PhoneCheckOut])
def phone_history(store: HistoryStore = Depends(get_history_store)) -> List[PhoneCheckOut]:
    return [PhoneCheckOut.model_validate(c) for c in store.recent_phone_checks()]
