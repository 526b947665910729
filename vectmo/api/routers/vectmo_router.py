from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
import logging

from vectmo.services.errors import (
    ConfigurationError,
    EmptyInputError,
    EmptyModelError,
    InvalidInputError,
    ModelIOError,
    NoContinuationError,
    VectmoError,
)
from vectmo.services.model import VectmoModel, get_vectmo_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vectmo", tags=["vectmo"])


class TrainRequest(BaseModel):
    text: str
    base: Optional[str] = None


class PredictRequest(BaseModel):
    seed: str
    max_chars: Optional[int] = Field(default=None, ge=0, le=10000)


class EmbedRequest(BaseModel):
    text: str


class SimilarRequest(BaseModel):
    word: str


def _http_error(exc: VectmoError) -> HTTPException:
    if isinstance(exc, (EmptyInputError, InvalidInputError, ConfigurationError)):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, EmptyModelError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, NoContinuationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, ModelIOError):
        logger.error(f"[ERR] Model storage failure: {exc}")
        return HTTPException(status_code=500, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


@router.post("/train")
async def train(req: TrainRequest, model: VectmoModel = Depends(get_vectmo_model)):
    try:
        if req.base is not None:
            model.set_base(req.base)
        summary = model.train(req.text)
    except VectmoError as e:
        raise _http_error(e)
    return {
        "ok": True,
        "data": {
            "characters": summary.characters,
            "source_chars": summary.source_chars,
            "pairs": summary.pairs,
            "words": summary.words,
            "table_path": summary.table_path,
            "words_path": summary.words_path,
            "embedding_path": summary.embedding_path,
        },
    }


@router.post("/predict")
async def predict(req: PredictRequest, model: VectmoModel = Depends(get_vectmo_model)):
    try:
        result = model.predict_detailed(req.seed, max_chars=req.max_chars)
    except VectmoError as e:
        raise _http_error(e)
    return {
        "ok": True,
        "data": {
            "text": result.text,
            "raw": result.raw,
            "seed": result.seed,
            "forced_moves": result.forced_moves,
            "stop_reason": result.stop_reason,
            "matches": [
                {"token": m.query, "word": m.word, "score": m.score}
                for m in result.matches
            ],
        },
    }


@router.post("/embed")
async def embed(req: EmbedRequest, model: VectmoModel = Depends(get_vectmo_model)):
    vector = model.embed(req.text)
    return {"ok": True, "data": {"vector": vector.tolist(), "dim": int(vector.shape[0])}}


@router.post("/similar")
async def similar(req: SimilarRequest, model: VectmoModel = Depends(get_vectmo_model)):
    if not req.word:
        raise HTTPException(status_code=400, detail="word is required")
    match = model.most_similar(req.word)
    if match is None:
        raise HTTPException(status_code=404, detail="vocabulary is empty, train first")
    return {"ok": True, "data": {"word": match.word, "score": match.score}}


@router.get("/status")
async def status(model: VectmoModel = Depends(get_vectmo_model)):
    return {"ok": True, "data": model.status()}
