import logging
from typing import Any, Dict, Optional

from auto_translate.core.exceptions import DictionaryWriteError
from auto_translate.services.translation import TranslationService
from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field

router = APIRouter()
logger = logging.getLogger(__name__)


class TranslateRequest(BaseModel):
    text: str = Field(..., min_length=1)
    from_lang: str = Field(..., min_length=1)
    to_lang: str = Field(..., min_length=1)
    key: Optional[str] = None  # Dictionary key, defaults to text


class TranslateResponse(BaseModel):
    key: str
    translation: Optional[str]
    from_lang: str
    to_lang: str


class LookupResponse(BaseModel):
    text: str
    translation: Optional[str]
    found: bool


class SaveResponse(BaseModel):
    saved: bool


def get_translation_service(request: Request) -> TranslationService:
    return request.app.state.translation_service


@router.post("/translate", response_model=TranslateResponse)
async def translate(
    payload: TranslateRequest,
    service: TranslationService = Depends(get_translation_service),
):
    """Translate text, preferring recorded translations over provider calls."""
    key = payload.key or payload.text
    translation = await service.translate_text(
        key, payload.text, payload.from_lang, payload.to_lang
    )
    return TranslateResponse(
        key=key,
        translation=translation,
        from_lang=payload.from_lang,
        to_lang=payload.to_lang,
    )


@router.get("/dictionary/lookup", response_model=LookupResponse)
async def lookup(
    text: str = Query(..., min_length=1),
    from_lang: str = Query(..., min_length=1),
    to_lang: str = Query(..., min_length=1),
    service: TranslationService = Depends(get_translation_service),
):
    """Look text up in the dictionaries without calling a provider."""
    # Empty entries are misses, as in translate_text
    translation = service.find_in_dictionary(text, from_lang, to_lang) or None
    return LookupResponse(text=text, translation=translation, found=translation is not None)


@router.post("/dictionary/save", response_model=SaveResponse)
def save_dictionary(
    service: TranslationService = Depends(get_translation_service),
):
    """Persist new dictionary entries. Runs in the threadpool (blocking file writes)."""
    try:
        saved = service.save_dictionary()
    except OSError as e:
        logger.error(f"Dictionary save failed: {e}")
        raise DictionaryWriteError() from e
    logger.info(f"Dictionary save requested (written={saved})")
    return SaveResponse(saved=saved)


@router.get("/translator/config")
async def translator_config(
    include_dictionaries: bool = False,
    service: TranslationService = Depends(get_translation_service),
) -> Dict[str, Any]:
    """Current file paths, provider selection and optionally the dictionaries."""
    return service.get_config().to_dict(include_dictionaries=include_dictionaries)


@router.get("/translator/stats")
async def translator_stats(
    service: TranslationService = Depends(get_translation_service),
) -> Dict[str, Any]:
    return service.get_stats()
