from fastapi import APIRouter
from langcoach.core.config import SUPPORTED_LANGUAGES
from langcoach.services.prompts import language_pair

router = APIRouter(tags=["languages"])

@router.get("/languages")
def languages():
    out = []
    for code, meta in SUPPORTED_LANGUAGES.items():
        learning, native = language_pair(code)
        out.append({
            "code": code,
            "name": meta["name"],
            "flag": meta["flag"],
            "voiceLang": meta["voice_lang"],
            "learningName": learning,
            "nativeName": native,
        })
    return {"languages": out}
