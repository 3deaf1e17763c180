# dialqr/dependencies.py — FastAPI dependencies

from fastapi import Depends

from dialqr.config import Settings, get_settings
from dialqr.services.phone_analysis import GeminiPhoneAnalyzer, PhoneAnalyzer


def get_phone_analyzer(settings: Settings = Depends(get_settings)) -> PhoneAnalyzer:
    return GeminiPhoneAnalyzer.from_settings(settings)
