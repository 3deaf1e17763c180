from enum import Enum

from pydantic import BaseModel

from dialqr.contracts.phone_analysis import PhoneAnalysis


class FormState(str, Enum):
    EMPTY = "empty"
    EDITING = "editing"
    SUBMITTING = "submitting"
    RESULT = "result"


class DialQRRequest(BaseModel):
    phone_number: str = ""


class DialQRView(BaseModel):
    state: FormState
    phone_number: str = ""
    generated_number: str | None = None
    tel_uri: str | None = None
    analysis: PhoneAnalysis | None = None
    is_analyzing: bool = False


class DialQRResult(DialQRView):
    qr_svg: str | None = None
