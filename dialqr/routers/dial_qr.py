from fastapi import APIRouter, Depends, Response

from dialqr.config import Settings, get_settings
from dialqr.contracts.dial_qr import DialQRRequest, DialQRResult
from dialqr.dependencies import get_phone_analyzer
from dialqr.routers._responses import DataEnvelope, DialQREnvelope, ErrorEnvelope, error_response
from dialqr.services.dial_form import DialQRForm
from dialqr.services.phone_analysis import PhoneAnalyzer
from dialqr.services.qr_rendering import build_tel_uri, render_qr_png, render_qr_svg

router = APIRouter()


@router.post(
    "/dial-qr",
    response_model=DataEnvelope,
    responses={200: {"model": DialQREnvelope}},
)
async def submit_dial_qr(
    payload: DialQRRequest,
    analyzer: PhoneAnalyzer = Depends(get_phone_analyzer),
    settings: Settings = Depends(get_settings),
):
    form = DialQRForm(analyzer)
    form.edit(payload.phone_number)
    await form.submit()

    view = form.view()
    qr_svg = None
    if view.tel_uri is not None:
        qr_svg = render_qr_svg(
            view.tel_uri,
            size=settings.qr_size_px,
            error_correction=settings.qr_error_correction,
        )
    return DataEnvelope(data=DialQRResult(**dict(view), qr_svg=qr_svg))


@router.get(
    "/dial-qr/qr.svg",
    response_class=Response,
    responses={200: {"content": {"image/svg+xml": {}}}, 400: {"model": ErrorEnvelope}},
)
async def dial_qr_svg(number: str = "", settings: Settings = Depends(get_settings)):
    if not number.strip():
        return error_response("number is required", 400)
    svg = render_qr_svg(
        build_tel_uri(number),
        size=settings.qr_size_px,
        error_correction=settings.qr_error_correction,
    )
    return Response(content=svg, media_type="image/svg+xml")


@router.get(
    "/dial-qr/qr.png",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}, 400: {"model": ErrorEnvelope}},
)
async def dial_qr_png(number: str = "", settings: Settings = Depends(get_settings)):
    if not number.strip():
        return error_response("number is required", 400)
    png = render_qr_png(
        build_tel_uri(number),
        size=settings.qr_size_px,
        error_correction=settings.qr_error_correction,
    )
    return Response(content=png, media_type="image/png")
