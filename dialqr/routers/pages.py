"""
Page routes for the DialQR web form
"""
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from dialqr.config import Settings, get_settings
from dialqr.contracts.dial_qr import DialQRView, FormState
from dialqr.dependencies import get_phone_analyzer
from dialqr.services.dial_form import DialQRForm
from dialqr.services.phone_analysis import PhoneAnalyzer
from dialqr.services.qr_rendering import render_qr_svg

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])


def _render(request: Request, view: DialQRView, settings: Settings) -> HTMLResponse:
    qr_svg = None
    if view.tel_uri is not None:
        qr_svg = render_qr_svg(
            view.tel_uri,
            size=settings.qr_size_px,
            error_correction=settings.qr_error_correction,
        )
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "view": view,
            "qr_svg": qr_svg,
            "year": datetime.now(timezone.utc).year,
        },
    )


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, settings: Settings = Depends(get_settings)):
    """Empty form; also the target of the reset action."""
    return _render(request, DialQRView(state=FormState.EMPTY), settings)


@router.post("/", response_class=HTMLResponse)
async def generate(
    request: Request,
    phone_number: str = Form(""),
    analyzer: PhoneAnalyzer = Depends(get_phone_analyzer),
    settings: Settings = Depends(get_settings),
):
    form = DialQRForm(analyzer)
    form.edit(phone_number)
    # Blank input leaves the form as entered.
    await form.submit()
    return _render(request, form.view(), settings)
