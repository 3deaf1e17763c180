from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from dialqr.contracts.dial_qr import FormState
from dialqr.contracts.phone_analysis import PhoneAnalysis
from dialqr.services.dial_form import DialQRForm
from dialqr.services.phone_analysis import GeminiPhoneAnalyzer


def _stub_analyzer(analysis: PhoneAnalysis) -> SimpleNamespace:
    return SimpleNamespace(analyze=AsyncMock(return_value=analysis))


US_ANALYSIS = PhoneAnalysis(isValid=True, formatted="+1 555-123-4567", countrySuggestion="United States")


def test_new_form_is_empty():
    form = DialQRForm(_stub_analyzer(US_ANALYSIS))

    view = form.view()

    assert view.state == FormState.EMPTY
    assert view.phone_number == ""
    assert view.generated_number is None
    assert view.tel_uri is None
    assert view.analysis is None


def test_edit_moves_to_editing():
    form = DialQRForm(_stub_analyzer(US_ANALYSIS))

    form.edit("+1 555")

    assert form.state == FormState.EDITING
    assert form.phone_number == "+1 555"


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
@pytest.mark.asyncio
async def test_blank_submit_is_a_no_op(text: str):
    analyzer = _stub_analyzer(US_ANALYSIS)
    form = DialQRForm(analyzer)
    form.edit(text)
    before = form.view()

    submitted = await form.submit()

    assert submitted is False
    assert analyzer.analyze.await_count == 0
    assert form.view() == before


@pytest.mark.asyncio
async def test_submit_uses_service_format():
    analyzer = _stub_analyzer(US_ANALYSIS)
    form = DialQRForm(analyzer)
    form.edit("+1 555 123 4567")

    submitted = await form.submit()

    assert submitted is True
    analyzer.analyze.assert_awaited_once_with("+1 555 123 4567")
    assert form.state == FormState.RESULT
    assert form.generated_number == "+1 555-123-4567"
    assert form.tel_uri == "tel:+1 555-123-4567"
    assert form.analysis.country_suggestion == "United States"
    assert form.analysis.security_note is None


@pytest.mark.asyncio
async def test_submit_with_empty_formatted_falls_back_to_input():
    form = DialQRForm(_stub_analyzer(PhoneAnalysis(isValid=False, formatted="")))
    form.edit("0800 FLOWERS")

    await form.submit()

    assert form.generated_number == "0800 FLOWERS"
    assert form.tel_uri == "tel:0800 FLOWERS"


@pytest.mark.asyncio
async def test_submit_with_unavailable_service_uses_fallback():
    form = DialQRForm(GeminiPhoneAnalyzer(api_key=None))
    form.edit("12345")

    await form.submit()

    view = form.view()
    assert view.generated_number == "12345"
    assert view.tel_uri == "tel:12345"
    assert view.analysis.country_suggestion == "Unknown"
    assert view.analysis.security_note is None


@pytest.mark.asyncio
async def test_second_submit_while_in_flight_is_refused():
    nested: dict[str, object] = {}

    class _ReentrantAnalyzer:
        def __init__(self) -> None:
            self.calls = 0

        async def analyze(self, number: str) -> PhoneAnalysis:
            self.calls += 1
            nested["state"] = form.state
            nested["second_submit"] = await form.submit()
            return PhoneAnalysis(isValid=True, formatted=number)

    analyzer = _ReentrantAnalyzer()
    form = DialQRForm(analyzer)
    form.edit("555 0100")

    await form.submit()

    assert analyzer.calls == 1
    assert nested["state"] == FormState.SUBMITTING
    assert nested["second_submit"] is False
    assert form.state == FormState.RESULT
    assert form.is_analyzing is False


@pytest.mark.asyncio
async def test_edit_is_ignored_once_result_exists():
    form = DialQRForm(_stub_analyzer(US_ANALYSIS))
    form.edit("+1 555 123 4567")
    await form.submit()

    form.edit("999")

    assert form.phone_number == "+1 555 123 4567"
    assert form.generated_number == "+1 555-123-4567"


@pytest.mark.asyncio
async def test_reset_clears_result():
    form = DialQRForm(_stub_analyzer(US_ANALYSIS))
    form.edit("+1 555 123 4567")
    await form.submit()

    form.reset()

    view = form.view()
    assert view.state == FormState.EMPTY
    assert view.phone_number == ""
    assert view.generated_number is None
    assert view.tel_uri is None
    assert view.analysis is None


@pytest.mark.asyncio
async def test_analyzer_error_clears_in_flight_flag():
    analyzer = SimpleNamespace(analyze=AsyncMock(side_effect=RuntimeError("boom")))
    form = DialQRForm(analyzer)
    form.edit("12345")

    with pytest.raises(RuntimeError):
        await form.submit()

    assert form.is_analyzing is False
    assert form.state == FormState.EDITING


@pytest.mark.asyncio
async def test_reply_without_formatted_keeps_input_and_note():
    analysis = PhoneAnalysis.from_reply({"isValid": False, "securityNote": "Premium-rate prefix"})
    form = DialQRForm(_stub_analyzer(analysis))
    form.edit("0900 123")

    await form.submit()

    view = form.view()
    assert view.generated_number == "0900 123"
    assert view.tel_uri == "tel:0900 123"
    assert view.analysis.is_valid is False
    assert view.analysis.country_suggestion is None
    assert view.analysis.security_note == "Premium-rate prefix"
