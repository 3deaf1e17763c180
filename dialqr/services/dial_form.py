from __future__ import annotations

import logging

from dialqr.contracts.dial_qr import DialQRView, FormState
from dialqr.contracts.phone_analysis import PhoneAnalysis
from dialqr.services.phone_analysis import PhoneAnalyzer
from dialqr.services.qr_rendering import build_tel_uri

logger = logging.getLogger(__name__)


class DialQRForm:
    """Transient state of one phone-number form.

    empty -> editing -> submitting -> result, and back to empty only through
    :meth:`reset`. A result cannot be edited in place.
    """

    def __init__(self, analyzer: PhoneAnalyzer) -> None:
        self._analyzer = analyzer
        self.phone_number = ""
        self.generated_number: str | None = None
        self.analysis: PhoneAnalysis | None = None
        self.is_analyzing = False

    @property
    def state(self) -> FormState:
        if self.is_analyzing:
            return FormState.SUBMITTING
        if self.generated_number is not None:
            return FormState.RESULT
        if self.phone_number:
            return FormState.EDITING
        return FormState.EMPTY

    @property
    def tel_uri(self) -> str | None:
        if self.generated_number is None:
            return None
        return build_tel_uri(self.generated_number)

    def edit(self, text: str) -> None:
        if self.state in (FormState.SUBMITTING, FormState.RESULT):
            return
        self.phone_number = text

    async def submit(self) -> bool:
        """Analyze the entered number and move to the result state.

        Returns False without calling the analyzer when the input is blank or
        a submission is already in flight.
        """
        if self.is_analyzing or not self.phone_number.strip():
            return False

        number = self.phone_number
        self.is_analyzing = True
        try:
            analysis = await self._analyzer.analyze(number)
        finally:
            self.is_analyzing = False

        self.analysis = analysis
        formatted = analysis.formatted
        self.generated_number = formatted if isinstance(formatted, str) and formatted else number
        logger.info(
            "Generated dial QR",
            extra={"is_valid": analysis.is_valid, "has_security_note": analysis.security_note is not None},
        )
        return True

    def reset(self) -> None:
        self.phone_number = ""
        self.generated_number = None
        self.analysis = None

    def view(self) -> DialQRView:
        return DialQRView(
            state=self.state,
            phone_number=self.phone_number,
            generated_number=self.generated_number,
            tel_uri=self.tel_uri,
            analysis=self.analysis,
            is_analyzing=self.is_analyzing,
        )
