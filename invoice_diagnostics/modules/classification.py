"""
Classification results and pass/fail evaluation of diagnostic runs
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

# Thresholds for the confidence-based checks
POSITIVE_THRESHOLD = 0.7
NEGATIVE_THRESHOLD = 0.3

EXPECT_INVOICE = "invoice"
EXPECT_NOT_INVOICE = "not_invoice"
EXPECT_INFORMATIONAL = "informational"


@dataclass
class ClassificationResult:
    """Outcome of a single classification call"""
    success: bool
    confidence: Optional[float] = None
    is_invoice: Optional[bool] = None
    raw_response: Optional[Dict[str, Any]] = None
    api_version: Optional[str] = None
    error: Optional[str] = None
    details: Optional[Any] = None

    @classmethod
    def failure(cls, error: str, details: Any = None) -> "ClassificationResult":
        return cls(success=False, error=error, details=details)

    def to_dict(self) -> Dict[str, Any]:
        """Render the result the way it is written to the run log"""
        if not self.success:
            return {"success": False, "error": self.error, "details": self.details}

        data: Dict[str, Any] = {"success": True}
        if self.is_invoice is not None:
            data["isInvoice"] = self.is_invoice
        else:
            data["confidence"] = self.confidence
        data["rawResponse"] = self.raw_response
        if self.api_version:
            data["apiVersion"] = self.api_version
        return data


@dataclass
class KeyCheckResult:
    """Outcome of an API key verification"""
    provider: str
    valid: bool
    response_text: Optional[str] = None
    api_version: Optional[str] = None
    error: Optional[str] = None
    details: Optional[Any] = None


@dataclass
class ExpectationCase:
    """A named sample and what the classifier is expected to say about it"""
    label: str
    description: str
    expectation: str
    prompt_factory: Callable[[], str]


@dataclass
class Verdict:
    label: str
    status: str
    message: str

    @property
    def passed(self) -> bool:
        return self.status in ("PASS", "INFO")


def _format_score(confidence: float) -> str:
    """Render a score the way the model wrote it: "1" rather than "1.0"."""
    if float(confidence).is_integer():
        return str(int(confidence))
    return str(confidence)


def _evaluate_confidence(expectation: str, confidence: Optional[float]) -> Verdict:
    if expectation == EXPECT_INFORMATIONAL:
        if confidence is None:
            return Verdict("", "INFO", "No valid confidence score")
        return Verdict("", "INFO", f"Score: {_format_score(confidence)}")

    if confidence is None:
        return Verdict("", "FAIL", "FAIL ❌ (no valid confidence score)")

    if expectation == EXPECT_INVOICE:
        if confidence >= POSITIVE_THRESHOLD:
            return Verdict("", "PASS", f"PASS ✅ ({_format_score(confidence)})")
        return Verdict("", "FAIL", f"FAIL ❌ ({_format_score(confidence)} - too low)")

    if confidence <= NEGATIVE_THRESHOLD:
        return Verdict("", "PASS", f"PASS ✅ ({_format_score(confidence)})")
    return Verdict("", "FAIL", f"FAIL ❌ ({_format_score(confidence)} - too high)")


def _evaluate_boolean(expectation: str, is_invoice: bool) -> Verdict:
    if expectation == EXPECT_INFORMATIONAL:
        return Verdict("", "INFO", f"Is invoice: {is_invoice}")

    expected = expectation == EXPECT_INVOICE
    if is_invoice == expected:
        return Verdict("", "PASS", "PASS ✅")
    return Verdict("", "FAIL", "FAIL ❌")


def evaluate(case: ExpectationCase, result: ClassificationResult) -> Verdict:
    """
    Compare a classification result against the case expectation.

    Failed API calls are reported as ``ERROR`` (``INFO`` for informational
    cases); boolean results are judged on ``is_invoice`` and confidence
    results on the positive/negative thresholds.
    """
    if not result.success:
        if case.expectation == EXPECT_INFORMATIONAL:
            verdict = Verdict("", "INFO", "ERROR")
        else:
            verdict = Verdict("", "ERROR", "ERROR ❌")
    elif result.is_invoice is not None:
        verdict = _evaluate_boolean(case.expectation, result.is_invoice)
    else:
        verdict = _evaluate_confidence(case.expectation, result.confidence)

    verdict.label = case.label
    return verdict
