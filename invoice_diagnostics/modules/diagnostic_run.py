"""
Diagnostic Run Harness
Runs fixed sample cases through a classifier one after another and logs a
pass/fail summary
"""

import json
import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from . import email_samples
from .classification import (
    EXPECT_INFORMATIONAL,
    EXPECT_INVOICE,
    EXPECT_NOT_INVOICE,
    ClassificationResult,
    ExpectationCase,
    Verdict,
    evaluate,
)
from .prompts import format_content_prompt, format_metadata_prompt

Classifier = Callable[[str], ClassificationResult]


def gemini_cases() -> List[ExpectationCase]:
    """Metadata cases scored by confidence"""
    return [
        ExpectationCase(
            "Positive example (should be invoice)",
            "positive example (invoice metadata)",
            EXPECT_INVOICE,
            lambda: format_metadata_prompt(email_samples.invoice_metadata()),
        ),
        ExpectationCase(
            "Negative example (should not be invoice)",
            "negative example (not an invoice)",
            EXPECT_NOT_INVOICE,
            lambda: format_metadata_prompt(email_samples.non_invoice_metadata()),
        ),
        ExpectationCase(
            "Spanish positive example (should be invoice)",
            "Spanish positive example (invoice)",
            EXPECT_INVOICE,
            lambda: format_metadata_prompt(email_samples.spanish_invoice_metadata()),
        ),
        ExpectationCase(
            "Borderline example (informational)",
            "borderline example",
            EXPECT_INFORMATIONAL,
            lambda: format_metadata_prompt(email_samples.borderline_metadata()),
        ),
    ]


def openai_cases() -> List[ExpectationCase]:
    """Full-content cases answered with yes/no"""
    return [
        ExpectationCase(
            "English positive example (should be invoice)",
            "positive example (invoice)",
            EXPECT_INVOICE,
            lambda: format_content_prompt(email_samples.invoice_content()),
        ),
        ExpectationCase(
            "Negative example (should not be invoice)",
            "negative example (not an invoice)",
            EXPECT_NOT_INVOICE,
            lambda: format_content_prompt(email_samples.non_invoice_content()),
        ),
        ExpectationCase(
            "Spanish positive example (should be invoice)",
            "Spanish positive example (invoice)",
            EXPECT_INVOICE,
            lambda: format_content_prompt(email_samples.spanish_invoice_content()),
        ),
    ]


class DiagnosticRun:
    """Sequential run of sample cases against one classifier"""

    def __init__(
        self,
        name: str,
        classify: Classifier,
        cases: List[ExpectationCase],
        log_path: Optional[Path] = None,
    ):
        self.name = name
        self.classify = classify
        self.cases = cases
        self.log_path = log_path
        self.logger = logging.getLogger("DiagnosticRun")

    def run_case(self, case: ExpectationCase) -> ClassificationResult:
        self.logger.info("Testing with %s...", case.description)
        prompt = case.prompt_factory()
        self.logger.info("Formatted prompt:\n%s", prompt)
        result = self.classify(prompt)
        self.logger.info("Test result: %s", json.dumps(result.to_dict(), indent=2, default=str))
        return result

    def run(self) -> List[Verdict]:
        """
        Run every case in order, then log the summary

        Each classification call completes before the next case starts.
        """
        outcomes: List[Tuple[ExpectationCase, ClassificationResult]] = []
        for case in self.cases:
            outcomes.append((case, self.run_case(case)))

        self.logger.info("Test Summary:")
        verdicts = []
        for case, result in outcomes:
            verdict = evaluate(case, result)
            verdicts.append(verdict)
            self.logger.info("%s: %s", verdict.label, verdict.message)

        if self.log_path is not None:
            self.logger.info("Test completed. See logs in: %s", self.log_path)
        return verdicts
