"""
Gemini Client Tests
Tests the v1 -> v1beta endpoint fallback, confidence extraction and key redaction
"""

import unittest
from unittest.mock import Mock, patch

import requests

from invoice_diagnostics.modules.api_errors import GeminiAPIError
from invoice_diagnostics.modules.email_samples import invoice_metadata
from invoice_diagnostics.modules.gemini_client import GeminiClient
from invoice_diagnostics.utils.config import ConfigurationError, GeminiConfig

API_KEY = "AIzaSyTESTKEY1234567890"
BASE_URL = "https://generativelanguage.googleapis.com"


def make_config(**overrides):
    values = dict(
        api_key=API_KEY,
        model="gemini-2.0-flash",
        temperature=0.05,
        max_output_tokens=10,
        api_versions=("v1", "v1beta"),
        base_url=BASE_URL,
    )
    values.update(overrides)
    return GeminiConfig(**values)


def ok_response(text, status_code=200):
    response = Mock()
    response.ok = True
    response.status_code = status_code
    response.json.return_value = {
        "candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]
    }
    return response


def error_response(status_code, body):
    response = Mock()
    response.ok = False
    response.status_code = status_code
    response.reason = "Not Found" if status_code == 404 else "Error"
    response.json.return_value = body
    return response


def called_urls(mock_post):
    return [c.args[0] for c in mock_post.call_args_list]


class TestEndpointFallback(unittest.TestCase):
    """The v1 endpoint is tried first; v1beta only after v1 failed"""

    def setUp(self):
        self.client = GeminiClient(make_config(), timeout=5)

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_v1_success_does_not_call_v1beta(self, mock_post):
        mock_post.return_value = ok_response("0.92")

        result = self.client.generate("prompt")

        self.assertEqual(result.api_version, "v1")
        self.assertEqual(result.text, "0.92")
        self.assertEqual(mock_post.call_count, 1)
        self.assertEqual(
            called_urls(mock_post),
            [f"{BASE_URL}/v1/models/gemini-2.0-flash:generateContent"],
        )

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_v1_http_error_falls_back_to_v1beta(self, mock_post):
        mock_post.side_effect = [
            error_response(404, {"error": {"message": "model not found for API version v1"}}),
            ok_response("0.1"),
        ]

        result = self.client.generate("prompt")

        self.assertEqual(result.api_version, "v1beta")
        self.assertEqual(
            called_urls(mock_post),
            [
                f"{BASE_URL}/v1/models/gemini-2.0-flash:generateContent",
                f"{BASE_URL}/v1beta/models/gemini-2.0-flash:generateContent",
            ],
        )

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_v1_transport_error_falls_back(self, mock_post):
        mock_post.side_effect = [requests.exceptions.ConnectionError("boom"), ok_response("0.5")]

        result = self.client.generate("prompt")

        self.assertEqual(result.api_version, "v1beta")
        self.assertEqual(mock_post.call_count, 2)

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_v1_malformed_body_falls_back(self, mock_post):
        malformed = Mock(ok=True, status_code=200)
        malformed.json.return_value = {"candidates": []}
        mock_post.side_effect = [malformed, ok_response("0.4")]

        result = self.client.generate("prompt")

        self.assertEqual(result.api_version, "v1beta")

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_both_versions_fail_raises_last_error(self, mock_post):
        mock_post.side_effect = [
            error_response(404, {"error": "v1 failure"}),
            error_response(400, {"error": "v1beta failure"}),
        ]

        with self.assertRaises(GeminiAPIError) as ctx:
            self.client.generate("prompt")

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.details, {"error": "v1beta failure"})
        self.assertEqual(mock_post.call_count, 2)

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_configured_order_is_respected(self, mock_post):
        client = GeminiClient(make_config(api_versions=("v1beta", "v1")))
        mock_post.return_value = ok_response("0.3")

        result = client.generate("prompt")

        self.assertEqual(result.api_version, "v1beta")
        self.assertEqual(mock_post.call_count, 1)


class TestRequestShape(unittest.TestCase):

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_payload_and_key(self, mock_post):
        mock_post.return_value = ok_response("0.9")
        client = GeminiClient(make_config(), timeout=7)

        client.generate("Is this an invoice?")

        kwargs = mock_post.call_args.kwargs
        self.assertEqual(kwargs["params"], {"key": API_KEY})
        self.assertEqual(kwargs["timeout"], 7)
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")
        self.assertEqual(
            kwargs["json"],
            {
                "contents": [{"parts": [{"text": "Is this an invoice?"}]}],
                "generationConfig": {"temperature": 0.05, "maxOutputTokens": 10},
            },
        )

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_missing_key_makes_no_request(self, mock_post):
        client = GeminiClient(make_config(api_key=None))

        with self.assertRaises(ConfigurationError):
            client.generate("prompt")

        mock_post.assert_not_called()


class TestClassifyMetadata(unittest.TestCase):

    def setUp(self):
        self.client = GeminiClient(make_config())

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_confidence_extracted(self, mock_post):
        mock_post.return_value = ok_response("0.95")

        result = self.client.classify_metadata(invoice_metadata())

        self.assertTrue(result.success)
        self.assertAlmostEqual(result.confidence, 0.95)
        self.assertEqual(result.api_version, "v1")
        self.assertIn("candidates", result.raw_response)

        prompt = mock_post.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
        self.assertIn('"senderDomain": "acmecorp.com"', prompt)

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_out_of_range_confidence_is_discarded(self, mock_post):
        mock_post.return_value = ok_response("85")

        with self.assertLogs("GeminiClient", level="WARNING") as logs:
            result = self.client.classify_prompt("prompt")

        self.assertTrue(result.success)
        self.assertIsNone(result.confidence)
        self.assertTrue(any("Invalid confidence score: 85" in line for line in logs.output))

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_text_without_number(self, mock_post):
        mock_post.return_value = ok_response("I cannot tell")

        with self.assertLogs("GeminiClient", level="WARNING") as logs:
            result = self.client.classify_prompt("prompt")

        self.assertTrue(result.success)
        self.assertIsNone(result.confidence)
        self.assertTrue(any("Could not extract confidence score" in line for line in logs.output))

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_failure_becomes_result(self, mock_post):
        mock_post.side_effect = [
            error_response(403, {"error": {"status": "PERMISSION_DENIED"}}),
            error_response(403, {"error": {"status": "PERMISSION_DENIED"}}),
        ]

        result = self.client.classify_prompt("prompt")

        self.assertFalse(result.success)
        self.assertIn("403", result.error)
        self.assertEqual(result.details, {"error": {"status": "PERMISSION_DENIED"}})
        self.assertEqual(
            result.to_dict(),
            {"success": False, "error": result.error, "details": result.details},
        )

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_error_message_does_not_leak_key(self, mock_post):
        url = f"{BASE_URL}/v1beta/models/gemini-2.0-flash:generateContent?key={API_KEY}"
        mock_post.side_effect = requests.exceptions.ConnectionError(
            f"Max retries exceeded with url: {url}"
        )

        with self.assertLogs("GeminiClient", level="WARNING") as logs:
            result = self.client.classify_prompt("prompt")

        self.assertFalse(result.success)
        self.assertNotIn(API_KEY, result.error)
        self.assertIn("key=[REDACTED]", result.error)
        self.assertFalse(any(API_KEY in line for line in logs.output))


class TestListModels(unittest.TestCase):

    @patch('invoice_diagnostics.modules.gemini_client.requests.get')
    def test_models_parsed(self, mock_get):
        response = Mock(ok=True, status_code=200)
        response.json.return_value = {
            "models": [
                {
                    "name": "models/gemini-2.0-flash",
                    "description": "Fast model",
                    "supportedGenerationMethods": ["generateContent", "countTokens"],
                },
                {"name": "models/embedding-001"},
            ]
        }
        mock_get.return_value = response

        models = GeminiClient(make_config()).list_models()

        self.assertEqual(mock_get.call_args.args[0], f"{BASE_URL}/v1/models")
        self.assertEqual(mock_get.call_args.kwargs["params"], {"key": API_KEY})
        self.assertEqual([m.name for m in models], ["models/gemini-2.0-flash", "models/embedding-001"])
        self.assertEqual(models[0].supported_generation_methods, ["generateContent", "countTokens"])
        self.assertEqual(models[1].description, "")

    @patch('invoice_diagnostics.modules.gemini_client.requests.get')
    def test_error_status_raises(self, mock_get):
        mock_get.return_value = error_response(400, {"error": {"message": "API key not valid"}})

        with self.assertRaises(GeminiAPIError) as ctx:
            GeminiClient(make_config()).list_models("v1beta")

        self.assertEqual(ctx.exception.status_code, 400)


class TestVerifyKey(unittest.TestCase):

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_valid_key_reports_version(self, mock_post):
        mock_post.side_effect = [error_response(404, {}), ok_response("0.9")]

        result = GeminiClient(make_config()).verify_key()

        self.assertTrue(result.valid)
        self.assertEqual(result.api_version, "v1beta")
        self.assertEqual(result.response_text, "0.9")
        payload = mock_post.call_args.kwargs["json"]
        self.assertEqual(payload["generationConfig"], {"temperature": 0.05, "maxOutputTokens": 10})

    @patch('invoice_diagnostics.modules.gemini_client.requests.post')
    def test_invalid_key(self, mock_post):
        mock_post.return_value = error_response(400, {"error": {"message": "API key not valid"}})

        result = GeminiClient(make_config()).verify_key()

        self.assertFalse(result.valid)
        self.assertEqual(result.details, {"error": {"message": "API key not valid"}})


if __name__ == '__main__':
    unittest.main()
