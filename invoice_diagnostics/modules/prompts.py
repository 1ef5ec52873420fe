"""
Prompt templates for invoice classification and API key checks
"""

import json

from .email_samples import EmailContent, EmailMetadata

INVOICE_CRITERIA = """An invoice typically contains:
- A clear request for payment
- An invoice number or reference
- A specific amount to be paid
- Payment instructions or terms"""

INVOICE_SYSTEM_PROMPT = (
    "You are an assistant that analyzes emails to determine if they contain invoices or bills. "
    "Be very precise and conservative in your analysis - only respond with 'yes' if you are highly "
    "confident the email is specifically about an invoice, bill, or receipt that requires payment.\n\n"
    "Check the content in both English and Spanish languages.\n\n"
    f"{INVOICE_CRITERIA}\n\n"
    "Just mentioning words like 'invoice', 'bill', 'receipt', 'factura', 'recibo', or 'pago' is NOT "
    "enough to classify as an invoice. The email must be specifically about a payment document.\n\n"
    "Respond with 'yes' ONLY if the email is clearly about an actual invoice or bill. "
    "Otherwise, respond with 'no'."
)

KEY_CHECK_PROMPT_GEMINI = (
    "On a scale from 0.0 to 1.0, how likely is this a test? Respond with only a number."
)
KEY_CHECK_SYSTEM_PROMPT_OPENAI = (
    "You are a helpful assistant that responds with only 'yes' or 'no'."
)
KEY_CHECK_USER_PROMPT_OPENAI = "Is this a test?"


def format_metadata_prompt(metadata: EmailMetadata) -> str:
    """Confidence prompt built from metadata only"""
    return f"""
Based on these email metadata, assess the likelihood that this contains an invoice.
You don't have access to the full content for privacy reasons.

Metadata: {json.dumps(metadata.to_dict(), indent=2, ensure_ascii=False)}

{INVOICE_CRITERIA}

Just mentioning words like 'invoice', 'bill', 'receipt', etc. is NOT enough to classify as an invoice.
The email must be specifically about a payment document.

On a scale from 0.0 to 1.0, where:
- 0.0 means definitely NOT an invoice
- 1.0 means definitely IS an invoice

Provide ONLY a single number between 0.0 and 1.0 representing your confidence.
Example responses: "0.2", "0.85", "0.99"
"""


def format_content_prompt(content: EmailContent) -> str:
    """Yes/no prompt built from the full email"""
    return f"""
Please analyze this email and determine if it contains an invoice or bill.
Respond with only 'yes' or 'no'.

From: {content.sender}
Date: {content.date}
Subject: {content.subject}

{content.body}
"""
