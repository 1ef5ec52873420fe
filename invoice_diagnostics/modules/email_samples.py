"""
Email Sample Model
Fixed email fixtures used to exercise the invoice classifiers
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List

from invoice_diagnostics.utils.logging_utils import iso_timestamp


def _now() -> str:
    return iso_timestamp(datetime.now(timezone.utc))


@dataclass(frozen=True)
class EmailMetadata:
    """
    Privacy-preserving view of an email

    Only headers, attachment types and a handful of keywords are sent to the
    model, never the body.
    """
    subject: str
    sender: str
    sender_domain: str
    date: str
    has_attachments: bool
    attachment_types: List[str] = field(default_factory=list)
    attachment_content_types: List[str] = field(default_factory=list)
    keywords_found: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the key names shown to the model"""
        return {
            "subject": self.subject,
            "sender": self.sender,
            "senderDomain": self.sender_domain,
            "date": self.date,
            "hasAttachments": self.has_attachments,
            "attachmentTypes": list(self.attachment_types),
            "attachmentContentTypes": list(self.attachment_content_types),
            "keywordsFound": list(self.keywords_found),
        }


@dataclass(frozen=True)
class EmailContent:
    """Full email content for the yes/no classifier"""
    subject: str
    body: str
    sender: str
    date: str


def invoice_metadata() -> EmailMetadata:
    return EmailMetadata(
        subject="Your Invoice #12345 from Acme Corp",
        sender="billing@acmecorp.com",
        sender_domain="acmecorp.com",
        date=_now(),
        has_attachments=True,
        attachment_types=["pdf"],
        attachment_content_types=["application/pdf"],
        keywords_found=["invoice", "#12345", "payment", "$299.99"],
    )


def non_invoice_metadata() -> EmailMetadata:
    return replace(
        invoice_metadata(),
        subject="Team meeting tomorrow",
        keywords_found=["meeting", "agenda", "tomorrow", "10am"],
    )


def spanish_invoice_metadata() -> EmailMetadata:
    return EmailMetadata(
        subject="Tu Factura #12345 de Empresa SA",
        sender="facturacion@empresasa.es",
        sender_domain="empresasa.es",
        date=_now(),
        has_attachments=True,
        attachment_types=["pdf"],
        attachment_content_types=["application/pdf"],
        keywords_found=["factura", "#12345", "pago", "€299,99"],
    )


def borderline_metadata() -> EmailMetadata:
    return EmailMetadata(
        subject="Information about your recent purchase",
        sender="info@somestore.com",
        sender_domain="somestore.com",
        date=_now(),
        has_attachments=True,
        attachment_types=["pdf"],
        attachment_content_types=["application/pdf"],
        keywords_found=["purchase", "order", "receipt", "information"],
    )


def invoice_content() -> EmailContent:
    return EmailContent(
        subject="Your Invoice #12345 from Acme Corp",
        body=(
            "Dear Customer,\n\nAttached is your invoice #12345 for your recent purchase. "
            "Please remit payment at your earliest convenience.\n\n"
            "Thank you for your business.\n\nRegards,\nAcme Corp"
        ),
        sender="billing@acmecorp.com",
        date=_now(),
    )


def non_invoice_content() -> EmailContent:
    return replace(
        invoice_content(),
        subject="Team meeting tomorrow",
        body=(
            "Hi team,\n\nJust a reminder that we have a team meeting tomorrow at 10am.\n\n"
            "Best regards,\nJohn"
        ),
    )


def spanish_invoice_content() -> EmailContent:
    return EmailContent(
        subject="Tu Factura #12345 de Empresa SA",
        body=(
            "Estimado Cliente,\n\nAdjuntamos la factura #12345 por su reciente compra. "
            "Por favor, realice el pago a la mayor brevedad posible.\n\n"
            "Gracias por su confianza.\n\nSaludos,\nEmpresa SA"
        ),
        sender="facturacion@empresasa.es",
        date=_now(),
    )
