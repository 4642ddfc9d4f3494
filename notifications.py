"""Order confirmation emails.

Dispatch is best-effort: ``OrderNotifier`` never raises, every failure ends
up in the log as a ``NotificationDispatchFailure``.
"""

import html
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import List, Optional
from uuid import uuid4

import structlog

import settings
from errors import NotificationDispatchFailure
from schemas import Order, User, money

logger = structlog.get_logger(__name__)

STORE_NAME = "Canvas"


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: Optional[str] = None) -> dict:
        """Send an email message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...


class SmtpEmailAdapter(EmailPort):
    def __init__(
        self,
        host: Optional[str] = None,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: str = "",
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "SmtpEmailAdapter":
        return cls(
            host=settings.EMAIL_HOST,
            port=settings.EMAIL_PORT,
            username=settings.EMAIL_USER,
            password=settings.EMAIL_PASS,
            sender=settings.EMAIL_FROM,
            use_tls=settings.EMAIL_USE_TLS,
        )

    def send(self, to: str, subject: str, body: str, html_body: Optional[str] = None) -> dict:
        if not self.host:
            return {"message_id": None, "status": "failed", "error": "EMAIL_HOST is not configured"}

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message_id = f"<{uuid4().hex}@{self.host}>"
        message["Message-ID"] = message_id
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            return {"message_id": None, "status": "failed", "error": str(e)}
        return {"message_id": message_id, "status": "sent"}


class FakeEmailAdapter(EmailPort):
    """Email adapter that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_emails: List[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, to: str, subject: str, body: str, html_body: Optional[str] = None) -> dict:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {"message_id": message_id, "to": to, "subject": subject, "body": body, "html_body": html_body}
        )
        return {"message_id": message_id, "status": "sent"}


class OrderConfirmationTemplate:
    @staticmethod
    def render(order: Order, user: User) -> dict:
        placed = order.created_at.strftime("%B %d, %Y") if order.created_at else ""
        lines = [
            f"  {item.product_name} ({item.size}) x{item.quantity} @ ${money(item.price)}"
            f" = ${money(item.line_total())}"
            for item in order.items
        ]
        rows = "".join(
            f"<tr><td>{html.escape(item.product_name)}</td><td>{item.size}</td><td>{item.quantity}</td>"
            f"<td>${money(item.price)}</td><td>${money(item.line_total())}</td></tr>"
            for item in order.items
        )
        total = money(order.total_amount)
        return {
            "subject": f"Order Confirmation - {STORE_NAME} #{order.id}",
            "body": (
                f"Hi {user.name},\n\n"
                f"Your order #{order.id} has been placed on {placed}.\n"
                f"Status: {order.status.capitalize()}\n\n"
                + "\n".join(lines)
                + f"\n\nTotal Amount: ${total}\n\n"
                f"Thank you for shopping with {STORE_NAME}!"
            ),
            "html_body": (
                f"<p>Hi <strong>{html.escape(user.name)}</strong>,</p>"
                f"<p><strong>Order ID:</strong> {order.id}<br>"
                f"<strong>Order Date:</strong> {placed}<br>"
                f"<strong>Status:</strong> {order.status.capitalize()}</p>"
                "<table><thead><tr><th>Product</th><th>Size</th><th>Qty</th><th>Price</th><th>Total</th></tr></thead>"
                f"<tbody>{rows}<tr><td colspan=\"4\">Total Amount:</td><td>${total}</td></tr></tbody></table>"
                f"<p>Thank you for shopping with <strong>{STORE_NAME}</strong>!</p>"
            ),
        }


class OrderNotifier:
    def __init__(self, email: EmailPort):
        self.email = email

    def send_order_confirmation(self, order: Order, user: User) -> bool:
        try:
            message = OrderConfirmationTemplate.render(order, user)
            result = self.email.send(user.email, message["subject"], message["body"], message["html_body"])
            if result.get("status") != "sent":
                raise NotificationDispatchFailure(
                    "Order confirmation email not sent", error=result.get("error", "Unknown dispatch error")
                )
        except Exception as e:
            logger.error(
                "Order confirmation dispatch failed",
                order_id=order.id,
                user_id=order.user_id,
                error=getattr(e, "error", None) or str(e),
            )
            return False

        logger.info("Order confirmation sent", order_id=order.id, to=user.email, message_id=result.get("message_id"))
        return True
