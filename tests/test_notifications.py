from datetime import datetime, timezone

import pytest

from notifications import FakeEmailAdapter, OrderConfirmationTemplate, OrderNotifier, SmtpEmailAdapter
from schemas import Order, OrderItem, User


@pytest.fixture()
def order():
    return Order(
        id="665f1c0e9b1e8a0001a1b2c3",
        user_id="u1",
        items=[
            OrderItem(product_id="p1", product_name="Classic Cotton T-Shirt", size="M", quantity=2, price=19.99),
            OrderItem(product_id="p2", product_name="Socks", size="S", quantity=1, price=5.0),
        ],
        total_amount=44.98,
        created_at=datetime(2024, 6, 4, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture()
def customer():
    return User(id="u1", name="Alice <Admin>", email="alice@example.com", password_hash="x")


class TestOrderConfirmationTemplate:
    def test_render(self, order, customer):
        message = OrderConfirmationTemplate.render(order, customer)

        assert message["subject"] == "Order Confirmation - Canvas #665f1c0e9b1e8a0001a1b2c3"
        assert "Classic Cotton T-Shirt (M) x2 @ $19.99 = $39.98" in message["body"]
        assert "Total Amount: $44.98" in message["body"]
        assert "Status: Confirmed" in message["body"]
        assert "June 04, 2024" in message["body"]

    def test_html_escapes_user_content(self, order, customer):
        html_body = OrderConfirmationTemplate.render(order, customer)["html_body"]
        assert "Alice &lt;Admin&gt;" in html_body
        assert "<td>$44.98</td>" in html_body


class TestOrderNotifier:
    def test_sends_to_customer(self, order, customer):
        email = FakeEmailAdapter()

        assert OrderNotifier(email).send_order_confirmation(order, customer) is True

        assert len(email.sent_emails) == 1
        sent = email.sent_emails[0]
        assert sent["to"] == "alice@example.com"
        assert sent["subject"].endswith(order.id)
        assert sent["html_body"]

    def test_failed_delivery_is_reported_not_raised(self, order, customer):
        email = FakeEmailAdapter()
        email.configure(should_succeed=False, failure_reason="mailbox full")

        assert OrderNotifier(email).send_order_confirmation(order, customer) is False
        assert email.sent_emails == []

    def test_adapter_exception_is_swallowed(self, order, customer):
        class Exploding(FakeEmailAdapter):
            def send(self, *args, **kwargs):
                raise ConnectionError("refused")

        assert OrderNotifier(Exploding()).send_order_confirmation(order, customer) is False


class TestSmtpEmailAdapter:
    def test_unconfigured_host_fails_without_connecting(self):
        result = SmtpEmailAdapter(host=None).send("a@example.com", "s", "b")
        assert result["status"] == "failed"
        assert "EMAIL_HOST" in result["error"]

    def test_sends_via_smtp(self, monkeypatch):
        sent = []

        class FakeSMTP:
            def __init__(self, host, port, timeout):
                self.host, self.port = host, port

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def starttls(self):
                sent.append("starttls")

            def login(self, user, password):
                sent.append(("login", user, password))

            def send_message(self, message):
                sent.append(message)

        monkeypatch.setattr("notifications.smtplib.SMTP", FakeSMTP)
        adapter = SmtpEmailAdapter(host="smtp.example.com", username="bot", password="pw", sender="shop@example.com")

        result = adapter.send("alice@example.com", "Hello", "plain", "<p>html</p>")

        assert result["status"] == "sent"
        assert sent[0] == "starttls"
        assert sent[1] == ("login", "bot", "pw")
        assert sent[2]["To"] == "alice@example.com"
        assert sent[2]["Subject"] == "Hello"

    def test_smtp_error_is_a_failed_result(self, monkeypatch):
        def refuse(*args, **kwargs):
            raise OSError("connection refused")

        monkeypatch.setattr("notifications.smtplib.SMTP", refuse)

        result = SmtpEmailAdapter(host="smtp.example.com").send("a@example.com", "s", "b")

        assert result == {"message_id": None, "status": "failed", "error": "connection refused"}
