import pytest

import cart as carts
import orders
from errors import EmptyCartError


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, order, user):
        self.calls.append((order, user))


@pytest.fixture()
def shopper(make_user):
    return make_user()


@pytest.fixture()
def filled_cart(store, make_product, shopper):
    tee = make_product(name="Classic Cotton T-Shirt", price=19.99)
    socks = make_product(name="Socks", price=5.00)
    carts.add_item(store, shopper.id, tee.id, "M", 2)
    carts.add_item(store, shopper.id, socks.id, "S", 1)
    return store.carts.get(shopper.id)


class TestCheckoutPreconditions:
    def test_missing_cart(self, store, shopper):
        with pytest.raises(EmptyCartError):
            orders.checkout(store, shopper.id, Recorder())
        assert store.orders.count() == 0

    def test_empty_cart(self, store, shopper, filled_cart):
        carts.clear_cart(store, shopper.id)
        notify = Recorder()

        with pytest.raises(EmptyCartError):
            orders.checkout(store, shopper.id, notify)

        assert store.orders.count() == 0
        assert notify.calls == []


class TestCheckout:
    def test_order_totals_and_snapshot(self, store, shopper, filled_cart):
        order = orders.checkout(store, shopper.id, Recorder())

        assert order.id is not None
        assert order.user_id == shopper.id
        assert order.status == "confirmed"
        assert order.total_amount == 44.98
        assert [(i.product_name, i.size, i.quantity, i.price) for i in order.items] == [
            ("Classic Cotton T-Shirt", "M", 2, 19.99),
            ("Socks", "S", 1, 5.00),
        ]
        assert store.orders.get(order.id) == order

    def test_uses_cart_price_not_live_price(self, store, shopper, filled_cart):
        store.database["product"].update_many({}, {"$set": {"price": 1000.0}})

        order = orders.checkout(store, shopper.id, Recorder())

        assert order.total_amount == 44.98

    def test_cart_is_emptied(self, store, shopper, filled_cart):
        orders.checkout(store, shopper.id, Recorder())

        cart = carts.get_cart(store, shopper.id)
        assert cart.items == []
        assert cart.get_total() == 0

    def test_notifies_with_contact_record(self, store, shopper, filled_cart):
        notify = Recorder()

        order = orders.checkout(store, shopper.id, notify)

        assert len(notify.calls) == 1
        sent_order, contact = notify.calls[0]
        assert sent_order == order
        assert contact.email == "alice@example.com"

    def test_notification_failure_does_not_fail_checkout(self, store, shopper, filled_cart):
        def broken(order, user):
            raise RuntimeError("SMTP down")

        order = orders.checkout(store, shopper.id, broken)

        assert store.orders.get(order.id) is not None
        assert carts.get_cart(store, shopper.id).items == []

    def test_missing_contact_record_is_tolerated(self, store, make_product):
        product = make_product(price=12.5)
        carts.add_item(store, "64b7f0c2a1b2c3d4e5f60718", product.id, "L", 2)
        notify = Recorder()

        order = orders.checkout(store, "64b7f0c2a1b2c3d4e5f60718", notify)

        assert order.total_amount == 25.0
        assert notify.calls == []

    def test_cart_clear_failure_keeps_order(self, store, shopper, filled_cart, monkeypatch):
        units = []
        original = store.unit_of_work

        def capture(operation):
            uow = original(operation)
            units.append(uow)
            return uow

        def failing_clear(user_id):
            raise RuntimeError("write failed")

        monkeypatch.setattr(store, "unit_of_work", capture)
        monkeypatch.setattr(store.carts, "clear", failing_clear)

        order = orders.checkout(store, shopper.id, Recorder())

        assert store.orders.get(order.id) is not None
        assert units[0].committed == ["order_created"]
        assert len(store.carts.get(shopper.id).items) == 2

    def test_successful_checkout_commits_both_writes(self, store, shopper, filled_cart, monkeypatch):
        units = []
        original = store.unit_of_work
        monkeypatch.setattr(store, "unit_of_work", lambda op: units.append(original(op)) or units[-1])

        orders.checkout(store, shopper.id, Recorder())

        assert units[0].operation == "checkout"
        assert units[0].committed == ["order_created", "cart_cleared"]

    def test_order_is_immutable(self, store, shopper, filled_cart):
        order = orders.checkout(store, shopper.id, Recorder())
        with pytest.raises(Exception):
            order.total_amount = 0
        with pytest.raises(Exception):
            order.items[0].quantity = 10
        with pytest.raises(AttributeError):
            order.items.append(order.items[0])
        assert len(store.orders.get(order.id).items) == 2
        assert len(order.items) == 2

    def test_sub_cent_unit_price(self, store, shopper, make_product):
        product = make_product(name="Button", price=0.125)
        carts.add_item(store, shopper.id, product.id, "S", 8)

        order = orders.checkout(store, shopper.id, Recorder())

        assert order.total_amount == 1.0
        assert order.items[0].price == 0.125
