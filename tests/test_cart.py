from nani_connect.cart import Cart


def test_cart_keeps_order_and_totals(notifier):
    cart = Cart(notifier)
    cart.add({"id": "1", "name": "Mug", "price": 25.0})
    cart.add({"id": "2", "name": "Soap", "price": 10.1})
    cart.add({"id": "1", "name": "Mug", "price": 25.0})

    assert [item["id"] for item in cart.items] == ["1", "2", "1"]
    assert cart.total == 60.1
    assert len(cart) == 3
    assert notifier.items[0].message == "Mug added to cart!"


def test_empty_cart():
    cart = Cart()
    assert cart.total == 0
    assert cart.items == []


def test_clear():
    cart = Cart()
    cart.add({"id": "1", "name": "Mug", "price": 25.0})
    cart.clear()
    assert len(cart) == 0
