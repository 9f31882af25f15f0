import pytest

from app.client.state import AuthState, Cart, ClientState

FAN = {"id": 1, "name": "Breeze Ceiling Fan", "images": ["fan.jpg"]}
WHITE = {"id": 10, "price": 40.0, "color": {"name": "White", "code": "#FFFFFF"}, "size": "1200mm"}
BROWN = {"id": 11, "price": 45.0, "color": {"name": "Brown", "code": "#8B4513"}, "size": "1200mm"}


def test_cart_merges_same_variant():
    cart = Cart()
    cart.add(FAN, WHITE)
    cart.add(FAN, WHITE, 2)
    cart.add(FAN, BROWN)

    assert len(cart.items) == 2
    assert cart.total_items == 4
    assert cart.total_price == 165.0
    assert cart.items[0].image == "fan.jpg"


def test_cart_rejects_non_positive_quantity():
    with pytest.raises(ValueError):
        Cart().add(FAN, WHITE, 0)


def test_cart_update_quantity_to_zero_removes():
    cart = Cart()
    cart.add(FAN, WHITE, 3)

    cart.update_quantity(FAN["id"], WHITE["id"], 1)
    assert cart.total_items == 1

    cart.update_quantity(FAN["id"], WHITE["id"], 0)
    assert cart.items == []


def test_cart_to_order_items():
    cart = Cart()
    cart.add(FAN, WHITE, 2)

    assert cart.to_order_items() == [{"product": 1, "variant": 10, "quantity": 2}]


def test_auth_state():
    assert not AuthState().is_authenticated
    assert AuthState().role is None

    auth = AuthState(token="jwt", user={"id": 1, "role": "rider"})
    assert auth.is_authenticated
    assert auth.role == "rider"


def test_sign_out_clears_identity_and_cart():
    state = ClientState()
    state.sign_in("jwt", {"id": 1, "role": "customer"})
    state.cart.add(FAN, WHITE)

    state.sign_out()

    assert not state.auth.is_authenticated
    assert state.cart.items == []


def test_save_and_load(tmp_path):
    path = tmp_path / "state" / "client.json"
    state = ClientState()
    state.sign_in("jwt", {"id": 1, "role": "customer"})
    state.cart.add(FAN, BROWN, 2)

    state.save(path)
    loaded = ClientState.load(path)

    assert loaded.auth.token == "jwt"
    assert loaded.cart.total_items == 2
    assert loaded.cart.items[0].color == {"name": "Brown", "code": "#8B4513"}


def test_load_missing_file(tmp_path):
    assert ClientState.load(tmp_path / "nope.json") == ClientState()


def test_load_corrupt_file(tmp_path):
    path = tmp_path / "client.json"
    path.write_text('{"auth": "broken"', encoding="utf-8")

    state = ClientState.load(path)

    assert not state.auth.is_authenticated
    assert state.cart.items == []


def test_load_non_utf8_file(tmp_path):
    path = tmp_path / "client.json"
    path.write_bytes(b"\xff\xfe{garbage")

    assert ClientState.load(path) == ClientState()


def test_load_directory_instead_of_file(tmp_path):
    path = tmp_path / "client.json"
    path.mkdir()

    assert ClientState.load(path) == ClientState()
