def create(client, headers, files=None, **fields):
    data = {"name": "Ceramic Mug", "description": "Handmade", "price": "25.00", **fields}
    return client.post("/api/products", data=data, files=files, headers=headers)


def test_seller_creates_product_without_image(client, seller):
    user, headers = seller
    response = create(client, headers)

    assert response.status_code == 200
    product = response.json()["product"]
    assert product["seller_id"] == user.id
    assert product["image_url"] is None
    assert product["price"] == 25.0


def test_seller_creates_product_with_image(client, seller, supabase):
    user, headers = seller
    response = create(client, headers, files={"image": ("mug.jpg", b"jpeg-bytes", "image/jpeg")})

    product = response.json()["product"]
    key = f"{user.id}/{product['id']}.jpg"
    assert product["image_url"] == f"https://test.supabase.co/storage/v1/object/public/product-images/{key}"
    assert supabase.storage.objects["product-images"][key] == b"jpeg-bytes"


def test_failed_upload_reports_and_saves_nothing(client, seller, supabase):
    supabase.storage.fail_upload = True
    response = create(client, seller[1], files={"image": ("mug.jpg", b"jpeg-bytes", "image/jpeg")})

    body = response.json()
    assert body["product"] is None
    assert any(n["level"] == "error" for n in body["notifications"])
    assert supabase.tables["products"] == []


def test_buyer_cannot_create(client, buyer):
    assert create(client, buyer[1]).status_code == 403


def test_create_validates_fields(client, seller):
    assert create(client, seller[1], price="-1").status_code == 422
    assert create(client, seller[1], name="").status_code == 422


def test_buyer_lists_and_filters_all_products(client, buyer, supabase):
    supabase.add_product("s1", "Vintage Camera", "Film camera", 120)
    supabase.add_product("s2", "Leather Wallet", "Durable CAMERA strap not included", 50)
    supabase.add_product("s2", "Soap", "Lavender", 10)

    everything = client.get("/api/products", headers=buyer[1]).json()["products"]
    assert len(everything) == 3

    found = client.get("/api/products", params={"q": "camera"}, headers=buyer[1]).json()["products"]
    assert {p["name"] for p in found} == {"Vintage Camera", "Leather Wallet"}


def test_listing_requires_login(client):
    assert client.get("/api/products").status_code == 401


def test_listing_failure_is_soft(client, buyer, supabase):
    supabase.failing_tables.add("products")
    body = client.get("/api/products", headers=buyer[1]).json()
    assert body["products"] == []
    assert body["notifications"][0]["level"] == "error"


def test_seller_sees_only_own_products(client, seller, supabase):
    user, headers = seller
    supabase.add_product(user.id, "Mine")
    supabase.add_product("someone-else", "Theirs")

    products = client.get("/api/products/mine", headers=headers).json()["products"]
    assert [p["name"] for p in products] == ["Mine"]


def test_update_own_product(client, seller, supabase):
    user, headers = seller
    row = supabase.add_product(user.id, "Mug", price=25, image_url="https://cdn.example.com/mug.png")

    response = client.put(f"/api/products/{row['id']}", data={"price": "30"}, headers=headers)

    product = response.json()["product"]
    assert product["price"] == 30
    assert product["image_url"] == "https://cdn.example.com/mug.png"


def test_update_clear_image(client, seller, supabase):
    user, headers = seller
    created = create(client, headers, files={"image": ("mug.png", b"png", "image/png")}).json()["product"]

    response = client.put(f"/api/products/{created['id']}", data={"clear_image": "true"}, headers=headers)

    assert response.json()["product"]["image_url"] is None
    assert supabase.storage.objects["product-images"] == {}


def test_cannot_touch_someone_elses_product(client, seller, supabase):
    row = supabase.add_product("someone-else", "Theirs")

    assert client.put(f"/api/products/{row['id']}", data={"price": "1"}, headers=seller[1]).status_code == 403
    assert client.delete(f"/api/products/{row['id']}", headers=seller[1]).status_code == 403
    assert supabase.tables["products"][0]["price"] == 1.0


def test_unknown_product(client, seller):
    assert client.delete("/api/products/missing", headers=seller[1]).status_code == 404


def test_delete_product_and_image(client, seller, supabase):
    created = create(client, seller[1], files={"image": ("mug.png", b"png", "image/png")}).json()["product"]
    supabase.storage.fail_remove = True

    response = client.delete(f"/api/products/{created['id']}", headers=seller[1])

    assert response.json()["deleted"] is True
    assert supabase.tables["products"] == []


def test_role_must_match_exactly_to_sell(client, supabase):
    _, token = supabase.add_user("loose@example.com", role="Seller")
    assert create(client, {"Authorization": f"Bearer {token}"}).status_code == 403
