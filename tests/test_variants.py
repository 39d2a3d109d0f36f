from variants import color_options, default_variant, resolve_selection, storage_options


def v(ram, storage, color, price=100, stock=5):
    return {"ram": ram, "storage": storage, "color": color, "price": price, "stock": stock, "isAvailable": True}


VARIANTS = [
    v("8GB", "128GB", "Black", stock=0),
    v("8GB", "256GB", "Black"),
    v("8GB", "256GB", "Blue"),
    v("12GB", "256GB", "Titanium"),
    v("12GB", "512GB", "Titanium"),
    v("12GB", "512GB", "White", stock=0),
]


def test_default_is_first_in_stock():
    assert default_variant(VARIANTS) == VARIANTS[1]
    assert default_variant([v("8GB", "128GB", "Black", stock=0)])["color"] == "Black"
    assert default_variant([]) is None


def test_unavailable_flag_counts_as_out_of_stock():
    variants = [dict(VARIANTS[1], isAvailable=False), VARIANTS[2]]
    assert default_variant(variants) == VARIANTS[2]


def test_options_narrow_by_level():
    assert storage_options(VARIANTS, "8GB") == ["128GB", "256GB"]
    assert storage_options(VARIANTS, "12GB") == ["256GB", "512GB"]
    assert color_options(VARIANTS, "12GB", "512GB") == ["Titanium", "White"]
    assert color_options(VARIANTS, "8GB", "512GB") == []


def test_resolve_with_no_choice():
    result = resolve_selection(VARIANTS)
    assert result["ram"] == ["8GB", "12GB"]
    assert result["storage"] == ["128GB", "256GB"]
    assert result["color"] == ["Black", "Blue"]
    assert result["selected"] == VARIANTS[1]


def test_resolve_switching_ram_drops_unavailable_storage():
    result = resolve_selection(VARIANTS, ram="12GB", storage="128GB", color="Black")
    assert result["storage"] == ["256GB", "512GB"]
    assert result["selected"] == VARIANTS[3]


def test_resolve_full_choice():
    result = resolve_selection(VARIANTS, ram="12GB", storage="512GB", color="White")
    assert result["selected"] == VARIANTS[5]


def test_resolve_empty_list():
    assert resolve_selection([]) == {"ram": [], "storage": [], "color": [], "selected": None}


def test_variant_endpoints(client, make_product, admin_headers):
    product = make_product()
    pid = product["id"]
    for ram, storage, color, stock in [
        ("8GB", "128GB", "Black", 0),
        ("8GB", "256GB", "Black", 4),
        ("8GB", "256GB", "Natural Titanium", 2),
    ]:
        res = client.post(
            "/api/variants",
            json={"productId": pid, "ram": ram, "storage": storage, "color": color, "price": 999, "stock": stock},
            headers=admin_headers,
        )
        assert res.status_code == 201

    listed = client.get(f"/api/variants/{pid}").json()
    assert len(listed) == 3
    assert listed[2]["sku"] == f"{pid[-6:]}-8GB-256GB-NATURALTITANIUM".upper()

    options = client.get(f"/api/variants/{pid}/options").json()
    assert options["storage"] == ["128GB", "256GB"]
    assert options["selected"]["storage"] == "256GB"
    assert options["selected"]["color"] == "Black"

    picked = client.get(f"/api/variants/{pid}/options", params={"color": "Natural Titanium"}).json()
    assert picked["selected"]["color"] == "Natural Titanium"

    variant_id = listed[0]["id"]
    updated = client.put(f"/api/variants/{variant_id}", json={"stock": 9}, headers=admin_headers)
    assert updated.json()["stock"] == 9
    assert client.delete(f"/api/variants/{variant_id}", headers=admin_headers).status_code == 200
    assert len(client.get(f"/api/variants/{pid}").json()) == 2


def test_variant_for_unknown_product(client, admin_headers):
    res = client.post(
        "/api/variants",
        json={"productId": "0123456789abcdef01234567", "ram": "8GB", "storage": "1TB", "color": "Red", "price": 1},
        headers=admin_headers,
    )
    assert res.status_code == 404
