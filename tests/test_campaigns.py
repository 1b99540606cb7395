from decimal import Decimal


def test_create_and_list_campaigns(api_client, auth_state, make_brand):
    user, brand = make_brand()
    auth_state.login(user)

    first = api_client.post(
        "/campaigns",
        json={"name": "Spring Launch", "objective": "Awareness", "budget": "2500.50"},
    )
    assert first.status_code == 201
    body = first.json()
    assert body["status"] == "draft"
    assert body["brand_id"] == brand.id
    assert Decimal(body["budget"]) == Decimal("2500.50")

    second = api_client.post(
        "/campaigns",
        json={"name": "Fall Push", "objective": "Sales", "budget": 900, "status": "active"},
    )
    assert second.status_code == 201

    listed = api_client.get("/campaigns").json()
    assert [item["name"] for item in listed] == ["Fall Push", "Spring Launch"]

    active = api_client.get("/campaigns", params={"status": "active"}).json()
    assert [item["name"] for item in active] == ["Fall Push"]


def test_campaign_budget_must_be_positive(api_client, auth_state, make_brand):
    user, _ = make_brand()
    auth_state.login(user)

    resp = api_client.post("/campaigns", json={"name": "Zero", "objective": "Awareness", "budget": 0})
    assert resp.status_code == 422
    missing = api_client.post("/campaigns", json={"name": "No objective", "budget": 100})
    assert missing.status_code == 422


def test_creators_cannot_manage_campaigns(api_client, auth_state, make_creator):
    user, _ = make_creator()
    auth_state.login(user)

    assert api_client.get("/campaigns").status_code == 403
    resp = api_client.post("/campaigns", json={"name": "Nope", "objective": "Awareness", "budget": 10})
    assert resp.status_code == 403


def test_campaigns_are_owner_only(api_client, auth_state, make_brand):
    owner, _ = make_brand("Owner Co")
    other, _ = make_brand("Other Co")

    auth_state.login(owner)
    campaign = api_client.post(
        "/campaigns",
        json={"name": "Private", "objective": "Awareness", "budget": 100},
    ).json()

    auth_state.login(other)
    assert api_client.get(f"/campaigns/{campaign['id']}").status_code == 404
    assert api_client.patch(f"/campaigns/{campaign['id']}", json={"name": "Hijack"}).status_code == 404
    assert api_client.get("/campaigns").json() == []


def test_update_campaign(api_client, auth_state, make_brand):
    user, _ = make_brand()
    auth_state.login(user)
    campaign = api_client.post(
        "/campaigns",
        json={"name": "Draft Idea", "objective": "Awareness", "budget": 100},
    ).json()

    resp = api_client.patch(
        f"/campaigns/{campaign['id']}",
        json={"status": "active", "budget": "1500", "description": "Now funded"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "active"
    assert Decimal(body["budget"]) == Decimal("1500")
    assert body["description"] == "Now funded"
    assert body["name"] == "Draft Idea"

    assert api_client.get(f"/campaigns/{campaign['id']}").json()["status"] == "active"
