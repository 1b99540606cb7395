def _usernames(resp):
    return [item["username"] for item in resp.json()]


def test_search_filters_combine(api_client, make_creator):
    make_creator(username="ana_fit", niche="Fitness", followers_count=120000, location="New York, NY")
    make_creator(username="ben_fit", niche="Fitness", followers_count=30000, location="Austin, TX")
    make_creator(username="cy_food", niche="Food", followers_count=95000, location="New York, NY")

    assert _usernames(api_client.get("/creators", params={"niche": "fitness"})) == ["ana_fit", "ben_fit"]
    assert _usernames(api_client.get("/creators", params={"minFollowers": 95000})) == ["ana_fit", "cy_food"]
    assert _usernames(api_client.get("/creators", params={"maxFollowers": 95000})) == ["cy_food", "ben_fit"]
    assert _usernames(api_client.get("/creators", params={"location": "new york"})) == ["ana_fit", "cy_food"]
    combined = api_client.get(
        "/creators",
        params={"niche": "Fitness", "minFollowers": 50000, "location": "York"},
    )
    assert _usernames(combined) == ["ana_fit"]


def test_search_is_public_and_skips_inactive(api_client, make_creator):
    make_creator(username="active_one")
    make_creator(username="gone_quiet", is_active=False)

    resp = api_client.get("/creators")
    assert resp.status_code == 200
    assert _usernames(resp) == ["active_one"]


def test_get_creator(api_client, make_creator):
    _, creator = make_creator(username="dee_travels", tags=["travel", "photo"])

    resp = api_client.get(f"/creators/{creator.id}")
    assert resp.status_code == 200
    assert resp.json()["tags"] == ["travel", "photo"]

    assert api_client.get("/creators/9999").status_code == 404


def test_update_own_creator_profile(api_client, auth_state, make_creator):
    user, creator = make_creator(username="eli_runs")
    auth_state.login(user)

    resp = api_client.patch("/creators/me", json={"bio": "Trail runner", "followers_count": 61000})
    assert resp.status_code == 200
    assert resp.json()["bio"] == "Trail runner"
    assert resp.json()["followers_count"] == 61000

    me = api_client.get("/creators/me")
    assert me.json()["id"] == creator.id


def test_brand_has_no_creator_profile(api_client, auth_state, make_brand):
    user, _ = make_brand()
    auth_state.login(user)
    assert api_client.get("/creators/me").status_code == 403


def test_update_own_brand_profile(api_client, auth_state, make_brand):
    user, brand = make_brand("Peak Gear")
    auth_state.login(user)

    resp = api_client.patch("/brands/me", json={"website": "https://peak.test"})
    assert resp.status_code == 200
    assert resp.json()["website"] == "https://peak.test"
    assert api_client.get("/brands/me").json()["id"] == brand.id
