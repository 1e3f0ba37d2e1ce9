"""Role and POC scoping across the read and write endpoints."""


def user_ids(table):
    return sorted(r["user_id"] for r in table["records"])


def test_admin_sees_every_record(client, admin_headers, imported):
    table = client.get("/performance", headers=admin_headers).json()

    assert user_ids(table) == ["U001", "U002", "U003", "U004"]


def test_employee_sees_only_own_poc(client, make_employee, imported):
    headers = make_employee("Priya")

    table = client.get("/performance", headers=headers).json()

    assert user_ids(table) == ["U001", "U002"]
    assert table["pocs"] == ["Priya"]
    assert client.get("/performance/pocs", headers=headers).json() == ["Priya"]


def test_explicit_poc_overrides_name(client, make_employee, imported):
    headers = make_employee("Karan Mehta", poc="Karan")

    table = client.get("/performance", headers=headers).json()

    assert user_ids(table) == ["U003", "U004"]


def test_employee_with_unmatched_poc_sees_nothing(client, make_employee, imported):
    headers = make_employee("Rahul Nair")

    table = client.get("/performance", headers=headers).json()
    dashboard = client.get("/dashboard", headers=headers).json()

    assert table["records"] == []
    assert dashboard["active_accounts"] == 0


def test_calls_and_queries_are_scoped(client, admin_headers, make_employee, imported):
    client.post("/calls", json={"user_id": "U001", "status": "call connected"}, headers=admin_headers)
    client.post("/calls", json={"user_id": "U003", "status": "switched off"}, headers=admin_headers)
    client.post("/queries", json={"user_id": "U004", "complaint_tag": "Tracking Issue"}, headers=admin_headers)
    priya = make_employee("Priya")

    calls = client.get("/calls", headers=priya).json()
    queries = client.get("/queries", headers=priya).json()

    assert [c["user_id"] for c in calls] == ["U001"]
    assert queries == []
    assert len(client.get("/calls", headers=admin_headers).json()) == 2


def test_writes_outside_scope_are_rejected(client, make_employee, imported):
    priya = make_employee("Priya")

    call = client.post("/calls", json={"user_id": "U003", "status": "call later"}, headers=priya)
    query = client.post("/queries", json={"user_id": "U003", "complaint_tag": "Other"}, headers=priya)
    tags = client.put("/retailer-tags/U003", json={"retailers": ["Myntra"]}, headers=priya)

    for response in (call, query, tags):
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found or access denied"


def test_unknown_user_id_is_not_found_for_admin(client, admin_headers, imported):
    response = client.post("/calls", json={"user_id": "NOPE", "status": "call later"}, headers=admin_headers)

    assert response.status_code == 404


def test_employee_cannot_patch_hidden_query(client, admin_headers, make_employee, imported):
    created = client.post(
        "/queries", json={"user_id": "U003", "complaint_tag": "Other"}, headers=admin_headers
    ).json()
    priya = make_employee("Priya")

    response = client.patch(f"/queries/{created['id']}/status", json={"status": "resolved"}, headers=priya)

    assert response.status_code == 404


def test_admin_endpoints_reject_employees(client, make_employee):
    headers = make_employee("Priya")

    assert client.get("/admin/accounts", headers=headers).status_code == 403
    assert client.get("/admin/users/stats", headers=headers).status_code == 403
    assert client.post("/complaint-tags", json={"tag_name": "New"}, headers=headers).status_code == 403
