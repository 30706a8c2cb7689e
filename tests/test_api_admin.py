import pytest

from workfriar.models.user import Permission


@pytest.fixture
def admin(make_user):
    return make_user("Ada", "Admin")


# ---------- roles ----------

def test_create_and_list_roles(client, headers, admin):
    resp = client.post(
        "/api/admin/role/create",
        json={
            "role": "Designer",
            "department": "Creative",
            "permissions": [{"category": "Timesheets", "actions": ["view", "edit"]}],
        },
        headers=headers(admin),
    )
    assert resp.status_code == 201
    assert resp.json()["message"] == "Role created successfully"

    roles = client.get("/api/admin/role/all", headers=headers(admin)).json()["data"]
    designer = next(r for r in roles if r["role"] == "Designer")
    assert designer["permissions"][0]["actions"] == ["edit", "view"]
    assert designer["user_count"] == 0


def test_duplicate_role_name_is_rejected(client, headers, admin):
    resp = client.post(
        "/api/admin/role/create",
        json={"role": "admin", "department": "Management"},
        headers=headers(admin),
    )
    assert resp.status_code == 422
    assert resp.json()["message"] == "Role already exists"


def test_map_users_and_refuse_delete(client, headers, admin, make_user, make_role):
    role = make_role("Designer")
    ann = make_user("Ann")

    resp = client.post(
        "/api/admin/role/map",
        json={"roleId": str(role.id), "userIds": [str(ann.id)]},
        headers=headers(admin),
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["user_count"] == 1

    resp = client.post("/api/admin/role/delete", json={"roleId": str(role.id)}, headers=headers(admin))
    assert resp.status_code == 422


def test_update_role_replaces_permissions(client, db, headers, admin):
    created = client.post(
        "/api/admin/role/create",
        json={"role": "Designer", "department": "Creative", "permissions": [{"category": "Projects", "actions": ["view"]}]},
        headers=headers(admin),
    ).json()["data"]

    resp = client.post(
        "/api/admin/role/update",
        json={"roleId": created["id"], "permissions": [{"category": "Timesheets", "actions": ["view"]}]},
        headers=headers(admin),
    )

    assert resp.status_code == 200
    assert [p["category"] for p in resp.json()["data"]["permissions"]] == ["Timesheets"]
    assert db.query(Permission).filter(Permission.category == "Projects").count() == 0


def test_roles_require_admin(client, headers, make_user):
    resp = client.get("/api/admin/role/all", headers=headers(make_user("Ann")))
    assert resp.status_code == 403


# ---------- categories ----------

def test_add_category_and_case_insensitive_duplicate(client, headers, admin):
    resp = client.post("/api/admin/category/add", json={"category": "Research", "time_entry": "Open Entry"}, headers=headers(admin))
    assert resp.status_code == 201

    resp = client.post("/api/admin/category/add", json={"category": "research", "time_entry": "Open Entry"}, headers=headers(admin))
    assert resp.status_code == 422
    assert resp.json()["message"] == "Category already exists"


def test_category_length_rules(client, headers, admin):
    resp = client.post("/api/admin/category/add", json={"category": "ab", "time_entry": "Open Entry"}, headers=headers(admin))
    assert resp.status_code == 422


def test_update_category_time_entry(client, headers, admin, category):
    resp = client.post(
        "/api/admin/category/update",
        json={"id": str(category.id), "timeentry": "Close Entry"},
        headers=headers(admin),
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["time_entry"] == "Close Entry"


def test_update_category_needs_a_change(client, headers, admin, category):
    resp = client.post("/api/admin/category/update", json={"id": str(category.id)}, headers=headers(admin))
    assert resp.status_code == 422


# ---------- subscriptions ----------

def _subscription(**overrides):
    payload = {
        "subscription_name": "Figma",
        "provider": "Figma Inc",
        "license_count": "10",
        "cost": "120",
        "billing_cycle": "Monthly",
        "currency": "USD",
        "payment_method": "Card",
        "status": "Active",
        "type": "Common",
    }
    payload.update(overrides)
    return payload


def test_subscription_crud(client, headers, admin):
    created = client.post("/api/admin/subscription/add", json=_subscription(), headers=headers(admin))
    assert created.status_code == 201
    sub_id = created.json()["data"]["id"]

    listed = client.post("/api/admin/subscription/list", json={}, headers=headers(admin)).json()["data"]
    assert listed["pagination"]["total"] == 1

    updated = client.put(f"/api/admin/subscription/{sub_id}", json=_subscription(cost="150"), headers=headers(admin))
    assert updated.json()["data"]["cost"] == "150"

    assert client.delete(f"/api/admin/subscription/{sub_id}", headers=headers(admin)).status_code == 200
    assert client.get(f"/api/admin/subscription/{sub_id}", headers=headers(admin)).status_code == 404


def test_subscription_collects_every_field_error(client, headers, admin):
    resp = client.post(
        "/api/admin/subscription/add",
        json={"type": "Project Specific", "billing_cycle": "Weekly"},
        headers=headers(admin),
    )

    assert resp.status_code == 422
    errors = resp.json()["data"]
    assert errors["subscription_name"] == "Please enter the subscription name."
    assert errors["project_name"] == "Project name is required for Project Specific subscriptions"
    assert "billing_cycle" in errors


def test_project_specific_subscription_needs_existing_project(client, headers, admin, make_project):
    missing = client.post(
        "/api/admin/subscription/add",
        json=_subscription(type="Project Specific", project_name="00000000-0000-0000-0000-000000000001"),
        headers=headers(admin),
    )
    assert missing.json()["data"]["project_name"] == "Selected project does not exist"

    project = make_project()
    ok = client.post(
        "/api/admin/subscription/add",
        json=_subscription(type="Project Specific", project_name=str(project.id)),
        headers=headers(admin),
    )
    assert ok.status_code == 201
    assert ok.json()["data"]["project_id"] == str(project.id)


def test_duplicate_subscription_name(client, headers, admin):
    client.post("/api/admin/subscription/add", json=_subscription(), headers=headers(admin))
    resp = client.post("/api/admin/subscription/add", json=_subscription(), headers=headers(admin))
    assert resp.json()["data"]["subscription_name"] == "A subscription with this name already exists."


# ---------- project teams ----------

def test_project_team_lifecycle(client, headers, admin, make_user, make_project):
    project = make_project()
    ann, bob = make_user("Ann"), make_user("Bob")

    resp = client.post(
        "/api/admin/project-team/add",
        json={"project": str(project.id), "team_members": [{"userid": str(ann.id), "dates": [{"start_date": "2024-01-01"}]}]},
        headers=headers(admin),
    )
    assert resp.status_code == 201

    dup = client.post(
        "/api/admin/project-team/add",
        json={"project": str(project.id), "team_members": [{"userid": str(bob.id)}]},
        headers=headers(admin),
    )
    assert dup.status_code == 422

    team_id = resp.json()["data"]["id"]
    resp = client.post(
        "/api/admin/project-team/update",
        json={"id": team_id, "team_members": [{"userid": str(bob.id), "dates": [{"start_date": "2024-02-01"}]}]},
        headers=headers(admin),
    )
    assert [m["name"] for m in resp.json()["data"]["team_members"]] == ["Bob"]

    fetched = client.get(f"/api/admin/project-team/{project.id}", headers=headers(admin))
    assert fetched.json()["data"]["project"]["name"] == "Apollo"


def test_project_team_unknown_user(client, headers, admin, make_project):
    resp = client.post(
        "/api/admin/project-team/add",
        json={"project": str(make_project().id), "team_members": [{"userid": "00000000-0000-0000-0000-000000000002"}]},
        headers=headers(admin),
    )
    assert resp.status_code == 404
