from workfriar.models.timesheet import RejectionNote


def test_reject_then_approve_week(client, db, headers, make_user, make_project, make_timesheet):
    reviewer = make_user("Rita", "Team Lead")
    owner = make_user("Ann")
    ts = make_timesheet(owner, make_project(), status="submitted")
    payload = {"timesheetid": str(ts.id), "userid": str(owner.id)}

    resp = client.post(
        "/api/admin/manage-all-timesheet",
        json={**payload, "status": "rejected", "notes": "incomplete"},
        headers=headers(reviewer),
    )
    assert resp.status_code == 200
    assert resp.json() == {"status": True, "message": "Timesheet Status updated successfully", "data": []}
    assert db.query(RejectionNote).count() == 1

    resp = client.post(
        "/api/admin/manage-all-timesheet",
        json={**payload, "status": "approved", "notes": ""},
        headers=headers(reviewer),
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Timesheet Approved"

    db.expire_all()
    assert db.query(RejectionNote).count() == 0
    assert ts.status == "approved"


def test_reject_without_notes_is_422(client, headers, make_user, make_project, make_timesheet):
    reviewer = make_user("Rita", "Team Lead")
    owner = make_user("Ann")
    ts = make_timesheet(owner, make_project(), status="submitted")

    resp = client.post(
        "/api/admin/manage-all-timesheet",
        json={"timesheetid": str(ts.id), "userid": str(owner.id), "status": "rejected"},
        headers=headers(reviewer),
    )

    assert resp.status_code == 422
    body = resp.json()
    assert body["status"] is False
    assert "notes are required" in body["message"]


def test_manage_all_unknown_timesheet_is_404(client, headers, make_user):
    reviewer = make_user("Rita", "Team Lead")
    resp = client.post(
        "/api/admin/manage-all-timesheet",
        json={
            "timesheetid": "00000000-0000-0000-0000-000000000009",
            "userid": str(reviewer.id),
            "status": "approved",
        },
        headers=headers(reviewer),
    )
    assert resp.status_code == 404


def test_employee_cannot_decide(client, headers, make_user, make_project, make_timesheet):
    owner = make_user("Ann")
    ts = make_timesheet(owner, make_project(), status="submitted")
    resp = client.post(
        "/api/admin/managetimesheet",
        json={"timesheetid": str(ts.id), "state": "approved"},
        headers=headers(owner),
    )
    assert resp.status_code == 403


def test_manage_single_timesheet(client, headers, make_user, make_project, make_timesheet):
    reviewer = make_user("Paul", "Project Manager")
    ts = make_timesheet(make_user("Ann"), make_project(), status="submitted")

    resp = client.post(
        "/api/admin/managetimesheet",
        json={"timesheetid": str(ts.id), "state": "approved"},
        headers=headers(reviewer),
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Timesheet Status updated successfully"
    assert body["data"]["status"] == "approved"
    assert body["data"]["startDate"] == "2024-12-01"


def test_manage_single_timesheet_illegal_is_400(client, headers, make_user, make_project, make_timesheet):
    reviewer = make_user("Paul", "Project Manager")
    ts = make_timesheet(make_user("Ann"), make_project(), status="in_progress")

    resp = client.post(
        "/api/admin/managetimesheet",
        json={"timesheetid": str(ts.id), "state": "approved"},
        headers=headers(reviewer),
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "Timesheet Status not updated"


def test_approval_center_for_employee(client, headers, make_user):
    resp = client.post("/api/admin/approvalcenter", json={}, headers=headers(make_user("Ann")))
    assert resp.status_code == 400
    assert resp.json() == {"status": True, "message": "No Timesheets for Review", "data": []}


def test_approval_center_for_team_lead(client, headers, make_user, make_project):
    lead = make_user("Lena", "Team Lead")
    make_project("Apollo", lead=lead, members=[make_user("Ann")])

    resp = client.post("/api/admin/approvalcenter", json={"page": 1, "limit": 10}, headers=headers(lead))

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data[0]["project"]["project_name"] == "Apollo"
    assert data[0]["projectTeam"][0]["name"] == "Ann"


def test_member_timesheets_includes_rejection_note(client, headers, make_user, make_project, make_timesheet):
    reviewer = make_user("Rita", "Team Lead")
    owner = make_user("Ann")
    ts = make_timesheet(owner, make_project(), status="submitted")
    client.post(
        "/api/admin/manage-all-timesheet",
        json={"timesheetid": str(ts.id), "userid": str(owner.id), "status": "rejected", "notes": "fix hours"},
        headers=headers(reviewer),
    )

    resp = client.post(
        "/api/admin/member-timesheets",
        json={"userid": str(owner.id), "startDate": "2024-12-01", "endDate": "2024-12-07"},
        headers=headers(reviewer),
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["rejection_note"]["notes"] == "fix hours"
    assert data["timesheets"][0]["status"] == "rejected"


def test_reject_week_updates_every_sibling(client, db, headers, make_user, make_project, make_timesheet):
    reviewer = make_user("Rita", "Team Lead")
    owner = make_user("Ann")
    project = make_project()
    first = make_timesheet(owner, project, status="submitted")
    sibling = make_timesheet(owner, project, status="in_progress")

    resp = client.post(
        "/api/admin/manage-all-timesheet",
        json={"timesheetid": str(first.id), "userid": str(owner.id), "status": "rejected", "notes": "incomplete"},
        headers=headers(reviewer),
    )

    assert resp.status_code == 200
    db.expire_all()
    assert first.status == "rejected"
    assert sibling.status == "rejected"
