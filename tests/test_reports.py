from datetime import date

from workfriar.services import reports


def _seed(make_user, make_project, make_timesheet):
    ann, bob = make_user("Ann"), make_user("Bob")
    apollo, zeus = make_project("Apollo"), make_project("Zeus")
    make_timesheet(ann, apollo, status="approved", hours=(("2024-12-02", "8"), ("2024-12-03", "2")))
    make_timesheet(ann, zeus, status="submitted", hours=(("2024-12-04", "4"),))
    make_timesheet(bob, apollo, status="rejected", hours=(("2024-12-02", "5.5"),))
    # ends outside the window
    make_timesheet(bob, apollo, start=date(2024, 12, 8), end=date(2024, 12, 14), hours=(("2024-12-09", "9"),))
    return ann, bob, apollo, zeus


WINDOW = (date(2024, 12, 1), date(2024, 12, 7))


def test_project_summary(db, make_user, make_project, make_timesheet):
    _, _, apollo, zeus = _seed(make_user, make_project, make_timesheet)

    rows = {r.projectName: r for r in reports.project_summary_report(db, *WINDOW)}

    assert rows["Apollo"].loggedHours == 15.5
    assert rows["Apollo"].approvedHours == 10.0
    assert rows["Apollo"].categories == ["Development"]
    assert rows["Zeus"].loggedHours == 4.0
    assert rows["Zeus"].approvedHours == 0.0


def test_project_summary_filters_by_project(db, make_user, make_project, make_timesheet):
    _, _, apollo, _ = _seed(make_user, make_project, make_timesheet)

    rows = reports.project_summary_report(db, *WINDOW, project_ids=[apollo.id])

    assert [r.project_id for r in rows] == [apollo.id]


def test_project_detail_has_category_breakdown(db, make_user, make_project, make_timesheet):
    _seed(make_user, make_project, make_timesheet)

    rows = {r.projectName: r for r in reports.project_detail_report(db, *WINDOW)}

    assert rows["Apollo"].categoryHours == {"Development": 15.5}


def test_employee_summary_sorted_by_name(db, make_user, make_project, make_timesheet):
    ann, bob, _, _ = _seed(make_user, make_project, make_timesheet)

    rows = reports.employee_summary_report(db, *WINDOW)

    assert [r.userName for r in rows] == ["Ann", "Bob"]
    assert rows[0].totalLoggedHours == 14.0
    assert rows[0].totalApprovedHours == 10.0
    assert rows[0].projects[0].dailyHours is None
    assert rows[1].totalLoggedHours == 5.5


def test_employee_detail_includes_daily_hours(db, make_user, make_project, make_timesheet):
    ann, _, apollo, _ = _seed(make_user, make_project, make_timesheet)

    rows = reports.employee_detail_report(db, *WINDOW, user_ids=[ann.id], project_ids=[apollo.id])

    assert len(rows) == 1
    assert rows[0].projects[0].dailyHours == {"2024-12-02": 8.0, "2024-12-03": 2.0}


def test_monthly_snapshot_counts_statuses(db, make_user, make_project, make_timesheet):
    ann, _, _, _ = _seed(make_user, make_project, make_timesheet)

    rows = reports.monthly_snapshot(db, ann.id, *WINDOW)

    assert {r.status: r.count for r in rows} == {"approved": 1, "submitted": 1}


def test_time_summary_per_member(db, make_user, make_project, make_timesheet):
    _, _, apollo, _ = _seed(make_user, make_project, make_timesheet)

    rows = reports.time_summary(db, *WINDOW, apollo.id)

    assert [(r.team_member, r.total_time, r.approved_time) for r in rows] == [
        ("Ann", 10.0, 10.0),
        ("Bob", 5.5, 0.0),
    ]


def test_past_due_lists_unsubmitted_weeks(db, make_user, make_project, make_timesheet):
    ann = make_user("Ann")
    project = make_project()
    stale = make_timesheet(ann, project, status="in_progress")
    make_timesheet(ann, project, start=date(2024, 11, 24), end=date(2024, 11, 30), status="approved")

    rows = reports.past_due(db, ann.id, week_start=date(2024, 12, 8))

    assert [r.id for r in rows] == [stale.id]
    assert rows[0].total_hours == 15.5


def test_due_timesheets_excludes_approved(db, make_user, make_project, make_timesheet):
    ann, _, _, _ = _seed(make_user, make_project, make_timesheet)

    rows = reports.due_timesheets(db, ann.id, *WINDOW)

    assert [r.status for r in rows] == ["submitted"]


def test_report_route_requires_reviewer(client, headers, make_user):
    resp = client.post(
        "/api/admin/reports/project-summary",
        json={"startDate": "2024-12-01", "endDate": "2024-12-07"},
        headers=headers(make_user("Ann")),
    )
    assert resp.status_code == 403


def test_report_route(client, headers, make_user, make_project, make_timesheet):
    _seed(make_user, make_project, make_timesheet)
    admin = make_user("Ada", "Admin")

    resp = client.post(
        "/api/admin/reports/employee-summary",
        json={"startDate": "2024-12-01", "endDate": "2024-12-07"},
        headers=headers(admin),
    )

    assert resp.status_code == 200
    assert [r["userName"] for r in resp.json()["data"]] == ["Ann", "Bob"]


def test_time_summary_route_no_data(client, headers, make_user, make_project):
    admin = make_user("Ada", "Admin")
    project = make_project()
    resp = client.post(
        "/api/admin/timesummary",
        json={"startDate": "2024-12-01", "endDate": "2024-12-07", "projectId": str(project.id)},
        headers=headers(admin),
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "No Data"
