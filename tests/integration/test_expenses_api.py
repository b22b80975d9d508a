# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for expense, report and dashboard endpoints."""

import io
import uuid
from decimal import Decimal

import pytest
from openpyxl import load_workbook

TEAM_LUNCH = {
    "title": "Team Lunch",
    "amount": "187.50",
    "date": "2023-10-20",
    "category": "meals",
    "description": "Team lunch after project completion",
}


def create_expense(client, **overrides) -> dict:
    """Helper to create an expense as the logged-in principal."""
    response = client.post("/api/v1/expenses", json={**TEAM_LUNCH, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


class TestExpenseCreate:
    """Tests for POST /api/v1/expenses."""

    def test_requires_authentication(self, client):
        assert client.post("/api/v1/expenses", json=TEAM_LUNCH).status_code == 401

    def test_create_draft(self, client, login_as, employee):
        login_as(employee)

        data = create_expense(client)

        assert data["status"] == "draft"
        assert data["submitted_by_name"] == "John Employee"
        assert Decimal(str(data["amount"])) == Decimal("187.50")
        assert data["reviewed_by"] is None

    @pytest.mark.parametrize("amount", ["0", "-12.00"])
    def test_rejects_non_positive_amount(self, client, login_as, employee, amount):
        login_as(employee)

        response = client.post("/api/v1/expenses", json={**TEAM_LUNCH, "amount": amount})

        assert response.status_code == 422
        assert response.json()["code"] == "validation_failed"

    def test_rejects_unknown_category(self, client, login_as, employee):
        login_as(employee)

        response = client.post(
            "/api/v1/expenses", json={**TEAM_LUNCH, "category": "gifts"}
        )

        assert response.status_code == 422
        assert response.json()["code"] == "validation_failed"

    def test_rejects_blank_title(self, client, login_as, employee):
        login_as(employee)

        response = client.post("/api/v1/expenses", json={**TEAM_LUNCH, "title": "  "})

        assert response.status_code == 422
        assert response.json()["code"] == "validation_failed"


class TestExpenseVisibility:
    """Tests for GET /api/v1/expenses and GET /api/v1/expenses/{id}."""

    def test_employee_sees_own_only(
        self, client, login_as, employee, other_employee, manager
    ):
        login_as(other_employee)
        foreign = create_expense(client, title="Taxi")
        login_as(employee)
        own = create_expense(client)

        listed = client.get("/api/v1/expenses").json()
        assert [e["id"] for e in listed] == [own["id"]]

        response = client.get(f"/api/v1/expenses/{foreign['id']}")
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

        login_as(manager)
        listed = client.get("/api/v1/expenses").json()
        assert {e["id"] for e in listed} == {own["id"], foreign["id"]}
        assert client.get(f"/api/v1/expenses/{foreign['id']}").status_code == 200

    def test_list_filters(self, client, login_as, employee):
        login_as(employee)
        create_expense(client)
        create_expense(
            client,
            title="Flight",
            category="travel",
            amount="420.00",
            description="Flight to the conference",
        )

        travel = client.get("/api/v1/expenses", params={"category": "travel"}).json()
        assert [e["title"] for e in travel] == ["Flight"]

        found = client.get("/api/v1/expenses", params={"search": "LUNCH"}).json()
        assert [e["title"] for e in found] == ["Team Lunch"]

        in_range = client.get(
            "/api/v1/expenses",
            params={
                "date_range": "custom",
                "start_date": "2023-10-20",
                "end_date": "2023-10-20",
            },
        ).json()
        assert len(in_range) == 2

        submitted = client.get(
            "/api/v1/expenses", params={"expense_status": "submitted"}
        ).json()
        assert submitted == []

    def test_unknown_expense(self, client, login_as, manager):
        login_as(manager)

        response = client.get(f"/api/v1/expenses/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"


class TestExpenseEditing:
    """Tests for PUT and DELETE on /api/v1/expenses/{id}."""

    def test_edit_draft(self, client, login_as, employee):
        login_as(employee)
        expense = create_expense(client)

        response = client.put(
            f"/api/v1/expenses/{expense['id']}",
            json={"title": "Client Lunch", "amount": "200.00"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Client Lunch"
        assert Decimal(str(data["amount"])) == Decimal("200.00")
        assert data["category"] == "meals"
        assert data["status"] == "draft"

    def test_edit_submitted_conflicts(self, client, login_as, employee):
        login_as(employee)
        expense = create_expense(client)
        client.post(f"/api/v1/expenses/{expense['id']}/submit")

        response = client.put(
            f"/api/v1/expenses/{expense['id']}", json={"title": "Too late"}
        )

        assert response.status_code == 409
        assert response.json()["code"] == "invalid_state"

    def test_manager_cannot_edit(self, client, login_as, employee, manager):
        login_as(employee)
        expense = create_expense(client)
        login_as(manager)

        response = client.put(
            f"/api/v1/expenses/{expense['id']}", json={"amount": "1.00"}
        )

        assert response.status_code == 403

    def test_delete_draft(self, client, login_as, employee):
        login_as(employee)
        expense = create_expense(client)

        response = client.delete(f"/api/v1/expenses/{expense['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/v1/expenses/{expense['id']}").status_code == 404

    def test_delete_submitted_conflicts(self, client, login_as, employee):
        login_as(employee)
        expense = create_expense(client)
        client.post(f"/api/v1/expenses/{expense['id']}/submit")

        response = client.delete(f"/api/v1/expenses/{expense['id']}")

        assert response.status_code == 409
        assert client.get(f"/api/v1/expenses/{expense['id']}").status_code == 200

    def test_delete_foreign_expense_is_not_found(
        self, client, login_as, employee, other_employee
    ):
        login_as(other_employee)
        expense = create_expense(client)
        login_as(employee)

        response = client.delete(f"/api/v1/expenses/{expense['id']}")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"


class TestReviewWorkflow:
    """Tests for submit, approve and reject actions."""

    def test_employee_cannot_approve(self, client, login_as, employee):
        login_as(employee)
        expense = create_expense(client)
        client.post(f"/api/v1/expenses/{expense['id']}/submit")

        response = client.post(f"/api/v1/expenses/{expense['id']}/approve")

        assert response.status_code == 403

    def test_approve_draft_conflicts(self, client, login_as, employee, manager):
        login_as(employee)
        expense = create_expense(client)
        login_as(manager)

        response = client.post(f"/api/v1/expenses/{expense['id']}/approve")

        assert response.status_code == 409

    def test_approve_with_comments(self, client, login_as, employee, admin):
        login_as(employee)
        expense = create_expense(client)
        client.post(f"/api/v1/expenses/{expense['id']}/submit")
        login_as(admin)

        response = client.post(
            f"/api/v1/expenses/{expense['id']}/approve",
            json={"comments": "Approved for Q4"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "approved"
        assert data["reviewed_by_name"] == "David Admin"
        assert data["comments"] == "Approved for Q4"

        again = client.post(
            f"/api/v1/expenses/{expense['id']}/reject",
            json={"comments": "Changed my mind"},
        )
        assert again.status_code == 409

    @pytest.mark.parametrize("body", [{}, {"comments": ""}, {"comments": "   "}])
    def test_reject_requires_comments(
        self, client, login_as, employee, manager, body
    ):
        login_as(employee)
        expense = create_expense(client)
        client.post(f"/api/v1/expenses/{expense['id']}/submit")
        login_as(manager)

        response = client.post(f"/api/v1/expenses/{expense['id']}/reject", json=body)

        assert response.status_code == 422
        assert response.json()["code"] == "validation_failed"
        current = client.get(f"/api/v1/expenses/{expense['id']}").json()
        assert current["status"] == "submitted"
        assert current["reviewed_by"] is None

    def test_team_lunch_round_trip(self, client, login_as, employee, manager):
        login_as(employee)
        expense = create_expense(client)
        expense_id = expense["id"]
        assert expense["status"] == "draft"

        submitted = client.post(f"/api/v1/expenses/{expense_id}/submit").json()
        assert submitted["status"] == "submitted"
        assert submitted["reviewed_by"] is None

        login_as(manager)
        awaiting = client.get("/api/v1/dashboard/summary").json()["awaiting_review"]
        assert [e["id"] for e in awaiting] == [expense_id]

        rejected = client.post(
            f"/api/v1/expenses/{expense_id}/reject",
            json={"comments": "Use per-diem instead"},
        )
        assert rejected.status_code == 200
        assert rejected.json()["status"] == "rejected"
        assert rejected.json()["reviewed_by_name"] == "Sarah Manager"

        login_as(employee)
        edited = client.put(
            f"/api/v1/expenses/{expense_id}", json={"amount": "150.00"}
        )
        assert edited.json()["status"] == "rejected"

        resubmitted = client.post(f"/api/v1/expenses/{expense_id}/submit").json()
        assert resubmitted["status"] == "submitted"
        assert resubmitted["comments"] == "Use per-diem instead"

        login_as(manager)
        approved = client.post(f"/api/v1/expenses/{expense_id}/approve").json()
        assert approved["status"] == "approved"
        assert approved["comments"] is None


class TestReportsAndDashboard:
    """Tests for GET /api/v1/reports/summary and /api/v1/dashboard/summary."""

    def test_report_requires_reviewer(self, client, login_as, employee):
        login_as(employee)
        assert client.get("/api/v1/reports/summary").status_code == 403

    def test_report_totals(self, client, login_as, employee, other_employee, manager):
        login_as(employee)
        create_expense(client)
        login_as(other_employee)
        create_expense(
            client,
            title="Flight",
            category="travel",
            amount="420.00",
            description="Flight to the conference",
        )
        login_as(manager)

        report = client.get("/api/v1/reports/summary").json()
        summary = report["summary"]
        assert summary["count"] == 2
        assert summary["total_amount"] == pytest.approx(607.50)
        assert summary["unique_submitters"] == 2
        assert summary["by_category"]["travel"] == {"count": 1, "amount": 420.0}
        assert summary["by_status"]["draft"]["count"] == 2
        assert len(report["expenses"]) == 2

        meals = client.get(
            "/api/v1/reports/summary", params={"category": "meals"}
        ).json()
        assert meals["summary"]["count"] == 1
        assert meals["filters"]["category"] == "meals"

    def test_dashboard_for_employee(self, client, login_as, employee, other_employee):
        login_as(other_employee)
        create_expense(client, title="Not mine")
        login_as(employee)
        for day in range(1, 7):
            create_expense(client, title=f"Expense {day}")

        dashboard = client.get("/api/v1/dashboard/summary").json()

        assert dashboard["summary"]["count"] == 6
        assert len(dashboard["recent_expenses"]) == 5
        assert dashboard["recent_expenses"][0]["title"] == "Expense 6"
        assert dashboard["awaiting_review"] == []

    def test_export_requires_reviewer(self, client, login_as, employee):
        login_as(employee)

        response = client.get("/api/v1/reports/export")

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"

    def test_export_filtered_workbook(
        self, client, login_as, employee, other_employee, manager
    ):
        login_as(employee)
        create_expense(client)
        create_expense(
            client,
            title="Hotel",
            category="accommodation",
            amount="320.50",
            description="Hotel near the venue",
        )
        login_as(other_employee)
        create_expense(client, title="Client dinner", amount="95.00")
        login_as(manager)

        response = client.get("/api/v1/reports/export", params={"category": "meals"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "attachment" in response.headers["content-disposition"]
        assert "expense_report_" in response.headers["content-disposition"]

        ws = load_workbook(io.BytesIO(response.content)).active
        rows = list(ws.iter_rows(min_row=4, values_only=True))
        assert list(rows[0]) == [
            "Title",
            "Amount",
            "Date",
            "Category",
            "Status",
            "Submitted By",
        ]
        data_rows = rows[1:-1]
        assert sorted(row[0] for row in data_rows) == ["Client dinner", "Team Lunch"]
        assert {row[3] for row in data_rows} == {"meals"}
        assert {row[4] for row in data_rows} == {"draft"}
        assert {row[5] for row in data_rows} == {"John Employee", "Emily Johnson"}
        assert rows[-1][0] == "Total:"
        assert rows[-1][1] == pytest.approx(282.50)
