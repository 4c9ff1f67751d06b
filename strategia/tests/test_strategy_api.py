import pytest
from sqlalchemy.exc import OperationalError

from strategia.crud.organization import organization as organization_crud
from strategia.models.notification import Notification, NotificationVariant
from strategia.tests.helpers import API, notification_titles


def create_org(client, name="Acme Corp") -> dict:
    response = client.post(f"{API}/organizations/", json={"name": name, "description": "Main company"})
    assert response.status_code == 201
    return response.json()["data"]


def create_area(client, organization_id, name="Customer Care", responsibilities="Support\nOnboarding") -> dict:
    response = client.post(
        f"{API}/strategic-areas/",
        json={
            "name": name,
            "organization_id": organization_id,
            "responsibilities": responsibilities,
        },
    )
    assert response.status_code == 201
    return response.json()["data"]


def test_create_and_list_organizations(auth_client, db):
    org = create_org(auth_client)
    assert org["role"] == "admin"

    body = auth_client.get(f"{API}/organizations/").json()
    assert body["metadata"]["total"] == 1
    assert body["data"][0]["name"] == "Acme Corp"
    assert "Organization created" in notification_titles(db)


def test_organization_name_length(auth_client):
    response = auth_client.post(f"{API}/organizations/", json={"name": "A"})
    assert response.status_code == 422


def test_organization_backend_failure(auth_client, monkeypatch, db):
    def broken(*args, **kwargs):
        raise OperationalError("INSERT INTO organizations", {}, Exception("disk I/O error"))

    monkeypatch.setattr(organization_crud, "create_with_owner", broken)

    response = auth_client.post(f"{API}/organizations/", json={"name": "Acme Corp"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to create organization"}
    last = db.query(Notification).order_by(Notification.id.desc()).first()
    assert last.title == "Failed to create organization"
    assert last.variant == NotificationVariant.DESTRUCTIVE


def test_create_area_with_organization_id(auth_client):
    org = create_org(auth_client)

    area = create_area(auth_client, org["id"], responsibilities="  Support \n\n Onboarding  \n")

    assert area["organization_id"] == org["id"]
    assert area["organization_name"] == "Acme Corp"
    assert area["responsibilities"] == ["Support", "Onboarding"]


def test_create_area_resolves_organization_name(auth_client):
    org = create_org(auth_client)

    response = auth_client.post(
        f"{API}/strategic-areas/",
        json={"name": "Finance", "organization_name": "Acme Corp", "responsibilities": ["Budget"]},
    )

    assert response.status_code == 201
    assert response.json()["data"]["organization_id"] == org["id"]


def test_create_area_unknown_organization_name(auth_client):
    create_org(auth_client)

    response = auth_client.post(
        f"{API}/strategic-areas/",
        json={"name": "Finance", "organization_name": "Globex", "responsibilities": ["Budget"]},
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Organization not found"


def test_create_area_outside_memberships(auth_client):
    response = auth_client.post(
        f"{API}/strategic-areas/",
        json={"name": "Finance", "organization_id": 999, "responsibilities": ["Budget"]},
    )
    assert response.status_code == 403


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Finance", "organization_id": 1, "responsibilities": "   \n  "},
        {"name": "F", "organization_id": 1, "responsibilities": "Budget"},
        {"name": "Finance", "responsibilities": "Budget"},
    ],
)
def test_create_area_validation(auth_client, payload):
    create_org(auth_client)
    response = auth_client.post(f"{API}/strategic-areas/", json=payload)
    assert response.status_code == 422


def test_list_areas_by_organization(auth_client):
    first = create_org(auth_client, "Acme Corp")
    second = create_org(auth_client, "Globex")
    create_area(auth_client, first["id"], "Customer Care")
    create_area(auth_client, second["id"], "Logistics")

    scoped = auth_client.get(f"{API}/strategic-areas/", params={"organization_id": second["id"]}).json()
    everything = auth_client.get(f"{API}/strategic-areas/").json()

    assert [a["name"] for a in scoped["data"]] == ["Logistics"]
    assert everything["metadata"]["total"] == 2


def test_submit_contribution_with_area_id(auth_client, db):
    org = create_org(auth_client)
    area = create_area(auth_client, org["id"])

    response = auth_client.post(
        f"{API}/contributions/",
        json={
            "area_id": area["id"],
            "strategic_line": "Customer Success",
            "contribution": "  Faster response times  ",
            "examples": "Chatbot\n\nSelf-service portal\n",
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["contribution"] == "Faster response times"
    assert data["examples"] == ["Chatbot", "Self-service portal"]
    assert "Contribution submitted" in notification_titles(db)


def test_submit_contribution_by_area_name(auth_client):
    org = create_org(auth_client)
    area = create_area(auth_client, org["id"], "Customer Care")

    response = auth_client.post(
        f"{API}/contributions/",
        json={
            "organization_id": org["id"],
            "area": "Customer Care",
            "strategic_line": "Innovation",
            "contribution": "Pilot new channels",
        },
    )

    assert response.status_code == 201
    assert response.json()["data"]["area_id"] == area["id"]


def test_submit_contribution_unknown_area_name(auth_client):
    org = create_org(auth_client)
    create_area(auth_client, org["id"], "Customer Care")

    response = auth_client.post(
        f"{API}/contributions/",
        json={
            "organization_id": org["id"],
            "area": "Marketing",
            "strategic_line": "Innovation",
            "contribution": "Pilot new channels",
        },
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Strategic area not found"


def test_submit_contribution_invalid_line(auth_client):
    org = create_org(auth_client)
    area = create_area(auth_client, org["id"])

    response = auth_client.post(
        f"{API}/contributions/",
        json={"area_id": area["id"], "strategic_line": "World Domination", "contribution": "x"},
    )

    assert response.status_code == 422


def test_list_contributions_by_area(auth_client):
    org = create_org(auth_client)
    care = create_area(auth_client, org["id"], "Customer Care")
    ops = create_area(auth_client, org["id"], "Operations")
    for area, line in ((care, "Customer Success"), (ops, "Operational Excellence")):
        auth_client.post(
            f"{API}/contributions/",
            json={"area_id": area["id"], "strategic_line": line, "contribution": f"{line} work"},
        )

    body = auth_client.get(f"{API}/contributions/", params={"area_id": ops["id"]}).json()

    assert [c["strategic_line"] for c in body["data"]] == ["Operational Excellence"]


def test_strategic_lines(auth_client):
    body = auth_client.get(f"{API}/contributions/strategic-lines").json()
    assert body["data"] == [
        "Customer Success",
        "Operational Excellence",
        "Innovation",
        "Financial Growth",
    ]
