from datetime import date
from decimal import Decimal

from app.models import House, Tenant

from conftest import add_charge, add_tenant


def D(x):
    return Decimal(str(x))


# ------------------------------
# Houses
# ------------------------------
def test_house_crud(client):
    res = client.post("/houses/", json={"name": "Cedar 12", "address": "12 Cedar St", "monthly_rent": "750.00"})
    assert res.status_code == 200
    house = res.json()

    assert client.post("/houses/", json={"name": "Cedar 12"}).status_code == 400

    updated = client.put(f"/houses/{house['house_id']}", json={"is_available": False}).json()
    assert updated["is_available"] is False
    assert D(updated["monthly_rent"]) == D("750.00")

    assert client.get("/houses/", params={"is_available": True}).json() == []

    assert client.delete(f"/houses/{house['house_id']}").status_code == 200
    assert client.get(f"/houses/{house['house_id']}").status_code == 404


def test_house_rename_collision(client):
    a = client.post("/houses/", json={"name": "A"}).json()
    client.post("/houses/", json={"name": "B"})

    assert client.put(f"/houses/{a['house_id']}", json={"name": "B"}).status_code == 400


# ------------------------------
# Charges
# ------------------------------
def test_create_and_list_charges(client, household):
    house, tenant = household
    body = {
        "tenant_id": tenant.tenant_id,
        "house_id": house.house_id,
        "charge_type": "UTILITY",
        "amount": "45.50",
        "due_date": "2024-04-01",
    }

    charge = client.post("/charges/", json=body).json()
    assert charge["status"] == "UNPAID"
    assert D(charge["amount_paid"]) == D("0")
    assert D(charge["outstanding_amount"]) == D("45.50")

    assert client.post("/charges/", json={**body, "amount": "0"}).status_code == 422
    assert client.post("/charges/", json={**body, "tenant_id": 999}).status_code == 404

    listed = client.get("/charges/", params={"status": "UNPAID"}).json()
    assert [c["charge_id"] for c in listed] == [charge["charge_id"]]
    assert client.get("/charges/", params={"status": "PAID"}).json() == []


def test_overdue_charges(client, db, household):
    house, tenant = household
    old = add_charge(db, tenant, house, "100.00", date(2024, 1, 1), paid="40.00", status="PARTIAL")
    add_charge(db, tenant, house, "100.00", date(2024, 1, 5), paid="100.00", status="PAID")
    add_charge(db, tenant, house, "100.00", date(2024, 3, 1))
    db.commit()

    rows = client.get("/charges/overdue", params={"as_on": "2024-02-01"}).json()

    assert len(rows) == 1
    assert rows[0]["charge_id"] == old.charge_id
    assert rows[0]["days_overdue"] == 31
    assert D(rows[0]["outstanding_amount"]) == D("60.00")
    assert rows[0]["tenant_name"] == "Jane Doe"


# ------------------------------
# Maintenance requests
# ------------------------------
def test_maintenance_lifecycle(client, household):
    house, tenant = household

    res = client.post("/maintenance-requests/", json={
        "tenant_id": tenant.tenant_id,
        "house_id": house.house_id,
        "title": "Leaking tap",
        "priority": "HIGH",
    })
    assert res.status_code == 201
    req = res.json()
    assert req["status"] == "PENDING"
    assert req["completed_at"] is None

    url = f"/maintenance-requests/{req['request_id']}"

    in_progress = client.put(url, json={"status": "IN_PROGRESS", "manager_notes": "Plumber booked"}).json()
    assert in_progress["manager_notes"] == "Plumber booked"
    assert [r["request_id"] for r in client.get("/maintenance-requests/pending").json()] == [req["request_id"]]

    done = client.put(url, json={"status": "COMPLETED"}).json()
    assert done["completed_at"] is not None
    assert client.get("/maintenance-requests/pending").json() == []

    assert client.delete(url).status_code == 204
    assert client.get(url).status_code == 404


def test_maintenance_filters_and_validation(client, db, household):
    house, tenant = household
    other = add_tenant(db, house, full_name="John Roe", email="john@example.com")
    db.commit()

    for who, title in [(tenant, "Broken window"), (other, "No hot water")]:
        client.post("/maintenance-requests/", json={
            "tenant_id": who.tenant_id,
            "house_id": house.house_id,
            "title": title,
        })

    mine = client.get("/maintenance-requests/", params={"tenant_id": tenant.tenant_id}).json()
    assert [r["title"] for r in mine] == ["Broken window"]

    bad = client.post("/maintenance-requests/", json={
        "tenant_id": tenant.tenant_id,
        "house_id": house.house_id,
        "title": "x",
        "priority": "WHENEVER",
    })
    assert bad.status_code == 422


def test_root(client):
    assert client.get("/").status_code == 200


# ------------------------------
# Null updates and referential integrity
# ------------------------------
def test_house_update_rejects_null_for_required_columns(client):
    house = client.post("/houses/", json={"name": "Birch 3", "monthly_rent": "600.00"}).json()
    url = f"/houses/{house['house_id']}"

    for field in ("name", "monthly_rent", "is_available"):
        assert client.put(url, json={field: None}).status_code == 422

    # address is nullable and may be cleared
    assert client.put(url, json={"address": None}).status_code == 200
    assert client.get(url).json()["name"] == "Birch 3"


def test_maintenance_update_rejects_null_title(client, household):
    house, tenant = household
    req = client.post("/maintenance-requests/", json={
        "tenant_id": tenant.tenant_id,
        "house_id": house.house_id,
        "title": "Door sticks",
    }).json()
    url = f"/maintenance-requests/{req['request_id']}"

    assert client.put(url, json={"title": None}).status_code == 422
    assert client.put(url, json={"status": None}).status_code == 422
    assert client.get(url).json()["title"] == "Door sticks"


def test_house_with_charges_cannot_be_deleted(client, db, household):
    house, tenant = household
    charge = add_charge(db, tenant, house, "100.00", date(2024, 1, 1))
    db.commit()

    assert client.delete(f"/houses/{house.house_id}").status_code == 409

    assert client.get(f"/houses/{house.house_id}").status_code == 200
    rows = client.get("/charges/overdue", params={"as_on": "2024-02-01"}).json()
    assert [r["charge_id"] for r in rows] == [charge.charge_id]


def test_deleting_empty_house_unassigns_tenants(client, db):
    house = client.post("/houses/", json={"name": "Elm 7"}).json()
    tenant = add_tenant(db, db.get(House, house["house_id"]), full_name="Sam Lee", email="sam@example.com")
    db.commit()

    assert client.delete(f"/houses/{house['house_id']}").status_code == 200

    db.expire_all()
    assert db.get(Tenant, tenant.tenant_id).house_id is None


def test_trailing_slash_collections_answer_directly(client, household):
    for url in ("/houses/", "/charges/", "/payments/", "/maintenance-requests/"):
        res = client.get(url, follow_redirects=False)
        assert res.status_code == 200, url
