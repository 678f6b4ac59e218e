from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (register tables)
from app.models import Charge, House, Tenant
from app.utils.database import Base, enable_sqlite_foreign_keys, get_db
from main import app as fastapi_app

ADMIN_HEADERS = {
    "X-User-Roles": "Admin",
    "X-User-Claims": "Permission:DeleteUser",
}


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    # no context manager: skip startup so the real database is never touched
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def file_sessionmaker(tmp_path):
    """Two sessions here really are two connections, like two web workers."""
    eng = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(bind=eng)
    yield sessionmaker(bind=eng, autocommit=False, autoflush=False)
    eng.dispose()


# ------------------------------
# Factories
# ------------------------------
def add_house(db, name="Maple Court 1", rent="1000.00"):
    house = House(name=name, address="1 Maple Court", monthly_rent=Decimal(rent))
    db.add(house)
    db.flush()
    return house


def add_tenant(db, house, full_name="Jane Doe", email="jane@example.com"):
    tenant = Tenant(full_name=full_name, email=email, house_id=house.house_id)
    db.add(tenant)
    db.flush()
    return tenant


def add_charge(db, tenant, house, amount, due, paid="0.00", status="UNPAID"):
    charge = Charge(
        tenant_id=tenant.tenant_id,
        house_id=house.house_id,
        charge_type="RENT",
        amount=Decimal(amount),
        amount_paid=Decimal(paid),
        due_date=due,
        status=status,
    )
    db.add(charge)
    db.flush()
    return charge


@pytest.fixture
def household(db):
    """One house with one tenant, committed."""
    house = add_house(db)
    tenant = add_tenant(db, house)
    db.commit()
    return house, tenant


@pytest.fixture
def jan_feb_rent(db, household):
    house, tenant = household
    jan = add_charge(db, tenant, house, "100.00", date(2024, 1, 1))
    feb = add_charge(db, tenant, house, "100.00", date(2024, 2, 1))
    db.commit()
    return jan, feb
