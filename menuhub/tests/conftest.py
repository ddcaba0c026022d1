"""
Test fixtures - temporary SQLite database, document store, seeded companies
and buildings, and an httpx client bound to the FastAPI app
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from menuhub.database import build_engine, build_session_factory, create_tables
from menuhub.main import app
from menuhub.api.deps import get_store
from menuhub.models import (
    Building,
    Company,
    MealPlan,
    MealPlanStructureAssignment,
    MenuItem,
    Service,
    StructureAssignment,
    SubMealPlan,
    SubService,
)
from menuhub.services.catalog import CatalogReader
from menuhub.services.document_store import DocumentStore


def service_week(*days: str) -> dict:
    """S1 with sub-service SS1 on the given weekdays"""
    return {day: [{"serviceId": "S1", "subServices": ["SS1"]}] for day in days}


def meal_plan_week(*days: str, meal_plans=("M1",)) -> dict:
    """S1 / SS1 entitled to the given meal plans, each with SM1, on the given weekdays"""
    return {
        day: [{
            "serviceId": "S1",
            "subServices": [{
                "subServiceId": "SS1",
                "mealPlans": [
                    {"mealPlanId": mp, "subMealPlans": [{"subMealPlanId": "SM1"}]}
                    for mp in meal_plans
                ],
            }],
        }]
        for day in days
    }


@pytest.fixture()
def weeks():
    """Builders for structure JSON, shared by the test modules"""
    return {"service": service_week, "meal_plan": meal_plan_week}


@pytest_asyncio.fixture()
async def engine(tmp_path):
    """Fresh SQLite database file for each test"""
    engine = build_engine(f"sqlite:///{tmp_path / 'menuhub_test.db'}")

    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture()
async def store(session_factory):
    return DocumentStore(session_factory, serialize_writes=True)


@pytest_asyncio.fixture()
async def catalog(store):
    return CatalogReader(store)


@pytest_asyncio.fixture()
async def seed_data(session_factory):
    """
    Acme (C1): B1 and B2 fully configured for Monday, B3 unconfigured,
    B9 inactive. Globex (C2): B4 fully configured. Initech (C3) inactive.
    """
    async with session_factory() as session:
        session.add_all([
            Company(id="C1", name="Acme", code="ACM", status="active"),
            Company(id="C2", name="Globex", code="GLX", status="active"),
            Company(id="C3", name="Initech", code="INI", status="inactive"),
        ])
        session.add_all([
            Building(id="B1", name="Acme Tower", company_id="C1", status="active"),
            Building(id="B2", name="Acme Annex", company_id="C1", status="active"),
            Building(id="B3", name="Acme Depot", company_id="C1", status="active"),
            Building(id="B9", name="Acme Old Wing", company_id="C1", status="inactive"),
            Building(id="B4", name="Globex HQ", company_id="C2", status="active"),
            Building(id="B5", name="Initech Plant", company_id="C3", status="active"),
        ])
        session.add_all([
            Service(id="S1", name="Lunch", order=1, status="active"),
            SubService(id="SS1", name="Cafeteria", service_id="S1", status="active"),
            MealPlan(id="M1", name="Standard", order=1, status="active"),
            MealPlan(id="M2", name="Premium", order=2, status="active"),
            SubMealPlan(id="SM1", name="Main Course", meal_plan_id="M1", status="active"),
            MenuItem(id="I1", name="Dal Tadka", category="Curry", order=2, status="active"),
            MenuItem(id="I2", name="Jeera Rice", category="Rice", order=1, status="active"),
            MenuItem(id="I3", name="Paneer Tikka", category="Starter", status="active"),
            MenuItem(id="I4", name="Old Soup", category="Soup", status="inactive"),
        ])
        for building_id, company_id in (("B1", "C1"), ("B2", "C1"), ("B4", "C2"), ("B5", "C3")):
            session.add(StructureAssignment(
                company_id=company_id,
                building_id=building_id,
                week_structure=service_week("monday"),
                status="active",
            ))
            session.add(MealPlanStructureAssignment(
                company_id=company_id,
                building_id=building_id,
                week_structure=meal_plan_week("monday"),
                status="active",
            ))
        await session.commit()

    return {"companies": ["C1", "C2", "C3"], "configured": ["B1", "B2", "B4"], "unconfigured": ["B3"]}


@pytest_asyncio.fixture()
async def client(store, seed_data):
    """httpx AsyncClient bound to the FastAPI app and the test store"""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
