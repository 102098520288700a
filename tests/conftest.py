import os

os.environ.setdefault("DATABASE_URL", "sqlite://")  # never touch a real db file during tests
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import date
from typing import Any, Dict, List, Set, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catering import models  # noqa: F401  (registers tables on Base)
from catering.db import Base, get_db
from catering.errors import FunctionInvocationError
from catering.repositories.contracts import SqlContractRepository
from catering.repositories.invoices import SqlInvoiceRepository
from catering.repositories.quotes import SqlQuoteRepository
from catering.services.contracts import ContractService
from catering.services.estimate_service import EstimateService
from catering.services.functions_client import FunctionResult, get_functions_client


class FakeFunctionsClient:
    """Records every invocation; names in fail_on raise like a failing backend."""

    def __init__(self):
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.fail_on: Set[str] = set()
        self.responses: Dict[str, Dict[str, Any]] = {}

    def invoke(self, name: str, payload: Dict[str, Any]) -> FunctionResult:
        self.calls.append((name, payload))
        if name in self.fail_on:
            raise FunctionInvocationError(name, "boom", status_code=500)
        return FunctionResult(function=name, data=self.responses.get(name, {}))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def quotes(db):
    return SqlQuoteRepository(db)


@pytest.fixture
def invoices(db):
    return SqlInvoiceRepository(db)


@pytest.fixture
def contracts(db):
    return SqlContractRepository(db)


@pytest.fixture
def functions():
    return FakeFunctionsClient()


@pytest.fixture
def estimates(quotes, invoices, functions):
    return EstimateService(quotes, invoices, functions)


@pytest.fixture
def contract_service(invoices, contracts, functions):
    return ContractService(invoices, contracts, functions)


def quote_values(**overrides: Any) -> Dict[str, Any]:
    values: Dict[str, Any] = {
        "contact_name": "Jordan Miles",
        "email": "jordan@example.com",
        "phone": "843-555-0100",
        "event_name": "Miles Family Reunion",
        "event_type": "private-party",
        "event_date": date(2026, 6, 20),
        "location": "Riverfront Park, Charleston SC",
        "guest_count": 50,
        "service_type": "full-service",
        "proteins": ["fried-chicken"],
        "sides": ["mac-and-cheese", "collard-greens", "cornbread"],
        "appetizers": [],
        "desserts": [],
        "drinks": [],
        "chafers_requested": True,
        "status": "pending",
    }
    values.update(overrides)
    return values


@pytest.fixture
def make_quote(quotes):
    def _make(**overrides: Any):
        return quotes.create(quote_values(**overrides))

    return _make


@pytest.fixture
def client(db, functions):
    from catering.core.rate_limit import limiter
    from catering.main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_functions_client] = lambda: functions
    limiter.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def priced_invoice(estimates, make_quote):
    quote = make_quote()
    invoice = estimates.create_estimate(quote.id)
    return estimates.apply_pricing(invoice.id, per_guest_rate=2500)
