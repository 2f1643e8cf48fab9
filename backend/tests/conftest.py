import os

# keep the application's own engine off disk while the test suite imports it
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from payslip_api import models
from payslip_api.database import get_db, make_engine
from payslip_api.main import app


@pytest.fixture
def db_session():
    engine = make_engine("sqlite://")
    models.Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def employee(client):
    res = client.post('/employees', json={
        'name': 'Ana',
        'email': 'ana@x.com',
        'position': 'Engineer',
    })
    assert res.status_code == 201
    return res.json()


@pytest.fixture
def make_payslip(client, employee):
    def _make(**overrides):
        body = {
            'employeeId': employee['id'],
            'payPeriodStart': '2024-01-01',
            'payPeriodEnd': '2024-01-31',
            'payDate': '2024-02-01',
            'basicSalary': 1000,
        }
        body.update(overrides)
        res = client.post('/payslips', json=body)
        assert res.status_code == 201, res.json()
        return res.json()
    return _make
