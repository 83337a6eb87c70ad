"""
Pytest fixtures for ShiftPet backend tests.

Provides test database setup, employee fixtures, and test client.
"""

import pytest
from shiftpet import create_app
from shiftpet.extensions import db
from shiftpet.models import PetSpecies
from shiftpet.services.employee_service import create_employee


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'BUSINESS_TIMEZONE': 'America/Chicago',
        'DAILY_RESET_HOUR': 8,
        'HEALTH_DECAY_PER_HOUR': 5,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def employee(db_session):
    """Regular employee with a cat."""
    return create_employee(username="bob", name="Bob Employee")


@pytest.fixture(scope='function')
def second_employee(db_session):
    """Another regular employee, used for fleet rollups."""
    return create_employee(username="carol", name="Carol Employee", animal_choice=PetSpecies.BIRD)


@pytest.fixture(scope='function')
def admin(db_session):
    """Store manager with admin privileges."""
    return create_employee(username="alice", name="Alice Admin", is_admin=True, animal_choice=PetSpecies.DOG)
