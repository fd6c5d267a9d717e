# tests/test_seed.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from servicedesk import seed
from servicedesk.asset.models import Asset
from servicedesk.core.database import Base, session_scope
from servicedesk.license.models import SoftwareLicense
from servicedesk.ticket.models import Ticket
from servicedesk.user.models import User, UserRole


@pytest.fixture
def scratch_engine():
    # separate in-memory database, the app's tables stay untouched
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


def test_seed_database(scratch_engine):
    with session_scope(scratch_engine) as db:
        counts = seed.seed_database(db)
    assert counts == {"users": 10, "tickets": 10, "assets": 12, "licenses": 5}

    with session_scope(scratch_engine) as db:
        assert db.query(User).count() == 10
        assert db.query(User).filter(User.role == UserRole.ADMIN).count() == 3
        vpn = db.query(Ticket).filter(Ticket.title == "VPN connection issues").one()
        assert vpn.user.email == "user@company.com"
        keyboard = db.query(Asset).filter(Asset.serial_number == "MK-2023-178").one()
        assert keyboard.assigned_user.email == "user@company.com"
        assert db.query(SoftwareLicense).filter(SoftwareLicense.assigned_user_id.is_(None)).count() == 1


def test_seed_twice_replaces_data(scratch_engine):
    with session_scope(scratch_engine) as db:
        seed.seed_database(db)
    with session_scope(scratch_engine) as db:
        seed.seed_database(db)
    with session_scope(scratch_engine) as db:
        assert db.query(Ticket).count() == 10


def test_reset_database(scratch_engine):
    with session_scope(scratch_engine) as db:
        seed.seed_database(db)
    with session_scope(scratch_engine) as db:
        seed.reset_database(db)
    with session_scope(scratch_engine) as db:
        for model in (User, Ticket, Asset, SoftwareLicense):
            assert db.query(model).count() == 0


def test_seed_minimal_data(scratch_engine):
    with session_scope(scratch_engine) as db:
        assert seed.seed_minimal_data(db) == 2
    with session_scope(scratch_engine) as db:
        assert seed.seed_minimal_data(db) == 0
        admin = db.query(User).filter(User.email == "admin@company.com").one()
        assert admin.role == UserRole.ADMIN


def test_unknown_command_prints_usage(capsys):
    assert seed.main(["bogus"]) == 1
    assert "usage:" in capsys.readouterr().err
