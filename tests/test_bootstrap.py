from timeclock.fastapi.core.init_settings import global_settings
from timeclock.fastapi.core.lifespan import ensure_initial_admin
from timeclock.fastapi.crud.user import UserCRUD
from timeclock.fastapi.models import User


def test_initial_admin_created_once(db_session):
    ensure_initial_admin(db_session)
    ensure_initial_admin(db_session)

    admins = db_session.query(User).filter(User.is_admin == True).all()
    assert len(admins) == 1
    assert admins[0].is_active
    assert admins[0].email == global_settings.INITIAL_ADMIN_EMAIL


def test_existing_admin_is_kept(db_session, admin):
    ensure_initial_admin(db_session)

    assert UserCRUD(db_session).count_admins() == 1
    assert db_session.query(User).count() == 1


def test_employee_with_initial_admin_email_is_promoted(db_session, make_user):
    employee = make_user(email=global_settings.INITIAL_ADMIN_EMAIL)

    ensure_initial_admin(db_session)

    db_session.refresh(employee)
    assert employee.is_admin
    assert employee.is_active
    assert db_session.query(User).count() == 1


def test_deactivated_admin_with_initial_admin_email_is_reactivated(db_session, make_user):
    former = make_user(is_admin=True, is_active=False, email=global_settings.INITIAL_ADMIN_EMAIL)

    ensure_initial_admin(db_session)

    db_session.refresh(former)
    assert former.is_active
    assert UserCRUD(db_session).count_admins() == 1
    assert db_session.query(User).count() == 1
