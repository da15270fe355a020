import pytest
from sqlalchemy.orm import Session

import collabboard.models as models
from collabboard.exceptions import Forbidden, NotFound
from collabboard.models import CONTENT_ROLES, STRUCTURE_ROLES
from collabboard.services.permissions import (
    check_project_permission,
    get_membership_role,
    has_project_permission,
)


@pytest.mark.parametrize(
    "actor, allowed_roles, expected",
    [
        ("owner_id", STRUCTURE_ROLES, True),
        ("owner_id", CONTENT_ROLES, True),
        ("lead_id", STRUCTURE_ROLES, True),
        ("lead_id", CONTENT_ROLES, True),
        ("member_id", STRUCTURE_ROLES, False),
        ("member_id", CONTENT_ROLES, True),
        ("outsider_id", STRUCTURE_ROLES, False),
        ("outsider_id", CONTENT_ROLES, False),
    ],
)
def test_permission_truth_table(db_session: Session, world, actor, allowed_roles, expected):
    user_id = getattr(world, actor)
    if expected:
        project = check_project_permission(world.project_id, user_id, db_session, allowed_roles)
        assert project.id == world.project_id
    else:
        with pytest.raises(Forbidden):
            check_project_permission(world.project_id, user_id, db_session, allowed_roles)
    assert has_project_permission(world.project_id, user_id, db_session, allowed_roles) is expected


def test_missing_project_is_not_found(db_session: Session, world):
    with pytest.raises(NotFound):
        check_project_permission("00000000-0000-0000-0000-000000000000", world.owner_id, db_session)


def test_owner_passes_without_membership_row(db_session: Session, world):
    db_session.query(models.ProjectMember).filter(
        models.ProjectMember.user_id == world.owner_id
    ).delete()
    db_session.commit()

    assert get_membership_role(world.project_id, world.owner_id, db_session) is None
    project = check_project_permission(world.project_id, world.owner_id, db_session, STRUCTURE_ROLES)
    assert project.owner_id == world.owner_id


def test_unrecognised_role_string_never_authorizes(db_session: Session, world):
    membership = (
        db_session.query(models.ProjectMember)
        .filter(models.ProjectMember.user_id == world.member_id)
        .first()
    )
    membership.role = "Membro"
    db_session.commit()

    assert get_membership_role(world.project_id, world.member_id, db_session) is None
    with pytest.raises(Forbidden):
        check_project_permission(world.project_id, world.member_id, db_session, CONTENT_ROLES)


def test_role_parse_accepts_stored_strings():
    assert models.ProjectRole.parse("lider") is models.ProjectRole.LEAD
    assert models.ProjectRole.parse("membro") is models.ProjectRole.MEMBER
    assert models.ProjectRole.parse("admin") is None
    assert models.ProjectRole.parse(None) is None
