from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import collabboard.models as models
from collabboard.database import Base, enable_sqlite_foreign_keys
from collabboard.schemas import KanbanBoardCreate, KanbanColumnCreate, KanbanTaskCreate, ProjectCreate
from collabboard.services import kanban, projects

TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session() -> Session:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db_session: Session):
    def _make_user(name: str) -> models.User:
        user = models.User(name=name, email=f"{name.lower()}@example.com")
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def world(db_session: Session, make_user):
    """Project P1 owned by ``owner`` with a lead, a member and an outsider."""
    owner = make_user("Owner")
    lead = make_user("Lead")
    member = make_user("Member")
    outsider = make_user("Outsider")

    project = projects.create_project(ProjectCreate(title="P1"), owner.id, db_session)
    projects.add_member(project.id, lead.id, models.ProjectRole.LEAD, owner.id, db_session)
    projects.add_member(project.id, member.id, models.ProjectRole.MEMBER, owner.id, db_session)

    return SimpleNamespace(
        project_id=project.id,
        owner_id=owner.id,
        lead_id=lead.id,
        member_id=member.id,
        outsider_id=outsider.id,
    )


@pytest.fixture
def make_board(db_session: Session):
    """Build a board whose columns hold the given task titles, in order."""

    def _make_board(project_id: str, actor_id: str, layout: dict) -> SimpleNamespace:
        board = kanban.create_board(project_id, KanbanBoardCreate(name="Sprint"), actor_id, db_session)
        columns, tasks = {}, {}
        for column_name, titles in layout.items():
            column = kanban.create_column(board.id, KanbanColumnCreate(name=column_name), actor_id, db_session)
            columns[column_name] = column.id
            for title in titles:
                task = kanban.create_task(column.id, KanbanTaskCreate(title=title), actor_id, db_session)
                tasks[title] = task.id
        return SimpleNamespace(board_id=board.id, columns=columns, tasks=tasks)

    return _make_board


@pytest.fixture
def titles_in(db_session: Session):
    """Task titles of a column as (title, position) pairs, ordered by position."""

    def _titles_in(column_id: str):
        rows = (
            db_session.query(models.KanbanTask)
            .filter(models.KanbanTask.column_id == column_id)
            .order_by(models.KanbanTask.position.asc())
            .all()
        )
        return [(task.title, task.position) for task in rows]

    return _titles_in
