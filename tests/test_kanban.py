import pytest
from pydantic import ValidationError
from sqlalchemy.orm import Session

import collabboard.models as models
from collabboard.exceptions import Forbidden, NotFound
from collabboard.schemas import (
    KanbanBoardCreate,
    KanbanBoardUpdate,
    KanbanColumnCreate,
    KanbanColumnUpdate,
    KanbanTaskCreate,
    KanbanTaskUpdate,
    ProjectCreate,
)
from collabboard.services import assignments, kanban, positions, projects
from collabboard.services.positions import PositionPolicy


def _count(db_session: Session, model, **filters) -> int:
    return db_session.query(model).filter_by(**filters).count()


def test_board_lifecycle_and_column_cascade(db_session: Session, world):
    with pytest.raises(Forbidden):
        kanban.create_board(world.project_id, KanbanBoardCreate(name="B1"), world.member_id, db_session)

    board = kanban.create_board(world.project_id, KanbanBoardCreate(name="B1"), world.owner_id, db_session)
    c1 = kanban.create_column(board.id, KanbanColumnCreate(name="C1"), world.owner_id, db_session)
    c2 = kanban.create_column(board.id, KanbanColumnCreate(name="C2"), world.owner_id, db_session)
    assert (c1.position, c2.position) == (0, 1)

    t1 = kanban.create_task(c1.id, KanbanTaskCreate(title="T1"), world.member_id, db_session)
    assert t1.position == 0
    assert t1.created_by == world.member_id
    t1_id, c1_id, c2_id = t1.id, c1.id, c2.id

    kanban.delete_column(c1_id, world.owner_id, db_session, policy=PositionPolicy.APPEND_ONLY)

    assert _count(db_session, models.KanbanTask, id=t1_id) == 0
    assert _count(db_session, models.KanbanColumn, id=c1_id) == 0
    remaining = db_session.query(models.KanbanColumn).filter_by(id=c2_id).one()
    assert (remaining.name, remaining.position) == ("C2", 1)

    with pytest.raises(NotFound):
        assignments.assign_task(t1_id, world.member_id, world.member_id, db_session)


def test_structural_operations_are_lead_only(db_session: Session, world, make_board):
    tree = make_board(world.project_id, world.lead_id, {"To do": ["a"]})
    column_id = tree.columns["To do"]

    with pytest.raises(Forbidden):
        kanban.update_board(tree.board_id, KanbanBoardUpdate(name="Renamed"), world.member_id, db_session)
    with pytest.raises(Forbidden):
        kanban.create_column(tree.board_id, KanbanColumnCreate(name="Doing"), world.member_id, db_session)
    with pytest.raises(Forbidden):
        kanban.update_column(column_id, KanbanColumnUpdate(name="Backlog"), world.member_id, db_session)
    with pytest.raises(Forbidden):
        kanban.delete_column(column_id, world.member_id, db_session)
    with pytest.raises(Forbidden):
        kanban.delete_board(tree.board_id, world.member_id, db_session)

    board = kanban.update_board(tree.board_id, KanbanBoardUpdate(name="Renamed"), world.lead_id, db_session)
    assert board.name == "Renamed"
    column = kanban.update_column(column_id, KanbanColumnUpdate(color="#ff0000"), world.lead_id, db_session)
    assert (column.name, column.color) == ("To do", "#ff0000")


def test_content_operations_allow_members_but_not_outsiders(db_session: Session, world, make_board):
    tree = make_board(world.project_id, world.owner_id, {"To do": ["a"]})
    task_id = tree.tasks["a"]

    task = kanban.update_task(task_id, KanbanTaskUpdate(description="details"), world.member_id, db_session)
    assert (task.title, task.description) == ("a", "details")

    with pytest.raises(Forbidden):
        kanban.create_task(tree.columns["To do"], KanbanTaskCreate(title="x"), world.outsider_id, db_session)
    with pytest.raises(Forbidden):
        kanban.update_task(task_id, KanbanTaskUpdate(title="x"), world.outsider_id, db_session)
    with pytest.raises(Forbidden):
        kanban.delete_task(task_id, world.outsider_id, db_session)
    with pytest.raises(Forbidden):
        kanban.list_boards(world.project_id, world.outsider_id, db_session)
    with pytest.raises(Forbidden):
        kanban.get_board(tree.board_id, world.outsider_id, db_session)

    kanban.delete_task(task_id, world.member_id, db_session)
    assert _count(db_session, models.KanbanTask, id=task_id) == 0


def test_missing_entities_are_not_found(db_session: Session, world):
    missing = "22222222-2222-2222-2222-222222222222"

    with pytest.raises(NotFound):
        kanban.create_board(missing, KanbanBoardCreate(name="B"), world.owner_id, db_session)
    with pytest.raises(NotFound):
        kanban.get_board(missing, world.owner_id, db_session)
    with pytest.raises(NotFound):
        kanban.create_column(missing, KanbanColumnCreate(name="C"), world.owner_id, db_session)
    with pytest.raises(NotFound):
        kanban.create_task(missing, KanbanTaskCreate(title="T"), world.owner_id, db_session)
    with pytest.raises(NotFound):
        kanban.move_task(missing, missing, 0, world.owner_id, db_session)


def test_get_board_returns_ordered_tree_with_assignees(db_session: Session, world, make_board):
    tree = make_board(world.project_id, world.owner_id, {"To do": ["a", "b"], "Done": ["c"]})
    kanban.update_column(
        tree.columns["Done"], KanbanColumnUpdate(position=0), world.owner_id, db_session,
        policy=PositionPolicy.STRICT_REFLOW,
    )
    kanban.move_task(tree.tasks["a"], tree.columns["To do"], 5, world.member_id, db_session,
                     policy=PositionPolicy.APPEND_ONLY)
    assignments.assign_task(tree.tasks["b"], world.member_id, world.owner_id, db_session)

    board = kanban.get_board(tree.board_id, world.member_id, db_session)

    assert [column.name for column in board.columns] == ["Done", "To do"]
    todo = board.columns[1]
    assert [task.title for task in todo.tasks] == ["b", "a"]
    assert [assignment.user.name for assignment in todo.tasks[0].assignments] == ["Member"]


def test_list_boards_is_ordered_by_creation(db_session: Session, world):
    for name in ("First", "Second"):
        kanban.create_board(world.project_id, KanbanBoardCreate(name=name), world.owner_id, db_session)

    boards = kanban.list_boards(world.project_id, world.member_id, db_session)

    assert [board.name for board in boards] == ["First", "Second"]


def test_delete_board_removes_every_descendant(db_session: Session, world, make_board):
    tree = make_board(world.project_id, world.owner_id, {"To do": ["a", "b"], "Done": ["c"]})
    assignments.assign_task(tree.tasks["a"], world.member_id, world.member_id, db_session)

    kanban.delete_board(tree.board_id, world.lead_id, db_session)

    assert _count(db_session, models.KanbanBoard, id=tree.board_id) == 0
    assert _count(db_session, models.KanbanColumn, board_id=tree.board_id) == 0
    assert db_session.query(models.KanbanTask).count() == 0
    assert db_session.query(models.TaskAssignment).count() == 0


def test_delete_column_rolls_back_both_steps_on_failure(db_session: Session, world, make_board, monkeypatch):
    tree = make_board(world.project_id, world.owner_id, {"To do": ["a", "b"]})
    column_id = tree.columns["To do"]

    def _fail(*args, **kwargs):
        raise RuntimeError("storage failure")

    monkeypatch.setattr(positions, "compact", _fail)

    with pytest.raises(RuntimeError):
        kanban.delete_column(column_id, world.owner_id, db_session)

    assert _count(db_session, models.KanbanColumn, id=column_id) == 1
    assert _count(db_session, models.KanbanTask, column_id=column_id) == 2


def test_move_task_into_another_project_is_not_found(db_session: Session, world, make_board, titles_in):
    tree = make_board(world.project_id, world.owner_id, {"To do": ["a"]})
    other = projects.create_project(ProjectCreate(title="P2"), world.outsider_id, db_session)
    foreign = make_board(other.id, world.outsider_id, {"Elsewhere": []})

    with pytest.raises(NotFound):
        kanban.move_task(tree.tasks["a"], foreign.columns["Elsewhere"], 0, world.member_id, db_session)

    assert titles_in(tree.columns["To do"]) == [("a", 0)]


def test_membership_revoked_between_requests_is_enforced_on_next_call(db_session: Session, world, make_board):
    tree = make_board(world.project_id, world.owner_id, {"To do": []})
    kanban.create_task(tree.columns["To do"], KanbanTaskCreate(title="ok"), world.member_id, db_session)

    projects.remove_member(world.project_id, world.member_id, world.owner_id, db_session)

    with pytest.raises(Forbidden):
        kanban.create_task(tree.columns["To do"], KanbanTaskCreate(title="late"), world.member_id, db_session)


@pytest.mark.parametrize(
    "schema, payload",
    [
        (KanbanBoardUpdate, {"name": None}),
        (KanbanColumnUpdate, {"name": None}),
        (KanbanColumnUpdate, {"position": None}),
        (KanbanTaskUpdate, {"title": None}),
    ],
)
def test_null_patch_on_required_field_is_rejected(schema, payload):
    with pytest.raises(ValidationError):
        schema.model_validate(payload)


def test_null_patch_on_optional_field_clears_it(db_session: Session, world, make_board):
    tree = make_board(world.project_id, world.owner_id, {"To do": ["a"]})
    kanban.update_task(tree.tasks["a"], KanbanTaskUpdate(description="details"), world.member_id, db_session)

    task = kanban.update_task(
        tree.tasks["a"], KanbanTaskUpdate.model_validate({"description": None}), world.member_id, db_session
    )

    assert (task.title, task.description) == ("a", None)
