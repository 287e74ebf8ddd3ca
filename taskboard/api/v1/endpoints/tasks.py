from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse
from sqlmodel import Session
import logging
import uuid

from ...deps import require_csrf_token, require_owner
from ....core.security import create_csrf_token
from ....db.session import get_session
from ....models.task import TaskPriority
from ....schemas.task import (
    TaskEditSubmission,
    TaskForm,
    TaskFormErrors,
    TaskFormPage,
    TaskListPage,
    TaskPage,
    TaskRead,
    TaskSubmission,
    ValidationResult,
)
from ....services import lifecycle, ownership

logger = logging.getLogger(__name__)

router = APIRouter()


def _redirect_to_list(request: Request) -> RedirectResponse:
    return RedirectResponse(
        url=str(request.url_for("list_tasks")), status_code=status.HTTP_303_SEE_OTHER
    )


def _form_errors(
    submission: TaskSubmission, form: TaskForm, result: ValidationResult, owner_id: uuid.UUID
) -> JSONResponse:
    # Hand the input back with every field error and a fresh token. Values that
    # could be read go back normalized, the rest exactly as submitted.
    echoed = {}
    for field in TaskForm.model_fields:
        value = getattr(form, field)
        echoed[field] = value if value not in (None, "") else getattr(submission, field)
    echoed["id"] = getattr(submission, "id", None)
    body = TaskFormErrors(
        errors=result.violations,
        task=TaskEditSubmission(**echoed),
        csrf_token=create_csrf_token(owner_id),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=jsonable_encoder(body)
    )


def _task_page(task, owner_id: uuid.UUID) -> TaskPage:
    return TaskPage(task=TaskRead.model_validate(task), csrf_token=create_csrf_token(owner_id))


@router.get("", response_model=TaskListPage, name="list_tasks")
def list_tasks(
    owner_id: uuid.UUID = Depends(require_owner),
    session: Session = Depends(get_session),
):
    tasks = ownership.list_owned(session, owner_id)
    return TaskListPage(
        tasks=[TaskRead.model_validate(t) for t in tasks],
        csrf_token=create_csrf_token(owner_id),
    )


@router.get("/details/{task_id}", response_model=TaskPage)
def task_details(
    task_id: int,
    owner_id: uuid.UUID = Depends(require_owner),
    session: Session = Depends(get_session),
):
    return _task_page(ownership.load_owned(session, task_id, owner_id), owner_id)


@router.get("/create", response_model=TaskFormPage)
def create_form(owner_id: uuid.UUID = Depends(require_owner)):
    return TaskFormPage(
        task=TaskForm(priority=TaskPriority.medium.value),
        csrf_token=create_csrf_token(owner_id),
    )


@router.post("/create", status_code=status.HTTP_303_SEE_OTHER)
def create_task(
    submission: TaskSubmission,
    request: Request,
    owner_id: uuid.UUID = Depends(require_csrf_token),
    session: Session = Depends(get_session),
):
    form, result = lifecycle.read_submission(submission)
    lifecycle.validate_task(form, result)
    if not result.ok:
        logger.info("Rejected new task: %d validation error(s)", len(result.violations))
        return _form_errors(submission, form, result, owner_id)

    task = lifecycle.apply_create_defaults(lifecycle.build_task(form), owner_id, lifecycle.utcnow())
    ownership.add_owned(session, task, owner_id)
    return _redirect_to_list(request)


@router.get("/edit/{task_id}", response_model=TaskPage)
def edit_form(
    task_id: int,
    owner_id: uuid.UUID = Depends(require_owner),
    session: Session = Depends(get_session),
):
    return _task_page(ownership.load_owned(session, task_id, owner_id), owner_id)


@router.post("/edit/{task_id}", status_code=status.HTTP_303_SEE_OTHER)
def edit_task(
    task_id: int,
    submission: TaskEditSubmission,
    request: Request,
    owner_id: uuid.UUID = Depends(require_csrf_token),
    session: Session = Depends(get_session),
):
    lifecycle.check_path_id(task_id, submission.id)
    existing = ownership.load_owned(session, task_id, owner_id)

    form, result = lifecycle.read_submission(submission)
    lifecycle.validate_task(form, result)
    if not result.ok:
        logger.info("Rejected edit of task %s: %d validation error(s)", task_id, len(result.violations))
        return _form_errors(submission, form, result, owner_id)

    lifecycle.apply_edit(existing, form)
    ownership.save_owned(session, existing, owner_id)
    return _redirect_to_list(request)


@router.get("/delete/{task_id}", response_model=TaskPage)
def delete_confirmation(
    task_id: int,
    owner_id: uuid.UUID = Depends(require_owner),
    session: Session = Depends(get_session),
):
    return _task_page(ownership.load_owned(session, task_id, owner_id), owner_id)


@router.post("/delete/{task_id}", status_code=status.HTTP_303_SEE_OTHER)
def delete_task(
    task_id: int,
    request: Request,
    owner_id: uuid.UUID = Depends(require_csrf_token),
    session: Session = Depends(get_session),
):
    task = ownership.load_owned(session, task_id, owner_id)
    ownership.delete_owned(session, task, owner_id)
    return _redirect_to_list(request)


@router.post("/toggle-status/{task_id}", status_code=status.HTTP_303_SEE_OTHER)
def toggle_task_status(
    task_id: int,
    request: Request,
    owner_id: uuid.UUID = Depends(require_csrf_token),
    session: Session = Depends(get_session),
):
    task = ownership.load_owned(session, task_id, owner_id)
    lifecycle.toggle_status(task)
    ownership.save_owned(session, task, owner_id)
    return _redirect_to_list(request)
