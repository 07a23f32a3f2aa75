import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

from fastapi import APIRouter, FastAPI, Depends, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import API_PREFIX, CORS_ORIGINS
from app.core.database import get_db, init_db
from app.core.exceptions import TrackerError, ValidationError, raise_course_not_found, raise_program_not_found, \
    raise_task_not_found
from app.core.logging_setup import setup_logging
from app.models.enums import TaskStatus
from app.schemas.course_schema import CourseRequest, CourseResponse
from app.schemas.program_schema import ProgramRequest, ProgramResponse
from app.schemas.stats_schema import TaskStatsResponse
from app.schemas.task_schema import TaskRequest, TaskResponse
from app.services import cascade, entity_store, queries
from app.services.stats import compute_stats

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging()
    init_db()
    yield


app = FastAPI(title="CourseTrack", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix=API_PREFIX)


def get_today() -> date:
    """Sampled once per request so every label in one response agrees."""
    return date.today()


def _optional_id(value: Optional[str], label: str) -> Optional[int]:
    """Query-string ids: a blank value means 'no filter', like a missing one."""
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{label} must be an integer")


def _optional_status(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    try:
        return TaskStatus(value.strip()).value
    except ValueError:
        allowed = ", ".join(member.value for member in TaskStatus)
        raise ValidationError(f"status must be one of: {allowed}")


# ---- error mapping ----

@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{where}: {first.get('msg')}" if where else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("%s %s storage failure", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"error": f"Storage failure: {exc.__class__.__name__}"})


@router.get("/health")
def health():
    return {"status": "ok"}


# ---- programs ----

@router.get("/programs", response_model=list[ProgramResponse])
def get_all_programs(db: Session = Depends(get_db)):
    return [ProgramResponse.model_validate(program) for program in queries.list_programs(db)]


@router.get("/programs/{program_id}", response_model=ProgramResponse)
def get_program(program_id: int, db: Session = Depends(get_db)):
    program = queries.get_program(db, program_id)
    if not program:
        raise_program_not_found()
    return ProgramResponse.model_validate(program)


@router.post("/programs", response_model=ProgramResponse, status_code=status.HTTP_201_CREATED)
def add_program(request: ProgramRequest, db: Session = Depends(get_db)):
    program = entity_store.create_program(db, request.name, request.college, request.semester)
    return ProgramResponse.model_validate(program)


@router.put("/programs/{program_id}")
def update_program(program_id: int, request: ProgramRequest, db: Session = Depends(get_db)):
    updated = entity_store.update_program(db, program_id, request.name, request.college, request.semester)
    return {"updated": updated}


@router.delete("/programs/{program_id}")
def delete_program(program_id: int, db: Session = Depends(get_db)):
    return {"deleted": cascade.delete_program(db, program_id)}


# ---- courses ----

@router.get("/courses", response_model=list[CourseResponse])
def get_all_courses(program_id: Optional[str] = None, db: Session = Depends(get_db)):
    listings = queries.list_courses(db, _optional_id(program_id, "program_id"))
    return [CourseResponse.from_listing(listing) for listing in listings]


@router.get("/courses/{course_id}", response_model=CourseResponse)
def get_course(course_id: int, db: Session = Depends(get_db)):
    listing = queries.get_course(db, course_id)
    if not listing:
        raise_course_not_found()
    return CourseResponse.from_listing(listing)


@router.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def add_course(request: CourseRequest, db: Session = Depends(get_db)):
    course = entity_store.create_course(db, request.program_id, request.code, request.name)
    return CourseResponse.from_listing(queries.get_course(db, course.id))


@router.put("/courses/{course_id}")
def update_course(course_id: int, request: CourseRequest, db: Session = Depends(get_db)):
    updated = entity_store.update_course(db, course_id, request.program_id, request.code, request.name)
    return {"updated": updated}


@router.delete("/courses/{course_id}")
def delete_course(course_id: int, db: Session = Depends(get_db)):
    return {"deleted": cascade.delete_course(db, course_id)}


# ---- tasks ----

@router.get("/tasks", response_model=list[TaskResponse])
def get_all_tasks(course_id: Optional[str] = None, program_id: Optional[str] = None,
                  status_filter: Optional[str] = Query(None, alias="status"),
                  db: Session = Depends(get_db), today: date = Depends(get_today)):
    listings = queries.list_tasks(db, _optional_id(course_id, "course_id"), _optional_id(program_id, "program_id"),
                                  _optional_status(status_filter))
    return [TaskResponse.from_listing(listing, today) for listing in listings]


@router.get("/tasks/stats", response_model=TaskStatsResponse)
def get_task_stats(course_id: Optional[str] = None, program_id: Optional[str] = None,
                   db: Session = Depends(get_db), today: date = Depends(get_today)):
    tasks = queries.iter_tasks(db, _optional_id(course_id, "course_id"), _optional_id(program_id, "program_id"))
    stats = compute_stats(tasks, today)
    return TaskStatsResponse.from_stats(stats)


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, db: Session = Depends(get_db), today: date = Depends(get_today)):
    listing = queries.get_task(db, task_id)
    if not listing:
        raise_task_not_found()
    return TaskResponse.from_listing(listing, today)


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def add_task(request: TaskRequest, db: Session = Depends(get_db), today: date = Depends(get_today)):
    task = entity_store.create_task(db, **request.model_dump())
    return TaskResponse.from_listing(queries.get_task(db, task.id), today)


@router.put("/tasks/{task_id}")
def update_task(task_id: int, request: TaskRequest, db: Session = Depends(get_db)):
    updated = entity_store.update_task(db, task_id, **request.model_dump())
    return {"updated": updated}


@router.patch("/tasks/{task_id}")
def patch_task(task_id: int, request: TaskRequest, db: Session = Depends(get_db)):
    updated = entity_store.patch_task(db, task_id, **request.model_dump(exclude_unset=True))
    return {"updated": updated}


@router.delete("/tasks/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db)):
    return {"deleted": cascade.delete_task(db, task_id)}


app.include_router(router)
