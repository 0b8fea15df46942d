from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.dependencies.auth import AuthSession, require_tutor
from tutorhub.schemas.course_schemas import CourseCreate, CourseRead, CourseUpdate
from tutorhub.services import course_service
from tutorhub.services.enrollment_service import get_course
from tutorhub.utils.pagination import paginate

router = APIRouter()


@router.get("")
def list_courses(
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
    tutor_id: Optional[int] = Query(default=None),
    category_id: Optional[int] = Query(default=None),
    session: Session = Depends(get_session),
):
    query = course_service.course_query(
        search=search,
        tutor_id=tutor_id,
        category_id=category_id,
    )

    data = paginate(
        session=session,
        query=query,
        page=page,
        limit=limit,
        serialize=CourseRead.model_validate,
    )

    return {"success": True, "data": data}


@router.get("/{course_id}")
def get_course_detail(course_id: int, session: Session = Depends(get_session)):
    course = get_course(session, course_id)
    return {"success": True, "data": CourseRead.model_validate(course)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(
    data: CourseCreate,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(require_tutor),
):
    course = course_service.create_course(session, auth, data)
    return {
        "success": True,
        "message": "Course created successfully",
        "data": CourseRead.model_validate(course),
    }


@router.put("/{course_id}")
def update_course(
    course_id: int,
    data: CourseUpdate,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(require_tutor),
):
    course = course_service.update_course(session, auth, course_id, data)
    return {
        "success": True,
        "message": "Course updated successfully",
        "data": CourseRead.model_validate(course),
    }


@router.delete("/{course_id}")
def delete_course(
    course_id: int,
    session: Session = Depends(get_session),
    auth: AuthSession = Depends(require_tutor),
):
    course_service.delete_course(session, auth, course_id)
    return {"success": True, "message": "Course deleted successfully"}
