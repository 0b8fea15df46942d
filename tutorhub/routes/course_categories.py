from fastapi import APIRouter, Depends
from sqlmodel import Session
from tutorhub.database import get_session
from tutorhub.schemas.course_schemas import CategoryRead
from tutorhub.services.course_service import list_categories

router = APIRouter()


@router.get("")
def get_course_categories(session: Session = Depends(get_session)):
    categories = list_categories(session)
    return {"success": True, "data": [CategoryRead(**c) for c in categories]}
