from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter(tags=["Pages"])

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


def _page(name: str) -> FileResponse:
    return FileResponse(STATIC_DIR / name, media_type="text/html")


# PUBLIC_INTERFACE
@router.get("/RegisterForm.html", response_class=FileResponse, summary="Registration form page")
def register_form() -> FileResponse:
    """HTML form posting multipart data to /register."""
    return _page("RegisterForm.html")


# PUBLIC_INTERFACE
@router.get("/SearchForm.html", response_class=FileResponse, summary="Search form page")
def search_form() -> FileResponse:
    """HTML form issuing GET /search with an includePhoto checkbox."""
    return _page("SearchForm.html")
