"""
Exercise Tracker — Landing Page Route
=======================================

What:  Serves the static HTML landing page at GET / and the assets under
       /public (mounted in main.py).
Why:   The page documents the endpoints and offers plain HTML forms that
       post to them, so the API can be exercised from a browser.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
VIEWS_DIR = PACKAGE_ROOT / "views"
PUBLIC_DIR = PACKAGE_ROOT / "public"

router = APIRouter(tags=["Index"])


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(VIEWS_DIR / "index.html", media_type="text/html")
