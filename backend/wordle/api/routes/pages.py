from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, RedirectResponse

from wordle.api.deps import is_authenticated, page_session

router = APIRouter(tags=["pages"])


def _page(request: Request, name: str) -> FileResponse:
    return FileResponse(request.app.state.settings.static_dir / name, media_type="text/html")


@router.get("/")
def home(request: Request):
    if is_authenticated(request):
        return RedirectResponse("/game", status_code=302)
    return _page(request, "index.html")


@router.get("/game", dependencies=[Depends(page_session)])
def game(request: Request):
    return _page(request, "game.html")


@router.get("/dashboard", dependencies=[Depends(page_session)])
def dashboard(request: Request):
    return _page(request, "dashboard.html")
