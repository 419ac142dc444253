from fastapi import APIRouter, Depends

from app.api.routes.venues import browse_directory
from app.core.dependencies import get_store, get_current_identity
from app.core.policy import HOME_PATHS, HomeView, Identity, resolve_home_view
from app.services.store import DirectoryStore

router = APIRouter(tags=["Home"])


@router.get("/home")
def home(
    search: str | None = None,
    city: str | None = None,
    game_type: str | None = None,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    view = resolve_home_view(identity)
    response = {
        "view": view.value,
        "path": HOME_PATHS[view],
        "can_book": view == HomeView.VENUE_DIRECTORY,
    }

    # Players land on the searchable directory; dashboards load their own data
    if view == HomeView.VENUE_DIRECTORY:
        response["venues"] = browse_directory(store, search, city, game_type)

    return response
