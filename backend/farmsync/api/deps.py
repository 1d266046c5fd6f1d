# backend/farmsync/api/deps.py

from fastapi import HTTPException, Request, status

from farmsync.controllers.base import PageController, PageState
from farmsync.crud.gateways import Gateways


def get_gateways(request: Request) -> Gateways:
    return request.app.state.gateways


async def load_page(controller: PageController) -> PageController:
    """Load a page controller; a failed load becomes 503 with the page's message."""
    await controller.load()
    if controller.state is PageState.error:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=controller.error)
    return controller
