from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
async def health(request: Request):
    return {
        "status": "ok",
        "message": f"{request.app.title} is running",
    }
