from typing import Optional

from fastapi import Body, FastAPI, Path, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import StrictInt

from .config import Settings, configure_logging, get_settings
from .models import ErrorResponse, PointHistory, UserPoint
from .service import PointService, PointServiceError


def create_app(
    service: Optional[PointService] = None,
    settings: Optional[Settings] = None,
    root_path: str = "",
) -> FastAPI:
    if settings is None:
        settings = get_settings()
    configure_logging(settings)
    if service is None:
        service = PointService(max_balance=settings.max_balance)
    point_service = service

    app = FastAPI(
        title="Point Ledger API",
        description="Per-user point balances with an append-only transaction history",
        version="1.0.0",
        root_path=root_path,
    )
    app.state.point_service = point_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PointServiceError)
    async def handle_point_error(request: Request, exc: PointServiceError) -> JSONResponse:
        body = ErrorResponse(code=str(status.HTTP_400_BAD_REQUEST), error=exc.code, message=exc.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))

    @app.get("/health", tags=["System"])
    def health_check():
        return {"status": "healthy", "service": "point-ledger"}

    @app.get("/point/{user_id}", response_model=UserPoint, tags=["Points"])
    def get_point(user_id: int = Path(..., ge=0)) -> UserPoint:
        return point_service.get_point(user_id)

    @app.get("/point/{user_id}/histories", response_model=list[PointHistory], tags=["Points"])
    def get_histories(user_id: int = Path(..., ge=0)) -> list[PointHistory]:
        return point_service.get_histories(user_id)

    # The body is the bare JSON integer, e.g. `10000`.
    @app.patch(
        "/point/{user_id}/charge",
        response_model=UserPoint,
        responses={400: {"model": ErrorResponse}},
        tags=["Points"],
    )
    def charge(user_id: int = Path(..., ge=0), amount: StrictInt = Body(..., examples=[10000])) -> UserPoint:
        return point_service.charge(user_id, amount)

    @app.patch(
        "/point/{user_id}/use",
        response_model=UserPoint,
        responses={400: {"model": ErrorResponse}},
        tags=["Points"],
    )
    def use(user_id: int = Path(..., ge=0), amount: StrictInt = Body(..., examples=[3000])) -> UserPoint:
        return point_service.use(user_id, amount)

    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)
