import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.routing import APIRouter

from . import schemas, utils
from .depends import get_gateway
from .errors import DerivationFailed, NotFound, PartialDeleteFailure, StoreUnavailable
from .gateway import ObjectGateway
from .settings import settings

logger = logging.getLogger("api")

router = APIRouter()

COMPRESSED_VARIANT = "compressed"


def _error_body(message: str, exc: Exception, key: Optional[str]) -> dict:
    return {"message": message, "errorMessage": str(exc), "key": key}


def register_handlers(app: FastAPI):
    @app.exception_handler(NotFound)
    async def not_found_handler(r: Request, exc: NotFound):
        return JSONResponse(
            status_code=404,
            content=_error_body("failed to retrieve file", exc, exc.key),
        )

    @app.exception_handler(StoreUnavailable)
    async def unavailable_handler(r: Request, exc: StoreUnavailable):
        logger.error(str(exc))
        return JSONResponse(
            status_code=500,
            content=_error_body("storage unavailable", exc, exc.key),
        )

    @app.exception_handler(DerivationFailed)
    async def derivation_handler(r: Request, exc: DerivationFailed):
        logger.error(str(exc))
        return JSONResponse(
            status_code=500,
            content=_error_body("failed to compress file", exc, exc.key),
        )

    @app.exception_handler(PartialDeleteFailure)
    async def partial_delete_handler(r: Request, exc: PartialDeleteFailure):
        logger.error(str(exc))
        content = _error_body("failed to delete file from both stores", exc, exc.key)
        content["result"] = exc.result.model_dump(mode="json")
        return JSONResponse(status_code=500, content=content)

    @app.exception_handler(ValueError)
    async def value_exception_handler(r: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"message": str(exc)})


@router.get("/info", response_model=schemas.ServerInfo, tags=["info"])
def get_info():
    return schemas.ServerInfo(
        public_address=settings.public_name,
        origin_bucket=settings.origin_bucket,
        derived_bucket=settings.derived_bucket,
    )


@router.post("/files", response_model=schemas.UploadResponse, tags=["files"])
def upload_file(
    params: schemas.UploadRequest,
    gateway: ObjectGateway = Depends(get_gateway),
):
    body, content_type = utils.decode_upload(params.file)
    result = gateway.store(params.file_key, body, content_type)
    if not result.succeeded:
        response = schemas.UploadResponse(
            message="File failed to upload", result=result
        )
        return JSONResponse(status_code=500, content=response.model_dump(mode="json"))
    message = "Successfully uploaded original file"
    if result.derived is not None and result.derived.ok:
        message += " and stored compressed image"
    return schemas.UploadResponse(message=message, result=result)


@router.get("/files/{file_key:path}", tags=["files"])
def download_file(
    file_key: str,
    variant: Optional[str] = None,
    gateway: ObjectGateway = Depends(get_gateway),
):
    result = gateway.fetch(file_key, want_derived=variant == COMPRESSED_VARIANT)
    return Response(
        content=result.body,
        # stored content type is served unchanged, no charset added
        headers={
            "Content-Type": result.content_type,
            "Cache-Control": f"public, max-age={settings.cache_max_age}",
        },
    )


@router.delete(
    "/files/{file_key:path}", response_model=schemas.RemoveResponse, tags=["files"]
)
def delete_file(
    file_key: str,
    gateway: ObjectGateway = Depends(get_gateway),
):
    result = gateway.remove(file_key, aggregate=True)
    return schemas.RemoveResponse(
        message="successfully deleted file from both stores", result=result
    )
