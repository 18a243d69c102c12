# catalog/main.py
import json
import logging
from typing import Optional, Dict, Any, List

import uvicorn
from fastapi import FastAPI, Depends, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import ProductStore
from .faults import FaultInjector, FaultInjectionMiddleware
from .logic import (
    list_products_logic, get_product_logic,
    create_product_logic, update_product_logic
)
from .models import Product, ProductSummary, Message

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


async def json_body(request: Request) -> Dict[str, Any]:
    """
    Request body as a dict. A missing body, or one that is not sent as JSON,
    reads as {} so the handlers report missing fields themselves.
    """
    raw = await request.body()
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if not raw or not media_type.endswith("json"):
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Malformed JSON body")
    if not isinstance(data, dict):
        raise HTTPException(status_code=422, detail="Request body must be a JSON object")
    return data


JSON_OBJECT_BODY = {
    "requestBody": {
        "required": False,
        "content": {"application/json": {"schema": {"type": "object"}}},
    }
}


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"message": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ProductStore] = None,
    injector: Optional[FaultInjector] = None,
) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = ProductStore.from_file(settings.DATA_FILE)
    if injector is None:
        injector = FaultInjector(rate=settings.FAULT_RATE, enabled=settings.FAULT_INJECTION_ENABLED)

    app = FastAPI(title=settings.PROJECT_NAME, description="In-memory beer style catalog")
    app.state.store = store
    app.state.injector = injector

    app.add_middleware(FaultInjectionMiddleware, injector=injector)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    if settings.DOC_DIR.is_dir():
        app.mount("/doc", StaticFiles(directory=str(settings.DOC_DIR), html=True), name="doc")
    else:
        logger.warning("Documentation directory %s not found, /doc is disabled", settings.DOC_DIR)

    # ---------------------------
    # Health
    # ---------------------------
    @app.get("/", include_in_schema=False)
    async def root():
        return Response(status_code=200)

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/products", responses={200: {"model": List[ProductSummary]}})
    async def list_products(store: ProductStore = Depends(get_store)):
        return await list_products_logic(store)

    @app.get("/products/{product_id}", responses={200: {"model": Product}, 404: {"model": Message}})
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return await get_product_logic(store, product_id)

    @app.post("/products", status_code=201, openapi_extra=JSON_OBJECT_BODY,
              responses={201: {"model": Product}, 400: {"model": Message}})
    async def create_product(body: Dict[str, Any] = Depends(json_body), store: ProductStore = Depends(get_store)):
        return await create_product_logic(store, body)

    @app.put("/products/{product_id}", openapi_extra=JSON_OBJECT_BODY,
             responses={200: {"model": Product}, 404: {"model": Message}})
    async def update_product(product_id: str, body: Dict[str, Any] = Depends(json_body),
                             store: ProductStore = Depends(get_store)):
        return await update_product_logic(store, product_id, body)

    return app


app = create_app()


def main():
    settings = get_settings()
    logger.info("listening on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
