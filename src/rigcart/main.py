from __future__ import annotations

import logging
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Header, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api_client import ApiClient, static_token
from .auth import StaticTokenVerifier, check_admin_access
from .catalog import CatalogAccessor
from .config import ROOT, Settings, load_settings
from .db import ProductStore
from .errors import (
    CategoryMismatchError,
    ProductNotFoundError,
    ProductsNotFoundError,
    UnknownCategoryError,
)
from .filters import ProductFilter, brand_options, filter_products
from .logging_config import setup_logging
from .schemas import SelectRequest
from .service import BuilderService, CatalogLoader

load_dotenv(ROOT / ".env")

settings = load_settings()
setup_logging(settings.log_level, settings.log_json)
logger = logging.getLogger(__name__)

COMMIT_STATUS_CODES = {"completed": 200, "rejected": 409, "failed": 502}


def _build_catalog_loader(settings: Settings, store: ProductStore) -> CatalogLoader:
    if settings.catalog_url:
        client = ApiClient(
            settings.catalog_url,
            static_token(settings.api_token or None),
            timeout=settings.http_timeout_seconds,
        )
        return CatalogAccessor(client).fetch
    return store.all_products


store = ProductStore(settings.products_file)
verifier = StaticTokenVerifier.from_config(settings.api_tokens)
service = BuilderService(_build_catalog_loader(settings, store))

app = FastAPI(title="RigCart")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/products")
def list_products(
    brand: List[str] = Query(default=[]),
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    in_stock_only: bool = False,
):
    criteria = ProductFilter(
        brands=brand,
        min_price=min_price,
        max_price=max_price,
        in_stock_only=in_stock_only,
    )
    products = filter_products(store.all_products(), criteria)
    return [p.model_dump(exclude_none=True) for p in products]


@app.get("/api/products/brands")
def list_brands():
    return [o.model_dump() for o in brand_options(store.all_products())]


@app.delete("/api/products/{product_id}")
def delete_product(product_id: str, authorization: Optional[str] = Header(default=None)):
    if not check_admin_access(authorization, verifier):
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    product_id = product_id.strip()
    if not product_id:
        return JSONResponse({"error": "Product ID required"}, status_code=400)

    try:
        store.delete(product_id)
    except ProductsNotFoundError:
        return JSONResponse({"error": "Products not found"}, status_code=404)
    except ProductNotFoundError:
        return JSONResponse({"error": "Product not found"}, status_code=404)
    except Exception:
        logger.exception("Product delete error")
        return JSONResponse({"error": "Failed to delete product"}, status_code=500)

    logger.info("Deleted product %s", product_id)
    service.refresh()
    return {"success": True}


@app.get("/api/builder/categories")
def builder_categories():
    return [c.model_dump(exclude_none=True) for c in service.categories]


@app.post("/api/builder/refresh")
def builder_refresh():
    categories = service.refresh()
    return {"categories": len(categories)}


@app.get("/api/builder/{session_id}")
def builder_summary(session_id: str):
    return service.summary(session_id).model_dump()


@app.post("/api/builder/{session_id}/select")
def builder_select(session_id: str, payload: SelectRequest):
    try:
        summary = service.select(session_id, payload.category_id, str(payload.product_id))
    except (UnknownCategoryError, ProductNotFoundError) as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except CategoryMismatchError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return summary.model_dump()


@app.post("/api/builder/{session_id}/reset")
def builder_reset(session_id: str):
    return service.reset(session_id).model_dump()


@app.post("/api/builder/{session_id}/commit")
def builder_commit(session_id: str):
    result = service.commit(session_id)
    return JSONResponse(
        result.model_dump(), status_code=COMMIT_STATUS_CODES[result.status]
    )


@app.delete("/api/builder/{session_id}/{category_id}")
def builder_remove(session_id: str, category_id: str):
    return service.remove(session_id, category_id).model_dump()


@app.get("/api/cart/{session_id}")
def cart(session_id: str):
    return [item.model_dump() for item in service.cart_items(session_id)]
