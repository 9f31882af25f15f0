import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import create_db_and_tables
from app.exceptions import OrderStatusError
from app.routes import admin, auth, health, orders, products, rider, users
from app.utils.responses import create_response

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.env == "local":
        create_db_and_tables()
    yield


app = FastAPI(title="Zuvees Storefront API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------- ERROR ENVELOPES --------

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=create_response(False, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(OrderStatusError)
async def order_status_error_handler(request: Request, exc: OrderStatusError):
    return JSONResponse(
        status_code=exc.status_code,
        content=create_response(False, exc.message),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(p) for p in err["loc"] if p != "body"),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    content = create_response(False, "Validation Error")
    content["errors"] = errors
    return JSONResponse(status_code=400, content=jsonable_encoder(content))


# -------- ROUTERS --------

app.include_router(health.router, prefix="/health", tags=["Health"])
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(products.public_router, prefix="/products", tags=["Products"])
app.include_router(products.router, prefix="/products", tags=["Admin Products"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])
app.include_router(rider.router, prefix="/rider", tags=["Rider"])
app.include_router(users.router, prefix="/users", tags=["Users"])


@app.get("/")
def root():
    return {
        "auth_endpoints": ["/auth/google", "/auth/me", "/auth/check-approval"],
        "product_endpoints": ["/products", "/products/{product_id}"],
        "order_endpoints": [
            "/orders", "/orders/{order_id}",
            "/orders/{order_id}/status", "/orders/{order_id}/cancel",
        ],
        "admin_endpoints": [
            "/admin/dashboard", "/admin/orders", "/admin/orders/{order_id}",
            "/admin/orders/{order_id}/status", "/admin/orders/{order_id}/assign",
            "/admin/approved-emails", "/admin/riders",
        ],
        "rider_endpoints": ["/rider/orders", "/rider/orders/{order_id}", "/rider/dashboard"],
        "user_endpoints": ["/users/profile", "/users/riders", "/users/check-email"],
    }
