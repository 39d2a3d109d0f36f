import logging
import os
import re
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union
from uuid import uuid4

from bson import ObjectId
from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import EmailStr, Field
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import (
    create_token,
    get_current_user,
    get_current_user_id,
    hash_password,
    public_user,
    require_admin,
    verify_password,
)
from checkout import order_total, whatsapp_link, whatsapp_message
from database import create_document, db, ensure_indexes, get_documents
from schemas import (
    Brand as BrandSchema,
    CamelModel,
    Category as CategorySchema,
    Offer as OfferSchema,
    Order as OrderSchema,
    OrderItem,
    OrderStatus,
    Product as ProductSchema,
    ProductCategory,
    ProductModel as ProductModelSchema,
    Review as ReviewSchema,
    User as UserSchema,
    Variant as VariantSchema,
)
from seed import seed_database
from variants import resolve_selection

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(os.getenv("STATIC_DIR", "dist"))
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "uploads"))
AUTO_SEED = os.getenv("AUTO_SEED", "false").lower() in ("1", "true", "yes")
ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".avif"}
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))


@asynccontextmanager
async def lifespan(app: FastAPI):
    if db is None:
        logger.warning("MONGODB_URI is empty; running without a database")
    else:
        ensure_indexes()
        if AUTO_SEED:
            seed_database()
    yield


app = FastAPI(title="Aaro Storefront API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(UPLOAD_DIR)), name="uploads")


# ----------------------- Errors -----------------------
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    return JSONResponse(status_code=400, content={"message": message, "errors": jsonable_encoder(errors)})


@app.exception_handler(DuplicateKeyError)
async def duplicate_key_error(request: Request, exc: DuplicateKeyError):
    return JSONResponse(status_code=400, content={"message": "Duplicate value"})


@app.exception_handler(PyMongoError)
async def database_error(request: Request, exc: PyMongoError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Database error"})


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ----------------------- Utils -----------------------
def _jsonable(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def serialize_doc(doc):
    if not doc:
        return doc
    doc = dict(doc)
    doc.pop("passwordHash", None)
    _id = doc.pop("_id", None)
    out = {k: _jsonable(v) for k, v in doc.items()}
    if _id is not None:
        out["id"] = str(_id)
        out["_id"] = str(_id)
    return out


def now():
    return datetime.now(timezone.utc)


def parse_oid(value: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail="Invalid id")
    return ObjectId(value)


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def get_or_404(collection: str, doc_id: str, label: str) -> dict:
    doc = db[collection].find_one({"_id": parse_oid(doc_id)})
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return doc


def update_or_404(collection: str, doc_id: str, changes: dict, label: str) -> dict:
    changes["updatedAt"] = now()
    doc = db[collection].find_one_and_update(
        {"_id": parse_oid(doc_id)},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return doc


def delete_or_404(collection: str, doc_id: str, label: str) -> dict:
    doc = db[collection].find_one_and_delete({"_id": parse_oid(doc_id)})
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return doc


def insert_and_fetch(collection: str, data) -> dict:
    new_id = create_document(collection, data)
    return db[collection].find_one({"_id": ObjectId(new_id)})


def refresh_counts(category: Optional[str] = None, brand: Optional[str] = None):
    """Recompute the denormalized productCount of a category slug and a brand name."""
    if category:
        count = db["product"].count_documents({"category": category})
        db["category"].update_one({"slug": category}, {"$set": {"productCount": count}})
    if brand:
        count = db["product"].count_documents({"brand": brand})
        db["brand"].update_many({"name": brand}, {"$set": {"productCount": count}})


def changes_from(body: CamelModel) -> dict:
    return body.model_dump(by_alias=True, exclude_none=True)


# ----------------------- Models -----------------------
class RegisterBody(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: Optional[str] = None


class LoginBody(CamelModel):
    email: EmailStr
    password: str


class ProfileBody(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class ProductUpdateBody(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = None
    category: Optional[ProductCategory] = None
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    images: Optional[List[str]] = None
    specifications: Optional[Union[List[str], Dict[str, str]]] = None
    features: Optional[List[str]] = None
    video_url: Optional[str] = None
    is_featured: Optional[bool] = None
    is_trending: Optional[bool] = None
    model_id: Optional[str] = None
    tag: Optional[str] = None


class CategoryBody(CamelModel):
    name: str = Field(..., min_length=1)
    slug: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryUpdateBody(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class BrandBody(CategoryBody):
    category: Optional[str] = None


class BrandUpdateBody(CategoryUpdateBody):
    category: Optional[str] = None


class OfferUpdateBody(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    discount: Optional[float] = Field(None, ge=0, le=100)
    code: Optional[str] = None
    image: Optional[str] = None
    active: Optional[bool] = None
    tag: Optional[str] = None


class ReviewBody(CamelModel):
    product_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""
    name: Optional[str] = None


class ProductModelUpdateBody(CamelModel):
    name: Optional[str] = None
    category: Optional[ProductCategory] = None
    brand: Optional[str] = None
    specifications_template: Optional[Dict[str, str]] = None
    features_template: Optional[List[str]] = None


class VariantUpdateBody(CamelModel):
    ram: Optional[str] = None
    storage: Optional[str] = None
    color: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    sku: Optional[str] = None
    is_available: Optional[bool] = None


class OrderCreateBody(CamelModel):
    items: List[OrderItem] = Field(..., min_length=1)
    shipping_address: str = Field(..., min_length=1)
    total_amount: Optional[float] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class OrderStatusBody(CamelModel):
    status: OrderStatus


# ----------------------- Health -----------------------
@app.get("/api/health")
def health():
    response = {
        "backend": "running",
        "database": "not available",
        "database_url": "set" if os.getenv("MONGODB_URI") else "default",
        "connection_status": "Not Connected",
        "collections": [],
    }
    try:
        if db is not None:
            response["collections"] = db.list_collection_names()[:10]
            response["database"] = "connected"
            response["connection_status"] = "Connected"
    except PyMongoError as e:
        response["database"] = f"error: {str(e)[:80]}"
    return response


# ----------------------- Auth -----------------------
@app.post("/api/auth/register", status_code=201)
def register(body: RegisterBody):
    email = body.email.lower()
    if db["user"].find_one({"email": email}):
        raise HTTPException(status_code=400, detail="User already exists")
    user = UserSchema(
        name=body.name,
        email=email,
        password_hash=hash_password(body.password),
        phone=body.phone,
        role="customer",
    )
    user_id = create_document("user", user)
    logger.info("Registered user %s", email)
    created = db["user"].find_one({"_id": ObjectId(user_id)})
    return {"token": create_token(user_id), "user": public_user(created)}


@app.post("/api/auth/login")
def login(body: LoginBody):
    user = db["user"].find_one({"email": body.email.lower()})
    if not user or not verify_password(body.password, user.get("passwordHash")):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"token": create_token(str(user["_id"])), "user": public_user(user)}


@app.put("/api/auth/profile")
def update_profile(body: ProfileBody, user=Depends(get_current_user)):
    changes = changes_from(body)
    if "email" in changes:
        changes["email"] = changes["email"].lower()
        taken = db["user"].find_one({"email": changes["email"], "_id": {"$ne": user["_id"]}})
        if taken:
            raise HTTPException(status_code=400, detail="Email already in use")
    updated = update_or_404("user", str(user["_id"]), changes, "User")
    return {"message": "Profile updated", "user": public_user(updated)}


# ----------------------- Products -----------------------
@app.get("/api/products")
def list_products(
    q: Optional[str] = None,
    category: Optional[ProductCategory] = None,
    brand: Optional[str] = None,
    featured: Optional[bool] = None,
    trending: Optional[bool] = None,
):
    filt = {}
    if q:
        filt["name"] = {"$regex": re.escape(q), "$options": "i"}
    if category:
        filt["category"] = category
    if brand:
        filt["brand"] = brand
    if featured is not None:
        filt["isFeatured"] = featured
    if trending is not None:
        filt["isTrending"] = trending
    return [serialize_doc(p) for p in db["product"].find(filt)]


@app.get("/api/products/{product_id}")
def get_product(product_id: str):
    return serialize_doc(get_or_404("product", product_id, "Product"))


@app.post("/api/products", status_code=201)
def create_product(body: ProductSchema, admin=Depends(require_admin)):
    created = insert_and_fetch("product", body)
    refresh_counts(created["category"], created["brand"])
    logger.info("Product %s created by %s", created["_id"], admin["email"])
    return serialize_doc(created)


@app.put("/api/products/{product_id}")
def update_product(product_id: str, body: ProductUpdateBody, admin=Depends(require_admin)):
    before = get_or_404("product", product_id, "Product")
    changes = changes_from(body)
    if "rating" in changes or "reviewCount" in changes:
        rating = changes.get("rating", before.get("rating", 0))
        changes["ratingTotal"] = rating * changes.get("reviewCount", before.get("reviewCount", 0))
    updated = update_or_404("product", product_id, changes, "Product")
    refresh_counts(before["category"], before["brand"])
    if (updated["category"], updated["brand"]) != (before["category"], before["brand"]):
        refresh_counts(updated["category"], updated["brand"])
    return serialize_doc(updated)


@app.delete("/api/products/{product_id}")
def delete_product(product_id: str, admin=Depends(require_admin)):
    removed = delete_or_404("product", product_id, "Product")
    db["variant"].delete_many({"productId": product_id})
    db["review"].delete_many({"productId": product_id})
    refresh_counts(removed["category"], removed["brand"])
    logger.info("Product %s deleted by %s", product_id, admin["email"])
    return {"message": "Product deleted"}


# ----------------------- Categories -----------------------
def _resolve_slug(collection: str, requested: Optional[str], name: str, exclude=None) -> str:
    slug = slugify(requested or name)
    if not slug:
        raise HTTPException(status_code=400, detail="Slug is required")
    filt = {"slug": slug}
    if exclude is not None:
        filt["_id"] = {"$ne": exclude}
    if db[collection].find_one(filt):
        raise HTTPException(status_code=400, detail=f"{collection.capitalize()} slug already exists")
    return slug


@app.get("/api/categories")
def list_categories():
    return [serialize_doc(c) for c in get_documents("category")]


@app.get("/api/categories/{category_id}")
def get_category(category_id: str):
    return serialize_doc(get_or_404("category", category_id, "Category"))


@app.post("/api/categories", status_code=201)
def create_category(body: CategoryBody, admin=Depends(require_admin)):
    slug = _resolve_slug("category", body.slug, body.name)
    category = CategorySchema(
        name=body.name,
        slug=slug,
        description=body.description,
        image=body.image,
        product_count=db["product"].count_documents({"category": slug}),
    )
    return serialize_doc(insert_and_fetch("category", category))


@app.put("/api/categories/{category_id}")
def update_category(category_id: str, body: CategoryUpdateBody, admin=Depends(require_admin)):
    changes = changes_from(body)
    if "slug" in changes:
        changes["slug"] = _resolve_slug("category", changes["slug"], "", exclude=parse_oid(category_id))
        changes["productCount"] = db["product"].count_documents({"category": changes["slug"]})
    return serialize_doc(update_or_404("category", category_id, changes, "Category"))


@app.delete("/api/categories/{category_id}")
def delete_category(category_id: str, admin=Depends(require_admin)):
    delete_or_404("category", category_id, "Category")
    return {"message": "Category deleted"}


# ----------------------- Brands -----------------------
@app.get("/api/brands")
def list_brands(category: Optional[str] = None):
    filt = {"category": category} if category else {}
    return [serialize_doc(b) for b in get_documents("brand", filt)]


@app.get("/api/brands/{brand_id}")
def get_brand(brand_id: str):
    return serialize_doc(get_or_404("brand", brand_id, "Brand"))


@app.post("/api/brands", status_code=201)
def create_brand(body: BrandBody, admin=Depends(require_admin)):
    brand = BrandSchema(
        name=body.name,
        slug=_resolve_slug("brand", body.slug, body.name),
        category=body.category,
        description=body.description,
        image=body.image,
        product_count=db["product"].count_documents({"brand": body.name}),
    )
    return serialize_doc(insert_and_fetch("brand", brand))


@app.put("/api/brands/{brand_id}")
def update_brand(brand_id: str, body: BrandUpdateBody, admin=Depends(require_admin)):
    changes = changes_from(body)
    if "slug" in changes:
        changes["slug"] = _resolve_slug("brand", changes["slug"], "", exclude=parse_oid(brand_id))
    if "name" in changes:
        changes["productCount"] = db["product"].count_documents({"brand": changes["name"]})
    return serialize_doc(update_or_404("brand", brand_id, changes, "Brand"))


@app.delete("/api/brands/{brand_id}")
def delete_brand(brand_id: str, admin=Depends(require_admin)):
    delete_or_404("brand", brand_id, "Brand")
    return {"message": "Brand deleted"}


# ----------------------- Offers -----------------------
@app.get("/api/offers")
def list_offers():
    return [serialize_doc(o) for o in get_documents("offer")]


@app.get("/api/offers/active")
def active_offer():
    offer = db["offer"].find_one({"active": True})
    if not offer:
        raise HTTPException(status_code=404, detail="No active offer")
    return serialize_doc(offer)


@app.post("/api/offers", status_code=201)
def create_offer(body: OfferSchema, admin=Depends(require_admin)):
    return serialize_doc(insert_and_fetch("offer", body))


@app.put("/api/offers/{offer_id}")
def update_offer(offer_id: str, body: OfferUpdateBody, admin=Depends(require_admin)):
    return serialize_doc(update_or_404("offer", offer_id, changes_from(body), "Offer"))


@app.delete("/api/offers/{offer_id}")
def delete_offer(offer_id: str, admin=Depends(require_admin)):
    delete_or_404("offer", offer_id, "Offer")
    return {"message": "Offer deleted"}


# ----------------------- Reviews -----------------------
def rating_total(product: dict) -> float:
    """Unrounded sum of review ratings; seeded products only carry rating and reviewCount."""
    if "ratingTotal" in product:
        return product["ratingTotal"]
    return product.get("rating", 0) * product.get("reviewCount", 0)


def apply_review(product: dict, rating_delta: int, count_delta: int):
    count = product.get("reviewCount", 0) + count_delta
    total = rating_total(product) + rating_delta
    if count <= 0:
        count, total = 0, 0
    rating = min(max(total / count, 0), 5) if count else 0
    db["product"].update_one(
        {"_id": product["_id"]},
        {"$set": {"rating": round(rating, 1), "reviewCount": count, "ratingTotal": total}},
    )


@app.get("/api/reviews/{product_id}")
def list_reviews(product_id: str):
    docs = get_documents("review", {"productId": product_id}, sort=[("createdAt", -1)])
    return [serialize_doc(r) for r in docs]


@app.post("/api/reviews", status_code=201)
def create_review(body: ReviewBody, user=Depends(get_current_user)):
    product = get_or_404("product", body.product_id, "Product")
    review = ReviewSchema(
        product_id=body.product_id,
        name=body.name or user.get("name"),
        comment=body.comment,
        rating=body.rating,
    )
    created = insert_and_fetch("review", review)
    apply_review(product, body.rating, 1)
    return serialize_doc(created)


@app.delete("/api/reviews/{review_id}")
def delete_review(review_id: str, admin=Depends(require_admin)):
    review = delete_or_404("review", review_id, "Review")
    product = db["product"].find_one({"_id": parse_oid(review["productId"])})
    if product:
        apply_review(product, -review["rating"], -1)
    return {"message": "Review deleted"}


# ----------------------- Product models -----------------------
@app.get("/api/models")
def list_models(category: Optional[ProductCategory] = None):
    filt = {"category": category} if category else {}
    return [serialize_doc(m) for m in get_documents("productmodel", filt)]


@app.post("/api/models", status_code=201)
def create_model(body: ProductModelSchema, admin=Depends(require_admin)):
    return serialize_doc(insert_and_fetch("productmodel", body))


@app.put("/api/models/{model_id}")
def update_model(model_id: str, body: ProductModelUpdateBody, admin=Depends(require_admin)):
    return serialize_doc(update_or_404("productmodel", model_id, changes_from(body), "Model"))


@app.delete("/api/models/{model_id}")
def delete_model(model_id: str, admin=Depends(require_admin)):
    delete_or_404("productmodel", model_id, "Model")
    return {"message": "Model deleted"}


# ----------------------- Variants -----------------------
def _variants_for(product_id: str) -> List[dict]:
    return list(db["variant"].find({"productId": product_id}))


@app.get("/api/variants/{product_id}")
def list_variants(product_id: str):
    return [serialize_doc(v) for v in _variants_for(product_id)]


@app.get("/api/variants/{product_id}/options")
def variant_options(
    product_id: str,
    ram: Optional[str] = None,
    storage: Optional[str] = None,
    color: Optional[str] = None,
):
    get_or_404("product", product_id, "Product")
    result = resolve_selection(_variants_for(product_id), ram=ram, storage=storage, color=color)
    result["selected"] = serialize_doc(result["selected"])
    return result


@app.post("/api/variants", status_code=201)
def create_variant(body: VariantSchema, admin=Depends(require_admin)):
    get_or_404("product", body.product_id, "Product")
    if not body.sku:
        parts = [body.product_id[-6:], body.ram, body.storage, body.color]
        body.sku = "-".join(re.sub(r"\s+", "", p) for p in parts).upper()
    return serialize_doc(insert_and_fetch("variant", body))


@app.put("/api/variants/{variant_id}")
def update_variant(variant_id: str, body: VariantUpdateBody, admin=Depends(require_admin)):
    return serialize_doc(update_or_404("variant", variant_id, changes_from(body), "Variant"))


@app.delete("/api/variants/{variant_id}")
def delete_variant(variant_id: str, admin=Depends(require_admin)):
    delete_or_404("variant", variant_id, "Variant")
    return {"message": "Variant deleted"}


# ----------------------- Orders -----------------------
@app.post("/api/orders", status_code=201)
def create_order(body: OrderCreateBody, user=Depends(get_current_user)):
    total = order_total(body.items)
    if body.total_amount is not None and abs(body.total_amount - total) > 0.01:
        raise HTTPException(status_code=400, detail="Total mismatch")
    order = OrderSchema(
        user_id=str(user["_id"]),
        items=body.items,
        total_amount=total,
        shipping_address=body.shipping_address,
    )
    created = serialize_doc(insert_and_fetch("order", order))
    logger.info("Order %s placed by %s for %s", created["id"], user["email"], total)

    message = whatsapp_message(
        body.items,
        total,
        body.shipping_address,
        name=body.name or user.get("name"),
        phone=body.phone or user.get("phone"),
    )
    created["whatsappLink"] = whatsapp_link(message)
    return created


@app.get("/api/orders")
def my_orders(user_id: str = Depends(get_current_user_id)):
    docs = get_documents("order", {"userId": user_id}, sort=[("createdAt", -1)])
    return [serialize_doc(o) for o in docs]


# ----------------------- Admin -----------------------
@app.get("/api/admin/orders")
def all_orders(admin=Depends(require_admin)):
    orders = list(db["order"].find().sort("createdAt", -1))
    user_ids = {ObjectId(o["userId"]) for o in orders if ObjectId.is_valid(o.get("userId", ""))}
    customers = {
        str(u["_id"]): {"name": u.get("name"), "email": u.get("email"), "phone": u.get("phone")}
        for u in db["user"].find({"_id": {"$in": list(user_ids)}})
    }
    result = []
    for o in orders:
        item = serialize_doc(o)
        item["customer"] = customers.get(o.get("userId"))
        result.append(item)
    return result


@app.put("/api/admin/orders/{order_id}")
def update_order_status(order_id: str, body: OrderStatusBody, admin=Depends(require_admin)):
    updated = update_or_404("order", order_id, {"status": body.status}, "Order")
    logger.info("Order %s set to %s by %s", order_id, body.status, admin["email"])
    return serialize_doc(updated)


@app.get("/api/admin/stats")
def admin_stats(admin=Depends(require_admin)):
    revenue = list(db["order"].aggregate([{"$group": {"_id": None, "total": {"$sum": "$totalAmount"}}}]))
    return {
        "users": db["user"].count_documents({}),
        "products": db["product"].count_documents({}),
        "orders": db["order"].count_documents({}),
        "pendingOrders": db["order"].count_documents({"status": "Pending"}),
        "revenue": revenue[0]["total"] if revenue else 0,
    }


@app.post("/api/upload", status_code=201)
async def upload_image(image: UploadFile = File(...), admin=Depends(require_admin)):
    ext = Path(image.filename or "").suffix.lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Only image files are allowed")
    data = await image.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Image is too large")
    name = f"{uuid4().hex}{ext}"
    (UPLOAD_DIR / name).write_bytes(data)
    logger.info("Image %s uploaded by %s", name, admin["email"])
    return {"url": f"/uploads/{name}"}


# ----------------------- Seed Demo Data -----------------------
@app.post("/api/seed")
def seed():
    inserted = seed_database()
    return {"seeded": inserted["products"] > 0, **inserted}


# ----------------------- SPA -----------------------
API_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@app.api_route("/api", methods=API_METHODS, include_in_schema=False)
@app.api_route("/api/{rest:path}", methods=API_METHODS, include_in_schema=False)
def api_not_found(rest: str = ""):
    raise HTTPException(status_code=404, detail="Not found")


@app.get("/{full_path:path}", include_in_schema=False)
def spa(full_path: str):
    root = STATIC_DIR.resolve()
    if full_path:
        candidate = (root / full_path).resolve()
        if candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)
    index = root / "index.html"
    if index.is_file():
        return FileResponse(index)
    if not full_path:
        return {"message": "Aaro storefront API running"}
    raise HTTPException(status_code=404, detail="Not found")


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 5000))
    uvicorn.run(app, host="0.0.0.0", port=port)
