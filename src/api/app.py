from fastapi import FastAPI, APIRouter, Body, Depends, File, Header, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import logging
from typing import Optional

from src import config
from src.db.database import get_db
from src.geocoding.nominatim import geocode
from src.models.account import Actor, Role, user_to_dict
from src.models.bootcamp import bootcamp_to_dict
from src.models.review import review_to_dict
from src.services import bootcamps, reviews, users
from src.services.authorization import ensure_role
from src.services.errors import ServiceError

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="DevCamper API",
    description="Bootcamp directory with reviews, ownership checks and radius search",
    version="1.0.0"
)

router = APIRouter(prefix="/api/v1")


# Dependencies
def get_geocoder():
    return geocode


def get_current_actor(x_user_id: Optional[str] = Header(None), db: Session = Depends(get_db)) -> Actor:
    return users.resolve_actor(db, x_user_id)


def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    ensure_role(actor, Role.ADMIN)
    return actor


def envelope(data, count=None):
    body = {"success": True, "data": data}
    if count is not None:
        body["count"] = count
    return body


# Request logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url}")
    return await call_next(request)


# Error mapping
def _error_response(status_code, message):
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
    return _error_response(400, f"Invalid value for: {', '.join(fields)}")


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return _error_response(400, "Duplicate field value entered")


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {str(exc)}")
    return _error_response(500, "Server Error")


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.url.path}: {str(exc)}", exc_info=exc)
    return _error_response(500, "Server Error")


@app.get("/")
def read_root():
    return {"message": "Welcome to the DevCamper API"}


# Bootcamps
@router.get("/bootcamps")
def get_bootcamps(db: Session = Depends(get_db)):
    items = bootcamps.list_bootcamps(db)
    return envelope([bootcamp_to_dict(b) for b in items], count=len(items))


@router.get("/bootcamps/radius/{zipcode}/{distance}")
def get_bootcamps_in_radius(
    zipcode: str,
    distance: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    geocoder=Depends(get_geocoder),
):
    logger.info(f"zipcode: {zipcode}  distance: {distance}")
    items = bootcamps.bootcamps_in_radius(db, zipcode, distance, geocoder)
    return envelope([bootcamp_to_dict(b) for b in items], count=len(items))


@router.get("/bootcamps/{bootcamp_id}")
def get_bootcamp(bootcamp_id: str, db: Session = Depends(get_db)):
    return envelope(bootcamp_to_dict(bootcamps.get_bootcamp(db, bootcamp_id)))


@router.post("/bootcamps", status_code=201)
def create_bootcamp(
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    geocoder=Depends(get_geocoder),
):
    bootcamp = bootcamps.create_bootcamp(db, actor, payload, geocoder)
    return envelope(bootcamp_to_dict(bootcamp))


@router.put("/bootcamps/{bootcamp_id}")
def update_bootcamp(
    bootcamp_id: str,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    bootcamp = bootcamps.update_bootcamp(db, actor, bootcamp_id, payload)
    return envelope(bootcamp_to_dict(bootcamp))


@router.delete("/bootcamps/{bootcamp_id}")
def delete_bootcamp(bootcamp_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    bootcamps.delete_bootcamp(db, actor, bootcamp_id, cascade_reviews=config.CASCADE_DELETE_REVIEWS)
    return envelope({})


@router.put("/bootcamps/{bootcamp_id}/photo")
def upload_bootcamp_photo(
    bootcamp_id: str,
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    if file is None:
        filename, media_type, size, stream = None, None, 0, None
    else:
        filename, media_type, size, stream = file.filename, file.content_type or "", file.size, file.file
    stored_name = bootcamps.upload_bootcamp_photo(
        db, actor, bootcamp_id, filename, media_type, size, stream,
        max_size=config.MAX_FILE_UPLOAD,
        upload_path=config.FILE_UPLOAD_PATH,
    )
    return envelope(stored_name)


# Reviews
@router.get("/bootcamps/{bootcamp_id}/reviews")
def get_bootcamp_reviews(bootcamp_id: str, db: Session = Depends(get_db)):
    items = reviews.list_reviews(db, bootcamp_id=bootcamp_id)
    return envelope([review_to_dict(r) for r in items], count=len(items))


@router.post("/bootcamps/{bootcamp_id}/reviews", status_code=201)
def add_review(
    bootcamp_id: str,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return envelope(review_to_dict(reviews.create_review(db, actor, bootcamp_id, payload)))


@router.get("/reviews")
def get_reviews(db: Session = Depends(get_db)):
    items = reviews.list_reviews(db)
    return envelope([review_to_dict(r) for r in items], count=len(items))


@router.get("/reviews/{review_id}")
def get_review(review_id: str, db: Session = Depends(get_db)):
    review, bootcamp = reviews.get_review(db, review_id)
    return envelope(review_to_dict(review, bootcamp))


@router.put("/reviews/{review_id}")
def update_review(
    review_id: str,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return envelope(review_to_dict(reviews.update_review(db, actor, review_id, payload)))


@router.delete("/reviews/{review_id}")
def delete_review(review_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    reviews.delete_review(db, actor, review_id)
    return envelope({})


# Users (admin only)
@router.get("/auth/users", dependencies=[Depends(require_admin)])
def get_users(db: Session = Depends(get_db)):
    items = users.list_users(db)
    return envelope([user_to_dict(u) for u in items], count=len(items))


@router.get("/auth/users/{user_id}", dependencies=[Depends(require_admin)])
def get_user(user_id: str, db: Session = Depends(get_db)):
    return envelope(user_to_dict(users.get_user(db, user_id)))


@router.post("/auth/users", status_code=201, dependencies=[Depends(require_admin)])
def create_user(payload: dict = Body(...), db: Session = Depends(get_db)):
    return envelope(user_to_dict(users.create_user(db, payload)))


@router.put("/auth/users/{user_id}", dependencies=[Depends(require_admin)])
def update_user(user_id: str, payload: dict = Body(...), db: Session = Depends(get_db)):
    return envelope(user_to_dict(users.update_user(db, user_id, payload)))


@router.delete("/auth/users/{user_id}", dependencies=[Depends(require_admin)])
def delete_user(user_id: str, db: Session = Depends(get_db)):
    users.delete_user(db, user_id)
    return envelope({})


app.include_router(router)
