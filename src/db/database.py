from sqlalchemy import create_engine, Column, String, Float, Boolean, DateTime, Integer, Text, JSON
from sqlalchemy.orm import declarative_base, sessionmaker
from datetime import datetime, timezone
import uuid
import logging

from src import config

# Get logger
logger = logging.getLogger(__name__)

DATABASE_URL = config.DATABASE_URL
Base = declarative_base()


def new_id():
    return uuid.uuid4().hex


def utcnow():
    return datetime.now(timezone.utc)


# Accounts are owned by the identity subsystem; only id and role matter here
class UserDB(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    role = Column(String, nullable=False, default="user")
    created_at = Column(DateTime, default=utcnow)


# Define the Bootcamp table structure
class BootcampDB(Base):
    __tablename__ = "bootcamps"
    id = Column(String, primary_key=True, index=True, default=new_id)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String(50), nullable=False, unique=True)
    slug = Column(String, nullable=True)
    description = Column(String(500), nullable=False)
    website = Column(String, nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String, nullable=True)
    # Geocoded point, derived once from the address
    longitude = Column(Float, nullable=False, index=True)
    latitude = Column(Float, nullable=False, index=True)
    formatted_address = Column(String, nullable=True)
    street = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zipcode = Column(String, nullable=True)
    country = Column(String, nullable=True)
    careers = Column(JSON, nullable=False, default=list)
    average_rating = Column(Float, nullable=True)
    average_cost = Column(Float, nullable=True)
    photo = Column(String, default="no-photo.jpg")
    housing = Column(Boolean, default=False)
    job_assistance = Column(Boolean, default=False)
    job_guarantee = Column(Boolean, default=False)
    accept_gi = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utcnow)


# bootcamp_id is a plain reference so deleting a bootcamp leaves reviews to the cascade policy
class ReviewDB(Base):
    __tablename__ = "reviews"
    id = Column(String, primary_key=True, index=True, default=new_id)
    bootcamp_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String(100), nullable=False)
    text = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow)


_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def create_tables():
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created (if they didn't exist previously).")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
