from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from moviebook.core.config import DATABASE_URL

# Create SQLAlchemy engine for the seed target
engine = create_engine(DATABASE_URL)

# Session maker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base model for all ORM classes
Base = declarative_base()
