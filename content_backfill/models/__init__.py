"""SQLAlchemy database models for the content backfill scraper."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from .extraction import ExtractionRecord, ScrapeStatus

Base = declarative_base()


class Article(Base):
    """Discovered article metadata, written by upstream ingestion."""

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(String, index=True)
    title = Column(Text)
    description = Column(Text)
    author = Column(String)
    publication_name = Column(String)
    publication_date = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    contents = relationship(
        "ArticleContent",
        back_populates="article",
        order_by="ArticleContent.id",
    )


class ArticleContent(Base):
    """Extracted body text plus per-strategy scrape status.

    Each status column is a nullable boolean: NULL means the strategy has
    not been attempted, TRUE means it succeeded and FALSE means it failed.
    """

    __tablename__ = "article_contents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(
        Integer,
        ForeignKey("articles.id"),
        nullable=False,
        index=True,
    )
    content = Column(Text, nullable=False, default="")
    scrape_status_lightweight = Column(Boolean, nullable=True)
    scrape_status_robust = Column(Boolean, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    article = relationship("Article", back_populates="contents")

    __table_args__ = (
        UniqueConstraint("article_id", name="uq_article_contents_article_id"),
    )


# Database utilities


def create_database_engine(database_url: str = "sqlite:///data/newsnexus.db"):
    """Create SQLAlchemy engine with proper configuration."""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"timeout": 30},
            echo=False,
        )
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,
            echo=False,
        )

    return engine


def create_tables(engine):
    """Create all tables in the database."""
    Base.metadata.create_all(engine)


def get_session(engine):
    """Get a database session."""
    Session = sessionmaker(bind=engine)
    return Session()


__all__ = [
    "Article",
    "ArticleContent",
    "Base",
    "ExtractionRecord",
    "ScrapeStatus",
    "create_database_engine",
    "create_tables",
    "get_session",
]
