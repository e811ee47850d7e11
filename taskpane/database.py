"""
Database layer for TaskPane.

Provides SQLAlchemy ORM models, async engine/session management, and database
initialization for SQLite persistence.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from taskpane.logging_config import get_logger

logger = get_logger(__name__)

_DATA_DIR = Path.home() / ".taskpane"
DEFAULT_DB_PATH = _DATA_DIR / "taskpane.db"
DEFAULT_DB_URL = f"sqlite+aiosqlite:///{DEFAULT_DB_PATH}"


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class TaskListORM(Base):
    """
    SQLAlchemy ORM model for task lists.

    Corresponds to the TaskList Pydantic model.
    """
    __tablename__ = "task_lists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    tasks: Mapped[list["TaskORM"]] = relationship(
        "TaskORM",
        back_populates="task_list",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<TaskListORM(id={self.id}, name={self.name})>"


class TaskORM(Base):
    """
    SQLAlchemy ORM model for tasks.

    Status and priority are stored as their enum values. Position keeps
    the display order within a list.
    """
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="not_started")
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    list_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("task_lists.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    task_list: Mapped["TaskListORM"] = relationship("TaskListORM", back_populates="tasks")

    def __repr__(self) -> str:
        return f"<TaskORM(id={self.id}, title={self.title}, status={self.status})>"


class DatabaseManager:
    """
    Manages database connections and session lifecycle.

    Handles async engine creation, session management, and database
    initialization for both production and testing scenarios.
    """

    def __init__(self, database_url: str = DEFAULT_DB_URL):
        """
        Initialize database manager with connection URL.

        Args:
            database_url: SQLAlchemy database URL (default: local SQLite file)
        """
        self.database_url = database_url
        self.engine: Optional[AsyncEngine] = None
        self.session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    async def initialize(self) -> None:
        """
        Initialize the database engine and create tables.
        """
        try:
            logger.info(f"Initializing database: {self.database_url}")
            if self.database_url == DEFAULT_DB_URL:
                _DATA_DIR.mkdir(parents=True, exist_ok=True)

            self.engine = create_async_engine(self.database_url, echo=False)
            self.session_maker = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )

            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}", exc_info=True)
            raise

    async def close(self) -> None:
        """
        Close the database engine and cleanup resources.
        """
        if self.engine:
            logger.info("Closing database connection")
            await self.engine.dispose()
            self.engine = None
            self.session_maker = None

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Commits when the block exits cleanly, rolls back and re-raises otherwise.

        Yields:
            AsyncSession for database operations

        Example:
            async with db_manager.get_session() as session:
                result = await session.execute(select(TaskORM))
        """
        if not self.session_maker:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")

        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logger.error(f"Database session error, rolling back: {e}", exc_info=True)
                await session.rollback()
                raise

