from sqlalchemy import ForeignKey, String, Text, DateTime, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from datetime import datetime
from typing import Optional


class Base(DeclarativeBase):
    pass

class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), primary_key=True)
    password: Mapped[str] = mapped_column(String(100), nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    join_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

class Message(Base):
    __tablename__ = "messages"

    __table_args__ = (
        Index('ix_messages_from_sent_at', 'from_username', 'sent_at'),
        Index('ix_messages_to_sent_at', 'to_username', 'sent_at'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    from_username: Mapped[str] = mapped_column(ForeignKey("users.username"), nullable=False)
    to_username: Mapped[str] = mapped_column(ForeignKey("users.username"), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    read_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
