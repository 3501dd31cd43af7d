from datetime import datetime, timezone
import logging

from sqlalchemy import select, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import aliased

from messagely.encryption import PasswordHash
from .database import User, Message
from .interfaces import UserInterface, MessageInterface
from .dto import (
    UserDTO,
    UserSummaryDTO,
    UserDetailDTO,
    SentMessageDTO,
    ReceivedMessageDTO,
    MessageDTO,
    MessageDetailDTO,
)
from .exceptions import NotFoundError
from .db_manager import BaseDatabaseManager


def utcnow() -> datetime:
    """ Naive UTC, the form every timestamp column stores """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _summary(user: User) -> UserSummaryDTO:
    return UserSummaryDTO(
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        phone=user.phone
    )


class UserGateway(UserInterface):
    __slots__ = ("_db_manager", "_password_hash", "_logger")

    def __init__(
            self,
            db_manager: BaseDatabaseManager,
            password_hash: PasswordHash,
            logger: logging.Logger | None = None
    ):
        self._db_manager = db_manager
        self._password_hash = password_hash
        self._logger = logger or logging.getLogger(__name__)

    async def register(
            self,
            username: str,
            password: str,
            first_name: str,
            last_name: str,
            phone: str
    ) -> UserDTO:
        hashed_password = await self._password_hash.hash(password)
        now = utcnow()

        async with self._db_manager.session() as session:
            try:
                stmt = insert(User).values(
                    username=username,
                    password=hashed_password,
                    first_name=first_name,
                    last_name=last_name,
                    phone=phone,
                    join_at=now,
                    last_login_at=now
                ).returning(User)
                result = await session.execute(stmt)
                user = result.scalars().first()
                registered = UserDTO(
                    username=user.username,
                    password=user.password,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    phone=user.phone,
                    join_at=user.join_at
                )
            except SQLAlchemyError as e:
                self._logger.error("Error registering user %s in database: %s", username, e)
                raise

        self._logger.info("Registered user %s", username)
        return registered

    async def authenticate(self, username: str, password: str) -> bool:
        async with self._db_manager.session() as session:
            try:
                stmt = select(User.password).where(User.username == username)
                result = await session.execute(stmt)
                hashed_password = result.scalar_one_or_none()
            except SQLAlchemyError as e:
                self._logger.error("Error during authentication of %s: %s", username, e)
                raise

        # the session is released before the CPU-bound comparison
        if hashed_password is None:
            return await self._password_hash.compare_dummy(password)

        return await self._password_hash.compare(password, hashed_password)

    async def update_login_timestamp(self, username: str) -> None:
        async with self._db_manager.session() as session:
            try:
                stmt = update(User).where(
                    User.username == username
                ).values(last_login_at=utcnow())
                result = await session.execute(stmt)
                updated = result.rowcount
            except SQLAlchemyError as e:
                self._logger.error("Error updating login timestamp for %s: %s", username, e)
                raise

        if not updated:
            raise NotFoundError(f"No such user: {username}")

    async def all(self) -> list[UserSummaryDTO]:
        async with self._db_manager.session() as session:
            try:
                stmt = select(User).order_by(User.username)
                result = await session.execute(stmt)
                users = result.scalars().all()

                return [_summary(user) for user in users]
            except SQLAlchemyError as e:
                self._logger.error("Error getting all users in database: %s", e)
                raise

    async def get(self, username: str) -> UserDetailDTO:
        async with self._db_manager.session() as session:
            try:
                stmt = select(User).where(User.username == username)
                result = await session.execute(stmt)
                user = result.scalars().first()
            except SQLAlchemyError as e:
                self._logger.error("Error getting user by username in database: %s", e)
                raise

            if user is None:
                raise NotFoundError(f"No such user: {username}")

            return UserDetailDTO(
                username=user.username,
                first_name=user.first_name,
                last_name=user.last_name,
                phone=user.phone,
                join_at=user.join_at,
                last_login_at=user.last_login_at
            )

    async def messages_from(self, username: str) -> list[SentMessageDTO]:
        async with self._db_manager.session() as session:
            try:
                stmt = select(Message, User).join(
                    User, Message.to_username == User.username
                ).where(
                    Message.from_username == username
                ).order_by(Message.sent_at, Message.id)
                result = await session.execute(stmt)

                return [
                    SentMessageDTO(
                        id=message.id,
                        to_user=_summary(recipient),
                        body=message.body,
                        sent_at=message.sent_at,
                        read_at=message.read_at
                    ) for message, recipient in result.all()
                ]
            except SQLAlchemyError as e:
                self._logger.error("Error getting messages from %s in database: %s", username, e)
                raise

    async def messages_to(self, username: str) -> list[ReceivedMessageDTO]:
        async with self._db_manager.session() as session:
            try:
                stmt = select(Message, User).join(
                    User, Message.from_username == User.username
                ).where(
                    Message.to_username == username
                ).order_by(Message.sent_at, Message.id)
                result = await session.execute(stmt)

                return [
                    ReceivedMessageDTO(
                        id=message.id,
                        from_user=_summary(sender),
                        body=message.body,
                        sent_at=message.sent_at,
                        read_at=message.read_at
                    ) for message, sender in result.all()
                ]
            except SQLAlchemyError as e:
                self._logger.error("Error getting messages to %s in database: %s", username, e)
                raise


class MessageGateway(MessageInterface):
    __slots__ = ("_db_manager", "_logger")

    def __init__(self, db_manager: BaseDatabaseManager, logger: logging.Logger | None = None):
        self._db_manager = db_manager
        self._logger = logger or logging.getLogger(__name__)

    async def create(self, from_username: str, to_username: str, body: str) -> MessageDTO:
        async with self._db_manager.session() as session:
            try:
                stmt = insert(Message).values(
                    from_username=from_username,
                    to_username=to_username,
                    body=body,
                    sent_at=utcnow()
                ).returning(Message)
                result = await session.execute(stmt)
                msg = result.scalars().first()

                return MessageDTO(
                    id=msg.id,
                    from_username=msg.from_username,
                    to_username=msg.to_username,
                    body=msg.body,
                    sent_at=msg.sent_at,
                    read_at=msg.read_at
                )
            except SQLAlchemyError as e:
                self._logger.error("Error creating message in database: %s", e)
                raise

    async def mark_read(self, message_id: int) -> None:
        async with self._db_manager.session() as session:
            try:
                stmt = update(Message).where(
                    Message.id == message_id
                ).values(read_at=utcnow())
                result = await session.execute(stmt)
                updated = result.rowcount
            except SQLAlchemyError as e:
                self._logger.error("Error marking message read in database: %s", e)
                raise

        if not updated:
            raise NotFoundError(f"No such message: {message_id}")

    async def get(self, message_id: int) -> MessageDetailDTO:
        from_user = aliased(User, name="from_user")
        to_user = aliased(User, name="to_user")

        async with self._db_manager.session() as session:
            try:
                stmt = select(Message, from_user, to_user).join(
                    from_user, Message.from_username == from_user.username
                ).join(
                    to_user, Message.to_username == to_user.username
                ).where(Message.id == message_id)
                result = await session.execute(stmt)
                row = result.first()
            except SQLAlchemyError as e:
                self._logger.error("Error getting message by ID in database: %s", e)
                raise

            if row is None:
                raise NotFoundError(f"No such message: {message_id}")

            msg, sender, recipient = row
            return MessageDetailDTO(
                id=msg.id,
                body=msg.body,
                sent_at=msg.sent_at,
                read_at=msg.read_at,
                from_user=_summary(sender),
                to_user=_summary(recipient)
            )
