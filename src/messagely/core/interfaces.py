from abc import ABC, abstractmethod

from .dto import (
    UserDTO,
    UserSummaryDTO,
    UserDetailDTO,
    SentMessageDTO,
    ReceivedMessageDTO,
    MessageDTO,
    MessageDetailDTO,
)

class UserInterface(ABC):
    @abstractmethod
    async def register(
            self,
            username: str,
            password: str,
            first_name: str,
            last_name: str,
            phone: str
    ) -> UserDTO:
        """
        Hashes the password and creates a new user.
        A duplicate username raises the storage IntegrityError.
        :param username:
        :param password: plaintext, never stored
        :param first_name:
        :param last_name:
        :param phone:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def authenticate(
            self,
            username: str,
            password: str
    ) -> bool:
        """
        Is this username/password valid?
        Unknown user and wrong password both return False.
        :param username:
        :param password:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def update_login_timestamp(
            self,
            username: str
    ) -> None:
        """
        Sets User.last_login_at to now, NotFoundError if no such user.
        :param username:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def all(self) -> list[UserSummaryDTO]:
        """
        Basic info on all users, ordered by username.
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def get(
            self,
            username: str
    ) -> UserDetailDTO:
        """
        Get user by User.username, NotFoundError if absent.
        :param username:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def messages_from(
            self,
            username: str
    ) -> list[SentMessageDTO]:
        """
        Messages sent by this user, each with the recipient embedded.
        :param username:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def messages_to(
            self,
            username: str
    ) -> list[ReceivedMessageDTO]:
        """
        Messages sent to this user, each with the sender embedded.
        :param username:
        :return:
        """
        raise NotImplementedError()


class MessageInterface(ABC):
    @abstractmethod
    async def create(
            self,
            from_username: str,
            to_username: str,
            body: str
    ) -> MessageDTO:
        """
        Creates a new unread message.
        An unknown username raises the storage IntegrityError.
        :param from_username:
        :param to_username:
        :param body:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def mark_read(
            self,
            message_id: int
    ) -> None:
        """
        Sets Message.read_at to now, NotFoundError if no such message.
        :param message_id:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def get(
            self,
            message_id: int
    ) -> MessageDetailDTO:
        """
        Gets a message with both parties' current profiles embedded.
        :param message_id:
        :return:
        """
        raise NotImplementedError()
