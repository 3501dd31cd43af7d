from pydantic import BaseModel, Field
from datetime import datetime

class UserSummaryDTO(BaseModel):
    username: str
    first_name: str
    last_name: str
    phone: str

class UserDetailDTO(UserSummaryDTO):
    join_at: datetime
    last_login_at: datetime | None = None

class UserDTO(UserSummaryDTO):
    """ Result of registration: includes the password hash, never expose it outside """
    password: str
    join_at: datetime

class MessageDTO(BaseModel):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: datetime | None = None

class MessageDetailDTO(BaseModel):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None = None
    from_user: UserSummaryDTO
    to_user: UserSummaryDTO

class _UserMessageDTO(BaseModel):
    # dumped with by_alias=True the timestamps read sentAt / readAt
    id: int
    body: str
    sent_at: datetime = Field(serialization_alias="sentAt")
    read_at: datetime | None = Field(default=None, serialization_alias="readAt")

class SentMessageDTO(_UserMessageDTO):
    to_user: UserSummaryDTO

class ReceivedMessageDTO(_UserMessageDTO):
    from_user: UserSummaryDTO
