from typing import AsyncIterable
import logging

from dishka import AsyncContainer, Provider, Scope, from_context, make_async_container, provide

from messagely.config import Config
from messagely.core.db_manager import BaseDatabaseManager, create_db_manager
from messagely.core.gateways import UserGateway, MessageGateway
from messagely.encryption import PasswordHash

class AdaptersProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_logger(self) -> logging.Logger:
        return logging.getLogger("messagely")

    @provide(scope=Scope.APP)
    def get_password_hash(self, config: Config, logger: logging.Logger) -> PasswordHash:
        return PasswordHash(work_factor=config.security.bcrypt_work_factor, logger=logger)

    @provide(scope=Scope.APP)
    async def get_db_manager(
            self,
            config: Config,
            logger: logging.Logger
    ) -> AsyncIterable[BaseDatabaseManager]:
        db_manager = create_db_manager(config, logger)
        await db_manager.initialize()
        await db_manager.create_tables()
        yield db_manager
        await db_manager.close()

class GatewaysProvider(Provider):
    @provide(scope=Scope.REQUEST)
    def get_user_gateway(
            self,
            db_manager: BaseDatabaseManager,
            password_hash: PasswordHash,
            logger: logging.Logger
    ) -> UserGateway:
        return UserGateway(db_manager, password_hash, logger)

    @provide(scope=Scope.REQUEST)
    def get_message_gateway(
            self,
            db_manager: BaseDatabaseManager,
            logger: logging.Logger
    ) -> MessageGateway:
        return MessageGateway(db_manager, logger)

def create_container(config: Config) -> AsyncContainer:
    return make_async_container(
        AdaptersProvider(),
        GatewaysProvider(),
        context={Config: config},
    )
