import asyncio
import logging

import bcrypt


class PasswordHash:
    """
    bcrypt password hashing.
    Hashing is CPU-bound, so the async methods run it in the default executor.
    bcrypt only reads the first 72 bytes of a password; anything after that is ignored.
    """
    def __init__(self, work_factor: int = 12, logger: logging.Logger | None = None):
        """
        Args:
            work_factor: bcrypt log rounds, fixed for the lifetime of the instance
            logger: Custom logger instance (optional)
        """
        self.work_factor = work_factor
        self.logger = logger or logging.getLogger(__name__)
        self._dummy_hash: bytes | None = None

    async def hash(self, password: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._hash, password)

    def _hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.work_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    async def compare(self, password: str, hashed_password: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._compare, password, hashed_password)

    def _compare(self, password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            self.logger.error("Stored password hash is not a valid bcrypt hash")
            raise

    async def compare_dummy(self, password: str) -> bool:
        """
        Spend the same work as compare() for a user that does not exist.
        Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = (await self.hash("messagely-dummy-password")).encode("utf-8")
        await self.compare(password, self._dummy_hash.decode("utf-8"))
        return False
