from dataclasses import dataclass, field
from environs import Env, validate

@dataclass
class DBConfig:
    """ PostgreSQL """
    host: str | None = None
    port: int | None = None
    name: str | None = None
    user: str | None = None
    password: str | None = None

    """ SQLite """
    path: str | None = None

    echo: bool = False

    @property
    def is_postgres(self) -> bool:
        return bool(self.host)

    @property
    def url(self) -> str:
        if self.is_postgres:
            return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"
        return f"sqlite+aiosqlite:///{self.path}"

@dataclass
class SecurityConfig:
    bcrypt_work_factor: int = 12

@dataclass
class LoggingConfig:
    level: str = "INFO"

@dataclass
class Config:
    """ Config """
    db: DBConfig
    security: SecurityConfig = field(default_factory=SecurityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

def load_config(path: str | None = None) -> Config:
    env = Env()
    env.read_env(path)

    return Config(
        db=DBConfig(
            host=env('DB_HOST', None),
            port=env.int('DB_PORT', 5432),
            name=env('DB_NAME', None),
            user=env('DB_USER', None),
            password=env('DB_PASSWORD', None),
            path=env('DB_PATH', 'data/messagely.db'),
            echo=env.bool('DB_ECHO', False)
        ),
        security=SecurityConfig(
            # bcrypt accepts log rounds 4..31
            bcrypt_work_factor=env.int(
                'BCRYPT_WORK_FACTOR', 12, validate=validate.Range(min=4, max=31)
            ),
        ),
        logging=LoggingConfig(
            level=env('LOG_LEVEL', 'INFO').upper()
        )
    )
