from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv(find_dotenv(), override=False)


class Settings(BaseSettings):
    PROJECT_NAME: str = "workout-logger"
    ENV: str = "dev"
    model_config = SettingsConfigDict(env_file=None)

    # ──────────────────── Storage ─────────────────────

    # "memory" keeps everything in process, "dynamodb" uses DDB_TABLE_NAME
    STORAGE_BACKEND: Literal["memory", "dynamodb"] = "memory"

    REGION: str = "eu-west-2"
    DDB_TABLE_NAME: str = "workout-logger-dev-table"

    # ──────────────────── Import / export ─────────────────────

    ALLOWED_FILE_EXTENSIONS: tuple[str, ...] = (".txt", ".csv")
    EXPORT_FILENAME: str = "workouts.csv"

    @property
    def uses_dynamo(self) -> bool:
        return self.STORAGE_BACKEND == "dynamodb"


settings = Settings()
