from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"

    data_dir: str = "data"
    users_file: str = "users.json"

    max_iterations: int = 100_000_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def users_path(self) -> Path:
        # Relative data dirs resolve against the process working directory.
        return Path(self.data_dir) / self.users_file

    @property
    def worker_start_method(self) -> str | None:
        """Multiprocessing start method for task workers (None = platform default)."""

        return "spawn" if self.is_production else None


settings = Settings()
