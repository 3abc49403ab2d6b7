import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Application
    app_name: str = os.getenv("APP_NAME", "Book Management System")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Pagination
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

    # Identifiers
    id_prefix: str = os.getenv("BOOK_ID_PREFIX", "book")

    # CLI
    cli_output: str = os.getenv("BOOKSHELF_CLI_OUTPUT", "plain")
    seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA", "True")


settings = Settings()
