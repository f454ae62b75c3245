from pydantic_settings import BaseSettings

from stor_och_liten.models import PLACEHOLDER_IMAGE_URL


class Settings(BaseSettings):
    model_config = {"env_prefix": "SOL_"}

    google_api_key: str = ""
    google_cx: str = ""

    search_endpoint: str = "https://www.googleapis.com/customsearch/v1"
    site_search: str = "storochliten.se/"
    request_timeout: float = 10.0

    results_per_page: int = 10
    min_query_length: int = 2
    auto_refetch_min_length: int = 3

    placeholder_image: str = PLACEHOLDER_IMAGE_URL

    host: str = "0.0.0.0"
    port: int = 8080

    max_sessions: int = 1000


settings = Settings()
