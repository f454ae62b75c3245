from pydantic import BaseModel, ConfigDict

PLACEHOLDER_IMAGE_URL = "https://tacm.com/wp-content/uploads/2018/01/no-image-available.jpeg"


class ResultItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    snippet: str
    image_url: str | None = None
    display_link: str | None = None

    def image_src(self, placeholder: str = PLACEHOLDER_IMAGE_URL) -> str:
        return self.image_url or placeholder


class ResultPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: list[ResultItem]
    total_results: int


class SearchResponse(BaseModel):
    query: str
    page: int
    start: int
    last_page: int
    total_results: int
    results: list[ResultItem]


class HealthResponse(BaseModel):
    status: str
    configured: bool


class ErrorResponse(BaseModel):
    detail: str
