from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:78.0) Gecko/20100101 Firefox/78.0"
)


class CrawlConfig(BaseModel):
    """
    Configuration contract for one dependents crawl.
    Everything the crawler touches outside the process (target site, cache
    directory, output file) is declared here.
    """

    project: str  # ex: "psf/requests"
    base_url: str = "https://github.com"
    dependent_type: str = Field(default="PACKAGE", pattern="^(PACKAGE|REPOSITORY)$")

    # Local storage
    cache_dir: str = "cache"
    output_path: str = "results.json"

    # Politeness and fault tolerance
    user_agent: str = DEFAULT_USER_AGENT
    jitter_ms: int = Field(default=250, ge=0)
    page_delay_min_ms: int = Field(default=1000, ge=0)
    page_delay_max_ms: int = Field(default=5000, ge=0)
    request_timeout: float = Field(default=30, gt=0)
    max_attempts: Optional[int] = Field(default=None, ge=1)

    @property
    def seed_url(self) -> str:
        """First listing page.

        Format: <base_url>/<owner>/<repo>/network/dependents?dependent_type=<type>
        """
        return (
            f"{self.base_url}/{self.project}/network/dependents"
            f"?dependent_type={self.dependent_type}"
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent}

    @field_validator("project")
    def project_must_be_owner_slash_repo(cls, v):
        v = v.strip().strip("/")
        if " " in v:
            raise ValueError("project must not contain spaces")
        parts = v.split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError("project must look like 'owner/repo'")
        return v

    @field_validator("base_url")
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @model_validator(mode="after")
    def page_delay_range_is_ordered(self):
        if self.page_delay_min_ms > self.page_delay_max_ms:
            raise ValueError("page_delay_min_ms must not exceed page_delay_max_ms")
        return self
