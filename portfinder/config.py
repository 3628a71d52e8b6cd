from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from .finder import DEFAULT_END_PORT, DEFAULT_START_PORT
from .probe import DEFAULT_HOST, DEFAULT_TIMEOUT
from .scanner import DEFAULT_CONCURRENCY

class ScanConfig(BaseModel):
    """
    Validation model for command-line scan options.
    Port and range rules are left to the core checks so their error codes stay stable.
    """
    host: str = DEFAULT_HOST
    start: int = DEFAULT_START_PORT
    end: int = DEFAULT_END_PORT
    exclude: List[int] = Field(default_factory=list)
    count: int = Field(1, ge=1)
    consecutive: bool = False
    validators: List[str] = Field(default_factory=list)
    concurrency: int = Field(DEFAULT_CONCURRENCY, ge=1, le=5000)
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, le=10.0)
    check: Optional[int] = None
    json_output: bool = False

    @field_validator('host')
    @classmethod
    def validate_host(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Host must not be empty")
        return v

    @field_validator('exclude')
    @classmethod
    def dedupe_exclude(cls, v):
        return sorted(set(v))

    @field_validator('validators')
    @classmethod
    def clean_validators(cls, v):
        # "common-ports, privileged" and trailing commas are common on the CLI
        return [name.strip() for name in v if name.strip()]
