from pydantic import BaseModel, Field
from typing import Optional

class FetchRequestBody(BaseModel):
    url: Optional[str] = Field(None, description="Page URL; https:// is assumed when the scheme is missing")
    timeout: Optional[float] = Field(None, gt=0, description="Connect/read timeout in seconds")
    user_agent: Optional[str] = Field(None, description="User-Agent header override")

class FetchTraceModel(BaseModel):
    url: str
    status: Optional[str] = Field(None, description="success, failed_empty_response or error")
    content_length: Optional[int] = None
    content_preview: Optional[str] = Field(None, description="First 500 characters of the extracted text")
    error_detail: Optional[str] = None

class FetchResponse(BaseModel):
    content: Optional[str]
    trace: FetchTraceModel
