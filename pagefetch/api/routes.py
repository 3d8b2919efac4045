from fastapi import APIRouter
from pagefetch.schemas import FetchRequestBody, FetchResponse, FetchTraceModel
from pagefetch.services import acquire

router = APIRouter()

@router.post("/fetch", response_model=FetchResponse)
def fetch_page(request: FetchRequestBody):
    """
    Fetch a public web page and return its plain text.

    Private, loopback and link-local destinations are refused. Failures are
    reported in the trace with content set to null; the endpoint itself
    answers 200 for every fetch outcome.
    """
    result = acquire.acquire_content(
        request.url,
        timeout=request.timeout,
        user_agent=request.user_agent,
    )
    return FetchResponse(
        content=result.content,
        trace=FetchTraceModel(**result.trace.to_dict()),
    )

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "Page Fetcher"}
