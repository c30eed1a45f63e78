from typing import Any

from pydantic import BaseModel


class HostawayReviewsResponse(BaseModel):
    status: str
    # Elements are not checked here; app.mappers.hostaway_mapper reads them leniently
    result: list[Any]
