from enum import StrEnum


class FetchFailure(StrEnum):
    timeout = "timeout"
    network = "network"
    http_status = "http_status"
    invalid_json = "invalid_json"
    invalid_shape = "invalid_shape"
    unexpected = "unexpected"


class HostawayError(Exception):
    def __init__(self, message: str, kind: FetchFailure, status_code: int | None = None):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)


class ReviewNotFoundError(Exception):
    def __init__(self, review_id: str):
        self.review_id = review_id
        super().__init__(f"Review {review_id} not found")


class ReviewPersistError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ReviewStoreError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
