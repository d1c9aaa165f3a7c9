class OverviewUnavailableError(Exception):
    """The admin overview snapshot could not be computed."""

    def __init__(self, message: str = "Failed to load overview data"):
        self.message = message
        super().__init__(message)


class UploadRejectedError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
