"""
Errors reported back to clients of the bulk endpoints.
"""


class BulkRequestError(Exception):
    status_code: int = 400
    message: str

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SourceNotFoundError(BulkRequestError):
    status_code = 404

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"source '{source_id}' not found")


class ZoomTooLowError(BulkRequestError):
    status_code = 400

    def __init__(self, min_zoom: int):
        self.min_zoom = min_zoom
        super().__init__(f"min zoom level is {min_zoom}")


class UnsupportedFormatError(BulkRequestError):
    status_code = 404

    def __init__(self, ext: str):
        self.ext = ext
        super().__init__(f"extension '{ext}' not supported")
