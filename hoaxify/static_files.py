"""Static file serving for uploaded images and attachments."""

from fastapi.staticfiles import StaticFiles
from starlette.responses import Response

ONE_YEAR_IN_SECONDS = 365 * 24 * 60 * 60


class CachedStaticFiles(StaticFiles):
    """StaticFiles that tells clients to cache every file for max_age seconds.

    Stored filenames are random and never reused, so long caching is safe.
    """

    def __init__(self, *args, max_age: int = ONE_YEAR_IN_SECONDS, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.max_age = max_age

    def file_response(self, *args, **kwargs) -> Response:
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = f"public, max-age={self.max_age}"
        return response
