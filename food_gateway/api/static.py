"""
Static serving of the upload directory.
"""

import os

from fastapi.staticfiles import StaticFiles


class UploadsStaticFiles(StaticFiles):
    """
    StaticFiles that tolerates a missing directory.

    deleteAll removes the upload directory and only the next upload
    recreates it; in between every lookup is a plain 404.
    """

    async def check_config(self) -> None:
        if self.directory is not None and not os.path.exists(self.directory):
            return
        await super().check_config()
