from . import compress, files

routers = [
    compress.router,
    files.router,
]

__all__ = [
    "routers",
]
