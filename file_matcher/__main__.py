"""Entry point: python -m file_matcher"""

import uvicorn
from .config import settings


def main():
    uvicorn.run(
        "file_matcher.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
