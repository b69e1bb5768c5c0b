"""
Run the proxy: python -m cliplens
"""
import uvicorn

from cliplens.core.config import settings


def main() -> None:
    uvicorn.run("cliplens.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
