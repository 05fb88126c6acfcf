import uvicorn

from roadbill.settings import settings


def main() -> None:
    uvicorn.run("web.app:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
