import click
import uvicorn
from dotenv import load_dotenv

from chatkit_proxy.logging_config import configure_logging, get_logging_config
from chatkit_proxy.modules.config import get_config

load_dotenv()


@click.command()
@click.option("--host", "host", default=None, help="Bind address (defaults to API_HOST)")
@click.option("--port", "port", default=None, type=int, help="Bind port (defaults to API_PORT)")
@click.option("--reload/--no-reload", "reload", default=None, help="Autoreload on code changes")
def main(host, port, reload):
    config = get_config()
    log_level = config.get("log_level")
    configure_logging(log_level)

    # Imported by string so the app is built after .env has been loaded
    uvicorn.run(
        "chatkit_proxy.main:app",
        host=host or config.get("host"),
        port=port or config.get("port"),
        log_level=log_level.lower(),
        reload=config.get("debug") if reload is None else reload,
        log_config=get_logging_config(log_level),
    )


if __name__ == "__main__":
    main()
