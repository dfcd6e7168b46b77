# src/folio_site/main.py
import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from typing import Optional

import hypercorn.asyncio
from hypercorn.config import Config
from quart import Quart

from folio_site.api.errors import register_error_handlers
from folio_site.api.routes import site_bp
from folio_site.content.gateway import ContentGateway
from folio_site.content.richtext import as_html, as_text, link_resolver
from folio_site.core.config import ConfigError, SiteConfig

app_logger = logging.getLogger("quart.app")

_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = "INFO"):
    """Installs the console handler on the root and quart.app loggers."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    app_logger.handlers.clear()
    app_logger.setLevel(level)
    app_logger.addHandler(handler)
    app_logger.propagate = False # Prevent duplicate messages in the root logger

    # Silence verbose third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hypercorn.access").propagate = False
    logging.getLogger("hypercorn.error").propagate = False


def create_app(config: SiteConfig, gateway: Optional[ContentGateway] = None) -> Quart:
    """
    Builds the site application.

    Args:
        config: Site configuration.
        gateway: Content gateway to use; built from ``config`` when omitted.
    """
    app = Quart(__name__)
    app.config["SITE"] = config

    if gateway is None:
        gateway = ContentGateway(
            config.prismic_endpoint,
            access_token=config.prismic_access_token,
            page_size=config.page_size,
            timeout=config.request_timeout,
        )
    app.extensions["content_gateway"] = gateway

    app.add_template_filter(as_text, "as_text")
    app.add_template_filter(as_html, "as_html")
    app.add_template_filter(link_resolver, "link")
    app.add_template_global(as_text, "as_text")
    app.add_template_global(as_html, "as_html")
    app.add_template_global(link_resolver, "link")

    app.register_blueprint(site_bp)
    register_error_handlers(app)

    @app.after_request
    async def add_security_headers(response):
        csp_policy = [
            "default-src 'self'",
            "script-src 'self' 'unsafe-inline' https://www.googletagmanager.com",
            "style-src 'self' 'unsafe-inline'",
            "connect-src 'self' https://*.google-analytics.com https://www.googletagmanager.com",
            "img-src 'self' data: https://images.prismic.io https://prismic-io.s3.amazonaws.com",
            "frame-src https://www.youtube.com https://player.vimeo.com",
        ]
        response.headers['Content-Security-Policy'] = "; ".join(csp_policy)
        return response

    @app.before_serving
    async def startup():
        app_logger.info(f"Content API: {gateway.endpoint}")
        app_logger.info(f"Site ready on http://{config.host}:{config.port}")

    @app.after_serving
    async def shutdown():
        """Cleanup on shutdown."""
        await gateway.close()
        app_logger.info("Site shutting down")

    return app


async def main(config: SiteConfig):
    app = create_app(config)

    hypercorn_config = Config()
    hypercorn_config.bind = [f"{config.host}:{config.port}"]
    hypercorn_config.accesslog = None
    hypercorn_config.errorlog = None

    await hypercorn.asyncio.serve(app, hypercorn_config)


def run():
    parser = argparse.ArgumentParser(description="Run the folio site.")
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host address to bind the server to. Use '0.0.0.0' for Docker. Defaults to HOST."
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to. Defaults to PORT, then 3000."
    )
    args = parser.parse_args()

    try:
        config = SiteConfig.from_env()
    except ConfigError as e:
        logging.basicConfig(format=_LOG_FORMAT)
        app_logger.critical(f"Site startup failed: {e}")
        sys.exit(1)

    overrides = {key: value for key, value in (("host", args.host), ("port", args.port)) if value is not None}
    if overrides:
        config = replace(config, **overrides)

    configure_logging(config.log_level)

    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        print("\nServer shut down.")


if __name__ == "__main__":
    run()
