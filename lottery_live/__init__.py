"""Flask application package: simulated lottery draws with a live feed."""

from __future__ import annotations

import atexit
from typing import Any, Mapping

from dotenv import load_dotenv
from flask import Flask

from lottery_live.lottery import RandomNumberSource, VariantRegistry


def create_app(
    config_overrides: Mapping[str, Any] | None = None,
    *,
    registry: VariantRegistry | None = None,
    source: RandomNumberSource | None = None,
) -> Flask:
    """Application factory.

    Parameters
    ----------
    config_overrides : Mapping[str, Any], optional
        Values applied on top of the environment config.
    registry : VariantRegistry, optional
        Lotteries to simulate; defaults to EuroJackpot and Powerball.
    source : RandomNumberSource, optional
        Random source for draws; defaults to the OS CSPRNG.

    Returns
    -------
    Flask
        Configured application. The draw scheduler is started unless
        ``SCHEDULER_ENABLED`` is false.
    """
    load_dotenv()

    from lottery_live.config import get_config
    from lottery_live.db import init_db
    from lottery_live.error_handlers import register_error_handlers
    from lottery_live.extensions import cors, sock
    from lottery_live.logging_config import configure_logging
    from lottery_live.routes.feed import feed_bp
    from lottery_live.routes.health import health_bp
    from lottery_live.routes.history import history_bp
    from lottery_live.runtime import init_runtime

    app = Flask(__name__)
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)
    init_db(app)
    init_runtime(app, registry=registry, source=source)
    register_error_handlers(app)

    cors.init_app(app, origins=app.config["CORS_ORIGINS"])
    sock.init_app(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(history_bp)
    app.register_blueprint(feed_bp)

    if app.config["SCHEDULER_ENABLED"]:
        scheduler = app.extensions["draw_scheduler"]
        scheduler.start()
        atexit.register(scheduler.stop)

    return app
