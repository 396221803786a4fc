import logging

from flask import Flask
from flask_cors import CORS

import config
from controllers.game_controller import router as game_routes
from database import SessionLocal, init_db
from services.ai_service import create_ai_client
from services.game_manager import GameManager

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(session_factory=None, ai_client=None):
    if session_factory is None:
        session_factory = SessionLocal
        if not config.PRODUCTION:
            logger.info("Non-production environment detected. Creating database schema...")
            try:
                init_db()
            except Exception:
                logger.exception("Database schema creation failed.")
                raise
        else:
            logger.info("PRODUCTION environment detected. Skipping automatic schema creation.")

    if ai_client is None:
        ai_client = create_ai_client(
            api_key=config.DEEPSEEK_API_KEY,
            model=config.DEEPSEEK_MODEL,
            base_url=config.DEEPSEEK_BASE_URL,
            timeout=config.AI_TIMEOUT_S,
        )

    app = Flask(__name__)
    CORS(app, origins=config.CORS_ORIGINS)
    app.config["SESSION_FACTORY"] = session_factory
    app.extensions["game_manager"] = GameManager(ai_client)
    app.register_blueprint(game_routes, url_prefix="/games")
    return app


if __name__ == "__main__":
    app = create_app()
    logger.info("Application listening on port %s", config.PORT)
    app.run(port=config.PORT, debug=not config.PRODUCTION)
