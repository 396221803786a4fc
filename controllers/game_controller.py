import logging

from flask import Blueprint, current_app, request, jsonify
from models.win_state import WinState
from services.errors import GameError, InternalServerError
from services.game_service import GameService

logger = logging.getLogger(__name__)

router = Blueprint('game_controller', __name__)


def _open_service():
    db = current_app.config["SESSION_FACTORY"]()
    return db, GameService(db, current_app.extensions["game_manager"])


@router.errorhandler(GameError)
def handle_game_error(error: GameError):
    return jsonify({"error": error.message, "statusCode": error.status_code}), error.status_code


@router.route("/evaluate", methods=["POST"])
def evaluate_game():
    data = request.get_json(silent=True)
    win_length = data.get("winLength") if isinstance(data, dict) else None
    logger.info("Received request to evaluate game state with winLength: %s", win_length)

    db, service = _open_service()
    try:
        result = service.evaluate_game(data)
        if isinstance(result, WinState):
            logger.info("Evaluation complete. Winner: %s. Stored ID: %s", result.winner, result.id)
            return jsonify(result.to_dict()), 200
        logger.info("Evaluation complete. No winner found.")
        return jsonify(result), 200
    except GameError:
        raise
    except Exception as e:
        logger.exception("Error evaluating game")
        raise InternalServerError(f"An unexpected error occurred during game evaluation: {e}") from e
    finally:
        db.close()


@router.route("", methods=["GET"])
def get_completed_games():
    logger.info("Received request to get all completed games.")
    db, service = _open_service()
    try:
        games = service.find_all_completed_games()
        return jsonify([game.to_dict() for game in games]), 200
    except GameError:
        raise
    except Exception as e:
        logger.exception("Error retrieving completed games")
        raise InternalServerError(f"An unexpected error occurred while retrieving games: {e}") from e
    finally:
        db.close()


@router.route("/move", methods=["POST"])
def make_move():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        logger.info("Received move request at position (%s, %s)", data.get("x"), data.get("y"))

    db, service = _open_service()
    try:
        return jsonify(service.make_move(data)), 200
    except GameError:
        raise
    except Exception as e:
        logger.exception("Error processing move")
        raise InternalServerError(f"An unexpected error occurred while processing move: {e}") from e
    finally:
        db.close()
