from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from config import Config

db = SQLAlchemy()
migrate = Migrate()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, resources={r"/api/*": {"origins": flask_app.config.get('CORS_ORIGINS', '*')}})

    # One leaderboard event bus per application, never process-wide
    from game2048.services.leaderboard.events import LeaderboardEvents
    flask_app.extensions['leaderboard_events'] = LeaderboardEvents(flask_app.logger)

    # Import and register blueprints here
    from game2048.main import main
    flask_app.register_blueprint(main)

    from game2048.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api')

    @flask_app.errorhandler(500)
    def internal_error(exc):
        db.session.rollback()
        return jsonify({'error': 'Internal server error'}), 500

    from game2048.cli import register_commands
    register_commands(flask_app)

    return flask_app
