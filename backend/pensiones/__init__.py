import pymysql
pymysql.install_as_MySQLdb()
from flask import Flask
from flask_cors import CORS

from .config import DevConfig
from .extensions import db, migrate, ma
from .utils.errors import register_error_handlers
from .cli import register_cli
from .api import resolucion_routes


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Habilitar CORS para el frontend (Vite, localhost:5173 por defecto)
    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    # Inicializar extensiones
    db.init_app(app)
    migrate.init_app(app, db)
    ma.init_app(app)

    # Registrar modelos en los mappers de SQLAlchemy
    from . import models  # noqa: F401

    # Registrar blueprints
    app.register_blueprint(resolucion_routes.bp, url_prefix="/api")

    # Manejadores de errores
    register_error_handlers(app)

    # Comandos de consola (cron mensual, catálogos)
    register_cli(app)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "service": "pensiones-backend"}

    return app
