import pymysql
pymysql.install_as_MySQLdb()
from flask import Flask
from flask_cors import CORS
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import DevConfig
from .extensions import db, migrate, jwt, ma, bcrypt
from .utils.errors import register_error_handlers
from .utils.responses import error_response
from .services.sessao_service import ProvedorSessao
from .commands import register_commands
from .api import auth_routes, relatorio_routes, painel_routes
from . import views


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)

    origens = [o.strip() for o in str(app.config.get("CORS_ORIGINS") or "").split(",") if o.strip()]
    CORS(
        app,
        resources={r"/api/*": {"origins": origens}},
        supports_credentials=True,
    )

    # Inicializar extensões
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)
    bcrypt.init_app(app)

    # Provedor de sessão único do processo; o gate de cada página o recebe daqui
    ProvedorSessao(app)

    # Registrar blueprints
    app.register_blueprint(auth_routes.bp, url_prefix="/api/auth")
    app.register_blueprint(relatorio_routes.bp, url_prefix="/api/relatorios")
    app.register_blueprint(painel_routes.bp, url_prefix="/api/painel")
    app.register_blueprint(views.bp)

    # Manipuladores de erros
    register_error_handlers(app)
    register_commands(app)

    @app.get("/api/health")
    def health_check():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            db.session.rollback()
            app.logger.exception("[health] banco indisponível")
            return error_response("Erro ao conectar com o banco de dados. Verifique as configurações.", 503)
        return {"status": "ok", "service": "geotranote-backend"}

    return app
