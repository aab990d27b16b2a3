from flask import render_template, request
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from geotranote.extensions import db
from geotranote.utils.responses import error_response


class ApiError(Exception):
    """
    Erro de negócio com status HTTP.
    Os serviços levantam; as rotas da API devolvem o envelope JSON e as
    páginas mostram ``message`` na própria tela.
    """
    def __init__(self, message, status_code=400, errors=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}


def _rota_api() -> bool:
    return request.path.startswith("/api")


def _pagina_de_erro(mensagem: str, status_code: int):
    return render_template("home.html", erro=mensagem), status_code


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        if not _rota_api():
            return _pagina_de_erro(err.message, err.status_code)
        return error_response(err.message, err.status_code, err.errors)

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err: ValidationError):
        if not _rota_api():
            return _pagina_de_erro("Dados inválidos. Verifique os campos informados.", 400)
        return error_response("Dados inválidos", 400, err.messages)

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(err: SQLAlchemyError):
        db.session.rollback()
        app.logger.exception("[db] erro não tratado no serviço")
        if not _rota_api():
            return _pagina_de_erro("Banco de dados indisponível. Tente novamente.", 503)
        return error_response("Banco de dados indisponível", 503)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        # páginas ficam com a resposta padrão do Werkzeug (inclui redirects de barra final)
        if not _rota_api():
            return err
        return error_response(err.description or "Erro HTTP", err.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        app.logger.exception(err)
        if not _rota_api():
            return _pagina_de_erro("Erro interno do servidor", 500)
        return error_response("Erro interno do servidor", 500)
