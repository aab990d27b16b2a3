from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from geotranote.schemas.auth_schemas import LoginSchema
from geotranote.services import auth_service, usuario_service
from geotranote.services.sessao_service import obter_provedor
from geotranote.utils.responses import success_response
from geotranote.utils.errors import ApiError

bp = Blueprint("auth", __name__)


@bp.post("/login")
def login():
    data = LoginSchema().load(request.get_json() or {})
    usuario = auth_service.autenticar(data["email"], data["senha"])
    sessao = obter_provedor(current_app).iniciar_sessao(usuario)
    return success_response(
        data={
            "access_token": sessao.access_token,
            "usuario": usuario_service.usuario_to_dict(usuario),
        },
        message="Login realizado",
    )


@bp.post("/logout")
@jwt_required()
def logout():
    obter_provedor(current_app).encerrar_sessao()
    return success_response(message="Sessão encerrada")


@bp.get("/me")
@jwt_required()
def me():
    user_id = get_jwt_identity()
    try:
        user_id_int = int(user_id)
    except (TypeError, ValueError):
        raise ApiError("Token inválido", 401)

    usuario = usuario_service.obter_usuario_por_id(user_id_int)
    if not usuario:
        raise ApiError("Usuário não encontrado", 404)

    return success_response(
        data=usuario_service.usuario_to_dict(usuario),
        message="Perfil do usuário"
    )
