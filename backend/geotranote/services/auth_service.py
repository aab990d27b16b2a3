from geotranote.extensions import bcrypt
from geotranote.models.usuario import Usuario
from geotranote.services import usuario_service
from geotranote.utils.errors import ApiError


def autenticar(email: str, senha: str) -> Usuario:
    usuario = usuario_service.obter_usuario_por_email(email)

    if not usuario:
        raise ApiError("Credenciais inválidas", 401)

    try:
        senha_ok = bcrypt.check_password_hash(usuario.hash_senha or "", senha)
    except (ValueError, TypeError):
        # Hash corrompido no banco não deve virar 500
        raise ApiError("Credenciais inválidas", 401)

    if not senha_ok:
        raise ApiError("Credenciais inválidas", 401)

    if not usuario.ativo:
        raise ApiError("Conta inativa", 403)

    return usuario
