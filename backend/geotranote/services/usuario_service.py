from typing import Optional
from sqlalchemy.exc import IntegrityError
from geotranote.extensions import db, bcrypt
from geotranote.models.usuario import Usuario
from geotranote.utils.errors import ApiError


def obter_usuario_por_id(user_id: int) -> Optional[Usuario]:
    return db.session.get(Usuario, user_id)


def obter_usuario_por_email(email: str) -> Optional[Usuario]:
    return Usuario.query.filter_by(email=(email or "").lower().strip()).first()


def criar_usuario(data: dict) -> Usuario:
    email = data["email"].lower().strip()

    if obter_usuario_por_email(email):
        raise ApiError("O e-mail já está cadastrado", 400)

    hash_senha = bcrypt.generate_password_hash(
        data["senha"]
    ).decode("utf-8")

    usuario = Usuario(
        nome=data["nome"].strip(),
        email=email,
        hash_senha=hash_senha,
        ativo=True,
    )

    db.session.add(usuario)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ApiError("Erro ao criar usuário", 500)

    return usuario


def usuario_to_dict(usuario: Usuario) -> dict:
    return {
        "id": usuario.id_usuario,
        "nome": usuario.nome,
        "email": usuario.email,
        "ativo": bool(usuario.ativo),
    }
