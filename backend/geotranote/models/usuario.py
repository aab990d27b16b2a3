from sqlalchemy import func

from geotranote.extensions import db


class Usuario(db.Model):
    __tablename__ = "usuarios"

    id_usuario = db.Column(db.Integer, primary_key=True, autoincrement=True)

    nome = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    hash_senha = db.Column(db.String(255), nullable=False)

    ativo = db.Column(db.Boolean, default=True, nullable=False)

    criado_em = db.Column(
        db.TIMESTAMP,
        server_default=func.current_timestamp()
    )

    def __repr__(self) -> str:
        return f"<Usuario id_usuario={self.id_usuario} email={self.email}>"
