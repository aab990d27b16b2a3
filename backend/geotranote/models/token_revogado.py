from datetime import datetime

from geotranote.extensions import db


class TokenRevogado(db.Model):
	__tablename__ = "tokens_revogados"

	id = db.Column(db.Integer, primary_key=True, autoincrement=True)
	jti = db.Column(db.String(64), unique=True, nullable=False, index=True)
	revogado_em = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

	def __repr__(self) -> str:
		return f"<TokenRevogado jti={self.jti}>"
