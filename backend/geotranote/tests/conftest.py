from datetime import datetime

import pytest

from sqlalchemy.pool import StaticPool
from flask_jwt_extended import create_access_token

from geotranote import create_app
from geotranote.config import TestConfig as BaseTestConfig
from geotranote.extensions import db, bcrypt

# Importar modelos para que o SQLAlchemy registre mappers/tabelas
import geotranote.models  # noqa: F401
from geotranote.models.usuario import Usuario
from geotranote.models.relatorio import Relatorio
from geotranote.models.infracao import Infracao
from geotranote.utils.protocolo import gerar_id, gerar_protocolo


class PytestConfig(BaseTestConfig):
	SQLALCHEMY_DATABASE_URI = "sqlite://"
	SQLALCHEMY_ENGINE_OPTIONS = {
		"connect_args": {"check_same_thread": False},
		"poolclass": StaticPool,
	}
	SECRET_KEY = "test-secret-key"
	JWT_SECRET_KEY = "test-secret"
	JWT_COOKIE_CSRF_PROTECT = False
	JWT_COOKIE_SECURE = False


@pytest.fixture(scope="session")
def app():
	app = create_app(PytestConfig)
	with app.app_context():
		db.create_all()
		yield app
		db.session.remove()
		db.drop_all()


@pytest.fixture()
def client(app):
	return app.test_client()


@pytest.fixture()
def db_session(app):
	with app.app_context():
		yield db.session
		db.session.rollback()


@pytest.fixture(autouse=True)
def limpar_relatorios(app):
	# O banco é compartilhado na sessão; totais do dashboard precisam de tabelas limpas
	Infracao.query.delete()
	Relatorio.query.delete()
	db.session.commit()
	yield


@pytest.fixture()
def make_user(db_session):
	def _make_user(
		email: str,
		nome: str = "Agente Teste",
		senha: str = "Passw0rd!",
		ativo: bool = True,
	):
		u = Usuario(
			nome=nome,
			email=email,
			hash_senha=bcrypt.generate_password_hash(senha).decode("utf-8"),
			ativo=ativo,
		)
		db_session.add(u)
		db_session.commit()
		return u

	return _make_user


@pytest.fixture()
def make_token(app):
	def _make_token(user_id: int, nome: str = "Agente Teste") -> str:
		with app.app_context():
			return create_access_token(identity=str(user_id), additional_claims={"nome": nome, "email": ""})

	return _make_token


@pytest.fixture()
def auth_header(make_token):
	def _auth_header(user_id: int, nome: str = "Agente Teste") -> dict:
		token = make_token(user_id, nome=nome)
		return {"Authorization": f"Bearer {token}"}

	return _auth_header


@pytest.fixture()
def login(client):
	def _login(email: str, senha: str = "Passw0rd!"):
		return client.post("/login", data={"email": email, "senha": senha})

	return _login


@pytest.fixture()
def make_relatorio(db_session):
	def _make_relatorio(
		sector: str = "GEOTRAN - 1º Distrito",
		service_name: str = "ordinario",
		car_removals: int = 0,
		motorcycle_removals: int = 0,
		total_approaches: int = 0,
		created_at: datetime | None = None,
		infracoes: list[tuple[str, int]] | None = None,
	):
		r = Relatorio(
			id=gerar_id(),
			service_name=service_name,
			sector=sector,
			car_removals=car_removals,
			motorcycle_removals=motorcycle_removals,
			total_approaches=total_approaches,
			protocol_number=gerar_protocolo(),
			created_at=created_at or datetime.utcnow(),
		)
		db_session.add(r)
		for tipo, qtd in infracoes or []:
			db_session.add(Infracao(id=gerar_id(), infraction_type=tipo, quantity=qtd, report_id=r.id))
		db_session.commit()
		return r

	return _make_relatorio
