"""Sessão de login e o gate das rotas protegidas.

O ``ProvedorSessao`` é criado uma única vez em ``create_app`` e registrado em
``app.extensions["provedor_sessao"]``. Ele expõe a sessão atual (lida do JWT
da requisição, via cookie ou header), a inscrição em mudanças de sessão e as
operações de entrar/sair. As inscrições valem apenas para a requisição
corrente: cada requisição monta o seu ``GateSessao`` e o desmonta no teardown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from flask import current_app, g
from flask_jwt_extended import create_access_token, decode_token, get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import SQLAlchemyError

from geotranote.extensions import db, jwt
from geotranote.models.token_revogado import TokenRevogado
from geotranote.models.usuario import Usuario
from geotranote.utils.errors import ApiError
from geotranote.utils.responses import error_response

ROTA_LOGIN = "/login"
ROTA_PADRAO = "/"
ROTAS_PROTEGIDAS = ("/formulario", "/dashboard")

_SEM_ALTERACAO = object()


@dataclass(frozen=True)
class Sessao:
    id_usuario: int
    nome: str
    email: str
    jti: Optional[str] = None
    csrf: Optional[str] = None
    access_token: Optional[str] = None


OuvinteSessao = Callable[[Optional[Sessao]], None]


def _sessao_de_claims(claims: dict, access_token: Optional[str] = None) -> Optional[Sessao]:
    if not claims or claims.get("sub") is None:
        return None
    try:
        id_usuario = int(claims["sub"])
    except (TypeError, ValueError):
        return None
    return Sessao(
        id_usuario=id_usuario,
        nome=claims.get("nome") or "",
        email=claims.get("email") or "",
        jti=claims.get("jti"),
        csrf=claims.get("csrf"),
        access_token=access_token,
    )


class ProvedorSessao:

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        app.extensions["provedor_sessao"] = self

        jwt.token_in_blocklist_loader(token_revogado)
        jwt.unauthorized_loader(lambda motivo: error_response("Não autenticado", 401))
        jwt.invalid_token_loader(lambda motivo: error_response("Token inválido", 401))
        jwt.expired_token_loader(lambda header, payload: error_response("Sessão expirada", 401))
        jwt.revoked_token_loader(lambda header, payload: error_response("Sessão encerrada", 401))

        app.teardown_request(self._limpar_requisicao)

    @staticmethod
    def _limpar_requisicao(exc=None) -> None:
        g.pop("_sessao_alterada", None)
        g.pop("_ouvintes_sessao", None)

    def obter_sessao(self) -> Optional[Sessao]:
        alterada = g.get("_sessao_alterada", _SEM_ALTERACAO)
        if alterada is not _SEM_ALTERACAO:
            return alterada

        try:
            verify_jwt_in_request(optional=True)
        except (JWTExtendedException, PyJWTError) as err:
            # Token expirado, revogado ou sem CSRF: para o gate é "sem sessão"
            current_app.logger.info("[sessao] token rejeitado: %s", err)
            return None

        return _sessao_de_claims(get_jwt())

    def inscrever(self, ouvinte: OuvinteSessao) -> Callable[[], None]:
        ouvintes = self._ouvintes()
        ouvintes.append(ouvinte)

        def cancelar() -> None:
            if ouvinte in ouvintes:
                ouvintes.remove(ouvinte)

        return cancelar

    def iniciar_sessao(self, usuario: Usuario) -> Sessao:
        token = create_access_token(
            identity=str(usuario.id_usuario),
            additional_claims={"nome": usuario.nome, "email": usuario.email},
        )
        sessao = _sessao_de_claims(decode_token(token), access_token=token)
        current_app.logger.info("[sessao] login usuario=%s", usuario.id_usuario)
        self._alterar(sessao)
        return sessao

    def encerrar_sessao(self) -> None:
        sessao = self.obter_sessao()
        if sessao is not None and sessao.jti:
            revogar_token(sessao.jti)
            current_app.logger.info("[sessao] logout usuario=%s", sessao.id_usuario)
        self._alterar(None)

    def _alterar(self, sessao: Optional[Sessao]) -> None:
        g._sessao_alterada = sessao
        for ouvinte in list(self._ouvintes()):
            ouvinte(sessao)

    @staticmethod
    def _ouvintes() -> list:
        if "_ouvintes_sessao" not in g:
            g._ouvintes_sessao = []
        return g._ouvintes_sessao


class GateSessao:
    """Estado de autenticação visto por uma requisição das páginas HTML."""

    def __init__(self, provedor: ProvedorSessao):
        self.provedor = provedor
        self.sessao: Optional[Sessao] = None
        self._cancelar: Optional[Callable[[], None]] = None

    def montar(self) -> "GateSessao":
        self.sessao = self.provedor.obter_sessao()
        self._cancelar = self.provedor.inscrever(self._ao_mudar)
        return self

    def desmontar(self) -> None:
        if self._cancelar is not None:
            self._cancelar()
            self._cancelar = None

    def _ao_mudar(self, sessao: Optional[Sessao]) -> None:
        self.sessao = sessao

    @property
    def autenticado(self) -> bool:
        return self.sessao is not None

    def redirecionamento(self, caminho: str) -> Optional[str]:
        if not self.autenticado and rota_protegida(caminho):
            return ROTA_LOGIN
        if self.autenticado and caminho.rstrip("/") == ROTA_LOGIN:
            return ROTA_PADRAO
        return None


def rota_protegida(caminho: str) -> bool:
    c = caminho.rstrip("/") or "/"
    return any(c == r or c.startswith(r + "/") for r in ROTAS_PROTEGIDAS)


def obter_provedor(app) -> ProvedorSessao:
    return app.extensions["provedor_sessao"]


def token_revogado(jwt_header: dict, jwt_payload: dict) -> bool:
    jti = jwt_payload.get("jti")
    if not jti:
        return True
    return db.session.query(TokenRevogado.id).filter_by(jti=jti).first() is not None


def revogar_token(jti: str) -> None:
    if db.session.query(TokenRevogado.id).filter_by(jti=jti).first() is not None:
        return
    db.session.add(TokenRevogado(jti=jti))
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("[sessao] falha ao revogar token jti=%s", jti)
        raise ApiError("Não foi possível encerrar a sessão.", 503)
