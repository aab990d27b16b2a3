"""Páginas HTML: início, login, formulário e dashboard."""

from flask import Blueprint, current_app, g, redirect, render_template, request, session, url_for
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies
from marshmallow import ValidationError

from geotranote.schemas.auth_schemas import LoginSchema
from geotranote.schemas.painel_schemas import FiltroPainelSchema
from geotranote.services import auth_service
from geotranote.services.catalogo_service import SETORES, TIPOS_SERVICO, buscar_infracoes, rotulo_servico
from geotranote.services.formulario_service import RascunhoRelatorio
from geotranote.services.painel_service import EstadoPainel
from geotranote.services.sessao_service import GateSessao, obter_provedor
from geotranote.utils.errors import ApiError

bp = Blueprint("paginas", __name__)

CHAVE_RASCUNHO = "rascunho_relatorio"


@bp.before_request
def montar_gate():
    gate = GateSessao(obter_provedor(current_app)).montar()
    g.gate = gate

    destino = gate.redirecionamento(request.path)
    if destino:
        return redirect(destino)
    return None


@bp.teardown_request
def desmontar_gate(exc=None):
    gate = g.pop("gate", None)
    if gate is not None:
        gate.desmontar()


@bp.context_processor
def contexto_sessao():
    gate = g.get("gate")
    sessao = gate.sessao if gate is not None else None
    return {
        "sessao": sessao,
        "autenticado": sessao is not None,
        "csrf_token": (sessao.csrf or "") if sessao is not None else "",
        "rotulo_servico": rotulo_servico,
    }


def _carregar_rascunho() -> RascunhoRelatorio:
    return RascunhoRelatorio.from_dict(session.get(CHAVE_RASCUNHO))


def _salvar_rascunho(rascunho: RascunhoRelatorio) -> None:
    session[CHAVE_RASCUNHO] = rascunho.to_dict()


def _render_formulario(rascunho: RascunhoRelatorio, status_code: int = 200, **extra):
    termo = request.values.get("q")
    return (
        render_template(
            "formulario.html",
            rascunho=rascunho,
            tipos_servico=TIPOS_SERVICO,
            setores=SETORES,
            opcoes_infracao=buscar_infracoes(termo),
            termo=termo or "",
            **extra,
        ),
        status_code,
    )


@bp.get("/")
def inicio():
    return render_template("home.html")


@bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        return render_template("login.html")

    try:
        data = LoginSchema().load(
            {"email": request.form.get("email", ""), "senha": request.form.get("senha", "")}
        )
        usuario = auth_service.autenticar(data["email"], data["senha"])
    except ValidationError:
        return render_template("login.html", erro="Informe e-mail e senha válidos."), 400
    except ApiError as err:
        return render_template("login.html", erro=err.message), err.status_code

    sessao = obter_provedor(current_app).iniciar_sessao(usuario)
    resp = redirect(url_for("paginas.inicio"))
    set_access_cookies(resp, sessao.access_token)
    return resp


@bp.post("/logout")
def logout():
    try:
        obter_provedor(current_app).encerrar_sessao()
    except ApiError as err:
        return render_template("home.html", erro=err.message), err.status_code

    resp = redirect(url_for("paginas.login"))
    unset_jwt_cookies(resp)
    session.pop(CHAVE_RASCUNHO, None)
    return resp


@bp.get("/formulario")
def formulario():
    return _render_formulario(_carregar_rascunho())


@bp.post("/formulario")
def enviar_formulario():
    rascunho = _carregar_rascunho()
    rascunho.atualizar_campos(request.form)

    try:
        resultado = rascunho.enviar(responsavel=g.gate.sessao.nome)
    except ValidationError as err:
        _salvar_rascunho(rascunho)
        return _render_formulario(
            rascunho,
            400,
            erro="Dados inválidos. Verifique os campos do formulário.",
            erros_campos=err.messages,
        )
    except ApiError as err:
        _salvar_rascunho(rascunho)
        return _render_formulario(rascunho, err.status_code, erro=err.message)

    _salvar_rascunho(rascunho)
    return _render_formulario(rascunho, 201, protocolo=resultado["protocol_number"])


@bp.post("/formulario/infracoes")
def adicionar_infracao():
    rascunho = _carregar_rascunho()
    rascunho.atualizar_campos(request.form)
    rascunho.adicionar_infracao(request.form.get("infraction_type"), request.form.get("quantity"))
    _salvar_rascunho(rascunho)
    return redirect(url_for("paginas.formulario"))


@bp.post("/formulario/infracoes/<int:indice>/remover")
def remover_infracao(indice: int):
    rascunho = _carregar_rascunho()
    rascunho.atualizar_campos(request.form)
    rascunho.remover_infracao(indice)
    _salvar_rascunho(rascunho)
    return redirect(url_for("paginas.formulario"))


@bp.get("/dashboard")
def dashboard():
    try:
        filtros = FiltroPainelSchema().load(request.args.to_dict())
    except ValidationError as err:
        # filtro inválido é ignorado; os demais continuam valendo
        current_app.logger.info("[painel] filtros ignorados: %s", sorted(err.messages))
        filtros = dict(err.valid_data or {})
    filtros.pop("seq", None)

    estado = EstadoPainel()
    estado.atualizar(**filtros)

    status_code = 200 if estado.erro is None else 503
    dados = estado.dados or {}
    limite = current_app.config.get("DASHBOARD_RECENT_LIMIT", 10)

    return (
        render_template(
            "dashboard.html",
            estado=estado,
            filtros=estado.filtros,
            tipos_servico=TIPOS_SERVICO,
            resumo=dados.get("summary"),
            recentes=(dados.get("reports") or [])[:limite],
        ),
        status_code,
    )
