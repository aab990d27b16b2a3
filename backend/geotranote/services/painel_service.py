from __future__ import annotations

from datetime import date, datetime, time
from typing import Callable, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from geotranote.extensions import db
from geotranote.models.infracao import Infracao
from geotranote.models.relatorio import Relatorio
from geotranote.services.relatorio_service import infracoes_to_list, relatorio_to_dict
from geotranote.utils.errors import ApiError

FILTROS_PADRAO = {"service": "all", "start": None, "end": None}


def _erro_leitura(contexto: str) -> ApiError:
    db.session.rollback()
    current_app.logger.exception("[painel] falha ao consultar %s", contexto)
    return ApiError("Erro ao carregar dados", status_code=503)


def buscar_relatorios(
    service: str = "all",
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[Relatorio]:
    q = Relatorio.query

    if service and service != "all":
        q = q.filter(Relatorio.service_name == service)

    if start is not None:
        q = q.filter(Relatorio.created_at >= datetime.combine(start, time.min))

    if end is not None:
        # fim do dia, inclusivo
        q = q.filter(Relatorio.created_at <= datetime.combine(end, time.max))

    try:
        return q.order_by(Relatorio.created_at.desc()).all()
    except SQLAlchemyError:
        raise _erro_leitura("relatorios")


def buscar_infracoes(ids_relatorios: list[str]) -> list[Infracao]:
    # Sem relatórios não existe consulta "IN ()": devolve vazio direto
    if not ids_relatorios:
        return []

    try:
        return Infracao.query.filter(Infracao.report_id.in_(ids_relatorios)).all()
    except SQLAlchemyError:
        raise _erro_leitura("infracoes")


def agregar(relatorios: list[Relatorio], infracoes: list[Infracao]) -> dict:
    total_abordagens = 0
    total_carros = 0
    total_motos = 0
    por_servico: dict[str, int] = {}
    por_setor: dict[str, dict] = {}

    for r in relatorios:
        carros = int(r.car_removals or 0)
        motos = int(r.motorcycle_removals or 0)

        total_abordagens += int(r.total_approaches or 0)
        total_carros += carros
        total_motos += motos

        por_servico[r.service_name] = por_servico.get(r.service_name, 0) + 1

        setor = por_setor.setdefault(r.sector, {"sector": r.sector, "cars": 0, "motos": 0})
        setor["cars"] += carros
        setor["motos"] += motos

    return {
        "total_approaches": total_abordagens,
        "total_removals": total_carros + total_motos,
        "total_car_removals": total_carros,
        "total_motorcycle_removals": total_motos,
        "total_infractions": sum(int(i.quantity or 0) for i in infracoes),
        "service_distribution": [
            {"service_name": servico, "count": qtd} for servico, qtd in por_servico.items()
        ],
        "sector_breakdown": list(por_setor.values()),
    }


def carregar_painel(filtros: Optional[dict] = None) -> dict:
    """Busca completa + agregação. Cada mudança de filtro chama isto de novo."""
    f = {**FILTROS_PADRAO, **(filtros or {})}

    relatorios = buscar_relatorios(f["service"], f["start"], f["end"])
    infracoes = buscar_infracoes([r.id for r in relatorios])

    current_app.logger.info(
        "[painel] servico=%s inicio=%s fim=%s relatorios=%s infracoes=%s",
        f["service"],
        f["start"],
        f["end"],
        len(relatorios),
        len(infracoes),
    )

    return {
        "filters": {
            "service": f["service"],
            "start": f["start"].isoformat() if f["start"] else None,
            "end": f["end"].isoformat() if f["end"] else None,
        },
        "reports": [relatorio_to_dict(r) for r in relatorios],
        "infractions": infracoes_to_list(infracoes),
        "summary": agregar(relatorios, infracoes),
    }


class EstadoPainel:
    """
    Estado exibido pelo dashboard.

    Cada busca recebe um número de sequência crescente; a resposta só é
    aplicada se ainda for a busca mais recente. Uma resposta lenta de um
    filtro antigo não sobrescreve a de um filtro mais novo.
    """

    def __init__(self, carregador: Callable[[dict], dict] = carregar_painel):
        self._carregador = carregador
        self._ultima = 0
        self.filtros = dict(FILTROS_PADRAO)
        self.dados: Optional[dict] = None
        self.erro: Optional[str] = None

    @property
    def ultima_sequencia(self) -> int:
        return self._ultima

    def emitir(self) -> int:
        self._ultima += 1
        return self._ultima

    def aplicar(self, sequencia: int, dados: Optional[dict] = None, erro: Optional[str] = None) -> bool:
        if sequencia != self._ultima:
            current_app.logger.debug("[painel] resposta descartada seq=%s atual=%s", sequencia, self._ultima)
            return False
        self.dados = dados
        self.erro = erro
        return True

    def atualizar(self, **filtros) -> bool:
        self.filtros.update(filtros)
        sequencia = self.emitir()
        try:
            dados = self._carregador(dict(self.filtros))
        except ApiError as err:
            return self.aplicar(sequencia, erro=err.message)
        return self.aplicar(sequencia, dados=dados)
