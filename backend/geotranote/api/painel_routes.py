from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from geotranote.schemas.painel_schemas import FiltroPainelSchema
from geotranote.services import painel_service
from geotranote.utils.responses import success_response

bp = Blueprint("painel", __name__)

filtro_schema = FiltroPainelSchema()


@bp.get("")
@jwt_required()
def obter_painel():
    """
    Relatórios filtrados, infrações desses relatórios e os totais.
    Query params opcionais: service (all|ordinario|operacao|ras),
    start/end (YYYY-MM-DD, inclusivos) e seq, devolvido como veio para o
    cliente descartar respostas de buscas antigas.
    """
    filtros = filtro_schema.load(request.args.to_dict())
    seq = filtros.pop("seq", None)

    data = painel_service.carregar_painel(filtros)
    data["seq"] = seq
    return success_response(data=data)
