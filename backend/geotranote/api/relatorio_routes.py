from flask import Blueprint, request
from flask_jwt_extended import jwt_required, get_jwt

from geotranote.schemas.relatorio_schemas import RelatorioCreateSchema
from geotranote.services import relatorio_service
from geotranote.services.catalogo_service import catalogo_to_dict
from geotranote.utils.responses import success_response

bp = Blueprint("relatorios", __name__)

relatorio_create_schema = RelatorioCreateSchema()


@bp.post("")
@jwt_required()
def criar_relatorio():
    """
    Registra um relatório com as infrações lançadas.
    Body JSON:
    {
      "service_name": "ordinario",
      "sector": "GEOTRAN - 1º Distrito",
      "car_removals": 2,
      "motorcycle_removals": 1,
      "total_approaches": 5,
      "infractions": [{"infraction_type": "...", "quantity": 3}]
    }
    """
    data = relatorio_create_schema.load(request.get_json() or {})
    claims = get_jwt() or {}
    relatorio = relatorio_service.registrar_relatorio(data, responsavel=claims.get("nome"))

    return success_response(
        data=relatorio,
        message=f"Formulário salvo com sucesso! Número de protocolo: {relatorio['protocol_number']}",
        status_code=201,
    )


@bp.get("/catalogo")
@jwt_required()
def catalogo():
    """Setores, tipos de serviço e infrações. ?q= filtra as infrações."""
    return success_response(data=catalogo_to_dict(request.args.get("q")))
