from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from geotranote.extensions import db
from geotranote.models.infracao import Infracao
from geotranote.models.relatorio import Relatorio
from geotranote.schemas.relatorio_schemas import InfracaoSchema, RelatorioSchema
from geotranote.utils.errors import ApiError
from geotranote.utils.protocolo import gerar_id, gerar_protocolo

relatorio_schema = RelatorioSchema()
infracoes_schema = InfracaoSchema(many=True)


def relatorio_to_dict(r: Relatorio) -> dict:
	return relatorio_schema.dump(r)


def infracoes_to_list(infracoes: list[Infracao]) -> list[dict]:
	return infracoes_schema.dump(infracoes)


def registrar_relatorio(data: dict, responsavel: str | None = None) -> dict:
	"""
	Grava um relatório e as suas infrações como um único envio.

	O protocolo e o id do relatório são gerados aqui, antes de qualquer
	escrita; as infrações já são criadas vinculadas a esse id e tudo vai
	para o banco num só commit. Se o commit falhar nada fica gravado.
	"""
	protocolo = gerar_protocolo()
	id_relatorio = gerar_id()

	relatorio = Relatorio(
		id=id_relatorio,
		responsible_name=(data.get("responsible_name") or responsavel or None),
		service_name=data["service_name"],
		sector=data["sector"],
		car_removals=data.get("car_removals", 0),
		motorcycle_removals=data.get("motorcycle_removals", 0),
		total_approaches=data.get("total_approaches", 0),
		protocol_number=protocolo,
	)

	infracoes = [
		Infracao(
			id=gerar_id(),
			infraction_type=item["infraction_type"],
			quantity=item["quantity"],
			report_id=id_relatorio,
		)
		for item in data.get("infractions") or []
	]

	db.session.add(relatorio)
	db.session.add_all(infracoes)

	try:
		db.session.commit()
	except SQLAlchemyError:
		db.session.rollback()
		current_app.logger.exception("[relatorios] falha ao salvar relatorio protocolo=%s", protocolo)
		raise ApiError("Erro ao salvar o formulário.", status_code=503)

	current_app.logger.info(
		"[relatorios] criado id=%s protocolo=%s setor=%s infracoes=%s",
		id_relatorio,
		protocolo,
		relatorio.sector,
		len(infracoes),
	)

	resultado = relatorio_to_dict(relatorio)
	resultado["infractions"] = infracoes_to_list(infracoes)
	return resultado
