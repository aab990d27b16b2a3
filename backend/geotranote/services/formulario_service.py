from __future__ import annotations

from geotranote.schemas.relatorio_schemas import RelatorioCreateSchema
from geotranote.services import relatorio_service
from geotranote.services.catalogo_service import SETORES, SETOR_PADRAO, SERVICO_PADRAO, valores_servico

CAMPOS_CONTAGEM = ("car_removals", "motorcycle_removals", "total_approaches")


def _inteiro(valor, atual: int) -> int:
	if valor is None:
		return atual
	texto = str(valor).strip()
	if texto == "":
		return 0
	try:
		return int(texto)
	except ValueError:
		# texto não numérico mantém o valor anterior
		return atual


class RascunhoRelatorio:
	"""Estado local do formulário até o envio.

	Guarda tipo de serviço, setor, contagens e a lista de infrações
	pendentes. Só é zerado depois de um envio bem-sucedido; se o envio
	falhar, o rascunho continua igual para o agente tentar de novo.
	"""

	def __init__(
		self,
		service_name: str = SERVICO_PADRAO,
		sector: str = SETOR_PADRAO,
		car_removals: int = 0,
		motorcycle_removals: int = 0,
		total_approaches: int = 0,
		infractions: list[dict] | None = None,
	):
		self.service_name = service_name
		self.sector = sector
		self.car_removals = car_removals
		self.motorcycle_removals = motorcycle_removals
		self.total_approaches = total_approaches
		self.infractions: list[dict] = list(infractions or [])

	@classmethod
	def from_dict(cls, data: dict | None) -> "RascunhoRelatorio":
		data = data or {}
		return cls(
			service_name=data.get("service_name", SERVICO_PADRAO),
			sector=data.get("sector", SETOR_PADRAO),
			car_removals=int(data.get("car_removals", 0)),
			motorcycle_removals=int(data.get("motorcycle_removals", 0)),
			total_approaches=int(data.get("total_approaches", 0)),
			infractions=[
				{"infraction_type": i["infraction_type"], "quantity": int(i["quantity"])}
				for i in data.get("infractions") or []
			],
		)

	def to_dict(self) -> dict:
		return {
			"service_name": self.service_name,
			"sector": self.sector,
			"car_removals": self.car_removals,
			"motorcycle_removals": self.motorcycle_removals,
			"total_approaches": self.total_approaches,
			"infractions": [dict(i) for i in self.infractions],
		}

	def atualizar_campos(self, form) -> None:
		servico = form.get("service_name")
		if servico in valores_servico():
			self.service_name = servico

		setor = form.get("sector")
		if setor in SETORES:
			self.sector = setor

		for campo in CAMPOS_CONTAGEM:
			setattr(self, campo, _inteiro(form.get(campo), getattr(self, campo)))

	def adicionar_infracao(self, tipo: str | None, quantidade) -> bool:
		tipo = (tipo or "").strip()
		try:
			qtd = int(quantidade)
		except (TypeError, ValueError):
			return False
		if not tipo or qtd <= 0:
			return False
		self.infractions.append({"infraction_type": tipo, "quantity": qtd})
		return True

	def remover_infracao(self, indice: int) -> bool:
		if 0 <= indice < len(self.infractions):
			del self.infractions[indice]
			return True
		return False

	def resetar(self) -> None:
		self.service_name = SERVICO_PADRAO
		self.sector = SETOR_PADRAO
		for campo in CAMPOS_CONTAGEM:
			setattr(self, campo, 0)
		self.infractions = []

	def enviar(self, responsavel: str | None = None) -> dict:
		data = RelatorioCreateSchema().load(self.to_dict())
		resultado = relatorio_service.registrar_relatorio(data, responsavel=responsavel)
		self.resetar()
		return resultado
