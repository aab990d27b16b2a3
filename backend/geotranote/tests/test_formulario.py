import re

import pytest
from marshmallow import ValidationError

from geotranote.models.infracao import Infracao
from geotranote.models.relatorio import Relatorio
from geotranote.services import relatorio_service
from geotranote.services.formulario_service import RascunhoRelatorio
from geotranote.utils.errors import ApiError

INFRACAO_TESTE = "Estacionar sobre a calçada em frente à escola (teste)"


def _campos(**extra) -> dict:
	data = {
		"service_name": "operacao",
		"sector": "ROMU",
		"car_removals": "1",
		"motorcycle_removals": "2",
		"total_approaches": "9",
	}
	data.update(extra)
	return data


def test_rascunho_ignora_infracao_sem_tipo_ou_quantidade():
	r = RascunhoRelatorio()

	assert r.adicionar_infracao("", 2) is False
	assert r.adicionar_infracao("X", 0) is False
	assert r.adicionar_infracao("X", "abc") is False
	assert r.infractions == []

	assert r.adicionar_infracao("X", "3") is True
	assert r.infractions == [{"infraction_type": "X", "quantity": 3}]


def test_rascunho_remove_por_posicao():
	r = RascunhoRelatorio(infractions=[
		{"infraction_type": "A", "quantity": 1},
		{"infraction_type": "B", "quantity": 2},
	])

	assert r.remover_infracao(5) is False
	assert r.remover_infracao(0) is True
	assert [i["infraction_type"] for i in r.infractions] == ["B"]


def test_rascunho_atualiza_campos_do_form():
	r = RascunhoRelatorio()
	r.atualizar_campos(_campos(sector="Setor inexistente", car_removals=""))

	assert r.service_name == "operacao"
	assert r.sector == "GEOTRAN - 1º Distrito"
	assert (r.car_removals, r.motorcycle_removals, r.total_approaches) == (0, 2, 9)


def test_envio_com_sucesso_zera_o_rascunho(app):
	r = RascunhoRelatorio(service_name="ras", sector="RAS", car_removals=3)
	r.adicionar_infracao("X", 2)

	resultado = r.enviar(responsavel="Ana")

	assert resultado["protocol_number"]
	assert r.to_dict() == RascunhoRelatorio().to_dict()
	assert Relatorio.query.one().responsible_name == "Ana"


def test_envio_com_falha_mantem_o_rascunho(app, monkeypatch):
	def _falha(data, responsavel=None):
		raise ApiError("Erro ao salvar o formulário.", 503)

	monkeypatch.setattr(relatorio_service, "registrar_relatorio", _falha)

	r = RascunhoRelatorio(service_name="ras", car_removals=3)
	r.adicionar_infracao("X", 2)
	antes = r.to_dict()

	with pytest.raises(ApiError):
		r.enviar()

	assert r.to_dict() == antes


def test_envio_invalido_mantem_o_rascunho(app):
	r = RascunhoRelatorio(car_removals=-4)
	antes = r.to_dict()

	with pytest.raises(ValidationError):
		r.enviar()

	assert r.to_dict() == antes
	assert Relatorio.query.count() == 0


def test_fluxo_do_formulario_html(client, make_user, login):
	make_user("form_fluxo@test.com", nome="Diego Alves")
	login("form_fluxo@test.com")

	resp = client.post("/formulario/infracoes", data=_campos(infraction_type=INFRACAO_TESTE, quantity="2"))
	assert resp.status_code == 302

	pagina = client.get("/formulario").get_data(as_text=True)
	assert INFRACAO_TESTE in pagina
	assert 'value="9"' in pagina

	resp = client.post("/formulario", data=_campos())
	assert resp.status_code == 201
	html = resp.get_data(as_text=True)

	relatorio = Relatorio.query.one()
	assert relatorio.protocol_number in html
	assert relatorio.service_name == "operacao"
	assert relatorio.sector == "ROMU"
	assert relatorio.responsible_name == "Diego Alves"
	assert (relatorio.car_removals, relatorio.motorcycle_removals, relatorio.total_approaches) == (1, 2, 9)

	infracao = Infracao.query.one()
	assert infracao.report_id == relatorio.id
	assert infracao.quantity == 2

	assert "Nenhuma infração registrada" in client.get("/formulario").get_data(as_text=True)


def test_remover_infracao_pelo_formulario(client, make_user, login):
	make_user("form_remover@test.com")
	login("form_remover@test.com")

	client.post("/formulario/infracoes", data=_campos(infraction_type="A", quantity="1"))
	client.post("/formulario/infracoes", data=_campos(infraction_type="B", quantity="1"))
	client.post("/formulario/infracoes/0/remover", data=_campos())

	client.post("/formulario", data=_campos())
	assert [i.infraction_type for i in Infracao.query.all()] == ["B"]


def test_falha_no_envio_html_preserva_o_formulario(client, make_user, login, monkeypatch):
	make_user("form_falha@test.com")
	login("form_falha@test.com")

	def _falha(data, responsavel=None):
		raise ApiError("Erro ao salvar o formulário.", 503)

	monkeypatch.setattr(relatorio_service, "registrar_relatorio", _falha)

	client.post("/formulario/infracoes", data=_campos(infraction_type=INFRACAO_TESTE, quantity="4"))
	resp = client.post("/formulario", data=_campos())

	assert resp.status_code == 503
	html = resp.get_data(as_text=True)
	assert "Erro ao salvar o formulário." in html
	assert INFRACAO_TESTE in html
	assert Relatorio.query.count() == 0

	monkeypatch.undo()
	assert INFRACAO_TESTE in client.get("/formulario").get_data(as_text=True)


def test_contagem_negativa_no_html(client, make_user, login):
	make_user("form_negativo@test.com")
	login("form_negativo@test.com")

	resp = client.post("/formulario", data=_campos(motorcycle_removals="-1"))
	assert resp.status_code == 400
	assert "Dados inválidos" in resp.get_data(as_text=True)
	assert Relatorio.query.count() == 0


def test_formulario_com_protecao_csrf(app, client, make_user, login, monkeypatch):
	monkeypatch.setitem(app.config, "JWT_COOKIE_CSRF_PROTECT", True)
	make_user("form_csrf@test.com")
	assert login("form_csrf@test.com").status_code == 302

	pagina = client.get("/formulario")
	assert pagina.status_code == 200
	achado = re.search(r'name="csrf_token" value="([^"]+)"', pagina.get_data(as_text=True))
	assert achado is not None
	token = achado.group(1)

	resp = client.post(
		"/formulario/infracoes",
		data=_campos(infraction_type=INFRACAO_TESTE, quantity="2", csrf_token=token),
	)
	assert resp.status_code == 302
	assert resp.headers["Location"].endswith("/formulario")

	sem_token = client.post("/formulario", data=_campos())
	assert sem_token.status_code == 302
	assert sem_token.headers["Location"].endswith("/login")
	assert Relatorio.query.count() == 0

	resp = client.post("/formulario", data=_campos(csrf_token=token))
	assert resp.status_code == 201
	assert Relatorio.query.count() == 1
	infracao = Infracao.query.one()
	assert infracao.infraction_type == INFRACAO_TESTE
	assert infracao.quantity == 2
