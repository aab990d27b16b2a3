from geotranote.models.token_revogado import TokenRevogado
from geotranote.services.sessao_service import GateSessao, obter_provedor, rota_protegida


def test_formulario_sem_login_redireciona(client):
	resp = client.get("/formulario")
	assert resp.status_code == 302
	assert resp.headers["Location"].endswith("/login")


def test_dashboard_sem_login_redireciona(client):
	resp = client.get("/dashboard?service=ras")
	assert resp.status_code == 302
	assert resp.headers["Location"].endswith("/login")


def test_inicio_e_publico(client):
	resp = client.get("/")
	assert resp.status_code == 200
	assert "GEOTRANOTE" in resp.get_data(as_text=True)


def test_login_libera_o_formulario(client, make_user, login):
	make_user("sessao_login@test.com")

	bloqueado = client.get("/formulario")
	assert bloqueado.status_code == 302

	resp = login("sessao_login@test.com")
	assert resp.status_code == 302
	assert resp.headers["Location"].endswith("/")

	form = client.get("/formulario")
	assert form.status_code == 200
	assert "Salvar formulário" in form.get_data(as_text=True)


def test_login_com_sessao_ativa_vai_para_inicio(client, make_user, login):
	make_user("sessao_ativa@test.com")
	login("sessao_ativa@test.com")

	resp = client.get("/login")
	assert resp.status_code == 302
	assert resp.headers["Location"].endswith("/")


def test_senha_errada_mostra_erro(client, make_user, login):
	make_user("sessao_senha@test.com")

	resp = login("sessao_senha@test.com", senha="errada")
	assert resp.status_code == 401
	assert "Credenciais inválidas" in resp.get_data(as_text=True)
	assert client.get("/formulario").status_code == 302


def test_conta_inativa_nao_entra(client, make_user):
	make_user("sessao_inativa@test.com", ativo=False)

	resp = client.post("/api/auth/login", json={"email": "sessao_inativa@test.com", "senha": "Passw0rd!"})
	assert resp.status_code == 403


def test_logout_fecha_as_paginas(client, make_user, login):
	make_user("sessao_logout@test.com")
	login("sessao_logout@test.com")
	assert client.get("/dashboard").status_code == 200

	resp = client.post("/logout")
	assert resp.status_code == 302
	assert resp.headers["Location"].endswith("/login")

	assert client.get("/formulario").status_code == 302


def test_logout_da_api_revoga_o_token(client, make_user):
	make_user("sessao_api@test.com", nome="Bruno Lima")

	resp = client.post("/api/auth/login", json={"email": "sessao_api@test.com", "senha": "Passw0rd!"})
	assert resp.status_code == 200
	token = resp.get_json()["data"]["access_token"]
	headers = {"Authorization": f"Bearer {token}"}

	me = client.get("/api/auth/me", headers=headers)
	assert me.status_code == 200
	assert me.get_json()["data"]["nome"] == "Bruno Lima"

	assert client.post("/api/auth/logout", headers=headers).status_code == 200
	assert TokenRevogado.query.count() >= 1

	depois = client.get("/api/auth/me", headers=headers)
	assert depois.status_code == 401


def test_gate_acompanha_mudancas_de_sessao(app, make_user):
	usuario = make_user("sessao_gate@test.com")
	provedor = obter_provedor(app)

	with app.test_request_context("/formulario"):
		gate = GateSessao(provedor).montar()
		assert gate.autenticado is False
		assert gate.redirecionamento("/formulario") == "/login"

		provedor.iniciar_sessao(usuario)
		assert gate.autenticado is True
		assert gate.sessao.email == "sessao_gate@test.com"
		assert gate.redirecionamento("/formulario") is None
		assert gate.redirecionamento("/login") == "/"

		provedor.encerrar_sessao()
		assert gate.autenticado is False

		gate.desmontar()
		provedor.iniciar_sessao(usuario)
		assert gate.autenticado is False


def test_rotas_protegidas():
	assert rota_protegida("/formulario")
	assert rota_protegida("/formulario/infracoes/0/remover")
	assert rota_protegida("/dashboard/")
	assert not rota_protegida("/")
	assert not rota_protegida("/login")
	assert not rota_protegida("/formularios")
