import secrets
import uuid

# Mesmo alfabeto URL-safe do nanoid
ALFABETO = "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"
TAMANHO_PROTOCOLO = 21


def gerar_protocolo(tamanho: int = TAMANHO_PROTOCOLO) -> str:
	"""Número de protocolo entregue ao agente como comprovante do envio.

	21 símbolos de um alfabeto de 64 dão ~126 bits aleatórios, suficiente
	para tratar colisões como impossíveis na prática.
	"""
	return "".join(secrets.choice(ALFABETO) for _ in range(tamanho))


def gerar_id() -> str:
	return str(uuid.uuid4())
