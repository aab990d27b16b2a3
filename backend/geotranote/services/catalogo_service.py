TIPOS_SERVICO = [
    {"value": "ordinario", "label": "Ordinário"},
    {"value": "operacao", "label": "Operação"},
    {"value": "ras", "label": "RAS"},
]

SERVICO_PADRAO = "ordinario"

SETORES = [
    "GEOTRAN - 1º Distrito",
    "GEOTRAN - 2º Distrito",
    "GEOTRAN - 3º/4º Distrito",
    "1º Distrito",
    "2º Distrito",
    "3º Distrito",
    "4º Distrito",
    "GEDAM",
    "GRE",
    "GMAP",
    "ROMU",
    "RAS",
    "Operação",
]

SETOR_PADRAO = SETORES[0]

# Enquadramentos do CTB mais lançados pelas equipes de campo
INFRACOES = [
    "Art. 162, I - Dirigir veículo sem possuir CNH ou Permissão para Dirigir",
    "Art. 162, II - Dirigir veículo com CNH ou PPD cassada ou suspensa",
    "Art. 162, V - Dirigir veículo com CNH ou PPD vencida há mais de 30 dias",
    "Art. 163 - Entregar a direção do veículo a pessoa não habilitada",
    "Art. 165 - Dirigir sob a influência de álcool",
    "Art. 165-A - Recusar-se a ser submetido a teste de alcoolemia",
    "Art. 167 - Deixar o condutor ou passageiro de usar o cinto de segurança",
    "Art. 168 - Transportar criança sem observância das normas de segurança",
    "Art. 169 - Dirigir sem atenção ou sem os cuidados indispensáveis à segurança",
    "Art. 173 - Disputar corrida",
    "Art. 175 - Utilizar-se do veículo para demonstrar manobra perigosa",
    "Art. 181, XVII - Estacionar em desacordo com a regulamentação",
    "Art. 181, XIX - Estacionar em local de carga e descarga",
    "Art. 181, XX - Estacionar nas vagas reservadas a pessoa com deficiência ou idoso",
    "Art. 181, VIII - Estacionar no passeio ou sobre faixa de pedestres",
    "Art. 182 - Parar o veículo em desacordo com a regulamentação",
    "Art. 186, II - Transitar pela contramão de direção em vias com sinalização",
    "Art. 208 - Avançar o sinal vermelho do semáforo",
    "Art. 218, I - Transitar em velocidade superior à máxima permitida em até 20%",
    "Art. 218, II - Transitar em velocidade superior à máxima permitida entre 20% e 50%",
    "Art. 218, III - Transitar em velocidade superior à máxima permitida em mais de 50%",
    "Art. 230, I - Conduzir veículo com lacre, inscrição do chassi ou placa violados",
    "Art. 230, V - Conduzir veículo não registrado",
    "Art. 230, VI - Conduzir veículo com placa encoberta ou ilegível",
    "Art. 230, IX - Conduzir veículo sem equipamento obrigatório ou ineficiente",
    "Art. 230, XVIII - Conduzir veículo em mau estado de conservação",
    "Art. 232 - Conduzir veículo sem os documentos de porte obrigatório",
    "Art. 244, I - Conduzir motocicleta sem usar capacete de segurança",
    "Art. 244, II - Transportar passageiro sem capacete de segurança",
    "Art. 252, VI - Dirigir utilizando-se de telefone celular",
]


def buscar_infracoes(termo: str | None = None) -> list[str]:
    t = (termo or "").strip().lower()
    if not t:
        return list(INFRACOES)
    return [i for i in INFRACOES if t in i.lower()]


def valores_servico() -> list[str]:
    return [s["value"] for s in TIPOS_SERVICO]


def rotulo_servico(valor: str) -> str:
    for s in TIPOS_SERVICO:
        if s["value"] == valor:
            return s["label"]
    return valor


def catalogo_to_dict(termo: str | None = None) -> dict:
    return {
        "service_types": TIPOS_SERVICO,
        "sectors": SETORES,
        "infraction_types": buscar_infracoes(termo),
    }
