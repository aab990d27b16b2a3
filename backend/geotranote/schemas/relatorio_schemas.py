from marshmallow import EXCLUDE, fields, validate

from geotranote.extensions.ma import ma
from geotranote.models.infracao import Infracao
from geotranote.models.relatorio import Relatorio
from geotranote.services.catalogo_service import SETORES, SETOR_PADRAO, SERVICO_PADRAO, valores_servico

_nao_negativo = validate.Range(min=0, error="O valor não pode ser negativo.")


class InfracaoPendenteSchema(ma.Schema):
    infraction_type = fields.String(
        required=True,
        validate=validate.Length(min=1, max=255, error="Selecione a infração."),
    )
    quantity = fields.Integer(
        required=True,
        strict=True,
        validate=validate.Range(min=1, error="A quantidade deve ser maior que zero."),
    )


class RelatorioCreateSchema(ma.Schema):
    """
    Dados de um envio do formulário.
    O número de protocolo e os identificadores são gerados no serviço.
    """

    class Meta:
        unknown = EXCLUDE

    responsible_name = fields.String(
        required=False,
        load_default=None,
        allow_none=True,
        validate=validate.Length(max=150),
    )
    service_name = fields.String(
        load_default=SERVICO_PADRAO,
        validate=validate.OneOf(valores_servico()),
    )
    sector = fields.String(
        load_default=SETOR_PADRAO,
        validate=validate.OneOf(SETORES),
    )
    car_removals = fields.Integer(load_default=0, strict=True, validate=_nao_negativo)
    motorcycle_removals = fields.Integer(load_default=0, strict=True, validate=_nao_negativo)
    total_approaches = fields.Integer(load_default=0, strict=True, validate=_nao_negativo)
    infractions = fields.List(
        fields.Nested(InfracaoPendenteSchema),
        load_default=list,
    )


class RelatorioSchema(ma.SQLAlchemyAutoSchema):
    """Relatório como vai para o dashboard e para a resposta do envio."""

    class Meta:
        model = Relatorio
        include_relationships = False

    id = ma.auto_field()
    responsible_name = ma.auto_field()
    service_name = fields.String()
    sector = ma.auto_field()
    car_removals = ma.auto_field()
    motorcycle_removals = ma.auto_field()
    total_approaches = ma.auto_field()
    protocol_number = ma.auto_field()
    created_at = ma.auto_field()


class InfracaoSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Infracao
        include_fk = True

    id = ma.auto_field()
    infraction_type = ma.auto_field()
    quantity = ma.auto_field()
    report_id = ma.auto_field()
