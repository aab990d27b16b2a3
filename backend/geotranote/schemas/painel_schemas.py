from marshmallow import EXCLUDE, fields, pre_load, validate

from geotranote.extensions.ma import ma
from geotranote.services.catalogo_service import valores_servico


class FiltroPainelSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    service = fields.String(
        load_default="all",
        validate=validate.OneOf(["all", *valores_servico()]),
    )
    start = fields.Date(load_default=None, allow_none=True)
    end = fields.Date(load_default=None, allow_none=True)
    seq = fields.Integer(load_default=None, allow_none=True)

    @pre_load
    def descartar_vazios(self, data, **kwargs):
        # Inputs de data vazios chegam como "" na query string
        return {k: v for k, v in dict(data).items() if v not in (None, "")}
