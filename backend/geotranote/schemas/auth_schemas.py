from marshmallow import fields, validate, validates, ValidationError
from geotranote.extensions import ma


class LoginSchema(ma.Schema):
    email = fields.Email(required=True)
    senha = fields.String(required=True, load_only=True, validate=validate.Length(min=1))


class CriarUsuarioSchema(ma.Schema):
    nome = fields.String(required=True, validate=validate.Length(min=1, max=150))
    email = fields.Email(required=True)
    senha = fields.String(required=True, load_only=True)

    @validates("senha")
    def validate_senha(self, value, **kwargs):
        if len(value) < 6:
            raise ValidationError("A senha deve ter pelo menos 6 caracteres.")
