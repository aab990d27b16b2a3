import click
from marshmallow import ValidationError

from geotranote.schemas.auth_schemas import CriarUsuarioSchema
from geotranote.services import usuario_service
from geotranote.utils.errors import ApiError


def register_commands(app):

    @app.cli.command("criar-usuario")
    @click.argument("email")
    @click.argument("nome")
    @click.argument("senha")
    def criar_usuario(email, nome, senha):
        """Cria uma conta de acesso ao formulário e ao dashboard."""
        try:
            data = CriarUsuarioSchema().load({"email": email, "nome": nome, "senha": senha})
            usuario = usuario_service.criar_usuario(data)
        except ValidationError as err:
            raise click.ClickException(f"Dados inválidos: {err.messages}")
        except ApiError as err:
            raise click.ClickException(err.message)

        click.echo(f"Usuário criado: {usuario.email} (id={usuario.id_usuario})")
