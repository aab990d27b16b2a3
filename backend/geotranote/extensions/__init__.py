"""
Instâncias das extensões Flask, ligadas ao app em ``create_app``.

db/migrate: relatórios, infrações, usuários e tokens revogados (MySQL via PyMySQL).
jwt: sessão das páginas (cookie) e da API (header Authorization).
ma: validação do envio do formulário e serialização para o dashboard.
bcrypt: hash das senhas dos agentes.
"""

from geotranote.extensions.db import db
from geotranote.extensions.migrate import migrate
from geotranote.extensions.jwt import jwt
from geotranote.extensions.ma import ma
from geotranote.extensions.bcrypt import bcrypt

__all__ = ["db", "migrate", "jwt", "ma", "bcrypt"]
