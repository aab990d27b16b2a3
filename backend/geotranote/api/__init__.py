from .auth_routes import bp as auth_bp
from .relatorio_routes import bp as relatorios_bp
from .painel_routes import bp as painel_bp

__all__ = [
    "auth_bp",
    "relatorios_bp",
    "painel_bp",
]
