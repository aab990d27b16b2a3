from .usuario import Usuario
from .token_revogado import TokenRevogado
from .relatorio import Relatorio
from .infracao import Infracao

__all__ = ["Usuario", "TokenRevogado", "Relatorio", "Infracao"]
