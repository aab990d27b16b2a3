"""
Arquivo de conveniência para usar a CLI do Flask:
    python manage.py run
    python manage.py criar-usuario agente@geotran.local "Nome do Agente" senha123
    flask db upgrade (com FLASK_APP=wsgi.py)
"""

import os

from flask.cli import main

if __name__ == "__main__":
    os.environ.setdefault("FLASK_APP", "wsgi.py")
    main()
