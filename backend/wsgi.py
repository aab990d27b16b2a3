import os

from geotranote import create_app
from geotranote.config import DevConfig, ProdConfig


def _running_in_production() -> bool:
    return os.getenv("GEOTRANOTE_ENV", "").strip().lower() in ("prod", "production")


config = ProdConfig if _running_in_production() else DevConfig
app = create_app(config)

if __name__ == "__main__":
    app.run()
