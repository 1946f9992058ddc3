import os

from pensiones import create_app
from pensiones.config import DevConfig, ProdConfig


def _running_in_production() -> bool:
    return os.getenv("APP_ENV", "").strip().lower() in ("prod", "production")


config = ProdConfig if _running_in_production() else DevConfig
app = create_app(config)

if __name__ == "__main__":
    app.run()
