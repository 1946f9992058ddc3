from .resolucion_routes import bp as resoluciones_bp

__all__ = [
    "resoluciones_bp",
]
