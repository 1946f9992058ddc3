from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from pensiones.extensions.db import db
from pensiones.utils.errors import ApiError, ErrorTransaccion


@contextmanager
def unidad_de_trabajo(descripcion: str = "operación", confirmar: bool = True):
    """
    Envuelve una operación de escritura en una única transacción.

    La sesión se confirma una sola vez al salir del bloque (o se revierte si
    `confirmar` es False, p. ej. en simulaciones); ante cualquier error se
    revierte todo y no quedan resoluciones ni ítems parciales.
    Los errores de SQLAlchemy se traducen a ErrorTransaccion.
    """
    session = db.session
    try:
        yield session
        if confirmar:
            session.commit()
        else:
            session.rollback()
    except ApiError as err:
        session.rollback()
        current_app.logger.warning("%s rechazada: %s", descripcion.capitalize(), err.message)
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        current_app.logger.exception("Error de base de datos en %s", descripcion)
        raise ErrorTransaccion(f"Error al completar la {descripcion}.") from exc
    except Exception:
        session.rollback()
        raise
