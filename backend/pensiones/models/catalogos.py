import enum

from pensiones.extensions import db


class TipoItem(enum.IntEnum):
    """Tipos de ítem de resolución (ids de tipos_item_resolucion)."""

    RETROACTIVO = 1
    CONSECUTIVO = 2

    @property
    def nombre(self) -> str:
        return self.name.capitalize()


class EstadoResolucionId(enum.IntEnum):
    """Estados de resolución (ids de estados_resolucion)."""

    ACTIVO = 1
    SUSPENDIDO = 2
    FINALIZADO = 3

    @property
    def nombre(self) -> str:
        return self.name.capitalize()


class EstadoResolucion(db.Model):
    __tablename__ = "estados_resolucion"

    id_estado_resolucion = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<EstadoResolucion id={self.id_estado_resolucion} nombre={self.nombre}>"


class TipoItemResolucion(db.Model):
    __tablename__ = "tipos_item_resolucion"

    id_tipo_item = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<TipoItemResolucion id={self.id_tipo_item} nombre={self.nombre}>"
