from dataclasses import dataclass

from sqlalchemy import func

from pensiones.extensions.db import db
from pensiones.models.expediente import Expediente
from pensiones.models.item_resolucion import ItemResolucion
from pensiones.models.resolucion import Resolucion
from pensiones.utils.errors import CupoCuotasExcedido, ExpedienteNoEncontrado, LimiteCuotasNoDefinido


@dataclass(frozen=True)
class EstadoCupo:
    limite: int
    asignadas: int
    solicitadas: int

    @property
    def disponibles(self) -> int:
        return self.limite - self.asignadas

    @property
    def excedido(self) -> bool:
        return self.solicitadas + self.asignadas > self.limite


def obtener_limite_cuotas(expediente_id: int) -> int:
    expediente: Expediente | None = db.session.get(Expediente, expediente_id)
    if expediente is None:
        raise ExpedienteNoEncontrado(expediente_id)

    especificacion = expediente.especificacion
    if especificacion is None or especificacion.cantidad_cuotas is None:
        raise LimiteCuotasNoDefinido(expediente_id)

    return int(especificacion.cantidad_cuotas)


def cuotas_asignadas(expediente_id: int, excluir_resolucion_id: int | None = None) -> int:
    """Suma de cantidad_cuotas de todos los ítems de las resoluciones del expediente."""
    q = (
        db.session.query(func.coalesce(func.sum(ItemResolucion.cantidad_cuotas), 0))
        .join(Resolucion, ItemResolucion.resolucion_id == Resolucion.id_resolucion)
        .filter(Resolucion.expediente_id == expediente_id)
    )
    if excluir_resolucion_id is not None:
        q = q.filter(Resolucion.id_resolucion != excluir_resolucion_id)

    return int(q.scalar() or 0)


def verificar_cupo(
    expediente_id: int,
    cuotas_solicitadas: int,
    excluir_resolucion_id: int | None = None,
) -> EstadoCupo:
    """
    Lanza CupoCuotasExcedido si las cuotas solicitadas más las ya asignadas
    en otras resoluciones superan el límite de la especificación.
    """
    limite = obtener_limite_cuotas(expediente_id)
    asignadas = cuotas_asignadas(expediente_id, excluir_resolucion_id)

    estado = EstadoCupo(limite=limite, asignadas=asignadas, solicitadas=int(cuotas_solicitadas))
    if estado.excedido:
        raise CupoCuotasExcedido(limite, asignadas, estado.solicitadas)
    return estado


def es_primera_resolucion(expediente_id: int) -> bool:
    total = (
        db.session.query(func.count(Resolucion.id_resolucion))
        .filter(Resolucion.expediente_id == expediente_id)
        .scalar()
    )
    return int(total or 0) == 0
